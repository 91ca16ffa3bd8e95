"""BLE protocol implementation."""

from .commands import (
    COMMAND_LENGTH,
    CREDENTIAL_MSG,
    CommandCode,
    PropertyId,
    build_credential_command,
    build_real_time_data_command,
    build_request_battery_level_command,
    build_request_property_command,
    build_set_target_range_command,
    build_set_target_temp_command,
    build_set_unit_command,
)
from .responses import SETTING_RESULT_LENGTH, parse_real_time, parse_setting_result
from .temperature import (
    ABSENT_PROBE_VALUE,
    TARGET_TEMP_NONE,
    TEMPERATURE_MAX,
    TEMPERATURE_MIN,
    decode_temperature,
    encode_temperature,
)
from .uuids import (
    ACCOUNT_AND_VERIFY_UUID,
    BASE_UUID,
    HISTORY_DATA_UUID,
    REAL_TIME_DATA_UUID,
    SERVICE_UUID,
    SETTING_DATA_UUID,
    SETTING_RESULT_UUID,
    string_to_uuid128,
    uuid16_to_uuid128,
    uuid32_to_uuid128,
    uuid128_to_string,
)

__all__ = [
    "CommandCode",
    "PropertyId",
    "COMMAND_LENGTH",
    "CREDENTIAL_MSG",
    "SETTING_RESULT_LENGTH",
    "build_credential_command",
    "build_set_unit_command",
    "build_real_time_data_command",
    "build_request_property_command",
    "build_request_battery_level_command",
    "build_set_target_range_command",
    "build_set_target_temp_command",
    "parse_real_time",
    "parse_setting_result",
    "ABSENT_PROBE_VALUE",
    "TARGET_TEMP_NONE",
    "TEMPERATURE_MAX",
    "TEMPERATURE_MIN",
    "encode_temperature",
    "decode_temperature",
    "BASE_UUID",
    "SERVICE_UUID",
    "SETTING_RESULT_UUID",
    "ACCOUNT_AND_VERIFY_UUID",
    "HISTORY_DATA_UUID",
    "REAL_TIME_DATA_UUID",
    "SETTING_DATA_UUID",
    "uuid16_to_uuid128",
    "uuid32_to_uuid128",
    "uuid128_to_string",
    "string_to_uuid128",
]
