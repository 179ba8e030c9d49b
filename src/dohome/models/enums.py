from __future__ import annotations

from enum import Enum, IntEnum


class ListenerState(str, Enum):
    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"


class Command(IntEnum):
    """Command codes understood by the device API."""

    INVALID_CMD = 0
    GET_WIFI_SCAN_RES = 1
    MODIFY_SSID = 2
    REBOOT = 3
    GET_DEV_INFO = 4
    LED_OPERATE = 5
    CHANGE_COLOR = 6
    SET_PRESET_MODE = 7
    SET_CUSTOM_MODE = 8
    GET_DEV_TIME = 9
    SYNC_DEV_TIME = 10
    SET_POWERUP_LED_STATUS = 11
    REMEMBER_SHUTDOWN_LED_STATUS = 12
    SET_SHUTDOWN_TIMER = 13
    SET_POWERUP_TIMER = 14
    REMOTE_CONTROL_ENABLE = 15
    ROUTER_CONFIG = 16
    DELAY_SHUTDOWN = 17
    START_OTA = 18
    IS_CONNECT_TO_ROUTER = 19
    GET_VERSION = 20
    GET_DEV_TIMER = 21
    GET_DELAY_INFO = 22
    CANCEL_TIMER = 23
    GET_POWERUP_STATUS = 24
    GET_LED_STATUS = 25
    MODIFY_TIMER = 26
    PRESET_MODE_COMBO = 27
    RESET_AP = 28
    SET_TIMEZONE = 29
    ENABLE_REPEATER = 30
    ENABLE_PORTAL = 31
    SET_PORTAL_TEXT = 32
    SET_LIGHT_PERCENT = 33
    SET_TO_PERCENT = 34
    SET_IR_GPIO = 35
    FACTORY_RESET = 201


class ErrorCode(IntEnum):
    """Result codes reported in the ``res`` field of a device reply."""

    ERR_WIFI_NONE = 0
    ERR_WIFI_SCAN_FAILED = 1
    ERR_WIFI_SCAN_TIMEOUT = 2
    ERR_WIFI_INVALID_PASSWORD = 3
    ERR_WIFI_GET_CMD_FAILED = 4
    ERR_WIFI_GET_STATUS_FAILED = 5
    ERR_WIFI_SCAN_RES_NULL = 6
    ERR_WIFI_GET_PASSWORD_FAILED = 7
    ERR_WIFI_GET_LED_OP_FAILED = 8
    ERR_WIFI_GET_SSID_FAILED = 9
    ERR_WIFI_GET_RED_FAILED = 10
    ERR_WIFI_GET_BLUE_FAILED = 11
    ERR_WIFI_GET_GREEN_FAILED = 12
    ERR_WIFI_GET_WHITE_FAILED = 13
    ERR_WIFI_GET_M_FAILED = 14
    ERR_WIFI_GET_MODE_INDEX_FAILED = 15
    ERR_WIFI_GET_FREQ_FAILED = 16
    ERR_WIFI_GET_TIME_JSON_FAILD = 17
    ERR_WIFI_GET_YEAR_FAILED = 18
    ERR_WIFI_GET_MONTH_FAILED = 19
    ERR_WIFI_GET_DAY_FAILED = 20
    ERR_WIFI_GET_HOUR_FAILED = 21
    ERR_WIFI_GET_MINUTE_FAILED = 22
    ERR_WIFI_GET_SECOND_FAILED = 23
    ERR_WIFI_MALLOC_FAILED = 24
    ERR_WIFI_SET_SHUTDOWN_TIMER_FAILED = 25
    ERR_WIFI_UNKNOWN_CMD = 26
    ERR_WIFI_GET_TIMER_INDEX_FAILED = 27
    ERR_WIFI_GET_DELAY_TIME_FAILED = 28
    ERR_WIFI_GET_TYPE_FAILED = 29
    ERR_WIFI_SET_TIMER_FAILED = 30
    ERR_WIFI_GET_COLOR_ARR_FAILED = 31
    ERR_WIFI_TOO_MANY_CUSTOM_COLOR = 32
    ERR_WIFI_GET_OP_FAILED = 33
    ERR_WIFI_CHANGE_RMT_CTRL_FAILED = 34
    ERR_WIFI_GET_POWERUP_INFO_FAILED = 35
    ERR_WIFI_MODIFY_TIMER_FAILED = 36
    ERR_WIFI_GET_MODE_LIST_FAILED = 37
    ERR_WIFI_GET_MODE_ITEM_FAILED = 38
    ERR_WIFI_GET_LOOP_FAILED = 39
    ERR_WIFI_TOO_MANY_MODE = 40
    ERR_WIFI_GET_REPEAT_FAILED = 41
    ERR_WIFI_GET_TIMER_INFO_FAILED = 42
    ERR_WIFI_GET_TIMEZONE_OFF_FAILED = 43
    ERR_WIFI_NOT_CONN_ROUTER = 44
    ERR_WIFI_GET_TIMESTAMP_FAILED = 45
    ERR_WIFI_GET_REPEATER_EN_FAILED = 46
    ERR_WIFI_GET_PORT_FAILED = 47
    ERR_WIFI_GET_VAL_FAILED = 48
    ERR_WIFI_GET_IS_ON_FAILED = 49
    ERR_WIFI_GET_WEEKDAY_FAILED = 50
    ERR_WIFI_GET_WRONG_WEEKDAY = 51
    ERR_WIFI_GET_WEEKDAY_ITEM_FAILED = 52
    ERR_WIFI_GET_ERROR_TIMER_TYPE = 53


class ColorPattern(IntEnum):
    """Preset color effects for ``SET_PRESET_MODE``."""

    INIT_MODE = 0
    SEVEN_GRADIENT = 1
    RED_GRADIENT = 2
    GREEN_GRADIENT = 3
    BLUE_GRADIENT = 4
    YELLOW_GRADIENT = 5
    CYAN_GRADIENT = 6
    PURPLE_GRADIENT = 7
    WHITE_GRADIENT = 8
    RED_STROBE = 9
    GREEN_STROBE = 10
    BLUE_STROBE = 11
    YELLOW_STROBE = 12
    RG_GRADIENT = 13
    RB_GRADIENT = 14
    GB_GRADIENT = 15
    RG_JUMP = 16
    RB_JUMP = 17
    GB_JUMP = 18
    RG_STROBE = 19
    RB_STROBE = 20
    GB_STROBE = 21
    SEVEN_JUMP = 22
    SEVEN_STROBE = 23
    WHITE_STROBE = 24
    RGB_GRADIENT = 25
    RGB_JUMP = 26
    RGB_STROBE = 27


class TimerType(IntEnum):
    TIMER_SHUTDOWN = 0
    TIMER_CONSTANT = 1
    TIMER_PRESET_MODE = 2
    TIMER_CUSTOM_MODE = 3
    TIMER_DELAY_SHUTDOWN = 4
