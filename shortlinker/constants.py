from enum import StrEnum


class Timeout:
    """Storage call deadlines in seconds."""

    # Upper bound for a single Redis call (socket connect + read)
    DEFAULT_STORAGE = 2.0
    # Lower bound, so an almost expired invocation still gets one attempt
    MIN_STORAGE = 0.1
    # Time reserved for building the response after the last storage call
    RESPONSE_MARGIN = 0.25


class Shortcode:
    """Shortcode shape accepted by the redirect route."""

    PATTERN = r'^[0-9A-Za-z]{1,11}$'
    MAX_LENGTH = 11


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
DATA_STORE_ERROR = 'DATA_STORE_ERROR'
INVALID_SHORTCODE = 'INVALID_SHORTCODE'
SHORTLINK_NOT_FOUND = 'SHORTLINK_NOT_FOUND'

# Longest accepted validity window (100 years), within the range of Redis EX
MAX_EXPIRATION_IN_MINUTES = 100 * 365 * 24 * 60
