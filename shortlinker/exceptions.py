class ShortlinkerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortlinker_error'


class ValidationError(ShortlinkerError):
    """Raised when a request is malformed or misses required fields."""

    error_code = 'app:validation_error'


class ConfigurationError(ShortlinkerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
