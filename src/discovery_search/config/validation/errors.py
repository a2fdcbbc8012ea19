"""Config validation errors."""
from discovery_search.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable / setting is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing", setting=setting_name)
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but semantically invalid."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            setting=setting_name,
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


class UnexpectedClassShapeError(ConfigError):
    """An options class does not declare a usable search class identifier."""
    default_code = "unexpected_class_shape"

    def __init__(self, class_name: str) -> None:
        super().__init__(f"Unexpected class name: {class_name}")
        self.class_name = class_name


__all__ = [
    "ConfigError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "UnexpectedClassShapeError",
]
