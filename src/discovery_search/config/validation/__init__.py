"""Config validation errors."""
from discovery_search.config.validation.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    UnexpectedClassShapeError,
)

__all__ = [
    "ConfigError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "UnexpectedClassShapeError",
]
