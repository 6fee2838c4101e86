# ============================================================================
# src/ordo_facile/config/loader.py
# ============================================================================
"""
Settings construction
- Environment values are validated once, when the settings are built
- Any invalid value is reported as a ConfigurationError
"""

from typing import Type, TypeVar

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from ..utils.exceptions import ConfigurationError

SettingsT = TypeVar("SettingsT", bound=BaseSettings)


def load_settings(settings_cls: Type[SettingsT]) -> SettingsT:
    """
    Build a settings object from the environment.

    Raises:
        ConfigurationError: an environment value fails validation
    """
    try:
        return settings_cls()
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in error.get("loc", ())) or "?"
            for error in e.errors()
        )
        raise ConfigurationError(
            f"Invalid {settings_cls.__name__} ({fields}): {e}"
        ) from e
