# ============================================================================
# src/ordo_facile/config/base_config.py
# ============================================================================
"""
Base Configuration
- Dataset location
"""

from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .loader import load_settings

# Directory of the installed ordo_facile package
_PACKAGE_DIR = Path(__file__).parent.parent


class BaseSettingsConfig(BaseSettings):
    # Prescription dataset
    DATA_FILE: Path = Field(
        default_factory=lambda: _PACKAGE_DIR / "data" / "specialties.json",
        description="JSON file holding the specialty definitions loaded at startup"
    )

    @field_validator("DATA_FILE")
    @classmethod
    def _expand_data_file(cls, value: Path) -> Path:
        return value.expanduser()

    def data_file_exists(self) -> bool:
        """Check whether the configured dataset is present"""
        return self.DATA_FILE.is_file()

# Global instance
base_settings = load_settings(BaseSettingsConfig)
