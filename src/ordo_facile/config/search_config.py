# ============================================================================
# src/ordo_facile/config/search_config.py
# ============================================================================
"""
Search Settings
- Result memoization
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from .loader import load_settings

class SearchSettings(BaseSettings):
    QUERY_CACHE_SIZE: int = Field(
        default=128,
        ge=0,
        description="Number of (mode, specialty, search term) result sets kept in memory. 0 disables memoization."
    )

search_settings = load_settings(SearchSettings)
