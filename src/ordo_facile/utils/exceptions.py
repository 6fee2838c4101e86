# ============================================================================
# src/ordo_facile/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the prescription library.
"""

from typing import Optional


class OrdoFacileError(Exception):
    """Base exception for all prescription library errors."""
    pass


class ConfigurationError(OrdoFacileError):
    """Invalid configuration."""
    pass


class CorpusLoadError(OrdoFacileError):
    """The specialty dataset could not be turned into a corpus."""
    pass


class DataFileNotFoundError(CorpusLoadError):
    """Dataset file does not exist."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class InvalidDefinitionError(CorpusLoadError):
    """A raw specialty or prescription definition is malformed."""
    def __init__(self, message: str, location: str = ""):
        super().__init__(message)
        self.location = location
