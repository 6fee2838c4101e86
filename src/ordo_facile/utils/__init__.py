# ============================================================================
# src/ordo_facile/utils/__init__.py
# ============================================================================
"""
Utility modules for the prescription library.
"""

from .exceptions import (
    OrdoFacileError,
    ConfigurationError,
    CorpusLoadError,
    DataFileNotFoundError,
    InvalidDefinitionError,
)

from .logging import (
    setup_logging,
    setup_logging_from_settings,
    JsonFormatter,
    log_performance,
)

from .text import (
    fold_text,
    collation_key,
)

__all__ = [
    # Exceptions
    'OrdoFacileError',
    'ConfigurationError',
    'CorpusLoadError',
    'DataFileNotFoundError',
    'InvalidDefinitionError',
    # Logging
    'setup_logging',
    'setup_logging_from_settings',
    'JsonFormatter',
    'log_performance',
    # Text
    'fold_text',
    'collation_key',
]
