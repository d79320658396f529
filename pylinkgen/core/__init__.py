# -*- coding: utf-8 -*-
"""
pylinkgen/core - configuration, logging and exception types shared by the
binding generator and the command line front end.
"""

from .exceptions import (
    PyLinkGenError,
    BindingError,
    ModuleMismatchError,
    UnsupportedSymbolKindError,
    KeywordParametersRejected,
    SymbolSourceError,
    OutputWriteError,
    TemplateRenderError,
    ConfigError,
    ConfigValidationError,
    ConfigLoadError,
    format_exception,
)

from .config import (
    PyLinkGenConfig,
    find_config_file,
    load_config,
)

from .logging import (
    PyLinkGenLogger,
    setup_logging,
    setup_logging_from_config,
)

__all__ = [
    # Exceptions
    'PyLinkGenError', 'BindingError', 'ModuleMismatchError',
    'UnsupportedSymbolKindError', 'KeywordParametersRejected',
    'SymbolSourceError', 'OutputWriteError', 'TemplateRenderError',
    'ConfigError', 'ConfigValidationError', 'ConfigLoadError',
    'format_exception',
    # Configuration
    'PyLinkGenConfig', 'find_config_file', 'load_config',
    # Logging
    'PyLinkGenLogger', 'setup_logging', 'setup_logging_from_config',
]
