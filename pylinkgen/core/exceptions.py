# -*- coding: utf-8 -*-
"""
pylinkgen/core/exceptions.py - Exception hierarchy

All errors raised by pylinkgen derive from PyLinkGenError and carry an
optional ``details`` mapping that ends up in CLI diagnostics.
"""

from typing import Optional, Dict, Any, List


class PyLinkGenError(Exception):
    """
    pylinkgen base exception

    Base class for every custom pylinkgen exception.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Binding generation errors
# =============================================================================

class BindingError(PyLinkGenError):
    """Binding generation base exception"""
    pass


class ModuleMismatchError(BindingError):
    """The dumped module name differs from the requested one"""

    def __init__(self, requested: str, received: str, **kwargs) -> None:
        super().__init__(f"import module {requested} failed (dump returned {received!r})", kwargs)
        self.requested = requested
        self.received = received


class UnsupportedSymbolKindError(BindingError):
    """A symbol carries a kind tag that is neither callable nor known data"""

    def __init__(self, kind: str, symbol: str, **kwargs) -> None:
        super().__init__(f"unsupported symbol kind {kind!r} for {symbol}", kwargs)
        self.kind = kind
        self.symbol = symbol


class KeywordParametersRejected(BindingError):
    """A signature needs keyword-only parameters and the policy refuses to drop them"""

    def __init__(self, symbol: str, dropped: List[str], **kwargs) -> None:
        super().__init__(f"{symbol}: keyword parameters not representable: {', '.join(dropped)}", kwargs)
        self.symbol = symbol
        self.dropped = list(dropped)


class SymbolSourceError(BindingError):
    """A symbol source could not be used at all"""

    def __init__(self, message: str, source: str = None, **kwargs) -> None:
        super().__init__(message, kwargs)
        self.source = source


class OutputWriteError(BindingError):
    """Output directory or file could not be written"""

    def __init__(self, message: str, path: str = None, **kwargs) -> None:
        super().__init__(message, kwargs)
        self.path = path


class TemplateRenderError(BindingError):
    """Template lookup or rendering failed"""

    def __init__(self, message: str, template: str = None, **kwargs) -> None:
        super().__init__(message, kwargs)
        self.template = template


# =============================================================================
# Configuration errors
# =============================================================================

class ConfigError(PyLinkGenError):
    """Configuration error"""
    pass


class ConfigValidationError(ConfigError):
    """Configuration validation error"""

    def __init__(self, message: str, field: str = None, value: Any = None, **kwargs) -> None:
        super().__init__(message, kwargs)
        self.field = field
        self.value = value


class ConfigLoadError(ConfigError):
    """Configuration load error"""

    def __init__(self, message: str, config_path: str = None, **kwargs) -> None:
        super().__init__(message, kwargs)
        self.config_path = config_path


# =============================================================================
# Helpers
# =============================================================================

def format_exception(exc: Exception, include_traceback: bool = False) -> str:
    """
    Format an exception for terminal output

    Args:
        exc: Exception object
        include_traceback: Whether to append the full traceback

    Returns:
        Formatted exception string
    """
    if isinstance(exc, PyLinkGenError):
        result = f"[{exc.__class__.__name__}] {exc.message}"
        if exc.details:
            result += f"\n  Details: {exc.details}"
    else:
        result = f"[{exc.__class__.__name__}] {str(exc)}"

    if include_traceback:
        import traceback
        result += f"\n  Traceback:\n{traceback.format_exc()}"

    return result
