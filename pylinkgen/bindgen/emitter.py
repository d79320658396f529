# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/emitter.py
Builds link-only declarations for callable symbols.

Every parameter and the single return value are opaque foreign object
handles; no foreign types are inferred. The declaration keeps the unmangled
foreign name as its link target.
"""

from typing import List

from pylinkgen.core.config import KEYWORD_POLICIES
from pylinkgen.core.exceptions import KeywordParametersRejected, ConfigValidationError
from .models import Symbol, Declaration
from .naming import mangle, mangle_param
from .sigparse import SignatureParser


def doc_lines(doc: str, url: str = "") -> List[str]:
    """Documentation block: the doc text split verbatim, then a ``See`` line.

    The blank separator before ``See <url>`` only appears when there is doc
    text above it.
    """
    lines = doc.split("\n") if doc else []
    if url:
        if lines:
            lines.append("")
        lines.append(f"See {url}")
    return lines


class BindingEmitter:
    """Turns EMIT-classified symbols into Declarations."""

    def __init__(self, parser: SignatureParser = None, keyword_policy: str = "drop"):
        """
        Args:
            parser: Signature parser. Defaults to SignatureParser().
            keyword_policy: 'drop' silently narrows signatures with keyword-only
                parameters, 'reject' raises KeywordParametersRejected instead.
        """
        if keyword_policy not in KEYWORD_POLICIES:
            raise ConfigValidationError(
                f"keyword_policy must be one of {list(KEYWORD_POLICIES)}, got {keyword_policy!r}",
                field="keyword_policy", value=keyword_policy,
            )
        self._parser = parser or SignatureParser()
        self._keyword_policy = keyword_policy

    def emit(self, symbol: Symbol) -> Declaration:
        parsed = self._parser.parse(symbol.sig)
        if parsed.dropped and self._keyword_policy == "reject":
            raise KeywordParametersRejected(symbol.name, list(parsed.dropped))

        params = tuple(mangle_param(p.name) for p in parsed.ordinary)
        return Declaration(
            local_name=mangle(symbol.name),
            params=params,
            foreign_link_name=symbol.name,
            variadic=parsed.variadic,
            returns_one=True,
            doc=tuple(doc_lines(symbol.doc, symbol.url)),
            source_url=symbol.url,
        )


__all__ = ['BindingEmitter', 'doc_lines']
