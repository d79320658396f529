# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/classifier.py
Routes dumped symbols to EMIT, SKIP, DEFER or UNSUPPORTED.

The classifier never raises: an unsupported kind comes back as a tagged
result and the caller decides whether that stops the run.
"""

from typing import Optional

from .constants import PRIVATE_PREFIX
from .models import Symbol, KindCategory, Classification


class SymbolClassifier:
    """Stateless symbol router."""

    def is_public(self, symbol: Symbol) -> bool:
        """Private (``_``-prefixed) and nameless symbols are ignored outright."""
        return bool(symbol.name) and not symbol.name.startswith(PRIVATE_PREFIX)

    def classify(self, symbol: Symbol) -> Optional[Classification]:
        """Classify one symbol.

        Returns:
            A Classification, or None when the symbol is ignored before
            classification (empty or private name).
        """
        if not self.is_public(symbol):
            return None

        if symbol.signature_missing:
            return Classification.defer(symbol)

        category = symbol.category
        if category is KindCategory.CALLABLE:
            return Classification.emit(symbol)
        if category is KindCategory.PAGE_MISSING:
            return Classification.defer(symbol)
        if category is KindCategory.UNKNOWN:
            return Classification.unsupported(symbol)
        # NON_CALLABLE and INFORMATIONAL
        return Classification.skip(symbol)


__all__ = ['SymbolClassifier']
