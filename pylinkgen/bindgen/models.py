# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/models.py
Data models for binding generation.

Raw dump records are turned into typed values here, once: every Symbol gets
its KindCategory and signature marker at ingestion so that the classifier
and emitter never switch on raw strings again.
"""

import json
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Dict, Optional, Any, Iterable, Iterator, Tuple

from .constants import (
    CALLABLE_KINDS,
    NON_CALLABLE_KINDS,
    INFORMATIONAL_SUFFIX,
    PAGE_MISSING_KIND,
    NULL_SIGNATURE,
)


class KindCategory(Enum):
    """Category of a dumped symbol kind tag."""
    CALLABLE = auto()        # function-like, emitted
    NON_CALLABLE = auto()    # known data kind
    PAGE_MISSING = auto()    # empty kind from the secondary lookup
    INFORMATIONAL = auto()   # *_info records and non-lowercase tags
    UNKNOWN = auto()         # anything else, unsupported

    @classmethod
    def from_kind(cls, kind: str) -> 'KindCategory':
        if kind == PAGE_MISSING_KIND:
            return cls.PAGE_MISSING
        if kind in CALLABLE_KINDS:
            return cls.CALLABLE
        if kind in NON_CALLABLE_KINDS:
            return cls.NON_CALLABLE
        if 'a' <= kind[0] <= 'z' and not kind.endswith(INFORMATIONAL_SUFFIX):
            return cls.UNKNOWN
        return cls.INFORMATIONAL


class Disposition(Enum):
    """What happens to one symbol."""
    EMIT = "emit"
    SKIP = "skip"
    DEFER = "defer"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Symbol:
    """One dumped module member."""
    name: str
    kind: str = ""
    doc: str = ""
    sig: str = ""
    url: str = ""
    category: KindCategory = field(init=False, compare=False)
    signature_missing: bool = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'category', KindCategory.from_kind(self.kind))
        object.__setattr__(self, 'signature_missing', self.sig == NULL_SIGNATURE)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Symbol':
        return cls(
            name=_as_text(data.get('name')),
            kind=_as_text(data.get('type')),
            doc=_as_text(data.get('doc')),
            sig=_as_text(data.get('sig')),
            url=_as_text(data.get('url')),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            'name': self.name,
            'type': self.kind,
            'doc': self.doc,
            'sig': self.sig,
            'url': self.url,
        }


@dataclass(frozen=True)
class Module:
    """A symbol dump: module name plus its ordered members."""
    name: str
    symbols: Tuple[Symbol, ...] = ()

    @classmethod
    def empty(cls) -> 'Module':
        return cls(name="")

    @classmethod
    def from_dict(cls, data: Any) -> 'Module':
        if not isinstance(data, dict):
            return cls.empty()
        items = data.get('items') or []
        if not isinstance(items, list):
            items = []
        symbols = tuple(Symbol.from_dict(item) for item in items if isinstance(item, dict))
        return cls(name=_as_text(data.get('name')), symbols=symbols)

    @classmethod
    def from_json(cls, text: Optional[str]) -> 'Module':
        """Decode dump JSON. Empty or malformed text yields an empty module."""
        if not text or not text.strip():
            return cls.empty()
        try:
            data = json.loads(text)
        except ValueError:
            return cls.empty()
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'items': [s.to_dict() for s in self.symbols],
        }

    def find(self, name: str) -> Optional[Symbol]:
        for sym in self.symbols:
            if sym.name == name:
                return sym
        return None


@dataclass(frozen=True)
class Parameter:
    """One parsed signature parameter."""
    name: str
    positional_only: bool = False
    keyword_only: bool = False
    variadic_positional: bool = False
    variadic_keyword: bool = False


@dataclass(frozen=True)
class ParsedSignature:
    """Parser output: representable parameters plus what had to be dropped."""
    params: Tuple[Parameter, ...] = ()
    variadic: bool = False
    dropped: Tuple[str, ...] = ()

    @property
    def ordinary(self) -> List[Parameter]:
        return [p for p in self.params if not p.variadic_positional]


@dataclass(frozen=True)
class Declaration:
    """A link-only external function declaration."""
    local_name: str
    params: Tuple[str, ...]
    foreign_link_name: str
    variadic: bool = False
    returns_one: bool = True
    doc: Tuple[str, ...] = ()
    source_url: str = ""


@dataclass(frozen=True)
class Classification:
    """Tagged classification result: EMIT, SKIP, DEFER or UNSUPPORTED(kind)."""
    disposition: Disposition
    symbol: Symbol
    kind: str = ""

    @classmethod
    def emit(cls, symbol: Symbol) -> 'Classification':
        return cls(Disposition.EMIT, symbol)

    @classmethod
    def skip(cls, symbol: Symbol) -> 'Classification':
        return cls(Disposition.SKIP, symbol)

    @classmethod
    def defer(cls, symbol: Symbol) -> 'Classification':
        return cls(Disposition.DEFER, symbol)

    @classmethod
    def unsupported(cls, symbol: Symbol) -> 'Classification':
        return cls(Disposition.UNSUPPORTED, symbol, kind=symbol.kind)


class DeferredSet:
    """Ordered, duplicate-free set of names awaiting the secondary lookup.

    Mutable while a phase runs; ``freeze()`` hands the next phase an
    immutable snapshot.
    """

    def __init__(self, names: Iterable[str] = ()):
        self._names: Dict[str, None] = {}
        for name in names:
            self.add(name)

    def add(self, name: str) -> bool:
        """Add ``name``; returns False when it was already present."""
        if name in self._names:
            return False
        self._names[name] = None
        return True

    def freeze(self) -> Tuple[str, ...]:
        return tuple(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __bool__(self) -> bool:
        return bool(self._names)

    def __repr__(self) -> str:
        return f"DeferredSet({list(self._names)!r})"


@dataclass
class PhaseResult:
    """Output of one classify/emit pass."""
    declarations: List[Declaration] = field(default_factory=list)
    deferred: DeferredSet = field(default_factory=DeferredSet)
    unsupported: list = field(default_factory=list)   # UnsupportedSymbolKindError
    rejected: list = field(default_factory=list)      # KeywordParametersRejected
    skipped: int = 0
    ignored: int = 0

    @property
    def emitted_names(self) -> List[str]:
        return [d.foreign_link_name for d in self.declarations]


@dataclass
class BindingReport:
    """Final result of a generation run."""
    module_name: str
    declarations: List[Declaration] = field(default_factory=list)
    requested: Tuple[str, ...] = ()        # names sent to the secondary lookup
    unresolved: Tuple[str, ...] = ()       # still unresolved after phase 2
    unsupported: list = field(default_factory=list)
    rejected: list = field(default_factory=list)
    states: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.unsupported

    def summary(self) -> Dict[str, Any]:
        return {
            'module': self.module_name,
            'declarations': len(self.declarations),
            'requested': len(self.requested),
            'unresolved': list(self.unresolved),
            'unsupported': [(e.symbol, e.kind) for e in self.unsupported],
            'rejected': [e.symbol for e in self.rejected],
        }


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


__all__ = [
    'KindCategory', 'Disposition',
    'Symbol', 'Module', 'Parameter', 'ParsedSignature', 'Declaration',
    'Classification', 'DeferredSet', 'PhaseResult', 'BindingReport',
]
