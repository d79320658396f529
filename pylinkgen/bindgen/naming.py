# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/naming.py
Foreign identifier to host identifier mangling.
"""

from .constants import WORD_SEPARATOR, RESERVED_WORDS

# Index value meaning "capitalize every segment"
NO_EXEMPT_SEGMENT = -1


def mangle(name: str, keep_index: int = NO_EXEMPT_SEGMENT) -> str:
    """Convert a snake_case foreign name into a host identifier.

    Every ``_``-separated segment except the one at ``keep_index`` gets its
    first character upper-cased when it is an ASCII lowercase letter; the
    segments are then joined without separators. Reserved words and the
    empty result get a trailing underscore.

    >>> mangle("foo_bar")
    'FooBar'
    >>> mangle("foo_bar", 0)
    'fooBar'
    >>> mangle("range", 0)
    'range_'
    """
    parts = name.split(WORD_SEPARATOR)
    for i, part in enumerate(parts):
        if i != keep_index and part:
            c = part[0]
            if 'a' <= c <= 'z':
                parts[i] = c.upper() + part[1:]
    mangled = ''.join(parts)
    if mangled in RESERVED_WORDS:
        mangled += '_'
    return mangled


def mangle_param(name: str) -> str:
    """Parameter names keep their first segment unchanged: ``x_min`` -> ``xMin``."""
    return mangle(name, 0)


def package_name(module_name: str) -> str:
    """Host package name for a dotted foreign module name: ``os.path`` -> ``path``."""
    return module_name.rsplit('.', 1)[-1]


__all__ = ['mangle', 'mangle_param', 'package_name', 'NO_EXEMPT_SEGMENT']
