# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/constants.py
Symbol kind tables, signature markers and host-language keywords.
"""

# --- Dump kind tags ---
# Kinds emitted as link-only function declarations
CALLABLE_KINDS = frozenset({
    "builtin_function_or_method",
    "function",
    "method",
    "ufunc",
    "method-wrapper",
})

# Known data kinds, silently skipped
NON_CALLABLE_KINDS = frozenset({
    "str", "float", "bool", "type", "dict", "tuple", "list", "object",
    "module", "int", "set", "frozenset", "flags", "bool_", "pybind11_type",
    "layout", "memory_format", "qscheme", "dtype", "tensortype", "ellipsis",
})

# Kind tags with this suffix are descriptive records, never fatal
INFORMATIONAL_SUFFIX = "_info"

# The secondary lookup reports "documentation page not found" with an empty kind
PAGE_MISSING_KIND = ""

# --- Signature markers ---
NULL_SIGNATURE = "<NULL>"
POSITIONAL_ONLY_MARKER = "/"
KEYWORD_ONLY_MARKERS = frozenset({"*", "\\*"})
VAR_KEYWORD_PREFIX = "**"
VAR_POSITIONAL_PREFIX = "*"

# Foreign private-name convention
PRIVATE_PREFIX = "_"

# --- Name mangling ---
WORD_SEPARATOR = "_"

# Mangled names equal to one of these get a trailing underscore
RESERVED_WORDS = frozenset({"default", "func", "var", "range", ""})

# --- Host language output ---
VARIADIC_PARAM_NAME = "__llgo_va_list"
LINKNAME_DIRECTIVE = "//go:linkname"
PACKAGE_LINK_CONST = "LLGoPackage"
