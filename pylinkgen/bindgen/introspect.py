# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/introspect.py
In-process symbol dumper.

Produces the same JSON shape as the external dump tool:

    {"name": "<module>", "items": [{"name", "type", "doc", "sig", "url"}, ...]}

Callables whose signature ``inspect`` cannot recover get ``"<NULL>"``; the
secondary lookup then tries the docstring's leading ``name(...)`` line,
which is how most C extension functions document themselves.

Usage:
    pylinkgen-dump math > math.json
    echo "floor ceil" | pylinkgen-dump math -
"""

import argparse
import importlib
import inspect
import json
import logging
import re
import sys
from typing import Any, Dict, List, Optional, Sequence

from .constants import NULL_SIGNATURE, PAGE_MISSING_KIND
from .sigparse import strip_parens

# Docstring lines inspected when looking for an embedded signature
DOC_SIGNATURE_LINES = 5

logger = logging.getLogger(__name__)


def _import(module_name: str):
    try:
        return importlib.import_module(module_name)
    except Exception as e:  # any import-time failure means "no dump"
        logger.warning(f"cannot import {module_name}: {e}")
        return None


_MISSING = object()


def _attribute(mod, name: str) -> Any:
    """Attribute of ``mod``, or ``_MISSING`` when looking it up fails."""
    try:
        return getattr(mod, name)
    except AttributeError:
        return _MISSING
    except Exception as e:  # lazy attributes may fail to import
        logger.warning(f"cannot load {mod.__name__}.{name}: {e}")
        return _MISSING


def _signature(obj: Any) -> str:
    try:
        return str(inspect.signature(obj))
    except (ValueError, TypeError):
        return NULL_SIGNATURE


def describe(name: str, obj: Any) -> Dict[str, str]:
    """Dump record for one module attribute."""
    if callable(obj) and not inspect.isclass(obj):
        doc = inspect.getdoc(obj) or ""
        sig = _signature(obj)
    else:
        doc = ""
        sig = ""
    return {
        'name': name,
        'type': type(obj).__name__,
        'doc': doc,
        'sig': sig,
        'url': "",
    }


def dump_module(module_name: str) -> Dict[str, Any]:
    """Full dump of ``module_name``; an unimportable module dumps as nameless."""
    mod = _import(module_name)
    if mod is None:
        return {'name': "", 'items': []}

    items = []
    for name in dir(mod):
        obj = _attribute(mod, name)
        if obj is _MISSING:
            continue
        items.append(describe(name, obj))
    return {'name': module_name, 'items': items}


def signature_from_doc(name: str, doc: str) -> Optional[str]:
    """Find ``name(...)`` at the start of one of the docstring's first lines.

    >>> signature_from_doc("floor", "floor(x, /)\\n\\nReturn the floor of x.")
    '(x, /)'
    """
    if not doc:
        return None
    pattern = re.compile(rf"^\s*(?:[\w.]+\.)?{re.escape(name)}\s*(\(.*)$")
    for line in doc.splitlines()[:DOC_SIGNATURE_LINES]:
        m = pattern.match(line)
        if m:
            return f"({strip_parens(m.group(1))})"
    return None


def lookup_names(module_name: str, names: Sequence[str]) -> Dict[str, Any]:
    """Targeted lookup used as the in-process secondary phase."""
    mod = _import(module_name)
    if mod is None:
        return {'name': "", 'items': []}

    items: List[Dict[str, str]] = []
    for name in names:
        obj = _attribute(mod, name)
        if obj is _MISSING:
            items.append({'name': name, 'type': PAGE_MISSING_KIND, 'doc': "", 'sig': "", 'url': ""})
            continue
        record = describe(name, obj)
        if record['sig'] == NULL_SIGNATURE:
            record['sig'] = signature_from_doc(name, record['doc']) or NULL_SIGNATURE
        items.append(record)
    return {'name': module_name, 'items': items}


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pylinkgen-dump",
        description="Dump the public surface of a Python module as JSON",
    )
    parser.add_argument("module", help="Importable module name")
    parser.add_argument("names", nargs="?",
                        help="'-' to read a whitespace separated name list from stdin")
    args = parser.parse_args(argv)

    if args.names == "-":
        data = lookup_names(args.module, sys.stdin.read().split())
    else:
        data = dump_module(args.module)

    json.dump(data, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
