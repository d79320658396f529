# -*- coding: utf-8 -*-
"""
pylinkgen - Link-only Go bindings for Python modules

Turns the symbol dump of a Python module (functions, methods, data) into a
Go source file of external declarations, each bound to the Python symbol
with a ``//go:linkname`` directive, so LLGo programs can call the module
without hand-written wrappers.

Modules:
- core: configuration, logging, exception hierarchy
- bindgen: signature parsing, mangling, classification, emission, retry
- templates: Jinja2 templates for the generated files
"""

__version__ = "0.3.0"

from . import core
from .bindgen import BindingGenerator, RetryOrchestrator

__all__ = ['core', 'BindingGenerator', 'RetryOrchestrator', '__version__']
