# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen - binding generation pipeline

Core components:
- parse_signature / SignatureParser: textual signature parsing
- mangle: foreign to host identifier mangling
- SymbolClassifier: EMIT / SKIP / DEFER / UNSUPPORTED routing
- BindingEmitter: link-only declaration building
- RetryOrchestrator: two-phase dump and secondary lookup driver
- GoModuleWriter: output unit rendering
- BindingGenerator: everything above behind one call
"""

# Constants
from .constants import (
    CALLABLE_KINDS,
    NON_CALLABLE_KINDS,
    NULL_SIGNATURE,
    RESERVED_WORDS,
)

# Data models
from .models import (
    KindCategory,
    Disposition,
    Symbol,
    Module,
    Parameter,
    ParsedSignature,
    Declaration,
    Classification,
    DeferredSet,
    PhaseResult,
    BindingReport,
)

# Interfaces
from .interfaces import (
    SymbolSource,
    ModuleWriter,
)

# Pipeline stages
from .sigparse import SignatureParser, parse_signature
from .naming import mangle, mangle_param, package_name
from .classifier import SymbolClassifier
from .emitter import BindingEmitter, doc_lines
from .orchestrator import RetryOrchestrator, State

# Symbol sources
from .sources import (
    SubprocessSymbolSource,
    FileSymbolSource,
    InProcessSymbolSource,
    create_source,
)

# Output
from .writer import GoModuleWriter
from .validator import BindingValidator, ValidationResult

# Main generator
from .generator import BindingGenerator

__all__ = [
    # Constants
    'CALLABLE_KINDS', 'NON_CALLABLE_KINDS', 'NULL_SIGNATURE', 'RESERVED_WORDS',
    # Models
    'KindCategory', 'Disposition', 'Symbol', 'Module', 'Parameter',
    'ParsedSignature', 'Declaration', 'Classification', 'DeferredSet',
    'PhaseResult', 'BindingReport',
    # Interfaces
    'SymbolSource', 'ModuleWriter',
    # Pipeline
    'SignatureParser', 'parse_signature', 'mangle', 'mangle_param', 'package_name',
    'SymbolClassifier', 'BindingEmitter', 'doc_lines', 'RetryOrchestrator', 'State',
    # Sources
    'SubprocessSymbolSource', 'FileSymbolSource', 'InProcessSymbolSource', 'create_source',
    # Output
    'GoModuleWriter', 'BindingValidator', 'ValidationResult',
    'BindingGenerator',
]
