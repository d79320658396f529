# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/interfaces.py
Abstract interfaces for symbol sources and output writers.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence

from .models import Module, Declaration


class SymbolSource(ABC):
    """Abstract interface for fetching symbol dumps of a foreign module."""

    @abstractmethod
    def fetch(self, module_name: str) -> Module:
        """Return the full symbol dump of ``module_name``."""
        pass

    @abstractmethod
    def fetch_names(self, module_name: str, names: Sequence[str]) -> Module:
        """Targeted lookup for ``names`` only (secondary phase)."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this source can be used on the system."""
        pass


class ModuleWriter(ABC):
    """Abstract interface for persisting emitted declarations."""

    @abstractmethod
    def render(self, module_name: str, declarations: List[Declaration]) -> str:
        """Return the output unit text."""
        pass

    @abstractmethod
    def write(self, module_name: str, declarations: List[Declaration], output_dir: Path) -> Path:
        """Write the output unit and return its path."""
        pass

    @abstractmethod
    def get_file_extensions(self) -> List[str]:
        """Return list of file extensions this writer produces."""
        pass
