# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/sources.py
Symbol source implementations.

- SubprocessSymbolSource: external ``pydump`` / ``pysigfetch`` style tools
- FileSymbolSource: saved dump JSON files (offline runs, fixtures)
- InProcessSymbolSource: introspection of a module importable here
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from pylinkgen.core.exceptions import SymbolSourceError
from .interfaces import SymbolSource
from .models import Module

logger = logging.getLogger(__name__)


class SubprocessSymbolSource(SymbolSource):
    """Runs external dump and fetch commands and decodes their JSON stdout.

    Invocation:
        <dump_argv...> <module>
        <fetch_argv...> <module> -      (names whitespace-joined on stdin)

    A timeout, a missing executable or unparseable output all count as "no
    data": an empty module is returned and a warning is logged.
    """

    def __init__(self,
                 dump_argv: Sequence[str] = ("pydump",),
                 fetch_argv: Sequence[str] = ("pysigfetch",),
                 dump_timeout: float = 120.0,
                 fetch_timeout: float = 300.0):
        self._dump_argv = list(dump_argv)
        self._fetch_argv = list(fetch_argv)
        self._dump_timeout = dump_timeout
        self._fetch_timeout = fetch_timeout

    def is_available(self) -> bool:
        return bool(self._dump_argv) and shutil.which(self._dump_argv[0]) is not None

    def fetch(self, module_name: str) -> Module:
        cmd = self._dump_argv + [module_name]
        return Module.from_json(self._run(cmd, None, self._dump_timeout))

    def fetch_names(self, module_name: str, names: Sequence[str]) -> Module:
        cmd = self._fetch_argv + [module_name, "-"]
        return Module.from_json(self._run(cmd, " ".join(names), self._fetch_timeout))

    def _run(self, cmd: List[str], stdin_text: Optional[str], timeout: float) -> str:
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                input=stdin_text,
                stdout=subprocess.PIPE,
                text=True,
                encoding='utf-8',
                errors='replace',
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"{cmd[0]} timed out after {timeout}s, treating as no data")
            return ""
        except OSError as e:
            logger.warning(f"{cmd[0]} could not be started: {e}")
            return ""

        if result.returncode != 0:
            logger.warning(f"{cmd[0]} exited with status {result.returncode}")
        return result.stdout or ""


class FileSymbolSource(SymbolSource):
    """Reads a saved primary dump and, optionally, a saved secondary lookup."""

    def __init__(self, dump_path: Path, fetch_path: Path = None):
        self._dump_path = Path(dump_path)
        self._fetch_path = Path(fetch_path) if fetch_path else None

    def is_available(self) -> bool:
        return self._dump_path.is_file()

    def fetch(self, module_name: str) -> Module:
        return Module.from_json(self._read(self._dump_path))

    def fetch_names(self, module_name: str, names: Sequence[str]) -> Module:
        if self._fetch_path is None:
            return Module.empty()
        module = Module.from_json(self._read(self._fetch_path))
        wanted = set(names)
        return Module(module.name, tuple(s for s in module.symbols if s.name in wanted))

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return path.read_text(encoding='utf-8')
        except OSError as e:
            raise SymbolSourceError(f"Cannot read symbol dump {path}: {e}", source=str(path))
        except UnicodeDecodeError as e:
            raise SymbolSourceError(f"Symbol dump {path} is not UTF-8: {e}", source=str(path))


class InProcessSymbolSource(SymbolSource):
    """Introspects modules importable by the running interpreter."""

    def is_available(self) -> bool:
        return True

    def fetch(self, module_name: str) -> Module:
        from .introspect import dump_module
        return Module.from_dict(dump_module(module_name))

    def fetch_names(self, module_name: str, names: Sequence[str]) -> Module:
        from .introspect import lookup_names
        return Module.from_dict(lookup_names(module_name, names))


def create_source(config, dump_file: Path = None, fetch_file: Path = None) -> SymbolSource:
    """Build the symbol source selected by configuration / CLI options.

    Args:
        config: PyLinkGenConfig
        dump_file: Saved primary dump; takes precedence over ``config.source``
        fetch_file: Saved secondary lookup, used with ``dump_file``
    """
    if dump_file is not None:
        return FileSymbolSource(dump_file, fetch_file)
    if config.source == "inprocess":
        return InProcessSymbolSource()
    if config.source == "subprocess":
        return SubprocessSymbolSource(
            dump_argv=config.dump_argv,
            fetch_argv=config.fetch_argv,
            dump_timeout=config.dump_timeout,
            fetch_timeout=config.fetch_timeout,
        )
    raise SymbolSourceError(f"Unknown symbol source: {config.source}", source=config.source)


__all__ = [
    'SubprocessSymbolSource',
    'FileSymbolSource',
    'InProcessSymbolSource',
    'create_source',
]
