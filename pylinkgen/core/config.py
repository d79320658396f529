# -*- coding: utf-8 -*-
"""
pylinkgen/core/config.py - Configuration Management

Centralized management of pylinkgen configuration items.
"""

from dataclasses import dataclass
from typing import Optional, List
from pathlib import Path
import os
import shlex

import yaml

from .exceptions import ConfigLoadError


SOURCES = ('subprocess', 'inprocess')
KEYWORD_POLICIES = ('drop', 'reject')
UNSUPPORTED_KIND_POLICIES = ('collect', 'abort')

# Locations searched by load_config() when no explicit path is given
CONFIG_SEARCH_PATHS = [
    "pylinkgen.yaml",
    ".pylinkgen.yaml",
    "~/.pylinkgen.yaml",
]


@dataclass
class PyLinkGenConfig:
    """pylinkgen configuration"""

    # ==========================================================================
    # Symbol sources
    # ==========================================================================

    source: str = "subprocess"             # subprocess | inprocess
    dump_command: str = "pydump"           # Invoked as: <dump_command> <module>
    fetch_command: str = "pysigfetch"      # Invoked as: <fetch_command> <module> -  (names on stdin)
    dump_timeout: float = 120.0            # Seconds; a timeout counts as "no data"
    fetch_timeout: float = 300.0

    # ==========================================================================
    # Emission policies
    # ==========================================================================

    keyword_policy: str = "drop"           # drop | reject
    unsupported_kind_policy: str = "collect"  # collect | abort

    # ==========================================================================
    # Host language output
    # ==========================================================================

    runtime_import: str = "github.com/goplus/lib/py"
    handle_type: str = "Object"            # Opaque foreign object handle: *py.Object
    link_prefix: str = "py."               # //go:linkname Local py.<foreign>
    output_dir: Optional[Path] = None      # None means ./<module>
    validate_output: bool = True

    # ==========================================================================
    # Logging
    # ==========================================================================

    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __post_init__(self):
        self._apply_env_overrides()

        if self.output_dir is not None and not isinstance(self.output_dir, Path):
            self.output_dir = Path(self.output_dir)
        if self.log_file is not None and not isinstance(self.log_file, Path):
            self.log_file = Path(self.log_file)

    def _apply_env_overrides(self):
        """
        Read configuration overrides from environment variables.

        Environment variable naming rule: PYLINKGEN_<FIELD_NAME>
        Example:
            - PYLINKGEN_DUMP_TIMEOUT=30
            - PYLINKGEN_KEYWORD_POLICY=reject
            - PYLINKGEN_LOG_LEVEL=DEBUG
        """
        overridable = {
            'source': str,
            'dump_command': str,
            'fetch_command': str,
            'dump_timeout': float,
            'fetch_timeout': float,
            'keyword_policy': str,
            'unsupported_kind_policy': str,
            'runtime_import': str,
            'handle_type': str,
            'link_prefix': str,
            'output_dir': self._parse_path,
            'validate_output': self._parse_bool,
            'log_level': str,
            'log_file': self._parse_path,
        }

        for field, converter in overridable.items():
            env_name = f"PYLINKGEN_{field.upper()}"
            env_value = os.environ.get(env_name)
            if env_value is not None:
                try:
                    setattr(self, field, converter(env_value))
                except (ValueError, TypeError):
                    # Invalid values keep the default
                    pass

    @staticmethod
    def _parse_bool(value: str) -> bool:
        """Parse boolean environment variables"""
        return value.lower() in ('true', '1', 'yes', 'on')

    @staticmethod
    def _parse_path(value: str) -> Optional[Path]:
        """Parse path environment variables"""
        if not value or value.lower() in ('none', 'null', ''):
            return None
        return Path(value)

    @property
    def dump_argv(self) -> List[str]:
        return shlex.split(self.dump_command)

    @property
    def fetch_argv(self) -> List[str]:
        return shlex.split(self.fetch_command)

    @classmethod
    def from_dict(cls, data: dict) -> 'PyLinkGenConfig':
        """Create configuration from dictionary"""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    @classmethod
    def from_yaml(cls, path: str) -> 'PyLinkGenConfig':
        """Load configuration from a YAML file"""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigLoadError(f"Configuration file not found: {path}", config_path=str(path))
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Invalid YAML in {path}: {e}", config_path=str(path))

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigLoadError(f"Configuration root must be a mapping: {path}", config_path=str(path))
        try:
            return cls.from_dict(data)
        except TypeError as e:
            raise ConfigLoadError(f"Invalid value in {path}: {e}", config_path=str(path))

    def to_dict(self) -> dict:
        """Convert to complete dictionary"""
        return {
            'source': self.source,
            'dump_command': self.dump_command,
            'fetch_command': self.fetch_command,
            'dump_timeout': self.dump_timeout,
            'fetch_timeout': self.fetch_timeout,
            'keyword_policy': self.keyword_policy,
            'unsupported_kind_policy': self.unsupported_kind_policy,
            'runtime_import': self.runtime_import,
            'handle_type': self.handle_type,
            'link_prefix': self.link_prefix,
            'output_dir': str(self.output_dir) if self.output_dir else None,
            'validate_output': self.validate_output,
            'log_level': self.log_level,
            'log_file': str(self.log_file) if self.log_file else None,
        }

    def to_yaml(self, path: str) -> None:
        """Save configuration to a YAML file"""
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, allow_unicode=True)

    def validate(self) -> List[str]:
        """
        Validate the configuration for correctness.

        Returns:
            List of error messages (Empty list if valid)
        """
        errors = []

        if self.source not in SOURCES:
            errors.append(f"source ({self.source}) must be one of: {list(SOURCES)}")
        if self.keyword_policy not in KEYWORD_POLICIES:
            errors.append(f"keyword_policy ({self.keyword_policy}) must be one of: {list(KEYWORD_POLICIES)}")
        if self.unsupported_kind_policy not in UNSUPPORTED_KIND_POLICIES:
            errors.append(
                f"unsupported_kind_policy ({self.unsupported_kind_policy}) "
                f"must be one of: {list(UNSUPPORTED_KIND_POLICIES)}"
            )

        for name in ('dump_timeout', 'fetch_timeout'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{name} ({value!r}) must be a number of seconds")
            elif value <= 0:
                errors.append(f"{name} ({value}s) must be positive")

        for name in ('source', 'dump_command', 'fetch_command', 'keyword_policy',
                     'unsupported_kind_policy', 'runtime_import', 'handle_type',
                     'link_prefix', 'log_level'):
            if not isinstance(getattr(self, name), str):
                errors.append(f"{name} ({getattr(self, name)!r}) must be a string")

        if isinstance(self.dump_command, str) and not self.dump_argv:
            errors.append("dump_command is empty")
        if isinstance(self.fetch_command, str) and not self.fetch_argv:
            errors.append("fetch_command is empty")
        if isinstance(self.handle_type, str) and not self.handle_type.isidentifier():
            errors.append(f"handle_type ({self.handle_type}) is not a valid identifier")

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if isinstance(self.log_level, str) and self.log_level.upper() not in valid_log_levels:
            errors.append(f"log_level ({self.log_level}) is invalid, should be one of: {valid_log_levels}")

        return errors


def find_config_file() -> Optional[Path]:
    """Return the first existing file from CONFIG_SEARCH_PATHS."""
    for candidate in CONFIG_SEARCH_PATHS:
        path = Path(os.path.expanduser(candidate))
        if path.is_file():
            return path
    return None


def load_config(path: Optional[str] = None) -> PyLinkGenConfig:
    """
    Load configuration (supports YAML and environment variables).

    Args:
        path: Configuration file path (optional). When omitted the default
            search locations are tried, then built-in defaults are used.

    Returns:
        Configuration instance
    """
    if path:
        return PyLinkGenConfig.from_yaml(path)
    found = find_config_file()
    if found is not None:
        return PyLinkGenConfig.from_yaml(str(found))
    return PyLinkGenConfig()
