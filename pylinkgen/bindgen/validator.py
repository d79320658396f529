# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/validator.py
Re-reads a generated Go file and checks it against the emitted declarations.
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Tuple

from .constants import LINKNAME_DIRECTIVE, PACKAGE_LINK_CONST
from .models import Declaration

_LINKNAME_RE = re.compile(rf"^{re.escape(LINKNAME_DIRECTIVE)}\s+(\S+)\s+(\S+)\s*$")
_FUNC_RE = re.compile(r"^func\s+([A-Za-z_][A-Za-z0-9_]*)\s*\(")
_PACKAGE_CONST_RE = re.compile(rf'^const\s+{PACKAGE_LINK_CONST}\s*=\s*"([^"]*)"')


@dataclass
class ValidationResult:
    """Result of output validation."""
    is_valid: bool
    expected_count: int
    generated_count: int
    missing: List[str] = field(default_factory=list)
    extra: List[str] = field(default_factory=list)
    mismatched_links: List[Tuple[str, str, str]] = field(default_factory=list)  # (local, expected, actual)
    collisions: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def summary(self) -> str:
        """Generate human-readable summary."""
        if self.is_valid and not self.warnings:
            return f"[OK] Valid: {self.generated_count}/{self.expected_count} declarations linked"

        head = "[OK]" if self.is_valid else "[ERR]"
        lines = [f"{head} {self.generated_count}/{self.expected_count} declarations linked"]

        if self.missing:
            lines.append(f"  Missing ({len(self.missing)}): {', '.join(self.missing[:5])}")
            if len(self.missing) > 5:
                lines.append(f"    ... and {len(self.missing) - 5} more")
        if self.extra:
            lines.append(f"  Extra ({len(self.extra)}): {', '.join(self.extra[:5])}")
        if self.mismatched_links:
            lines.append(f"  Link mismatches: {len(self.mismatched_links)}")
        for w in self.warnings:
            lines.append(f"  Warning: {w}")

        return "\n".join(lines)


class BindingValidator:
    """Validates a generated Go file against the declarations it should hold."""

    def __init__(self, link_prefix: str = "py."):
        self._link_prefix = link_prefix

    def parse(self, text: str) -> Dict[str, object]:
        """Extract ``(local, link target)`` pairs and the package link constant.

        A linkname directive only counts when the next non-comment line
        declares the same function.
        """
        links: List[Tuple[str, str]] = []
        orphans: List[str] = []
        package_link = None
        pending = None

        for raw in text.splitlines():
            line = raw.strip()
            if not line:
                continue

            m = _PACKAGE_CONST_RE.match(line)
            if m:
                package_link = m.group(1)
                continue

            m = _LINKNAME_RE.match(line)
            if m:
                if pending:
                    orphans.append(pending[0])
                pending = (m.group(1), m.group(2))
                continue

            if line.startswith("//"):
                continue

            m = _FUNC_RE.match(line)
            if m and pending:
                if m.group(1) == pending[0]:
                    links.append(pending)
                else:
                    orphans.append(pending[0])
            elif pending:
                orphans.append(pending[0])
            pending = None

        if pending:
            orphans.append(pending[0])

        return {'links': links, 'orphans': orphans, 'package_link': package_link}

    def validate_text(self, text: str, module_name: str, declarations: List[Declaration]) -> ValidationResult:
        parsed = self.parse(text)
        links: List[Tuple[str, str]] = parsed['links']
        warnings: List[str] = []

        expected_pkg = f"{self._link_prefix}{module_name}"
        if parsed['package_link'] != expected_pkg:
            warnings.append(f"package link is {parsed['package_link']!r}, expected {expected_pkg!r}")
        for orphan in parsed['orphans']:
            warnings.append(f"linkname {orphan} is not followed by its func declaration")

        expected = {d.local_name: f"{self._link_prefix}{d.foreign_link_name}" for d in declarations}
        generated = dict(links)

        missing = [name for name in expected if name not in generated]
        extra = [name for name in generated if name not in expected]
        mismatched = [
            (name, target, generated[name])
            for name, target in expected.items()
            if name in generated and generated[name] != target
        ]

        # Distinct foreign names mangling to one local name
        counts = Counter(d.local_name for d in declarations)
        collisions = sorted(name for name, n in counts.items() if n > 1)
        for name in collisions:
            sources = [d.foreign_link_name for d in declarations if d.local_name == name]
            warnings.append(f"{name} is declared {counts[name]} times (from {', '.join(sources)})")

        is_valid = not missing and not extra and not mismatched and not parsed['orphans']
        return ValidationResult(
            is_valid=is_valid,
            expected_count=len(declarations),
            generated_count=len(links),
            missing=missing,
            extra=extra,
            mismatched_links=mismatched,
            collisions=collisions,
            warnings=warnings,
        )

    def validate_file(self, path: Path, module_name: str, declarations: List[Declaration]) -> ValidationResult:
        path = Path(path)
        if not path.exists():
            return ValidationResult(
                is_valid=False,
                expected_count=len(declarations),
                generated_count=0,
                missing=[d.local_name for d in declarations],
                warnings=["Go file not found"],
            )
        return self.validate_text(path.read_text(encoding='utf-8'), module_name, declarations)


__all__ = ['BindingValidator', 'ValidationResult']
