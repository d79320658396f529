# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/generator.py
Main binding generator interface.
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional

from pylinkgen.core.config import PyLinkGenConfig
from .classifier import SymbolClassifier
from .emitter import BindingEmitter
from .interfaces import SymbolSource, ModuleWriter
from .models import BindingReport
from .orchestrator import RetryOrchestrator
from .sources import create_source
from .validator import BindingValidator
from .writer import GoModuleWriter

logger = logging.getLogger(__name__)


class BindingGenerator:
    """
    Main interface for generating link-only bindings of a foreign module.
    Combines symbol dumping, the two-phase retry protocol, file output and
    output validation.
    """

    def __init__(self,
                 config: PyLinkGenConfig = None,
                 source: SymbolSource = None,
                 writer: ModuleWriter = None):
        """Initialize the generator.

        Args:
            config: Configuration. Defaults to PyLinkGenConfig().
            source: Symbol source. Defaults to the one selected by config.source.
            writer: Output writer. Defaults to GoModuleWriter built from config.
        """
        self._config = config or PyLinkGenConfig()
        self._source = source or create_source(self._config)
        self._writer = writer or GoModuleWriter(
            runtime_import=self._config.runtime_import,
            handle_type=self._config.handle_type,
            link_prefix=self._config.link_prefix,
        )
        self._validator = BindingValidator(link_prefix=self._config.link_prefix)

    def build_orchestrator(self) -> RetryOrchestrator:
        return RetryOrchestrator(
            source=self._source,
            classifier=SymbolClassifier(),
            emitter=BindingEmitter(keyword_policy=self._config.keyword_policy),
            unsupported_kind_policy=self._config.unsupported_kind_policy,
        )

    def resolve_output_dir(self, module_name: str, output_dir: Optional[Path] = None) -> Path:
        """Explicit directory, then config.output_dir, then ``./<module>``."""
        if output_dir is not None and str(output_dir).strip():
            return Path(str(output_dir).strip())
        if self._config.output_dir is not None:
            return Path(self._config.output_dir)
        return Path(".") / module_name

    def collect(self, module_name: str) -> BindingReport:
        """Run both phases without writing anything."""
        return self.build_orchestrator().run(module_name)

    def generate(self, module_name: str, output_dir: Path = None) -> Dict[str, Any]:
        """
        Generate the binding file for ``module_name``.

        Args:
            module_name: Foreign module to bind
            output_dir: Output directory (defaults to ./<module_name>)

        Returns:
            Dictionary containing generation results and metadata

        Raises:
            ModuleMismatchError: the dump did not describe ``module_name``
            UnsupportedSymbolKindError: only with the 'abort' policy
            OutputWriteError: the output could not be written
        """
        report = self.collect(module_name)
        output_dir = self.resolve_output_dir(module_name, output_dir)
        path = self._writer.write(module_name, report.declarations, output_dir)

        result = {
            'success': True,
            'module': module_name,
            'output_dir': str(output_dir),
            'output_file': str(path),
            'report': report,
            'summary': report.summary(),
            'warnings': [],
        }

        for err in report.unsupported:
            result['warnings'].append(str(err))
        for err in report.rejected:
            result['warnings'].append(str(err))
        if report.unresolved:
            result['warnings'].append(
                f"{len(report.unresolved)} symbols unresolved: {', '.join(report.unresolved)}"
            )

        if self._config.validate_output:
            vr = self._validator.validate_file(path, module_name, report.declarations)
            result['validation'] = {
                'valid': vr.is_valid,
                'expected': vr.expected_count,
                'generated': vr.generated_count,
                'missing': len(vr.missing),
                'collisions': vr.collisions,
                'warnings': vr.warnings,
            }
            if vr.is_valid:
                logger.info(f"Validated: {path.name}")
            else:
                logger.warning(f"Validation issues in {path.name}:\n{vr.summary}")
                result['warnings'].append("Generated file has validation issues")
            for w in vr.warnings:
                logger.warning(w)

        return result


__all__ = ['BindingGenerator']
