# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/writer.py
Assembles declarations into one Go source file and persists it.

Output layout:

    package <pkg>

    import (
        "github.com/goplus/lib/py"
        _ "unsafe"
    )

    const LLGoPackage = "py.<module>"

    // <doc lines>
    //
    // See <url>
    //
    //go:linkname Local py.<foreign>
    func Local(a *py.Object, b *py.Object) *py.Object
"""

import logging
from pathlib import Path
from typing import List, Dict, Any

from pylinkgen.core.exceptions import OutputWriteError
from pylinkgen.templates import TemplateEngine, get_engine
from .constants import LINKNAME_DIRECTIVE, PACKAGE_LINK_CONST, VARIADIC_PARAM_NAME
from .interfaces import ModuleWriter
from .models import Declaration
from .naming import package_name

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "go/module.go.j2"


class GoModuleWriter(ModuleWriter):
    """Renders declarations through the ``go/module.go.j2`` template."""

    def __init__(self,
                 runtime_import: str = "github.com/goplus/lib/py",
                 handle_type: str = "Object",
                 link_prefix: str = "py.",
                 engine: TemplateEngine = None):
        self._runtime_import = runtime_import
        self._runtime_pkg = runtime_import.rstrip('/').rsplit('/', 1)[-1]
        self._handle_type = handle_type
        self._link_prefix = link_prefix
        self._engine = engine or get_engine()

    @property
    def handle(self) -> str:
        """Opaque foreign object handle type, e.g. ``*py.Object``."""
        return f"*{self._runtime_pkg}.{self._handle_type}"

    def get_file_extensions(self) -> List[str]:
        return ['.go']

    def output_path(self, module_name: str, output_dir: Path) -> Path:
        return Path(output_dir) / f"{module_name}.go"

    def _declaration_context(self, decl: Declaration) -> Dict[str, Any]:
        params = [f"{name} {self.handle}" for name in decl.params]
        if decl.variadic:
            params.append(f"{VARIADIC_PARAM_NAME} ...{self.handle}")
        return {
            'local_name': decl.local_name,
            'foreign_link_name': decl.foreign_link_name,
            'doc': list(decl.doc),
            'params': params,
            'result': self.handle if decl.returns_one else "",
        }

    def render(self, module_name: str, declarations: List[Declaration]) -> str:
        context = {
            'package': package_name(module_name),
            'runtime_import': self._runtime_import,
            'package_const': PACKAGE_LINK_CONST,
            'link_package': f"{self._link_prefix}{module_name}",
            'link_prefix': self._link_prefix,
            'linkname': LINKNAME_DIRECTIVE,
            'declarations': [self._declaration_context(d) for d in declarations],
        }
        return self._engine.render(TEMPLATE_NAME, context)

    def write(self, module_name: str, declarations: List[Declaration], output_dir: Path) -> Path:
        """Render and write ``<output_dir>/<module_name>.go``.

        Raises:
            OutputWriteError: directory creation or file write failed
        """
        output_dir = Path(output_dir)
        path = self.output_path(module_name, output_dir)
        text = self.render(module_name, declarations)

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputWriteError(f"Cannot create output directory {output_dir}: {e}", path=str(output_dir))
        try:
            # newline='' keeps '\n' line endings on every platform
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(text)
        except OSError as e:
            raise OutputWriteError(f"Cannot write {path}: {e}", path=str(path))

        logger.info(f"Generated: {path} ({len(declarations)} declarations)")
        return path


__all__ = ['GoModuleWriter', 'TEMPLATE_NAME']
