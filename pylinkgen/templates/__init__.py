# -*- coding: utf-8 -*-
"""
pylinkgen/templates/__init__.py - Template engine

Jinja2 based rendering of generated host-language files:
- templates live next to this module (``go/module.go.j2``)
- no timestamps or other run-dependent values are injected, so rendering
  the same context twice gives identical text
"""

from pathlib import Path
from typing import Dict, Any, Optional
import logging

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
)

from pylinkgen.core.exceptions import TemplateRenderError

logger = logging.getLogger(__name__)

# Template directory
TEMPLATE_DIR = Path(__file__).parent


def go_comment(line: str) -> str:
    """Render one documentation line as a Go line comment."""
    line = line.rstrip()
    return f"// {line}" if line else "//"


def go_string(s: str) -> str:
    """Quote a string as a Go interpreted string literal."""
    return '"' + s.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n') + '"'


class TemplateEngine:
    """
    Template engine

    Usage:
        engine = TemplateEngine()

        code = engine.render('go/module.go.j2', context)
    """

    def __init__(self, template_dir: Path = None):
        """
        Args:
            template_dir: Template directory path
        """
        self.template_dir = template_dir or TEMPLATE_DIR
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        self._env.filters['go_comment'] = go_comment
        self._env.filters['go_string'] = go_string

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template file

        Args:
            template_name: Template name (relative to template_dir)
            context: Template context variables

        Returns:
            Rendered text
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            logger.error(f"Template render error: {e}")
            raise TemplateRenderError(f"Cannot render {template_name}: {e}", template=template_name)


# Global engine instance
_engine: Optional[TemplateEngine] = None


def get_engine() -> TemplateEngine:
    """Get the global template engine"""
    global _engine
    if _engine is None:
        _engine = TemplateEngine()
    return _engine

