"""Jinja2 template registry for resource and controller scaffolding.

Provides the TemplateRenderer class which loads the versioned ``.j2``
templates shipped in ``kubescaffold/scaffolder/templates/`` and renders them
against a :class:`~kubescaffold.scaffolder.universe.Universe`.  The template
set is closed: identities are paths relative to the template directory, such
as ``"v2/types.go.j2"``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the scaffolding templates.

    Undefined variables raise instead of rendering as empty strings, so a
    template that asks for context it was not given fails loudly.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slugify"] = _slugify_filter
        self.env.filters["camel_case"] = _camel_case_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Identity of the template, relative to the template
                directory (e.g. ``"v2/controller.go.j2"``).
            context: Variables available inside the template.

        Returns:
            The rendered content.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template identities under *prefix*."""
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _slugify_filter(value: str) -> str:
    """Convert a string to a DNS-label-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


def _camel_case_filter(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``someThing``."""
    parts = [part for part in re.split(r"[-_\s.]+", value) if part]
    pascal = "".join(part[:1].upper() + part[1:] for part in parts)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""
