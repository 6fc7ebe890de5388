"""Jinja2 rendering for the generated project files.

Templates live next to this module in ``templates/``, one directory per
generator (``express/``, ``vue/``, ``docker/`` ...).  Every template is a
``.j2`` file whose name, minus the suffix, is the name of the file it
produces.  Contexts come from ``ProjectConfig.template_context()`` plus
whatever a generator adds on top.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..utils import to_camel_case, to_constant_case, to_kebab_case, to_pascal_case, write_text

TEMPLATE_SUFFIX = ".j2"
PACKAGED_TEMPLATES = Path(__file__).parent / "templates"

_FILTERS = {
    "pascal_case": to_pascal_case,
    "camel_case": to_camel_case,
    "kebab_case": to_kebab_case,
    "constant_case": to_constant_case,
}


def _build_environment(root: Path) -> Environment:
    # Output is source code, not HTML: no autoescaping.  StrictUndefined makes
    # a missing context key an error instead of an empty string.
    env = Environment(
        loader=FileSystemLoader(str(root)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters.update(_FILTERS)
    return env


class TemplateRenderer:
    """Renders ``.j2`` templates to strings or straight to disk.

    Args:
        template_dir: Root of the template tree.  Defaults to the templates
            shipped with the package.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir else PACKAGED_TEMPLATES
        self.env = _build_environment(self.template_dir)

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render the template at *template_path* (relative to the root),
        e.g. ``"express/app.j2"``."""
        return self.env.get_template(template_path).render(**context)

    def render_string(self, source: str, context: dict[str, Any]) -> str:
        return self.env.from_string(source).render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render *template_path* into *output_path*, creating parent folders."""
        out = Path(output_path)
        await asyncio.to_thread(write_text, out, self.render(template_path, context))
        return out

    async def render_tree(
        self,
        template_prefix: str,
        output_dir: str | Path,
        context: dict[str, Any],
        *,
        skip_patterns: list[str] | None = None,
    ) -> list[Path]:
        """Mirror the templates below *template_prefix* into *output_dir*.

        ``vue/composables/useFetch.ts.j2`` rendered with the prefix
        ``vue/composables`` lands in ``<output_dir>/useFetch.ts``; nested
        folders are kept.  Templates whose relative path contains any of
        *skip_patterns* are left out.  A missing prefix renders nothing.
        """
        excluded = skip_patterns or []
        out_base = Path(output_dir)
        offset = len(template_prefix) + 1

        jobs = []
        for name in self.list_templates(template_prefix):
            relative = name[offset:]
            if any(pattern in relative for pattern in excluded):
                continue
            target = out_base / relative.removesuffix(TEMPLATE_SUFFIX)
            jobs.append(self.render_to_file(name, target, context))
        return list(await asyncio.gather(*jobs))

    def list_templates(self, prefix: str = "") -> list[str]:
        """Sorted template names below *prefix*, relative to the root."""
        base = self.template_dir / prefix if prefix else self.template_dir
        if not base.is_dir():
            return []
        return sorted(
            path.relative_to(self.template_dir).as_posix()
            for path in base.rglob(f"*{TEMPLATE_SUFFIX}")
        )
