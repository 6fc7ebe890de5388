"""Base class shared by every generator."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from pathlib import Path
from typing import Any

from ..config import ProjectConfig
from ..utils import load_json, print_warning, save_json, write_text
from .templates import TemplateRenderer


class BaseGenerator:
    """Writes one part of the generated project.

    Subclasses implement :meth:`generate`, which returns the list of files it
    wrote.  Generators never mutate the config they are given.

    Attributes:
        name: Short identifier used in progress output.
        config: The project being generated.
        renderer: Shared Jinja2 renderer.
        context: Template context built from *config*.
    """

    name = "base"

    def __init__(
        self,
        config: ProjectConfig,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.context: dict[str, Any] = config.template_context()

    async def generate(self) -> list[Path]:
        raise NotImplementedError

    # -- Path helpers ------------------------------------------------------

    @property
    def backend_path(self) -> Path:
        return self.config.backend_path

    @property
    def frontend_path(self) -> Path:
        return self.config.frontend_path

    @property
    def is_typescript(self) -> bool:
        return self.config.is_typescript

    @property
    def ext(self) -> str:
        return self.config.ext

    # -- Writing helpers ---------------------------------------------------

    async def create_folders(self, base: Path, folders: Iterable[str]) -> None:
        """Create every folder in *folders* below *base* concurrently."""

        async def _mkdir(d: str) -> None:
            await asyncio.to_thread((base / d).mkdir, parents=True, exist_ok=True)

        await asyncio.gather(*[_mkdir(d) for d in folders])

    async def render_files(
        self,
        base: Path,
        files: Iterable[tuple[str, str]],
        context: dict[str, Any] | None = None,
    ) -> list[Path]:
        """Render ``(template, output)`` pairs below *base*.

        Output paths may contain ``{ext}``, which is replaced by the backend
        source extension.
        """
        ctx = context if context is not None else self.context
        jobs = [
            self.renderer.render_to_file(
                template, base / output.format(ext=self.ext), ctx
            )
            for template, output in files
        ]
        return list(await asyncio.gather(*jobs))

    @staticmethod
    async def gather_files(*jobs: Awaitable[Path | list[Path] | None]) -> list[Path]:
        """Run writing coroutines concurrently and flatten their results."""
        written: list[Path] = []
        for result in await asyncio.gather(*jobs):
            if isinstance(result, list):
                written.extend(result)
            elif result is not None:
                written.append(result)
        return written

    async def write_json(self, path: Path, data: dict[str, Any]) -> Path:
        return await save_json(data, path)

    async def write_file(self, path: Path, content: str) -> Path:
        await asyncio.to_thread(write_text, path, content)
        return path

    async def merge_package_json(
        self,
        base: Path,
        *,
        dependencies: dict[str, str] | None = None,
        dev_dependencies: dict[str, str] | None = None,
        scripts: dict[str, str] | None = None,
    ) -> Path | None:
        """Merge entries into ``base/package.json``.

        Returns the path, or ``None`` (with a warning) when there is no
        package.json to update.
        """
        path = base / "package.json"
        try:
            pkg = await asyncio.to_thread(load_json, path)
        except FileNotFoundError:
            print_warning(f"package.json not found in {base}, skipping dependency update")
            return None

        for key, extra in (
            ("dependencies", dependencies),
            ("devDependencies", dev_dependencies),
            ("scripts", scripts),
        ):
            if extra:
                pkg[key] = {**pkg.get(key, {}), **extra}

        return await save_json(pkg, path)
