"""README files for the generated project."""

from __future__ import annotations

from pathlib import Path

from .base import BaseGenerator


class ReadmeGenerator(BaseGenerator):
    """Writes the root README plus per-app READMEs.

    A backend README is written for monorepos and for separate layouts with a
    frontend; a backend-only project keeps everything in the root README.
    """

    name = "README"

    async def generate(self) -> list[Path]:
        config = self.config
        files = [("readme/README.md.j2", config.root_path / "README.md")]
        if config.has_frontend:
            files.append(("readme/backend.md.j2", self.backend_path / "README.md"))
            files.append(("readme/frontend.md.j2", self.frontend_path / "README.md"))

        return await self.gather_files(
            *[self.renderer.render_to_file(t, out, self.context) for t, out in files]
        )
