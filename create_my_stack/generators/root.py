"""Files at the project root: env template, .gitignore and workspace setup."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..git import write_gitignore
from .base import BaseGenerator


def workspace_command(pm: str, project_name: str, app: str, script: str) -> str:
    """Command that runs *script* in the ``apps/<app>`` workspace.

    Yarn addresses workspaces by package name, which the app generators set
    to ``<project_name>-<app>``.
    """
    if pm == "pnpm":
        return f"pnpm --filter ./apps/{app} {script}"
    if pm == "yarn":
        return f"yarn workspace {project_name}-{app} {script}"
    return f"npm run {script} --workspace=apps/{app}"


class RootFilesGenerator(BaseGenerator):
    """Writes ``.env.example``, ``.gitignore`` and, for monorepos, the
    workspace ``package.json`` (plus ``pnpm-workspace.yaml`` for pnpm)."""

    name = "root files"

    async def generate(self) -> list[Path]:
        config = self.config
        root = config.root_path
        jobs = [
            self.renderer.render_to_file("root/env.example.j2", root / ".env.example", self.context),
            write_gitignore(
                root,
                has_env=True,
                has_prisma=config.backend.orm == "prisma",
                has_nextjs=config.frontend.framework == "nextjs",
            ),
        ]
        if config.is_monorepo:
            jobs.append(self.write_json(root / "package.json", self.package_json()))
            if config.package_manager == "pnpm":
                jobs.append(
                    self.renderer.render_to_file(
                        "root/pnpm-workspace.yaml.j2", root / "pnpm-workspace.yaml", self.context
                    )
                )
        return await self.gather_files(*jobs)

    def package_json(self) -> dict[str, Any]:
        """Workspace ``package.json`` for a monorepo."""
        pm = self.config.package_manager
        name = self.config.project_name

        def run(app: str, script: str) -> str:
            return workspace_command(pm, name, app, script)

        pkg: dict[str, Any] = {
            "name": name,
            "version": "1.0.0",
            "private": True,
            "description": self.config.description,
            "scripts": {
                "dev": (
                    'concurrently -n backend,frontend -c blue,green '
                    f'"{run("backend", "dev")}" "{run("frontend", "dev")}"'
                ),
                "dev:backend": run("backend", "dev"),
                "dev:frontend": run("frontend", "dev"),
                "build": f'{run("backend", "build")} && {run("frontend", "build")}',
                "build:backend": run("backend", "build"),
                "build:frontend": run("frontend", "build"),
                "start": run("backend", "start"),
                "lint": f'{run("backend", "lint")} && {run("frontend", "lint")}',
            },
            "devDependencies": {"concurrently": "^8.2.2"},
        }
        if pm != "pnpm":
            pkg["workspaces"] = ["apps/*"]
        return pkg
