"""Dockerfiles, Docker Compose files and nginx configuration.

Writes ``docker/Dockerfile.backend`` (and ``docker/Dockerfile.frontend``
when there is a frontend), a production ``docker-compose.yml`` with an nginx
reverse proxy, and a ``docker-compose.dev.yml`` that only runs the backing
services (database, Redis) so the apps can run locally.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from .base import BaseGenerator

_DB_VOLUMES = {
    "postgresql": "postgres_data",
    "mysql": "mysql_data",
    "mongodb": "mongodb_data",
}


class DockerGenerator(BaseGenerator):
    """Generates container configuration for the project root."""

    name = "Docker"

    # Template name -> (label, output file name)
    _COMPOSE_FILES: dict[str, tuple[str, str]] = {
        "docker/docker-compose.yml.j2": ("production", "docker-compose.yml"),
        "docker/docker-compose.dev.yml.j2": ("development", "docker-compose.dev.yml"),
    }

    async def generate(self) -> list[Path]:
        if not self.config.docker:
            return []

        root = self.config.root_path
        context = self.docker_context()

        files = [
            ("docker/Dockerfile.backend.j2", root / "docker" / "Dockerfile.backend"),
            ("docker/nginx.conf.j2", root / "docker" / "nginx.conf"),
            ("docker/dockerignore.j2", root / ".dockerignore"),
        ]
        if self.config.has_frontend:
            files.append(("docker/Dockerfile.frontend.j2", root / "docker" / "Dockerfile.frontend"))
            if self.config.frontend.framework != "nextjs":
                # Served by nginx inside the frontend image, so it must live in that build context
                files.append(("docker/nginx.frontend.conf.j2", self.frontend_path / "nginx.conf"))
        if self.config.is_monorepo:
            files.append(("docker/dockerignore.j2", self.backend_path / ".dockerignore"))
            if self.config.has_frontend:
                files.append(("docker/dockerignore.j2", self.frontend_path / ".dockerignore"))

        compose = await self.generate_compose_files(root, context)
        return await self.gather_files(
            *[self.renderer.render_to_file(t, out, context) for t, out in files],
        ) + list(compose.values())

    async def generate_compose_files(
        self,
        output_dir: Path,
        context: dict[str, Any],
    ) -> dict[str, Path]:
        """Render the Compose files into *output_dir*.

        Returns:
            Mapping of descriptive label to written path, e.g.
            ``{"production": Path(".../docker-compose.yml")}``.  The
            development file is skipped when there is no service to run.
        """
        result: dict[str, Path] = {}
        for template_name, (label, output_name) in self._COMPOSE_FILES.items():
            if label == "development" and not context["has_services"]:
                continue
            result[label] = await self.renderer.render_to_file(
                template_name, output_dir / output_name, context
            )
        return result

    def docker_context(self) -> dict[str, Any]:
        """Template context with the Docker-specific values added."""
        config = self.config
        root = config.root_path
        backend = config.backend
        is_nest = backend.framework == "nestjs"
        db_volume = _DB_VOLUMES.get(backend.database)

        if config.is_typescript:
            backend_entry = "dist/main.js" if is_nest else "dist/index.js"
        else:
            backend_entry = "src/index.js"

        context = {
            **self.context,
            "container_prefix": config.project_name.lstrip("@").replace("/", "-"),
            "db_volume": db_volume,
            "has_services": bool(db_volume) or backend.auth == "session",
            "health_path": "/api/health" if is_nest else "/health",
            "backend_entry": backend_entry,
            "backend_context": _compose_path(root, self.backend_path),
            "backend_dockerfile": _relative(root / "docker" / "Dockerfile.backend", self.backend_path),
            "frontend_container_port": (
                config.frontend.port if config.frontend.framework == "nextjs" else 80
            ),
        }
        if config.has_frontend:
            context["frontend_context"] = _compose_path(root, self.frontend_path)
            context["frontend_dockerfile"] = _relative(
                root / "docker" / "Dockerfile.frontend", self.frontend_path
            )
        return context


def _relative(target: Path, start: Path) -> str:
    return Path(os.path.relpath(target, start)).as_posix()


def _compose_path(root: Path, path: Path) -> str:
    rel = _relative(path, root)
    return "." if rel == "." else f"./{rel}"
