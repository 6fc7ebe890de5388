"""Fastify backend generator (ES modules)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..base import BaseGenerator
from .common import eslint_config, node_tsconfig, orm_dependencies, prettier_config


class FastifyGenerator(BaseGenerator):
    """Generates a Fastify API built around a ``buildApp()`` factory."""

    name = "Fastify"

    FOLDERS = [
        "src/routes",
        "src/plugins",
        "src/services",
        "src/schemas",
        "src/config",
        "src/utils",
        "src/types",
    ]

    FILES = [
        ("fastify/index.j2", "src/index.{ext}"),
        ("fastify/app.j2", "src/app.{ext}"),
        ("fastify/routes/health.j2", "src/routes/health.{ext}"),
        ("fastify/routes/index.j2", "src/routes/index.{ext}"),
        ("fastify/plugins/index.j2", "src/plugins/index.{ext}"),
        ("fastify/schemas/health.j2", "src/schemas/health.{ext}"),
        ("fastify/config/index.j2", "src/config/index.{ext}"),
        ("backend_common/env.example.j2", ".env.example"),
    ]

    async def generate(self) -> list[Path]:
        base = self.backend_path
        await self.create_folders(base, self.FOLDERS)

        written = await self.render_files(base, self.FILES)
        written.append(await self.write_json(base / "package.json", self.package_json()))
        if self.is_typescript:
            written.append(await self.write_json(base / "tsconfig.json", node_tsconfig()))

        eslint = eslint_config(self.is_typescript)
        eslint["parserOptions"] = {"sourceType": "module"}
        written.append(await self.write_json(base / ".eslintrc.json", eslint))
        written.append(await self.write_json(base / ".prettierrc", prettier_config()))
        return written

    def package_json(self) -> dict[str, Any]:
        is_ts = self.is_typescript
        auth = self.config.backend.auth

        dependencies = {
            "fastify": "^4.26.2",
            "@fastify/cors": "^9.0.1",
            "@fastify/helmet": "^11.1.1",
            "@fastify/sensible": "^5.6.0",
            "@fastify/env": "^4.3.0",
            "fastify-plugin": "^4.5.1",
            "dotenv": "^16.4.5",
        }
        dev_dependencies = {
            "@types/node": "^20.11.30",
            "eslint": "^8.57.0",
            "prettier": "^3.2.5",
        }

        if is_ts:
            dev_dependencies.update({
                "typescript": "^5.4.3",
                "tsx": "^4.7.1",
                "@typescript-eslint/eslint-plugin": "^7.4.0",
                "@typescript-eslint/parser": "^7.4.0",
            })
        else:
            dev_dependencies["nodemon"] = "^3.1.0"

        if auth == "jwt":
            dependencies["@fastify/jwt"] = "^8.0.0"
            dependencies["bcryptjs"] = "^2.4.3"
            if is_ts:
                dev_dependencies["@types/bcryptjs"] = "^2.4.6"
        elif auth == "session":
            dependencies["@fastify/cookie"] = "^9.3.1"
            dependencies["@fastify/session"] = "^10.7.0"

        dependencies.update(orm_dependencies(self.config))

        return {
            "name": f"{self.config.project_name}-backend",
            "version": "1.0.0",
            "description": f"Backend for {self.config.project_name}",
            "main": "dist/index.js" if is_ts else "src/index.js",
            "type": "module",
            "scripts": {
                "dev": "tsx watch src/index.ts" if is_ts else "nodemon src/index.js",
                "build": "tsc" if is_ts else 'echo "No build step"',
                "start": "node dist/index.js" if is_ts else "node src/index.js",
                "lint": f"eslint src --ext .{self.ext}",
                "format": f'prettier --write "src/**/*.{self.ext}"',
            },
            "dependencies": dependencies,
            "devDependencies": dev_dependencies,
        }
