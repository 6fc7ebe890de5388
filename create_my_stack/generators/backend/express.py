"""Express.js backend generator."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..base import BaseGenerator
from .common import eslint_config, node_tsconfig, orm_dependencies, prettier_config


class ExpressGenerator(BaseGenerator):
    """Generates an Express API in TypeScript or CommonJS JavaScript."""

    name = "Express.js"

    FOLDERS = [
        "src/routes",
        "src/controllers",
        "src/services",
        "src/middlewares",
        "src/config",
        "src/utils",
        "src/types",
    ]

    FILES = [
        ("express/index.j2", "src/index.{ext}"),
        ("express/app.j2", "src/app.{ext}"),
        ("express/routes/health.j2", "src/routes/health.{ext}"),
        ("express/routes/index.j2", "src/routes/index.{ext}"),
        ("express/controllers/health.j2", "src/controllers/health.{ext}"),
        ("express/middlewares/error.j2", "src/middlewares/error.{ext}"),
        ("express/config/index.j2", "src/config/index.{ext}"),
        ("backend_common/env.example.j2", ".env.example"),
    ]

    async def generate(self) -> list[Path]:
        base = self.backend_path
        await self.create_folders(base, self.FOLDERS)

        written = await self.render_files(base, self.FILES)
        written.append(await self.write_json(base / "package.json", self.package_json()))
        if self.is_typescript:
            written.append(await self.write_json(base / "tsconfig.json", node_tsconfig()))
        written.append(
            await self.write_json(base / ".eslintrc.json", eslint_config(self.is_typescript))
        )
        written.append(await self.write_json(base / ".prettierrc", prettier_config()))
        return written

    def package_json(self) -> dict[str, Any]:
        is_ts = self.is_typescript
        auth = self.config.backend.auth

        dependencies = {
            "express": "^4.18.2",
            "cors": "^2.8.5",
            "helmet": "^7.1.0",
            "morgan": "^1.10.0",
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
                "@types/express": "^4.17.21",
                "@types/cors": "^2.8.17",
                "@types/morgan": "^1.9.9",
                "@typescript-eslint/eslint-plugin": "^7.4.0",
                "@typescript-eslint/parser": "^7.4.0",
            })
        else:
            dev_dependencies["nodemon"] = "^3.1.0"

        if auth == "jwt":
            dependencies["jsonwebtoken"] = "^9.0.2"
            dependencies["bcryptjs"] = "^2.4.3"
            if is_ts:
                dev_dependencies["@types/jsonwebtoken"] = "^9.0.6"
                dev_dependencies["@types/bcryptjs"] = "^2.4.6"
        elif auth == "session":
            dependencies["express-session"] = "^1.18.0"
            dependencies["connect-redis"] = "^7.1.1"
            if is_ts:
                dev_dependencies["@types/express-session"] = "^1.18.0"

        dependencies.update(orm_dependencies(self.config))

        return {
            "name": f"{self.config.project_name}-backend",
            "version": "1.0.0",
            "description": f"Backend for {self.config.project_name}",
            "main": "dist/index.js" if is_ts else "src/index.js",
            "scripts": {
                "dev": "tsx watch src/index.ts" if is_ts else "nodemon src/index.js",
                "build": "tsc" if is_ts else 'echo "No build step for JavaScript"',
                "start": "node dist/index.js" if is_ts else "node src/index.js",
                "lint": f"eslint src --ext .{self.ext}",
                "format": f'prettier --write "src/**/*.{self.ext}"',
            },
            "dependencies": dependencies,
            "devDependencies": dev_dependencies,
        }
