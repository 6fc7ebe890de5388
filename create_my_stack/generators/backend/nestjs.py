"""NestJS backend generator.

NestJS projects are always TypeScript; ``ProjectConfig`` forces the language
when NestJS is selected.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..base import BaseGenerator
from .common import orm_dependencies


class NestJSGenerator(BaseGenerator):
    """Generates a NestJS app with config, terminus health checks and common helpers."""

    name = "NestJS"

    FOLDERS = [
        "src/common/decorators",
        "src/common/filters",
        "src/common/guards",
        "src/common/interceptors",
        "src/common/pipes",
        "src/config",
        "src/health",
        "src/modules",
    ]

    FILES = [
        ("nestjs/main.j2", "src/main.ts"),
        ("nestjs/app.module.j2", "src/app.module.ts"),
        ("nestjs/app.controller.j2", "src/app.controller.ts"),
        ("nestjs/app.service.j2", "src/app.service.ts"),
        ("nestjs/health/health.module.j2", "src/health/health.module.ts"),
        ("nestjs/health/health.controller.j2", "src/health/health.controller.ts"),
        ("nestjs/config/configuration.j2", "src/config/configuration.ts"),
        ("nestjs/common/http-exception.filter.j2", "src/common/filters/http-exception.filter.ts"),
        ("nestjs/common/transform.interceptor.j2", "src/common/interceptors/transform.interceptor.ts"),
        ("backend_common/env.example.j2", ".env.example"),
    ]

    @property
    def is_typescript(self) -> bool:
        return True

    @property
    def ext(self) -> str:
        return "ts"

    async def generate(self) -> list[Path]:
        base = self.backend_path
        await self.create_folders(base, self.FOLDERS)

        written = await self.render_files(base, self.FILES)
        for name, data in (
            ("package.json", self.package_json()),
            ("tsconfig.json", _TSCONFIG),
            ("tsconfig.build.json", _TSCONFIG_BUILD),
            ("nest-cli.json", _NEST_CLI),
            (".eslintrc.json", _ESLINT),
            (".prettierrc", {"singleQuote": True, "trailingComma": "all"}),
        ):
            written.append(await self.write_json(base / name, data))
        return written

    def package_json(self) -> dict[str, Any]:
        dependencies = {
            "@nestjs/common": "^10.3.3",
            "@nestjs/core": "^10.3.3",
            "@nestjs/platform-express": "^10.3.3",
            "@nestjs/config": "^3.2.0",
            "@nestjs/terminus": "^10.2.3",
            "class-transformer": "^0.5.1",
            "class-validator": "^0.14.1",
            "reflect-metadata": "^0.2.1",
            "rxjs": "^7.8.1",
        }
        dev_dependencies = {
            "@nestjs/cli": "^10.3.2",
            "@nestjs/schematics": "^10.1.1",
            "@nestjs/testing": "^10.3.3",
            "@types/express": "^4.17.21",
            "@types/node": "^20.11.30",
            "@typescript-eslint/eslint-plugin": "^7.4.0",
            "@typescript-eslint/parser": "^7.4.0",
            "eslint": "^8.57.0",
            "eslint-config-prettier": "^9.1.0",
            "eslint-plugin-prettier": "^5.1.3",
            "prettier": "^3.2.5",
            "source-map-support": "^0.5.21",
            "ts-loader": "^9.5.1",
            "ts-node": "^10.9.2",
            "tsconfig-paths": "^4.2.0",
            "typescript": "^5.4.3",
        }

        if self.config.backend.auth == "jwt":
            dependencies.update({
                "@nestjs/jwt": "^10.2.0",
                "@nestjs/passport": "^10.0.3",
                "passport": "^0.7.0",
                "passport-jwt": "^4.0.1",
                "bcryptjs": "^2.4.3",
            })
            dev_dependencies["@types/passport-jwt"] = "^4.0.1"
            dev_dependencies["@types/bcryptjs"] = "^2.4.6"
        elif self.config.backend.auth == "session":
            dependencies["express-session"] = "^1.18.0"
            dependencies["connect-redis"] = "^7.1.1"
            dev_dependencies["@types/express-session"] = "^1.18.0"

        dependencies.update(orm_dependencies(self.config))

        return {
            "name": f"{self.config.project_name}-backend",
            "version": "1.0.0",
            "description": f"Backend for {self.config.project_name}",
            "scripts": {
                "build": "nest build",
                "format": 'prettier --write "src/**/*.ts" "test/**/*.ts"',
                "start": "nest start",
                "dev": "nest start --watch",
                "start:debug": "nest start --debug --watch",
                "start:prod": "node dist/main",
                "lint": 'eslint "{src,apps,libs,test}/**/*.ts" --fix',
                "test": "jest",
                "test:watch": "jest --watch",
                "test:cov": "jest --coverage",
                "test:e2e": "jest --config ./test/jest-e2e.json",
            },
            "dependencies": dependencies,
            "devDependencies": dev_dependencies,
        }


_TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "module": "commonjs",
        "declaration": True,
        "removeComments": True,
        "emitDecoratorMetadata": True,
        "experimentalDecorators": True,
        "allowSyntheticDefaultImports": True,
        "target": "ES2021",
        "sourceMap": True,
        "outDir": "./dist",
        "baseUrl": "./",
        "incremental": True,
        "skipLibCheck": True,
        "strictNullChecks": True,
        "noImplicitAny": True,
        "strictBindCallApply": True,
        "forceConsistentCasingInFileNames": True,
        "noFallthroughCasesInSwitch": True,
        "paths": {"@/*": ["src/*"]},
    },
}

_TSCONFIG_BUILD: dict[str, Any] = {
    "extends": "./tsconfig.json",
    "exclude": ["node_modules", "test", "dist", "**/*spec.ts"],
}

_NEST_CLI: dict[str, Any] = {
    "$schema": "https://json.schemastore.org/nest-cli",
    "collection": "@nestjs/schematics",
    "sourceRoot": "src",
    "compilerOptions": {"deleteOutDir": True},
}

_ESLINT: dict[str, Any] = {
    "parser": "@typescript-eslint/parser",
    "parserOptions": {
        "project": "tsconfig.json",
        "sourceType": "module",
    },
    "plugins": ["@typescript-eslint/eslint-plugin"],
    "extends": [
        "plugin:@typescript-eslint/recommended",
        "plugin:prettier/recommended",
    ],
    "root": True,
    "env": {"node": True, "jest": True},
    "ignorePatterns": [".eslintrc.js"],
    "rules": {
        "@typescript-eslint/interface-name-prefix": "off",
        "@typescript-eslint/explicit-function-return-type": "off",
        "@typescript-eslint/explicit-module-boundary-types": "off",
        "@typescript-eslint/no-explicit-any": "off",
    },
}
