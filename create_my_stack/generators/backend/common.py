"""Pieces shared by the Express, Fastify and NestJS generators."""

from __future__ import annotations

from typing import Any

from ...config import ProjectConfig

_SQL_DRIVERS = {
    "postgresql": {"pg": "^8.11.3", "pg-hstore": "^2.3.4"},
    "mysql": {"mysql2": "^3.9.2"},
    "sqlite": {"sqlite3": "^5.1.7"},
}


def orm_dependencies(config: ProjectConfig) -> dict[str, str]:
    """Runtime dependencies for Sequelize or Mongoose.

    Prisma adds its own packages in a separate step.
    """
    orm = config.backend.orm
    if orm == "sequelize":
        return {"sequelize": "^6.37.3", **_SQL_DRIVERS.get(config.backend.database, {})}
    if orm == "mongoose":
        return {"mongoose": "^8.2.3"}
    return {}


def eslint_config(is_typescript: bool) -> dict[str, Any]:
    config: dict[str, Any] = {"root": True}
    if is_typescript:
        config["parser"] = "@typescript-eslint/parser"
        config["plugins"] = ["@typescript-eslint"]
    config["extends"] = ["eslint:recommended"]
    if is_typescript:
        config["extends"].append("plugin:@typescript-eslint/recommended")
    config["env"] = {"node": True, "es2022": True}
    config["rules"] = {"no-console": "warn"}
    if is_typescript:
        config["rules"]["@typescript-eslint/no-unused-vars"] = [
            "error",
            {"argsIgnorePattern": "^_"},
        ]
    return config


def prettier_config() -> dict[str, Any]:
    return {
        "semi": True,
        "singleQuote": True,
        "tabWidth": 2,
        "trailingComma": "es5",
        "printWidth": 100,
    }


def node_tsconfig(module: str = "NodeNext") -> dict[str, Any]:
    return {
        "compilerOptions": {
            "target": "ES2022",
            "module": module,
            "moduleResolution": module,
            "lib": ["ES2022"],
            "outDir": "./dist",
            "rootDir": "./src",
            "strict": True,
            "esModuleInterop": True,
            "skipLibCheck": True,
            "forceConsistentCasingInFileNames": True,
            "resolveJsonModule": True,
            "declaration": True,
            "sourceMap": True,
        },
        "include": ["src/**/*"],
        "exclude": ["node_modules", "dist"],
    }
