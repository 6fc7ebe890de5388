"""Integration tests for full project generation.

These tests run the real orchestrator with the packaged templates for several
stack combinations and check that the generated project is well formed: every
JSON config parses, every Compose file is valid YAML and no Jinja2 syntax
leaks into the output.

No external services (Docker, git, package managers) are required.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from create_my_stack.config import ProjectConfig
from create_my_stack.orchestrator import GenerationResult, ProjectOrchestrator
from create_my_stack.utils import console


# ---------------------------------------------------------------------------
# Stacks
# ---------------------------------------------------------------------------

STACKS: dict[str, dict] = {
    "express-react-monorepo": {},
    "fastify-vue-separate": {
        "backend": {
            "framework": "fastify",
            "language": "javascript",
            "database": "mongodb",
            "orm": "mongoose",
            "auth": "session",
            "mailing": "resend",
        },
        "frontend": {"framework": "vue", "styling": "scss", "state_management": "pinia"},
        "structure": "separate",
        "package_manager": "npm",
    },
    "nestjs-nextjs-monorepo": {
        "backend": {"framework": "nestjs", "database": "mysql", "mailing": "nodemailer"},
        "frontend": {"framework": "nextjs", "state_management": "redux"},
        "package_manager": "yarn",
    },
    "express-backend-only": {
        "backend": {"language": "javascript", "database": "sqlite", "auth": "none"},
        "frontend": {"framework": "none"},
        "docker": False,
    },
}

_JSON_NAMES = {"package.json", ".eslintrc.json", ".prettierrc", "nest-cli.json"}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _generate(make_config, stack: str) -> tuple[ProjectConfig, GenerationResult]:
    options = dict(STACKS[stack])
    config = make_config(
        backend=options.pop("backend", None),
        frontend=options.pop("frontend", None),
        project_name=stack,
        **options,
    )
    with console.capture():
        result = await ProjectOrchestrator(config).generate()
    return config, result


def _json_files(root: Path) -> list[Path]:
    return sorted(
        p for p in root.rglob("*")
        if p.is_file() and (p.name in _JSON_NAMES or p.name.startswith("tsconfig"))
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestGeneratedProjects:
    """Generate each stack and validate the result."""

    @pytest.mark.parametrize("stack", sorted(STACKS))
    async def test_every_written_file_exists(self, make_config, stack: str) -> None:
        config, result = await _generate(make_config, stack)

        assert result.root_path == config.root_path
        assert result.file_count > 0
        for path in result.files:
            assert path.is_file(), f"Reported file was not written: {path}"
            assert config.root_path in path.parents
        assert (config.root_path / "README.md").is_file()
        assert (config.backend_path / "package.json").is_file()

    @pytest.mark.parametrize("stack", sorted(STACKS))
    async def test_json_files_parse(self, make_config, stack: str) -> None:
        config, _ = await _generate(make_config, stack)

        files = _json_files(config.root_path)
        assert files, "No JSON configuration files were generated"
        for path in files:
            try:
                json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                pytest.fail(f"{path.relative_to(config.root_path)} is not valid JSON: {exc}")

    @pytest.mark.parametrize("stack", sorted(STACKS))
    async def test_no_template_syntax_left(self, make_config, stack: str) -> None:
        config, result = await _generate(make_config, stack)

        for path in result.files:
            content = path.read_text(encoding="utf-8")
            assert "{%" not in content, f"Unrendered block in {path}"

    @pytest.mark.parametrize(
        "stack", [s for s in sorted(STACKS) if STACKS[s].get("docker", True)]
    )
    async def test_compose_files_are_valid_yaml(self, make_config, stack: str) -> None:
        config, _ = await _generate(make_config, stack)

        compose_files = sorted(config.root_path.glob("docker-compose*.yml"))
        assert compose_files, "No Compose files were generated"
        for path in compose_files:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
            assert isinstance(parsed, dict), f"{path.name} is not a YAML mapping"
            assert parsed.get("services"), f"{path.name} has no services defined"
            for name, service in parsed["services"].items():
                assert "networks" in service, f"{path.name}: {name} has no network"


@pytest.mark.integration
class TestStackSpecifics:
    """Spot checks that the chosen options reach the generated project."""

    async def test_monorepo_workspace(self, make_config) -> None:
        config, result = await _generate(make_config, "express-react-monorepo")
        root = config.root_path

        assert result.steps_completed == [
            "directory", "root", "backend", "prisma", "frontend", "docker", "readme",
        ]
        assert (root / "pnpm-workspace.yaml").is_file()
        assert (root / "apps" / "backend" / "prisma" / "schema.prisma").is_file()
        assert (root / "apps" / "frontend" / "src" / "App.tsx").is_file()

    async def test_separate_fastify_vue(self, make_config) -> None:
        config, result = await _generate(make_config, "fastify-vue-separate")
        root = config.root_path

        assert "mailing" in result.steps_completed
        assert "prisma" not in result.steps_completed
        assert not (root / "package.json").exists()
        backend_pkg = json.loads((root / "backend" / "package.json").read_text())
        assert backend_pkg["type"] == "module"
        assert "mongoose" in backend_pkg["dependencies"]
        assert "resend" in backend_pkg["dependencies"]
        assert (root / "frontend" / "src" / "stores" / "index.ts").is_file()
        assert (root / "frontend" / "src" / "assets" / "main.scss").is_file()

    async def test_nestjs_nextjs(self, make_config) -> None:
        config, _ = await _generate(make_config, "nestjs-nextjs-monorepo")
        root = config.root_path

        root_pkg = json.loads((root / "package.json").read_text())
        assert root_pkg["workspaces"] == ["apps/*"]
        assert root_pkg["scripts"]["dev:backend"] == (
            "yarn workspace nestjs-nextjs-monorepo-backend dev"
        )
        assert (root / "apps" / "backend" / "nest-cli.json").is_file()
        assert (root / "apps" / "frontend" / "src" / "app" / "providers.tsx").is_file()
        schema = (root / "apps" / "backend" / "prisma" / "schema.prisma").read_text()
        assert 'provider = "mysql"' in schema

    async def test_backend_only(self, make_config) -> None:
        config, result = await _generate(make_config, "express-backend-only")
        root = config.root_path

        assert config.backend_path == root
        assert "docker" not in result.steps_completed
        assert "frontend" not in result.steps_completed
        assert (root / "src" / "index.js").is_file()
        assert not (root / "apps").exists()
        assert not (root / "docker-compose.yml").exists()
