"""Tests for README generation (create_my_stack.generators.readme)."""

from __future__ import annotations

import pytest

from create_my_stack.generators import ReadmeGenerator

pytestmark = pytest.mark.unit


class TestReadmeGenerator:
    @pytest.mark.asyncio
    async def test_monorepo_writes_app_readmes(self, default_config, renderer):
        written = await ReadmeGenerator(default_config, renderer).generate()
        root = default_config.root_path

        assert set(written) == {
            root / "README.md",
            root / "apps" / "backend" / "README.md",
            root / "apps" / "frontend" / "README.md",
        }
        readme = (root / "README.md").read_text()
        assert readme.startswith("# test-app\n")
        assert "├── apps/" in readme
        assert "pnpm dev:backend" in readme
        assert "docker compose -f docker-compose.dev.yml up -d" in readme

        backend = (root / "apps" / "backend" / "README.md").read_text()
        assert "# test-app - Backend" in backend
        assert "pnpm prisma:migrate" in backend

    @pytest.mark.asyncio
    async def test_backend_only_has_single_readme(self, backend_only_config, renderer):
        written = await ReadmeGenerator(backend_only_config, renderer).generate()
        root = backend_only_config.root_path

        assert written == [root / "README.md"]
        readme = (root / "README.md").read_text()
        assert "├── src/" in readme
        assert "### Frontend" not in readme
        assert "docker compose" not in readme

    @pytest.mark.asyncio
    async def test_sqlite_with_docker_skips_dev_compose(self, make_config, renderer):
        config = make_config(backend={"database": "sqlite"}, frontend={"framework": "none"})
        await ReadmeGenerator(config, renderer).generate()
        readme = (config.root_path / "README.md").read_text()

        assert "docker compose up --build" in readme
        assert "docker-compose.dev.yml" not in readme
        assert "SQLite creates the database file automatically" in readme

    @pytest.mark.asyncio
    async def test_separate_layout(self, separate_config, renderer):
        await ReadmeGenerator(separate_config, renderer).generate()
        root = separate_config.root_path

        readme = (root / "README.md").read_text()
        assert "├── backend/" in readme
        assert "cd frontend" in readme
        assert "Resend" in readme
        assert (root / "frontend" / "README.md").is_file()
