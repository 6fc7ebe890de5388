"""Tests for ProjectOrchestrator (create_my_stack.orchestrator).

Covers:
- Step plan and step counting for different configurations
- Progress output numbering
- Directory creation per structure
- Failure semantics (existing directory, wrapped generator errors)
- Git initialisation for monorepo and separate layouts (git mocked)
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from create_my_stack.orchestrator import GenerationError, GenerationResult, ProjectOrchestrator
from create_my_stack.utils import console

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Step plan
# ---------------------------------------------------------------------------


class TestStepPlan:
    def test_full_plan(self, make_config):
        config = make_config(backend={"mailing": "nodemailer"}, init_git=True)
        orch = ProjectOrchestrator(config)
        names = [s.name for s in orch.steps()]
        assert names == [
            "directory", "root", "backend", "prisma", "mailing",
            "frontend", "docker", "readme", "git",
        ]
        assert orch.total_steps() == 9

    def test_minimal_plan(self, make_config):
        config = make_config(
            backend={"database": "none"},
            frontend={"framework": "none"},
            docker=False,
        )
        orch = ProjectOrchestrator(config)
        assert [s.name for s in orch.steps()] == ["directory", "root", "backend", "readme"]
        assert orch.total_steps() == 4

    @pytest.mark.parametrize(
        ("overrides", "expected"),
        [
            ({"backend": {"orm": "sequelize"}}, 6),
            ({"docker": False}, 6),
            ({"frontend": {"framework": "none"}}, 6),
            ({"init_git": True}, 8),
        ],
    )
    def test_total_matches_plan(self, make_config, overrides, expected):
        orch = ProjectOrchestrator(make_config(**overrides))
        assert orch.total_steps() == len(orch.steps()) == expected


# ---------------------------------------------------------------------------
# Running
# ---------------------------------------------------------------------------


class TestGenerate:
    @pytest.mark.asyncio
    async def test_generates_monorepo(self, default_config):
        with console.capture() as capture:
            result = await ProjectOrchestrator(default_config).generate()

        assert isinstance(result, GenerationResult)
        assert result.root_path == default_config.root_path
        assert result.steps_completed == [
            "directory", "root", "backend", "prisma", "frontend", "docker", "readme",
        ]
        assert result.file_count == len(result.files) > 0
        assert result.duration_seconds >= 0

        out = capture.get()
        assert "[1/7] Creating project directory..." in out
        assert "[7/7] Generating documentation..." in out
        assert "Backend generated (express)" in out

        root = default_config.root_path
        assert (root / "apps" / "backend" / "package.json").exists()
        assert (root / "apps" / "frontend" / "package.json").exists()
        assert (root / "package.json").exists()
        assert (root / "docker" / "Dockerfile.backend").exists()

    @pytest.mark.asyncio
    async def test_backend_only_writes_into_root(self, backend_only_config):
        result = await ProjectOrchestrator(backend_only_config).generate()
        root = backend_only_config.root_path
        assert (root / "src" / "index.js").exists()
        assert (root / "prisma" / "schema.prisma").exists()
        assert not (root / "apps").exists()
        assert not (root / "frontend").exists()
        assert "frontend" not in result.steps_completed

    @pytest.mark.asyncio
    async def test_existing_directory_fails_at_step_one(self, default_config):
        default_config.root_path.mkdir(parents=True)
        with console.capture() as capture:
            with pytest.raises(GenerationError) as exc_info:
                await ProjectOrchestrator(default_config).generate()

        assert exc_info.value.step == 1
        assert exc_info.value.message == "Directory test-app already exists"
        assert "Failed at step 1: Directory test-app already exists" in capture.get()

    @pytest.mark.asyncio
    async def test_generator_error_is_wrapped(self, default_config):
        orch = ProjectOrchestrator(default_config)
        with patch.object(orch, "_generate_backend", AsyncMock(side_effect=OSError("disk full"))):
            with console.capture() as capture:
                with pytest.raises(GenerationError) as exc_info:
                    await orch.generate()

        assert exc_info.value.step == 3
        assert exc_info.value.message == "disk full"
        assert isinstance(exc_info.value.__cause__, OSError)
        assert "Failed at step 3: disk full" in capture.get()
        # Steps after the failure never ran
        assert not (default_config.root_path / "README.md").exists()

    @pytest.mark.asyncio
    async def test_unknown_framework(self, default_config):
        orch = ProjectOrchestrator(default_config)
        with patch.dict("create_my_stack.orchestrator.BACKEND_GENERATORS", {}, clear=True):
            with pytest.raises(GenerationError, match="Unknown backend framework: express"):
                await orch.generate()


# ---------------------------------------------------------------------------
# Git step
# ---------------------------------------------------------------------------


class TestGitStep:
    @pytest.mark.asyncio
    async def test_monorepo_single_repository(self, make_config):
        config = make_config(init_git=True)
        init = AsyncMock()
        with patch("create_my_stack.orchestrator.init_git", init):
            result = await ProjectOrchestrator(config).generate()

        init.assert_awaited_once_with(config.root_path)
        assert result.steps_completed[-1] == "git"

    @pytest.mark.asyncio
    async def test_separate_repositories(self, separate_config):
        config = separate_config.model_copy(update={"init_git": True})
        init = AsyncMock()
        with patch("create_my_stack.orchestrator.init_git", init):
            await ProjectOrchestrator(config).generate()

        awaited = [c.args[0] for c in init.await_args_list]
        assert awaited == [config.backend_path, config.frontend_path]
        assert (config.backend_path / ".gitignore").exists()
        frontend_ignore = (config.frontend_path / ".gitignore").read_text()
        assert "node_modules/" in frontend_ignore
