"""Shared pytest fixtures for the create-my-stack test suite.

Provides reusable fixtures for:
- Temporary output directories
- Project configurations for the common stack combinations
- A real TemplateRenderer
- A real git repository
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from create_my_stack.config import BackendConfig, FrontendConfig, ProjectConfig
from create_my_stack.generators.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory the generated project is written into."""
    out = tmp_path / "out"
    out.mkdir()
    yield out


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Temporary git repository with local identity configured."""
    repo_dir = tmp_path / "test-repo"
    repo_dir.mkdir()
    subprocess.run(["git", "init"], cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(
        ["git", "config", "user.email", "test@create-my-stack.local"],
        cwd=repo_dir, check=True, capture_output=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Create My Stack Test"],
        cwd=repo_dir, check=True, capture_output=True,
    )
    subprocess.run(
        ["git", "config", "commit.gpgsign", "false"],
        cwd=repo_dir, check=True, capture_output=True,
    )
    yield repo_dir


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config(output_dir: Path) -> Callable[..., ProjectConfig]:
    """Factory for ``ProjectConfig`` objects rooted in *output_dir*.

    Keyword arguments named ``backend`` / ``frontend`` may be dicts; git is
    disabled unless asked for.
    """

    def _make(
        backend: dict[str, Any] | None = None,
        frontend: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> ProjectConfig:
        kwargs.setdefault("project_name", "test-app")
        kwargs.setdefault("init_git", False)
        kwargs.setdefault("output_dir", output_dir)
        return ProjectConfig(
            backend=BackendConfig(**(backend or {})),
            frontend=FrontendConfig(**(frontend or {})),
            **kwargs,
        )

    return _make


@pytest.fixture
def default_config(make_config) -> ProjectConfig:
    """Express + TypeScript + PostgreSQL/Prisma + React/Tailwind monorepo."""
    return make_config()


@pytest.fixture
def backend_only_config(make_config) -> ProjectConfig:
    """Express + JavaScript + SQLite/Prisma with no frontend."""
    return make_config(
        backend={"language": "javascript", "database": "sqlite"},
        frontend={"framework": "none"},
        docker=False,
    )


@pytest.fixture
def separate_config(make_config) -> ProjectConfig:
    """Fastify + Vue in separate repositories."""
    return make_config(
        backend={"framework": "fastify", "auth": "session", "mailing": "resend"},
        frontend={"framework": "vue", "styling": "scss", "state_management": "pinia"},
        structure="separate",
        package_manager="npm",
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer bound to the packaged templates."""
    return TemplateRenderer()
