"""Tests for the git helpers (create_my_stack.git).

Covers:
- generate_gitignore sections per flag
- write_gitignore
- init_git / create_initial_commit against a real repository
- GitError on failing commands and a missing git binary
"""

from __future__ import annotations

import shutil
from pathlib import Path
from unittest.mock import patch

import pytest

from create_my_stack.git import (
    GitError,
    _run_git,
    create_initial_commit,
    generate_gitignore,
    init_git,
    write_gitignore,
)

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


# ---------------------------------------------------------------------------
# .gitignore
# ---------------------------------------------------------------------------


class TestGenerateGitignore:
    @pytest.mark.unit
    def test_base_entries(self):
        content = generate_gitignore(has_env=False)
        assert "node_modules/" in content
        assert "dist/" in content
        assert ".DS_Store" in content
        assert ".env\n" not in content

    @pytest.mark.unit
    def test_env_section_keeps_example(self):
        content = generate_gitignore(has_env=True)
        assert "# Environment" in content
        assert "!.env.example" in content

    @pytest.mark.unit
    def test_prisma_section(self):
        assert "prisma/*.db" in generate_gitignore(has_prisma=True)
        assert "prisma/*.db" not in generate_gitignore(has_prisma=False)

    @pytest.mark.unit
    def test_nextjs_section(self):
        assert ".vercel/" in generate_gitignore(has_nextjs=True)
        assert ".vercel/" not in generate_gitignore()

    @pytest.mark.unit
    def test_ends_with_newline(self):
        assert generate_gitignore().endswith("\n")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_write_gitignore(self, tmp_path: Path):
        target = await write_gitignore(tmp_path / "app", has_prisma=True)
        assert target == tmp_path / "app" / ".gitignore"
        assert "prisma/*.db-journal" in target.read_text()


# ---------------------------------------------------------------------------
# Git commands
# ---------------------------------------------------------------------------


class TestGitCommands:
    @pytest.mark.unit
    @requires_git
    @pytest.mark.asyncio
    async def test_init_git(self, tmp_path: Path):
        await init_git(tmp_path)
        assert (tmp_path / ".git").is_dir()

    @pytest.mark.unit
    @requires_git
    @pytest.mark.asyncio
    async def test_initial_commit(self, tmp_git_repo: Path):
        (tmp_git_repo / "README.md").write_text("# hi\n")
        await create_initial_commit(tmp_git_repo, "Initial commit from test")

        stdout, _ = await _run_git("log", "--oneline", cwd=tmp_git_repo)
        assert "Initial commit from test" in stdout

    @pytest.mark.unit
    @requires_git
    @pytest.mark.asyncio
    async def test_failing_command_raises(self, tmp_path: Path):
        with pytest.raises(GitError) as exc_info:
            await _run_git("log", cwd=tmp_path)
        assert exc_info.value.command == "git log"
        assert exc_info.value.stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_git_binary(self, tmp_path: Path):
        with patch(
            "asyncio.create_subprocess_exec",
            side_effect=FileNotFoundError("git"),
        ):
            with pytest.raises(GitError, match="not found"):
                await init_git(tmp_path)
