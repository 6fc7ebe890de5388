"""Git helpers for generated projects.

Initialises repositories, creates the first commit and writes ``.gitignore``
files tailored to the selected stack.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from .utils import write_text


class GitError(Exception):
    """Raised when a git command fails."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


async def _run_git(
    *args: str,
    cwd: str | Path | None = None,
    timeout: float = 60.0,
) -> tuple[str, str]:
    """Run a git command asynchronously and return (stdout, stderr).

    Raises GitError if git is missing, times out or exits non-zero.
    """
    cmd = ["git"] + list(args)
    cmd_str = " ".join(cmd)

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
        )
    except FileNotFoundError as exc:
        raise GitError("git executable not found on PATH", command=cmd_str) from exc

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        raise GitError(
            f"Git command timed out after {timeout}s: {cmd_str}",
            command=cmd_str,
        )

    stdout = stdout_bytes.decode("utf-8", errors="replace").strip()
    stderr = stderr_bytes.decode("utf-8", errors="replace").strip()

    if process.returncode != 0:
        raise GitError(
            f"Git command failed (exit {process.returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )

    return stdout, stderr


async def init_git(path: str | Path) -> None:
    """Run ``git init`` in *path*."""
    await _run_git("init", cwd=path)


async def create_initial_commit(path: str | Path, message: str = "Initial commit") -> None:
    """Stage everything in *path* and commit it."""
    await _run_git("add", ".", cwd=path)
    await _run_git("commit", "-m", message, cwd=path)


# ---------------------------------------------------------------------------
# .gitignore
# ---------------------------------------------------------------------------

_BASE_IGNORE = [
    "# Dependencies",
    "node_modules/",
    "",
    "# Build outputs",
    "dist/",
    "build/",
    ".next/",
    "out/",
    "",
    "# IDE",
    ".idea/",
    ".vscode/",
    "*.swp",
    "*.swo",
    "",
    "# OS",
    ".DS_Store",
    "Thumbs.db",
    "",
    "# Logs",
    "logs/",
    "*.log",
    "npm-debug.log*",
    "yarn-debug.log*",
    "yarn-error.log*",
    "pnpm-debug.log*",
    "",
    "# Test coverage",
    "coverage/",
    ".nyc_output/",
]


def generate_gitignore(
    has_env: bool = True,
    has_prisma: bool = False,
    has_nextjs: bool = False,
) -> str:
    """Return ``.gitignore`` content for a Node project."""
    lines = list(_BASE_IGNORE)
    if has_env:
        lines += ["", "# Environment", ".env", ".env.local", ".env.*.local", "!.env.example"]
    if has_prisma:
        lines += ["", "# Prisma", "prisma/*.db", "prisma/*.db-journal"]
    if has_nextjs:
        lines += ["", "# Next.js", ".next/", "out/", ".vercel/"]
    lines += ["", "# Misc", "*.tgz", ".cache/", ".temp/", ".tmp/", ""]
    return "\n".join(lines)


async def write_gitignore(
    path: str | Path,
    *,
    has_env: bool = True,
    has_prisma: bool = False,
    has_nextjs: bool = False,
) -> Path:
    """Write a ``.gitignore`` into directory *path*."""
    target = Path(path) / ".gitignore"
    content = generate_gitignore(has_env=has_env, has_prisma=has_prisma, has_nextjs=has_nextjs)
    await asyncio.to_thread(write_text, target, content)
    return target
