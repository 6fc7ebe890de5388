"""Helpers shared across create-my-stack.

Console output goes through the module-level rich ``console`` so tests can
capture it.  The rest covers child processes, package-manager commands,
JSON files on disk and name casing for templates.
"""

from __future__ import annotations

import asyncio
import json
import os
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Child processes
# ---------------------------------------------------------------------------


async def run_command(
    argv: list[str],
    cwd: str | Path | None = None,
    timeout: float = 120,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run *argv* without a shell and collect its output.

    *env* entries are layered over the current environment.  A process still
    running after *timeout* seconds is killed and reported with exit code
    ``-1``.

    Returns:
        ``(exit_code, stdout, stderr)`` with both streams decoded and stripped.
    """
    process = await asyncio.create_subprocess_exec(
        *argv,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
        env={**os.environ, **env} if env else None,
    )
    try:
        out, err = await asyncio.wait_for(process.communicate(), timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return -1, "", f"{' '.join(argv)} timed out after {timeout}s"

    return (
        process.returncode or 0,
        out.decode("utf-8", errors="replace").strip(),
        err.decode("utf-8", errors="replace").strip(),
    )


# ---------------------------------------------------------------------------
# Package managers
# ---------------------------------------------------------------------------

# pm -> (install, run script, exec binary, lock file)
_PACKAGE_MANAGERS: dict[str, tuple[str, str, str, str]] = {
    "npm": ("npm install", "npm run", "npx", "package-lock.json"),
    "pnpm": ("pnpm install", "pnpm", "pnpm exec", "pnpm-lock.yaml"),
    "yarn": ("yarn", "yarn", "yarn", "yarn.lock"),
}


def get_install_command(pm: str) -> str:
    return _PACKAGE_MANAGERS[pm][0]


def get_run_command(pm: str) -> str:
    """Prefix that runs a ``package.json`` script, e.g. ``npm run``."""
    return _PACKAGE_MANAGERS[pm][1]


def get_exec_command(pm: str) -> str:
    """Prefix that runs a locally installed binary, e.g. ``npx``."""
    return _PACKAGE_MANAGERS[pm][2]


def get_lock_file_name(pm: str) -> str:
    return _PACKAGE_MANAGERS[pm][3]


def get_add_command(pm: str, dev: bool = False) -> str:
    if pm == "npm":
        return "npm install --save-dev" if dev else "npm install"
    return f"{pm} add -D" if dev else f"{pm} add"


async def install_dependencies(path: str | Path, pm: str, timeout: float = 900) -> None:
    """Install the dependencies of the project at *path*.

    Raises:
        RuntimeError: The package manager exited non-zero.
    """
    argv = get_install_command(pm).split()
    code, _, stderr = await run_command(argv, cwd=path, timeout=timeout)
    if code != 0:
        detail = f": {stderr}" if stderr else ""
        raise RuntimeError(f"{' '.join(argv)} failed in {path} (exit {code}){detail}")


# ---------------------------------------------------------------------------
# Name casing (also registered as Jinja2 filters)
# ---------------------------------------------------------------------------


def _words(value: str) -> list[str]:
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", value)
    return [w for w in re.split(r"[^a-zA-Z0-9]+", spaced) if w]


def to_pascal_case(value: str) -> str:
    """``my-app`` -> ``MyApp``"""
    return "".join(w.capitalize() for w in _words(value))


def to_camel_case(value: str) -> str:
    """``my-app`` -> ``myApp``"""
    pascal = to_pascal_case(value)
    return pascal[:1].lower() + pascal[1:]


def to_kebab_case(value: str) -> str:
    """``MyApp`` -> ``my-app``"""
    return "-".join(w.lower() for w in _words(value))


def to_constant_case(value: str) -> str:
    """``my-app`` -> ``MY_APP``"""
    return "_".join(w.upper() for w in _words(value))


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def load_json(path: str | Path) -> dict[str, Any]:
    """Read a JSON object such as ``package.json``.

    Raises:
        FileNotFoundError: *path* does not exist.
        json.JSONDecodeError: The content is not JSON.
        ValueError: The top-level value is not an object.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return data


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Write *data* the way npm formats ``package.json``: two-space indent,
    non-ASCII kept as is, trailing newline."""
    target = Path(path)
    text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    await asyncio.to_thread(write_text, target, text)
    return target


def ensure_dir(path: str | Path) -> Path:
    target = Path(path)
    target.mkdir(parents=True, exist_ok=True)
    return target.resolve()


def path_exists(path: str | Path) -> bool:
    return Path(path).exists()


def format_duration(seconds: float) -> str:
    """``3.7`` -> ``3.7s``, ``65.2`` -> ``1m 5s``, ``3661`` -> ``1h 1m 1s``"""
    if seconds < 60:
        return f"{max(seconds, 0.0):.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    return f"{minutes}m {secs}s"


# ---------------------------------------------------------------------------
# Console output
# ---------------------------------------------------------------------------


def print_step(step: int, total: int, message: str) -> None:
    """Print ``[step/total] message`` after a blank line."""
    console.print()
    console.print(f"[dim]\\[{step}/{total}][/dim] [cyan]{message}[/cyan]")


def print_section(title: str) -> None:
    console.print(f"\n[bold yellow]{title}[/bold yellow]\n")


def print_success(message: str) -> None:
    console.print(f"[bold green]✓[/bold green] {message}")


def print_error(message: str) -> None:
    console.print(f"[bold red]✗[/bold red] {message}")


def print_warning(message: str) -> None:
    console.print(f"[bold yellow]⚠[/bold yellow] {message}")


def print_info(message: str) -> None:
    console.print(f"[bold blue]ℹ[/bold blue] {message}")


def print_debug(message: str) -> None:
    """Print *message* only when ``DEBUG`` is set in the environment."""
    if os.environ.get("DEBUG"):
        console.print(f"[dim]{message}[/dim]")


def print_summary_table(rows: dict[str, str], title: str = "Summary") -> None:
    """Render *rows* as an option/value table."""
    table = Table(title=title, header_style="bold cyan")
    table.add_column("Option", style="dim", no_wrap=True)
    table.add_column("Value")
    for label, value in rows.items():
        table.add_row(label, str(value))
    console.print(table)
    console.print()


def print_complete(project_name: str, package_manager: str) -> None:
    """Print the closing panel with the commands to run next."""
    commands = [
        f"cd {project_name}",
        get_install_command(package_manager),
        f"{get_run_command(package_manager)} dev",
    ]
    body = "\n".join(
        ["[white]Next steps:[/white]", ""]
        + [f"  [dim]$[/dim] [cyan]{cmd}[/cyan]" for cmd in commands]
        + ["", "[dim]For more info, check the README.md file[/dim]"]
    )
    console.print()
    console.print(
        Panel(
            body,
            title="[bold green]Project created successfully![/bold green]",
            border_style="green",
        )
    )


def create_progress() -> Progress:
    """Spinner with elapsed time, used while dependencies install."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
    )
