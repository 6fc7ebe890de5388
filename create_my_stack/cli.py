"""Command-line entry point for ``create-my-stack``.

Commands::

    create-my-stack [create] [-y] [--config FILE] [--defaults] [-o DIR] [--install]
    create-my-stack template <name> [-o DIR] [--name NAME] [-y]
    create-my-stack list

``create`` is the default command, so ``create-my-stack -y`` works too.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
import traceback
from pathlib import Path

from pydantic import ValidationError

from create_my_stack import __version__
from create_my_stack.config import (
    AUTH_STRATEGIES,
    BACKEND_FRAMEWORKS,
    DATABASES,
    FRONTEND_FRAMEWORKS,
    LANGUAGES,
    MAILING_PROVIDERS,
    ORMS,
    PACKAGE_MANAGERS,
    PROJECT_STRUCTURES,
    STATE_MANAGEMENT_REACT,
    STATE_MANAGEMENT_VUE,
    STYLING_OPTIONS,
    BackendConfig,
    FrontendConfig,
    ProjectConfig,
)
from create_my_stack.orchestrator import GenerationError, ProjectOrchestrator
from create_my_stack.prompts import confirm_generation, run_prompts, show_summary
from create_my_stack.utils import (
    console,
    create_progress,
    install_dependencies,
    print_complete,
    print_error,
    print_info,
    print_success,
)

COMMANDS = {"create", "template", "list"}

# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

# name -> (description, backend framework, frontend framework, state management)
PRESETS: dict[str, tuple[str, str, str, str]] = {
    "express-vue": ("Express + Vue 3 + Tailwind + Prisma", "express", "vue", "pinia"),
    "express-react": ("Express + React + Tailwind + Prisma", "express", "react", "none"),
    "nestjs-nextjs": ("NestJS + Next.js + Tailwind + Prisma", "nestjs", "nextjs", "none"),
    "fastify-vue": ("Fastify + Vue 3 + Tailwind + Prisma", "fastify", "vue", "pinia"),
}


def preset_config(
    name: str,
    project_name: str | None = None,
    output_dir: str | Path = ".",
) -> ProjectConfig:
    """Build the configuration for preset *name*.

    Raises:
        KeyError: If *name* is not a known preset.
    """
    _, backend, frontend, state = PRESETS[name]
    return ProjectConfig(
        project_name=project_name or f"my-{name}-app",
        backend=BackendConfig(framework=backend, database="postgresql", orm="prisma"),
        frontend=FrontendConfig(framework=frontend, styling="tailwind", state_management=state),
        output_dir=Path(output_dir),
    )


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def install_targets(config: ProjectConfig) -> list[Path]:
    """Directories in which ``--install`` runs the package manager."""
    if config.is_monorepo or not config.has_frontend:
        return [config.root_path]
    return [config.backend_path, config.frontend_path]


async def _generate(config: ProjectConfig, install: bool) -> None:
    orchestrator = ProjectOrchestrator(config)
    await orchestrator.generate()

    if install:
        pm = config.package_manager
        with create_progress() as progress:
            for target in install_targets(config):
                task = progress.add_task(f"Installing dependencies in {target.name}...")
                await install_dependencies(target, pm)
                progress.remove_task(task)
        print_success("Dependencies installed")

    print_complete(config.project_name, config.package_manager)


def _confirm_and_generate(config: ProjectConfig, *, yes: bool, install: bool = False) -> int:
    show_summary(config)
    if not yes and not confirm_generation():
        console.print("\n[yellow]Generation cancelled. Goodbye![/yellow]")
        return 0
    console.print()
    asyncio.run(_generate(config, install))
    return 0


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_create(args: argparse.Namespace) -> int:
    if args.config:
        config = ProjectConfig.load(Path(args.config))
        if args.output:
            config = config.model_copy(update={"output_dir": Path(args.output)})
    elif args.defaults:
        config = ProjectConfig.from_env()
        if args.output:
            config = config.model_copy(update={"output_dir": Path(args.output)})
    else:
        config = run_prompts(output_dir=args.output or ".")
    return _confirm_and_generate(config, yes=args.yes, install=args.install)


def cmd_template(args: argparse.Namespace) -> int:
    if args.name not in PRESETS:
        print_error(f"Unknown template: {args.name}")
        console.print("\n[yellow]Available templates:[/yellow]")
        for name, (description, *_rest) in PRESETS.items():
            console.print(f"  [dim]-[/dim] {name} [dim]({description})[/dim]")
        return 1

    console.print(f"\n[cyan]Generating from template: {args.name}[/cyan]")
    console.print(f"[dim]{PRESETS[args.name][0]}[/dim]\n")
    config = preset_config(args.name, args.project_name, args.output)
    return _confirm_and_generate(config, yes=args.yes)


def cmd_list(args: argparse.Namespace) -> int:
    sections = [
        ("Backend Frameworks", BACKEND_FRAMEWORKS),
        ("Languages", LANGUAGES),
        ("Databases", DATABASES),
        ("ORMs", ORMS),
        ("Authentication", AUTH_STRATEGIES),
        ("Mailing", MAILING_PROVIDERS),
        ("Frontend Frameworks", FRONTEND_FRAMEWORKS),
        ("Styling", STYLING_OPTIONS),
        ("State Management (Vue)", STATE_MANAGEMENT_VUE),
        ("State Management (React / Next.js)", STATE_MANAGEMENT_REACT),
        ("Project Structures", PROJECT_STRUCTURES),
        ("Package Managers", PACKAGE_MANAGERS),
    ]
    console.print("\n[bold cyan]Available Options[/bold cyan]")
    for title, choices in sections:
        console.print(f"\n[yellow]{title}:[/yellow]")
        for choice in choices:
            console.print(f"  • {choice.label}")
    console.print("\n[yellow]Templates:[/yellow]")
    for name, (description, *_rest) in PRESETS.items():
        console.print(f"  • {name} - {description}")
    console.print()
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-my-stack",
        description="CLI generator for fullstack boilerplate projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-my-stack\n"
            "  create-my-stack --config stack.json --yes --install\n"
            "  create-my-stack template nestjs-nextjs --name my-app\n"
            "  create-my-stack list\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    create = sub.add_parser("create", help="Create a project interactively (default)")
    create.add_argument("-y", "--yes", action="store_true", help="Skip confirmation prompt")
    create.add_argument(
        "--config",
        default=None,
        help="Load the project configuration from a JSON file instead of prompting",
    )
    create.add_argument(
        "--defaults",
        action="store_true",
        help="Skip the prompts and use defaults (overridable with CMS_* environment variables)",
    )
    create.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: current directory)",
    )
    create.add_argument(
        "--install",
        action="store_true",
        help="Install dependencies after generating",
    )
    create.set_defaults(func=cmd_create)

    template = sub.add_parser("template", help="Generate from a predefined template")
    template.add_argument("name", help="Template name, e.g. express-vue")
    template.add_argument("--output", "-o", default=".", help="Output directory (default: .)")
    template.add_argument("--name", dest="project_name", default=None, help="Project name")
    template.add_argument("-y", "--yes", action="store_true", help="Skip confirmation prompt")
    template.set_defaults(func=cmd_template)

    list_cmd = sub.add_parser("list", help="List all available options")
    list_cmd.set_defaults(func=cmd_list)

    return parser


def run(argv: list[str] | None = None) -> int:
    """Parse *argv*, run the command and return the exit code."""
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ("-h", "--help", "--version")):
        argv.insert(0, "create")

    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Generation cancelled. Goodbye![/yellow]")
        return 0
    except ValidationError as exc:
        print_error("Invalid configuration:")
        for err in exc.errors():
            loc = ".".join(str(part) for part in err["loc"]) or "config"
            print_info(f"{loc}: {err['msg']}")
        return 1
    except GenerationError:
        # Already reported by the orchestrator as "Failed at step N"
        if os.environ.get("DEBUG"):
            traceback.print_exc()
        return 1
    except Exception as exc:
        print_error(str(exc) or "An unexpected error occurred")
        if os.environ.get("DEBUG"):
            traceback.print_exc()
        return 1


def main() -> None:
    """Console-script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
