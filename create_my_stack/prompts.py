"""Interactive prompts that build a :class:`ProjectConfig`.

Questions are asked with ``rich.prompt`` in four groups: project info,
backend, frontend and structure.  Questions that do not apply to earlier
answers (language for NestJS, ORM without a database, frontend details
without a frontend) are skipped.
"""

from __future__ import annotations

from pathlib import Path

from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt

from create_my_stack.config import (
    AUTH_STRATEGIES,
    BACKEND_FRAMEWORKS,
    DATABASES,
    DEFAULT_BACKEND_PORT,
    DEFAULT_DESCRIPTION,
    DEFAULT_FRONTEND_PORT,
    DEFAULT_PROJECT_NAME,
    FRONTEND_FRAMEWORKS,
    LANGUAGES,
    MAILING_PROVIDERS,
    ORMS,
    PACKAGE_MANAGERS,
    PROJECT_STRUCTURES,
    STYLING_OPTIONS,
    BackendConfig,
    FrontendConfig,
    ProjectConfig,
    PromptChoice,
    get_compatible_orms,
    get_state_management_options,
    validate_project_name,
)
from create_my_stack.utils import console, print_error, print_section, print_summary_table

_BANNER = """\
[bold cyan]create-my-stack[/bold cyan]
[dim]Fullstack Boilerplate Generator[/dim]"""


def show_banner() -> None:
    console.print(Panel(_BANNER, border_style="cyan", expand=False, padding=(1, 6)))


# ---------------------------------------------------------------------------
# Prompt helpers
# ---------------------------------------------------------------------------


def _select(message: str, choices: list[PromptChoice], default: str | None = None) -> str:
    """Print *choices* as a list and ask for one of their values."""
    console.print(f"[bold]{message}[/bold]")
    for choice in choices:
        console.print(f"  [cyan]{choice.value:<12}[/cyan] [dim]{choice.label}[/dim]")
    values = [c.value for c in choices]
    return Prompt.ask(
        message,
        choices=values,
        default=default if default in values else values[0],
        console=console,
    )


def _ask_port(message: str, default: int) -> int:
    while True:
        port = IntPrompt.ask(message, default=default, console=console)
        if 1 <= port <= 65535:
            return port
        print_error("Port must be between 1 and 65535")


def _ask_project_name() -> str:
    while True:
        name = Prompt.ask("Project name", default=DEFAULT_PROJECT_NAME, console=console)
        error = validate_project_name(name)
        if error is None:
            return name
        print_error(error)


# ---------------------------------------------------------------------------
# Main flow
# ---------------------------------------------------------------------------


def run_prompts(output_dir: str | Path = ".") -> ProjectConfig:
    """Ask every question and return the resulting configuration.

    Raises:
        KeyboardInterrupt: If the user aborts a prompt.
    """
    show_banner()

    print_section("Project Information")
    project_name = _ask_project_name()
    description = Prompt.ask("Project description", default=DEFAULT_DESCRIPTION, console=console)

    print_section("Backend Configuration")
    framework = _select("Backend framework", BACKEND_FRAMEWORKS)
    language = "typescript"
    if framework != "nestjs":
        language = _select("Language", LANGUAGES)
    database = _select("Database", DATABASES)
    orm = "none"
    if database != "none":
        compatible = get_compatible_orms(database)
        orm = _select("ORM/ODM", [o for o in ORMS if o.value in compatible])
    auth = _select("Authentication", AUTH_STRATEGIES)
    mailing = _select("Mailing provider", MAILING_PROVIDERS)
    backend_port = _ask_port("Backend port", DEFAULT_BACKEND_PORT)

    backend = BackendConfig(
        framework=framework,
        language=language,
        database=database,
        orm=orm,
        auth=auth,
        mailing=mailing,
        port=backend_port,
    )

    print_section("Frontend Configuration")
    frontend_framework = _select("Frontend framework", FRONTEND_FRAMEWORKS)
    if frontend_framework == "none":
        frontend = FrontendConfig(framework="none")
    else:
        frontend = FrontendConfig(
            framework=frontend_framework,
            styling=_select("Styling", STYLING_OPTIONS),
            state_management=_select(
                "State management", get_state_management_options(frontend_framework)
            ),
            port=_ask_port("Frontend dev server port", DEFAULT_FRONTEND_PORT),
        )

    print_section("Project Structure")
    structure = "separate"
    if frontend.framework != "none":
        structure = _select("Project structure", PROJECT_STRUCTURES)
    package_manager = _select("Package manager", PACKAGE_MANAGERS)
    init_git = Confirm.ask("Initialize git repository?", default=True, console=console)
    docker = Confirm.ask("Generate Docker configuration?", default=True, console=console)

    return ProjectConfig(
        project_name=project_name,
        description=description,
        backend=backend,
        frontend=frontend,
        structure=structure,
        package_manager=package_manager,
        init_git=init_git,
        docker=docker,
        output_dir=Path(output_dir),
    )


def show_summary(config: ProjectConfig) -> None:
    """Print the configuration as a table before generating."""
    backend = config.backend
    frontend = config.frontend

    rows = {
        "Project": config.project_name,
        "Description": config.description,
        "Backend": backend.framework,
        "Language": backend.language,
        "Database": backend.database,
        "ORM": backend.orm,
        "Auth": backend.auth,
        "Mailing": backend.mailing,
        "Backend port": str(backend.port),
    }
    if config.has_frontend:
        rows.update({
            "Frontend": frontend.framework,
            "Styling": frontend.styling,
            "State": frontend.state_management,
            "Frontend port": str(frontend.port),
        })
    rows.update({
        "Structure": config.structure,
        "Package manager": config.package_manager,
        "Git": "Yes" if config.init_git else "No",
        "Docker": "Yes" if config.docker else "No",
        "Location": str(config.root_path),
    })
    console.print()
    print_summary_table(rows, title="Configuration Summary")


def confirm_generation() -> bool:
    return Confirm.ask(
        "[yellow]Generate project with this configuration?[/yellow]",
        default=True,
        console=console,
    )
