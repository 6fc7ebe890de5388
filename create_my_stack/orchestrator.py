"""Project orchestrator.

Runs the generation steps in order:

1. Create the project directory
2. Root files (.env.example, .gitignore, workspace package.json)
3. Backend
4. Prisma          (orm == prisma)
5. Mailing         (mailing != none)
6. Frontend        (frontend != none)
7. Docker          (docker enabled)
8. README
9. Git init        (init_git)

Only enabled steps are counted and numbered.  The first failure stops the
run; nothing already written is rolled back.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path

from create_my_stack.config import ProjectConfig
from create_my_stack.generators import (
    BACKEND_GENERATORS,
    FRONTEND_GENERATORS,
    DockerGenerator,
    MailingGenerator,
    PrismaGenerator,
    ReadmeGenerator,
    RootFilesGenerator,
    TemplateRenderer,
)
from create_my_stack.git import init_git, write_gitignore
from create_my_stack.utils import (
    format_duration,
    print_debug,
    print_error,
    print_step,
    print_success,
)

# ---------------------------------------------------------------------------
# Exceptions and results
# ---------------------------------------------------------------------------


class GenerationError(Exception):
    """Raised when a generation step fails."""

    def __init__(self, step: int, message: str) -> None:
        self.step = step
        self.message = message
        super().__init__(message)


@dataclass
class GenerationResult:
    """What a successful run produced."""

    root_path: Path
    steps_completed: list[str] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def file_count(self) -> int:
        return len(self.files)


@dataclass
class _Step:
    name: str
    message: str
    done: str
    run: Callable[[], Awaitable[list[Path]]]


# ---------------------------------------------------------------------------
# ProjectOrchestrator
# ---------------------------------------------------------------------------


class ProjectOrchestrator:
    """Coordinates every generator for one :class:`ProjectConfig`.

    Attributes:
        config: The project to generate.
        renderer: Jinja2 renderer shared by all generators.
    """

    def __init__(self, config: ProjectConfig, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # ------------------------------------------------------------------
    # Step plan
    # ------------------------------------------------------------------

    def steps(self) -> list[_Step]:
        """The enabled steps, in execution order."""
        config = self.config
        backend = config.backend
        frontend = config.frontend

        plan = [
            _Step("directory", "Creating project directory...", "Project directory created",
                  self._create_project_structure),
            _Step("root", "Generating root configuration...", "Root configuration generated",
                  RootFilesGenerator(config, self.renderer).generate),
            _Step("backend", "Generating backend...", f"Backend generated ({backend.framework})",
                  self._generate_backend),
        ]
        if backend.orm == "prisma":
            plan.append(_Step("prisma", "Setting up Prisma...", "Prisma configured",
                              PrismaGenerator(config, self.renderer).generate))
        if backend.mailing != "none":
            plan.append(_Step("mailing", "Setting up mailing...",
                              f"Mailing configured ({backend.mailing})",
                              MailingGenerator(config, self.renderer).generate))
        if frontend.framework != "none":
            plan.append(_Step("frontend", "Generating frontend...",
                              f"Frontend generated ({frontend.framework})",
                              self._generate_frontend))
        if config.docker:
            plan.append(_Step("docker", "Generating Docker configuration...",
                              "Docker configuration generated",
                              DockerGenerator(config, self.renderer).generate))
        plan.append(_Step("readme", "Generating documentation...", "Documentation generated",
                          ReadmeGenerator(config, self.renderer).generate))
        if config.init_git:
            plan.append(_Step("git", "Initializing git repository...",
                              "Git repository initialized", self._initialize_git))
        return plan

    def total_steps(self) -> int:
        """4 base steps plus one per enabled optional step."""
        config = self.config
        return 4 + sum([
            config.backend.orm == "prisma",
            config.backend.mailing != "none",
            config.frontend.framework != "none",
            config.docker,
            config.init_git,
        ])

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def generate(self) -> GenerationResult:
        """Run every enabled step.

        Raises:
            GenerationError: The first failing step, after printing
                ``Failed at step <n>: <message>``.
        """
        start = time.monotonic()
        result = GenerationResult(root_path=self.config.root_path)
        plan = self.steps()
        total = len(plan)
        current = 0

        try:
            for current, step in enumerate(plan, start=1):
                print_step(current, total, step.message)
                written = await step.run()
                result.files.extend(written)
                result.steps_completed.append(step.name)
                print_success(step.done)
        except GenerationError as exc:
            print_error(f"Failed at step {current}: {exc.message}")
            raise
        except Exception as exc:
            print_error(f"Failed at step {current}: {exc}")
            raise GenerationError(current, str(exc)) from exc

        result.duration_seconds = time.monotonic() - start
        print_debug(
            f"Wrote {result.file_count} files in {format_duration(result.duration_seconds)}"
        )
        return result

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _create_project_structure(self) -> list[Path]:
        config = self.config
        root = config.root_path
        if root.exists():
            raise GenerationError(1, f"Directory {config.project_name} already exists")

        dirs = [root]
        if config.is_monorepo:
            dirs += [root / "apps", config.backend_path]
            if config.has_frontend:
                dirs.append(config.frontend_path)
        elif config.has_frontend:
            dirs += [config.backend_path, config.frontend_path]
        if config.docker:
            dirs.append(root / "docker")

        for d in dirs:
            await asyncio.to_thread(d.mkdir, parents=True, exist_ok=True)
        return []

    async def _generate_backend(self) -> list[Path]:
        framework = self.config.backend.framework
        generator_cls = BACKEND_GENERATORS.get(framework)
        if generator_cls is None:
            raise ValueError(f"Unknown backend framework: {framework}")
        return await generator_cls(self.config, self.renderer).generate()

    async def _generate_frontend(self) -> list[Path]:
        framework = self.config.frontend.framework
        generator_cls = FRONTEND_GENERATORS.get(framework)
        if generator_cls is None:
            raise ValueError(f"Unknown frontend framework: {framework}")
        return await generator_cls(self.config, self.renderer).generate()

    async def _initialize_git(self) -> list[Path]:
        config = self.config
        if not config.is_monorepo and config.has_frontend:
            # Two independent repositories, each with its own .gitignore
            await init_git(config.backend_path)
            await init_git(config.frontend_path)
            return list(await asyncio.gather(
                write_gitignore(
                    config.backend_path,
                    has_env=True,
                    has_prisma=config.backend.orm == "prisma",
                ),
                write_gitignore(
                    config.frontend_path,
                    has_env=True,
                    has_nextjs=config.frontend.framework == "nextjs",
                ),
            ))

        await init_git(config.root_path)
        return []
