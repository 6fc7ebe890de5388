"""create-my-stack configuration.

Typed description of every choice the generator supports.  The option
catalogue (display names and descriptions), the ORM/database compatibility
table and the ``ProjectConfig`` model that all generators consume read-only
live here.  All models use Pydantic v2 so a configuration can be validated at
construction time and serialised to/from JSON or environment variables.
"""

from __future__ import annotations

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class BackendFramework(str, Enum):
    EXPRESS = "express"
    FASTIFY = "fastify"
    NESTJS = "nestjs"


class BackendLanguage(str, Enum):
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"


class Database(str, Enum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MONGODB = "mongodb"
    SQLITE = "sqlite"
    NONE = "none"


class ORM(str, Enum):
    PRISMA = "prisma"
    SEQUELIZE = "sequelize"
    MONGOOSE = "mongoose"
    NONE = "none"


class AuthStrategy(str, Enum):
    JWT = "jwt"
    SESSION = "session"
    NONE = "none"


class MailingProvider(str, Enum):
    NODEMAILER = "nodemailer"
    RESEND = "resend"
    NONE = "none"


class FrontendFramework(str, Enum):
    VUE = "vue"
    REACT = "react"
    NEXTJS = "nextjs"
    NONE = "none"


class Styling(str, Enum):
    TAILWIND = "tailwind"
    CSS = "css"
    SCSS = "scss"


class StateManagement(str, Enum):
    PINIA = "pinia"
    REDUX = "redux"
    ZUSTAND = "zustand"
    NONE = "none"


class ProjectStructure(str, Enum):
    MONOREPO = "monorepo"
    SEPARATE = "separate"


class PackageManager(str, Enum):
    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"


# ---------------------------------------------------------------------------
# Option catalogue
# ---------------------------------------------------------------------------


class PromptChoice(BaseModel):
    """A selectable option shown by the prompts and the ``list`` command."""

    name: str
    value: str
    description: str = ""

    @property
    def label(self) -> str:
        if self.description:
            return f"{self.name} - {self.description}"
        return self.name


def _choices(*rows: tuple[str, str, str]) -> list[PromptChoice]:
    return [PromptChoice(name=n, value=v, description=d) for n, v, d in rows]


BACKEND_FRAMEWORKS = _choices(
    ("Express.js", "express", "Minimal & flexible Node.js framework"),
    ("Fastify", "fastify", "Fast & low overhead framework"),
    ("NestJS", "nestjs", "Progressive Node.js framework (TypeScript)"),
)

LANGUAGES = _choices(
    ("TypeScript", "typescript", "Recommended for production"),
    ("JavaScript", "javascript", "Quick prototyping"),
)

DATABASES = _choices(
    ("PostgreSQL", "postgresql", "Powerful open-source RDBMS"),
    ("MySQL", "mysql", "Popular open-source RDBMS"),
    ("MongoDB", "mongodb", "NoSQL document database"),
    ("SQLite", "sqlite", "Lightweight file-based database"),
    ("None", "none", "Skip database setup"),
)

ORMS = _choices(
    ("Prisma", "prisma", "Modern TypeScript ORM"),
    ("Sequelize", "sequelize", "Promise-based ORM for SQL"),
    ("Mongoose", "mongoose", "MongoDB object modeling"),
    ("None", "none", "Raw queries only"),
)

AUTH_STRATEGIES = _choices(
    ("JWT (JSON Web Token)", "jwt", "Stateless authentication"),
    ("Session", "session", "Server-side session storage"),
    ("None", "none", "No authentication"),
)

MAILING_PROVIDERS = _choices(
    ("Nodemailer", "nodemailer", "Classic email sending library with SMTP"),
    ("Resend", "resend", "Modern email API for developers"),
    ("None", "none", "No mailing setup"),
)

FRONTEND_FRAMEWORKS = _choices(
    ("Vue 3", "vue", "Progressive JavaScript framework"),
    ("React", "react", "Library for building UIs"),
    ("Next.js", "nextjs", "React framework with SSR"),
    ("None (Backend only)", "none", "Skip frontend setup"),
)

STYLING_OPTIONS = _choices(
    ("Tailwind CSS", "tailwind", "Utility-first CSS framework"),
    ("Plain CSS", "css", "Traditional CSS"),
    ("SCSS/Sass", "scss", "CSS preprocessor"),
)

STATE_MANAGEMENT_VUE = _choices(
    ("Pinia", "pinia", "Official Vue state management"),
    ("None", "none", "No state management"),
)

STATE_MANAGEMENT_REACT = _choices(
    ("Redux Toolkit", "redux", "Predictable state container"),
    ("Zustand", "zustand", "Lightweight state management"),
    ("None", "none", "No state management (use React Context)"),
)

PROJECT_STRUCTURES = _choices(
    ("Monorepo", "monorepo", "Single repo with apps/ folder"),
    ("Separate repos", "separate", "Independent frontend & backend"),
)

PACKAGE_MANAGERS = _choices(
    ("pnpm", "pnpm", "Fast, disk space efficient (Recommended)"),
    ("npm", "npm", "Default Node.js package manager"),
    ("yarn", "yarn", "Fast, reliable package manager"),
)

DEFAULT_BACKEND_PORT = 3000
DEFAULT_FRONTEND_PORT = 5173
DEFAULT_PROJECT_NAME = "my-fullstack-app"
DEFAULT_DESCRIPTION = "A fullstack application generated with create-my-stack"

ORM_DATABASE_COMPATIBILITY: dict[str, list[str]] = {
    "prisma": ["postgresql", "mysql", "mongodb", "sqlite"],
    "sequelize": ["postgresql", "mysql", "sqlite"],
    "mongoose": ["mongodb"],
    "none": ["postgresql", "mysql", "mongodb", "sqlite", "none"],
}

# Display names used by the README and the summary table.
_DISPLAY_NAMES: dict[str, dict[str, str]] = {
    "framework": {
        "express": "Express.js",
        "fastify": "Fastify",
        "nestjs": "NestJS",
        "vue": "Vue 3",
        "react": "React",
        "nextjs": "Next.js",
    },
    "database": {c.value: c.name for c in DATABASES if c.value != "none"},
    "orm": {c.value: c.name for c in ORMS if c.value != "none"},
    "styling": {c.value: c.name for c in STYLING_OPTIONS},
    "state": {
        "pinia": "Pinia",
        "redux": "Redux Toolkit",
        "zustand": "Zustand",
    },
}


def display_name(kind: str, value: str) -> str:
    """Return the human-readable name for *value*, or *value* itself."""
    return _DISPLAY_NAMES.get(kind, {}).get(value, value)


def get_compatible_orms(database: str) -> list[str]:
    """Return the ORMs that can drive *database*, in catalogue order."""
    database = Database(database).value
    if database == Database.NONE.value:
        return [ORM.NONE.value]
    return [
        orm for orm, dbs in ORM_DATABASE_COMPATIBILITY.items()
        if database in dbs
    ]


def get_state_management_options(frontend: str) -> list[PromptChoice]:
    """Return the state-management choices offered for *frontend*."""
    frontend = FrontendFramework(frontend).value
    if frontend == FrontendFramework.VUE.value:
        return list(STATE_MANAGEMENT_VUE)
    if frontend in (FrontendFramework.REACT.value, FrontendFramework.NEXTJS.value):
        return list(STATE_MANAGEMENT_REACT)
    return [PromptChoice(name="None", value="none")]


# npm package-name rules: lowercase, URL-safe, optional @scope/ prefix.
_NPM_NAME_RE = re.compile(r"^(?:@[a-z0-9~-][a-z0-9._~-]*/)?[a-z0-9~-][a-z0-9._~-]*$")
_NPM_BLACKLIST = {"node_modules", "favicon.ico"}


def validate_project_name(name: str) -> str | None:
    """Check *name* against npm package-name rules.

    Returns:
        An error message, or ``None`` when the name is valid.
    """
    if not name or not name.strip():
        return "Project name is required"

    errors: list[str] = []
    if name != name.strip():
        errors.append("name cannot contain leading or trailing spaces")
    if len(name) > 214:
        errors.append("name can no longer contain more than 214 characters")
    if name.startswith("."):
        errors.append("name cannot start with a period")
    if name.startswith("_"):
        errors.append("name cannot start with an underscore")
    if name.lower() != name:
        errors.append("name can no longer contain capital letters")
    if name.lower() in _NPM_BLACKLIST:
        errors.append(f"{name} is a blacklisted name")
    if not errors and not _NPM_NAME_RE.match(name):
        errors.append("name can only contain URL-friendly characters")

    if errors:
        return f"Invalid package name: {', '.join(errors)}"
    return None


# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------


class BackendConfig(BaseModel):
    """Backend choices."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    framework: BackendFramework = Field(default=BackendFramework.EXPRESS)
    language: BackendLanguage = Field(default=BackendLanguage.TYPESCRIPT)
    database: Database = Field(default=Database.POSTGRESQL)
    orm: ORM = Field(default=ORM.PRISMA)
    auth: AuthStrategy = Field(default=AuthStrategy.JWT)
    mailing: MailingProvider = Field(default=MailingProvider.NONE)
    port: int = Field(default=DEFAULT_BACKEND_PORT, ge=1, le=65535)

    @model_validator(mode="after")
    def _normalise(self) -> "BackendConfig":
        # NestJS only ships a TypeScript template.
        if self.framework == BackendFramework.NESTJS.value:
            self.language = BackendLanguage.TYPESCRIPT.value
        if self.database == Database.NONE.value:
            self.orm = ORM.NONE.value
        if self.database not in ORM_DATABASE_COMPATIBILITY[self.orm]:
            raise ValueError(
                f"ORM '{self.orm}' is not compatible with database '{self.database}'"
            )
        return self


class FrontendConfig(BaseModel):
    """Frontend choices."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    framework: FrontendFramework = Field(default=FrontendFramework.REACT)
    styling: Styling = Field(default=Styling.TAILWIND)
    state_management: StateManagement = Field(default=StateManagement.NONE)
    port: int = Field(default=DEFAULT_FRONTEND_PORT, ge=1, le=65535)

    @model_validator(mode="after")
    def _normalise(self) -> "FrontendConfig":
        if self.framework == FrontendFramework.NONE.value:
            self.styling = Styling.CSS.value
            self.state_management = StateManagement.NONE.value
            self.port = DEFAULT_FRONTEND_PORT
            return self
        allowed = [c.value for c in get_state_management_options(self.framework)]
        if self.state_management not in allowed:
            raise ValueError(
                f"State management '{self.state_management}' is not available "
                f"for frontend '{self.framework}'"
            )
        return self


class ProjectConfig(BaseModel):
    """Everything needed to generate one project.

    Generators treat instances as read-only.  Paths are derived from
    ``output_dir`` and ``project_name`` rather than stored.
    """

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    project_name: str = Field(
        default=DEFAULT_PROJECT_NAME,
        description="Project name (used as the directory and npm package name)",
    )
    description: str = Field(default=DEFAULT_DESCRIPTION, description="Short project description")
    backend: BackendConfig = Field(default_factory=BackendConfig)
    frontend: FrontendConfig = Field(default_factory=FrontendConfig)
    structure: ProjectStructure = Field(default=ProjectStructure.MONOREPO)
    package_manager: PackageManager = Field(default=PackageManager.PNPM)
    init_git: bool = Field(default=True, description="Run git init after generation")
    docker: bool = Field(default=True, description="Generate Docker configuration")
    output_dir: Path = Field(
        default=Path("."),
        description="Parent directory in which the project folder is created",
    )

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        error = validate_project_name(value)
        if error:
            raise ValueError(error)
        return value

    @model_validator(mode="after")
    def _normalise(self) -> "ProjectConfig":
        # A backend-only project cannot be a monorepo.
        if self.frontend.framework == FrontendFramework.NONE.value:
            self.structure = ProjectStructure.SEPARATE.value
        return self

    # ------------------------------------------------------------------
    # Derived flags
    # ------------------------------------------------------------------

    @property
    def is_monorepo(self) -> bool:
        return self.structure == ProjectStructure.MONOREPO.value

    @property
    def has_frontend(self) -> bool:
        return self.frontend.framework != FrontendFramework.NONE.value

    @property
    def has_database(self) -> bool:
        return self.backend.database != Database.NONE.value

    @property
    def is_typescript(self) -> bool:
        return self.backend.language == BackendLanguage.TYPESCRIPT.value

    @property
    def ext(self) -> str:
        """Source file extension for the backend (``ts`` or ``js``)."""
        return "ts" if self.is_typescript else "js"

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def root_path(self) -> Path:
        """Directory the project is generated into."""
        return Path(self.output_dir).resolve() / self.project_name

    @property
    def backend_path(self) -> Path:
        """Backend app directory.

        ``apps/backend`` in a monorepo, the root itself for a backend-only
        project and ``backend/`` otherwise.
        """
        if self.is_monorepo:
            return self.root_path / "apps" / "backend"
        if not self.has_frontend:
            return self.root_path
        return self.root_path / "backend"

    @property
    def frontend_path(self) -> Path:
        """Frontend app directory."""
        if self.is_monorepo:
            return self.root_path / "apps" / "frontend"
        return self.root_path / "frontend"

    # ------------------------------------------------------------------
    # Template context
    # ------------------------------------------------------------------

    def template_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from this configuration."""
        from .utils import (
            get_add_command,
            get_exec_command,
            get_install_command,
            get_lock_file_name,
            get_run_command,
        )

        pm = self.package_manager
        backend = self.backend
        frontend = self.frontend
        return {
            "project_name": self.project_name,
            "db_name": self.project_name.lstrip("@").replace("/", "_").replace("-", "_"),
            "description": self.description,
            "backend": backend.model_dump(),
            "frontend": frontend.model_dump(),
            "backend_framework": backend.framework,
            "frontend_framework": frontend.framework,
            "language": backend.language,
            "database": backend.database,
            "orm": backend.orm,
            "auth": backend.auth,
            "mailing": backend.mailing,
            "styling": frontend.styling,
            "state_management": frontend.state_management,
            "backend_port": backend.port,
            "frontend_port": frontend.port,
            "structure": self.structure,
            "package_manager": pm,
            "install_cmd": get_install_command(pm),
            "add_cmd": get_add_command(pm),
            "run_cmd": get_run_command(pm),
            "exec_cmd": get_exec_command(pm),
            "lock_file": get_lock_file_name(pm),
            "is_monorepo": self.is_monorepo,
            "is_typescript": self.is_typescript,
            # Fastify projects are "type": "module", so plain JS must use import/export.
            "es_modules": self.is_typescript or backend.framework == BackendFramework.FASTIFY.value,
            "ext": self.ext,
            "has_frontend": self.has_frontend,
            "has_database": self.has_database,
            "has_prisma": backend.orm == ORM.PRISMA.value,
            "has_docker": self.docker,
            "init_git": self.init_git,
            "backend_name": display_name("framework", backend.framework),
            "frontend_name": display_name("framework", frontend.framework),
            "database_name": display_name("database", backend.database),
            "orm_name": display_name("orm", backend.orm),
            "styling_name": display_name("styling", frontend.styling),
            "state_name": display_name("state", frontend.state_management),
        }

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ProjectConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ProjectConfig":
        """Build a ``ProjectConfig`` from environment variables.

        Recognised variables (all optional):
            CMS_PROJECT_NAME, CMS_BACKEND, CMS_FRONTEND, CMS_DATABASE,
            CMS_ORM, CMS_PACKAGE_MANAGER, CMS_OUTPUT_DIR.
        """
        backend_kwargs: dict[str, Any] = {}
        if os.environ.get("CMS_BACKEND"):
            backend_kwargs["framework"] = os.environ["CMS_BACKEND"]
        if os.environ.get("CMS_DATABASE"):
            backend_kwargs["database"] = os.environ["CMS_DATABASE"]
            if not os.environ.get("CMS_ORM"):
                backend_kwargs["orm"] = get_compatible_orms(os.environ["CMS_DATABASE"])[0]
        if os.environ.get("CMS_ORM"):
            backend_kwargs["orm"] = os.environ["CMS_ORM"]

        frontend_kwargs: dict[str, Any] = {}
        if os.environ.get("CMS_FRONTEND"):
            frontend_kwargs["framework"] = os.environ["CMS_FRONTEND"]

        kwargs: dict[str, Any] = {
            "backend": BackendConfig(**backend_kwargs),
            "frontend": FrontendConfig(**frontend_kwargs),
        }
        if os.environ.get("CMS_PROJECT_NAME"):
            kwargs["project_name"] = os.environ["CMS_PROJECT_NAME"]
        if os.environ.get("CMS_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["CMS_PACKAGE_MANAGER"]
        if os.environ.get("CMS_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["CMS_OUTPUT_DIR"])
        return cls(**kwargs)
