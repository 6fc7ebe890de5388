"""Project generators.

Each generator writes one part of the project and returns the paths it
wrote.  The orchestrator decides which of them run.
"""

from create_my_stack.generators.backend import BACKEND_GENERATORS, PrismaGenerator
from create_my_stack.generators.base import BaseGenerator
from create_my_stack.generators.docker import DockerGenerator
from create_my_stack.generators.frontend import FRONTEND_GENERATORS
from create_my_stack.generators.mailing import MailingGenerator
from create_my_stack.generators.readme import ReadmeGenerator
from create_my_stack.generators.root import RootFilesGenerator
from create_my_stack.generators.templates import TemplateRenderer

__all__ = [
    "BACKEND_GENERATORS",
    "BaseGenerator",
    "DockerGenerator",
    "FRONTEND_GENERATORS",
    "MailingGenerator",
    "PrismaGenerator",
    "ReadmeGenerator",
    "RootFilesGenerator",
    "TemplateRenderer",
]
