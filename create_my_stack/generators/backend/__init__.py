"""Backend framework generators and the Prisma add-on."""

from create_my_stack.generators.backend.express import ExpressGenerator
from create_my_stack.generators.backend.fastify import FastifyGenerator
from create_my_stack.generators.backend.nestjs import NestJSGenerator
from create_my_stack.generators.backend.prisma import PrismaGenerator

BACKEND_GENERATORS = {
    "express": ExpressGenerator,
    "fastify": FastifyGenerator,
    "nestjs": NestJSGenerator,
}

__all__ = [
    "BACKEND_GENERATORS",
    "ExpressGenerator",
    "FastifyGenerator",
    "NestJSGenerator",
    "PrismaGenerator",
]
