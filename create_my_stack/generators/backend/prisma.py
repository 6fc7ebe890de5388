"""Prisma ORM setup for the backend."""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..base import BaseGenerator

PRISMA_VERSION = "^6.2.0"


class PrismaGenerator(BaseGenerator):
    """Writes ``prisma/schema.prisma``, a client singleton and a seed script.

    Also adds ``@prisma/client``, ``prisma`` and the ``prisma:*`` scripts to
    the backend ``package.json`` written by the framework generator.
    """

    name = "Prisma"

    @property
    def provider(self) -> str:
        """Datasource provider for the selected database."""
        database = self.config.backend.database
        if database in ("postgresql", "mysql", "mongodb", "sqlite"):
            return database
        return "postgresql"

    async def generate(self) -> list[Path]:
        base = self.backend_path
        await self.create_folders(base, ["prisma", "src/lib"])

        context = {
            **self.context,
            "provider": self.provider,
            "is_mongo": self.provider == "mongodb",
        }
        written, pkg = await asyncio.gather(
            self.render_files(
                base,
                [
                    ("prisma/schema.prisma.j2", "prisma/schema.prisma"),
                    ("prisma/client.j2", "src/lib/prisma.{ext}"),
                    ("prisma/seed.j2", "prisma/seed.{ext}"),
                ],
                context,
            ),
            self._update_package_json(),
        )
        if pkg is not None:
            written.append(pkg)
        return written

    async def _update_package_json(self) -> Path | None:
        dev_dependencies = {"prisma": PRISMA_VERSION}
        if self.is_typescript:
            dev_dependencies["tsx"] = "^4.7.1"

        return await self.merge_package_json(
            self.backend_path,
            dependencies={"@prisma/client": PRISMA_VERSION},
            dev_dependencies=dev_dependencies,
            scripts={
                "prisma:generate": "prisma generate",
                "prisma:push": "prisma db push",
                "prisma:migrate": "prisma migrate dev",
                "prisma:studio": "prisma studio",
                "prisma:seed": "tsx prisma/seed.ts" if self.is_typescript else "node prisma/seed.js",
            },
        )
