"""Transactional mail setup for the backend.

Writes a mail client for Nodemailer (SMTP) or Resend, two React Email
templates and a small service that renders and sends them.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from .base import BaseGenerator


class MailingGenerator(BaseGenerator):
    """Generates ``src/lib/mail`` and ``src/emails`` in the backend."""

    name = "mailing"

    async def generate(self) -> list[Path]:
        if self.config.backend.mailing == "none":
            return []

        await self.create_folders(self.backend_path, ["src/lib", "src/emails"])

        written, pkg = await asyncio.gather(
            self.render_files(
                self.backend_path,
                [
                    ("mailing/mail.j2", "src/lib/mail.{ext}"),
                    ("mailing/email_service.j2", "src/lib/email-service.{ext}"),
                    ("mailing/emails/welcome.j2", "src/emails/welcome.{ext}x"),
                    ("mailing/emails/reset_password.j2", "src/emails/reset-password.{ext}x"),
                    ("mailing/emails/index.j2", "src/emails/index.{ext}"),
                ],
            ),
            self._update_package_json(),
        )
        if pkg is not None:
            written.append(pkg)
        return written

    async def _update_package_json(self) -> Path | None:
        provider = self.config.backend.mailing
        dependencies = {
            "@react-email/components": "^1.0.3",
            "@react-email/render": "^1.0.3",
            "react": "^19.0.0",
        }
        dev_dependencies: dict[str, str] = {}

        if provider == "nodemailer":
            dependencies["nodemailer"] = "^6.9.16"
            if self.is_typescript:
                dev_dependencies["@types/nodemailer"] = "^6.4.17"
        elif provider == "resend":
            dependencies["resend"] = "^4.0.1"

        return await self.merge_package_json(
            self.backend_path,
            dependencies=dependencies,
            dev_dependencies=dev_dependencies,
            scripts={"email:dev": "email dev --dir src/emails"},
        )

    def env_variables(self) -> str:
        """The ``.env`` block for the selected provider (empty for none)."""
        return self.renderer.render("mailing/env.j2", self.context)
