"""Next.js (App Router) frontend generator."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ...config import ProjectConfig
from ..base import BaseGenerator
from ..templates import TemplateRenderer
from .common import PRETTIER, frontend_context, state_dependencies, styling_dev_dependencies
from .react import write_react_store


class NextJSGenerator(BaseGenerator):
    """Generates a Next.js 14 app using the ``src/app`` router."""

    name = "Next.js"

    FOLDERS = [
        "src/app",
        "src/app/about",
        "src/components",
        "src/hooks",
        "src/lib",
        "src/services",
        "src/store",
        "src/types",
        "public",
    ]

    def __init__(
        self,
        config: ProjectConfig,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        super().__init__(config, renderer)
        self.context = frontend_context(
            config, is_next=True, ssr=True, api_base_url="process.env.NEXT_PUBLIC_API_URL"
        )

    async def generate(self) -> list[Path]:
        base = self.frontend_path
        await self.create_folders(base, self.FOLDERS)

        files = [
            ("nextjs/next.config.mjs.j2", "next.config.mjs"),
            ("nextjs/next-env.d.ts.j2", "next-env.d.ts"),
            ("nextjs/app/layout.tsx.j2", "src/app/layout.tsx"),
            ("react_shared/pages/home.j2", "src/app/page.tsx"),
            ("react_shared/pages/about.j2", "src/app/about/page.tsx"),
            ("react_shared/pages/not_found.j2", "src/app/not-found.tsx"),
            ("react_shared/components/Card.tsx.j2", "src/components/Card.tsx"),
            ("react_shared/components/index.ts.j2", "src/components/index.ts"),
            ("frontend_common/api.ts.j2", "src/services/api.ts"),
            ("frontend_common/styles.j2", f"src/app/globals.{self.context['style_ext']}"),
            ("frontend_common/env.example.j2", ".env.example"),
            ("frontend_common/env.example.j2", ".env.local.example"),
            ("nextjs/favicon.svg.j2", "public/favicon.svg"),
            ("nextjs/favicon.svg.j2", "src/app/icon.svg"),
        ]
        if self.config.frontend.state_management == "redux":
            files.append(("nextjs/app/providers.tsx.j2", "src/app/providers.tsx"))
        if self.config.frontend.styling == "tailwind":
            # Next.js loads these configs as CommonJS
            files += [
                ("frontend_common/tailwind.config.j2", "tailwind.config.js"),
                ("frontend_common/postcss.config.j2", "postcss.config.js"),
            ]

        context = {
            **self.context,
            "env_prefix": "NEXT_PUBLIC_",
            "cjs": True,
            "tailwind_content": [
                "./src/pages/**/*.{js,ts,jsx,tsx,mdx}",
                "./src/components/**/*.{js,ts,jsx,tsx,mdx}",
                "./src/app/**/*.{js,ts,jsx,tsx,mdx}",
            ],
        }

        return await self.gather_files(
            self.render_files(base, files, context),
            self.renderer.render_tree("react_shared/hooks", base / "src" / "hooks", context),
            write_react_store(self, base / "src" / "store", context),
            self.write_json(base / "package.json", self.package_json()),
            self.write_json(base / "tsconfig.json", _TSCONFIG),
            self.write_json(base / ".eslintrc.json", {"extends": ["next/core-web-vitals"], "rules": {}}),
            self.write_json(base / ".prettierrc", PRETTIER),
        )

    def package_json(self) -> dict[str, Any]:
        frontend = self.config.frontend
        return {
            "name": f"{self.config.project_name}-frontend",
            "version": "1.0.0",
            "private": True,
            "scripts": {
                "dev": f"next dev -p {frontend.port}",
                "build": "next build",
                "start": f"next start -p {frontend.port}",
                "lint": "next lint",
                "format": 'prettier --write "src/**/*.{ts,tsx,css,scss}"',
            },
            "dependencies": {
                "next": "^14.1.4",
                "react": "^18.2.0",
                "react-dom": "^18.2.0",
                "axios": "^1.6.8",
                **state_dependencies(frontend.state_management),
            },
            "devDependencies": {
                "@types/node": "^20.11.30",
                "@types/react": "^18.2.67",
                "@types/react-dom": "^18.2.22",
                "typescript": "^5.4.3",
                "eslint": "^8.57.0",
                "eslint-config-next": "^14.1.4",
                "prettier": "^3.2.5",
                **styling_dev_dependencies(frontend.styling),
            },
        }


_TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "lib": ["dom", "dom.iterable", "esnext"],
        "allowJs": True,
        "skipLibCheck": True,
        "strict": True,
        "noEmit": True,
        "esModuleInterop": True,
        "module": "esnext",
        "moduleResolution": "bundler",
        "resolveJsonModule": True,
        "isolatedModules": True,
        "jsx": "preserve",
        "incremental": True,
        "plugins": [{"name": "next"}],
        "baseUrl": ".",
        "paths": {"@/*": ["./src/*"]},
    },
    "include": ["next-env.d.ts", "**/*.ts", "**/*.tsx", ".next/types/**/*.ts"],
    "exclude": ["node_modules"],
}
