"""React (Vite) frontend generator."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ...config import ProjectConfig
from ..base import BaseGenerator
from ..templates import TemplateRenderer
from .common import (
    PRETTIER,
    frontend_context,
    state_dependencies,
    styling_dev_dependencies,
    vite_tsconfig,
)


class ReactGenerator(BaseGenerator):
    """Generates a React 18 + Vite + TypeScript app with React Router."""

    name = "React"

    FOLDERS = [
        "src/assets",
        "src/components",
        "src/hooks",
        "src/pages",
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
            config, is_next=False, ssr=False, api_base_url="import.meta.env.VITE_API_URL"
        )

    async def generate(self) -> list[Path]:
        base = self.frontend_path
        await self.create_folders(base, self.FOLDERS)

        style_ext = self.context["style_ext"]
        files = [
            ("react/index.html.j2", "index.html"),
            ("react/vite.config.ts.j2", "vite.config.ts"),
            ("react/main.tsx.j2", "src/main.tsx"),
            ("react/App.tsx.j2", "src/App.tsx"),
            ("react_shared/pages/home.j2", "src/pages/HomePage.tsx"),
            ("react_shared/pages/about.j2", "src/pages/AboutPage.tsx"),
            ("react_shared/pages/not_found.j2", "src/pages/NotFoundPage.tsx"),
            ("react_shared/components/Card.tsx.j2", "src/components/Card.tsx"),
            ("react_shared/components/index.ts.j2", "src/components/index.ts"),
            ("frontend_common/api.ts.j2", "src/services/api.ts"),
            ("frontend_common/styles.j2", f"src/assets/index.{style_ext}"),
            ("frontend_common/env.example.j2", ".env.example"),
            ("react/vite.svg.j2", "public/vite.svg"),
        ]
        if self.config.frontend.styling == "tailwind":
            files += [
                ("frontend_common/tailwind.config.j2", "tailwind.config.js"),
                ("frontend_common/postcss.config.j2", "postcss.config.js"),
            ]

        context = {
            **self.context,
            "env_prefix": "VITE_",
            "cjs": False,
            "tailwind_content": ["./index.html", "./src/**/*.{js,ts,jsx,tsx}"],
        }
        tsconfig, tsconfig_node = vite_tsconfig("react-jsx", ["src"])

        return await self.gather_files(
            self.render_files(base, files, context),
            self.renderer.render_tree("react_shared/hooks", base / "src" / "hooks", context),
            write_react_store(self, base / "src" / "store", context),
            self.write_json(base / "package.json", self.package_json()),
            self.write_json(base / "tsconfig.json", tsconfig),
            self.write_json(base / "tsconfig.node.json", tsconfig_node),
            self.write_json(base / ".eslintrc.json", _ESLINT),
            self.write_json(base / ".prettierrc", PRETTIER),
        )

    def package_json(self) -> dict[str, Any]:
        frontend = self.config.frontend
        dependencies = {
            "react": "^18.2.0",
            "react-dom": "^18.2.0",
            "react-router-dom": "^6.22.3",
            "axios": "^1.6.8",
            **state_dependencies(frontend.state_management),
        }
        dev_dependencies = {
            "@types/react": "^18.2.67",
            "@types/react-dom": "^18.2.22",
            "@vitejs/plugin-react": "^4.2.1",
            "vite": "^5.2.6",
            "typescript": "^5.4.3",
            "@typescript-eslint/eslint-plugin": "^7.4.0",
            "@typescript-eslint/parser": "^7.4.0",
            "eslint": "^8.57.0",
            "eslint-plugin-react": "^7.34.1",
            "eslint-plugin-react-hooks": "^4.6.0",
            "eslint-plugin-react-refresh": "^0.4.6",
            "prettier": "^3.2.5",
            **styling_dev_dependencies(frontend.styling),
        }
        return {
            "name": f"{self.config.project_name}-frontend",
            "private": True,
            "version": "1.0.0",
            "type": "module",
            "scripts": {
                "dev": f"vite --port {frontend.port}",
                "build": "tsc && vite build",
                "preview": "vite preview",
                "lint": "eslint . --ext ts,tsx --report-unused-disable-directives --max-warnings 0",
                "format": 'prettier --write "src/**/*.{ts,tsx,css,scss}"',
            },
            "dependencies": dependencies,
            "devDependencies": dev_dependencies,
        }


async def write_react_store(
    generator: BaseGenerator, store_dir: Path, context: dict[str, Any]
) -> list[Path]:
    """Write ``src/store`` for Redux Toolkit, Zustand or no state library.

    Shared by the React and Next.js generators.
    """
    state = generator.config.frontend.state_management
    renderer = generator.renderer
    if state == "redux":
        return await renderer.render_tree("react_shared/store/redux", store_dir, context)
    template = "react_shared/store/zustand.ts.j2" if state == "zustand" else "react_shared/store/none.ts.j2"
    return [await renderer.render_to_file(template, store_dir / "index.ts", context)]


_ESLINT: dict[str, Any] = {
    "root": True,
    "env": {"browser": True, "es2020": True},
    "extends": [
        "eslint:recommended",
        "plugin:@typescript-eslint/recommended",
        "plugin:react-hooks/recommended",
    ],
    "ignorePatterns": ["dist", ".eslintrc.cjs"],
    "parser": "@typescript-eslint/parser",
    "plugins": ["react-refresh"],
    "rules": {
        "react-refresh/only-export-components": ["warn", {"allowConstantExport": True}],
    },
}
