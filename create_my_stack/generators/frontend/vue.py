"""Vue 3 (Vite) frontend generator."""

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


class VueGenerator(BaseGenerator):
    """Generates a Vue 3 + Vite + TypeScript app with Vue Router."""

    name = "Vue 3"

    FOLDERS = [
        "src/assets",
        "src/components",
        "src/composables",
        "src/layouts",
        "src/pages",
        "src/router",
        "src/services",
        "src/stores",
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
            config,
            class_attr="class",
            ssr=False,
            api_base_url="import.meta.env.VITE_API_URL",
        )

    async def generate(self) -> list[Path]:
        base = self.frontend_path
        await self.create_folders(base, self.FOLDERS)

        if self.config.frontend.state_management == "pinia":
            store = "vue/stores.ts.j2"
        else:
            store = "react_shared/store/none.ts.j2"
        files = [
            ("vue/index.html.j2", "index.html"),
            ("vue/vite.config.ts.j2", "vite.config.ts"),
            ("vue/main.ts.j2", "src/main.ts"),
            ("vue/App.vue.j2", "src/App.vue"),
            ("vue/router.ts.j2", "src/router/index.ts"),
            ("vue/pages/HomePage.vue.j2", "src/pages/HomePage.vue"),
            ("vue/pages/AboutPage.vue.j2", "src/pages/AboutPage.vue"),
            ("vue/pages/NotFoundPage.vue.j2", "src/pages/NotFoundPage.vue"),
            ("vue/BaseCard.vue.j2", "src/components/BaseCard.vue"),
            ("frontend_common/api.ts.j2", "src/services/api.ts"),
            (store, "src/stores/index.ts"),
            ("frontend_common/styles.j2", f"src/assets/main.{self.context['style_ext']}"),
            ("frontend_common/env.example.j2", ".env.example"),
            ("vue/vite.svg.j2", "public/vite.svg"),
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
            "tailwind_content": ["./index.html", "./src/**/*.{vue,js,ts,jsx,tsx}"],
        }
        tsconfig, tsconfig_node = vite_tsconfig(
            "preserve", ["src/**/*.ts", "src/**/*.tsx", "src/**/*.vue", "env.d.ts"]
        )

        return await self.gather_files(
            self.render_files(base, files, context),
            self.renderer.render_tree("vue/composables", base / "src" / "composables", context),
            self.write_file(base / "env.d.ts", '/// <reference types="vite/client" />\n'),
            self.write_json(base / "package.json", self.package_json()),
            self.write_json(base / "tsconfig.json", tsconfig),
            self.write_json(base / "tsconfig.node.json", tsconfig_node),
            self.write_json(base / ".eslintrc.json", _ESLINT),
            self.write_json(base / ".prettierrc", PRETTIER),
        )

    def package_json(self) -> dict[str, Any]:
        frontend = self.config.frontend
        return {
            "name": f"{self.config.project_name}-frontend",
            "version": "1.0.0",
            "private": True,
            "type": "module",
            "scripts": {
                "dev": f"vite --port {frontend.port}",
                "build": "vue-tsc && vite build",
                "preview": "vite preview",
                "lint": "eslint src --ext .vue,.ts,.js --fix",
                "format": 'prettier --write "src/**/*.{vue,ts,js,css,scss}"',
            },
            "dependencies": {
                "vue": "^3.4.21",
                "vue-router": "^4.3.0",
                "axios": "^1.6.8",
                **state_dependencies(frontend.state_management),
            },
            "devDependencies": {
                "@vitejs/plugin-vue": "^5.0.4",
                "vite": "^5.2.6",
                "typescript": "^5.4.3",
                "vue-tsc": "^2.0.7",
                "@types/node": "^20.11.30",
                "eslint": "^8.57.0",
                "eslint-plugin-vue": "^9.24.0",
                "prettier": "^3.2.5",
                "@vue/eslint-config-typescript": "^13.0.0",
                "@vue/eslint-config-prettier": "^9.0.0",
                **styling_dev_dependencies(frontend.styling),
            },
        }


_ESLINT: dict[str, Any] = {
    "root": True,
    "extends": [
        "plugin:vue/vue3-recommended",
        "eslint:recommended",
        "@vue/eslint-config-typescript",
        "@vue/eslint-config-prettier/skip-formatting",
    ],
    "parserOptions": {"ecmaVersion": "latest"},
    "rules": {"vue/multi-word-component-names": "off"},
}
