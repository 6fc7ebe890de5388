"""Pieces shared by the React, Vue and Next.js generators."""

from __future__ import annotations

from typing import Any

from ...config import ProjectConfig

PRETTIER: dict[str, Any] = {"semi": True, "singleQuote": True, "tabWidth": 2}

_STYLING_DEV_DEPENDENCIES = {
    "tailwind": {
        "tailwindcss": "^3.4.1",
        "postcss": "^8.4.38",
        "autoprefixer": "^10.4.19",
    },
    "scss": {"sass": "^1.72.0"},
}

_STATE_DEPENDENCIES = {
    "redux": {"@reduxjs/toolkit": "^2.2.2", "react-redux": "^9.1.0"},
    "zustand": {"zustand": "^4.5.2"},
    "pinia": {"pinia": "^2.1.7"},
}


def styling_dev_dependencies(styling: str) -> dict[str, str]:
    return dict(_STYLING_DEV_DEPENDENCIES.get(styling, {}))


def state_dependencies(state_management: str) -> dict[str, str]:
    return dict(_STATE_DEPENDENCIES.get(state_management, {}))


def frontend_context(config: ProjectConfig, **extra: Any) -> dict[str, Any]:
    """Template context for frontend files.

    ``style_ext`` is ``scss`` when Sass is selected so the global stylesheet
    gets the right extension.  ``class_attr`` is the attribute the
    ``cls`` macro in ``frontend_common/macros.j2`` writes (``className`` for
    JSX, ``class`` for Vue).
    """
    context = config.template_context()
    context["style_ext"] = "scss" if config.frontend.styling == "scss" else "css"
    context["class_attr"] = "className"
    context.update(extra)
    return context


def vite_tsconfig(jsx: str, include: list[str]) -> tuple[dict[str, Any], dict[str, Any]]:
    """``tsconfig.json`` and ``tsconfig.node.json`` for a Vite app."""
    tsconfig = {
        "compilerOptions": {
            "target": "ES2020",
            "useDefineForClassFields": True,
            "lib": ["ES2020", "DOM", "DOM.Iterable"],
            "module": "ESNext",
            "skipLibCheck": True,
            "moduleResolution": "bundler",
            "allowImportingTsExtensions": True,
            "resolveJsonModule": True,
            "isolatedModules": True,
            "noEmit": True,
            "jsx": jsx,
            "strict": True,
            "noUnusedLocals": True,
            "noUnusedParameters": True,
            "noFallthroughCasesInSwitch": True,
            "baseUrl": ".",
            "paths": {"@/*": ["src/*"]},
        },
        "include": include,
        "references": [{"path": "./tsconfig.node.json"}],
    }
    tsconfig_node = {
        "compilerOptions": {
            "composite": True,
            "skipLibCheck": True,
            "module": "ESNext",
            "moduleResolution": "bundler",
            "allowSyntheticDefaultImports": True,
            "strict": True,
        },
        "include": ["vite.config.ts"],
    }
    return tsconfig, tsconfig_node
