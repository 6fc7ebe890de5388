"""Frontend generators keyed by framework value."""

from create_my_stack.generators.frontend.nextjs import NextJSGenerator
from create_my_stack.generators.frontend.react import ReactGenerator
from create_my_stack.generators.frontend.vue import VueGenerator

FRONTEND_GENERATORS = {
    "react": ReactGenerator,
    "vue": VueGenerator,
    "nextjs": NextJSGenerator,
}

__all__ = [
    "FRONTEND_GENERATORS",
    "NextJSGenerator",
    "ReactGenerator",
    "VueGenerator",
]
