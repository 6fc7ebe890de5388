"""Allow ``python -m create_my_stack``."""

from create_my_stack.cli import main

main()
