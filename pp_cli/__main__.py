"""Allow ``python -m pp_cli``."""

from pp_cli.cli import main

main()
