"""Allow ``python -m pp_cli.mcp_server``."""

from pp_cli.mcp_server import main

main()
