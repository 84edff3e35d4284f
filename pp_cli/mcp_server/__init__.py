"""MCP server exposing PowerPlatformClient methods as tools.

Package structure:
  __init__.py  — FastMCP init, register() call, re-exports
  __main__.py  — ``python -m pp_cli.mcp_server`` entry point
  _core.py     — Client caching, _call dispatcher, response contract
  _tools.py    — list_cards, get_card, remove_card

Run: python -m pp_cli.mcp_server
Requires: pip install .[mcp]
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from pp_cli.mcp_server import _tools

mcp = FastMCP(
    "power-platform-cards",
    instructions=(
        "Microsoft Power Platform card tools. "
        "Every call needs an environment name. "
        "Cards are addressed by GUID (card_id) or exact name, never both. "
        "remove_card is permanent and requires confirm=True."
    ),
)

_tools.register(mcp)

from pp_cli.mcp_server._core import (  # noqa: E402, F401
    _call,
    _contract_error,
    _finalize_tool_result,
    _get_client,
)
from pp_cli.mcp_server._tools import get_card, list_cards, remove_card  # noqa: E402, F401


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()
