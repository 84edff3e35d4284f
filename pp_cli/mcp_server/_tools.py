"""Card tools: list, get, remove."""

from __future__ import annotations

from pp_cli.mcp_server._core import _call, _contract_error, _finalize_tool_result


def list_cards(environment: str, as_admin: bool = False) -> dict:
    """List cards in a Power Platform environment.

    Args:
        environment: Environment name/id.
        as_admin: Resolve the environment in admin scope.

    Returns:
        Dict with cards (list of id, name, description, state, created_on, modified_on).
    """
    return _finalize_tool_result(_call("list_cards", environment=environment, as_admin=as_admin))


def get_card(
    environment: str,
    card_id: str | None = None,
    name: str | None = None,
    as_admin: bool = False,
) -> dict:
    """Get one card by GUID or exact name (give exactly one of card_id/name)."""
    return _finalize_tool_result(
        _call("get_card", environment=environment, card_id=card_id, name=name, as_admin=as_admin)
    )


def remove_card(
    environment: str,
    card_id: str | None = None,
    name: str | None = None,
    as_admin: bool = False,
    confirm: bool = False,
) -> dict:
    """Permanently remove a card. Cannot be undone.

    Args:
        environment: Environment name/id.
        card_id: Card GUID. Give exactly one of card_id/name.
        name: Card name.
        as_admin: Resolve the environment in admin scope.
        confirm: Must be True; removal is refused otherwise.

    Returns:
        Dict with ok, removed, card_id, card.
    """
    if not confirm:
        return _finalize_tool_result(
            _contract_error(
                "[ERROR] Removing a card requires confirm=True (this cannot be undone).",
                "validation",
            )
        )
    return _finalize_tool_result(
        _call(
            "remove_card",
            environment=environment,
            card_id=card_id,
            name=name,
            as_admin=as_admin,
            confirm=True,
        )
    )


def register(mcp):
    """Register all card tools with the FastMCP instance."""
    mcp.tool()(list_cards)
    mcp.tool()(get_card)
    mcp.tool()(remove_card)
