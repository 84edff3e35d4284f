"""
PowerPlatformClient — public Python API for managing Power Platform cards.

Single entry point for programmatic use and the MCP server.
All methods return flat dicts suitable for JSON serialization.
"""

from __future__ import annotations

from typing import Any

from pp_cli._utils import validate_card_selector
from pp_cli.api import _check_token
from pp_cli.cards import get_card, get_card_by_name, list_cards
from pp_cli.remover import CardRemover, RemovalRequest


def _card_row(card):
    return {
        "id": card.get("cardid"),
        "name": card.get("name", ""),
        "description": card.get("description"),
        "state": card.get("statecode"),
        "created_on": card.get("createdon"),
        "modified_on": card.get("modifiedon"),
    }


class PowerPlatformClient:
    """Public API surface for Power Platform cards.

    All methods use keyword-only arguments and return plain dicts
    suitable for JSON serialization. Raises CliError/SetupError on failure.
    """

    def __init__(self, *, validate_token=True, confirm=None):
        """Initialize the client.

        Args:
            validate_token: If True, check that both access tokens are
                configured before any API call.
            confirm: Optional ``(message) -> bool`` used by remove_card when
                confirmation is not skipped. Defaults to a terminal prompt.
        """
        if validate_token:
            _check_token()
        self._remover = CardRemover(confirm=confirm)

    def list_cards(self, *, environment: str, as_admin: bool = False) -> dict[str, Any]:
        """List cards in an environment.

        Returns:
            dict with key ``cards`` (list of card rows).
        """
        return {"cards": [_card_row(c) for c in list_cards(environment, as_admin)]}

    def get_card(
        self,
        *,
        environment: str,
        card_id: str | None = None,
        name: str | None = None,
        as_admin: bool = False,
    ) -> dict[str, Any]:
        """Get one card by GUID or by exact name.

        Exactly one of card_id/name must be given.
        """
        validate_card_selector(card_id, name)
        if card_id:
            return _card_row(get_card(environment, card_id, as_admin))
        return _card_row(get_card_by_name(environment, name, as_admin))

    def remove_card(
        self,
        *,
        environment: str,
        card_id: str | None = None,
        name: str | None = None,
        as_admin: bool = False,
        confirm: bool = False,
    ) -> dict[str, Any]:
        """Remove a card by GUID or by exact name.

        Args:
            environment: Environment name (GUID-like id as shown in the admin center).
            card_id: Card GUID. Mutually exclusive with name.
            name: Card name, resolved to an id via lookup.
            as_admin: Resolve the environment in admin scope.
            confirm: True to skip the interactive confirmation.

        Returns:
            dict with ok, removed, card_id and card (the id or name given).
        """
        request = RemovalRequest(
            environment=environment,
            card_id=card_id,
            card_name=name,
            as_admin=as_admin,
            skip_confirmation=confirm,
        )
        removed_id = self._remover.remove(request)
        return {
            "ok": True,
            "removed": removed_id is not None,
            "card_id": removed_id,
            "card": request.target,
        }
