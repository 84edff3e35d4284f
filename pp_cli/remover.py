"""
Card removal: validate the request, confirm, resolve the id, delete.
"""

import sys
from dataclasses import dataclass

from pp_cli import config
from pp_cli._utils import validate_card_selector
from pp_cli.cards import delete_card, get_card_by_name
from pp_cli.environments import get_dynamics_api_url
from pp_cli.exceptions import CardLookupError
from pp_cli.prompts import confirm_prompt


@dataclass(frozen=True)
class RemovalRequest:
    """Validated input contract for `card remove`."""

    environment: str
    card_id: str | None = None
    card_name: str | None = None
    as_admin: bool = False
    skip_confirmation: bool = False

    @property
    def target(self) -> str:
        """Human-readable card reference (id if given, else name)."""
        return self.card_id or self.card_name or ""

    def validate(self):
        validate_card_selector(self.card_id, self.card_name)


class CardRemover:
    """Removes one card per call. All collaborators are injectable.

    Args:
        confirm: ``(message) -> bool`` confirmation provider.
        lookup_card: ``(environment, name) -> dict`` returning the card record.
        resolve_api_url: ``(environment, as_admin) -> str`` Dataverse base URL.
        delete: ``(api_url, card_id) -> None`` issuing the DELETE.
    """

    def __init__(self, *, confirm=None, lookup_card=None, resolve_api_url=None, delete=None):
        self._confirm = confirm or confirm_prompt
        self._lookup_card = lookup_card or get_card_by_name
        self._resolve_api_url = resolve_api_url or get_dynamics_api_url
        self._delete = delete or delete_card

    def resolve_card_id(self, request):
        if request.card_id:
            return request.card_id
        card = self._lookup_card(request.environment, request.card_name)
        card_id = card.get("cardid") if isinstance(card, dict) else None
        if not card_id:
            raise CardLookupError(
                f"[ERROR] Lookup for card '{request.card_name}' returned no cardid."
            )
        return card_id

    def remove(self, request):
        """Remove the card described by *request*.

        Returns the deleted card id, or None if the user declined the prompt.
        Raises ValidationError, CardLookupError, ApiError (or CliError for
        transport failures). Nothing is retried.
        """
        request.validate()
        if config.RUNTIME_VERBOSE:
            print(f"Removing card '{request.target}'...", file=sys.stderr)

        if not request.skip_confirmation:
            if not self._confirm(f"Are you sure you want to remove card '{request.target}'?"):
                return None

        card_id = self.resolve_card_id(request)
        api_url = self._resolve_api_url(request.environment, request.as_admin)
        self._delete(api_url, card_id)
        return card_id
