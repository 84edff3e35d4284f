"""
Card operations against an environment's Dataverse API.
"""

import sys
import urllib.parse

from pp_cli import config
from pp_cli._utils import odata_quote
from pp_cli.api import dataverse_request
from pp_cli.environments import get_dynamics_api_url
from pp_cli.exceptions import CardLookupError, CliError


def cards_url(api_url, card_id=None):
    """Build the cards entity-set URL, optionally addressing one card."""
    url = f"{api_url}/api/data/{config.DATAVERSE_API_VERSION}/cards"
    if card_id:
        url += f"({card_id})"
    return url


def _value_list(result, operation):
    """Extract the OData `value` array from a collection response."""
    if isinstance(result, dict) and isinstance(result.get("value"), list):
        return result["value"]
    raise CliError(
        f"[ERROR] Unexpected {operation} response shape: expected an OData collection."
    )


def warn_if_empty(cards, environment):
    """Warn on stderr when a listing came back empty (wrong environment or no access)."""
    if config.RUNTIME_QUIET or cards:
        return
    print(
        f"[WARN] No cards found in environment '{environment}'. Check the environment "
        "name and that your Dataverse token belongs to the same organization.",
        file=sys.stderr,
    )


def list_cards(environment, as_admin=False):
    """List all cards in an environment."""
    api_url = get_dynamics_api_url(environment, as_admin)
    cards = _value_list(dataverse_request(cards_url(api_url)), "list cards")
    warn_if_empty(cards, environment)
    return cards


def get_card(environment, card_id, as_admin=False):
    """Get a single card by GUID."""
    api_url = get_dynamics_api_url(environment, as_admin)
    result = dataverse_request(cards_url(api_url, card_id))
    if not isinstance(result, dict):
        raise CliError("[ERROR] Unexpected get card response shape: expected JSON object.")
    return result


def get_card_by_name(environment, name, as_admin=False):
    """Get the single card whose name matches exactly.
    Raises CardLookupError when no card or several cards match."""
    api_url = get_dynamics_api_url(environment, as_admin)
    query = urllib.parse.quote(f"name eq {odata_quote(name)}", safe="'")
    result = dataverse_request(f"{cards_url(api_url)}?$filter={query}")
    try:
        matches = _value_list(result, "card lookup")
    except CliError as e:
        raise CardLookupError(str(e)) from e
    if not matches:
        raise CardLookupError(f"[ERROR] The specified card '{name}' does not exist.")
    if len(matches) > 1:
        ids = ", ".join(str(m.get("cardid")) for m in matches if isinstance(m, dict))
        raise CardLookupError(f"[ERROR] Multiple cards with name '{name}' found: {ids}")
    return matches[0]


def delete_card(api_url, card_id):
    """Delete a card. The response body (usually empty, 204) is discarded."""
    dataverse_request(cards_url(api_url, card_id), method="DELETE")
