"""
Command implementations for pp-cli.
Each cmd_*() function receives an argparse.Namespace and handles one CLI command.

Business logic lives in client.py (PowerPlatformClient). These thin wrappers
handle argparse → keyword args, format selection, and formatter dispatch.
"""

from pp_cli.client import PowerPlatformClient
from pp_cli.formatters import format_card_detail, format_cards_table, output


def _get_client():
    """Return a PowerPlatformClient (token presence already checked by main)."""
    return PowerPlatformClient(validate_token=False)


def cmd_card_list(ns):
    result = _get_client().list_cards(environment=ns.environment, as_admin=ns.asAdmin)
    output(result, format_cards_table, ns.format)


def cmd_card_get(ns):
    result = _get_client().get_card(
        environment=ns.environment, card_id=ns.id, name=ns.name, as_admin=ns.asAdmin
    )
    output(result, format_card_detail, ns.format)


def cmd_card_remove(ns):
    # Success is silent: exit code 0, nothing on stdout.
    _get_client().remove_card(
        environment=ns.environment,
        card_id=ns.id,
        name=ns.name,
        as_admin=ns.asAdmin,
        confirm=ns.confirm,
    )
