"""
Shared pure-utility functions for pp-cli.

These helpers have no business logic and no side effects.
They are used across cards.py, client.py, remover.py, and the MCP server.
"""

import re

from pp_cli.exceptions import ValidationError

_GUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def is_valid_guid(value):
    """True if *value* is a canonical 8-4-4-4-12 hex GUID string."""
    return isinstance(value, str) and bool(_GUID_RE.match(value))


def validate_card_selector(card_id, name):
    """Enforce the id/name option set: exactly one given, id must be a GUID.
    Raises ValidationError."""
    if card_id is not None and not is_valid_guid(card_id):
        raise ValidationError(f"[ERROR] {card_id} is not a valid GUID")
    given = [opt for opt, val in (("id", card_id), ("name", name)) if val is not None]
    if not given:
        raise ValidationError("[ERROR] Specify one of the following options: id, name.")
    if len(given) > 1:
        raise ValidationError(
            "[ERROR] Specify one of the following options: id, name, but not multiple."
        )


def odata_quote(value):
    """Render *value* as an OData string literal (single quotes doubled)."""
    return "'" + str(value).replace("'", "''") + "'"
