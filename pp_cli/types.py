"""Typed response definitions for PowerPlatformClient methods.

These TypedDicts document the shape of dicts returned by public API methods.
They are optional — runtime behavior is unchanged (plain dicts).
"""

from __future__ import annotations

from typing import TypedDict


class CardRow(TypedDict, total=False):
    """Flat card summary returned by list_cards() and get_card()."""

    id: str
    name: str
    description: str | None
    state: int | None
    created_on: str | None
    modified_on: str | None


class CardListResult(TypedDict):
    """Return type of PowerPlatformClient.list_cards()."""

    cards: list[CardRow]


class RemoveCardResult(TypedDict):
    """Return type of PowerPlatformClient.remove_card().

    removed is False (and card_id None) when the user declined the prompt.
    """

    ok: bool
    removed: bool
    card_id: str | None
    card: str
