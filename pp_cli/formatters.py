"""Output formatting for pp-cli: JSON by default, plain-text tables on request."""

import json
import re

_CONTROL_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

_STATE_LABELS = {0: "active", 1: "inactive"}


def _trunc(s, maxlen):
    """Truncate string with ellipsis indicator."""
    if not s:
        return ""
    return s[: maxlen - 1] + "…" if len(s) > maxlen else s


def _sanitize_str(s):
    """Strip ANSI escape sequences and control chars from table output."""
    if not s:
        return s
    return _CONTROL_RE.sub("", str(s))


def _table(columns, rows, footer=None):
    """Build a formatted table string.
    columns: list of (name, width) tuples. Last column has no width (fills).
    rows: list of tuples matching columns."""
    parts = []
    for i, (name, width) in enumerate(columns):
        if i == len(columns) - 1:
            parts.append(name)
        else:
            parts.append(f"{name:<{width}}")
    header = " ".join(parts)
    lines = [header, "-" * max(len(header), 80)]
    for row in rows:
        parts = []
        for i, val in enumerate(row):
            safe = _sanitize_str(val) if isinstance(val, str) else str(val)
            if i == len(columns) - 1:
                parts.append(safe)
            else:
                parts.append(f"{safe:<{columns[i][1]}}")
        lines.append(" ".join(parts))
    if footer:
        lines.append(f"\n{footer}")
    return "\n".join(lines)


def _state_label(state):
    if state is None:
        return "-"
    return _STATE_LABELS.get(state, str(state))


def output(data, formatter=None, fmt="json"):
    """Output data in requested format."""
    if fmt == "table" and formatter:
        print(formatter(data))
    else:
        print(json.dumps(data, indent=2, ensure_ascii=False))


def format_cards_table(result):
    cards = result.get("cards", [])
    rows = [
        (
            c.get("id") or "",
            _state_label(c.get("state")),
            (c.get("modified_on") or "")[:10],
            _trunc(c.get("name") or "", 60),
        )
        for c in cards
    ]
    return _table(
        [("ID", 36), ("State", 8), ("Modified", 10), ("Name", 0)],
        rows,
        footer=f"Total: {len(cards)} card(s)",
    )


def format_card_detail(card):
    lines = [
        f"Card:        {_sanitize_str(card.get('name')) or '-'}",
        f"ID:          {card.get('id') or '-'}",
        f"State:       {_state_label(card.get('state'))}",
        f"Created:     {card.get('created_on') or '-'}",
        f"Modified:    {card.get('modified_on') or '-'}",
    ]
    description = card.get("description")
    if description:
        lines.append("")
        lines.append(_sanitize_str(description))
    return "\n".join(lines)
