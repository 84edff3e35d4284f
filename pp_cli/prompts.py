"""Interactive terminal prompts."""

_YES = {"y", "yes"}


def confirm_prompt(message, default=False):
    """Ask a yes/no question on the terminal. Empty input returns *default*.
    A closed stdin (EOF) counts as "no"."""
    suffix = " [Y/n]: " if default else " [y/N]: "
    try:
        answer = input(message + suffix).strip().lower()
    except EOFError:
        print()
        return False
    if not answer:
        return default
    return answer in _YES
