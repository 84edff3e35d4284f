"""
Interactive setup wizard for pp-cli. Stores access tokens in .env.
"""

from pp_cli import config
from pp_cli.api import _mask_token

_TOKENS = (
    (
        "PP_BAP_TOKEN",
        "BAP_TOKEN",
        "Power Platform (BAP) token",
        "az account get-access-token --resource https://service.powerapps.com/",
    ),
    (
        "PP_DATAVERSE_TOKEN",
        "DATAVERSE_TOKEN",
        "Dataverse token",
        "az account get-access-token --resource https://<org>.crm.dynamics.com",
    ),
)


def _clean_token(raw):
    """Strip quotes and a leading 'Bearer ' from a pasted token."""
    token = raw.strip().strip('"').strip("'").strip()
    if token.lower().startswith("bearer "):
        token = token[7:].strip()
    return token


def _prompt_token(env_key, attr, label, hint, existing):
    print(f"{label}")
    print("-" * 40)
    print(f"  Get one with: {hint}")
    if existing:
        print(f"  Current: {_mask_token(existing)} (press Enter to keep)")
    token = _clean_token(input(f"Paste your {label}: "))
    if not token:
        print("  Kept existing value." if existing else "  Skipped.")
        print()
        return
    config.save_env_value(env_key, token)
    setattr(config, attr, token)
    print(f"  Saved: {env_key}")
    print()


def _setup_done():
    """Print setup completion summary."""
    final_env = config.load_env()
    print("=" * 56)
    print("  Setup complete!")
    print("=" * 56)
    print()
    for env_key, _attr, label, _hint in _TOKENS:
        tok = final_env.get(env_key, "")
        print(f"  {label + ':':<30}{_mask_token(tok) if tok else '(not set)'}")
    print()
    print("Try it out:")
    print("  pp-cli card list -e <environment> --format table")
    print()
    print("Access tokens are short-lived. When they expire, run setup again:")
    print("  pp-cli setup")


def cmd_setup():
    """Interactive setup wizard. Creates or updates .env configuration."""
    print()
    print("=" * 56)
    print("  pp-cli setup wizard")
    print("=" * 56)
    print()
    current_env = config.load_env()
    for env_key, attr, label, hint in _TOKENS:
        _prompt_token(env_key, attr, label, hint, current_env.get(env_key, ""))
    _setup_done()
