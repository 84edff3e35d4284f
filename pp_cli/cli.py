"""
pp-cli — CLI tool for managing Microsoft Power Platform cards
"""

import argparse
import sys

from pp_cli import config
from pp_cli.api import _check_token
from pp_cli.commands import cmd_card_get, cmd_card_list, cmd_card_remove
from pp_cli.exceptions import CliError, ValidationError
from pp_cli.setup_wizard import cmd_setup

HELP_TEXT = """\
Usage: pp-cli <command> [args...]

Global flags:
  --format table          Output as readable text instead of JSON (default: json)
  --quiet, -q             Suppress warnings
  --verbose, -v           Show progress and HTTP request logging
  --version               Show version number

Commands:
  setup                   - Interactive setup wizard (stores access tokens in .env)
  card list               - List cards in an environment
    -e, --environment <env> Environment name (required)
    --asAdmin               Resolve the environment in admin scope
  card get                - Get a specific card
    -e, --environment <env> Environment name (required)
    -i, --id <id>           Card GUID (use either id or name)
    -n, --name <name>       Card name (use either id or name)
    --asAdmin               Resolve the environment in admin scope
  card remove             - Remove a specific card
    -e, --environment <env> Environment name (required)
    -i, --id <id>           Card GUID (use either id or name)
    -n, --name <name>       Card name (use either id or name)
    --asAdmin               Resolve the environment in admin scope
    --confirm               Don't prompt for confirmation
  version                 - Show version number
"""


# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so flags work after subcommand)
# ---------------------------------------------------------------------------


_VALUE_OPTIONS = {"--environment", "-e", "--id", "-i", "--name", "-n"}


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (format_str, quiet, verbose, remaining_argv).
    Handles --version directly. The token after a value-taking option is
    always kept as that option's value.
    """
    fmt = "json"
    quiet = False
    verbose = False
    remaining = []
    i = 0
    while i < len(argv):
        if argv[i] in _VALUE_OPTIONS and i + 1 < len(argv):
            remaining.extend(argv[i : i + 2])
            i += 2
            continue
        if argv[i] == "--version":
            print(f"pp-cli {config.VERSION}")
            sys.exit(0)
        elif argv[i] in ("--quiet", "-q"):
            quiet = True
        elif argv[i] in ("--verbose", "-v"):
            verbose = True
        elif argv[i] == "--format" and i + 1 < len(argv):
            fmt = argv[i + 1]
            if fmt not in config.VALID_FORMATS:
                raise ValidationError(f"[ERROR] Invalid format '{fmt}'. Use: json, table")
            i += 1
        else:
            remaining.append(argv[i])
        i += 1
    if quiet and verbose:
        raise ValidationError("[ERROR] --quiet and --verbose are mutually exclusive.")
    return fmt, quiet, verbose, remaining


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Parser that raises ValidationError instead of printing usage and exiting."""

    def error(self, message):
        raise ValidationError(f"[ERROR] {message}")


def _add_environment_args(p):
    p.add_argument("--environment", "-e", required=True)
    p.add_argument("--asAdmin", action="store_true")


def _add_selector_args(p):
    # id/name exclusivity is validated by the command, not argparse.
    p.add_argument("--id", "-i")
    p.add_argument("--name", "-n")


def build_parser():
    parser = _SubcommandParser(
        prog="pp-cli",
        description="CLI tool for managing Microsoft Power Platform cards",
        add_help=False,
    )
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)

    # --- setup / version ---
    sub.add_parser("setup").set_defaults(func=None)
    sub.add_parser("version").set_defaults(func=None)

    # --- card ---
    card = sub.add_parser("card")
    card_sub = card.add_subparsers(dest="card_command", parser_class=_SubcommandParser)

    p = card_sub.add_parser("list")
    _add_environment_args(p)
    p.set_defaults(func=cmd_card_list)

    p = card_sub.add_parser("get")
    _add_environment_args(p)
    _add_selector_args(p)
    p.set_defaults(func=cmd_card_get)

    p = card_sub.add_parser("remove")
    _add_environment_args(p)
    _add_selector_args(p)
    p.add_argument("--confirm", action="store_true")
    p.set_defaults(func=cmd_card_remove)

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

NO_TOKEN_COMMANDS = {"setup", "version"}


def _emit_cli_error(err):
    print(str(err), file=sys.stderr)


def main(argv=None):
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(HELP_TEXT)
        sys.exit(0)

    try:
        fmt, quiet, verbose, remaining_argv = _extract_global_flags(argv)
        config.RUNTIME_QUIET = quiet
        config.RUNTIME_VERBOSE = verbose
        if verbose:
            config.HTTP_LOG_ENABLED = True

        ns = build_parser().parse_args(remaining_argv)
        ns.format = fmt

        if ns.show_help or not ns.command:
            print(HELP_TEXT)
            sys.exit(0)

        cmd = ns.command

        if cmd == "version":
            print(f"pp-cli {config.VERSION}")
            sys.exit(0)

        if cmd == "setup":
            cmd_setup()
            sys.exit(0)

        if cmd == "card" and not ns.card_command:
            raise ValidationError("[ERROR] Missing card subcommand. Use: list, get, remove")

        if cmd not in NO_TOKEN_COMMANDS:
            _check_token()

        handler = getattr(ns, "func", None)
        if handler:
            handler(ns)
        else:
            raise CliError(f"[ERROR] Unknown command: {cmd}")

    except CliError as e:
        _emit_cli_error(e)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
