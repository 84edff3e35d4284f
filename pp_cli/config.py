"""
pp-cli shared configuration, constants, and module-level state.
Standalone module — no imports from other project files except exceptions.
"""

import os
import tempfile

from pp_cli.exceptions import CliError, SetupError  # noqa: F401  (re-export)

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

# Keys that may also come from the process environment (containers, CI).
_KNOWN_KEYS = (
    "PP_BAP_TOKEN",
    "PP_DATAVERSE_TOKEN",
    "PP_HTTP_TIMEOUT_SECONDS",
    "PP_HTTP_MAX_RESPONSE_BYTES",
    "PP_HTTP_LOG",
    "PP_MCP_RESPONSE_MODE",
)


def load_env():
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in _KNOWN_KEYS:
        if key in os.environ:
            env[key] = os.environ[key]
    return env


def save_env_value(key, value):
    """Update or add a key in the .env file (atomic write-then-rename)."""
    lines = []
    found = False
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            lines = f.readlines()
    for i, line in enumerate(lines):
        if line.strip().startswith(f"{key}="):
            lines[i] = f"{key}={value}\n"
            found = True
            break
    if not found:
        lines.append(f"{key}={value}\n")
    env_dir = os.path.dirname(ENV_PATH) or "."
    fd, tmp_path = tempfile.mkstemp(dir=env_dir, prefix=".env_tmp_")
    try:
        with os.fdopen(fd, "w") as f:
            f.writelines(lines)
        os.replace(tmp_path, ENV_PATH)
    except Exception:
        try:
            os.remove(tmp_path)
        except OSError:
            pass
        raise
    # Owner-only on Unix/Mac. No-op on Windows.
    try:
        os.chmod(ENV_PATH, 0o600)
    except (OSError, NotImplementedError):
        pass


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.1.0"
CONTRACT_SCHEMA_VERSION = "1.0"

BAP_API_URL = "https://api.bap.microsoft.com"
BAP_API_VERSION = "2020-10-01"
DATAVERSE_API_VERSION = "v9.1"
ODATA_ACCEPT = "application/json;odata.metadata=none"

VALID_FORMATS = ("json", "table")
VALID_MCP_RESPONSE_MODES = {"legacy", "envelope"}

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env)
# ---------------------------------------------------------------------------

env = load_env()

BAP_TOKEN = env.get("PP_BAP_TOKEN", "")
DATAVERSE_TOKEN = env.get("PP_DATAVERSE_TOKEN", "")
HTTP_TIMEOUT_SECONDS = _env_int("PP_HTTP_TIMEOUT_SECONDS", 30)
HTTP_MAX_RESPONSE_BYTES = _env_int("PP_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("PP_HTTP_LOG", False)

MCP_RESPONSE_MODE = env.get("PP_MCP_RESPONSE_MODE", "legacy").strip().lower()
if MCP_RESPONSE_MODE not in VALID_MCP_RESPONSE_MODES:
    MCP_RESPONSE_MODE = "legacy"

# ---------------------------------------------------------------------------
# Runtime state (set by cli.main from global flags)
# ---------------------------------------------------------------------------

_cache = {}
RUNTIME_VERBOSE = False
RUNTIME_QUIET = False
