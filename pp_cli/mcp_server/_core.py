"""Core helpers: client caching, _call dispatcher, response contract."""

from __future__ import annotations

from pp_cli import config
from pp_cli.client import PowerPlatformClient
from pp_cli.exceptions import ApiError, CardLookupError, CliError, SetupError, ValidationError

_client: PowerPlatformClient | None = None


def _refuse_prompt(message: str) -> bool:
    """MCP tools cannot prompt; anything that reaches here is declined."""
    return False


def _get_client() -> PowerPlatformClient:
    """Return a cached PowerPlatformClient, creating one on first use."""
    global _client
    if _client is None:
        _client = PowerPlatformClient(confirm=_refuse_prompt)
    return _client


def _contract_error(message: str, error_type: str = "error") -> dict:
    """Return a stable MCP error envelope."""
    return {
        "ok": False,
        "schema_version": config.CONTRACT_SCHEMA_VERSION,
        "type": error_type,
        "error": message,
    }


def _finalize_tool_result(result):
    """Finalize tool response based on configured MCP response mode.

    Modes:
        - legacy (default): dicts gain ok/schema_version, shapes unchanged.
        - envelope: success is always {"ok", "schema_version", "data"}.
    """
    if isinstance(result, dict) and result.get("ok") is False:
        return result
    if config.MCP_RESPONSE_MODE == "envelope":
        data = dict(result) if isinstance(result, dict) else result
        if isinstance(data, dict):
            data.pop("ok", None)
            data.pop("schema_version", None)
        return {"ok": True, "schema_version": config.CONTRACT_SCHEMA_VERSION, "data": data}
    if isinstance(result, dict):
        out = dict(result)
        out.setdefault("ok", True)
        out.setdefault("schema_version", config.CONTRACT_SCHEMA_VERSION)
        return out
    return result


_ALLOWED_METHODS = {"list_cards", "get_card", "remove_card"}

_ERROR_TYPES = (
    (SetupError, "setup"),
    (ValidationError, "validation"),
    (CardLookupError, "lookup"),
    (ApiError, "api"),
    (CliError, "error"),
)


def _call(method_name: str, **kwargs):
    """Call a PowerPlatformClient method, converting exceptions to error dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        client = _get_client()
        return getattr(client, method_name)(**kwargs)
    except CliError as e:
        error_type = next(name for cls, name in _ERROR_TYPES if isinstance(e, cls))
        return _contract_error(str(e), error_type)
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")
