"""
HTTP request layer, OData error translation, and token handling for pp-cli.
"""

import json
import re
import sys
import time
import urllib.error
import urllib.request
import uuid

from pp_cli import config
from pp_cli.exceptions import ApiError, CliError, HTTPError, SetupError

# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


# ---------------------------------------------------------------------------
# OData error envelope
# ---------------------------------------------------------------------------


def _odata_error_message(body):
    """Return error.message from an OData error envelope, or None."""
    if not body:
        return None
    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(parsed, dict):
        return None
    error = parsed.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None


def _raise_api_error(err):
    """Translate an HTTPError into ApiError (or SetupError for bare 401s)."""
    message = _odata_error_message(err.body)
    if message:
        raise ApiError(message, status=err.code) from err
    if err.code == 401:
        raise SetupError(
            "[TOKEN_EXPIRED] The access token was rejected (HTTP 401). "
            "Refresh PP_BAP_TOKEN / PP_DATAVERSE_TOKEN in .env or run: pp-cli setup"
        ) from err
    detail = _sanitize_error(err.body)
    text = f"HTTP {err.code}: {err.reason}"
    if detail:
        text += f" - {detail}"
    raise ApiError(text, status=err.code) from err


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _http_request(url, method="GET", headers=None, data=None):
    """Make a single HTTP request with standard error handling.
    Returns parsed JSON, or None when the response has no body (e.g. 204).
    Raises HTTPError for HTTP errors (caller translates them).
    Raises CliError on network/timeout/parse errors. Never retries."""
    body = json.dumps(data).encode("utf-8") if data is not None else None
    request_id = (headers or {}).get("x-ms-client-request-id")
    timeout = max(1, config.HTTP_TIMEOUT_SECONDS)
    start = time.perf_counter()
    req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
    _log_http_event(
        phase="request",
        method=method,
        url=url,
        request_id=request_id,
        timeout_seconds=timeout,
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            content_type = resp.headers.get("Content-Type", "")
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
                raise CliError(
                    "[ERROR] Response too large from Power Platform API "
                    f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
                )
            _log_http_event(
                phase="response",
                method=method,
                url=url,
                status=getattr(resp, "status", 200),
                content_type=content_type,
                bytes=len(raw),
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
            if not raw.strip():
                return None
            try:
                return json.loads(raw.decode("utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError):
                raise CliError(
                    "[ERROR] Unexpected response from Power Platform API (not valid JSON)."
                ) from None
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        _log_http_event(
            phase="response",
            method=method,
            url=url,
            status=e.code,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
            request_id=request_id,
        )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        _log_http_event(
            phase="network_error", method=method, url=url, error="timeout", request_id=request_id
        )
        raise CliError(f"[ERROR] Request timed out after {timeout} seconds.") from e
    except urllib.error.URLError as e:
        _log_http_event(
            phase="network_error",
            method=method,
            url=url,
            error=f"url_error: {e.reason}",
            request_id=request_id,
        )
        raise CliError(f"[ERROR] Connection failed: {e.reason}") from e


def _auth_headers(token, accept="application/json"):
    return {
        "Authorization": f"Bearer {token}",
        "accept": accept,
        "x-ms-client-request-id": str(uuid.uuid4()),
    }


def bap_request(path):
    """GET a Business Application Platform resource (uses the BAP token)."""
    if not config.BAP_TOKEN:
        raise SetupError("[SETUP_NEEDED] PP_BAP_TOKEN is not set. Run: pp-cli setup")
    url = config.BAP_API_URL + path
    try:
        return _http_request(url, "GET", _auth_headers(config.BAP_TOKEN))
    except HTTPError as e:
        _raise_api_error(e)


def dataverse_request(url, method="GET"):
    """Call a Dataverse OData endpoint (uses the Dataverse token).
    Asks for JSON with OData metadata suppressed."""
    if not config.DATAVERSE_TOKEN:
        raise SetupError("[SETUP_NEEDED] PP_DATAVERSE_TOKEN is not set. Run: pp-cli setup")
    headers = _auth_headers(config.DATAVERSE_TOKEN, config.ODATA_ACCEPT)
    try:
        return _http_request(url, method, headers)
    except HTTPError as e:
        _raise_api_error(e)


# ---------------------------------------------------------------------------
# Token validation
# ---------------------------------------------------------------------------


def _check_token():
    """Make sure both access tokens are configured before running a command."""
    missing = [
        key
        for key, value in (
            ("PP_BAP_TOKEN", config.BAP_TOKEN),
            ("PP_DATAVERSE_TOKEN", config.DATAVERSE_TOKEN),
        )
        if not value
    ]
    if missing:
        raise SetupError(f"[SETUP_NEEDED] Missing {', '.join(missing)}. Run: pp-cli setup")
