"""Tests for api.py — HTTP layer, OData error translation, token checks."""

import io
import json
import urllib.error
from unittest.mock import patch

import pytest

from pp_cli.api import (
    _check_token,
    _http_request,
    _mask_token,
    _odata_error_message,
    _sanitize_error,
    bap_request,
    dataverse_request,
)
from pp_cli.exceptions import ApiError, CliError, HTTPError, SetupError

_URL = "https://org.crm.dynamics.com/api/data/v9.1/cards(11111111-1111-1111-1111-111111111111)"


def _http_error(code, reason, body=b""):
    return urllib.error.HTTPError(_URL, code, reason, {}, io.BytesIO(body))


class TestMaskToken:
    def test_long_token(self):
        assert _mask_token("abcdef1234567890") == "abcdef..."

    def test_short_token(self):
        assert _mask_token("abc") == "abc"


class TestSanitizeError:
    def test_strips_html(self):
        assert _sanitize_error("<h1>Error</h1><p>Details</p>") == "ErrorDetails"

    def test_truncates_long_body(self):
        result = _sanitize_error("x" * 1000)
        assert result.endswith("... [truncated]")

    def test_empty_body(self):
        assert _sanitize_error("") == ""
        assert _sanitize_error(None) == ""


class TestOdataErrorMessage:
    def test_extracts_message(self):
        body = json.dumps({"error": {"code": "0x80040217", "message": "Not Found"}})
        assert _odata_error_message(body) == "Not Found"

    def test_non_json(self):
        assert _odata_error_message("<html>oops</html>") is None

    def test_no_error_key(self):
        assert _odata_error_message('{"message": "x"}') is None

    def test_error_without_message(self):
        assert _odata_error_message('{"error": {"code": "x"}}') is None

    def test_empty(self):
        assert _odata_error_message("") is None

    def test_json_array(self):
        assert _odata_error_message("[1, 2]") is None


class TestHttpRequest:
    @patch("pp_cli.api.urllib.request.urlopen")
    def test_parses_json(self, mock_urlopen):
        mock_resp = mock_urlopen.return_value.__enter__.return_value
        mock_resp.headers.get.return_value = "application/json"
        mock_resp.read.return_value = b'{"value": []}'
        assert _http_request(_URL) == {"value": []}

    @patch("pp_cli.api.urllib.request.urlopen")
    def test_empty_body_returns_none(self, mock_urlopen):
        mock_resp = mock_urlopen.return_value.__enter__.return_value
        mock_resp.headers.get.return_value = ""
        mock_resp.status = 204
        mock_resp.read.return_value = b""
        assert _http_request(_URL, "DELETE") is None

    @patch("pp_cli.api.urllib.request.urlopen")
    def test_sends_method_and_headers(self, mock_urlopen):
        mock_resp = mock_urlopen.return_value.__enter__.return_value
        mock_resp.headers.get.return_value = ""
        mock_resp.read.return_value = b""
        _http_request(_URL, "DELETE", {"accept": "application/json;odata.metadata=none"})
        req = mock_urlopen.call_args.args[0]
        assert req.get_method() == "DELETE"
        assert req.full_url == _URL
        assert req.data is None
        assert req.get_header("Accept") == "application/json;odata.metadata=none"

    @patch("pp_cli.api.urllib.request.urlopen")
    def test_http_error_raises_http_error(self, mock_urlopen):
        mock_urlopen.side_effect = _http_error(404, "Not Found", b'{"error":{"message":"x"}}')
        with pytest.raises(HTTPError) as exc_info:
            _http_request(_URL)
        assert exc_info.value.code == 404
        assert "x" in exc_info.value.body

    @patch("pp_cli.api.urllib.request.urlopen")
    def test_no_retry_on_server_error(self, mock_urlopen):
        mock_urlopen.side_effect = _http_error(503, "Service Unavailable")
        with pytest.raises(HTTPError):
            _http_request(_URL, "DELETE")
        assert mock_urlopen.call_count == 1

    @patch("pp_cli.api.urllib.request.urlopen")
    def test_url_error(self, mock_urlopen):
        mock_urlopen.side_effect = urllib.error.URLError("name resolution failed")
        with pytest.raises(CliError) as exc_info:
            _http_request(_URL)
        assert "Connection failed: name resolution failed" in str(exc_info.value)

    @patch("pp_cli.api.urllib.request.urlopen")
    def test_timeout(self, mock_urlopen, monkeypatch):
        monkeypatch.setattr("pp_cli.api.config.HTTP_TIMEOUT_SECONDS", 5)
        mock_urlopen.side_effect = TimeoutError()
        with pytest.raises(CliError) as exc_info:
            _http_request(_URL)
        assert "timed out after 5 seconds" in str(exc_info.value)

    @patch("pp_cli.api.urllib.request.urlopen")
    def test_invalid_json(self, mock_urlopen):
        mock_resp = mock_urlopen.return_value.__enter__.return_value
        mock_resp.headers.get.return_value = "application/json"
        mock_resp.read.return_value = b"not json{{"
        with pytest.raises(CliError) as exc_info:
            _http_request(_URL)
        assert "not valid JSON" in str(exc_info.value)

    @patch("pp_cli.api.urllib.request.urlopen")
    def test_response_size_limit(self, mock_urlopen, monkeypatch):
        monkeypatch.setattr("pp_cli.api.config.HTTP_MAX_RESPONSE_BYTES", 4)
        mock_resp = mock_urlopen.return_value.__enter__.return_value
        mock_resp.headers.get.return_value = "application/json"
        mock_resp.read.return_value = b"12345"
        with pytest.raises(CliError) as exc_info:
            _http_request(_URL)
        assert "Response too large" in str(exc_info.value)

    @patch("pp_cli.api.urllib.request.urlopen")
    def test_http_log_never_contains_token(self, mock_urlopen, monkeypatch, capsys):
        monkeypatch.setattr("pp_cli.api.config.HTTP_LOG_ENABLED", True)
        mock_resp = mock_urlopen.return_value.__enter__.return_value
        mock_resp.status = 204
        mock_resp.headers.get.return_value = ""
        mock_resp.read.return_value = b""
        _http_request(_URL, "DELETE", {"Authorization": "Bearer secret-token"})
        err = capsys.readouterr().err
        assert "[HTTP]" in err
        assert '"method": "DELETE"' in err
        assert "secret-token" not in err

    @patch("pp_cli.api.urllib.request.urlopen")
    def test_http_log_disabled_by_default(self, mock_urlopen, capsys):
        mock_resp = mock_urlopen.return_value.__enter__.return_value
        mock_resp.headers.get.return_value = ""
        mock_resp.read.return_value = b""
        _http_request(_URL, "DELETE")
        assert capsys.readouterr().err == ""


class TestDataverseRequest:
    @patch("pp_cli.api._http_request")
    def test_headers(self, mock_http):
        mock_http.return_value = None
        dataverse_request(_URL, method="DELETE")
        url, method, headers = mock_http.call_args.args
        assert url == _URL
        assert method == "DELETE"
        assert headers["accept"] == "application/json;odata.metadata=none"
        assert headers["Authorization"] == "Bearer fake-dv-token"
        assert headers["x-ms-client-request-id"]

    @patch("pp_cli.api._http_request")
    def test_odata_error_becomes_api_error(self, mock_http):
        mock_http.side_effect = HTTPError(404, "Not Found", '{"error":{"message":"Not Found"}}')
        with pytest.raises(ApiError) as exc_info:
            dataverse_request(_URL, method="DELETE")
        assert exc_info.value.message == "Not Found"
        assert exc_info.value.status == 404

    @patch("pp_cli.api._http_request")
    def test_plain_error_body(self, mock_http):
        mock_http.side_effect = HTTPError(500, "Internal Server Error", "<p>boom</p>")
        with pytest.raises(ApiError) as exc_info:
            dataverse_request(_URL)
        assert "HTTP 500: Internal Server Error" in str(exc_info.value)
        assert "boom" in str(exc_info.value)

    @patch("pp_cli.api._http_request")
    def test_bare_401_is_setup_error(self, mock_http):
        mock_http.side_effect = HTTPError(401, "Unauthorized", "")
        with pytest.raises(SetupError) as exc_info:
            dataverse_request(_URL)
        assert "[TOKEN_EXPIRED]" in str(exc_info.value)

    @patch("pp_cli.api._http_request")
    def test_403_with_envelope_is_api_error(self, mock_http):
        body = '{"error":{"message":"Principal user is missing prvDeletecard privilege"}}'
        mock_http.side_effect = HTTPError(403, "Forbidden", body)
        with pytest.raises(ApiError) as exc_info:
            dataverse_request(_URL, method="DELETE")
        assert "prvDeletecard" in exc_info.value.message

    @patch("pp_cli.api._http_request")
    def test_missing_token(self, mock_http, monkeypatch):
        monkeypatch.setattr("pp_cli.api.config.DATAVERSE_TOKEN", "")
        with pytest.raises(SetupError):
            dataverse_request(_URL)
        mock_http.assert_not_called()


class TestBapRequest:
    @patch("pp_cli.api._http_request")
    def test_builds_url_and_auth(self, mock_http):
        mock_http.return_value = {"properties": {}}
        bap_request("/providers/x")
        url, method, headers = mock_http.call_args.args
        assert url == "https://api.bap.microsoft.com/providers/x"
        assert method == "GET"
        assert headers["Authorization"] == "Bearer fake-bap-token"

    @patch("pp_cli.api._http_request")
    def test_missing_token(self, mock_http, monkeypatch):
        monkeypatch.setattr("pp_cli.api.config.BAP_TOKEN", "")
        with pytest.raises(SetupError):
            bap_request("/providers/x")
        mock_http.assert_not_called()


class TestCheckToken:
    def test_passes_with_both_tokens(self):
        _check_token()

    def test_reports_missing_tokens(self, monkeypatch):
        monkeypatch.setattr("pp_cli.api.config.BAP_TOKEN", "")
        monkeypatch.setattr("pp_cli.api.config.DATAVERSE_TOKEN", "")
        with pytest.raises(SetupError) as exc_info:
            _check_token()
        msg = str(exc_info.value)
        assert "[SETUP_NEEDED]" in msg
        assert "PP_BAP_TOKEN" in msg
        assert "PP_DATAVERSE_TOKEN" in msg
        assert exc_info.value.exit_code == 2
