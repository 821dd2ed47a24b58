"""
Unit tests for Apify client.

Tests URL building, error handling, and response parsing.
Uses mocked HTTP (no network calls).
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from actorschema.integrations.apify.client import ApifyClient, ApifyError


def _ok(payload):
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = payload
    return response


class TestApifyClientInit:
    """Tests for ApifyClient initialization."""

    def test_init_with_token(self):
        """Client initializes with token."""
        client = ApifyClient(token="test-token")
        assert client.token == "test-token"
        assert client.base_url == "https://api.apify.com"

    def test_init_with_custom_base_url(self):
        """Client accepts custom base URL."""
        client = ApifyClient(token="test-token", base_url="https://custom.apify.com/")
        assert client.base_url == "https://custom.apify.com"  # Trailing slash stripped

    def test_init_without_token_raises(self):
        """Client raises ValueError without token."""
        with pytest.raises(ValueError, match="token is required"):
            ApifyClient(token="")

    @patch("actorschema.integrations.apify.client.requests.Session")
    def test_bearer_header(self, mock_session_class):
        """Token is sent as a Bearer header, not a query param."""
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session

        ApifyClient(token="test-token")

        headers = mock_session.headers.update.call_args[0][0]
        assert headers["Authorization"] == "Bearer test-token"


class TestApifyClientGetActor:
    """Tests for get_actor method."""

    @patch("actorschema.integrations.apify.client.requests.Session")
    def test_get_actor_unwraps_data(self, mock_session_class):
        """get_actor returns the record inside the data envelope."""
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.get.return_value = _ok({"data": {"id": "abc", "name": "web-scraper"}})

        client = ApifyClient(token="test-token")
        record = client.get_actor("apify~web-scraper")

        assert record == {"id": "abc", "name": "web-scraper"}
        call_args = mock_session.get.call_args
        assert call_args[0][0] == "https://api.apify.com/v2/acts/apify~web-scraper"
        assert call_args[1]["timeout"] == 30

    @patch("actorschema.integrations.apify.client.requests.Session")
    def test_get_actor_encodes_slash(self, mock_session_class):
        """Actor IDs with a slash stay a single path segment."""
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.get.return_value = _ok({"data": {}})

        ApifyClient(token="test-token").get_actor("apify/web-scraper")

        assert mock_session.get.call_args[0][0].endswith("/v2/acts/apify%2Fweb-scraper")

    @patch("actorschema.integrations.apify.client.requests.Session")
    def test_get_actor_error_uses_apify_message(self, mock_session_class):
        """Non-success status raises ApifyError with Apify's own error message."""
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_response = MagicMock()
        mock_response.ok = False
        mock_response.status_code = 401
        mock_response.text = '{"error": {"type": "token-not-valid", "message": "Authentication token is not valid."}}'
        mock_response.json.return_value = {
            "error": {"type": "token-not-valid", "message": "Authentication token is not valid."}
        }
        mock_session.get.return_value = mock_response

        client = ApifyClient(token="bad-token")
        with pytest.raises(ApifyError) as exc_info:
            client.get_actor("actor~test")

        assert exc_info.value.status_code == 401
        assert str(exc_info.value) == "Authentication token is not valid."

    @patch("actorschema.integrations.apify.client.requests.Session")
    def test_get_actor_error_without_envelope(self, mock_session_class):
        """Non-JSON error bodies fall back to a status-based message."""
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_response = MagicMock()
        mock_response.ok = False
        mock_response.status_code = 503
        mock_response.text = "Service Unavailable"
        mock_response.json.side_effect = ValueError("not json")
        mock_session.get.return_value = mock_response

        with pytest.raises(ApifyError, match="HTTP 503") as exc_info:
            ApifyClient(token="test-token").get_actor("actor~test")
        assert exc_info.value.status_code == 503
        assert exc_info.value.body == "Service Unavailable"

    @patch("actorschema.integrations.apify.client.requests.Session")
    def test_get_actor_request_exception(self, mock_session_class):
        """Network errors raise ApifyError without a status code."""
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.get.side_effect = requests.RequestException("Network error")

        with pytest.raises(ApifyError, match="Request failed") as exc_info:
            ApifyClient(token="test-token").get_actor("actor~test")
        assert exc_info.value.status_code is None

    @patch("actorschema.integrations.apify.client.requests.Session")
    def test_get_actor_timeout(self, mock_session_class):
        """Timeouts raise ApifyError."""
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.get.side_effect = requests.exceptions.Timeout("read timed out")

        with pytest.raises(ApifyError, match="timed out"):
            ApifyClient(token="test-token").get_actor("actor~test")


class TestApifyClientGetActorVersion:
    """Tests for get_actor_version method."""

    @patch("actorschema.integrations.apify.client.requests.Session")
    def test_get_actor_version_url(self, mock_session_class):
        """get_actor_version builds the versions URL."""
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.get.return_value = _ok(
            {"data": {"versionNumber": "0.3", "input": {"title": "x"}}}
        )

        client = ApifyClient(token="test-token", timeout_s=7)
        record = client.get_actor_version("apify~web-scraper", "0.3")

        assert record["input"] == {"title": "x"}
        call_args = mock_session.get.call_args
        assert call_args[0][0] == "https://api.apify.com/v2/acts/apify~web-scraper/versions/0.3"
        assert call_args[1]["timeout"] == 7

    @patch("actorschema.integrations.apify.client.requests.Session")
    def test_missing_data_envelope_returns_empty(self, mock_session_class):
        """A response without a data object yields an empty record."""
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.get.return_value = _ok({"unexpected": True})

        assert ApifyClient(token="test-token").get_actor_version("a~b", "0.1") == {}
