"""
Apify API v2 client.

Read-only registry access used by the input-schema resolver.

Implements exactly 2 primitives:
1. get_actor(actor_id) -> dict
2. get_actor_version(actor_id, version_number) -> dict

Endpoints per Apify API v2 docs (https://docs.apify.com/api/v2):
- GET /v2/acts/{actorId} - get actor
- GET /v2/acts/{actorId}/versions/{versionNumber} - get actor version

Both return the record unwrapped from Apify's {"data": {...}} envelope.
"""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.apify.com"
DEFAULT_TIMEOUT_S = 30


class ApifyError(Exception):
    """Raised when Apify API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        self.status_code = status_code
        self.body = body[:500] if body else None  # Trim body for logging
        super().__init__(message)


def _error_message_from_body(response: requests.Response) -> str | None:
    """Extract error.message from Apify's error envelope, if present."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None


class ApifyClient:
    """
    HTTP client for Apify API v2.

    Authentication via Bearer token (recommended by Apify docs).
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ):
        """
        Initialize Apify client.

        Args:
            token: Apify API token
            base_url: Base URL for Apify API (default: https://api.apify.com)
            timeout_s: Per-request timeout in seconds
        """
        if not token:
            raise ValueError("Apify token is required")
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._session = requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        })

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()

    def __enter__(self) -> "ApifyClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get_actor(self, actor_id: str) -> dict[str, Any]:
        """
        Fetch an actor's registry record.

        Args:
            actor_id: Actor ID (e.g., "apify~web-scraper")

        Returns:
            The actor record (contents of the "data" envelope)

        Raises:
            ApifyError: If API returns an error or is unreachable
        """
        url = f"{self.base_url}/v2/acts/{quote(actor_id, safe='')}"
        return self._get_record(url, actor_id=actor_id, operation="get_actor")

    def get_actor_version(self, actor_id: str, version_number: str) -> dict[str, Any]:
        """
        Fetch one version record of an actor.

        Args:
            actor_id: Actor ID
            version_number: Version number (e.g., "0.1")

        Returns:
            The version record (contents of the "data" envelope)

        Raises:
            ApifyError: If API returns an error or is unreachable
        """
        url = (
            f"{self.base_url}/v2/acts/{quote(actor_id, safe='')}"
            f"/versions/{quote(str(version_number), safe='')}"
        )
        return self._get_record(url, actor_id=actor_id, operation="get_actor_version")

    def _get_record(self, url: str, actor_id: str, operation: str) -> dict[str, Any]:
        """GET a single record and unwrap the "data" envelope."""
        call_start_ms = time.monotonic() * 1000
        logger.info(
            "APIFY_CALL_START actor_id=%s operation=%s url=%s",
            actor_id,
            operation,
            url,
        )

        try:
            response = self._session.get(url, timeout=self.timeout_s)
            duration_ms = int(time.monotonic() * 1000 - call_start_ms)
        except requests.exceptions.Timeout as e:
            duration_ms = int(time.monotonic() * 1000 - call_start_ms)
            logger.error(
                "APIFY_CALL_END actor_id=%s operation=%s status=TIMEOUT duration_ms=%d error=%s",
                actor_id,
                operation,
                duration_ms,
                str(e),
            )
            raise ApifyError(
                "Connection to Apify API timed out. The service may be slow or overloaded."
            ) from e
        except requests.exceptions.ConnectionError as e:
            duration_ms = int(time.monotonic() * 1000 - call_start_ms)
            logger.error(
                "APIFY_CALL_END actor_id=%s operation=%s status=CONNECTION_ERROR duration_ms=%d error=%s",
                actor_id,
                operation,
                duration_ms,
                str(e),
            )
            raise ApifyError(
                "Could not connect to Apify API. Please check your network connection."
            ) from e
        except requests.RequestException as e:
            duration_ms = int(time.monotonic() * 1000 - call_start_ms)
            logger.error(
                "APIFY_CALL_END actor_id=%s operation=%s status=ERROR duration_ms=%d error=%s",
                actor_id,
                operation,
                duration_ms,
                str(e),
            )
            raise ApifyError(f"Request failed: {e}") from e

        if not response.ok:
            logger.error(
                "APIFY_CALL_END actor_id=%s operation=%s status=HTTP_ERROR duration_ms=%d http_status=%d error=%s",
                actor_id,
                operation,
                duration_ms,
                response.status_code,
                response.text[:200],
            )
            message = _error_message_from_body(response)
            if not message:
                if response.status_code == 401:
                    message = (
                        "Apify authentication failed (401). Your Apify token may be invalid "
                        "or expired."
                    )
                elif response.status_code == 404:
                    message = f"Actor not found (404): {actor_id}"
                else:
                    message = f"Apify request failed: HTTP {response.status_code}"
            raise ApifyError(
                message,
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ApifyError(
                "Apify returned a non-JSON response",
                status_code=response.status_code,
                body=response.text,
            ) from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            data = {}

        logger.info(
            "APIFY_CALL_END actor_id=%s operation=%s status=OK duration_ms=%d",
            actor_id,
            operation,
            duration_ms,
        )
        return data
