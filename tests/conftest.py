"""
Pytest configuration for actorschema tests.

DJANGO_SETTINGS_MODULE comes from pyproject.toml (actorschema.settings_test).
No test touches the network: registry calls go through a MagicMock client
and documentation page fetches are patched at requests.get and stream their
body through iter_content.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from actorschema.integrations.apify.client import ApifyClient

DOCS_GET = "actorschema.schemas.docpage.requests.get"


def make_response(text: str = "", status_code: int = 200) -> MagicMock:
    """Build a fake requests.Response for the documentation page."""
    response = MagicMock()
    response.text = text
    response.encoding = "utf-8"
    response.iter_content.return_value = [text.encode("utf-8")]
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if not response.ok:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error", response=response
        )
    return response


@pytest.fixture
def actor_record():
    """A typical Apify actor record with nothing schema-like on it."""
    return {
        "id": "moJRLRc85AitArpNN",
        "username": "apify",
        "name": "web-scraper",
        "title": "Web Scraper",
        "latestVersionNumber": "0.3",
    }


@pytest.fixture
def registry(actor_record):
    """MagicMock ApifyClient; get_actor returns actor_record, versions have no input."""
    client = MagicMock(spec=ApifyClient)
    client.get_actor.return_value = actor_record
    client.get_actor_version.return_value = {"versionNumber": "0.3", "input": {}}
    return client


@pytest.fixture
def docs_get():
    """Patch the documentation page fetch. Defaults to a 404."""
    with patch(DOCS_GET) as mock_get:
        mock_get.return_value = make_response("Not found", status_code=404)
        yield mock_get


@pytest.fixture
def page_response():
    """Factory for fake documentation page responses."""
    return make_response
