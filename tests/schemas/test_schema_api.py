"""
HTTP contract tests for GET /api/actors/:actor_id/input-schema.

The resolver is patched at the view module; resolution itself is covered
in test_resolver.py.
"""

from unittest.mock import patch

from django.test import Client

from actorschema.schemas.resolver import SchemaResolutionError
from actorschema.schemas.types import ExtractionAttempt, Resolution

RESOLVE = "actorschema.schemas.api.views.resolve_actor_input_schema"
URL = "/api/actors/apify~web-scraper/input-schema"


class TestActorInputSchemaEndpoint:
    def test_missing_token_is_401(self, client: Client):
        with patch(RESOLVE) as mock_resolve:
            response = client.get(URL)

        assert response.status_code == 401
        assert response.json() == {"error": "Apify API token is missing."}
        mock_resolve.assert_not_called()

    def test_non_bearer_header_is_401(self, client: Client):
        response = client.get(URL, HTTP_AUTHORIZATION="Basic abc")
        assert response.status_code == 401

    def test_returns_schema_body(self, client: Client):
        schema = {"properties": {"url": {"type": "string"}}, "required": ["url"]}
        resolution = Resolution(
            schema=schema,
            source="version",
            attempts=[ExtractionAttempt(stage="version", outcome="found", schema=schema)],
        )
        with patch(RESOLVE, return_value=resolution) as mock_resolve:
            response = client.get(URL, HTTP_AUTHORIZATION="Bearer caller-token")

        assert response.status_code == 200
        assert response.json() == schema
        assert response["X-Schema-Source"] == "version"
        mock_resolve.assert_called_once_with("apify~web-scraper", "caller-token")

    def test_empty_schema_is_success(self, client: Client):
        with patch(RESOLVE, return_value=Resolution(schema={})):
            response = client.get(URL, HTTP_AUTHORIZATION="Bearer t")

        assert response.status_code == 200
        assert response.json() == {}
        assert response["X-Schema-Source"] == "none"

    def test_upstream_status_is_forwarded(self, client: Client):
        error = SchemaResolutionError("Authentication token is not valid.", status_code=401)
        with patch(RESOLVE, side_effect=error):
            response = client.get(URL, HTTP_AUTHORIZATION="Bearer bad")

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication token is not valid."}

    def test_transport_failure_is_502(self, client: Client):
        error = SchemaResolutionError("Could not connect to Apify API.")
        with patch(RESOLVE, side_effect=error):
            response = client.get(URL, HTTP_AUTHORIZATION="Bearer t")

        assert response.status_code == 502

    def test_post_not_allowed(self, client: Client):
        response = client.post(URL, HTTP_AUTHORIZATION="Bearer t")
        assert response.status_code == 405
