"""
Actor input-schema API views.

Implements:
- GET /api/actors/:actor_id/input-schema - resolved input schema

The caller's Apify token is read from the Authorization header and passed
through to the registry. It is never stored.
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_http_methods

from actorschema.schemas.resolver import SchemaResolutionError, resolve_actor_input_schema

logger = logging.getLogger(__name__)


def _bearer_token(request: HttpRequest) -> str | None:
    """Extract the token from "Authorization: Bearer <token>"."""
    header = request.headers.get("Authorization", "")
    parts = header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer" and parts[1]:
        return parts[1]
    return None


@require_http_methods(["GET"])
def actor_input_schema(request: HttpRequest, actor_id: str) -> JsonResponse:
    """
    GET /api/actors/:actor_id/input-schema

    Response (200 OK):
        The schema object itself: JSON Schema, an example payload, or {}.
        Header X-Schema-Source names the stage that produced it ("none" for {}).

    Response (401 - no token):
        {"error": "Apify API token is missing."}

    Response (4xx/5xx - actor record could not be fetched):
        {"error": "message"}  # Upstream status, or 502 when there is none
    """
    token = _bearer_token(request)
    if not token:
        return JsonResponse({"error": "Apify API token is missing."}, status=401)

    try:
        resolution = resolve_actor_input_schema(actor_id, token)
    except SchemaResolutionError as e:
        logger.warning(
            "Schema resolution failed: actor_id=%s status=%s error=%s",
            actor_id,
            e.status_code,
            e.message,
        )
        return JsonResponse({"error": e.message}, status=e.status_code or 502)

    response = JsonResponse(resolution.schema)
    response["X-Schema-Source"] = resolution.source or "none"
    return response
