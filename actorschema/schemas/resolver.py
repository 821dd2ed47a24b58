"""
Actor input-schema resolution coordinator.

resolve_actor_input_schema():
1. Fetches the actor record (fatal on failure: SchemaResolutionError)
2. Runs STAGES in order: version -> metadata -> docs_page -> example_input
3. Returns the first non-empty schema, or {} if every stage came up empty

Stage failures are soft: network errors, timeouts, missing fields and
malformed JSON all count as Empty and the next stage runs. Schemas from
different stages are never merged.
"""

from __future__ import annotations

import logging
import threading

from django.conf import settings

from actorschema.integrations.apify.client import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_S,
    ApifyClient,
    ApifyError,
)
from actorschema.schemas import docpage
from actorschema.schemas.docpage import FetchCancelled
from actorschema.schemas.observability import log_stage_event
from actorschema.schemas.stages import STAGES, ResolutionContext, StageSkipped
from actorschema.schemas.types import ActorMetadata, ExtractionAttempt, Resolution

logger = logging.getLogger(__name__)


class SchemaResolutionError(Exception):
    """
    Raised when the actor record itself cannot be fetched.

    Carries the upstream HTTP status (None for transport failures) and message.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class ResolutionCancelled(Exception):
    """Raised when the caller cancels a resolution between stages or mid-download."""


def get_apify_client(token: str) -> ApifyClient:
    """Create an Apify client from settings for the caller's token."""
    return ApifyClient(
        token=token,
        base_url=getattr(settings, "APIFY_BASE_URL", DEFAULT_BASE_URL),
        timeout_s=getattr(settings, "APIFY_HTTP_TIMEOUT_S", DEFAULT_TIMEOUT_S),
    )


def fetch_actor_metadata(client: ApifyClient, actor_id: str) -> ActorMetadata:
    """
    Fetch and parse the actor record.

    Raises:
        SchemaResolutionError: If the registry call fails or the record is not an object
    """
    try:
        record = client.get_actor(actor_id)
    except ApifyError as e:
        raise SchemaResolutionError(str(e), status_code=e.status_code) from e
    if not isinstance(record, dict):
        raise SchemaResolutionError(f"Malformed actor record for {actor_id}", status_code=502)
    return ActorMetadata.model_validate(record)


def _run_stage(name, stage, ctx: ResolutionContext) -> ExtractionAttempt:
    try:
        schema = stage(ctx)
    except StageSkipped as e:
        log_stage_event(ctx.actor_id, name, "skipped", extra={"reason": str(e)})
        return ExtractionAttempt(stage=name, outcome="skipped")
    except FetchCancelled as e:
        raise ResolutionCancelled(f"Resolution of {ctx.actor_id} cancelled during {name}") from e
    except Exception as e:
        summary = f"{type(e).__name__}: {e}"[:200]
        log_stage_event(ctx.actor_id, name, "error", error_summary=summary)
        return ExtractionAttempt(stage=name, outcome="error", error_summary=summary)

    if schema is None:
        log_stage_event(ctx.actor_id, name, "empty")
        return ExtractionAttempt(stage=name, outcome="empty")

    log_stage_event(ctx.actor_id, name, "found", extra={"schema_keys": len(schema)})
    return ExtractionAttempt(stage=name, outcome="found", schema=schema)


def run_stages(
    ctx: ResolutionContext,
    cancel_event: threading.Event | None = None,
) -> Resolution:
    """
    Run STAGES in order and stop at the first non-empty schema.

    Raises:
        ResolutionCancelled: If cancel_event is set before a stage starts or
            while the docs page is downloading
    """
    attempts: list[ExtractionAttempt] = []
    for name, stage in STAGES:
        if cancel_event is not None and cancel_event.is_set():
            logger.info("Resolution cancelled: actor_id=%s before_stage=%s", ctx.actor_id, name)
            raise ResolutionCancelled(f"Resolution of {ctx.actor_id} cancelled before {name}")
        attempt = _run_stage(name, stage, ctx)
        attempts.append(attempt)
        if attempt.found:
            return Resolution(schema=attempt.schema, source=name, attempts=attempts)

    logger.info("No input schema found: actor_id=%s", ctx.actor_id)
    return Resolution(schema={}, source=None, attempts=attempts)


def resolve_actor_input_schema(
    actor_id: str,
    token: str,
    *,
    client: ApifyClient | None = None,
    cancel_event: threading.Event | None = None,
) -> Resolution:
    """
    Resolve the input schema of an actor.

    Args:
        actor_id: Actor ID (e.g., "apify~web-scraper")
        token: Apify API token of the caller
        client: Optional pre-built client (one is created and closed otherwise)
        cancel_event: Optional event; when set, the docs page download is
            aborted and remaining stages are skipped

    Returns:
        Resolution with the schema (possibly {}), its source stage and the
        per-stage attempts

    Raises:
        SchemaResolutionError: If the actor record cannot be fetched
        ResolutionCancelled: If cancel_event is set mid-resolution
    """
    owns_client = client is None
    if owns_client:
        client = get_apify_client(token)

    try:
        logger.info("Resolving input schema: actor_id=%s", actor_id)
        metadata = fetch_actor_metadata(client, actor_id)
        ctx = ResolutionContext(
            actor_id=actor_id,
            metadata=metadata,
            client=client,
            docs_base_url=getattr(settings, "APIFY_DOCS_BASE_URL", docpage.DEFAULT_DOCS_BASE_URL),
            docs_timeout_s=getattr(settings, "APIFY_DOCS_TIMEOUT_S", docpage.DEFAULT_TIMEOUT_S),
            docs_user_agent=getattr(settings, "APIFY_DOCS_USER_AGENT", docpage.DEFAULT_USER_AGENT),
            cancel_event=cancel_event,
        )
        resolution = run_stages(ctx, cancel_event=cancel_event)
    finally:
        if owns_client:
            client.close()

    logger.info(
        "Resolved input schema: actor_id=%s source=%s",
        actor_id,
        resolution.source or "none",
    )
    return resolution
