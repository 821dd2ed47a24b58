"""
Resolution stages.

Each stage is a function (ResolutionContext) -> Schema | None, where None
means Empty. A stage may raise; the coordinator treats any exception as a
soft failure. StageSkipped marks a stage that had nothing to try.

STAGES lists the stages in priority order: declared data first, scraped and
derived data last.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable

from actorschema.integrations.apify.client import ApifyClient
from actorschema.schemas.docpage import (
    DEFAULT_DOCS_BASE_URL,
    DEFAULT_TIMEOUT_S,
    DEFAULT_USER_AGENT,
    build_docs_url,
    extract_schema_from_body,
    fetch_docs_page,
)
from actorschema.schemas.jsontext import coerce_schema
from actorschema.schemas.types import ActorMetadata, ExampleRunInput, Schema, VersionRecord


class StageSkipped(Exception):
    """Raised by a stage whose inputs are missing, so it made no attempt."""


@dataclass(frozen=True)
class ResolutionContext:
    """Inputs shared by all stages of one resolution call."""

    actor_id: str
    metadata: ActorMetadata
    client: ApifyClient
    docs_base_url: str = DEFAULT_DOCS_BASE_URL
    docs_timeout_s: float = DEFAULT_TIMEOUT_S
    docs_user_agent: str = DEFAULT_USER_AGENT
    cancel_event: threading.Event | None = None


def version_schema(ctx: ResolutionContext) -> Schema | None:
    """Input schema declared on the latest published version."""
    version_number = ctx.metadata.latest_version_number
    if not version_number:
        raise StageSkipped("no latestVersionNumber")
    record = VersionRecord.model_validate(
        ctx.client.get_actor_version(ctx.actor_id, version_number)
    )
    return coerce_schema(record.input)


def metadata_schema(ctx: ResolutionContext) -> Schema | None:
    """Input schema embedded on the actor record itself."""
    return coerce_schema(ctx.metadata.input)


def docs_page_schema(ctx: ResolutionContext) -> Schema | None:
    """Schema scraped from the public documentation page."""
    owner, name = ctx.metadata.username, ctx.metadata.name
    if not owner or not name:
        raise StageSkipped("no username/name to build docs url")
    url = build_docs_url(owner, name, ctx.docs_base_url)
    text = fetch_docs_page(
        url,
        timeout_s=ctx.docs_timeout_s,
        user_agent=ctx.docs_user_agent,
        cancel_event=ctx.cancel_event,
    )
    return extract_schema_from_body(text)


def example_input_schema(ctx: ResolutionContext) -> Schema | None:
    """
    The recorded example payload, used as a stand-in schema.

    This is a literal input object, not JSON Schema; consumers render it as
    raw key/value pairs.
    """
    raw = ctx.metadata.example_run_input
    if not isinstance(raw, dict) or raw.get("body") is None:
        raise StageSkipped("no exampleRunInput.body")
    example = ExampleRunInput.model_validate(raw)
    return coerce_schema(example.body)


Stage = Callable[[ResolutionContext], "Schema | None"]

STAGES: tuple[tuple[str, Stage], ...] = (
    ("version", version_schema),
    ("metadata", metadata_schema),
    ("docs_page", docs_page_schema),
    ("example_input", example_input_schema),
)
