"""
Actor input-schema resolution.

Given an Apify actor ID, find the JSON Schema describing its input by trying,
in order: the latest version record, the actor record, the public
documentation page, and the recorded example input.

Usage:
    from actorschema.schemas import resolve_actor_input_schema

    resolution = resolve_actor_input_schema("apify~web-scraper", token)
    resolution.schema   # {} if nothing was found
    resolution.source   # "version", "metadata", "docs_page", "example_input" or None
"""

from actorschema.schemas.resolver import (
    ResolutionCancelled,
    SchemaResolutionError,
    resolve_actor_input_schema,
)
from actorschema.schemas.shapes import describe_schema, form_fields
from actorschema.schemas.types import ActorMetadata, ExtractionAttempt, Resolution, VersionRecord

__all__ = [
    "ActorMetadata",
    "ExtractionAttempt",
    "Resolution",
    "ResolutionCancelled",
    "SchemaResolutionError",
    "VersionRecord",
    "describe_schema",
    "form_fields",
    "resolve_actor_input_schema",
]
