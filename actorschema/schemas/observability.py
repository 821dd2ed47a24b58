"""
Observability utilities for schema resolution.

Every stage the resolver runs logs exactly one structured event with the
actor_id, stage name and outcome. Logging is never part of the resolution's
control flow.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from actorschema.schemas.types import StageOutcome

logger = logging.getLogger("actorschema.resolution")


def log_stage_event(
    actor_id: str,
    stage: str,
    outcome: StageOutcome,
    extra: Mapping[str, Any] | None = None,
    error_summary: str | None = None,
) -> None:
    """
    Log a structured stage event.

    The log payload always includes:
    - actor_id, stage, outcome
    - error_summary (if provided)
    - Any additional fields from extra

    Args:
        actor_id: Actor being resolved
        stage: Stage name (e.g., "version", "docs_page")
        outcome: "found", "empty", "error" or "skipped"
        extra: Optional additional fields to include in the log
        error_summary: Short error description (e.g., "ApifyError: HTTP 500")
    """
    payload: dict[str, Any] = {
        "actor_id": actor_id,
        "stage": stage,
        "outcome": outcome,
    }

    if error_summary:
        payload["error_summary"] = error_summary

    if extra:
        payload.update(extra)

    level = logging.WARNING if outcome == "error" else logging.INFO
    logger.log(level, "schema_stage_event", extra=payload)
