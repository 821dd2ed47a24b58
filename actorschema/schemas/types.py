"""
Types for actor input-schema resolution.

ActorMetadata and VersionRecord are Pydantic v2 models parsed from the Apify
registry's actor and version records. Unknown keys are ignored; every field
the resolver reads is optional because the registry populates them
inconsistently. A field with an unexpected shape reads as missing rather than
failing the whole record: title and exampleRunInput are kept raw, and
exampleRunInput is validated by the stage that uses it.

ExtractionAttempt and Resolution are in-memory results. They are NOT persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Schema = dict[str, Any]

StageOutcome = Literal["found", "empty", "error", "skipped"]


class ExampleRunInput(BaseModel):
    """Recorded example invocation payload (exampleRunInput on the actor)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    body: str | dict[str, Any] | None = None
    content_type: Any = Field(default=None, alias="contentType")


class ActorMetadata(BaseModel):
    """
    Actor registry record.

    Fetched once per resolution; read-only afterward.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )

    id: str | None = None
    username: str | None = None
    name: str | None = None
    title: Any = None
    latest_version_number: str | None = Field(default=None, alias="latestVersionNumber")
    input: Any = None
    example_run_input: Any = Field(default=None, alias="exampleRunInput")

    @field_validator("id", "username", "name", "latest_version_number", mode="before")
    @classmethod
    def drop_non_scalar(cls, value: Any) -> Any:
        """Objects, lists and booleans on text fields read as missing."""
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return None
        return value


class VersionRecord(BaseModel):
    """One actor version record. Only the latest version is consulted."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )

    version_number: str | None = Field(default=None, alias="versionNumber")
    input: Any = None


@dataclass(frozen=True)
class ExtractionAttempt:
    """
    Outcome of a single resolution stage.

    Attributes:
        stage: Stage name (version, metadata, docs_page, example_input)
        outcome: found | empty | error | skipped
        schema: The populated schema when outcome is "found", else None
        error_summary: Short error description when outcome is "error"
    """

    stage: str
    outcome: StageOutcome
    schema: Schema | None = None
    error_summary: str | None = None

    @property
    def found(self) -> bool:
        return self.outcome == "found"


@dataclass
class Resolution:
    """
    Result of one resolution call.

    schema is the first non-empty candidate in priority order, or {}.
    source names the stage that produced it (None when schema is {}).
    attempts lists every stage that ran, in order.
    """

    schema: Schema
    source: str | None = None
    attempts: list[ExtractionAttempt] = field(default_factory=list)
