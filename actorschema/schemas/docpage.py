"""
Documentation page scraper.

Fetches https://apify.com/{owner}/{name}/input-schema and extracts an input
schema from whatever comes back. The page is not meant to be machine-read,
so extraction is layered; each step only runs if the previous one found
nothing:

1. Body classifier: a body that does not start with markup is tried as JSON.
   If that fails the same body is handled as HTML.
2. Inside the [data-test-id="input-schema-content"] container:
   a. the concatenated code/pre text, if it is exactly one {...} object
   b. the first balanced {...} in that text
   c. the heading heuristic (h2 -> type paragraph -> description div)
3. The first code/pre element of the page that is exactly one {...} object.
4. The first balanced {...} in the raw page text.

The first candidate text chosen by 2-4 is parsed once. A parse failure ends
the stage with no schema; scraping failures are never fatal.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Literal
from urllib.parse import quote

import requests

from actorschema.schemas.htmlquery import HtmlDocument, HtmlNode
from actorschema.schemas.jsontext import coerce_schema, find_balanced_object, is_balanced_object
from actorschema.schemas.types import Schema

logger = logging.getLogger(__name__)

DEFAULT_DOCS_BASE_URL = "https://apify.com"
DEFAULT_TIMEOUT_S = 20
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

CONTAINER_ATTR = "data-test-id"
CONTAINER_VALUE = "input-schema-content"
TYPE_LABEL_CLASS = "InputSchemaProperty-type"
OPTIONAL_MARKER = "optional"
CHUNK_SIZE = 64 * 1024


# =============================================================================
# BODY CLASSIFIER
# =============================================================================


@dataclass(frozen=True)
class PageBody:
    """A fetched page body tagged with how it should be parsed."""

    kind: Literal["json", "html"]
    text: str


def classify_page_body(text: str) -> PageBody:
    """
    Sniff the body shape. Content-Type is not trusted.

    A body that starts with "<" (doctype or any markup) is HTML;
    anything else is treated as JSON.
    """
    if text.lstrip().startswith("<"):
        return PageBody(kind="html", text=text)
    return PageBody(kind="json", text=text)


# =============================================================================
# HTML HEURISTICS
# =============================================================================


def _code_text(node: HtmlNode) -> str:
    return "".join(block.text() for block in node.outermost("code", "pre")).strip()


def schema_from_headings(container: HtmlNode) -> Schema | None:
    """
    Build a schema from the container's h2 headings.

    For each <h2>, the field name is its id (or its text). The next sibling
    <p> carries the type label and the "optional" marker; the <div> after
    that paragraph carries the description. Fields without the marker are
    required. A heading with no paragraph is treated as optional.
    """
    properties: dict[str, dict[str, str]] = {}
    required: list[str] = []

    for heading in container.children("h2"):
        field_name = (heading.attr("id") or heading.text()).strip()
        if not field_name:
            continue

        field_type = "string"
        optional = True
        description = ""

        paragraph = heading.next_element_sibling()
        if paragraph is not None and paragraph.name == "p":
            type_label = paragraph.find_by_class(TYPE_LABEL_CLASS)
            if type_label is not None and type_label.text().strip():
                field_type = type_label.text().strip()
            optional = any(
                OPTIONAL_MARKER in span.text().lower()
                for span in paragraph.descendants("span")
            )
            description_block = paragraph.next_element_sibling()
            if description_block is not None and description_block.name == "div":
                description = description_block.text().strip()

        properties[field_name] = {"type": field_type, "description": description}
        if not optional and field_name not in required:
            required.append(field_name)

    if not properties:
        return None
    return {"properties": properties, "required": required}


def extract_schema_from_html(html: str) -> Schema | None:
    """Run the HTML sub-strategies in order. Returns None if nothing usable."""
    document = HtmlDocument(html)
    json_text: str | None = None

    container = document.find_by_attribute(CONTAINER_ATTR, CONTAINER_VALUE)
    if container is not None:
        code_text = _code_text(container)
        if is_balanced_object(code_text):
            json_text = code_text
        else:
            json_text = find_balanced_object(code_text)
        if json_text is None:
            synthesized = schema_from_headings(container)
            if synthesized is not None:
                logger.debug("Docs page schema built from %d headings", len(synthesized["properties"]))
                return synthesized

    if json_text is None:
        for block in document.descendants("pre", "code"):
            text = block.text().strip()
            if is_balanced_object(text):
                json_text = text
                break

    if json_text is None:
        json_text = find_balanced_object(html)

    if json_text is None:
        return None
    return coerce_schema(json_text)


def extract_schema_from_body(text: str) -> Schema | None:
    """Classify the body and extract a schema from it."""
    body = classify_page_body(text)
    if body.kind == "json":
        schema = coerce_schema(body.text)
        if schema is not None:
            return schema
        logger.debug("Docs page body is not a JSON object, parsing as HTML")
    return extract_schema_from_html(body.text)


# =============================================================================
# FETCH
# =============================================================================


def build_docs_url(owner: str, name: str, base_url: str = DEFAULT_DOCS_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{quote(owner, safe='')}/{quote(name, safe='')}/input-schema"


class FetchCancelled(Exception):
    """Raised when the cancel event is set while the page body is downloading."""


def fetch_docs_page(
    url: str,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    user_agent: str = DEFAULT_USER_AGENT,
    cancel_event: threading.Event | None = None,
) -> str:
    """
    Fetch the documentation page as raw text.

    The body is streamed in chunks and cancel_event is checked between them.
    The response is closed on every exit path, so a cancelled download
    releases its connection right away.

    Raises:
        requests.RequestException: On transport errors, timeouts and non-2xx
        FetchCancelled: If cancel_event is set before the body is complete
    """
    response = requests.get(
        url,
        headers={
            "Accept": "application/json",
            "User-Agent": user_agent,
        },
        timeout=timeout_s,
        stream=True,
    )
    try:
        response.raise_for_status()
        chunks = []
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Docs page fetch cancelled: url=%s", url)
                raise FetchCancelled(f"Fetch of {url} cancelled")
            chunks.append(chunk)
    finally:
        response.close()
    return b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")
