"""
JSON extraction helpers shared by the resolution stages.

- find_balanced_object(): locate the first balanced {...} substring in text
- is_balanced_object(): whole text is exactly one balanced {...} object
- coerce_schema(): normalize a candidate into a non-empty dict, or None
"""

from __future__ import annotations

import json
from typing import Any

from actorschema.schemas.types import Schema


def _match_from(text: str, start: int) -> int | None:
    """
    Scan from the "{" at start and return the index of its closing "}".

    Braces inside double-quoted string literals are ignored. Returns None if
    the object never closes.
    """
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


# Lexer states of a scan. _ESC follows a backslash inside a string.
_OUT, _IN, _ESC = "out", "in", "esc"


def _next_state(state: str, char: str) -> str:
    if state == _OUT:
        return _IN if char == '"' else _OUT
    if state == _IN:
        if char == "\\":
            return _ESC
        return _OUT if char == '"' else _IN
    return _IN


def _push(stack: list[tuple[int, int]], start: int) -> None:
    lowest = min(start, stack[-1][1]) if stack else start
    stack.append((start, lowest))


def _merge(a: list[tuple[int, int]], b: list[tuple[int, int]]) -> list[tuple[int, int]]:
    """
    Merge two open-brace stacks whose scans are now in the same lexer state.

    Levels are aligned from the top (same depth closes on the same "}") and
    keep the earlier start. Cost is the length of the shorter stack.
    """
    longer, shorter = (a, b) if len(a) >= len(b) else (b, a)
    offset = len(longer) - len(shorter)
    for k, (start, _) in enumerate(shorter):
        j = offset + k
        start = min(start, longer[j][0])
        lowest = min(start, longer[j - 1][1]) if j else start
        longer[j] = (start, lowest)
    return longer


def find_balanced_object(text: str) -> str | None:
    """
    Return the first balanced {...} substring of text, or None.

    Every "{" is a candidate start, scanned on its own from that point; the
    earliest candidate that closes wins. The scans are run together in one
    pass. Scans in the same lexer state see the same characters the same
    way from then on, so at most three groups are tracked, each as a stack
    of open braces holding (earliest start at that depth, earliest start at
    or below it). Runs in linear time.

    >>> find_balanced_object('prefix {"a": "{not a field}"} suffix')
    '{"a": "{not a field}"}'
    """
    if not text:
        return None
    scans: dict[str, list[tuple[int, int]]] = {}
    best: tuple[int, int] | None = None
    for index, char in enumerate(text):
        if char == "{":
            _push(scans.setdefault(_OUT, []), index)
        elif char == "}" and _OUT in scans:
            stack = scans[_OUT]
            start, _ = stack.pop()
            if not stack:
                del scans[_OUT]
            if best is None or start < best[0]:
                best = (start, index)
            pending = min((s[-1][1] for s in scans.values()), default=None)
            if pending is None or pending > best[0]:
                break
        if char in '"\\' or _ESC in scans:
            moved: dict[str, list[tuple[int, int]]] = {}
            for state, stack in scans.items():
                target = _next_state(state, char)
                moved[target] = _merge(moved[target], stack) if target in moved else stack
            scans = moved
    if best is None:
        return None
    start, end = best
    return text[start:end + 1]


def is_balanced_object(text: str) -> bool:
    """True if the stripped text is exactly one balanced {...} object."""
    stripped = text.strip()
    if not stripped.startswith("{"):
        return False
    return _match_from(stripped, 0) == len(stripped) - 1


def coerce_schema(value: Any) -> Schema | None:
    """
    Normalize a schema candidate.

    Strings are parsed as JSON first. Returns the dict if it has at least
    one key, otherwise None (malformed text, lists, scalars and {} are all
    Empty).
    """
    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except ValueError:
            return None
    if isinstance(value, dict) and value:
        return value
    return None
