"""
Minimal HTML query layer used by the documentation page scraper.

The scraper only needs a handful of capabilities: find an element by
attribute, list direct children of a tag, list (outermost) descendants of
some tags, step to the next sibling element, and read text and attributes.
Keeping those behind HtmlDocument/HtmlNode keeps the heuristics in
docpage.py independent of BeautifulSoup's API.
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import Tag

PARSER = "html.parser"


class HtmlNode:
    """Read-only view of one element."""

    def __init__(self, tag: Tag):
        self._tag = tag

    @property
    def name(self) -> str:
        return self._tag.name

    def attr(self, name: str) -> str | None:
        value = self._tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def text(self) -> str:
        return self._tag.get_text()

    def children(self, tag_name: str) -> list[HtmlNode]:
        """Direct child elements with the given tag name."""
        return [HtmlNode(t) for t in self._tag.find_all(tag_name, recursive=False)]

    def descendants(self, *tag_names: str) -> list[HtmlNode]:
        """All descendant elements matching any of tag_names, in document order."""
        return [HtmlNode(t) for t in self._tag.find_all(list(tag_names))]

    def outermost(self, *tag_names: str) -> list[HtmlNode]:
        """
        Descendants matching tag_names that are not nested inside another match.

        <pre><code>...</code></pre> yields the <pre> only, so its text is
        not counted twice.
        """
        names = set(tag_names)
        result = []
        for tag in self._tag.find_all(list(tag_names)):
            parent = tag.parent
            nested = False
            while parent is not None and parent is not self._tag:
                if parent.name in names:
                    nested = True
                    break
                parent = parent.parent
            if not nested:
                result.append(HtmlNode(tag))
        return result

    def next_element_sibling(self) -> HtmlNode | None:
        """The next sibling that is an element (text nodes are skipped)."""
        sibling = self._tag.find_next_sibling()
        return HtmlNode(sibling) if sibling is not None else None

    def find_by_class(self, class_name: str) -> HtmlNode | None:
        tag = self._tag.find(class_=class_name)
        return HtmlNode(tag) if tag is not None else None


class HtmlDocument(HtmlNode):
    """A parsed HTML page."""

    def __init__(self, markup: str):
        super().__init__(BeautifulSoup(markup, PARSER))

    def find_by_attribute(self, name: str, value: str) -> HtmlNode | None:
        """First element whose attribute `name` equals `value`."""
        tag = self._tag.find(attrs={name: value})
        return HtmlNode(tag) if tag is not None else None
