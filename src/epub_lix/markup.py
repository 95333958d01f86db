"""
Immutable markup trees for XHTML content documents.

Documents are parsed once (strict XML first, lenient HTML as a fallback)
into :class:`Element` values; all queries are pure functions returning new
values.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterator, Mapping, Union

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import NavigableString, PreformattedString, Tag

from .errors import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Element:
    """A markup element with its tag name (namespace stripped) and children."""

    tag: str
    children: tuple["Node", ...] = ()


Node = Union[Element, str]


def parse_strict(data: bytes) -> Element:
    """Parse well-formed XML/XHTML. Raises ``ET.ParseError``, or ``LookupError`` for an unknown encoding."""
    return _from_etree(ET.fromstring(data))


def parse_lenient(data: bytes) -> Element:
    """Parse tag soup with BeautifulSoup's built-in HTML parser."""
    soup = BeautifulSoup(data, "html.parser")
    return Element(tag="#document", children=_soup_children(soup))


def parse_document(data: bytes, name: str = "<document>") -> Element:
    """Parse content strictly, retrying leniently; raise ParseError if both fail."""
    try:
        return parse_strict(data)
    except (ET.ParseError, LookupError, ValueError) as strict_exc:
        logger.debug(
            "Could not load '%s' as application/xhtml+xml (%s); retrying as text/html",
            name,
            strict_exc,
        )
        try:
            return parse_lenient(data)
        except (ParserRejectedMarkup, ValueError) as lenient_exc:
            raise ParseError(
                f"Could not load '{name}' as application/xhtml+xml or text/html: {lenient_exc}"
            ) from lenient_exc


def transform(
    node: Element,
    drop: frozenset[str] = frozenset(),
    replace: Mapping[str, str] | None = None,
) -> Element:
    """Return a copy of ``node`` without ``drop`` elements and with ``replace`` elements swapped for text."""
    replace = replace or {}
    children: list[Node] = []
    for child in node.children:
        if isinstance(child, str):
            children.append(child)
        elif child.tag in drop:
            continue
        elif child.tag in replace:
            children.append(replace[child.tag])
        else:
            children.append(transform(child, drop, replace))
    return Element(tag=node.tag, children=tuple(children))


def iter_elements(node: Element) -> Iterator[Element]:
    """Yield ``node`` and all descendant elements in document order."""
    yield node
    for child in node.children:
        if isinstance(child, Element):
            yield from iter_elements(child)


def find_all(node: Element, tag: str) -> list[Element]:
    return [element for element in iter_elements(node) if element.tag == tag]


def text_content(node: Node) -> str:
    """Concatenated text of a node and all its descendants."""
    if isinstance(node, str):
        return node
    return "".join(text_content(child) for child in node.children)


def _from_etree(el: ET.Element) -> Element:
    children: list[Node] = []
    if el.text:
        children.append(el.text)
    for child in el:
        children.append(_from_etree(child))
        if child.tail:
            children.append(child.tail)
    return Element(tag=_local_name(el.tag), children=tuple(children))


def _soup_children(tag: Tag) -> tuple[Node, ...]:
    children: list[Node] = []
    for child in tag.children:
        if isinstance(child, Tag):
            children.append(
                Element(tag=_local_name(child.name), children=_soup_children(child))
            )
        elif isinstance(child, NavigableString) and not isinstance(
            child, PreformattedString
        ):
            children.append(str(child))
    return tuple(children)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1].rsplit(":", 1)[-1].lower()
