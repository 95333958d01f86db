from __future__ import annotations

import re
import zipfile
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .config import DEFAULT_ABBREVIATIONS
from .errors import NotFoundError
from .markup import find_all, parse_document, text_content, transform
from .models import ContentItem

NOISE_TAGS = frozenset({"sup", "nav"})
LINE_BREAK_REPLACEMENTS = MappingProxyType({"br": " "})

APOSTROPHE_RE = re.compile(r"[\u2018\u2019]")
QUOTE_RE = re.compile(r"[\u00ab\u00bb\u201e\u201d\u201c]")
# soft hyphen and en dash, plus one following whitespace character
DASH_RE = re.compile(r"[\u00ad\u2013]\s?")
EMOTICON_RE = re.compile(r"(?<=\s):'\(")
WHITESPACE_RUN_RE = re.compile(r"\s{2,}")


@dataclass(frozen=True)
class AbbreviationTable:
    """Read-only abbreviation -> expansion table with its compiled search pattern."""

    mapping: Mapping[str, str]
    pattern: re.Pattern[str] | None

    def expand(self, text: str) -> str:
        """Replace every delimited abbreviation in ``text`` with its expansion."""
        if self.pattern is None:
            return text
        return self.pattern.sub(lambda match: self.mapping[match.group(1)], text)


def build_abbreviation_table(mapping: Mapping[str, str]) -> AbbreviationTable:
    frozen = MappingProxyType(dict(mapping))
    if not frozen:
        return AbbreviationTable(mapping=frozen, pattern=None)
    keys = "|".join(re.escape(key) for key in frozen)
    pattern = re.compile(r"(?<=[\s(])(" + keys + r")(?=[\s$,.!?)])")
    return AbbreviationTable(mapping=frozen, pattern=pattern)


DEFAULT_ABBREVIATION_TABLE = build_abbreviation_table(DEFAULT_ABBREVIATIONS)


def clean_up_formatting(text: str) -> str:
    """Normalize punctuation and whitespace in a block of extracted text."""
    cleaned = text.strip().replace("\n", " ")
    cleaned = APOSTROPHE_RE.sub("'", cleaned)
    cleaned = QUOTE_RE.sub('"', cleaned)
    cleaned = DASH_RE.sub("", cleaned)
    cleaned = EMOTICON_RE.sub("", cleaned)
    return WHITESPACE_RUN_RE.sub(" ", cleaned)


def expand_abbreviations(
    text: str, table: AbbreviationTable = DEFAULT_ABBREVIATION_TABLE
) -> str:
    return table.expand(text)


def extract_text(data: bytes, name: str, table: AbbreviationTable) -> str:
    """Return the cleaned prose of one XHTML content document."""
    root = parse_document(data, name)
    tree = transform(root, drop=NOISE_TAGS, replace=LINE_BREAK_REPLACEMENTS)

    blocks = [p for p in find_all(tree, "p") if text_content(p).strip()]
    if not blocks:
        blocks = [body for body in find_all(tree, "body") if text_content(body).strip()]

    texts = [table.expand(clean_up_formatting(text_content(block))) for block in blocks]
    return " ".join(texts).strip()


def extract_content_item(
    zf: zipfile.ZipFile,
    path: str,
    table: AbbreviationTable = DEFAULT_ABBREVIATION_TABLE,
) -> ContentItem:
    """Read and clean one content document from the archive.

    Raises NotFoundError when the entry is missing or empty and ParseError
    when the markup cannot be parsed.
    """
    try:
        data = zf.read(path)
    except KeyError as exc:
        raise NotFoundError(f"HTML item not found: {path}") from exc
    except (zipfile.BadZipFile, NotImplementedError, OSError) as exc:
        raise NotFoundError(f"HTML item is unreadable: {path}: {exc}") from exc
    if not data.strip():
        raise NotFoundError(f"HTML item is empty: {path}")
    return ContentItem(path=path, text=extract_text(data, path, table))
