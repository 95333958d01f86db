from __future__ import annotations

import logging
import math
import re
from pathlib import PurePosixPath
from typing import Iterable, Optional

from .errors import DivisionError
from .models import ContentItem, ContentStats, ScoredItem
from .tokenization import DEFAULT_LONG_WORD_LENGTH, tokenize

logger = logging.getLogger(__name__)

# "LIX", "LIX-tal: 42", "lix 31" ... not preceded by a letter, and not a
# range or signed value such as "LIX 30-40" or "LIX 40+".
LIX_RE = re.compile(
    r"(?<![A-ZÀ-ÿ])LIX\s*-?(?:TAL)?:?\s*(\d{1,2})(?!\d?[-+])",
    re.IGNORECASE | re.MULTILINE,
)
DEFAULT_COLOPHON_PATTERN = "colophon|kolofon"


def calculate_lix(stats: ContentStats) -> int:
    """LIX = words per sentence + percentage of long words, rounded half up."""
    if stats.sentence_count == 0 or stats.word_count == 0:
        raise DivisionError(
            f"LIX is undefined for {stats.word_count} words in {stats.sentence_count} sentences"
        )
    sentence_length = stats.word_count / stats.sentence_count
    long_word_ratio = stats.long_word_count * 100 / stats.word_count
    return math.floor(sentence_length + long_word_ratio + 0.5)


def score_item(
    item: ContentItem, long_word_length: int = DEFAULT_LONG_WORD_LENGTH
) -> ScoredItem:
    """Tokenize a content item and compute its LIX. Raises DivisionError."""
    content = tokenize(item.text, long_word_length)
    stats = content.stats
    return ScoredItem(
        title=PurePosixPath(item.path).name,
        path=item.path,
        generated_lix=calculate_lix(stats),
        stats=stats,
        content=content,
    )


def search_lix_in_text(text: str) -> Optional[int]:
    """Return the first LIX value printed in ``text``, if any."""
    match = LIX_RE.search(text)
    return int(match.group(1)) if match else None


def search_lix_in_items(
    items: Iterable[ContentItem], colophon_pattern: str = DEFAULT_COLOPHON_PATTERN
) -> Optional[int]:
    """Search the first colophon document, then every item in container order.

    A printed LIX of 0 is not a usable score and counts as no hit.
    """
    items = list(items)
    colophon_re = re.compile(colophon_pattern, re.IGNORECASE)
    colophon = next((item for item in items if colophon_re.search(item.path)), None)

    if colophon is not None:
        found = search_lix_in_text(colophon.text)
        if found:
            logger.info("Found LIX %d in colophon %s", found, colophon.path)
            return found
        logger.info("No LIX found in colophon %s", colophon.path)

    for item in items:
        found = search_lix_in_text(item.text)
        if found:
            logger.info("Found LIX %d in %s", found, item.path)
            return found
    logger.info("No LIX found in %d items", len(items))
    return None
