from __future__ import annotations

import re
from typing import List

from .models import TokenizedContent

# Letters, digits and Latin-1 accented letters, optionally joined by "." or "'"
# to following letters so "O'Reilly" and "U.S" stay single words.
WORD_RE = re.compile(r"[a-zA-ZÀ-ÿ0-9]+(?:[.'][a-zA-ZÀ-ÿ]+)*")

# Whitespace after sentence-ending punctuation, followed by a character that
# cannot continue a sentence (not lowercase, not "." and not "(").
SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.!?'\"])\s+(?=[^a-zà-ÿ.(])")

# A 1-3 consonant token ending in a period at the end of the inspected text,
# e.g. "Mr." or "Dr.", which must not end a sentence.
CONSONANT_ABBREVIATION_RE = re.compile(
    r"(?<!\S)([bcdfghjklmnpqrstvwxzBCDFGHJKLMNPQRSTVWXZ]{1,3})\.\Z"
)
# prefixes of consonant tokens that still end a sentence, e.g. "pc." or "wcs."
ABBREVIATION_EXCEPTIONS = ("pc", "wc")
# longest consonant abbreviation plus its period and one character of context
_ABBREVIATION_WINDOW = 5

DEFAULT_LONG_WORD_LENGTH = 6


def find_words(text: str) -> List[str]:
    return WORD_RE.findall(text)


def find_long_words(words: List[str], min_length: int = DEFAULT_LONG_WORD_LENGTH) -> List[str]:
    """Return the words strictly longer than ``min_length`` characters."""
    return [word for word in words if len(word) > min_length]


def split_sentences(text: str) -> List[str]:
    """Split text into sentences.

    Candidate boundaries come from SENTENCE_BOUNDARY_RE; a candidate is
    rejected when the token before it is a short consonant abbreviation.
    """
    text = text.strip()
    pieces: List[str] = []
    last_end = 0
    for match in SENTENCE_BOUNDARY_RE.finditer(text):
        if _ends_with_abbreviation(text, match.start()):
            continue
        pieces.append(text[last_end : match.start()])
        last_end = match.end()
    pieces.append(text[last_end:])
    return [piece for piece in pieces if piece.strip()]


def tokenize(text: str, long_word_length: int = DEFAULT_LONG_WORD_LENGTH) -> TokenizedContent:
    """Extract words, long words and sentences from cleaned prose."""
    words = find_words(text)
    return TokenizedContent(
        words=tuple(words),
        long_words=tuple(find_long_words(words, long_word_length)),
        sentences=tuple(split_sentences(text)),
    )


def _ends_with_abbreviation(text: str, end: int) -> bool:
    tail = text[max(0, end - _ABBREVIATION_WINDOW) : end]
    match = CONSONANT_ABBREVIATION_RE.search(tail)
    return match is not None and not match.group(1).startswith(ABBREVIATION_EXCEPTIONS)
