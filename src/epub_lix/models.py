from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ManifestItem:
    """A file declared in the package manifest."""

    item_id: str
    href: str
    media_type: str


@dataclass(frozen=True, slots=True)
class PackageDocument:
    """Parsed OPF package document."""

    package_path: str
    root_dir: str
    manifest: tuple[ManifestItem, ...]
    spine: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ContentItem:
    """Cleaned prose extracted from one content document."""

    path: str
    text: str


@dataclass(frozen=True, slots=True)
class TokenizedContent:
    """Words, long words and sentences found in a piece of text."""

    words: tuple[str, ...]
    long_words: tuple[str, ...]
    sentences: tuple[str, ...]

    @property
    def stats(self) -> "ContentStats":
        return ContentStats(
            word_count=len(self.words),
            long_word_count=len(self.long_words),
            sentence_count=len(self.sentences),
        )


@dataclass(frozen=True, slots=True)
class ContentStats:
    """Word, long word and sentence counts."""

    word_count: int = 0
    long_word_count: int = 0
    sentence_count: int = 0

    def __add__(self, other: "ContentStats") -> "ContentStats":
        return ContentStats(
            word_count=self.word_count + other.word_count,
            long_word_count=self.long_word_count + other.long_word_count,
            sentence_count=self.sentence_count + other.sentence_count,
        )


@dataclass(frozen=True, slots=True)
class ScoredItem:
    """A content item with its generated LIX score."""

    title: str
    path: str
    generated_lix: int
    stats: ContentStats
    content: TokenizedContent

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "generated_lix": self.generated_lix,
            "word_count": self.stats.word_count,
            "long_word_count": self.stats.long_word_count,
            "sentence_count": self.stats.sentence_count,
        }


@dataclass(frozen=True, slots=True)
class ItemFailure:
    """A content item that was excluded because of an error."""

    path: str
    kind: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "kind": self.kind, "message": self.message}


@dataclass(frozen=True, slots=True)
class AnalysisStats:
    """Whole-book statistics."""

    lix_found: int | None
    lix_generated: int | None
    lix_median: float | None
    lix_mean: float | None
    word_count: int
    long_word_count: int
    sentence_count: int


@dataclass(frozen=True, slots=True)
class Analysis:
    """Final report for one EPUB."""

    file_bytes: int
    lix: float | None
    stats: AnalysisStats
    items: tuple[ScoredItem, ...]
    failures: tuple[ItemFailure, ...] = field(default_factory=tuple)

    def to_dict(self, include_failures: bool = False) -> dict[str, Any]:
        """Return the JSON-serializable analysis record."""
        payload: dict[str, Any] = {
            "file_bytes": self.file_bytes,
            "lix": self.lix,
            "stats": {
                "lix_found": self.stats.lix_found,
                "lix_median": self.stats.lix_median,
                "lix_generated": self.stats.lix_generated,
                "lix_mean": self.stats.lix_mean,
                "word_count": self.stats.word_count,
                "long_word_count": self.stats.long_word_count,
                "sentence_count": self.stats.sentence_count,
            },
            "items": [item.to_dict() for item in self.items],
        }
        if include_failures:
            payload["failures"] = [failure.to_dict() for failure in self.failures]
        return payload
