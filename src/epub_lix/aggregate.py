from __future__ import annotations

import logging
import statistics
from typing import Iterable, Optional, Sequence

from .errors import DivisionError
from .models import Analysis, AnalysisStats, ContentStats, ItemFailure, ScoredItem
from .outliers import sort_by_title
from .scoring import calculate_lix

logger = logging.getLogger(__name__)


def total_stats(items: Iterable[ScoredItem]) -> ContentStats:
    """Sum word, long word and sentence counts across items."""
    return sum((item.stats for item in items), ContentStats())


def median_lix(items: Sequence[ScoredItem]) -> Optional[float]:
    if not items:
        return None
    return float(statistics.median(item.generated_lix for item in items))


def mean_lix(items: Sequence[ScoredItem]) -> Optional[float]:
    if not items:
        return None
    return float(statistics.mean(item.generated_lix for item in items))


def generated_lix(stats: ContentStats) -> Optional[int]:
    """Whole-book LIX from summed counts, or None when it is undefined."""
    try:
        return calculate_lix(stats)
    except DivisionError:
        return None


def resolve_lix(
    found: Optional[int], median: Optional[float], generated: Optional[int]
) -> Optional[float]:
    """Pick the authoritative LIX: printed value, then item median, then whole-book value."""
    for candidate in (found, median, generated):
        if candidate is not None:
            return candidate
    return None


def build_analysis(
    file_bytes: int,
    items: Sequence[ScoredItem],
    lix_found: Optional[int],
    failures: Sequence[ItemFailure] = (),
) -> Analysis:
    """Assemble the final report from the outlier-filtered items."""
    totals = total_stats(items)
    stats = AnalysisStats(
        lix_found=lix_found,
        lix_generated=generated_lix(totals),
        lix_median=median_lix(items),
        lix_mean=mean_lix(items),
        word_count=totals.word_count,
        long_word_count=totals.long_word_count,
        sentence_count=totals.sentence_count,
    )
    analysis = Analysis(
        file_bytes=file_bytes,
        lix=resolve_lix(stats.lix_found, stats.lix_median, stats.lix_generated),
        stats=stats,
        items=tuple(sort_by_title(items)),
        failures=tuple(failures),
    )
    logger.info(
        "Words: %d, long words: %d, sentences: %d",
        stats.word_count,
        stats.long_word_count,
        stats.sentence_count,
    )
    logger.info(
        "LIX found: %s, generated: %s, median: %s, mean: %s",
        stats.lix_found,
        stats.lix_generated,
        stats.lix_median,
        f"{stats.lix_mean:.0f}" if stats.lix_mean is not None else None,
    )
    return analysis
