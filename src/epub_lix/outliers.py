from __future__ import annotations

import logging
import re
import statistics
import unicodedata
from typing import List, Sequence, Tuple, Union

from .models import ScoredItem

logger = logging.getLogger(__name__)

DEFAULT_MAX_STD_DEV = 6.0

_DIGITS_RE = re.compile(r"([0-9]+)")


def filter_outliers(
    items: Sequence[ScoredItem], max_std_dev: float = DEFAULT_MAX_STD_DEV
) -> List[ScoredItem]:
    """
    Drop items whose LIX lies outside median ± standard deviation.

    Items are sorted ascending by LIX. Filtering only happens when the
    population standard deviation exceeds ``max_std_dev``; otherwise the
    sorted list is returned unchanged.
    """
    ordered = sorted(items, key=lambda item: item.generated_lix)
    if not ordered:
        return ordered

    scores = [item.generated_lix for item in ordered]
    std_dev = statistics.pstdev(scores)
    if std_dev <= max_std_dev:
        return ordered

    midpoint = statistics.median(scores)
    upper_bound = midpoint + std_dev
    lower_bound = midpoint - std_dev

    kept: List[ScoredItem] = []
    for item in ordered:
        if item.generated_lix > upper_bound:
            logger.info(
                "Removed LIX value '%d' from '%s' - higher than '%.4g' (median %.4g + std. dev. %.4g)",
                item.generated_lix,
                item.title,
                upper_bound,
                midpoint,
                std_dev,
            )
        elif item.generated_lix < lower_bound:
            logger.info(
                "Removed LIX value '%d' from '%s' - lower than '%.4g' (median %.4g - std. dev. %.4g)",
                item.generated_lix,
                item.title,
                lower_bound,
                midpoint,
                std_dev,
            )
        else:
            kept.append(item)
    return kept


def natural_sort_key(value: str) -> Tuple[Union[str, int], ...]:
    """Case- and accent-insensitive sort key that orders digit runs numerically."""
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return tuple(
        int(part) if index % 2 else part
        for index, part in enumerate(_DIGITS_RE.split(base))
    )


def sort_by_title(items: Sequence[ScoredItem]) -> List[ScoredItem]:
    return sorted(items, key=lambda item: natural_sort_key(item.title))
