from __future__ import annotations

import logging
import re
import zipfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TypeVar

from .aggregate import build_analysis
from .config import LixConfig
from .epub import (
    content_item_paths,
    load_package_document,
    locate_package_path,
    open_container,
    read_epub_bytes,
)
from .errors import DivisionError, FormatError, NotFoundError, ParseError
from .extraction import AbbreviationTable, build_abbreviation_table, extract_content_item
from .models import Analysis, ContentItem, ItemFailure, ScoredItem
from .outliers import filter_outliers
from .scoring import score_item, search_lix_in_items

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(slots=True)
class ItemResult:
    """Outcome of extracting, tokenizing and scoring one content document."""

    path: str
    item: Optional[ContentItem] = None
    scored: Optional[ScoredItem] = None
    failure: Optional[ItemFailure] = None


def analyze_epub(
    source: str | Path | bytes, config: LixConfig | None = None
) -> Analysis:
    """Run the full LIX analysis for an EPUB given as a path or raw bytes."""
    config = config or LixConfig()
    data = read_epub_bytes(source)
    table = build_abbreviation_table(config.abbreviations)

    with open_container(data) as zf:
        package_path = locate_package_path(zf)
        package = load_package_document(zf, package_path)
        paths = content_item_paths(package, config.reading_order)
        results = _map_items(
            lambda path: process_item(zf, path, table, config.long_word_length),
            paths,
            config.workers,
        )

    items = [result.item for result in results if result.item is not None]
    failures = [result.failure for result in results if result.failure is not None]
    if not items:
        raise FormatError("Could not find any text content in the EPUB")

    scored = select_scored_items(results, config)
    logger.info("Calculating LIX for %d of %d item(s)", len(scored), len(items))
    filtered = filter_outliers(scored, config.max_std_dev)
    lix_found = search_lix_in_items(items, config.colophon_pattern)
    return build_analysis(len(data), filtered, lix_found, failures)


def process_item(
    zf: zipfile.ZipFile,
    path: str,
    table: AbbreviationTable,
    long_word_length: int,
) -> ItemResult:
    """Extract and score one document, recording per-item failures instead of raising."""
    try:
        item = extract_content_item(zf, path, table)
    except (NotFoundError, ParseError) as exc:
        logger.warning("Skipping %s: %s", path, exc)
        kind = "not_found" if isinstance(exc, NotFoundError) else "parse_error"
        return ItemResult(path=path, failure=ItemFailure(path, kind, str(exc)))

    if not item.text:
        logger.debug("Skipping %s: no text content", path)
        return ItemResult(path=path)

    try:
        scored = score_item(item, long_word_length)
    except DivisionError as exc:
        logger.warning("No LIX for %s: %s", path, exc)
        return ItemResult(
            path=path, item=item, failure=ItemFailure(path, "undefined_lix", str(exc))
        )
    if not scored.generated_lix:
        logger.warning("No LIX for %s: score rounds to zero", path)
        return ItemResult(
            path=path,
            item=item,
            failure=ItemFailure(path, "undefined_lix", "LIX rounds to zero"),
        )
    return ItemResult(path=path, item=item, scored=scored)


def select_scored_items(
    results: Sequence[ItemResult], config: LixConfig
) -> List[ScoredItem]:
    """Return the scored items, limited to chapters when configured and present."""
    scored = [result.scored for result in results if result.scored is not None]
    if not config.chapters_only:
        return scored
    chapter_re = re.compile(config.chapter_pattern, re.IGNORECASE)
    has_chapters = any(
        result.item is not None and chapter_re.search(result.path) for result in results
    )
    if not has_chapters:
        return scored
    return [item for item in scored if chapter_re.search(item.path)]


def _map_items(func: Callable[[T], R], values: Sequence[T], workers: int) -> List[R]:
    if workers <= 1 or len(values) <= 1:
        return [func(value) for value in values]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(func, values))
