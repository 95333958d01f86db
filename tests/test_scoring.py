import pytest

from epub_lix.errors import DivisionError
from epub_lix.models import ContentItem, ContentStats
from epub_lix.scoring import (
    calculate_lix,
    score_item,
    search_lix_in_items,
    search_lix_in_text,
)


def test_calculate_lix_formula():
    assert calculate_lix(ContentStats(word_count=40, long_word_count=8, sentence_count=4)) == 30


def test_calculate_lix_rounds_half_up():
    # 3 / 2 + 0 = 1.5
    assert calculate_lix(ContentStats(word_count=3, long_word_count=0, sentence_count=2)) == 2
    # 5 / 2 + 0 = 2.5
    assert calculate_lix(ContentStats(word_count=5, long_word_count=0, sentence_count=2)) == 3


@pytest.mark.parametrize(
    "stats",
    [
        ContentStats(word_count=10, long_word_count=1, sentence_count=0),
        ContentStats(word_count=0, long_word_count=0, sentence_count=2),
    ],
)
def test_calculate_lix_undefined(stats: ContentStats):
    with pytest.raises(DivisionError):
        calculate_lix(stats)
    with pytest.raises(ZeroDivisionError):
        calculate_lix(stats)


def test_score_item_uses_basename_as_title():
    scored = score_item(ContentItem("OEBPS/Text/ch01.xhtml", "Dogs bark loudly. Elephants trumpet."))

    assert scored.title == "ch01.xhtml"
    assert scored.stats == ContentStats(word_count=5, long_word_count=2, sentence_count=2)
    # 5 / 2 + 2 * 100 / 5 = 42.5
    assert scored.generated_lix == 43


def test_search_lix_in_text_finds_printed_value():
    assert search_lix_in_text("Forfatterens LIX-tal: 42.") == 42
    assert search_lix_in_text("Bogen har lix 17 og er let.") == 17
    assert search_lix_in_text("LIX:\n 9") == 9


def test_search_lix_in_text_rejects_ranges_and_letters():
    assert search_lix_in_text("LIX 30-40") is None
    assert search_lix_in_text("LIX 40+") is None
    assert search_lix_in_text("FLIX 25") is None
    assert search_lix_in_text("No score here.") is None


def test_search_lix_in_text_adjacent_digits():
    # only a digit followed by a sign is rejected, so the first two digits match
    assert search_lix_in_text("LIX142") == 14
    assert search_lix_in_text("LIX14+") is None


def test_search_lix_in_items_prefers_colophon():
    items = [
        ContentItem("OEBPS/chapter1.xhtml", "Her nævnes LIX 12 i teksten."),
        ContentItem("OEBPS/kolofon.xhtml", "Bogen har LIX-tal: 28."),
    ]
    assert search_lix_in_items(items) == 28


def test_search_lix_in_items_falls_back_to_all_items():
    items = [
        ContentItem("OEBPS/colophon.xhtml", "Udgivet 2020."),
        ContentItem("OEBPS/chapter1.xhtml", "Ingen tal."),
        ContentItem("OEBPS/chapter2.xhtml", "LIX 33 og senere LIX 12."),
    ]
    assert search_lix_in_items(items) == 33
    assert search_lix_in_items(items[:2]) is None
    assert search_lix_in_items([]) is None


def test_search_lix_in_items_reads_only_first_colophon():
    items = [
        ContentItem("OEBPS/colophon.xhtml", "Udgivet 2020."),
        ContentItem("OEBPS/kolofon2.xhtml", "LIX 21."),
        ContentItem("OEBPS/chapter1.xhtml", "Her nævnes LIX 12."),
    ]
    # the second colophon is only reached by the container-order pass
    assert search_lix_in_items(items) == 21
    assert search_lix_in_items([items[0], items[2], items[1]]) == 12


def test_search_lix_in_items_ignores_printed_zero():
    assert search_lix_in_text("LIX 0") == 0
    items = [
        ContentItem("OEBPS/kolofon.xhtml", "LIX 00."),
        ContentItem("OEBPS/chapter1.xhtml", "LIX 0 her."),
        ContentItem("OEBPS/chapter2.xhtml", "LIX 35."),
    ]
    assert search_lix_in_items(items) == 35
    assert search_lix_in_items(items[:2]) is None
