from epub_lix.tokenization import find_words, split_sentences, tokenize


def test_abbreviation_does_not_split_sentence():
    content = tokenize("Mr. Smith went home. He left.")

    assert content.sentences == ("Mr. Smith went home.", "He left.")
    assert content.words == ("Mr", "Smith", "went", "home", "He", "left")
    assert content.stats.sentence_count == 2


def test_words_keep_apostrophes_and_dotted_letters():
    assert find_words("O'Reilly visited the U.S.A. in 1999, café-style.") == [
        "O'Reilly",
        "visited",
        "the",
        "U.S.A",
        "in",
        "1999",
        "café",
        "style",
    ]


def test_long_words_are_longer_than_six_characters():
    content = tokenize("Readability matters. Longer sentences hurt readability.")

    assert content.long_words == ("Readability", "matters", "sentences", "readability")
    assert all(len(word) > 6 for word in content.long_words)
    assert len(content.long_words) <= len(content.words)
    assert tokenize("Readability matters.", long_word_length=7).long_words == (
        "Readability",
    )


def test_sentence_boundaries_need_non_lowercase_follower():
    assert split_sentences("It ended. then it went on! And on? \"Yes.\" Fine.") == [
        "It ended. then it went on!",
        "And on?",
        '"Yes."',
        "Fine.",
    ]


def test_consonant_abbreviation_exceptions_still_split():
    assert split_sentences("Det var en pc. Den virkede.") == ["Det var en pc.", "Den virkede."]
    assert split_sentences("Se Dr. Hansen. Han venter.") == ["Se Dr. Hansen.", "Han venter."]
    assert split_sentences("Vi har to pcs. De virker.") == ["Vi har to pcs.", "De virker."]
    assert split_sentences("Der er tre wcs. Alle er rene.") == ["Der er tre wcs.", "Alle er rene."]


def test_no_split_before_period_or_parenthesis():
    assert split_sentences("Done. (aside) More. .Dot") == ["Done. (aside) More. .Dot"]


def test_empty_text_has_no_sentences():
    content = tokenize("   ")

    assert content.sentences == ()
    assert content.words == ()
