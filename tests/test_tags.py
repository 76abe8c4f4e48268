from vibematch.matching import TAG_VOCABULARY, extract_tags


def test_extract_tags_is_case_insensitive() -> None:
    tags = extract_tags("HOUSE Party Mix", "")

    assert "house" in tags
    assert "party" in tags


def test_extract_tags_uses_substring_matching() -> None:
    assert extract_tags("Housework beats") == ["house"]


def test_extract_tags_reads_description_too() -> None:
    tags = extract_tags("Sunday", "late night Jazz and some lofi for study")

    assert tags == ["jazz", "lofi", "study"]


def test_extract_tags_follows_vocabulary_order_without_duplicates() -> None:
    tags = extract_tags("pop pop rock", "Rock and POP, more rock")

    assert tags == ["rock", "pop"]
    assert len(tags) == len(set(tags))
    positions = [TAG_VOCABULARY.index(tag) for tag in tags]
    assert positions == sorted(positions)


def test_extract_tags_multiword_and_symbols() -> None:
    tags = extract_tags("90s Hip Hop & R&B")

    assert tags == ["hip hop", "r&b"]


def test_extract_tags_empty_input() -> None:
    assert extract_tags("", None) == []
    assert extract_tags(None) == []
