import pytest

from speech_relay.services.text_chunker import chunk_text


SENTENCE = (
    "The quick brown fox jumps over the lazy dog while the farmer watches "
    "from the porch and drinks his morning coffee"
)


@pytest.mark.parametrize("max_len", [10, 30, 40, 50, 500])
def test_round_trip(max_len):
    fragments = chunk_text(SENTENCE, max_len)
    assert " ".join(fragments) == SENTENCE


@pytest.mark.parametrize("max_len", [10, 30, 40, 50])
def test_fragments_respect_bound(max_len):
    for fragment in chunk_text(SENTENCE, max_len):
        assert len(fragment) <= max_len


def test_greedy_packing():
    assert chunk_text("Hello there, how are you doing today?", max_len=16) == [
        "Hello there, how",
        "are you doing",
        "today?",
    ]


def test_oversized_word_is_not_split():
    fragments = chunk_text("a supercalifragilisticexpialidocious word", max_len=10)
    assert fragments == ["a", "supercalifragilisticexpialidocious", "word"]


def test_short_text_is_single_fragment():
    assert chunk_text("Hi there", max_len=40) == ["Hi there"]


def test_internal_whitespace_is_collapsed():
    assert chunk_text("  Hi   there \n friend ", max_len=40) == ["Hi there friend"]


def test_blank_text_yields_no_fragments():
    assert chunk_text("") == []
    assert chunk_text("   ") == []


def test_max_len_must_be_positive():
    with pytest.raises(ValueError):
        chunk_text("hello", max_len=0)
