import io

import pytest

from tweetgen.data.corpus import (
    IngestConfig,
    build_dictionary,
    ingest,
    normalize_read_cap,
)
from tweetgen.errors import LineTooLongError, TokenTooLongError
from tweetgen.models.dictionary import Dictionary


def edges(dictionary, text):
    return {s.text: n for s, n in dictionary.lookup(text).successors.items()}


def test_example_corpus():
    d = build_dictionary(io.StringIO("a b.\na c.\n"))
    assert [w.text for w in d] == ["a", "b.", "c."]
    assert d.lookup("a").count == 2
    assert edges(d, "a") == {"b.": 1, "c.": 1}
    assert d.lookup("b.").is_terminal and d.lookup("b.").successors == {}
    assert d.lookup("c.").is_terminal and d.lookup("c.").successors == {}


def test_no_edges_across_lines():
    d = build_dictionary(io.StringIO("x y\nz x\n"))
    assert edges(d, "y") == {}
    assert edges(d, "x") == {"y": 1}
    assert edges(d, "z") == {"x": 1}


def test_terminal_word_mid_line_gets_no_edge():
    d = build_dictionary(io.StringIO("one. two three\n"))
    assert edges(d, "one.") == {}
    assert edges(d, "two") == {"three": 1}


def test_weight_conservation():
    text = "the cat sat on the mat.\nthe dog sat on the cat\nthe the the\n"
    d = build_dictionary(io.StringIO(text))
    followed = {}
    for line in text.splitlines():
        tokens = line.split()
        for prev, _ in zip(tokens, tokens[1:]):
            if not prev.endswith("."):
                followed[prev] = followed.get(prev, 0) + 1
    for word in d:
        if not word.is_terminal:
            assert word.total_weight == followed.get(word.text, 0)
    assert len({w.text for w in d}) == len(d)
    assert d.lookup("the").count == 7


def test_whitespace_variants():
    d = build_dictionary(io.StringIO("  a\tb   c  \r\n\n"))
    assert [w.text for w in d] == ["a", "b", "c"]
    assert edges(d, "a") == {"b": 1}


def test_read_cap_stops_mid_line():
    stream = io.StringIO("a b c\nd e\n")
    d = Dictionary()
    stats = ingest(stream, d, IngestConfig(max_words=2))
    assert [w.text for w in d] == ["a", "b"]
    assert stats.tokens == 2 and stats.capped
    assert edges(d, "a") == {"b": 1}


def test_read_cap_larger_than_corpus():
    d = Dictionary()
    stats = ingest(io.StringIO("a b\nc\n"), d, IngestConfig(max_words=50))
    assert stats.tokens == 3
    assert not stats.capped


@pytest.mark.parametrize("cap", [0, None, -1])
def test_read_all_caps(cap):
    d = build_dictionary(io.StringIO("a b\n\nc d\n"), max_words=cap)
    assert [w.text for w in d] == ["a", "b", "c", "d"]


def test_empty_leading_line_does_not_stop_reading():
    d = build_dictionary(io.StringIO("\na b\n"))
    assert len(d) == 2


def test_normalize_read_cap():
    assert normalize_read_cap(None) == 0
    assert normalize_read_cap(-1) == 0
    assert normalize_read_cap(7) == 7
    with pytest.raises(ValueError):
        normalize_read_cap(-2)


def test_token_too_long():
    config = IngestConfig(max_token_length=5)
    with pytest.raises(TokenTooLongError) as info:
        ingest(io.StringIO("ok\nfine toolongtoken\n"), Dictionary(), config)
    assert info.value.line_number == 2


def test_line_too_long():
    config = IngestConfig(max_line_length=10)
    with pytest.raises(LineTooLongError):
        ingest(io.StringIO("a b c d e f g h\n"), Dictionary(), config)


def test_default_limits_accept_boundary_sizes():
    token = "x" * 99
    line = " ".join([token] * 9) + " " + "y" * 99
    assert len(line) == 999
    d = build_dictionary(io.StringIO(line + "\n"))
    assert d.lookup(token).count == 9


def test_build_dictionary_rejects_cap_and_config():
    with pytest.raises(ValueError):
        build_dictionary(io.StringIO("a b\n"), max_words=1, config=IngestConfig())


def test_build_dictionary_with_config():
    d = build_dictionary(io.StringIO("a b c\n"), config=IngestConfig(max_words=2))
    assert [w.text for w in d] == ["a", "b"]
