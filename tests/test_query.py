import io

import pytest

from nword.query import (
    NgramStream,
    Options,
    answer,
    load_tries,
    run,
    stream_ngrams,
    suffix_transform,
)
from nword.trie import TrieNode


def make_trie(*ngrams):
    trie = TrieNode()
    for ngram in ngrams:
        trie.insert(ngram, 1)
    return trie


def write_db(path, lines):
    (path / "3grams.txt").write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return path


def test_stream_without_depth_gives_direct_continuations():
    trie = make_trie("a b c", "b c d", "a b x")
    assert sorted(NgramStream(trie, "a b", 0)) == ["a b c", "a b x"]


def test_stream_expands_to_max_depth():
    trie = make_trie("a b c", "b c d", "c d e", "d e f")
    assert list(NgramStream(trie, "a b", 2)) == ["a b c", "a b c d", "a b c d e"]


def test_stream_unknown_seed_is_empty():
    trie = make_trie("a b c")
    assert list(NgramStream(trie, "q r", 3)) == []


def test_stream_is_its_own_iterator():
    stream = NgramStream(make_trie("a b c"), "a b", 0)
    assert iter(stream) is stream
    assert next(stream) == "a b c"
    with pytest.raises(StopIteration):
        next(stream)


def test_stream_ngrams_single_word_yields_bigrams_first():
    trie = make_trie("a b c", "a b d", "a x y")
    results = list(stream_ngrams(trie, "a", 0))
    assert sorted(results[:2]) == ["a b", "a x"]
    assert sorted(results[2:]) == ["a b c", "a b d", "a x y"]


def test_stream_ngrams_single_word_starts_one_level_down():
    trie = make_trie("a b c", "b c d")
    # the bigram seeds count as depth 1, so max_depth 1 stops after one step
    assert list(stream_ngrams(trie, "a", 1)) == ["a b", "a b c"]


def test_stream_ngrams_deduplicates_bigrams():
    trie = make_trie("a b c", "a b d")
    results = list(stream_ngrams(trie, "a", 0))
    assert results.count("a b") == 1


def test_stream_ngrams_multi_word_seed():
    trie = make_trie("a b c", "b c d")
    assert list(stream_ngrams(trie, "a b", 1)) == ["a b c", "a b c d"]


def test_suffix_transform_reverses_words_keeps_count():
    assert suffix_transform("a b c\t5") == "c b a\t5"


def test_suffix_transform_empty_line_raises():
    with pytest.raises(ValueError):
        suffix_transform("   \n")


def test_answer_prefix_and_normalisation():
    prefix_trie = make_trie("a b c")
    assert list(answer(prefix_trie, TrieNode(), "  A B \n", 0)) == ["a b c"]


def test_answer_blank_query_yields_nothing():
    assert list(answer(make_trie("a b c"), make_trie("c b a"), "   \n", 3)) == []


def test_answer_suffix_trie_finds_leading_words():
    suffix_trie = TrieNode.from_lines(map(suffix_transform, ["a b c\t5"]), 1)
    assert list(answer(TrieNode(), suffix_trie, "B C", 0)) == ["a b c"]


def test_load_tries_respects_modes(tmp_path):
    write_db(tmp_path, ["a b c\t5"])
    prefix_trie, suffix_trie = load_tries(tmp_path, Options(prefix_mode=True, freq_min=1))
    assert prefix_trie.lookup("a b") == [("a b c", 5)]
    assert suffix_trie.lookup("c b") == []


def test_load_tries_suffix(tmp_path):
    write_db(tmp_path, ["a b c\t5"])
    _, suffix_trie = load_tries(tmp_path, Options(suffix_mode=True, freq_min=1))
    assert suffix_trie.lookup("c b") == [("c b a", 5)]


def test_load_tries_missing_database(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tries(tmp_path, Options(prefix_mode=True))


def test_run_writes_results_and_counts(tmp_path):
    write_db(tmp_path, ["a b c\t5", "a b d\t2"])
    out = io.StringIO()
    total = run(
        tmp_path,
        Options(prefix_mode=True, freq_min=3, max_depth=0),
        io.StringIO("a b\n\n"),
        out,
    )
    assert out.getvalue() == "a b c\n"
    assert total == 1