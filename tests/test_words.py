import random
import pytest
from wordguess.words import Dictionary, WORDS, default_dictionary, load_words


def test_length_bounds_from_words():
    d = Dictionary(["cat", "dog", "bird"])
    assert d.length_bounds() == (3, 4)


def test_of_length_filters_exactly():
    d = Dictionary(["cat", "dog", "bird"])
    assert d.of_length(3) == ["cat", "dog"]
    assert d.of_length(4) == ["bird"]
    assert d.of_length(5) == []


def test_pick_single_candidate():
    d = Dictionary(["cat", "dog", "bird"])
    for seed in range(20):
        assert d.pick(4, random.Random(seed)) == "bird"


def test_pick_missing_length_returns_none():
    d = Dictionary(["cat", "bird"])
    assert d.pick(5) is None


def test_pick_stays_within_candidates():
    d = default_dictionary()
    rng = random.Random(42)
    for _ in range(50):
        assert d.pick(5, rng) in d.of_length(5)


def test_builtin_list_covers_every_length_in_range():
    d = Dictionary(WORDS)
    lo, hi = d.length_bounds()
    for n in range(lo, hi + 1):
        assert d.of_length(n)


def test_empty_dictionary_rejected():
    with pytest.raises(ValueError):
        Dictionary([])


def test_load_words_skips_blanks_and_comments(tmp_path):
    path = tmp_path / 'words.txt'
    path.write_text("# animals\ncat\n\n  dog  \nbird\n", encoding="utf-8")
    assert load_words(str(path)) == ["cat", "dog", "bird"]
    assert default_dictionary(str(path)).length_bounds() == (3, 4)
