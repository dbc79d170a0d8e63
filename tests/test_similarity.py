import pytest

from transync.core.similarity import jaccard, length_ratio, sequential_score, similarity


def test_identical_sequences_score_one():
    words = "hello world how are you".split()
    assert similarity(words, list(words)) == pytest.approx(1.0)


def test_empty_sequences():
    assert jaccard([], []) == 0.0
    assert length_ratio([], []) == 1.0
    assert sequential_score([], []) == 0.0
    assert similarity([], []) == pytest.approx(0.2)


def test_disjoint_sequences_only_score_length():
    assert similarity(["a", "b"], ["c", "d"]) == pytest.approx(0.2)
    assert similarity(["a", "b"], ["c", "d", "e", "f"]) == pytest.approx(0.1)


def test_components():
    assert jaccard(["a", "a", "b"], ["b", "c"]) == pytest.approx(1 / 3)
    assert length_ratio(["a"], ["a", "b", "c", "d"]) == pytest.approx(0.25)
    # cursor over the second sequence only moves on a match
    assert sequential_score(["a", "b", "c"], ["a", "x", "b"]) == pytest.approx(1 / 3)
    assert sequential_score(["a", "b", "c"], ["a", "b", "c", "d"]) == pytest.approx(0.75)


def test_order_matters():
    a = "one two three four".split()
    assert similarity(a, a) > similarity(a, list(reversed(a)))


def test_score_bounds():
    samples = [[], ["x"], ["x", "y", "x"], "the cat sat on the mat".split()]
    for a in samples:
        for b in samples:
            assert 0.0 <= similarity(a, b) <= 1.0
