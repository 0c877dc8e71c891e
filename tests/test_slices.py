import random

import pytest

from toktools.slices import (
    batch,
    contains,
    cut,
    deduplicate,
    delete,
    expand,
    extend,
    insert,
    insert_many,
    reverse,
    shuffle,
)


def test_insert_int():
    assert insert([3, 5, 7, 9], 0, 2) == [3, 5, 0, 7, 9]


def test_insert_str():
    assert insert(["A", "B", "C", "D", "E"], "x", 2) == ["A", "B", "x", "C", "D", "E"]


def test_insert_at_ends_and_out_of_bound():
    assert insert([1, 2], 0, 0) == [0, 1, 2]
    assert insert([1, 2], 3, 2) == [1, 2, 3]
    with pytest.raises(IndexError):
        insert([1, 2], 9, 3)
    with pytest.raises(IndexError):
        insert([1, 2], 9, -1)


def test_insert_does_not_mutate():
    a = [3, 5, 7, 9]
    insert(a, 0, 2)
    assert a == [3, 5, 7, 9]


def test_insert_many():
    assert insert_many(["A", "D"], ["B", "C"], 1) == ["A", "B", "C", "D"]
    with pytest.raises(IndexError):
        insert_many([1], [2], 5)


def test_contains():
    assert contains(5, [3, 5, 7])
    assert not contains("x", ["A", "B"])


def test_reverse():
    assert reverse([1, 2, 3, 4]) == [4, 3, 2, 1]
    assert reverse([]) == []


def test_cut():
    assert cut([0, 1, 2, 3, 4], 1, 3) == [0, 3, 4]
    with pytest.raises(IndexError):
        cut([0, 1], 0, 5)
    with pytest.raises(ValueError):
        cut([0, 1, 2], 2, 1)


def test_delete():
    assert delete(["A", "B", "C"], 1) == ["A", "C"]
    with pytest.raises(IndexError):
        delete(["A"], 1)


def test_expand_and_extend():
    assert expand([1, 2, 3], 1, 3, 0) == [1, 0, 0, 2, 3]
    assert extend(["a"], 2, "") == ["a", "", ""]
    with pytest.raises(ValueError):
        extend([1], 0)


def test_shuffle_is_permutation():
    items = list(range(20))
    out = shuffle(items, random.Random(7))
    assert sorted(out) == items
    assert items == list(range(20))
    assert shuffle(items, random.Random(7)) == out


def test_batch():
    assert batch([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert batch([1, 2, 3, 4], 2) == [[1, 2], [3, 4]]
    assert batch([], 3) == [[]]
    with pytest.raises(ValueError):
        batch([1], -1)


def test_deduplicate():
    assert deduplicate([3, 1, 3, 2, 1]) == [1, 2, 3]
    assert deduplicate(["b", "a", "b"]) == ["a", "b"]
    assert deduplicate([]) == []