"""List helpers: bounded insertions and removals, batching, deduplication."""

from __future__ import annotations

import random
from itertools import groupby
from typing import Any, Sequence, TypeVar

T = TypeVar("T")


def _check_range(items: Sequence[Any], start: int, end: int) -> None:
    if start < 0 or start > len(items):
        raise IndexError("`start` is out of bound")
    if end < 0 or end > len(items):
        raise IndexError("`end` is out of bound")
    if start > end:
        raise ValueError("`end` should be greater than `start`")


def _check_index(items: Sequence[Any], index: int) -> None:
    if index < 0 or index > len(items):
        raise IndexError("`index` is out of bound")


def contains(item: Any, items: Sequence[Any]) -> bool:
    """Return True when *item* is an element of *items*."""
    return item in items


def reverse(items: Sequence[T]) -> list[T]:
    """Return the elements of *items* in reverse order."""
    return list(reversed(items))


def cut(items: Sequence[T], start: int, end: int) -> list[T]:
    """Return *items* without the elements in ``[start, end)``."""
    _check_range(items, start, end)
    return [*items[:start], *items[end:]]


def delete(items: Sequence[T], index: int) -> list[T]:
    """Return *items* without the element at *index*, order preserved."""
    if index < 0 or index >= len(items):
        raise IndexError("`index` is out of bound")
    return [*items[:index], *items[index + 1:]]


def expand(items: Sequence[T], start: int, end: int, fill: Any = None) -> list[Any]:
    """Return *items* with ``end - start`` copies of *fill* inserted at *start*."""
    _check_range(items, start, end)
    return [*items[:start], *([fill] * (end - start)), *items[start:]]


def extend(items: Sequence[T], size: int, fill: Any = None) -> list[Any]:
    """Return *items* followed by *size* copies of *fill*."""
    if size <= 0:
        raise ValueError("Extending size should be greater than zero.")
    return [*items, *([fill] * size)]


def insert(items: Sequence[T], item: T, index: int) -> list[T]:
    """Return *items* with *item* inserted before position *index*."""
    _check_index(items, index)
    return [*items[:index], item, *items[index:]]


def insert_many(items: Sequence[T], others: Sequence[T], index: int) -> list[T]:
    """Return *items* with all of *others* inserted before position *index*."""
    _check_index(items, index)
    return [*items[:index], *others, *items[index:]]


def shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a Fisher-Yates shuffled copy of *items*."""
    out = list(items)
    (rng or random.Random()).shuffle(out)
    return out


def batch(items: Sequence[T], size: int) -> list[list[T]]:
    """Split *items* into consecutive batches of *size*; the last may be shorter.

    An empty input yields a single empty batch.
    """
    if size <= 0:
        raise ValueError("Batch size should be greater than zero")
    rest = list(items)
    batches: list[list[T]] = []
    while size < len(rest):
        batches.append(rest[:size])
        rest = rest[size:]
    batches.append(rest)
    return batches


def deduplicate(items: Sequence[T]) -> list[T]:
    """Return the distinct elements of *items* in sorted order."""
    return [key for key, _ in groupby(sorted(items))]