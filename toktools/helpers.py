"""Small text, file and iteration helpers used across the package."""

from __future__ import annotations

import os
from typing import Any, Iterable, Sequence, TypeVar

import regex

T = TypeVar("T")
U = TypeVar("U")

_GRAPHEME = regex.compile(r"\X")

_RUNE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "'": "\\'",
    "\\": "\\\\",
}


def make_range(start: int, end: int) -> list[int]:
    """Return a list holding *start* repeated ``end - start`` times."""
    return [start for _ in range(start, end)]


def string_index(s: str, sub: str) -> int:
    """Return the index of the first occurrence of *sub* in *s*.

    Raises ValueError when *sub* does not occur.
    """
    index = s.find(sub)
    if index < 0:
        raise ValueError("Index not found")
    return index


def _quote_rune(ch: str) -> str:
    escaped = _RUNE_ESCAPES.get(ch)
    if escaped is not None:
        return escaped
    cp = ord(ch)
    if cp < 0x80 and ch.isprintable():
        return ch
    if cp < 0x20 or cp == 0x7F:
        return f"\\x{cp:02x}"
    if cp < 0x10000:
        return f"\\u{cp:04x}"
    return f"\\U{cp:08x}"


def to_ascii(s: str) -> str:
    """Return *s* with every non-printable or non-ASCII character escaped."""
    return "".join(_quote_rune(ch) for ch in s)


def graphemes(s: str) -> list[str]:
    """Split *s* into extended grapheme clusters."""
    return _GRAPHEME.findall(s)


def to_grapheme(s: str) -> str:
    """Render each grapheme of *s* as its hex code points in brackets."""
    return "".join(
        "[" + " ".join(f"{ord(ch):x}" for ch in cluster) + "]"
        for cluster in graphemes(s)
    )


def min_max(values: Iterable[Any]) -> tuple[Any, Any]:
    """Return the smallest and largest of *values*.

    Raises ValueError when *values* is empty.
    """
    items = list(values)
    if not items:
        raise ValueError("min_max() arg is an empty sequence")
    return min(items), max(items)


def file_size(path: str | os.PathLike[str]) -> int:
    """Return the size in bytes of the file at *path*."""
    return os.stat(path).st_size


def read_all_lines(path: str | os.PathLike[str], keep_break_line: bool = False) -> list[str]:
    """Read the lines of a text file without their line endings.

    With *keep_break_line*, each line is preceded by a copy of itself
    that ends in a newline.
    """
    with open(path, encoding="utf-8", newline="") as fh:
        text = fh.read()
    raw_lines = text.split("\n")
    if raw_lines[-1] == "":
        raw_lines.pop()
    lines: list[str] = []
    for raw in raw_lines:
        line = raw[:-1] if raw.endswith("\r") else raw
        if keep_break_line:
            lines.append(line + "\n")
        lines.append(line)
    return lines


def zip_pairs(a: Sequence[T], b: Sequence[U]) -> list[tuple[T, U]]:
    """Pair up the elements of two sequences of equal length."""
    if len(a) != len(b):
        raise ValueError("zip: first two arguments must have same length")
    return list(zip(a, b))


def repeat(item: T, length: int) -> list[T]:
    """Return a list of *length* references to *item*."""
    return [item for _ in range(length)]


def merge(a: Iterable[T] | None, b: Iterable[T] | None) -> list[T]:
    """Return a new list holding the elements of *a* followed by those of *b*."""
    return [*(a or ()), *(b or ())]


def error_contains(err: BaseException | None, want: str) -> bool:
    """Tell whether the message of *err* contains *want*.

    No error matches only the empty string; an error never matches it.
    """
    if err is None:
        return want == ""
    if want == "":
        return False
    return want in str(err)


class RuneIter:
    """A resettable cursor over the characters of a string."""

    def __init__(self, data: Iterable[str]) -> None:
        self._items = list(data)
        self._next = 0 if self._items else -1

    def __iter__(self) -> RuneIter:
        return self

    def __next__(self) -> str:
        item = self.next()
        if item is None:
            raise StopIteration
        return item

    def next(self) -> str | None:
        """Return the next character, or None once exhausted."""
        if self._next == -1:
            return None
        item = self._items[self._next]
        if self._next + 1 >= len(self._items):
            self._next = -1
        else:
            self._next += 1
        return item

    def __len__(self) -> int:
        return len(self._items)

    def current_index(self) -> int:
        """Return the index of the last character returned (-1 if empty)."""
        if not self._items:
            return -1
        return self._next - 1

    def reset(self) -> None:
        """Move the cursor back to the first character."""
        self._next = 0 if self._items else -1


class RuneReader:
    """Read a string one character at a time."""

    def __init__(self, data: Iterable[str]) -> None:
        self._src = list(data)
        self._pos = 0

    def read_rune(self) -> tuple[str, int]:
        """Return the next character and its size in characters.

        Raises EOFError when no characters are left.
        """
        if self._pos >= len(self._src):
            raise EOFError("no more characters")
        ch = self._src[self._pos]
        self._pos += 1
        return ch, 1