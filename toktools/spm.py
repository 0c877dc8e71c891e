"""SentencePiece precompiled character maps and their normalizer.

A precompiled charsmap is laid out as a little-endian u32 giving the trie
size in bytes, the trie itself as u32 units, then a blob of replacement
strings each terminated by a NUL byte. Trie values are byte offsets into
that blob.
"""

from __future__ import annotations

import base64
import struct
import unicodedata
from dataclasses import dataclass

from toktools.helpers import graphemes


def as_base64(key: bytes) -> str:
    """Encode *key* with the standard base64 alphabet."""
    return base64.b64encode(key).decode("ascii")


def from_base64(s: str) -> bytes:
    """Decode standard base64 text; raises binascii.Error when malformed."""
    return base64.b64decode(s, validate=True)


@dataclass(frozen=True)
class ArrayUnit:
    """One packed unit of a double-array trie."""

    raw: int

    def has_leaf(self) -> bool:
        return (self.raw >> 8) & 1 == 1

    def value(self) -> int:
        return self.raw & ((1 << 31) - 1)

    def label(self) -> int:
        return self.raw & ((1 << 31) | 0xFF)

    def offset(self) -> int:
        return (self.raw >> 10) << ((self.raw & (1 << 9)) >> 6)


@dataclass
class DoubleArray:
    """A double-array trie over bytes."""

    array: list[ArrayUnit]

    def common_prefix_search(self, key: bytes) -> list[int]:
        """Return the values of every trie entry that is a prefix of *key*.

        The search stops at the first NUL byte.
        """
        results: list[int] = []
        node_pos = self.array[0].offset()
        for c in key:
            if c == 0:
                break
            node_pos ^= c
            unit = self.array[node_pos]
            if unit.label() != c:
                return results
            node_pos ^= unit.offset()
            if unit.has_leaf():
                results.append(self.array[node_pos].value())
        return results


def parse(data: bytes) -> tuple[bytes, list[ArrayUnit]]:
    """Split a precompiled charsmap into its normalized blob and trie units."""
    if len(data) < 4:
        raise ValueError("precompiled charsmap is too short")
    (trie_size,) = struct.unpack_from("<I", data)
    count = trie_size // 4
    end = 4 + 4 * count
    if len(data) < end:
        raise ValueError("precompiled charsmap is truncated")
    units = [ArrayUnit(v) for v in struct.unpack_from(f"<{count}I", data, 4)]
    return bytes(data[end:]), units


def normalize_mn(text: str) -> str:
    """Replace every non-spacing mark in *text* with its ``U+XXXX`` form."""
    return "".join(
        f"U+{ord(ch):04X}" if unicodedata.category(ch) == "Mn" else ch
        for ch in text
    )


@dataclass
class Precompiled:
    """A normalizer driven by a SentencePiece precompiled charsmap."""

    precompiled_charsmap: bytes
    normalized: bytes
    trie: DoubleArray

    @classmethod
    def from_bytes(cls, data: bytes) -> Precompiled:
        """Build a normalizer from raw charsmap bytes."""
        normalized, units = parse(data)
        return cls(
            precompiled_charsmap=bytes(data),
            normalized=normalized,
            trie=DoubleArray(units),
        )

    def transform(self, chunk: str) -> str:
        """Return the replacement for *chunk*, or "" when there is none."""
        results = self.trie.common_prefix_search(chunk.encode("utf-8"))
        if not results:
            return ""
        start = results[0]
        end = self.normalized.find(b"\0", start)
        if end < 0:
            end = len(self.normalized)
        return self.normalized[start:end].decode("utf-8", errors="replace")

    def normalize_string(self, original: str) -> str:
        """Normalize *original* grapheme by grapheme.

        A short grapheme with a replacement of its own ends the output with
        that replacement. Otherwise each character is replaced on its own,
        with non-spacing marks written as ``U+XXXX``.
        """
        chars: list[str] = []
        for grapheme in graphemes(original):
            if len(grapheme.encode("utf-8")) < 6:
                norm = self.transform(grapheme)
                if norm:
                    chars.extend(norm)
                    return "".join(chars)
            for ch in normalize_mn(grapheme):
                norm = normalize_mn(self.transform(ch))
                if norm:
                    chars.extend(norm)
                else:
                    chars.append(ch)
        return "".join(chars)