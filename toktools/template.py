"""Template post-processing: pieces, templates and special-token tables.

A template is a list of pieces. Each piece stands for one of the input
sequences (``$A``, ``$B``) or for a special token (``[CLS]``), and each
carries a type id. A piece is written as ``<id>`` or ``<id>:<type_id>``.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Sequence, Union

from toktools.params import Params

_INTEGER = re.compile(r"[+-]?[0-9]+")


class SequenceId(enum.Enum):
    """Which input sequence a template piece refers to."""

    A = "A"
    B = "B"


@dataclass(frozen=True)
class SequencePiece:
    """A template piece standing for one of the input sequences."""

    id: SequenceId = SequenceId.A
    type_id: int = 0


@dataclass(frozen=True)
class SpecialTokenPiece:
    """A template piece standing for a special token, looked up by id."""

    id: str
    type_id: int = 0


Piece = Union[SequencePiece, SpecialTokenPiece]


class TemplateError(ValueError):
    """Raised when a template or piece cannot be built or is invalid."""


def _extract_id(s: str) -> Piece:
    if not s.startswith("$"):
        return SpecialTokenPiece(s, 0)
    rest = s[1:]
    if rest in ("", "A", "a"):
        return SequencePiece(SequenceId.A, 0)
    if rest in ("B", "b"):
        return SequencePiece(SequenceId.B, 0)
    if _INTEGER.fullmatch(rest):
        return SequencePiece(SequenceId.A, int(rest))
    raise TemplateError(f"Cannot extract Id from input {s!r}")


def parse_piece(s: str) -> Piece:
    """Parse one piece such as ``$A``, ``$B:1``, ``$1`` or ``[SEP]:0``."""
    parts = s.split(":")
    if len(parts) == 1:
        try:
            return _extract_id(parts[0])
        except TemplateError as exc:
            raise TemplateError(f"{exc}. Cannot build Piece from string {s!r}") from exc
    if len(parts) == 2:
        if not _INTEGER.fullmatch(parts[1]):
            raise TemplateError(f"Cannot build Piece from string {s!r}")
        type_id = int(parts[1])
        try:
            piece = _extract_id(parts[0])
        except TemplateError as exc:
            raise TemplateError(f"{exc}. Cannot build Piece from string {s!r}") from exc
        return replace(piece, type_id=type_id)
    raise TemplateError(f"Cannot build Piece from string {s!r}")


def parse_template(value: str | Sequence[str]) -> list[Piece]:
    """Parse a template from a space separated string or a list of pieces."""
    if isinstance(value, str):
        parts: Sequence[str] = value.split(" ")
    elif isinstance(value, (list, tuple)) and all(isinstance(p, str) for p in value):
        parts = value
    else:
        raise TemplateError(f"Unsupported input type {type(value).__name__}")
    return [parse_piece(part) for part in parts]


@dataclass
class SpecialToken:
    """A named group of ids and tokens inserted for one template piece."""

    id: str
    ids: list[int]
    tokens: list[str]

    @classmethod
    def from_token(cls, value: str, token_id: int) -> SpecialToken:
        """A special token made of the single token *value* with *token_id*."""
        return cls(value, [token_id], [value])


@dataclass
class Tokens:
    """Special tokens keyed by their id, in insertion order."""

    token_map: dict[str, SpecialToken] = field(default_factory=dict)

    @classmethod
    def from_special_tokens(cls, tokens: Iterable[SpecialToken]) -> Tokens:
        """Index *tokens* by their id."""
        return cls({tok.id: tok for tok in tokens})

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, int]]) -> Tokens:
        """Build single-token entries from ``(value, id)`` pairs."""
        return cls.from_special_tokens(
            SpecialToken.from_token(value, token_id) for value, token_id in pairs
        )

    def __len__(self) -> int:
        return len(self.token_map)

    def __contains__(self, key: object) -> bool:
        return key in self.token_map

    def get_by_order(self, index: int) -> SpecialToken:
        """Return the entry at position *index*; raises IndexError if absent."""
        keys = list(self.token_map)
        if index < 0 or index >= len(keys):
            raise IndexError("special token index out of range")
        return self.token_map[keys[index]]

    def get(self, key: str) -> SpecialToken | None:
        """Return the entry with id *key*, or None."""
        return self.token_map.get(key)


def count_added(template: Iterable[Piece], special_tokens: Tokens | None) -> int:
    """Count the tokens that the special pieces of *template* add."""
    count = 0
    for piece in template:
        if isinstance(piece, SpecialTokenPiece) and special_tokens is not None:
            tok = special_tokens.get(piece.id)
            if tok is not None:
                count += len(tok.ids)
    return count


@dataclass(frozen=True)
class TemplateProcessing:
    """Templates for single and pair inputs, with their special tokens."""

    single: list[Piece] = field(default_factory=list)
    pair: list[Piece] = field(default_factory=list)
    special_tokens: Tokens = field(default_factory=Tokens)

    @classmethod
    def default(cls) -> TemplateProcessing:
        """Templates ``$0`` and ``$1`` with no special tokens."""
        return cls(parse_template("$0"), parse_template("$1"), Tokens())

    def added_tokens(self, is_pair: bool) -> int:
        """Number of tokens the template adds to a single or pair input."""
        return count_added(self.pair if is_pair else self.single, self.special_tokens)

    def with_single(self, value: str | Sequence[str]) -> TemplateProcessing:
        """Return a copy using *value* as the single-input template."""
        return replace(self, single=parse_template(value))

    def with_pair(self, value: str | Sequence[str]) -> TemplateProcessing:
        """Return a copy using *value* as the pair-input template."""
        return replace(self, pair=parse_template(value))

    def with_special_tokens(self, pairs: Iterable[tuple[str, int]]) -> TemplateProcessing:
        """Return a copy whose special tokens are the ``(value, id)`` *pairs*."""
        return replace(self, special_tokens=Tokens.from_pairs(pairs))

    def validate(self) -> None:
        """Raise TemplateError unless the pair template uses both sequences
        and every special piece has an entry in the special tokens."""
        used = {p.id for p in self.pair if isinstance(p, SequencePiece)}
        if used != {SequenceId.A, SequenceId.B}:
            raise TemplateError("Template for 'pair' must use both sequences.")
        missing: list[str] = []
        for piece in [*self.single, *self.pair]:
            if (
                isinstance(piece, SpecialTokenPiece)
                and piece.id not in self.special_tokens
                and piece.id not in missing
            ):
                missing.append(piece.id)
        if missing:
            raise TemplateError(
                ", ".join(f"Missing SpecialToken {s!r}" for s in missing)
            )


def _config_template(items: Iterable[Mapping[str, Any]]) -> list[Piece]:
    template: list[Piece] = []
    for raw in items:
        entry = Params(raw)
        if entry.has("Sequence"):
            item = entry.get("Sequence")
            seq_id = SequenceId.A if item["id"] == "A" else SequenceId.B
            template.append(SequencePiece(seq_id, int(item["type_id"])))
        if entry.has("SpecialToken"):
            item = entry.get("SpecialToken")
            template.append(SpecialTokenPiece(str(item["id"]), int(item["type_id"])))
    return template


def create_template_processing(config: Mapping[str, Any]) -> TemplateProcessing:
    """Build a TemplateProcessing from the ``post_processor`` JSON section."""
    params = Params(config)
    single = _config_template(params.get("single", []))
    pair = _config_template(params.get("pair", []))
    special_tokens = Tokens()
    if params.has("special_tokens"):
        special_tokens = Tokens.from_special_tokens(
            SpecialToken(
                str(entry["id"]),
                [int(i) for i in entry["ids"]],
                [str(t) for t in entry["tokens"]],
            )
            for entry in params.get("special_tokens").values()
        )
    return TemplateProcessing(single, pair, special_tokens)