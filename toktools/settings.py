"""Truncation and padding settings, and building them from JSON configs."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from toktools.params import Params

_BATCH_LONGEST = "BatchLongest"
_FIXED = "Fixed"


class TruncationStrategy(enum.IntEnum):
    """Which sequence gives up tokens when an encoding is too long."""

    LONGEST_FIRST = 0
    ONLY_FIRST = 1
    ONLY_SECOND = 2


class PaddingDirection(enum.Enum):
    """Side of a sequence that receives padding tokens."""

    LEFT = "left"
    RIGHT = "right"


_TRUNCATION_STRATEGIES = {
    "LongestFirst": TruncationStrategy.LONGEST_FIRST,
    "OnlyFirst": TruncationStrategy.ONLY_FIRST,
    "OnlySecond": TruncationStrategy.ONLY_SECOND,
}

_PADDING_DIRECTIONS = {
    "left": PaddingDirection.LEFT,
    "Left": PaddingDirection.LEFT,
    "right": PaddingDirection.RIGHT,
    "Right": PaddingDirection.RIGHT,
}


@dataclass(frozen=True)
class PaddingStrategy:
    """Pad to the longest encoding of a batch, or to a fixed length."""

    name: str = _BATCH_LONGEST
    size: int | None = None

    def __post_init__(self) -> None:
        if self.name == _FIXED:
            if self.size is None or self.size < 0:
                raise ValueError("a fixed padding strategy needs a non-negative size")
        elif self.name == _BATCH_LONGEST:
            if self.size is not None:
                raise ValueError("the BatchLongest padding strategy takes no size")
        else:
            raise ValueError(f"unknown padding strategy {self.name!r}")

    @classmethod
    def batch_longest(cls) -> PaddingStrategy:
        """Pad every encoding to the length of the longest one."""
        return cls(_BATCH_LONGEST)

    @classmethod
    def fixed(cls, size: int) -> PaddingStrategy:
        """Pad every encoding to *size* tokens."""
        return cls(_FIXED, size)

    @property
    def is_fixed(self) -> bool:
        return self.name == _FIXED


@dataclass
class TruncationParams:
    """How to cut encodings down to a maximum length."""

    max_length: int = 512
    strategy: TruncationStrategy = TruncationStrategy.LONGEST_FIRST
    stride: int = 0


@dataclass
class PaddingParams:
    """How to pad encodings."""

    strategy: PaddingStrategy = field(default_factory=PaddingStrategy.batch_longest)
    direction: PaddingDirection = PaddingDirection.RIGHT
    pad_id: int = 0
    pad_type_id: int = 0
    pad_token: str = "[PAD]"


class TruncationError(ValueError):
    """Raised when encodings cannot be truncated as requested."""

    SECOND_SEQUENCE_NOT_PROVIDED = "Truncation error: Second sequence not provided"
    SEQUENCE_TOO_SHORT = (
        "Truncation error: Sequence to truncate too short to respect the provided max_length"
    )


@dataclass(frozen=True)
class Range:
    """The half-open interval of integers ``[start, end)``, never empty."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("Invalid 'start' for Range")
        if self.end < 0 or self.end <= self.start:
            raise ValueError("Invalid 'end' for Range")

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, item: object) -> bool:
        return isinstance(item, int) and self.start <= item < self.end

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end))

    def is_empty(self) -> bool:
        return len(self) == 0


def _require(params: Params, key: str) -> Any:
    if not params.has(key):
        raise KeyError(f"missing configuration value {key!r}")
    return params.get(key)


def create_truncation_params(config: Mapping[str, Any] | None) -> TruncationParams | None:
    """Build truncation settings from a tokenizer JSON section, or None if absent.

    An unrecognised strategy name falls back to longest-first.
    """
    if config is None:
        return None
    params = Params(config)
    max_length = int(_require(params, "max_length"))
    stride = int(_require(params, "stride"))
    strategy_name = _require(params, "strategy")
    strategy = _TRUNCATION_STRATEGIES.get(strategy_name, TruncationStrategy.LONGEST_FIRST)
    return TruncationParams(max_length=max_length, strategy=strategy, stride=stride)


def _padding_strategy(raw: Any) -> PaddingStrategy:
    if raw == _BATCH_LONGEST:
        return PaddingStrategy.batch_longest()
    if isinstance(raw, Mapping):
        name: str | None = None
        size: Any = None
        for name, size in raw.items():
            pass
        if name == _BATCH_LONGEST:
            return PaddingStrategy.batch_longest()
        if name == _FIXED:
            return PaddingStrategy.fixed(int(size))
    raise ValueError(f"unsupported padding strategy {raw!r}")


def create_padding_params(config: Mapping[str, Any] | None) -> PaddingParams | None:
    """Build padding settings from a tokenizer JSON section, or None if absent."""
    if config is None:
        return None
    params = Params(config)
    strategy = _padding_strategy(_require(params, "strategy"))
    direction_name = _require(params, "direction")
    try:
        direction = _PADDING_DIRECTIONS[direction_name]
    except KeyError:
        raise ValueError(f"unsupported padding direction {direction_name!r}") from None
    return PaddingParams(
        strategy=strategy,
        direction=direction,
        pad_id=int(_require(params, "pad_id")),
        pad_type_id=int(_require(params, "pad_type_id")),
        pad_token=str(_require(params, "pad_token")),
    )