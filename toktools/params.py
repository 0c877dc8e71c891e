"""A keyword-argument style container of optional parameters."""

from __future__ import annotations

from typing import Any, Iterable, Mapping


def is_nil(value: Any) -> bool:
    """Return True when *value* stands for "no value"."""
    return value is None


class Params:
    """A mutable mapping of named optional parameters.

    A key whose value is None counts as absent for :meth:`has` and
    :meth:`get`, but is still listed by :meth:`keys`.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._params: dict[str, Any] = dict(values) if values is not None else {}

    def __repr__(self) -> str:
        return f"Params({self._params!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Params):
            return NotImplemented
        return self._params == other._params

    def __len__(self) -> int:
        return len(self._params)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def pop(self, key: str) -> Any:
        """Remove *key* and return its value, or None if it was not there."""
        return self._params.pop(key, None)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of *key*, or *default* if missing or None."""
        value = self._params.get(key)
        return default if is_nil(value) else value

    def has(self, key: str) -> bool:
        """Return True when *key* is present with a non-None value."""
        return not is_nil(self._params.get(key))

    def set(self, key: str, value: Any) -> None:
        """Add or replace the value of *key*."""
        self._params[key] = value

    def copy_from(self, params: Params, key: str, new_key: str | None = None) -> None:
        """Shallow-copy *key* of *params* into this container."""
        self.set(new_key if new_key is not None else key, params.get(key))

    def deep_copy_from(self, params: Params, key: str, new_key: str | None = None) -> None:
        """Copy *key* of *params* into this container, cloning nested Params."""
        self.set(new_key if new_key is not None else key, params._deep_copy(key))

    def clone(self) -> Params:
        """Return a deep copy: nested Params are cloned, other values shared."""
        out = Params()
        for key in self._params:
            out.set(key, self._deep_copy(key))
        return out

    def _deep_copy(self, key: str) -> Any:
        value = self.get(key)
        if isinstance(value, Params):
            return value.clone()
        return value

    def select(self, keys: Iterable[str]) -> Params:
        """Return a new Params holding only *keys* (missing ones as None)."""
        return Params({key: self.get(key) for key in keys})

    def keys(self) -> list[str]:
        """Return the parameter names."""
        return list(self._params)

    def delete(self, key: str) -> None:
        """Remove *key* if present."""
        self._params.pop(key, None)

    def clear(self) -> None:
        """Remove every parameter."""
        self._params.clear()

    def values(self) -> dict[str, Any]:
        """Return the underlying mapping of parameters."""
        return self._params