"""ParsedRequest — ordered, append-only multimap of decoded CGI fields.

Pairs are kept in a flat list in insertion order. A side index maps each key
to the positions of its pairs so lookups do not scan the list. Adding an
existing key appends another value; nothing is ever overwritten.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, overload

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from cgikit._types import Field


class ParsedRequest:
    """Ordered multimap of string keys to string values.

    ``parsed[key]`` and ``parsed.get(key)`` return the first value stored
    under ``key``; ``parsed.getall(key)`` returns all of them. Iteration
    yields distinct keys in first-seen order, ``items()`` yields every pair.
    """

    __slots__ = ("_index", "_pairs")

    def __init__(self, pairs: Iterable[Field] = ()) -> None:
        self._pairs: list[Field] = []
        self._index: dict[str, list[int]] = {}
        self.extend(pairs)

    def add(self, key: str, value: str) -> None:
        """Append ``key -> value``, keeping any earlier values for ``key``."""
        self._index.setdefault(key, []).append(len(self._pairs))
        self._pairs.append((key, value))

    def extend(self, pairs: Iterable[Field]) -> None:
        for key, value in pairs:
            self.add(key, value)

    @overload
    def get(self, key: str) -> str | None: ...
    @overload
    def get(self, key: str, default: str) -> str: ...
    @overload
    def get(self, key: str, default: None) -> str | None: ...

    def get(self, key: str, default: str | None = None) -> str | None:
        positions = self._index.get(key)
        if not positions:
            return default
        return self._pairs[positions[0]][1]

    def getall(self, key: str) -> list[str]:
        """Return every value stored under ``key``, oldest first."""
        return [self._pairs[i][1] for i in self._index.get(key, ())]

    def items(self) -> list[Field]:
        return list(self._pairs)

    def keys(self) -> list[str]:
        return list(self._index)

    def values(self) -> list[str]:
        return [value for _, value in self._pairs]

    def to_dict(self) -> dict[str, list[str]]:
        """Collapse into ``{key: [values...]}`` in first-seen key order."""
        return {key: self.getall(key) for key in self._index}

    def __getitem__(self, key: str) -> str:
        positions = self._index.get(key)
        if not positions:
            raise KeyError(key)
        return self._pairs[positions[0]][1]

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedRequest):
            return NotImplemented
        return self._pairs == other._pairs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ParsedRequest({self._pairs!r})"
