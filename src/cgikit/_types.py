"""Core protocols, result types and the error base for cgikit.

The decoder talks to its collaborators through two small ports:
- MetadataSource is any string mapping (``os.environ`` in a real CGI process)
- BodyStream is anything with a ``read(n)`` returning bytes (``sys.stdin.buffer``)

Sub-decoders never raise on malformed input. They return a DecodeResult whose
status says how far decoding got.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, Protocol, TypeAlias, runtime_checkable

# Keyed lookup of CGI variables by name.
MetadataSource: TypeAlias = Mapping[str, str]

# One decoded form field.
Field: TypeAlias = tuple[str, str]

# "ok"       every token/part was decoded
# "partial"  some tokens/parts were malformed and skipped or truncated
# "rejected" the input failed structurally; no fields contributed
# "skipped"  the phase did not apply to this request
DecodeStatus: TypeAlias = Literal["ok", "partial", "rejected", "skipped"]


class CgiError(Exception):
    """Base class for cgikit errors."""


@runtime_checkable
class BodyStream(Protocol):
    """Sequential byte source for the request body."""

    def read(self, n: int = -1, /) -> bytes: ...


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """Outcome of one decoding step.

    ``fields`` is always safe to merge: a rejected or skipped result carries
    an empty tuple.
    """

    status: DecodeStatus
    fields: tuple[Field, ...] = ()
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in ("ok", "partial", "skipped")

    @classmethod
    def rejected(cls, reason: str) -> DecodeResult:
        return cls(status="rejected", reason=reason)

    @classmethod
    def skipped(cls, reason: str) -> DecodeResult:
        return cls(status="skipped", reason=reason)
