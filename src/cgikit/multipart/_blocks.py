"""Boundary splitting for multipart/form-data bodies."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


def iter_blocks(body: bytes, boundary: bytes) -> Iterator[bytes]:
    """Yield the bytes between consecutive occurrences of ``boundary``.

    Each block starts one byte past the end of its opening boundary, which
    skips the line break that follows a delimiter line. A trailing segment
    with no closing boundary (such as the ``--`` of a close delimiter, or a
    truncated last part) is never yielded.

    Yields nothing when ``boundary`` is empty or absent from ``body``.
    """
    if not boundary:
        return
    skip = len(boundary) + 1
    start = body.find(boundary)
    while start >= 0:
        end = body.find(boundary, start + skip)
        if end >= 0:
            yield body[start + skip : end]
        start = end
