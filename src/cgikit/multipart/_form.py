"""multipart/form-data decoding: boundary lookup, block split, field merge."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cgikit._types import DecodeResult, Field
from cgikit.multipart._blocks import iter_blocks
from cgikit.multipart._part import Part, interpret_block

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

BOUNDARY_ATTR = "boundary="


def extract_boundary(content_type: str, *, encoding: str = "utf-8") -> bytes | None:
    """Return the delimiter for a multipart Content-Type, or None.

    The delimiter is ``--`` followed by everything after ``boundary=``.
    Surrogate-escaped characters (undecodable header bytes, as ``os.environ``
    presents them) are turned back into their original bytes. A token that
    still cannot be encoded has no usable delimiter.

    >>> extract_boundary("multipart/form-data; boundary=XYZ")
    b'--XYZ'
    """
    _, found, token = content_type.partition(BOUNDARY_ATTR)
    if not found or not token:
        return None
    try:
        return b"--" + token.encode(encoding, "surrogateescape")
    except UnicodeEncodeError:
        logger.debug("boundary %r not encodable as %s", token, encoding)
        return None


def _interpret_blocks(
    body: bytes, boundary: bytes, *, encoding: str, errors: str
) -> Iterator[tuple[bytes, Part | None]]:
    for block in iter_blocks(body, boundary):
        yield block, interpret_block(block, encoding=encoding, errors=errors)


def iter_parts(
    body: bytes,
    boundary: bytes,
    *,
    encoding: str = "utf-8",
    errors: str = "replace",
) -> Iterator[Part]:
    """Yield every well-formed Part of ``body``, skipping unusable blocks."""
    for _, part in _interpret_blocks(body, boundary, encoding=encoding, errors=errors):
        if part is not None:
            yield part


def decode_multipart(
    body: bytes,
    content_type: str,
    *,
    encoding: str = "utf-8",
    errors: str = "replace",
) -> DecodeResult:
    """Decode a multipart/form-data body into fields.

    A Content-Type without a usable ``boundary=`` attribute is rejected. A
    boundary that never appears in the body is not an error: the result is
    "ok" with no fields. Blocks lacking a name or a value are skipped and
    make the result "partial".
    """
    boundary = extract_boundary(content_type, encoding=encoding)
    if boundary is None:
        return DecodeResult.rejected(f"no usable boundary in content type {content_type!r}")

    fields: list[Field] = []
    skipped = 0
    for block, part in _interpret_blocks(body, boundary, encoding=encoding, errors=errors):
        if part is None:
            logger.debug("skipping multipart block without name or value (%d bytes)", len(block))
            skipped += 1
            continue
        fields.append((part.name, part.value))

    if skipped:
        return DecodeResult(
            status="partial",
            fields=tuple(fields),
            reason=f"{skipped} block(s) skipped",
        )
    return DecodeResult(status="ok", fields=tuple(fields))
