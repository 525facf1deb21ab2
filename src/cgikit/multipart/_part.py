"""Interpretation of a single multipart block.

Patterns are compiled with ``google-re2`` so scanning attacker-supplied bodies
stays linear-time.
"""

from __future__ import annotations

from dataclasses import dataclass

import re2

# The name attribute must start at a word boundary so that filename="..."
# is not taken for it.
_DISPOSITION = re2.compile(r'(?i:content-disposition): form-data;[^\n]*?\bname="([^"]*)"')
_FILENAME = re2.compile(r'(?i:content-disposition): form-data;[^\n]*?\bfilename="([^"]*)"')
_CONTENT_TYPE = re2.compile(r"(?i:content-type): ([^\n]+)")
_TRANSFER_ENCODING = re2.compile(r"(?i:content-transfer-encoding): ([^\n]+)")
# Everything after the first blank line, minus the final newline.
_CONTENT = re2.compile(r"(?s)\n\n(.*)\n$")


@dataclass(frozen=True, slots=True)
class Part:
    """One named form field recovered from a multipart block.

    Only ``name`` and ``value`` are merged into a ParsedRequest; the other
    attributes are informational.
    """

    name: str
    value: str
    filename: str | None = None
    content_type: str | None = None
    transfer_encoding: str | None = None


def interpret_block(
    block: bytes,
    *,
    encoding: str = "utf-8",
    errors: str = "replace",
) -> Part | None:
    """Extract the field name and value from one block.

    Returns None when the block has no non-empty ``name="..."`` in a
    form-data Content-Disposition line, or no non-empty content after the
    header/body blank line.
    """
    text = block.decode(encoding, errors)

    name = _first_group(_DISPOSITION, text)
    if not name:
        return None
    value = _first_group(_CONTENT, text)
    if not value:
        return None

    return Part(
        name=name,
        value=value,
        filename=_first_group(_FILENAME, text),
        content_type=_first_group(_CONTENT_TYPE, text),
        transfer_encoding=_first_group(_TRANSFER_ENCODING, text),
    )


def _first_group(pattern: re2.Pattern[str], text: str) -> str | None:
    m = pattern.search(text)
    if m is None:
        return None
    return m.group(1)
