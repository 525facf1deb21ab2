"""Percent-decoding for URL-encoded form data.

Decoding is permissive: a ``%`` that is not followed by two hex digits is
consumed together with the (up to) two bytes after it and copied through
unchanged. Malformed escapes never raise.
"""

from __future__ import annotations

_HEXDIGITS = frozenset(b"0123456789abcdefABCDEF")


def unquote(data: bytes) -> bytes:
    """Decode every ``%XX`` escape in ``data``.

    The result is never longer than the input.

    >>> unquote(b"a%20b%2fc")
    b'a b/c'
    >>> unquote(b"100%zz")
    b'100%zz'
    """
    return _decode(data, plus_as_space=False)


def unquote_plus(data: bytes) -> bytes:
    """Like unquote(), but also turns literal ``+`` into a space.

    Used for values only. ``%2B`` decodes to a literal ``+``.

    >>> unquote_plus(b"hello+world%21")
    b'hello world!'
    """
    return _decode(data, plus_as_space=True)


def _decode(data: bytes, *, plus_as_space: bool) -> bytes:
    if not data:
        return b""
    if b"%" not in data:
        return data.replace(b"+", b" ") if plus_as_space else data

    out = bytearray()
    i = 0
    n = len(data)
    while i < n:
        pct = data.find(b"%", i)
        if pct < 0:
            chunk = data[i:]
            out += chunk.replace(b"+", b" ") if plus_as_space else chunk
            break

        chunk = data[i:pct]
        out += chunk.replace(b"+", b" ") if plus_as_space else chunk

        escape = data[pct + 1 : pct + 3]
        if len(escape) == 2 and escape[0] in _HEXDIGITS and escape[1] in _HEXDIGITS:
            out.append(int(escape, 16))
        else:
            # Bad escape body is still consumed as a unit.
            out += data[pct : pct + 3]
        i = pct + 3
    return bytes(out)
