"""URL-encoded form decoding (query strings and urlencoded POST bodies).

Tokens are split on ``&``. Each token is cut at its first ``=``: the key is
kept verbatim, the value is the next whitespace-free word after the ``=``,
percent-decoded with ``+`` as space.

Decoding is best-effort. A token with no ``=`` becomes ``key -> ""``, and a
token with an empty key is dropped. Either one downgrades the result to
"partial". Only an input outside the size bound, or a string that cannot be
encoded, is rejected outright.
"""

from __future__ import annotations

import logging

from cgikit._config import MAX_QUERY_SIZE
from cgikit._percent import unquote_plus
from cgikit._types import DecodeResult, Field

logger = logging.getLogger(__name__)


def decode_urlencoded(
    data: bytes | str,
    *,
    max_size: int = MAX_QUERY_SIZE,
    encoding: str = "utf-8",
    errors: str = "replace",
) -> DecodeResult:
    """Decode ``k1=v1&k2=v2...`` into an ordered tuple of fields.

    ``data`` must be between 1 and ``max_size - 1`` bytes long (up to the
    first NUL, if any), otherwise the result is rejected with no fields.
    Duplicate keys are all kept.

    >>> decode_urlencoded("name=Alice&greeting=hi+there").fields
    (('name', 'Alice'), ('greeting', 'hi there'))
    """
    if isinstance(data, str):
        # Undecodable bytes from os.environ come back as surrogate escapes.
        try:
            raw = data.encode(encoding, "surrogateescape")
        except UnicodeEncodeError as e:
            logger.debug("rejecting urlencoded input: %s", e)
            return DecodeResult.rejected(f"input not encodable as {encoding}")
    else:
        raw = data
    # NUL terminates the input; padding after it is ignored.
    raw = raw.split(b"\0", 1)[0]
    size = len(raw)
    if size < 1 or size >= max_size:
        logger.debug("rejecting urlencoded input of %d bytes (limit %d)", size, max_size)
        return DecodeResult.rejected(f"input size {size} outside [1, {max_size - 1}]")

    fields: list[Field] = []
    malformed = 0
    for token in raw.split(b"&"):
        if not token:
            continue
        key, sep, rest = token.partition(b"=")
        if not key:
            logger.debug("dropping token with empty key: %r", token)
            malformed += 1
            continue
        if not sep:
            malformed += 1
        words = rest.split(None, 1)
        value = unquote_plus(words[0]) if words else b""
        fields.append((key.decode(encoding, errors), value.decode(encoding, errors)))

    if malformed:
        return DecodeResult(
            status="partial",
            fields=tuple(fields),
            reason=f"{malformed} malformed token(s)",
        )
    return DecodeResult(status="ok", fields=tuple(fields))
