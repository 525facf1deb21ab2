"""RequestDecoder — turns one CGI invocation into a ParsedRequest.

Three phases, each absorbing its own failures:

1. Metadata: every configured CGI variable is copied in, or its sentinel.
2. Query: QUERY_STRING is URL-decoded.
3. Body: CONTENT_LENGTH bytes are read from the body stream, carriage returns
   are dropped, and the buffer is routed by CONTENT_TYPE prefix to the
   URL decoder, the multipart decoder, or stored whole under the raw-content
   key.

A phase that fails structurally contributes no fields and is logged; the
caller always gets a mapping holding every metadata key. MemoryError is not
caught.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

import re2

from cgikit._config import DecoderConfig
from cgikit._multidict import ParsedRequest
from cgikit._types import CgiError, DecodeResult
from cgikit._urlencoded import decode_urlencoded
from cgikit.multipart import decode_multipart

if TYPE_CHECKING:
    from cgikit._types import BodyStream, MetadataSource

logger = logging.getLogger(__name__)

URLENCODED_TYPE = "application/x-www-form-urlencoded"
MULTIPART_TYPE = "multipart/form-data"

# Leading integer, the way C's atoi() reads it.
_LEADING_INT = re2.compile(r"^[ \t\n\v\f\r]*([+-]?[0-9]+)")

# Largest single read issued against the body stream.
READ_CHUNK_SIZE = 1 << 16

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class BodyReadError(CgiError):
    """The body stream ended before CONTENT_LENGTH bytes were read."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(f"short body read: expected {expected} bytes, got {received}")


class ContentLengthError(CgiError):
    """CONTENT_LENGTH is negative, too large, or non-numeric in strict mode."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid CONTENT_LENGTH: {value!r}")


# ═══════════════════════════════════════════════════════════════════════════════
# Body helpers
# ═══════════════════════════════════════════════════════════════════════════════


def parse_content_length(value: str, *, strict: bool = False) -> int:
    """Parse CONTENT_LENGTH permissively.

    Leading whitespace and trailing garbage are ignored (``" 12abc"`` is 12).
    A value with no leading digits is 0, unless ``strict`` is set.

    Raises:
        ContentLengthError: If the length is negative, exceeds
            ``sys.maxsize``, or has no leading digits while ``strict`` is set.
    """
    m = _LEADING_INT.search(value)
    if m is None:
        if strict:
            raise ContentLengthError(value)
        return 0
    try:
        length = int(m.group(1))
    except ValueError:
        # More digits than int() will convert.
        raise ContentLengthError(value) from None
    if length < 0 or length > sys.maxsize:
        raise ContentLengthError(value)
    return length


def read_body(stream: BodyStream, length: int) -> bytes:
    """Read exactly ``length`` bytes from ``stream``.

    Reads are issued in chunks of at most ``READ_CHUNK_SIZE`` bytes and
    retried until the stream reports EOF.

    Raises:
        BodyReadError: If EOF arrives first.
    """
    chunks: list[bytes] = []
    remaining = length
    while remaining > 0:
        chunk = stream.read(min(remaining, READ_CHUNK_SIZE))
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    data = b"".join(chunks)
    if len(data) != length:
        raise BodyReadError(length, len(data))
    return data


# ═══════════════════════════════════════════════════════════════════════════════
# Decoder
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class DecodeOutcome:
    """The decoded request plus how each input phase went."""

    request: ParsedRequest
    query: DecodeResult
    body: DecodeResult

    @property
    def ok(self) -> bool:
        """False if either phase was rejected."""
        return self.query.ok and self.body.ok


class RequestDecoder:
    """Decodes CGI requests according to a DecoderConfig.

    The decoder holds no per-request state; one instance can decode any
    number of requests.

    Example::

        decoder = RequestDecoder()
        request = decoder.decode()          # os.environ + stdin
        name = request.get("name", "anonymous")
    """

    def __init__(self, config: DecoderConfig | None = None) -> None:
        self.config = config if config is not None else DecoderConfig()

    def decode(
        self,
        metadata: MetadataSource | None = None,
        body: BodyStream | None = None,
    ) -> ParsedRequest:
        """Decode a request and return only the merged mapping."""
        return self.run(metadata, body).request

    def run(
        self,
        metadata: MetadataSource | None = None,
        body: BodyStream | None = None,
    ) -> DecodeOutcome:
        """Decode a request, reporting the result of each phase.

        ``metadata`` defaults to ``os.environ``. ``body`` defaults to the
        process's standard input and is only touched when a body is declared.
        """
        source = os.environ if metadata is None else metadata
        request = self._ingest_metadata(source)

        query = self._decode_query(request)
        request.extend(query.fields)

        posted = self._decode_body(request, body)
        request.extend(posted.fields)

        return DecodeOutcome(request=request, query=query, body=posted)

    def is_active(self, metadata: MetadataSource | None = None) -> bool:
        """Tell whether ``metadata`` describes a CGI invocation.

        False when the disable flag is set; otherwise true iff every
        activation field is present.
        """
        source = os.environ if metadata is None else metadata
        if self.config.disable_flag in source:
            return False
        return all(name in source for name in self.config.activation_fields)

    def _ingest_metadata(self, source: MetadataSource) -> ParsedRequest:
        request = ParsedRequest()
        for meta in self.config.fields:
            default = meta.default if meta.default is not None else self.config.empty_value
            request.add(meta.name, source.get(meta.name, default))
        return request

    def _declared(self, request: ParsedRequest, name: str) -> str | None:
        value = request.get(name)
        if value is None or value == self.config.empty_value:
            return None
        return value

    def _decode_query(self, request: ParsedRequest) -> DecodeResult:
        query = self._declared(request, "QUERY_STRING")
        if query is None:
            return DecodeResult.skipped("no query string")
        if not query:
            # Servers set QUERY_STRING="" on every request without a query.
            logger.debug("empty query string")
            return DecodeResult.skipped("empty query string")

        result = decode_urlencoded(
            query,
            max_size=self.config.max_query_size,
            encoding=self.config.encoding,
            errors=self.config.errors,
        )
        if result.status == "rejected":
            logger.warning("query string ignored: %s", result.reason)
        return result

    def _decode_body(self, request: ParsedRequest, stream: BodyStream | None) -> DecodeResult:
        cfg = self.config
        content_type = self._declared(request, "CONTENT_TYPE")
        content_length = self._declared(request, "CONTENT_LENGTH")
        if content_type is None or content_length is None:
            return DecodeResult.skipped("no request body declared")

        try:
            length = parse_content_length(content_length, strict=cfg.strict_content_length)
            raw = read_body(sys.stdin.buffer if stream is None else stream, length)
        except CgiError as e:
            logger.warning("request body ignored: %s", e)
            return DecodeResult.rejected(str(e))

        raw = raw.replace(b"\r", b"")

        if content_type.startswith(URLENCODED_TYPE):
            result = decode_urlencoded(
                raw, max_size=cfg.max_query_size, encoding=cfg.encoding, errors=cfg.errors
            )
        elif content_type.startswith(MULTIPART_TYPE):
            result = decode_multipart(
                raw, content_type, encoding=cfg.encoding, errors=cfg.errors
            )
        else:
            logger.debug("storing %d bytes of %s as %r", len(raw), content_type, cfg.raw_content_key)
            value = raw.decode(cfg.encoding, cfg.errors)
            return DecodeResult(status="ok", fields=((cfg.raw_content_key, value),))

        if result.status == "rejected":
            logger.warning("request body ignored: %s", result.reason)
        return result


def parse_request(
    metadata: MetadataSource | None = None,
    body: BodyStream | None = None,
    *,
    config: DecoderConfig | None = None,
) -> ParsedRequest:
    """Decode the current (or given) CGI request into a ParsedRequest."""
    return RequestDecoder(config).decode(metadata, body)


def is_active(
    metadata: MetadataSource | None = None,
    *,
    config: DecoderConfig | None = None,
) -> bool:
    """Tell whether the process is running as a CGI program."""
    return RequestDecoder(config).is_active(metadata)
