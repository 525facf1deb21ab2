"""Test utilities for cgikit.

Builders for CGI metadata and request bodies, so tests and examples can
simulate a web server invoking a CGI program without one.

>>> from cgikit import parse_request
>>> from cgikit.testing import body_stream, make_environ
>>> env = make_environ(QUERY_STRING="name=Alice")
>>> parse_request(env, body_stream(b"")).get("name")
'Alice'
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_BOUNDARY = "cgikit-boundary"

_BASE_ENVIRON = {
    "SERVER_SOFTWARE": "Apache/2.4.58",
    "SERVER_NAME": "localhost",
    "GATEWAY_INTERFACE": "CGI/1.1",
    "SERVER_PROTOCOL": "HTTP/1.1",
    "SERVER_PORT": "80",
    "REQUEST_METHOD": "GET",
    "SCRIPT_NAME": "/cgi-bin/form.cgi",
    "REMOTE_ADDR": "127.0.0.1",
}


def make_environ(**overrides: str | None) -> dict[str, str]:
    """Return CGI metadata for a plain GET request, with overrides applied.

    An override of None removes the variable.
    """
    env = dict(_BASE_ENVIRON)
    for key, value in overrides.items():
        if value is None:
            env.pop(key, None)
        else:
            env[key] = value
    return env


def encode_multipart(
    fields: Iterable[tuple[str, str]],
    boundary: str = DEFAULT_BOUNDARY,
    *,
    newline: str = "\r\n",
) -> bytes:
    """Encode ``(name, value)`` pairs as a multipart/form-data body."""
    lines: list[str] = []
    for name, value in fields:
        lines.append(f"--{boundary}")
        lines.append(f'Content-Disposition: form-data; name="{name}"')
        lines.append("")
        lines.append(value)
    lines.append(f"--{boundary}--")
    lines.append("")
    return newline.join(lines).encode("utf-8")


def multipart_environ(
    body: bytes, boundary: str = DEFAULT_BOUNDARY, **overrides: str | None
) -> dict[str, str]:
    """Return CGI metadata declaring a multipart POST of ``body``."""
    declared: dict[str, str | None] = {
        "REQUEST_METHOD": "POST",
        "CONTENT_TYPE": f"multipart/form-data; boundary={boundary}",
        "CONTENT_LENGTH": str(len(body)),
    }
    return make_environ(**(declared | overrides))


def body_stream(data: bytes) -> io.BytesIO:
    """Wrap ``data`` as a request body stream."""
    return io.BytesIO(data)
