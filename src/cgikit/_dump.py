"""Human-readable dumps of a ParsedRequest."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from cgikit._multidict import ParsedRequest


def dump(request: ParsedRequest, out: TextIO) -> None:
    """Write one ``key\\t[value]`` line per pair, keys right-aligned to 20 columns."""
    for key, value in request.items():
        out.write(f"{key:>20}\t[{value}]\n")


def dump_json(request: ParsedRequest, *, indent: int | None = 2) -> str:
    """Serialize as a JSON object of ``key -> [values...]``."""
    return json.dumps(request.to_dict(), indent=indent, ensure_ascii=False)
