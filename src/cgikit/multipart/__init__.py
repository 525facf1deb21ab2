"""cgikit.multipart — multipart/form-data decoding.

Splits a buffered body on its boundary and recovers one named field per
block.
"""

from cgikit.multipart._blocks import iter_blocks
from cgikit.multipart._form import (
    BOUNDARY_ATTR,
    decode_multipart,
    extract_boundary,
    iter_parts,
)
from cgikit.multipart._part import Part, interpret_block

__all__ = [
    # Types
    "Part",
    # Block level
    "iter_blocks",
    "interpret_block",
    # Body level
    "BOUNDARY_ATTR",
    "extract_boundary",
    "iter_parts",
    "decode_multipart",
]
