"""cgikit — decode CGI requests into an ordered multimap.

All public types are exported from this module for flat imports:

    from cgikit import parse_request, is_active, ParsedRequest

A request is decoded from the CGI environment (metadata) and stdin (body):
the standard CGI variables come first, then query-string fields, then fields
from a urlencoded or multipart/form-data body.
"""

__version__ = "0.1.0"

# Config — see cgikit._config for details
from cgikit._config import (
    ACTIVATION_FIELDS,
    DISABLE_FLAG,
    EMPTY_VALUE,
    MAX_QUERY_SIZE,
    METADATA_FIELDS,
    RAW_CONTENT_KEY,
    ConfigParseError,
    DecoderConfig,
    MetadataField,
    load_decoder_config,
    parse_decoder_config,
)

# Orchestration
from cgikit._decoder import (
    MULTIPART_TYPE,
    READ_CHUNK_SIZE,
    URLENCODED_TYPE,
    BodyReadError,
    ContentLengthError,
    DecodeOutcome,
    RequestDecoder,
    is_active,
    parse_content_length,
    parse_request,
    read_body,
)
from cgikit._dump import dump, dump_json
from cgikit._multidict import ParsedRequest

# Leaf decoders
from cgikit._percent import unquote, unquote_plus
from cgikit._types import BodyStream, CgiError, DecodeResult, DecodeStatus, Field, MetadataSource
from cgikit._urlencoded import decode_urlencoded
from cgikit.multipart import Part, decode_multipart

__all__ = [
    # Protocols and result types
    "BodyStream",
    "MetadataSource",
    "Field",
    "DecodeStatus",
    "DecodeResult",
    "DecodeOutcome",
    # Output store
    "ParsedRequest",
    # Decoding
    "RequestDecoder",
    "parse_request",
    "is_active",
    "parse_content_length",
    "read_body",
    "decode_urlencoded",
    "decode_multipart",
    "Part",
    "unquote",
    "unquote_plus",
    "URLENCODED_TYPE",
    "MULTIPART_TYPE",
    "READ_CHUNK_SIZE",
    # Config
    "DecoderConfig",
    "MetadataField",
    "METADATA_FIELDS",
    "ACTIVATION_FIELDS",
    "EMPTY_VALUE",
    "MAX_QUERY_SIZE",
    "RAW_CONTENT_KEY",
    "DISABLE_FLAG",
    "parse_decoder_config",
    "load_decoder_config",
    # Dump
    "dump",
    "dump_json",
    # Errors
    "CgiError",
    "ConfigParseError",
    "BodyReadError",
    "ContentLengthError",
]
