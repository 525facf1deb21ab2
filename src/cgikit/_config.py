"""Decoder configuration.

Config-driven construction path:
  dict / YAML → parse_decoder_config() → DecoderConfig → RequestDecoder

The metadata field table is data, not code: the decoder walks
``DecoderConfig.fields`` once per request and copies each variable (or its
default) into the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from cgikit._types import CgiError

EMPTY_VALUE = "empty"
MAX_QUERY_SIZE = 1024
RAW_CONTENT_KEY = "content"
DISABLE_FLAG = "NOCGI"

# ═══════════════════════════════════════════════════════════════════════════════
# Metadata field table
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class MetadataField:
    """One CGI variable copied into every ParsedRequest.

    ``default`` is stored when the metadata source does not define ``name``;
    None stands for the decoder's ``empty_value`` sentinel.
    """

    name: str
    default: str | None = None


METADATA_FIELDS: tuple[MetadataField, ...] = tuple(
    MetadataField(name)
    for name in (
        "SERVER_SOFTWARE",
        "SERVER_NAME",
        "GATEWAY_INTERFACE",
        "SERVER_PROTOCOL",
        "SERVER_PORT",
        "REQUEST_METHOD",
        "PATH_INFO",
        "PATH_TRANSLATED",
        "SCRIPT_NAME",
        "QUERY_STRING",
        "REMOTE_HOST",
        "REMOTE_ADDR",
        "AUTH_TYPE",
        "REMOTE_USER",
        "REMOTE_IDENT",
        "CONTENT_TYPE",
        "CONTENT_LENGTH",
        "HTTP_ACCEPT",
        "HTTP_USER_AGENT",
        "HTTP_COOKIES",
    )
)

ACTIVATION_FIELDS: tuple[str, ...] = ("SERVER_SOFTWARE", "SERVER_NAME", "GATEWAY_INTERFACE")


@dataclass(frozen=True, slots=True)
class DecoderConfig:
    """Settings for RequestDecoder.

    The defaults reproduce classic CGI behaviour: the 20 standard variables,
    ``"empty"`` as the absent-value sentinel, query strings capped below
    1024 bytes, and unknown body types stored under ``"content"``.
    """

    fields: tuple[MetadataField, ...] = METADATA_FIELDS
    empty_value: str = EMPTY_VALUE
    max_query_size: int = MAX_QUERY_SIZE
    raw_content_key: str = RAW_CONTENT_KEY
    disable_flag: str = DISABLE_FLAG
    activation_fields: tuple[str, ...] = ACTIVATION_FIELDS
    encoding: str = "utf-8"
    errors: str = "replace"
    strict_content_length: bool = False


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → DecoderConfig)
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigParseError(CgiError):
    """Error parsing a config dict into a DecoderConfig."""


_STR_OPTIONS = ("empty_value", "raw_content_key", "disable_flag", "encoding", "errors")
_KNOWN_KEYS = frozenset(
    {*_STR_OPTIONS, "fields", "max_query_size", "activation_fields", "strict_content_length"}
)


def parse_decoder_config(data: dict[str, Any]) -> DecoderConfig:
    """Parse a dict into a DecoderConfig.

    Unset keys keep their defaults. ``fields`` entries are either a bare
    variable name or ``{"name": ..., "default": ...}``; a missing default
    falls back to the config's ``empty_value`` at decode time.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        msg = f"unknown config keys: {unknown}"
        raise ConfigParseError(msg)

    kwargs: dict[str, Any] = {}
    for key in _STR_OPTIONS:
        if key in data:
            kwargs[key] = _require_str(data[key], key)

    if "max_query_size" in data:
        size = data["max_query_size"]
        if isinstance(size, bool) or not isinstance(size, int) or size < 2:
            msg = f"'max_query_size' must be an integer >= 2, got {size!r}"
            raise ConfigParseError(msg)
        kwargs["max_query_size"] = size

    if "strict_content_length" in data:
        strict = data["strict_content_length"]
        if not isinstance(strict, bool):
            msg = f"'strict_content_length' must be a bool, got {type(strict).__name__}"
            raise ConfigParseError(msg)
        kwargs["strict_content_length"] = strict

    if "activation_fields" in data:
        raw = data["activation_fields"]
        if not isinstance(raw, list):
            msg = f"'activation_fields' must be a list, got {type(raw).__name__}"
            raise ConfigParseError(msg)
        kwargs["activation_fields"] = tuple(
            _require_str(name, "activation_fields[]") for name in raw
        )

    if "fields" in data:
        kwargs["fields"] = _parse_fields(data["fields"])

    return DecoderConfig(**kwargs)


def load_decoder_config(path: str | Path) -> DecoderConfig:
    """Read a YAML config file and parse it.

    An empty file yields the default config.

    Raises:
        ConfigParseError: If the file is not valid YAML or not a valid config.
    """
    try:
        with Path(path).open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"invalid YAML in {path}: {e}"
        raise ConfigParseError(msg) from e
    if data is None:
        return DecoderConfig()
    return parse_decoder_config(data)


def _parse_fields(raw: Any) -> tuple[MetadataField, ...]:
    if not isinstance(raw, list):
        msg = f"'fields' must be a list, got {type(raw).__name__}"
        raise ConfigParseError(msg)

    fields: list[MetadataField] = []
    seen: set[str] = set()
    for entry in raw:
        if isinstance(entry, str):
            item = MetadataField(entry)
        elif isinstance(entry, dict):
            if "name" not in entry:
                msg = "field entry missing required field 'name'"
                raise ConfigParseError(msg)
            item = MetadataField(
                _require_str(entry["name"], "fields[].name"),
                _optional_str(entry.get("default"), "fields[].default"),
            )
        else:
            msg = f"field entry must be a string or dict, got {type(entry).__name__}"
            raise ConfigParseError(msg)

        if not item.name:
            msg = "field name must not be empty"
            raise ConfigParseError(msg)
        if item.name in seen:
            msg = f"duplicate field name: {item.name!r}"
            raise ConfigParseError(msg)
        seen.add(item.name)
        fields.append(item)
    return tuple(fields)


def _require_str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        msg = f"'{key}' must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


def _optional_str(value: Any, key: str) -> str | None:
    if value is None:
        return None
    return _require_str(value, key)
