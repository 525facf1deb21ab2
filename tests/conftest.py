"""Scenario fixture loader for cgikit.

Loads YAML fixtures from tests/fixtures/ and turns each case into a
(metadata, body, expected fields) triple for parametrized testing.

Fixture shape::

    name: query_string
    cases:
      - name: simple pair
        environ: {QUERY_STRING: "a=1"}
        body: ""                 # optional, request body as text
        fields: [[a, "1"]]       # exact pairs appended after the metadata

``CONTENT_LENGTH: auto`` is replaced with the encoded body length.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class ScenarioCase:
    """A single decoding scenario from a YAML fixture."""

    fixture_name: str
    case_name: str
    environ: dict[str, str]
    body: bytes
    fields: list[tuple[str, str]]


# ─── Fixture loading ────────────────────────────────────────────────────────


def load_scenarios() -> list[ScenarioCase]:
    """Load every scenario case from tests/fixtures/*.yaml."""
    cases: list[ScenarioCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        cases.extend(_load_file(yaml_file))
    return cases


def _load_file(path: Path) -> list[ScenarioCase]:
    """Load a single fixture YAML file (may contain multiple documents)."""
    cases: list[ScenarioCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            for case in doc["cases"]:
                cases.append(_parse_case(doc["name"], case))
    return cases


def _parse_case(fixture_name: str, raw: dict[str, Any]) -> ScenarioCase:
    body = str(raw.get("body", "")).encode("utf-8")
    environ = {str(k): str(v) for k, v in raw.get("environ", {}).items()}
    if environ.get("CONTENT_LENGTH") == "auto":
        environ["CONTENT_LENGTH"] = str(len(body))
    fields = [(str(k), str(v)) for k, v in raw.get("fields", [])]
    return ScenarioCase(
        fixture_name=fixture_name,
        case_name=raw["name"],
        environ=environ,
        body=body,
        fields=fields,
    )

