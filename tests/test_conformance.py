"""Scenario conformance tests for cgikit.

Loads the YAML fixtures from tests/fixtures/ and runs each request through
the full decoder: metadata first, then query fields, then body fields.

Run with: uv run pytest tests/test_conformance.py -v
"""

from __future__ import annotations

import pytest
from conftest import ScenarioCase, load_scenarios

from cgikit import METADATA_FIELDS, parse_request
from cgikit.testing import body_stream

_scenarios = load_scenarios()


def _case_id(case: ScenarioCase) -> str:
    return f"{case.fixture_name}::{case.case_name}"


@pytest.mark.parametrize("case", _scenarios, ids=[_case_id(c) for c in _scenarios])
def test_scenario(case: ScenarioCase) -> None:
    request = parse_request(case.environ, body_stream(case.body))
    pairs = request.items()

    metadata = pairs[: len(METADATA_FIELDS)]
    assert [k for k, _ in metadata] == [f.name for f in METADATA_FIELDS]
    for key, value in metadata:
        assert value == case.environ.get(key, "empty"), f"metadata {key} altered"

    actual = pairs[len(METADATA_FIELDS) :]
    assert actual == case.fields, (
        f"Fixture '{case.fixture_name}' case '{case.case_name}': "
        f"expected {case.fields!r}, got {actual!r}"
    )


def test_fixtures_loaded() -> None:
    assert len(_scenarios) >= 25
