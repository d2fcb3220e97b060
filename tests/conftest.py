"""Conformance fixture loader for hostcfg.

Loads YAML fixtures from tests/fixtures/ and converts them to hostcfg types
for parametrized testing. A fixture either expects a converted config
(``expect``) or an error (``expect_error`` naming the exception class).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from hostcfg import (
    BackendIndex,
    HostingConfig,
    parse_backend_index,
    parse_hosting_config,
)
from hostcfg.testing import make_index

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class ConversionCase:
    """A single conversion case from a conformance fixture."""

    source: str
    name: str
    config: HostingConfig | None
    index: BackendIndex
    finalize: bool
    expect: dict[str, Any] | None
    expect_error: str | None
    error_contains: str | None

    @property
    def id(self) -> str:
        return f"{self.source}::{self.name}"


def load_conversion_cases() -> list[ConversionCase]:
    """Load every fixture document from tests/fixtures/*.yaml."""
    cases: list[ConversionCase] = []
    for yaml_file in sorted(FIXTURES_DIR.glob("*.yaml")):
        cases.extend(_load_file(yaml_file))
    return cases


def _load_file(path: Path) -> list[ConversionCase]:
    """Load a single fixture YAML file (may contain multiple documents)."""
    cases: list[ConversionCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            raw_config = doc.get("config")
            cases.append(
                ConversionCase(
                    source=path.stem,
                    name=doc["name"],
                    config=None if raw_config is None else parse_hosting_config(raw_config),
                    index=parse_backend_index(
                        doc.get("payload"),
                        doc.get("existing"),
                        loaded=doc.get("loaded", True),
                    ),
                    finalize=doc.get("finalize", True),
                    expect=doc.get("expect"),
                    expect_error=doc.get("expect_error"),
                    error_contains=doc.get("error_contains"),
                )
            )
    return cases


@pytest.fixture
def empty_index() -> BackendIndex:
    """An index with nothing planned and nothing live."""
    return make_index()
