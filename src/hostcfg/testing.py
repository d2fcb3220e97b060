"""Test utilities for hostcfg.

Small builders for backend indexes so tests and examples do not have to
spell out deploy payload dicts. Not used by the library itself.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from hostcfg._backend import (
    BackendIndex,
    DeploymentUnit,
    ExistingBackends,
    LegacyBackend,
    ModernBackend,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from hostcfg._backend import Backend


def legacy(id: str, region: str = "us-central1") -> LegacyBackend:  # noqa: A002
    return LegacyBackend(id=id, region=region)


def modern(id: str, region: str = "us-central1") -> ModernBackend:  # noqa: A002
    return ModernBackend(id=id, region=region)


def make_index(
    want: Iterable[Backend] = (),
    have: Iterable[Backend] = (),
    existing: Iterable[Backend] = (),
    *,
    loaded: bool = True,
    unit: str = "default",
) -> BackendIndex:
    """Build an index with one deployment unit and a flat existing list.

    >>> from hostcfg.testing import make_index, modern
    >>> index = make_index(want=[modern("api")])
    >>> [b.region for b in index.planned("api")]
    ['us-central1']
    """
    endpoints: dict[str, dict[str, Backend]] = {}
    for b in existing:
        endpoints.setdefault(b.region, {})[b.id] = b
    return BackendIndex(
        units=MappingProxyType({unit: DeploymentUnit(want=tuple(want), have=tuple(have))}),
        existing=ExistingBackends(
            endpoints=MappingProxyType(
                {region: MappingProxyType(by_name) for region, by_name in endpoints.items()}
            ),
            loaded=loaded,
        ),
    )
