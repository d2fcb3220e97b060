"""Backend index — the read-only view of compute backends a rewrite may target.

Two sources feed the index:

- the deployment plan: per deployment unit (codebase), the backends this
  operation wants (target state) and the ones it found live for that unit
- the existing snapshot: every live backend of the project, keyed by
  region then name, plus a flag telling whether it was loaded at all

Lookups are chained queries over these immutable maps. Nothing here merges
the plan into the snapshot, so the planning and finalizing calls of one
deploy see exactly the same index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias

from hostcfg._constants import PLATFORM_LEGACY, PLATFORM_MODERN
from hostcfg._errors import ConfigParseError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

# ═══════════════════════════════════════════════════════════════════════════════
# Backend descriptors (tagged by generation)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class LegacyBackend:
    """First-generation function: one fixed region, HTTPS trigger only.

    Routed with a direct ``function`` rewrite.
    """

    id: str
    region: str
    https_trigger: bool = True


@dataclass(frozen=True, slots=True)
class ModernBackend:
    """Second-generation function: any region, served by a container service.

    Always routed with a ``run`` rewrite whose service id is the backend id.
    """

    id: str
    region: str
    https_trigger: bool = True


Backend: TypeAlias = LegacyBackend | ModernBackend


@dataclass(frozen=True, slots=True)
class DeploymentUnit:
    """One logical deployment unit of the plan.

    ``want`` is what this operation will create or update, ``have`` is what
    is live for the unit right now.
    """

    want: tuple[Backend, ...] = ()
    have: tuple[Backend, ...] = ()


@dataclass(frozen=True, slots=True)
class ExistingBackends:
    """Snapshot of all live backends, region -> name -> backend.

    If ``loaded`` is False the snapshot could not be fetched and every
    query against it yields nothing.
    """

    endpoints: Mapping[str, Mapping[str, Backend]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    loaded: bool = True

    def named(self, name: str) -> list[Backend]:
        """All live backends called ``name``, in region order."""
        if not self.loaded:
            return []
        return [
            by_name[name]
            for _, by_name in sorted(self.endpoints.items())
            if name in by_name
        ]

    def contains(self, backend: Backend) -> bool:
        if not self.loaded:
            return False
        live = self.endpoints.get(backend.region, {}).get(backend.id)
        return type(live) is type(backend)


@dataclass(frozen=True, slots=True)
class BackendIndex:
    """Queryable view over the deployment plan and the live snapshot."""

    units: Mapping[str, DeploymentUnit] = field(
        default_factory=lambda: MappingProxyType({})
    )
    existing: ExistingBackends = field(default_factory=ExistingBackends)

    def planned(self, name: str) -> list[Backend]:
        """Target-state backends called ``name`` across all units."""
        return [b for b in self._want() if b.id == name]

    def live(self, name: str) -> list[Backend]:
        """Live backends called ``name`` from the existing snapshot."""
        return self.existing.named(name)

    def is_live(self, backend: Backend) -> bool:
        """True if a backend of the same generation, id and region is running now.

        A live legacy function does not make a planned modern backend of the
        same name live: they are different resources.
        """
        if self.existing.contains(backend):
            return True
        return any(
            type(b) is type(backend) and b.id == backend.id and b.region == backend.region
            for unit in self.units.values()
            for b in unit.have
        )

    def _want(self) -> Iterator[Backend]:
        for unit in self.units.values():
            yield from unit.want


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (deploy payload dicts → index)
# ═══════════════════════════════════════════════════════════════════════════════

_PLATFORMS: dict[str, type[LegacyBackend] | type[ModernBackend]] = {
    PLATFORM_LEGACY: LegacyBackend,
    PLATFORM_MODERN: ModernBackend,
}


def parse_backend_index(
    payload: dict[str, Any] | None,
    existing: dict[str, Any] | None = None,
    *,
    loaded: bool = True,
) -> BackendIndex:
    """Build a BackendIndex from a deploy payload and an existing snapshot.

    ``payload`` has the shape
    ``{"functions": {unit: {"wantBackend": [...], "haveBackend": [...]}}}``;
    ``existing`` maps region -> name -> backend descriptor.

    Raises:
        ConfigParseError: If a descriptor or section is malformed.
    """
    payload = payload or {}
    existing = existing or {}
    if not isinstance(payload, dict):
        msg = f"payload must be a dict, got {type(payload).__name__}"
        raise ConfigParseError(msg)
    if not isinstance(existing, dict):
        msg = f"existing endpoints must be a dict, got {type(existing).__name__}"
        raise ConfigParseError(msg)

    units: dict[str, DeploymentUnit] = {}
    functions = payload.get("functions") or {}
    if not isinstance(functions, dict):
        msg = f"'functions' must be a dict, got {type(functions).__name__}"
        raise ConfigParseError(msg)
    for unit_name, unit in functions.items():
        if not isinstance(unit, dict):
            msg = f"deployment unit {unit_name!r} must be a dict, got {type(unit).__name__}"
            raise ConfigParseError(msg)
        units[unit_name] = DeploymentUnit(
            want=_parse_backend_list(unit.get("wantBackend"), "wantBackend"),
            have=_parse_backend_list(unit.get("haveBackend"), "haveBackend"),
        )

    endpoints: dict[str, Mapping[str, Backend]] = {}
    for region, by_name in existing.items():
        if not isinstance(by_name, dict):
            msg = f"existing endpoints for {region!r} must be a dict, got {type(by_name).__name__}"
            raise ConfigParseError(msg)
        endpoints[region] = MappingProxyType(
            {name: parse_backend(desc) for name, desc in by_name.items()}
        )

    return BackendIndex(
        units=MappingProxyType(units),
        existing=ExistingBackends(endpoints=MappingProxyType(endpoints), loaded=loaded),
    )


def parse_backend(data: dict[str, Any]) -> Backend:
    """Parse one backend descriptor ``{id, region, platform, httpsTrigger}``."""
    if not isinstance(data, dict):
        msg = f"backend must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    for key in ("id", "region"):
        value = data.get(key)
        if not isinstance(value, str) or not value:
            msg = f"backend requires a non-empty string {key!r}"
            raise ConfigParseError(msg)

    platform = data.get("platform", PLATFORM_LEGACY)
    cls = _PLATFORMS.get(platform)
    if cls is None:
        msg = f"unknown backend platform: {platform!r} (expected one of {sorted(_PLATFORMS)})"
        raise ConfigParseError(msg)

    # httpsTrigger is an object in payloads and a flag in snapshots.
    https_trigger = data.get("httpsTrigger") not in (None, False)
    return cls(id=data["id"], region=data["region"], https_trigger=https_trigger)


def _parse_backend_list(data: Any, label: str) -> tuple[Backend, ...]:
    if data is None:
        return ()
    if not isinstance(data, list):
        msg = f"{label!r} must be a list, got {type(data).__name__}"
        raise ConfigParseError(msg)
    return tuple(parse_backend(b) for b in data)
