"""Endpoint resolution — symbolic function reference → concrete endpoint.

Resolution is a two-tier lookup:

1. the target state of the deployment plan (what this deploy creates or
   updates)
2. the live snapshot, consulted only when the plan has no usable match

Within a tier a region hint narrows the candidates. More than one
remaining candidate is a hard error in every phase; the region hint is
the only disambiguator.

The backend generation decides the routing shape: legacy backends get a
``function`` rewrite, modern backends get a ``run`` rewrite.

Liveness gate: hosting config and compute are uploaded by separate calls
of one deploy. While planning, a modern backend that exists only in the
plan cannot be referenced yet, so it resolves to None (dropped). The
finalizing call happens after the plan was applied and includes it.

Precondition (not checked here): a finalizing call for a deploy is only
made once every planned backend of the matching planning call is live.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from hostcfg._backend import LegacyBackend, ModernBackend
from hostcfg._errors import AmbiguousBackendError, BackendNotFoundError

if TYPE_CHECKING:
    from hostcfg._backend import Backend, BackendIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FunctionEndpoint:
    """Route directly to a legacy function trigger."""

    name: str
    region: str


@dataclass(frozen=True, slots=True)
class RunEndpoint:
    """Route through the container service backing a function."""

    service_id: str
    region: str


ResolvedEndpoint: TypeAlias = FunctionEndpoint | RunEndpoint


def resolve_endpoint(
    name: str,
    region: str | None,
    index: BackendIndex,
    *,
    finalize: bool,
) -> ResolvedEndpoint | None:
    """Resolve a function reference against the backend index.

    Returns None when the reference must be dropped for now (liveness gate).

    The snapshot is consulted whenever the plan has no candidate left after
    the region filter, not only when the plan lacks the name entirely.

    Raises:
        BackendNotFoundError: nothing in the plan or the snapshot matches
        AmbiguousBackendError: several backends match and no region decides
    """
    backend = select_backend(name, region, index.planned(name))
    planned = backend is not None
    if backend is None:
        backend = select_backend(name, region, index.live(name))
    if backend is None:
        raise BackendNotFoundError(name, region)

    logger.debug(
        "resolved %s (region=%s) to %s in %s from %s",
        name, region, type(backend).__name__, backend.region,
        "plan" if planned else "snapshot",
    )

    match backend:
        case LegacyBackend(region=r):
            return FunctionEndpoint(name=name, region=r)
        case ModernBackend(id=service_id, region=r):
            if planned and not finalize and not index.is_live(backend):
                logger.debug("%s in %s is not live yet; dropping", service_id, r)
                return None
            return RunEndpoint(service_id=service_id, region=r)
    return None  # pragma: no cover


def select_backend(
    name: str, region: str | None, candidates: list[Backend]
) -> Backend | None:
    """Pick the single candidate matching ``region`` (any region if None).

    Returns None when no candidate remains.

    Raises:
        AmbiguousBackendError: more than one candidate remains
    """
    if region is not None:
        candidates = [b for b in candidates if b.region == region]
    if not candidates:
        return None
    if len(candidates) > 1:
        raise AmbiguousBackendError(name, [b.region for b in candidates])
    return candidates[0]
