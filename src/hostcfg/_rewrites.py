"""Rewrite translation — one config rewrite → one provider rewrite (or None).

Dispatches on the rewrite target:

- destination   → ``{pattern, path}``
- dynamicLinks  → ``{pattern, dynamicLinks}``
- function      → resolved through resolve_endpoint(); a modern backend
                  comes out as a ``run`` rewrite
- run           → ``{pattern, run: {serviceId, region}}`` with the region
                  defaulted, subject to the same liveness gate

The pattern key (``glob`` or ``regex``) is carried through as written.
None means the rewrite is dropped from this call's output.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from hostcfg._backend import ModernBackend
from hostcfg._config import (
    DestinationTarget,
    DynamicLinksTarget,
    FunctionTarget,
    RunTarget,
)
from hostcfg._constants import DEFAULT_REGION
from hostcfg._resolver import FunctionEndpoint, RunEndpoint, resolve_endpoint

if TYPE_CHECKING:
    from hostcfg._backend import BackendIndex
    from hostcfg._config import Rewrite

logger = logging.getLogger(__name__)


def translate_rewrite(
    rewrite: Rewrite, index: BackendIndex, *, finalize: bool
) -> dict[str, Any] | None:
    """Translate a rewrite into the provider's rewrite shape.

    Raises:
        ResolutionError: a function reference could not be resolved
    """
    out = rewrite.pattern.as_dict()
    match rewrite.target:
        case DestinationTarget(destination=destination):
            out["path"] = destination
        case DynamicLinksTarget(enabled=enabled):
            out["dynamicLinks"] = enabled
        case FunctionTarget(name=name, region=region):
            endpoint = resolve_endpoint(name, region, index, finalize=finalize)
            match endpoint:
                case FunctionEndpoint(name=fn, region=r):
                    out["function"] = fn
                    out["functionRegion"] = r
                case RunEndpoint(service_id=service_id, region=r):
                    out["run"] = {"serviceId": service_id, "region": r}
                case None:
                    return None
        case RunTarget(service_id=service_id, region=region):
            region = region or DEFAULT_REGION
            if not finalize and _being_deployed(service_id, region, index):
                logger.debug(
                    "service %s in %s is being deployed; dropping rewrite %s",
                    service_id, region, rewrite.pattern.value,
                )
                return None
            out["run"] = {"serviceId": service_id, "region": region}
    return out


def _being_deployed(service_id: str, region: str, index: BackendIndex) -> bool:
    """True if the plan creates a modern backend for this service that is not live yet.

    Services that the plan does not mention are routed as configured.
    """
    return any(
        isinstance(b, ModernBackend) and b.region == region and not index.is_live(b)
        for b in index.planned(service_id)
    )
