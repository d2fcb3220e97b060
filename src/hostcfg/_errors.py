"""Error types for hostcfg.

Every error raised by the package derives from HostingConfigError, so
callers can abort a deploy with a single except clause.
"""

from __future__ import annotations


class HostingConfigError(Exception):
    """Base class for all hostcfg errors."""


class ConfigParseError(HostingConfigError):
    """Error parsing a config dict into hostcfg types."""


class ResolutionError(HostingConfigError):
    """A symbolic backend reference could not be resolved."""


class BackendNotFoundError(ResolutionError):
    """No backend in the plan or the live snapshot matches a reference."""

    def __init__(self, name: str, region: str | None = None) -> None:
        self.name = name
        self.region = region
        msg = f"Unable to find a valid endpoint for function `{name}`"
        if region is not None:
            msg += f" in region {region}"
        super().__init__(msg)


class AmbiguousBackendError(ResolutionError):
    """Several backends share a name and no region hint picks one."""

    def __init__(self, name: str, regions: list[str]) -> None:
        self.name = name
        self.regions = sorted(regions)
        msg = f"More than one backend found for function name: {name}. "
        if len(set(self.regions)) == 1:
            # A region hint cannot separate backends that share a region.
            msg += (
                f"Several deployment units deploy it to {self.regions[0]}; "
                "give the functions distinct names."
            )
        else:
            msg += (
                f"It is deployed in {', '.join(self.regions)}; "
                "specify a region on the rewrite to pick one."
            )
        super().__init__(msg)
