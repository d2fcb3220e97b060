"""hostcfg — resolve hosting rewrites against the functions of a deploy.

All public types are exported from this module for flat imports:

    from hostcfg import parse_hosting_config, parse_backend_index, convert_config
"""

import logging

__version__ = "0.1.0"

# Backend index — see hostcfg._backend for details
from hostcfg._backend import (
    Backend,
    BackendIndex,
    DeploymentUnit,
    ExistingBackends,
    LegacyBackend,
    ModernBackend,
    parse_backend,
    parse_backend_index,
)

# Config types
from hostcfg._config import (
    DestinationTarget,
    DynamicLinksTarget,
    FunctionTarget,
    HeaderRule,
    HostingConfig,
    Pattern,
    Redirect,
    Rewrite,
    RewriteTarget,
    RunTarget,
    parse_hosting_config,
)
from hostcfg._constants import DEFAULT_REGION
from hostcfg._convert import convert_config
from hostcfg._errors import (
    AmbiguousBackendError,
    BackendNotFoundError,
    ConfigParseError,
    HostingConfigError,
    ResolutionError,
)

# Resolution
from hostcfg._resolver import (
    FunctionEndpoint,
    ResolvedEndpoint,
    RunEndpoint,
    resolve_endpoint,
    select_backend,
)
from hostcfg._rewrites import translate_rewrite
from hostcfg._sections import (
    convert_header_rule,
    convert_redirect,
    trailing_slash_behavior,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Backend index
    "Backend",
    "LegacyBackend",
    "ModernBackend",
    "DeploymentUnit",
    "ExistingBackends",
    "BackendIndex",
    "parse_backend",
    "parse_backend_index",
    # Config types
    "Pattern",
    "DestinationTarget",
    "DynamicLinksTarget",
    "FunctionTarget",
    "RunTarget",
    "RewriteTarget",
    "Rewrite",
    "Redirect",
    "HeaderRule",
    "HostingConfig",
    "parse_hosting_config",
    # Resolution
    "FunctionEndpoint",
    "RunEndpoint",
    "ResolvedEndpoint",
    "resolve_endpoint",
    "select_backend",
    # Translation
    "translate_rewrite",
    "convert_redirect",
    "convert_header_rule",
    "trailing_slash_behavior",
    "convert_config",
    "DEFAULT_REGION",
    # Errors
    "HostingConfigError",
    "ConfigParseError",
    "ResolutionError",
    "BackendNotFoundError",
    "AmbiguousBackendError",
]
