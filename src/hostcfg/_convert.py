"""Config assembly — HostingConfig + BackendIndex → provider config dict.

Each output section is present iff its input field was set. The rewrites
list is emitted even when every rule was dropped, so "no rewrites
configured" and "all rewrites resolved away" stay distinguishable.

Usage::

    config = parse_hosting_config(raw)
    index = parse_backend_index(payload, existing)
    planned = convert_config(config, index, finalize=False)
    ...  # deploy backends
    final = convert_config(config, index, finalize=True)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from hostcfg._rewrites import translate_rewrite
from hostcfg._sections import (
    convert_header_rule,
    convert_redirect,
    trailing_slash_behavior,
)

if TYPE_CHECKING:
    from hostcfg._backend import BackendIndex
    from hostcfg._config import HostingConfig

logger = logging.getLogger(__name__)


def convert_config(
    config: HostingConfig | None,
    index: BackendIndex,
    *,
    finalize: bool = True,
) -> dict[str, Any]:
    """Translate a hosting config into the provider's config shape.

    ``finalize`` is False for the planning call (backends not deployed yet)
    and True for the finalizing call.

    Raises:
        BackendNotFoundError: a function rewrite matches no backend
        AmbiguousBackendError: a function rewrite matches several backends
    """
    out: dict[str, Any] = {}
    if config is None:
        return out

    if config.rewrites is not None:
        rewrites = []
        for rewrite in config.rewrites:
            translated = translate_rewrite(rewrite, index, finalize=finalize)
            if translated is not None:
                rewrites.append(translated)
        logger.debug(
            "rewrites: %d configured, %d emitted (finalize=%s)",
            len(config.rewrites), len(rewrites), finalize,
        )
        out["rewrites"] = rewrites

    if config.redirects is not None:
        out["redirects"] = [convert_redirect(r) for r in config.redirects]

    if config.headers is not None:
        out["headers"] = [convert_header_rule(h) for h in config.headers]

    if config.clean_urls is not None:
        out["cleanUrls"] = config.clean_urls

    if config.trailing_slash is not None:
        out["trailingSlashBehavior"] = trailing_slash_behavior(config.trailing_slash)

    if config.app_association is not None:
        out["appAssociation"] = config.app_association

    if config.i18n is not None:
        out["i18n"] = config.i18n

    return out
