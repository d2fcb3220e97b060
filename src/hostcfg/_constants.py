"""Provider constants shared by the resolver and the section mappers."""

from __future__ import annotations

# Region assumed for `run` rewrites that do not name one.
DEFAULT_REGION = "us-central1"

# Backend generation tags, as they appear in deployment payloads.
PLATFORM_LEGACY = "gcfv1"
PLATFORM_MODERN = "gcfv2"

TRAILING_SLASH_ADD = "ADD"
TRAILING_SLASH_REMOVE = "REMOVE"
