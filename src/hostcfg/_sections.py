"""Section mappers for the parts of the config that need no backend lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hostcfg._constants import TRAILING_SLASH_ADD, TRAILING_SLASH_REMOVE

if TYPE_CHECKING:
    from hostcfg._config import HeaderRule, Redirect


def convert_redirect(redirect: Redirect) -> dict[str, Any]:
    """``{pattern, location}`` plus ``statusCode`` when a type was given."""
    out: dict[str, Any] = redirect.pattern.as_dict()
    out["location"] = redirect.destination
    if redirect.type is not None:
        out["statusCode"] = redirect.type
    return out


def convert_header_rule(rule: HeaderRule) -> dict[str, Any]:
    """Turn the ordered header pairs into a mapping (last duplicate key wins)."""
    out: dict[str, Any] = rule.pattern.as_dict()
    out["headers"] = dict(rule.headers)
    return out


def trailing_slash_behavior(trailing_slash: bool) -> str:
    return TRAILING_SLASH_ADD if trailing_slash else TRAILING_SLASH_REMOVE
