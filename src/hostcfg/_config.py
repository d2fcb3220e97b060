"""Hosting config types and the dict → config parser.

The input shape is the one users write in their hosting config:

    {"rewrites": [{"glob": "/api/**", "function": "api"}], "cleanUrls": true}

Parsing produces frozen dataclasses. Absent sections stay ``None`` so the
assembler can tell "not configured" from "configured but empty".

Rule targets form a union that is pattern-matchable via match/case:

| Config key     | Target type         |
|----------------|---------------------|
| destination    | DestinationTarget   |
| dynamicLinks   | DynamicLinksTarget  |
| function       | FunctionTarget      |
| run            | RunTarget           |
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

import re2

from hostcfg._errors import ConfigParseError

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Pattern:
    """Path pattern of a rule. ``kind`` is the key it was written under."""

    kind: Literal["glob", "regex"]
    value: str

    def as_dict(self) -> dict[str, str]:
        return {self.kind: self.value}


@dataclass(frozen=True, slots=True)
class DestinationTarget:
    """Rewrite to a static path or URL."""

    destination: str


@dataclass(frozen=True, slots=True)
class DynamicLinksTarget:
    """Hand the path to the platform's dynamic links handler."""

    enabled: Any


@dataclass(frozen=True, slots=True)
class FunctionTarget:
    """Symbolic reference to a function backend by name."""

    name: str
    region: str | None = None


@dataclass(frozen=True, slots=True)
class RunTarget:
    """Symbolic reference to a container service.

    ``region`` is None when the user did not set one; the translator
    substitutes the default region.
    """

    service_id: str
    region: str | None = None


RewriteTarget: TypeAlias = DestinationTarget | DynamicLinksTarget | FunctionTarget | RunTarget


@dataclass(frozen=True, slots=True)
class Rewrite:
    pattern: Pattern
    target: RewriteTarget


@dataclass(frozen=True, slots=True)
class Redirect:
    pattern: Pattern
    destination: str
    type: int | None = None


@dataclass(frozen=True, slots=True)
class HeaderRule:
    """Headers to set on matching responses, as ordered (key, value) pairs."""

    pattern: Pattern
    headers: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True, slots=True)
class HostingConfig:
    """Parsed hosting config. ``None`` means the field was not set."""

    rewrites: tuple[Rewrite, ...] | None = None
    redirects: tuple[Redirect, ...] | None = None
    headers: tuple[HeaderRule, ...] | None = None
    clean_urls: bool | None = None
    trailing_slash: bool | None = None
    app_association: Any = None
    i18n: Any = None


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

_REWRITE_TARGETS = ("destination", "dynamicLinks", "function", "run")


def parse_hosting_config(data: dict[str, Any]) -> HostingConfig:
    """Parse a dict into a HostingConfig.

    Keys unrelated to URL handling (``public``, ``ignore``, ...) are ignored.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    rewrites = None
    if "rewrites" in data:
        rewrites = tuple(_parse_rewrite(r) for r in _rule_list(data, "rewrites"))
    redirects = None
    if "redirects" in data:
        redirects = tuple(_parse_redirect(r) for r in _rule_list(data, "redirects"))
    headers = None
    if "headers" in data:
        headers = tuple(_parse_header_rule(r) for r in _rule_list(data, "headers"))

    return HostingConfig(
        rewrites=rewrites,
        redirects=redirects,
        headers=headers,
        clean_urls=_optional_bool(data, "cleanUrls"),
        trailing_slash=_optional_bool(data, "trailingSlash"),
        app_association=data.get("appAssociation"),
        i18n=data.get("i18n"),
    )


def _rule_list(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    rules = data[key]
    if not isinstance(rules, list):
        msg = f"{key!r} must be a list, got {type(rules).__name__}"
        raise ConfigParseError(msg)
    for rule in rules:
        if not isinstance(rule, dict):
            msg = f"each of {key!r} must be a dict, got {type(rule).__name__}"
            raise ConfigParseError(msg)
    return rules


def _optional_bool(data: dict[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        msg = f"{key!r} must be a bool, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


def _parse_pattern(data: dict[str, Any]) -> Pattern:
    """Parse the rule pattern. Enforces oneof: exactly one of glob or regex."""
    has_glob = "glob" in data
    has_regex = "regex" in data
    if has_glob and has_regex:
        msg = "exactly one of 'glob' or 'regex' must be set, got both"
        raise ConfigParseError(msg)
    if not has_glob and not has_regex:
        msg = "one of 'glob' or 'regex' is required"
        raise ConfigParseError(msg)

    kind: Literal["glob", "regex"] = "glob" if has_glob else "regex"
    value = data[kind]
    if not isinstance(value, str):
        msg = f"{kind!r} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    if kind == "regex":
        try:
            re2.compile(value)
        except re2.error as e:
            msg = f'invalid regex pattern "{value}": {e}'
            raise ConfigParseError(msg) from e
    return Pattern(kind=kind, value=value)


def _parse_rewrite(data: dict[str, Any]) -> Rewrite:
    pattern = _parse_pattern(data)
    present = [key for key in _REWRITE_TARGETS if key in data]
    if len(present) != 1:
        msg = f"rewrite must set exactly one of {list(_REWRITE_TARGETS)}, got {present}"
        raise ConfigParseError(msg)

    target: RewriteTarget
    match present[0]:
        case "destination":
            target = DestinationTarget(destination=_string(data, "destination", "rewrite"))
        case "dynamicLinks":
            target = DynamicLinksTarget(enabled=data["dynamicLinks"])
        case "function":
            target = _parse_function_target(data)
        case _:
            target = _parse_run_target(data["run"])
    return Rewrite(pattern=pattern, target=target)


def _parse_function_target(data: dict[str, Any]) -> FunctionTarget:
    """Parse ``function: name`` or ``function: {functionId, region}``.

    A ``region`` next to the function reference applies when the
    reference itself has none.
    """
    ref = data["function"]
    region = data.get("region")
    if isinstance(ref, str):
        name = ref
    elif isinstance(ref, dict):
        name = ref.get("functionId", ref.get("name"))
        region = ref.get("region", region)
    else:
        msg = f"'function' must be a string or dict, got {type(ref).__name__}"
        raise ConfigParseError(msg)

    if not isinstance(name, str) or not name:
        msg = "function rewrite requires a non-empty function id"
        raise ConfigParseError(msg)
    if region is not None and not isinstance(region, str):
        msg = f"function region must be a string, got {type(region).__name__}"
        raise ConfigParseError(msg)
    return FunctionTarget(name=name, region=region)


def _parse_run_target(ref: Any) -> RunTarget:
    if not isinstance(ref, dict):
        msg = f"'run' must be a dict, got {type(ref).__name__}"
        raise ConfigParseError(msg)
    service_id = _string(ref, "serviceId", "run rewrite")
    region = ref.get("region")
    if region is not None and not isinstance(region, str):
        msg = f"run region must be a string, got {type(region).__name__}"
        raise ConfigParseError(msg)
    return RunTarget(service_id=service_id, region=region)


def _parse_redirect(data: dict[str, Any]) -> Redirect:
    pattern = _parse_pattern(data)
    destination = _string(data, "destination", "redirect")
    status = data.get("type")
    if status is not None and (isinstance(status, bool) or not isinstance(status, int)):
        msg = f"redirect 'type' must be an int, got {type(status).__name__}"
        raise ConfigParseError(msg)
    return Redirect(pattern=pattern, destination=destination, type=status)


def _parse_header_rule(data: dict[str, Any]) -> HeaderRule:
    pattern = _parse_pattern(data)
    entries = data.get("headers", [])
    if not isinstance(entries, list):
        msg = f"'headers' must be a list, got {type(entries).__name__}"
        raise ConfigParseError(msg)

    pairs: list[tuple[str, str]] = []
    for entry in entries:
        if not isinstance(entry, dict):
            msg = f"header entry must be a dict, got {type(entry).__name__}"
            raise ConfigParseError(msg)
        pairs.append((_string(entry, "key", "header"), _string(entry, "value", "header")))
    return HeaderRule(pattern=pattern, headers=tuple(pairs))


def _string(data: dict[str, Any], key: str, what: str) -> str:
    if key not in data:
        msg = f"{what} missing required field {key!r}"
        raise ConfigParseError(msg)
    value = data[key]
    if not isinstance(value, str):
        msg = f"{what} {key!r} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value
