"""Tests for rewrite translation (hostcfg._rewrites)."""

from __future__ import annotations

import pytest

from hostcfg import (
    DEFAULT_REGION,
    BackendNotFoundError,
    DestinationTarget,
    DynamicLinksTarget,
    FunctionTarget,
    Pattern,
    Rewrite,
    RunTarget,
    translate_rewrite,
)
from hostcfg.testing import legacy, make_index, modern

GLOB = Pattern(kind="glob", value="/foo")
REGEX = Pattern(kind="regex", value="^/foo$")


class TestStaticTargets:
    @pytest.mark.parametrize("finalize", [False, True])
    def test_destination_is_copied(self, empty_index, finalize: bool) -> None:
        rewrite = Rewrite(GLOB, DestinationTarget("/index.html"))
        out = translate_rewrite(rewrite, empty_index, finalize=finalize)
        assert out == {"glob": "/foo", "path": "/index.html"}

    def test_dynamic_links_is_copied(self, empty_index) -> None:
        rewrite = Rewrite(REGEX, DynamicLinksTarget(True))
        out = translate_rewrite(rewrite, empty_index, finalize=False)
        assert out == {"regex": "^/foo$", "dynamicLinks": True}

    def test_pattern_kind_is_preserved(self, empty_index) -> None:
        out = translate_rewrite(Rewrite(REGEX, DestinationTarget("/x")), empty_index, finalize=True)
        assert "regex" in out
        assert "glob" not in out


class TestFunctionTarget:
    def test_legacy_function(self) -> None:
        index = make_index(want=[legacy("api", "us-east1")])
        out = translate_rewrite(Rewrite(GLOB, FunctionTarget("api")), index, finalize=False)
        assert out == {"glob": "/foo", "function": "api", "functionRegion": "us-east1"}

    def test_modern_function_is_routed_through_run(self) -> None:
        index = make_index(existing=[modern("api", "europe-west1")])
        out = translate_rewrite(
            Rewrite(REGEX, FunctionTarget("api", "europe-west1")), index, finalize=False
        )
        assert out == {"regex": "^/foo$", "run": {"serviceId": "api", "region": "europe-west1"}}

    def test_planned_modern_function_dropped_while_planning(self) -> None:
        index = make_index(want=[modern("api")])
        assert translate_rewrite(Rewrite(GLOB, FunctionTarget("api")), index, finalize=False) is None

    def test_resolution_errors_propagate(self, empty_index) -> None:
        with pytest.raises(BackendNotFoundError):
            translate_rewrite(Rewrite(GLOB, FunctionTarget("api")), empty_index, finalize=True)


class TestRunTarget:
    def test_region_defaults(self, empty_index) -> None:
        out = translate_rewrite(Rewrite(GLOB, RunTarget("hello")), empty_index, finalize=True)
        assert out == {"glob": "/foo", "run": {"serviceId": "hello", "region": DEFAULT_REGION}}

    def test_region_kept(self, empty_index) -> None:
        out = translate_rewrite(
            Rewrite(GLOB, RunTarget("hello", "us-midwest")), empty_index, finalize=False
        )
        assert out == {"glob": "/foo", "run": {"serviceId": "hello", "region": "us-midwest"}}

    def test_unknown_service_needs_no_backend(self, empty_index) -> None:
        out = translate_rewrite(Rewrite(GLOB, RunTarget("external")), empty_index, finalize=False)
        assert out is not None

    def test_planned_service_dropped_while_planning(self) -> None:
        index = make_index(want=[modern("hello")])
        assert translate_rewrite(Rewrite(GLOB, RunTarget("hello")), index, finalize=False) is None

    def test_planned_service_included_when_finalizing(self) -> None:
        index = make_index(want=[modern("hello")])
        out = translate_rewrite(Rewrite(GLOB, RunTarget("hello")), index, finalize=True)
        assert out == {"glob": "/foo", "run": {"serviceId": "hello", "region": "us-central1"}}

    def test_planned_live_service_kept_while_planning(self) -> None:
        index = make_index(want=[modern("hello")], existing=[modern("hello")])
        assert translate_rewrite(Rewrite(GLOB, RunTarget("hello")), index, finalize=False)

    def test_live_legacy_namesake_does_not_keep_planned_service(self) -> None:
        index = make_index(want=[modern("fn")], existing=[legacy("fn")])
        assert translate_rewrite(Rewrite(GLOB, RunTarget("fn")), index, finalize=False) is None

    def test_planned_legacy_backend_with_service_name_is_kept(self) -> None:
        index = make_index(want=[legacy("hello")])
        out = translate_rewrite(Rewrite(GLOB, RunTarget("hello")), index, finalize=False)
        assert out == {"glob": "/foo", "run": {"serviceId": "hello", "region": "us-central1"}}
