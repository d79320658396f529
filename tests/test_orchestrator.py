"""Tests for the two-phase retry protocol."""

from __future__ import annotations

import pytest

from pylinkgen.bindgen import BindingEmitter, Module, RetryOrchestrator, State
from pylinkgen.core.exceptions import (
    ConfigValidationError,
    ModuleMismatchError,
    UnsupportedSymbolKindError,
)


def local_names(report):
    return [d.local_name for d in report.declarations]


class TestPhaseOne:
    def test_end_to_end_single_function(self, fake_source, mathx_dump):
        source = fake_source(mathx_dump)
        report = RetryOrchestrator(source).run("mathx")

        assert local_names(report) == ["Add"]
        assert report.requested == ()
        assert report.unresolved == ()
        assert source.fetch_names_calls == []
        assert report.states == ["init", "phase1_dump", "phase1_emit", "done"]

    def test_module_mismatch(self, fake_source, mathx_dump):
        source = fake_source(mathx_dump)
        with pytest.raises(ModuleMismatchError) as exc:
            RetryOrchestrator(source).run("numpy")
        assert exc.value.requested == "numpy"
        assert exc.value.received == "mathx"

    def test_empty_dump_is_mismatch(self, fake_source):
        with pytest.raises(ModuleMismatchError):
            RetryOrchestrator(fake_source({})).run("mathx")

    def test_data_symbol_skipped(self, fake_source, make_item):
        source = fake_source({"name": "m", "items": [make_item("pi", type="float", sig="")]})
        orch = RetryOrchestrator(source)
        result = orch.process(source.fetch("m"))
        assert result.declarations == []
        assert len(result.deferred) == 0
        assert result.skipped == 1

    def test_process_counts(self, fake_source, mixed_dump):
        source = fake_source(mixed_dump)
        result = RetryOrchestrator(source).process(Module.from_dict(mixed_dump))

        assert result.emitted_names == ["add"]
        assert list(result.deferred) == ["clip", "where"]
        assert result.ignored == 1
        assert result.skipped == 3
        assert result.unsupported == []

    def test_process_is_independent_per_call(self, fake_source, mixed_dump):
        orch = RetryOrchestrator(fake_source(mixed_dump))
        module = Module.from_dict(mixed_dump)
        first = orch.process(module)
        second = orch.process(module)
        assert list(first.deferred) == list(second.deferred) == ["clip", "where"]


class TestPhaseTwo:
    def test_null_signature_requested_once(self, fake_source, make_item):
        dump = {"name": "m", "items": [
            make_item("f", sig="<NULL>"),
            make_item("g", sig="(x)"),
            make_item("f", sig="<NULL>"),
        ]}
        source = fake_source(dump)
        report = RetryOrchestrator(source).run("m")

        assert "F" not in local_names(report)
        assert source.fetch_names_calls == [("m", ["f"])]
        assert report.requested == ("f",)

    def test_deferral_order_preserved(self, fake_source, make_item):
        dump = {"name": "m", "items": [
            make_item("zeta", sig="<NULL>"),
            make_item("alpha", type=""),
            make_item("mid", sig="<NULL>"),
        ]}
        source = fake_source(dump)
        RetryOrchestrator(source).run("m")
        assert source.fetch_names_calls == [("m", ["zeta", "alpha", "mid"])]

    def test_resolved_in_second_phase(self, fake_source, mixed_dump, make_item):
        lookup = {"name": "mixed", "items": [
            make_item("clip", type="ufunc", sig="(a, a_min, a_max, /)"),
            make_item("where", type="", sig=""),
        ]}
        source = fake_source(mixed_dump, lookup)
        report = RetryOrchestrator(source).run("mixed")

        assert local_names(report) == ["Add", "Clip"]
        assert report.requested == ("clip", "where")
        assert report.unresolved == ("where",)
        assert report.states == [
            "init", "phase1_dump", "phase1_emit", "phase2_fetch", "phase2_emit", "done",
        ]

    def test_names_missing_from_lookup_stay_unresolved(self, fake_source, mixed_dump, make_item):
        lookup = {"name": "mixed", "items": [make_item("clip", type="ufunc", sig="(x)")]}
        report = RetryOrchestrator(fake_source(mixed_dump, lookup)).run("mixed")
        assert report.unresolved == ("where",)

    def test_empty_lookup_leaves_everything_unresolved(self, fake_source, mixed_dump):
        report = RetryOrchestrator(fake_source(mixed_dump, None)).run("mixed")
        assert report.unresolved == ("clip", "where")
        assert local_names(report) == ["Add"]

    def test_unrequested_symbols_ignored(self, fake_source, mixed_dump, make_item):
        lookup = {"name": "mixed", "items": [
            make_item("clip", type="ufunc", sig="(x)"),
            make_item("where", type="function", sig="(c, x, y)"),
            make_item("sneaky", type="function", sig="(x)"),
        ]}
        report = RetryOrchestrator(fake_source(mixed_dump, lookup)).run("mixed")
        assert local_names(report) == ["Add", "Clip", "Where"]
        assert report.unresolved == ()

    def test_still_null_after_lookup(self, fake_source, mixed_dump, make_item):
        lookup = {"name": "mixed", "items": [
            make_item("clip", type="ufunc", sig="<NULL>"),
            make_item("where", type="function", sig="(c)"),
        ]}
        source = fake_source(mixed_dump, lookup)
        report = RetryOrchestrator(source).run("mixed")
        assert report.unresolved == ("clip",)
        # no third round
        assert len(source.fetch_names_calls) == 1

    def test_lookup_data_symbol_counts_as_resolved(self, fake_source, mixed_dump, make_item):
        lookup = {"name": "mixed", "items": [
            make_item("clip", type="float", sig=""),
            make_item("where", type="function", sig="(c)"),
        ]}
        report = RetryOrchestrator(fake_source(mixed_dump, lookup)).run("mixed")
        assert report.unresolved == ()
        assert local_names(report) == ["Add", "Where"]


class TestUnsupportedKinds:
    def dump(self, make_item):
        return {"name": "m", "items": [
            make_item("gen", type="generator", sig=""),
            make_item("f", sig="(x)"),
            make_item("g", sig="(y)"),
        ]}

    def test_collect_continues(self, fake_source, make_item):
        report = RetryOrchestrator(fake_source(self.dump(make_item))).run("m")
        assert local_names(report) == ["F", "G"]
        assert len(report.unsupported) == 1
        err = report.unsupported[0]
        assert isinstance(err, UnsupportedSymbolKindError)
        assert (err.kind, err.symbol) == ("generator", "gen")
        assert not report.ok

    def test_abort_policy_raises(self, fake_source, make_item):
        orch = RetryOrchestrator(fake_source(self.dump(make_item)), unsupported_kind_policy="abort")
        with pytest.raises(UnsupportedSymbolKindError):
            orch.run("m")


class TestKeywordRejection:
    def test_rejected_symbols_are_collected(self, fake_source, make_item):
        dump = {"name": "m", "items": [
            make_item("f", sig="(a, *, b)"),
            make_item("g", sig="(a)"),
        ]}
        orch = RetryOrchestrator(fake_source(dump), emitter=BindingEmitter(keyword_policy="reject"))
        report = orch.run("m")
        assert local_names(report) == ["G"]
        assert [e.symbol for e in report.rejected] == ["f"]


def test_state_enum_covers_transitions():
    assert [s.value for s in State] == [
        "init", "phase1_dump", "phase1_emit", "phase2_fetch", "phase2_emit", "done",
    ]


def test_unknown_unsupported_kind_policy(fake_source, mathx_dump):
    with pytest.raises(ConfigValidationError):
        RetryOrchestrator(fake_source(mathx_dump), unsupported_kind_policy="ignore")
