"""Tests for reconciliation: extraction, locality filtering, ledger and probe."""

import pytest

from autoinstall.errors import ReadError
from autoinstall.ledger import Ledger
from autoinstall.reconciler import Reconciler

from conftest import FakeRegistry


@pytest.fixture
def project(tmp_path):
    (tmp_path / "local.js").write_text("module.exports = {};")
    doc = tmp_path / "app.js"
    doc.write_text('import {a} from "left-pad"; import b from "./local.js";')
    return doc


class TestReconcile:
    def test_scenario_local_dropped_missing_kept(self, project):
        registry = FakeRegistry()
        rec = Reconciler(registry, Ledger()).reconcile(project)
        assert rec.to_install == ["left-pad"]
        assert rec.local == ["./local.js"]
        assert registry.probes == ["left-pad"]

    def test_local_specifier_never_probed_or_recorded(self, project):
        registry = FakeRegistry(installed={"./local.js", "left-pad"})
        ledger = Ledger()
        Reconciler(registry, ledger).reconcile(project)
        assert "./local.js" not in registry.probes
        assert "./local.js" not in ledger

    def test_ledger_hit_skips_probe(self, project):
        registry = FakeRegistry()
        ledger = Ledger(entries=["left-pad"])
        rec = Reconciler(registry, ledger).reconcile(project)
        assert rec.to_install == []
        assert rec.satisfied == ["left-pad"]
        assert registry.probes == []

    def test_positive_probe_recorded_in_ledger(self, project):
        registry = FakeRegistry(installed={"left-pad"})
        ledger = Ledger()
        reconciler = Reconciler(registry, ledger)
        reconciler.reconcile(project)
        reconciler.reconcile(project)
        assert "left-pad" in ledger
        assert registry.probes == ["left-pad"]

    def test_positive_probe_persisted_to_sidecar(self, project, tmp_path):
        sidecar = tmp_path / ".autoinstall-ledger"
        Reconciler(FakeRegistry(installed={"left-pad"}), Ledger.load(sidecar)).reconcile(project)
        assert sidecar.read_text().splitlines() == ["left-pad"]

    def test_output_never_overlaps_ledger(self, tmp_path):
        doc = tmp_path / "x.js"
        doc.write_text('require("a"); require("b"); require("c"); require("a");')
        ledger = Ledger(entries=["b"])
        rec = Reconciler(FakeRegistry(installed={"c"}), ledger).reconcile(doc)
        assert rec.to_install == ["a"]
        assert not set(rec.to_install) & set(ledger)

    def test_first_seen_order_preserved(self, tmp_path):
        doc = tmp_path / "x.js"
        doc.write_text('const z = require("zeta");\nimport a from "alpha";\nimport("mid");')
        rec = Reconciler(FakeRegistry(), Ledger()).reconcile(doc)
        assert rec.to_install == ["zeta", "alpha", "mid"]

    def test_unreadable_document_raises(self, tmp_path):
        with pytest.raises(ReadError):
            Reconciler(FakeRegistry(), Ledger()).reconcile(tmp_path / "missing.js")
