"""
Tests for gate counting and the optimization report.
"""
from rotmerge.ir import Circuit
from rotmerge.report import gate_counts, rotation_counts, collect_metrics, build_report


def test_gate_counts():
    c = Circuit(2).h(0).cx(0, 1).t(1).t(0).s(1)
    assert gate_counts(c) == {"H": 1, "CX": 1, "RZ": 3}


def test_rotation_counts():
    c = Circuit(2).t(0).t(1).s(1).tdg(0).h(0)
    assert rotation_counts(c) == {1: 2, 2: 1, 7: 1}


def test_collect_metrics():
    c = Circuit(3).h(0).cx(0, 1).t(1).s(2).cx(1, 2)
    m = collect_metrics(c, "input")
    assert (m.name, m.gates, m.two_q, m.rotations, m.t_like) == ("input", 5, 2, 2, 1)
    assert m.depth == 4
    assert m.ops[0] == "H(0)"


def test_depth_of_empty_circuit():
    assert collect_metrics(Circuit(2), "x").depth == 0


def test_report_text():
    before = Circuit(2).t(0).cx(0, 1).t(0)
    after = Circuit(2).s(0).cx(0, 1)
    report = build_report(before, after, [collect_metrics(before, "input"), collect_metrics(after, "forward")])
    summary = report.to_text(1)
    assert "Input:     3 gates  Output: 2 gates" in summary
    assert "Rotations: 2 -> 1  (odd k: 2 -> 0)" in summary
    assert "PASSES" not in summary
    full = report.to_text(2)
    assert "GATE COUNTS" in full
    assert "  RZ        2     1" in full
    assert "OPS" not in full
