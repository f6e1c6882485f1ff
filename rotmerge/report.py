"""Gate counts and optimization report."""
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field

from .ir import Circuit, Gate, Operation


@dataclass
class PassMetrics:
    """Metrics captured after a single pass."""
    name: str
    gates: int
    two_q: int
    depth: int
    rotations: int
    t_like: int
    ops: list[str] | None = None


@dataclass
class MergeReport:
    """Optimization report with pass-by-pass metrics."""
    n_qubits: int
    passes: list[PassMetrics]
    counts_in: dict[str, int] = field(default_factory=dict)
    counts_out: dict[str, int] = field(default_factory=dict)
    verified: bool | None = None

    def _summary(self) -> list[str]:
        first, last = self.passes[0], self.passes[-1]
        lines = ["SUMMARY",
                 f"  Qubits:    {self.n_qubits}",
                 f"  Input:     {first.gates} gates  Output: {last.gates} gates",
                 f"  Rotations: {first.rotations} -> {last.rotations}  (odd k: {first.t_like} -> {last.t_like})"]
        if self.verified is not None: lines.append(f"  Verified:  {'yes' if self.verified else 'NO'}")
        return lines

    def _pass_table(self) -> list[str]:
        rows = [f"  {m.name:<14} {m.gates:>5} {m.two_q:>4} {m.depth:>5} {m.rotations:>4}" for m in self.passes]
        return ["PASSES", "  Name            Gates  2Q  Depth  Rz", "  " + "-" * 38, *rows]

    def _count_table(self) -> list[str]:
        names = sorted(self.counts_in.keys() | self.counts_out.keys())
        if not names: return []
        rows = [f"  {g:<6} {self.counts_in.get(g, 0):>4} {self.counts_out.get(g, 0):>5}" for g in names]
        return ["GATE COUNTS", "  Gate     In   Out", *rows]

    def _op_lists(self) -> list[str]:
        rows = [f"  [{m.name}] {', '.join(m.ops)}" for m in self.passes if m.ops]
        return ["OPS", *rows] if rows else []

    def to_text(self, verbosity: int = 2) -> str:
        """Summary always; pass and gate-count tables from 2; op lists from 3."""
        sections = [["=" * 40, "  Rotation Merging Report", "=" * 40], self._summary()]
        if verbosity >= 2: sections += [self._pass_table(), self._count_table()]
        if verbosity >= 3: sections.append(self._op_lists())
        return "\n\n".join("\n".join(s) for s in sections if s)


def gate_counts(circuit: Circuit) -> dict[str, int]:
    """Number of gates per gate name."""
    return dict(Counter(op.gate.name for op in circuit.ops))


def rotation_counts(circuit: Circuit) -> dict[int, int]:
    """Number of RZ gates per angle k (eighth-turns)."""
    return dict(Counter(op.k for op in circuit.ops if op.gate == Gate.RZ))


def _depth(ops: list[Operation]) -> int:
    """Longest chain of gates sharing a qubit."""
    level = [0] * (1 + max((q for op in ops for q in op.qubits), default=-1))
    for op in ops:
        d = 1 + max(level[q] for q in op.qubits)
        for q in op.qubits: level[q] = d
    return max(level, default=0)


def collect_metrics(circuit: Circuit, name: str) -> PassMetrics:
    rz = rotation_counts(circuit)
    return PassMetrics(name, len(circuit.ops), sum(op.gate.n_qubits == 2 for op in circuit.ops),
                       _depth(circuit.ops), sum(rz.values()), sum(c for k, c in rz.items() if k % 2),
                       [repr(op) for op in circuit.ops])


def build_report(input_circ: Circuit, output_circ: Circuit, passes: list[PassMetrics]) -> MergeReport:
    return MergeReport(input_circ.n_qubits, passes, gate_counts(input_circ), gate_counts(output_circ))
