"""
Subcircuit extraction around one qubit.

Splits a gate list into (head, segment, tail): segment is the run of H/X/CX/RZ
gates reachable from the starting qubit through CX interactions, head collects
gates skipped on the way (none of them touch a live qubit, so they commute to
the front), tail is everything from the stopping point on.

Stops when every live qubit is blacklisted, at the first foreign gate touching
a live qubit, or when no remaining gate touches a live qubit.
"""
from __future__ import annotations

from ..ir import Operation, Gate
from ..tracker import LiveQubits, Blacklist


def extract_subcircuit(ops: list[Operation], q: int) -> tuple[list[Operation], list[Operation], list[Operation]]:
    """Return (head, segment, tail) for qubit q. head never touches q."""
    head, segment = [], []
    live, blacklist = LiveQubits((q,)), Blacklist()
    i, n = 0, len(ops)
    for _ in range(n):
        if live.exhausted_by(blacklist): break
        # Next gate touching a live qubit; ops[i:j] are skipped
        j = i
        while j < n and not live.touches(ops[j].qubits): j += 1
        if j == n: break
        op = ops[j]
        if op.gate == Gate.H:
            blacklist.add(op.qubits[0])
        elif op.gate == Gate.CX:
            c, t = op.qubits
            live.add(c); live.add(t)
            if c in blacklist: blacklist.add(t)
        elif op.gate not in (Gate.X, Gate.RZ):
            break
        head.extend(ops[i:j])
        segment.append(op)
        i = j + 1
    return head, segment, list(ops[i:])
