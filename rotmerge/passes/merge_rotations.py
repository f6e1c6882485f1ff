"""
Rotation merging via classical parity tracking.

Contains:
    - find_merge(): Search a segment for an RZ acting on the same parity as a qubit
    - combine_rotations(): Sum two eighth-turn angles into 0 or 1 RZ
    - merge_at_beginning() / merge_at_end(): Splice the combined rotation in
    - merge_rotations(): Forward pass + mirrored backward pass

On a basis input |x>, a qubit whose value is x_a ^ x_b ^ ... (its parity set)
picks up the phase e^{ik*pi/4 * parity} from RZ(k). Two rotations whose qubits
hold the same parity at their respective points therefore contribute one phase
with summed angle, wherever they sit in the circuit. H ends tracking on its
qubit; anything that is not H, CX or RZ ends the search.
"""
from __future__ import annotations

from typing import Callable

from ..ir import Circuit, Operation, Gate, RZ, invert_ops
from ..tracker import Blacklist, ClassicalState
from .subcircuit import extract_subcircuit

Match = tuple[list[Operation], int, int, list[Operation]]  # (before, k, qubit, after)
Merger = Callable[[list[Operation], int, int], "list[Operation] | None"]


def find_merge(segment: list[Operation], q: int, blacklist: Blacklist | None = None,
               state: ClassicalState | None = None) -> Match | None:
    """Find the first RZ in segment whose qubit holds exactly the parity {q}.

    Returns (before, k, q', after) with segment == before + [RZ(k, q')] + after,
    or None. blacklist and state are copied, never mutated.
    """
    blacklist = blacklist.copy() if blacklist is not None else Blacklist()
    state = state.copy() if state is not None else ClassicalState()
    target = frozenset((q,))
    for i, op in enumerate(segment):
        if op.gate == Gate.H:
            blacklist.add(op.qubits[0])
            state.forget(op.qubits[0])
        elif op.gate == Gate.RZ:
            q2 = op.qubits[0]
            if q2 not in blacklist and state.parity(q2) == target:
                return list(segment[:i]), op.k, q2, list(segment[i + 1:])
        elif op.gate == Gate.CX:
            c, t = op.qubits
            if c in blacklist or t in blacklist:
                if c in blacklist:
                    blacklist.add(t)
                    state.forget(t)
            else:
                state.xor_into(c, t)
        else:
            return None
    return None


def combine_rotations(k1: int, k2: int, q: int) -> list[Operation]:
    """RZ(k1) then RZ(k2) on q as a list of 0 or 1 gates."""
    s = (k1 + k2) % 8
    return [RZ(s, q)] if s else []


def merge_at_beginning(segment: list[Operation], k: int, q: int) -> list[Operation] | None:
    """Fold RZ(k, q), sitting just before segment, with its match; result leads the segment."""
    m = find_merge(segment, q)
    if m is None: return None
    before, k2, _, after = m
    return combine_rotations(k, k2, q) + before + after


def merge_at_end(segment: list[Operation], k: int, q: int) -> list[Operation] | None:
    """Fold RZ(k, q), sitting just before segment, into its match's position."""
    m = find_merge(segment, q)
    if m is None: return None
    before, k2, q2, after = m
    return before + combine_rotations(k, k2, q2) + after


def merge_forward(ops: list[Operation], merge: Merger = merge_at_beginning) -> list[Operation]:
    """Left-to-right scan merging each RZ with a later partner.

    Each step either advances past a gate or replaces the unscanned suffix with
    a strictly shorter one, so len(ops) steps are always enough.
    """
    out: list[Operation] = []
    rest, i = list(ops), 0  # rest[i:] is unscanned
    for _ in range(len(ops)):
        if i == len(rest): break
        op = rest[i]
        i += 1
        if op.gate == Gate.RZ:
            head, segment, tail = extract_subcircuit(rest[i:], op.qubits[0])
            merged = merge(segment, op.k, op.qubits[0])
            if merged is not None:
                # Rescan from the splice: the new rotation may merge again
                rest, i = head + merged + tail, 0
                continue
        out.append(op)
    return out + rest[i:]


def merge_backward(ops: list[Operation]) -> list[Operation]:
    """Mirror of merge_forward: scans right to left, merging each RZ into an earlier partner."""
    return invert_ops(merge_forward(invert_ops(ops), merge_at_end))


def merge_rotations(circuit: Circuit, backward: bool = True) -> Circuit:
    """Merge rotations that act on identical parities. Never increases gate count."""
    ops = merge_forward(circuit.ops)
    if backward: ops = merge_backward(ops)
    return Circuit.from_ops(circuit.n_qubits, ops)
