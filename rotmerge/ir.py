"""
Core IR types - the single representation used throughout.

Contains:
    - Gate: Enum of supported gates (H, X, CX, RZ + opaque foreign gates)
    - Operation: Frozen dataclass (gate, qubits, k)
    - Circuit: Lazy builder, just appends Operations

Rotation angles are integers in eighth-turns: RZ with k means a rotation by
k*pi/4, with the phase-gate matrix diag(1, e^{ik*pi/4}). k is taken modulo 8.
"""
from __future__ import annotations

from enum import Enum, auto
from dataclasses import dataclass


class Gate(Enum):
    """Gate vocabulary. The merge pass understands H, X, CX and RZ."""
    H = auto()
    X = auto()
    CX = auto()   # CNOT(control, target)
    RZ = auto()   # k * pi/4 about z

    # Foreign gates: carried through untouched, opaque to the pass
    Y = auto()
    CZ = auto()
    SWAP = auto()

    @property
    def n_qubits(self) -> int: return 2 if self in (Gate.CX, Gate.CZ, Gate.SWAP) else 1


MERGE_GATES = frozenset({Gate.H, Gate.X, Gate.CX, Gate.RZ})
_SELF_INVERSE = frozenset({Gate.H, Gate.X, Gate.CX, Gate.Y, Gate.CZ, Gate.SWAP})


@dataclass(frozen=True)
class Operation:
    gate: Gate
    qubits: tuple[int, ...]
    k: int = 0  # eighth-turns, RZ only

    def __post_init__(self):
        if self.gate == Gate.RZ:
            object.__setattr__(self, 'k', self.k % 8)
        elif self.k:
            raise ValueError(f"{self.gate.name} takes no angle (got k={self.k})")

    def __repr__(self):
        q = ",".join(map(str, self.qubits))
        return f"RZ({self.k},{q})" if self.gate == Gate.RZ else f"{self.gate.name}({q})"


def H(q: int) -> Operation: return Operation(Gate.H, (q,))
def X(q: int) -> Operation: return Operation(Gate.X, (q,))
def CX(c: int, t: int) -> Operation: return Operation(Gate.CX, (c, t))
def RZ(k: int, q: int) -> Operation: return Operation(Gate.RZ, (q,), k)
def CZ(a: int, b: int) -> Operation: return Operation(Gate.CZ, (min(a, b), max(a, b)))


def invert_ops(ops: list[Operation]) -> list[Operation]:
    """Adjoint of a gate list: reverse order, negate every rotation."""
    out = []
    for op in reversed(ops):
        if op.gate == Gate.RZ: out.append(Operation(Gate.RZ, op.qubits, -op.k))
        elif op.gate in _SELF_INVERSE: out.append(op)
        else: raise ValueError(f"No inverse known for {op.gate.name}")
    return out


# Circuit - lazy list of operations
class Circuit:
    """Lazy circuit builder. Adds operations to a list."""

    def __init__(self, n_qubits: int):
        self.n_qubits = n_qubits
        self.ops: list[Operation] = []

    @classmethod
    def from_ops(cls, n_qubits: int, ops) -> "Circuit":
        c = cls(n_qubits)
        c.ops = list(ops)
        return c

    def _add(self, gate: Gate, qubits: tuple, k: int = 0) -> "Circuit":
        self.ops.append(Operation(gate, qubits, k))
        return self

    def h(self, q: int) -> "Circuit": return self._add(Gate.H, (q,))
    def x(self, q: int) -> "Circuit": return self._add(Gate.X, (q,))
    def cx(self, c: int, t: int) -> "Circuit": return self._add(Gate.CX, (c, t))
    def rz(self, q: int, *, k: int) -> "Circuit": return self._add(Gate.RZ, (q,), k)

    # Named diagonal Cliffords / T are RZ shorthands
    def t(self, q: int) -> "Circuit": return self.rz(q, k=1)
    def s(self, q: int) -> "Circuit": return self.rz(q, k=2)
    def z(self, q: int) -> "Circuit": return self.rz(q, k=4)
    def sdg(self, q: int) -> "Circuit": return self.rz(q, k=6)
    def tdg(self, q: int) -> "Circuit": return self.rz(q, k=7)

    def y(self, q: int) -> "Circuit": return self._add(Gate.Y, (q,))
    def cz(self, a: int, b: int) -> "Circuit": return self._add(Gate.CZ, (min(a, b), max(a, b)))  # Canonicalize
    def swap(self, a: int, b: int) -> "Circuit": return self._add(Gate.SWAP, (min(a, b), max(a, b)))  # Canonicalize

    def __len__(self) -> int: return len(self.ops)

    def __eq__(self, other):
        return isinstance(other, Circuit) and self.n_qubits == other.n_qubits and self.ops == other.ops

    def __repr__(self): return f"Circuit({self.n_qubits}, {self.ops!r})"

    def copy(self) -> "Circuit": return Circuit.from_ops(self.n_qubits, self.ops)

    def _structure_key(self) -> tuple:
        """Hashable key capturing the full gate list."""
        return (self.n_qubits, tuple(self.ops))

    def inverse(self) -> "Circuit":
        """Return the adjoint (inverse) circuit."""
        return Circuit.from_ops(self.n_qubits, invert_ops(self.ops))

    def to_unitary(self):
        from .simulator import to_unitary
        return to_unitary(self)
