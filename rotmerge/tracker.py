"""
Symbolic classical-state tracking.

Contains:
    - LiveQubits: qubits that belong to an extracted subcircuit
    - Blacklist: qubits whose classical value is no longer tracked
    - ClassicalState: qubit -> parity set (XOR of input qubit values)

LiveQubits and Blacklist share a representation but are distinct types, so a
live set can never be passed where a blacklist is expected. The only place the
two meet is LiveQubits.exhausted_by().
"""
from __future__ import annotations


class _QubitSet:
    __slots__ = ('_qubits',)

    def __init__(self, qubits=()):
        self._qubits: set[int] = set(qubits)

    def __contains__(self, q: int) -> bool: return q in self._qubits
    def __iter__(self): return iter(sorted(self._qubits))
    def __len__(self) -> int: return len(self._qubits)
    def __repr__(self): return f"{type(self).__name__}({sorted(self._qubits)})"

    def __eq__(self, other):
        return type(other) is type(self) and self._qubits == other._qubits

    def add(self, q: int):
        self._qubits.add(q)

    def touches(self, qubits) -> bool:
        return any(q in self._qubits for q in qubits)

    def copy(self):
        return type(self)(self._qubits)


class LiveQubits(_QubitSet):
    """Qubits currently considered part of an extracted subcircuit."""

    def exhausted_by(self, blacklist: Blacklist) -> bool:
        """True once every live qubit is blacklisted (nothing classical left)."""
        return self._qubits == blacklist._qubits


class Blacklist(_QubitSet):
    """Qubits whose classical tracking has been abandoned."""


class ClassicalState:
    """
    Parity sets for the qubits touched by one merge search.

    A qubit with no entry holds its own input value, parity {q}. All reads
    go through parity(); writes through xor_into() and forget().
    """

    def __init__(self, parities: dict[int, frozenset[int]] | None = None):
        self._parity: dict[int, frozenset[int]] = dict(parities or {})

    def parity(self, q: int) -> frozenset[int]:
        """Current parity set of q, defaulting to {q}."""
        return self._parity.get(q, frozenset((q,)))

    def xor_into(self, c: int, t: int):
        """CNOT(c, t): t now holds c XOR t."""
        s = self.parity(c) ^ self.parity(t)
        if s == frozenset((t,)): self._parity.pop(t, None)
        else: self._parity[t] = s

    def forget(self, q: int):
        """Drop q's entry (q has just been blacklisted)."""
        self._parity.pop(q, None)

    def tracked(self) -> dict[int, frozenset[int]]:
        """Non-default entries."""
        return dict(self._parity)

    def copy(self) -> ClassicalState:
        return ClassicalState(self._parity)

    def __repr__(self):
        return "ClassicalState({" + ", ".join(f"{q}: {sorted(s)}" for q, s in sorted(self._parity.items())) + "})"
