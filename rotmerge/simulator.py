"""
Exact statevector/unitary simulator for checking optimized circuits.

RZ(k) uses the phase-gate matrix diag(1, e^{ik*pi/4}), so k and k+8 give the
same matrix and equivalence is checked exactly, not up to global phase.
"""
from __future__ import annotations
import numpy as np
from math import sqrt, pi
from .ir import Circuit, Gate, Operation

MAX_UNITARY_QUBITS = 12

# Gate matrices. Two-qubit rows/cols are indexed 2*a + b for qubits (a, b).
_SQRT2_INV = 1 / sqrt(2)
_MATRICES = {
    Gate.H: np.array([[1, 1], [1, -1]], dtype=complex) * _SQRT2_INV,
    Gate.X: np.array([[0, 1], [1, 0]], dtype=complex),
    Gate.Y: np.array([[0, -1j], [1j, 0]], dtype=complex),
    Gate.CX: np.array([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]], dtype=complex),
    Gate.CZ: np.diag([1, 1, 1, -1]).astype(complex),
    Gate.SWAP: np.array([[1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1]], dtype=complex),
}
_RZ = [np.diag([1, np.exp(1j * pi * k / 4)]) for k in range(8)]


def _apply(state: np.ndarray, op: Operation, n: int) -> np.ndarray:
    """Contract the gate tensor with the axes of op.qubits."""
    matrix = _RZ[op.k] if op.gate == Gate.RZ else _MATRICES[op.gate]
    m, front = len(op.qubits), list(range(len(op.qubits)))
    psi = np.moveaxis(state.reshape([2] * n), list(op.qubits), front)
    psi = np.tensordot(matrix.reshape([2] * (2 * m)), psi, axes=(list(range(m, 2 * m)), front))
    return np.moveaxis(psi, front, list(op.qubits)).reshape(-1)


def _check_qubits(circuit: Circuit):
    n = circuit.n_qubits
    bad = next(((q, op) for op in circuit.ops for q in op.qubits if not 0 <= q < n), None)
    if bad is not None:
        raise ValueError(f"Invalid qubit index {bad[0]} for {n}-qubit circuit in {bad[1].gate.name}")


def simulate(circuit: Circuit, basis_state: int = 0) -> np.ndarray:
    """Statevector after running circuit on computational basis state |basis_state>.

    Qubit 0 is the most significant bit of the basis index.
    """
    n = circuit.n_qubits
    if not (0 <= basis_state < 2 ** n): raise ValueError(f"Basis state {basis_state} out of range for {n} qubits")
    _check_qubits(circuit)
    state = np.zeros(2 ** n, dtype=complex)
    state[basis_state] = 1.0
    for op in circuit.ops: state = _apply(state, op, n)
    return state


def to_unitary(circuit: Circuit) -> np.ndarray:
    """Full unitary of the circuit, one column per basis state."""
    n = circuit.n_qubits
    if n > MAX_UNITARY_QUBITS: raise ValueError(f"to_unitary supports at most {MAX_UNITARY_QUBITS} qubits")
    return np.column_stack([simulate(circuit, b) for b in range(2 ** n)])


def unitaries_equal(a: np.ndarray, b: np.ndarray, tol: float = 1e-9) -> bool:
    """Entrywise equality. No global-phase freedom."""
    return a.shape == b.shape and np.allclose(a, b, atol=tol, rtol=0)


def verify(original: Circuit, optimized: Circuit, tol: float = 1e-9) -> bool | None:
    """Exact unitary equivalence of two circuits.

    Returns None when the register is too wide to build the unitary
    (more than MAX_UNITARY_QUBITS); the check is skipped, not approximated.
    """
    if original.n_qubits != optimized.n_qubits: return False
    if original.n_qubits > MAX_UNITARY_QUBITS: return None
    return unitaries_equal(to_unitary(original), to_unitary(optimized), tol)
