"""
Pytest fixtures and helpers for rotation-merging tests.
"""
import pytest
from rotmerge.ir import Circuit, CX, RZ, X
from rotmerge.simulator import to_unitary, unitaries_equal


# =============================================================================
# Helpers
# =============================================================================

def equivalent(a: Circuit, b: Circuit) -> bool:
    """Exact unitary equality (no global phase freedom)."""
    return unitaries_equal(to_unitary(a), to_unitary(b))


def with_rotation(n_qubits: int, k: int, q: int, segment) -> Circuit:
    """RZ(k, q) followed by segment, as a circuit."""
    return Circuit.from_ops(n_qubits, [RZ(k, q)] + list(segment))


# =============================================================================
# Test Circuits
# =============================================================================

@pytest.fixture
def parity_segment():
    """CX(0,2), RZ(1,0), X(2), CX(2,1), RZ(1,2) on 3 qubits."""
    return [CX(0, 2), RZ(1, 0), X(2), CX(2, 1), RZ(1, 2)]


@pytest.fixture
def separated_t_pair():
    """Two RZ(1,1) separated by CX(0,1) RZ(4,1) CX(0,1) RZ(4,0)."""
    return Circuit(2).rz(1, k=1).cx(0, 1).rz(1, k=4).cx(0, 1).rz(0, k=4).rz(1, k=1).cx(1, 0)


@pytest.fixture
def cnot_swap():
    """Three CX gates swapping qubits 0 and 1."""
    return [CX(0, 1), CX(1, 0), CX(0, 1)]
