"""
rotmerge - rotation merging for {H, X, CNOT, Rz} circuits via classical parity tracking
"""

from .ir import Circuit, Gate, Operation, H, X, CX, RZ, CZ, invert_ops
from .compile import optimize
from .passes.subcircuit import extract_subcircuit
from .passes.merge_rotations import (
    find_merge, combine_rotations, merge_at_beginning, merge_at_end,
    merge_forward, merge_backward, merge_rotations,
)
from .tracker import LiveQubits, Blacklist, ClassicalState
from .simulator import simulate, to_unitary, unitaries_equal, verify
from .report import gate_counts, rotation_counts, MergeReport
from .qasm import to_openqasm2, from_openqasm2, load_openqasm2, QasmError

__all__ = [
    # Core IR
    "Circuit",
    "Gate",
    "Operation",
    "H",
    "X",
    "CX",
    "RZ",
    "CZ",
    "invert_ops",
    # Optimization
    "optimize",
    "merge_rotations",
    "merge_forward",
    "merge_backward",
    "merge_at_beginning",
    "merge_at_end",
    "find_merge",
    "combine_rotations",
    "extract_subcircuit",
    # Tracking
    "LiveQubits",
    "Blacklist",
    "ClassicalState",
    # Simulation
    "simulate",
    "to_unitary",
    "unitaries_equal",
    "verify",
    # Reporting
    "gate_counts",
    "rotation_counts",
    "MergeReport",
    # OpenQASM
    "to_openqasm2",
    "from_openqasm2",
    "load_openqasm2",
    "QasmError",
]
