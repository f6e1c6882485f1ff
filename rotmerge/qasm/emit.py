"""OpenQASM export: to_openqasm2()"""
from __future__ import annotations

from ..ir import Circuit, Gate, Operation


# RZ angles with a qelib1.inc name
_NAMED_RZ = {0: 'id', 1: 't', 2: 's', 4: 'z', 6: 'sdg', 7: 'tdg'}
_NAMES = {Gate.H: 'h', Gate.X: 'x', Gate.Y: 'y', Gate.CX: 'cx', Gate.CZ: 'cz', Gate.SWAP: 'swap'}


def _format_gate(op: Operation) -> str:
    qs = ", ".join(f'q[{q}]' for q in op.qubits)
    if op.gate == Gate.RZ:
        return f'{_NAMED_RZ[op.k]} {qs};' if op.k in _NAMED_RZ else f'rz({op.k}*pi/4) {qs};'
    return f'{_NAMES[op.gate]} {qs};'


def to_openqasm2(circuit: Circuit) -> str:
    """Export circuit to OpenQASM 2.0 format. RZ is written as the equivalent phase gate."""
    lines = ['OPENQASM 2.0;', 'include "qelib1.inc";', f'qreg q[{circuit.n_qubits}];']
    lines.extend(_format_gate(op) for op in circuit.ops)
    return '\n'.join(lines)
