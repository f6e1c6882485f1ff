"""
Tests for the OpenQASM 2.0 adapters.
"""
import pytest

from rotmerge.ir import Circuit, Gate, Operation, H, X, CX, RZ
from rotmerge.qasm import to_openqasm2, from_openqasm2, load_openqasm2, QasmError


# =============================================================================
# Export
# =============================================================================

def test_export_basic():
    qasm = to_openqasm2(Circuit(2).h(0).cx(0, 1))
    assert qasm.splitlines() == ['OPENQASM 2.0;', 'include "qelib1.inc";', 'qreg q[2];',
                                 'h q[0];', 'cx q[0], q[1];']


def test_export_rotations_use_named_gates():
    qasm = to_openqasm2(Circuit(1).t(0).s(0).z(0).sdg(0).tdg(0).rz(0, k=3).rz(0, k=0))
    assert qasm.splitlines()[3:] == ['t q[0];', 's q[0];', 'z q[0];', 'sdg q[0];', 'tdg q[0];',
                                     'rz(3*pi/4) q[0];', 'id q[0];']


def test_export_then_import():
    c = Circuit(3).h(0).x(1).cx(0, 2).rz(2, k=5).y(1).cz(0, 1).swap(1, 2).t(0)
    assert from_openqasm2(to_openqasm2(c)) == c


# =============================================================================
# Import
# =============================================================================

QASM_HEADER = 'OPENQASM 2.0;\ninclude "qelib1.inc";\n'


def test_import_basic():
    c = from_openqasm2(QASM_HEADER + "qreg q[2];\nh q[0];\ncx q[0], q[1];\nt q[1];\n")
    assert c.n_qubits == 2
    assert c.ops == [H(0), CX(0, 1), RZ(1, 1)]


@pytest.mark.parametrize("stmt,k", [
    ("rz(pi/2) q[0];", 2),
    ("rz(-pi/4) q[0];", 7),
    ("u1(3*pi/4) q[0];", 3),
    ("p(pi) q[0];", 4),
    ("rz(2*pi) q[0];", 0),
    ("rz(0.7853981633974483) q[0];", 1),
    ("rz(-(pi/2 + pi/4)) q[0];", 5),
])
def test_import_angles(stmt, k):
    assert from_openqasm2(QASM_HEADER + "qreg q[1];\n" + stmt).ops == [RZ(k, 0)]


def test_import_multiple_registers():
    c = from_openqasm2(QASM_HEADER + "qreg a[2];\nqreg b[1];\ncx a[1], b[0];\nx b[0];")
    assert c.n_qubits == 3
    assert c.ops == [CX(1, 2), X(2)]


def test_import_ignores_creg_barrier_comments():
    src = QASM_HEADER + "qreg q[2];\ncreg c[2];\n// a comment\nh q[0];\nbarrier q[0], q[1];\nsdg q[1];"
    assert from_openqasm2(src).ops == [H(0), RZ(6, 1)]


def test_import_foreign_gates():
    c = from_openqasm2(QASM_HEADER + "qreg q[2];\ncz q[0], q[1];\nswap q[0], q[1];\ny q[1];")
    assert [op.gate for op in c.ops] == [Gate.CZ, Gate.SWAP, Gate.Y]


def test_load_file(tmp_path):
    path = tmp_path / "c.qasm"
    path.write_text(QASM_HEADER + "qreg q[1];\nh q[0];\n", encoding="utf-8")
    assert load_openqasm2(path).ops == [H(0)]


# =============================================================================
# Import Errors
# =============================================================================

@pytest.mark.parametrize("body,match", [
    ("qreg q[1];\nrz(0.3) q[0];", "multiple of pi/4"),
    ("qreg q[1];\nrz(pi/0) q[0];", "finite"),
    ("qreg q[3];\nccx q[0], q[1], q[2];", "Unsupported gate"),
    ("qreg q[1];\nh r[0];", "Undeclared"),
    ("qreg q[1];\nh q[1];", "out of range"),
    ("qreg q[2];\nh q[0], q[1];", "acts on 1"),
    ("qreg q[2];\ncx q[0], q[0];", "repeats"),
    ("qreg q[1];\nh(pi) q[0];", "no parameters"),
    ("qreg q[1];\nrz q[0];", "one parameter"),
    ("qreg q[1];\nqreg q[2];", "already declared"),
])
def test_import_errors(body, match):
    with pytest.raises(QasmError, match=match):
        from_openqasm2(QASM_HEADER + body)


def test_syntax_error_has_location():
    with pytest.raises(QasmError) as info:
        from_openqasm2(QASM_HEADER + "qreg q[1];\nh q[0]\nx q[0];")
    assert info.value.line >= 4
    assert "line" in str(info.value)


def test_wrong_version():
    with pytest.raises(QasmError, match="version"):
        from_openqasm2('OPENQASM 3.0;\nqreg q[1];')


def test_parsed_calls_are_hashable():
    from rotmerge.qasm.parse import _parser, _ToStatements
    statements = _ToStatements().transform(_parser().parse(QASM_HEADER + "qreg q[2];\ncx q[0], q[1];"))
    call = statements[-1]
    assert call.qargs == (("q", 0), ("q", 1))
    assert len({call, call}) == 1
