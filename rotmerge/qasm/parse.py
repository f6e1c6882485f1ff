"""OpenQASM 2.0 reader for the rotation-merging gate vocabulary.

Accepts qreg/creg declarations, the qelib1.inc gates that map onto H, X, Y,
CX, CZ, SWAP and RZ, and barriers (dropped). Diagonal single-qubit gates
(z, s, sdg, t, tdg, rz, u1, p) become RZ with the angle in eighth-turns; their
global phase is dropped. Angles must be multiples of pi/4.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from lark import Lark, Transformer, v_args
from lark.exceptions import LarkError, UnexpectedInput

from ..ir import Circuit, Gate, Operation

__all__ = ["QasmError", "from_openqasm2", "load_openqasm2"]

_GRAMMAR = r"""
start: header include* _stmt*
header: "OPENQASM" NUMBER ";"
include: "include" ESCAPED_STRING ";"
_stmt: qreg | creg | barrier | gate_call
qreg: "qreg" NAME "[" INT "]" ";"
creg: "creg" NAME "[" INT "]" ";"
barrier: "barrier" qargs ";"
gate_call: NAME ("(" expr ")")? qargs ";"
qargs: qarg ("," qarg)*
qarg: NAME "[" INT "]"

?expr: term
     | expr "+" term -> add
     | expr "-" term -> sub
?term: factor
     | term "*" factor -> mul
     | term "/" factor -> div
?factor: atom
       | "-" factor -> neg
       | "+" factor
?atom: NUMBER -> number
     | "pi" -> pi
     | "(" expr ")"

NAME: /[a-z][A-Za-z0-9_]*/
COMMENT: "//" /[^\n]*/

%import common.ESCAPED_STRING
%import common.INT
%import common.NUMBER
%import common.WS
%ignore WS
%ignore COMMENT
"""

_FIXED = {'h': Gate.H, 'x': Gate.X, 'y': Gate.Y, 'cx': Gate.CX, 'cz': Gate.CZ, 'swap': Gate.SWAP}
_PHASE = {'id': 0, 'z': 4, 's': 2, 'sdg': 6, 't': 1, 'tdg': 7}
_ROTATIONS = frozenset({'rz', 'u1', 'p'})


@dataclass
class QasmError(Exception):
    """Malformed or unsupported OpenQASM input, with a one-based source location."""
    message: str
    line: int = 1
    col: int = 1

    def __str__(self) -> str:
        return f"line {self.line}, col {self.col}: {self.message}"


@dataclass(frozen=True)
class _Decl:
    kind: str
    name: str
    size: int
    line: int
    col: int


@dataclass(frozen=True)
class _Call:
    name: str
    angle: float | None
    qargs: tuple[tuple[str, int], ...]
    line: int
    col: int


class _ToStatements(Transformer):
    """Parse tree -> flat list of header/declaration/call records."""

    def start(self, children): return [c for c in children if c is not None]
    def include(self, children): return None
    def barrier(self, children): return None

    @v_args(meta=True)
    def header(self, meta, children): return ("header", str(children[0]), meta.line, meta.column)

    @v_args(meta=True)
    def qreg(self, meta, children): return _Decl("qreg", str(children[0]), int(children[1]), meta.line, meta.column)

    @v_args(meta=True)
    def creg(self, meta, children): return _Decl("creg", str(children[0]), int(children[1]), meta.line, meta.column)

    @v_args(meta=True)
    def gate_call(self, meta, children):
        angle = children[1] if len(children) == 3 else None
        return _Call(str(children[0]), angle, children[-1], meta.line, meta.column)

    def qargs(self, children): return tuple(children)
    def qarg(self, children): return (str(children[0]), int(children[1]))

    def number(self, children): return float(children[0])
    def pi(self, children): return math.pi
    def add(self, children): return children[0] + children[1]
    def sub(self, children): return children[0] - children[1]
    def mul(self, children): return children[0] * children[1]
    def div(self, children): return children[0] / children[1] if children[1] else math.nan
    def neg(self, children): return -children[0]


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(_GRAMMAR, start="start", parser="lalr", propagate_positions=True)


def _eighth_turns(angle: float, call: _Call) -> int:
    if not math.isfinite(angle):
        raise QasmError(f"Angle of '{call.name}' is not a finite number", call.line, call.col)
    k = angle / (math.pi / 4)
    r = round(k)
    if abs(k - r) > 1e-9:
        raise QasmError(f"Angle {angle!r} of '{call.name}' is not a multiple of pi/4", call.line, call.col)
    return r


def _to_operation(call: _Call, qubits: tuple[int, ...]) -> Operation:
    name = call.name
    if name in _FIXED:
        gate, k = _FIXED[name], 0
    elif name in _PHASE or name in _ROTATIONS:
        gate = Gate.RZ
        k = _PHASE[name] if name in _PHASE else None
    else:
        raise QasmError(f"Unsupported gate '{name}'", call.line, call.col)
    if (call.angle is not None) != (name in _ROTATIONS):
        raise QasmError(f"Gate '{name}' takes {'one parameter' if name in _ROTATIONS else 'no parameters'}",
                        call.line, call.col)
    if k is None: k = _eighth_turns(call.angle, call)
    if len(qubits) != gate.n_qubits:
        raise QasmError(f"Gate '{name}' acts on {gate.n_qubits} qubit(s), got {len(qubits)}", call.line, call.col)
    if len(set(qubits)) != len(qubits):
        raise QasmError(f"Gate '{name}' repeats a qubit argument", call.line, call.col)
    return Operation(gate, qubits, k)


def from_openqasm2(text: str) -> Circuit:
    """Parse OpenQASM 2.0 source into a Circuit. Multiple qregs are laid out in declaration order."""
    try:
        tree = _parser().parse(text)
    except UnexpectedInput as exc:
        line = max(getattr(exc, "line", 1) or 1, 1)
        column = max(getattr(exc, "column", 1) or 1, 1)
        raise QasmError(f"Failed to parse OpenQASM source ({type(exc).__name__})", line, column) from exc
    except LarkError as exc:
        raise QasmError("Failed to parse OpenQASM source.") from exc

    statements = _ToStatements().transform(tree)
    _, version, line, col = statements[0]
    if version not in ("2", "2.0"):
        raise QasmError(f"Unsupported OpenQASM version {version}", line, col)

    offsets: dict[str, tuple[int, int]] = {}
    cregs: set[str] = set()
    n_qubits, ops = 0, []
    for stmt in statements[1:]:
        if isinstance(stmt, _Decl):
            if stmt.name in offsets or stmt.name in cregs:
                raise QasmError(f"Register '{stmt.name}' already declared", stmt.line, stmt.col)
            if stmt.kind == "creg":
                cregs.add(stmt.name)
            else:
                offsets[stmt.name] = (n_qubits, stmt.size)
                n_qubits += stmt.size
            continue
        qubits = []
        for reg, i in stmt.qargs:
            if reg not in offsets:
                raise QasmError(f"Undeclared quantum register '{reg}'", stmt.line, stmt.col)
            start, size = offsets[reg]
            if not (0 <= i < size):
                raise QasmError(f"Index {i} out of range for {reg}[{size}]", stmt.line, stmt.col)
            qubits.append(start + i)
        ops.append(_to_operation(stmt, tuple(qubits)))
    return Circuit.from_ops(n_qubits, ops)


def load_openqasm2(path: str | Path) -> Circuit:
    """Read and parse an OpenQASM 2.0 file."""
    return from_openqasm2(Path(path).read_text(encoding="utf-8"))
