"""
Rotation merging examples.

Run: python examples/merge_demo.py
"""
from rotmerge import Circuit, optimize
from rotmerge.qasm import to_openqasm2, from_openqasm2

# =============================================================================
# Example 1: T gates separated by CNOTs
# =============================================================================
print("=== Separated T pair ===")
c = Circuit(2).t(1).cx(0, 1).rz(1, k=4).cx(0, 1).z(0).t(1).cx(1, 0)
print(f"Before: {c.ops}")
print(f"After:  {optimize(c).ops}")

# =============================================================================
# Example 2: Rotations on a computed parity
# =============================================================================
print("\n=== Parity through a CNOT ladder ===")
ladder = Circuit(3).t(0).cx(0, 1).cx(1, 2).cx(1, 2).cx(0, 1).tdg(0)
optimize(ladder, verbosity=2, verify=True)

# =============================================================================
# Example 3: OpenQASM in and out
# =============================================================================
print("\n=== OpenQASM ===")
src = """OPENQASM 2.0;
include "qelib1.inc";
qreg q[2];
t q[0];
cx q[0], q[1];
h q[1];
t q[0];
"""
print(to_openqasm2(optimize(from_openqasm2(src))))
