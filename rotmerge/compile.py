"""
Main optimization entry point.

Pipeline:
1. forward: merge each rotation with a later partner, result placed early
2. backward: the same scan over the inverted circuit, catching pairs whose
   first rotation could not see past a blocking gate

optimize() runs both and optionally reports/verifies. The pass itself is total
on well-typed input and never raises.
"""

from .ir import Circuit
from .passes.merge_rotations import merge_forward, merge_backward
from .report import collect_metrics, build_report


def optimize(circuit: Circuit, verbosity: int = 0, cache: dict | None = None,
             verify: bool = False, backward: bool = True) -> Circuit:
    """
    Merge z rotations acting on identical classical parities.

    Args:
        circuit: Circuit over H, X, CX, RZ (other gates pass through untouched)
        verbosity: 0=silent, 1=summary, 2=per-pass table and gate counts, 3=also op lists
        cache: Optional dict for caching results by circuit structure
        verify: If True, check exact unitary equivalence of input and output
            (skipped with a warning above 12 qubits)
        backward: If False, run the forward pass only
    """
    if cache is not None:
        key = (circuit._structure_key(), backward)
        if key in cache:
            return cache[key].copy()
    stages = [] if verbosity > 0 else None

    def track(c: Circuit, name: str) -> Circuit:
        if stages is not None: stages.append(collect_metrics(c, name))
        return c

    track(circuit, "input")
    result = track(Circuit.from_ops(circuit.n_qubits, merge_forward(circuit.ops)), "forward")
    if backward:
        result = track(Circuit.from_ops(circuit.n_qubits, merge_backward(result.ops)), "backward")

    verified = None
    if verify:
        import warnings
        from .simulator import verify as _verify, MAX_UNITARY_QUBITS
        verified = _verify(circuit, result)
        if verified is None:
            warnings.warn(f"Equivalence check skipped: more than {MAX_UNITARY_QUBITS} qubits")
        elif not verified:
            warnings.warn("Optimized circuit failed equivalence check")

    if verbosity > 0:
        report = build_report(circuit, result, stages)
        report.verified = verified
        print(report.to_text(verbosity))

    if cache is not None:
        cache[key] = result.copy()

    return result
