"""OpenQASM 2.0 adapters: text <-> Circuit."""
from .emit import to_openqasm2
from .parse import from_openqasm2, load_openqasm2, QasmError

__all__ = ["to_openqasm2", "from_openqasm2", "load_openqasm2", "QasmError"]
