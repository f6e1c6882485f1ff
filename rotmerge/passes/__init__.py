"""
Optimization passes.

Modules:
    - subcircuit: Extract the gates relevant to one qubit's classical value
    - merge_rotations: Parity-based RZ merging (forward + backward pass)
"""
from .subcircuit import extract_subcircuit
from .merge_rotations import (
    find_merge, combine_rotations, merge_at_beginning, merge_at_end,
    merge_forward, merge_backward, merge_rotations,
)
