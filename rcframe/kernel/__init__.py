# rcframe/kernel - Dimension-agnostic structural analysis core
"""
KERNEL: THE NUMERICAL FOUNDATION
================================

Assembly and solving don't care what kind of member produced a stiffness
matrix. They only need:
- A table mapping each node to its global equation indices (FIXED for supports)
- Element stiffness matrices in global coordinates
- A load vector

The ELEMENT implementations (v3d.elements) know about geometry; the kernel
plumbing here is pure linear algebra.
"""

from .dof import DOFManager, FIXED, DOF_PER_NODE, DOF_NAMES
from .errors import ValidationError, SolverError, SingularSystemError, NumericFailure
from .solve import solve_linear

__all__ = [
    'DOFManager', 'FIXED', 'DOF_PER_NODE', 'DOF_NAMES',
    'ValidationError', 'SolverError', 'SingularSystemError', 'NumericFailure',
    'solve_linear',
]
