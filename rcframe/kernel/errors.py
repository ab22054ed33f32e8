# rcframe/kernel/errors.py
"""
ERRORS: Failure Taxonomy of the Frame Solver
============================================

Three things can go wrong when analysing a frame:

    ValidationError      The model itself is malformed (missing node, zero
                         length element, overlapping DOF indices, oversized
                         model, load on an unknown node). Raised while the
                         model or load vector is being built, BEFORE any
                         matrix work.

    SingularSystemError  The model is valid but the structure is a
                         mechanism: not enough supports, a disconnected
                         part, or a free node with nothing attached to it.

    NumericFailure       NaN/Inf found in the assembled matrix, the load
                         vector or the solved displacements.

The two solver errors share the SolverError base so that the analysis
layer can turn them into an explicit failed result instead of letting them
escape to the caller.
"""


class ValidationError(ValueError):
    """Raised when a model or a load definition is malformed."""
    pass


class SolverError(RuntimeError):
    """Base class for failures detected while solving K·d = F."""
    pass


class SingularSystemError(SolverError):
    """Raised when the structure is unstable or ill-conditioned."""

    def __init__(self, message: str, dof: int = None, cond: float = None):
        super().__init__(message)
        self.dof = dof
        self.cond = cond


class NumericFailure(SolverError):
    """Raised when non-finite values show up in K, F or the solution."""
    pass
