# rcframe/kernel/solve.py
"""Dense linear solve of the reduced system with mechanism and NaN detection."""

import logging

import numpy as np
import scipy.linalg

from .errors import NumericFailure, SingularSystemError

_logger = logging.getLogger(__name__)


def solve_linear(
    K: np.ndarray,
    F: np.ndarray,
    cond_limit: float = 1e12,
    zero_pivot_tol: float = 1e-14,
) -> np.ndarray:
    """
    Solve K·d = F where supports were already eliminated from K.

    Args:
        K: Reduced global stiffness matrix (ndof x ndof), symmetric
        F: Reduced load vector (ndof,)
        cond_limit: Max condition number before raising SingularSystemError
        zero_pivot_tol: Relative size below which a diagonal entry counts as zero

    Returns:
        d: Displacement vector (ndof,)

    Raises:
        NumericFailure: If K, F or d contain NaN/Inf
        SingularSystemError: If the structure is a mechanism (a DOF with no
            stiffness, cond > cond_limit, or K not positive definite)
    """
    ndof = K.shape[0]
    if K.shape != (ndof, ndof) or F.shape != (ndof,):
        raise ValueError(f"Shape mismatch: K {K.shape}, F {F.shape}")

    if ndof == 0:
        return np.zeros(0, dtype=float)

    if not np.all(np.isfinite(K)):
        raise NumericFailure("Stiffness matrix contains non-finite entries.")
    if not np.all(np.isfinite(F)):
        raise NumericFailure("Load vector contains non-finite entries.")

    # A DOF without any stiffness (isolated node, released axis) is a zero row
    diag = np.abs(np.diag(K))
    scale = diag.max()
    dead = np.flatnonzero(diag <= zero_pivot_tol * scale) if scale > 0 else np.arange(ndof)
    if dead.size:
        raise SingularSystemError(
            f"DOF {dead[0]} has no stiffness ({dead.size} such DOFs). "
            f"Check for unconnected nodes.",
            dof=int(dead[0]),
        )

    cond = np.linalg.cond(K)
    _logger.debug(f"Solving {ndof} equations, cond(K)={cond:.2e}")
    if not np.isfinite(cond) or cond > cond_limit:
        raise SingularSystemError(
            f"Unstable system (cond={cond:.2e}). Check supports. Need cond < {cond_limit:.0e}.",
            cond=float(cond),
        )

    try:
        d = scipy.linalg.solve(K, F, assume_a='pos', check_finite=False)
    except np.linalg.LinAlgError as e:
        raise SingularSystemError(f"Stiffness matrix is not positive definite: {e}", cond=float(cond))

    if not np.all(np.isfinite(d)):
        raise NumericFailure("Solved displacements contain non-finite values.")

    return d
