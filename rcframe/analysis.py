# rcframe/analysis.py
"""
ANALYSIS: The Linear Static Pipeline
====================================

One call runs the whole chain for a fixed model and one load case:

    model ──► element stiffness ──► rotate to global ──► assemble K
    loads ──► load vector F
    K, F  ──► solve ──► map displacements onto nodes

Nothing is kept between calls: K, F and d are rebuilt every time, so
analyze() is a pure function of (model, loads, config).

Malformed input raises ValidationError before any matrix is allocated.
An unstable structure or NaN/Inf does NOT raise: analyze() returns an
AnalysisResult with ok=False and the SingularSystemError / NumericFailure
instance in `error`, so the design layer can decide what to do.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

import numpy as np

from .config import CONFIG, SolverConfig
from .kernel.assemble import assemble_global_K
from .kernel.errors import SolverError, ValidationError
from .kernel.solve import solve_linear
from .loads import NodalLoad, assemble_nodal_loads
from .post import NodeDisplacement, map_displacements, member_forces
from .v3d.elements import element_contributions
from .v3d.model import FrameModel

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """
    Outcome of one linear static solve.

    Attributes:
    -----------
    ok : bool
        True when displacements are available
    d : Optional[np.ndarray]
        Read-only free-DOF displacement vector (None on failure)
    displacements : Mapping[int, NodeDisplacement]
        Read-only node id → displacement record (empty on failure)
    error : Optional[SolverError]
        SingularSystemError or NumericFailure when ok is False
    """
    ok: bool
    d: Optional[np.ndarray] = None
    displacements: Mapping[int, NodeDisplacement] = field(
        default_factory=lambda: MappingProxyType({})
    )
    error: Optional[SolverError] = None

    def member_forces(self, model: FrameModel):
        """Local end forces of every member (see post.element_end_forces_local)."""
        if not self.ok:
            raise self.error
        return member_forces(model, self.d)


def check_size(model: FrameModel, config: SolverConfig) -> None:
    if model.ndof > config.max_dof:
        raise ValidationError(
            f"Model has {model.ndof} DOFs, more than max_dof={config.max_dof} "
            f"(dense K would need {8 * model.ndof**2 / 1e6:.0f} MB)"
        )
    if model.ndof > config.warn_dof:
        _logger.warning(f"Large model: {model.ndof} DOFs, dense solve may be slow")


def assemble_stiffness(model: FrameModel, elements=None) -> np.ndarray:
    """Global stiffness matrix of the free DOFs (supports eliminated)."""
    return assemble_global_K(model.ndof, element_contributions(model, elements))


def analyze(
    model: FrameModel,
    loads: Union[Iterable[NodalLoad], np.ndarray],
    config: Optional[SolverConfig] = None,
) -> AnalysisResult:
    """
    Solve the frame for one set of nodal loads.

    Parameters:
    -----------
    model : FrameModel
        Validated model (build_frame_model or make_model)
    loads : Iterable[NodalLoad] or np.ndarray
        Nodal loads, or an already assembled free-DOF load vector
    config : SolverConfig, optional
        Overrides the global CONFIG

    Returns:
    --------
    AnalysisResult
        ok=True with displacements, or ok=False with the solver error

    Raises:
    -------
    ValidationError
        Bad loads, wrong load vector size, or a model above max_dof

    Example:
    --------
    >>> result = analyze(model, [NodalLoad(5, 'fx', 10.0)])
    >>> if result.ok:
    ...     print(result.displacements[5].ux)
    """
    config = config or CONFIG
    check_size(model, config)

    if isinstance(loads, np.ndarray):
        F = np.asarray(loads, dtype=float)
        if F.shape != (model.ndof,):
            raise ValidationError(f"Load vector shape {F.shape} doesn't match {model.ndof} DOFs")
    else:
        F = assemble_nodal_loads(model, loads)

    K = assemble_stiffness(model)

    try:
        d = solve_linear(K, F, cond_limit=config.cond_limit,
                         zero_pivot_tol=config.zero_pivot_tol)
    except SolverError as e:
        _logger.warning(f"Analysis failed: {type(e).__name__}: {e}")
        return AnalysisResult(ok=False, error=e)

    d.setflags(write=False)
    _logger.info(
        f"Solved {model.ndof} DOFs, max |u| = {np.abs(d).max() if d.size else 0.0:.3e}"
    )
    return AnalysisResult(ok=True, d=d, displacements=map_displacements(model, d))
