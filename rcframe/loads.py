# rcframe/loads.py
"""
LOADS: Nodal Forces and Moments → Global Load Vector
====================================================

The solver does not compute loads itself. It receives externally computed
nodal values, typically story shears from an equivalent seismic lateral
load distribution, and maps them onto the free-DOF load vector.

A load component sitting on a fixed node has nowhere to go: that DOF was
eliminated from the system. Such entries are skipped with a warning.
"""

import logging
from dataclasses import dataclass
from numbers import Integral
from typing import Iterable, List, Sequence, Union

import numpy as np

from .kernel.assemble import assemble_global_F
from .kernel.dof import DOF_PER_NODE, FIXED
from .kernel.errors import ValidationError
from .v3d.model import FrameModel, node_dof_array

_logger = logging.getLogger(__name__)

LOAD_COMPONENTS = ('fx', 'fy', 'fz', 'mx', 'my', 'mz')


@dataclass(frozen=True)
class NodalLoad:
    """
    A single force or moment component at a node.

    Parameters:
    -----------
    node_id : int
        Node the load acts on
    component : str or int
        'fx', 'fy', 'fz', 'mx', 'my', 'mz' (or 0..5 in that order)
    value : float
        Magnitude in model units (kN, kN·m for the building models)

    Example:
    --------
    >>> NodalLoad(node_id=12, component='fx', value=150.0)
    """
    node_id: int
    component: Union[str, int]
    value: float

    @property
    def local_dof(self) -> int:
        if isinstance(self.component, str):
            key = self.component.lower()
            if key not in LOAD_COMPONENTS:
                raise ValidationError(f"Unknown load component {self.component!r}")
            return LOAD_COMPONENTS.index(key)
        if isinstance(self.component, bool) or not isinstance(self.component, Integral):
            raise ValidationError(f"Load component must be a name or an integer index, got {self.component!r}")
        if not 0 <= int(self.component) < DOF_PER_NODE:
            raise ValidationError(f"Load component index {self.component} out of range")
        return int(self.component)


def assemble_nodal_loads(model: FrameModel, loads: Iterable[NodalLoad]) -> np.ndarray:
    """
    Build the free-DOF load vector F from nodal loads.

    Entries on the same DOF add up. Loads on fixed nodes are ignored.

    Raises:
    -------
    ValidationError
        Unknown node, unknown component or non-finite value
    """
    contributions = []
    skipped = 0
    for load in loads:
        if load.node_id not in model.nodes:
            raise ValidationError(f"Load references missing node {load.node_id}")
        if not np.isfinite(load.value):
            raise ValidationError(f"Load on node {load.node_id} is not finite: {load.value}")

        dof = node_dof_array(model.nodes[load.node_id])[load.local_dof]
        if dof == FIXED:
            skipped += 1
            continue
        contributions.append(([dof], np.array([load.value], dtype=float)))

    if skipped:
        _logger.warning(f"Ignored {skipped} load component(s) applied to fixed nodes")

    return assemble_global_F(model.ndof, contributions)


def story_lateral_loads(
    model: FrameModel,
    story_forces: Sequence[float],
    story_height: float,
    direction: str = 'x',
) -> List[NodalLoad]:
    """
    Spread story lateral forces equally over the nodes of each story.

    Parameters:
    -----------
    model : FrameModel
        Building model (story i at z = i × story_height)
    story_forces : Sequence[float]
        Total lateral force per story; index 0 is story 1 (first floor)
    story_height : float
        Story height used to find each node's story
    direction : str
        'x' or 'y'

    Returns:
    --------
    List[NodalLoad]
        One load per free node on a loaded story

    Example:
    --------
    >>> loads = story_lateral_loads(model, [120.0, 240.0], story_height=3.0)
    >>> F = assemble_nodal_loads(model, loads)
    """
    if direction not in ('x', 'y'):
        raise ValidationError(f"Lateral load direction must be 'x' or 'y', got {direction!r}")
    component = 'f' + direction

    by_story = {}
    for node in model.free_nodes:
        story = int(round(node.z / story_height))
        by_story.setdefault(story, []).append(node.id)

    loads = []
    for index, total in enumerate(story_forces):
        story_nodes = by_story.get(index + 1, [])
        if not story_nodes:
            _logger.warning(f"Story {index + 1} has no free nodes; force {total} not applied")
            continue
        per_node = total / len(story_nodes)
        loads.extend(NodalLoad(nid, component, per_node) for nid in sorted(story_nodes))
    return loads
