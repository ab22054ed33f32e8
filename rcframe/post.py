# rcframe/post.py
# nodal displacements, element end forces, story drift, result tables

import numpy as np
import pandas as pd
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping

from .kernel.dof import DOF_NAMES, FIXED
from .v3d.model import Frame3D, FrameModel
from .v3d.elements import (
    element_dof_map,
    element_geometry_3d,
    frame3d_local_stiffness,
    frame3d_transform,
)


@dataclass(frozen=True)
class NodeDisplacement:
    """Six displacement components of one node in global axes."""
    node_id: int
    ux: float
    uy: float
    uz: float
    rx: float
    ry: float
    rz: float

    def as_array(self) -> np.ndarray:
        return np.array([self.ux, self.uy, self.uz, self.rx, self.ry, self.rz], dtype=float)


@dataclass(frozen=True)
class StoryDrift:
    """
    Lateral displacement summary of one story in one direction.

    disp_avg / disp_max are absolute displacements of the story nodes.
    drift_* are measured against the mean displacement of the story below.
    eta = drift_max / drift_avg is the torsional irregularity ratio.
    """
    story: int
    elevation: float
    disp_avg: float
    disp_max: float
    drift_avg: float
    drift_max: float
    drift_ratio: float
    eta: float


def map_displacements(model: FrameModel, d: np.ndarray) -> Mapping[int, NodeDisplacement]:
    """
    Expand the solved vector onto the nodes.

    Free nodes read their six values at their DOF indices; fixed nodes get
    zeros. The returned mapping is read-only.
    """
    result = {}
    for node_id, node in model.nodes.items():
        if node.fixed:
            values = np.zeros(6)
        else:
            values = d[list(node.dofs)]
        result[node_id] = NodeDisplacement(node_id, *(float(v) for v in values))
    return MappingProxyType(result)


def element_displacements_global(model: FrameModel, element: Frame3D, d: np.ndarray) -> np.ndarray:
    """12 global end displacements of a member (zeros at supported ends)."""
    u = np.zeros(12, dtype=float)
    for a, dof in enumerate(element_dof_map(model, element)):
        if dof != FIXED:
            u[a] = d[dof]
    return u


def element_end_forces_local(model: FrameModel, element: Frame3D, d: np.ndarray) -> np.ndarray:
    """
    Compute member end forces in LOCAL coordinates from global displacements.

    The process:
    1. Gather the member's 12 global displacements (zeros at supports)
    2. Rotate into local axes: u_local = T · u_global
    3. f_local = k_local · u_local

    Returns:
    --------
    np.ndarray
        Shape (12,): [N_i, Vy_i, Vz_i, T_i, My_i, Mz_i,
                      N_j, Vy_j, Vz_j, T_j, My_j, Mz_j]
        Forces the nodes exert on the member ends, in local axes. For a
        member in pure tension N_i < 0 and N_j > 0.
    """
    L, cx, cy, cz = element_geometry_3d(model.nodes, element)
    T = frame3d_transform(cx, cy, cz)
    k_local = frame3d_local_stiffness(element.E, element.G, element.A,
                                      element.Iy, element.Iz, element.J, L)
    u_local = T @ element_displacements_global(model, element, d)
    return k_local @ u_local


def member_forces(model: FrameModel, d: np.ndarray) -> Dict[int, np.ndarray]:
    """element id → local end force vector, for every member."""
    return {e.id: element_end_forces_local(model, e, d) for e in model.elements}


def story_drifts(
    model: FrameModel,
    displacements: Mapping[int, NodeDisplacement],
    story_height: float,
    direction: str = 'x',
) -> List[StoryDrift]:
    """
    Per-story displacement and drift summary in one lateral direction.

    Each node's drift is |d - mean(d of the story below)|. Only numbers are
    reported; limits and irregularity checks belong to the design layer.
    """
    if direction not in ('x', 'y'):
        raise ValueError(f"direction must be 'x' or 'y', got {direction!r}")
    attr = 'u' + direction

    missing = [node_id for node_id in model.nodes if node_id not in displacements]
    if missing:
        raise ValueError(
            f"No displacements for {len(missing)} node(s), e.g. node {missing[0]}; "
            f"was the analysis successful?"
        )

    by_story: Dict[int, List[float]] = {}
    for node_id, node in model.nodes.items():
        story = int(round(node.z / story_height))
        by_story.setdefault(story, []).append(getattr(displacements[node_id], attr))

    summary = []
    for story in sorted(s for s in by_story if s >= 1):
        disp = np.array(by_story[story])
        lower = np.array(by_story.get(story - 1, [0.0]))
        drifts = np.abs(disp - lower.mean())
        drift_max = float(drifts.max())
        drift_avg = float(drifts.mean())
        summary.append(StoryDrift(
            story=story,
            elevation=story * story_height,
            disp_avg=float(np.abs(disp).mean()),
            disp_max=float(np.abs(disp).max()),
            drift_avg=drift_avg,
            drift_max=drift_max,
            drift_ratio=drift_max / story_height,
            eta=drift_max / drift_avg if drift_avg > 0 else 1.0,
        ))
    return summary


def displacement_table(model: FrameModel, displacements: Mapping[int, NodeDisplacement]) -> pd.DataFrame:
    """One row per node: coordinates, fixity and the six displacements."""
    rows = []
    for node_id in sorted(model.nodes):
        node = model.nodes[node_id]
        disp = displacements[node_id]
        row = {'node': node_id, 'x': node.x, 'y': node.y, 'z': node.z, 'fixed': node.fixed}
        row.update({name: getattr(disp, name) for name in DOF_NAMES})
        rows.append(row)
    return pd.DataFrame(rows)


def member_force_table(model: FrameModel, forces: Mapping[int, np.ndarray]) -> pd.DataFrame:
    """One row per member end with local N, Vy, Vz, T, My, Mz."""
    names = ['N', 'Vy', 'Vz', 'T', 'My', 'Mz']
    rows = []
    for e in model.elements:
        f = forces[e.id]
        for end, offset, node_id in (('i', 0, e.ni), ('j', 6, e.nj)):
            row = {'element': e.id, 'label': e.label, 'kind': e.kind, 'end': end, 'node': node_id}
            row.update(dict(zip(names, f[offset:offset + 6])))
            rows.append(row)
    return pd.DataFrame(rows)


def story_drift_table(drifts: List[StoryDrift]) -> pd.DataFrame:
    return pd.DataFrame([d.__dict__ for d in drifts])
