# rcframe/v3d/elements.py
"""
3D FRAME ELEMENT: Local Stiffness and Rotation to Global Axes
=============================================================

PURPOSE:
--------
This module computes the 12×12 stiffness matrix of a prismatic 3D frame
member, first in its LOCAL axes and then rotated into the GLOBAL frame.

LOCAL STIFFNESS:
----------------
In local axes (x' along the member, y' and z' the principal section axes)
four behaviours are completely uncoupled and simply superposed:

    Axial      ux          EA/L
    Torsion    rx          GJ/L
    Bending    uy, rz      12EIz/L³, 6EIz/L², 4EIz/L, 2EIz/L
    Bending    uz, ry      12EIy/L³, 6EIy/L², 4EIy/L, 2EIy/L

The two bending blocks have the same magnitudes but MIRRORED signs on the
6EI/L² terms. A positive rz rotation lifts the member in +y, while a
positive ry rotation pushes it in -z (right-hand rule). Getting this wrong
gives a wrong-direction response for every column and beam.

TRANSFORMATION:
---------------
Direction cosines of the member axis:

    cx = Δx/L,  cy = Δy/L,  cz = Δz/L

General member (beams, inclined members), with D = √(cx² + cy²):

    R = [ cx          cy          cz ]
        [ -cy/D       cx/D        0  ]      local y: horizontal
        [ -cx·cz/D   -cy·cz/D     D  ]      local z: x' × y'

For a vertical member D → 0, so the general formula cannot be used. Above
VERTICAL_TOL we switch to a fixed convention:

    R = [ 0    0    s ]                     local x: s·Z, s = sign(cz)
        [ 0    1    0 ]                     local y: global Y
        [ -s   0    0 ]                     local z: x' × y'

R stays exactly orthogonal. This is the limit of the general formula for a
member leaning towards ±x, so the two branches meet without a jump there.
A member leaning towards ±y meets it with local y and z swapped, which only
matters when Iy != Iz.

    T = diag(R, R, R, R)        (12×12, orthogonal)
    ke_global = Tᵀ · ke_local · T
"""

import numpy as np
from typing import Mapping, Tuple

from .model import Frame3D, FrameModel, Node3D, node_dof_array
from ..kernel.dof import DOF_3D_FRAME
from ..kernel.errors import ValidationError


# |cz| above this → member treated as vertical
VERTICAL_TOL = 0.9999


def element_geometry_3d(nodes: Mapping[int, Node3D], element: Frame3D) -> Tuple[float, float, float, float]:
    """
    Compute length and direction cosines of a 3D member.

    Returns:
    --------
    Tuple[float, float, float, float]
        (L, cx, cy, cz) with cx² + cy² + cz² = 1

    Raises:
    -------
    ValidationError
        If the member has zero length
    """
    ni = nodes[element.ni]
    nj = nodes[element.nj]

    dx = nj.x - ni.x
    dy = nj.y - ni.y
    dz = nj.z - ni.z

    L = np.sqrt(dx*dx + dy*dy + dz*dz)

    if L <= 0.0:
        raise ValidationError(
            f"Element {element.id} has zero length (nodes {element.ni} and {element.nj} "
            f"at same location: ({ni.x}, {ni.y}, {ni.z}))"
        )

    return L, dx / L, dy / L, dz / L


def frame3d_local_stiffness(E: float, G: float, A: float,
                            Iy: float, Iz: float, J: float, L: float) -> np.ndarray:
    """
    12×12 local stiffness matrix of a prismatic 3D frame member.

    DOF order: [ux_i, uy_i, uz_i, rx_i, ry_i, rz_i,
                ux_j, uy_j, uz_j, rx_j, ry_j, rz_j]

    Every coupling term is written to (r, c) and (c, r) together, so the
    result is exactly symmetric.
    """
    k = np.zeros((12, 12), dtype=float)

    def put(r, c, val):
        k[r, c] = val
        k[c, r] = val

    L2 = L * L
    L3 = L2 * L

    # Axial (x)
    EA_L = E * A / L
    put(0, 0, EA_L); put(0, 6, -EA_L); put(6, 6, EA_L)

    # Torsion (rx)
    GJ_L = G * J / L
    put(3, 3, GJ_L); put(3, 9, -GJ_L); put(9, 9, GJ_L)

    # Bending about local z (uy, rz)
    z12, z6, z4, z2 = 12*E*Iz/L3, 6*E*Iz/L2, 4*E*Iz/L, 2*E*Iz/L
    put(1, 1, z12); put(1, 5, z6); put(1, 7, -z12); put(1, 11, z6)
    put(5, 5, z4); put(5, 7, -z6); put(5, 11, z2)
    put(7, 7, z12); put(7, 11, -z6)
    put(11, 11, z4)

    # Bending about local y (uz, ry), mirrored signs
    y12, y6, y4, y2 = 12*E*Iy/L3, 6*E*Iy/L2, 4*E*Iy/L, 2*E*Iy/L
    put(2, 2, y12); put(2, 4, -y6); put(2, 8, -y12); put(2, 10, -y6)
    put(4, 4, y4); put(4, 8, y6); put(4, 10, y2)
    put(8, 8, y12); put(8, 10, y6)
    put(10, 10, y4)

    return k


def frame3d_rotation(cx: float, cy: float, cz: float) -> np.ndarray:
    """
    3×3 rotation from global to local axes (rows are the local unit vectors).
    """
    if abs(cz) > VERTICAL_TOL:
        s = 1.0 if cz > 0 else -1.0
        return np.array([
            [0.0, 0.0, s],
            [0.0, 1.0, 0.0],
            [-s, 0.0, 0.0],
        ], dtype=float)

    D = np.sqrt(cx*cx + cy*cy)
    return np.array([
        [cx, cy, cz],
        [-cy / D, cx / D, 0.0],
        [-cx * cz / D, -cy * cz / D, D],
    ], dtype=float)


def frame3d_transform(cx: float, cy: float, cz: float) -> np.ndarray:
    """
    12×12 transform from global DOFs to local DOFs.
    """
    R = frame3d_rotation(cx, cy, cz)
    T = np.zeros((12, 12), dtype=float)
    for i in range(4):
        T[3*i:3*i + 3, 3*i:3*i + 3] = R
    return T


def frame3d_global_stiffness(nodes: Mapping[int, Node3D], element: Frame3D) -> np.ndarray:
    L, cx, cy, cz = element_geometry_3d(nodes, element)
    k_local = frame3d_local_stiffness(element.E, element.G, element.A,
                                      element.Iy, element.Iz, element.J, L)
    T = frame3d_transform(cx, cy, cz)
    return T.T @ k_local @ T


def element_dof_map(model: FrameModel, element: Frame3D) -> list:
    """12 global equation indices of a member (FIXED at supported ends)."""
    return DOF_3D_FRAME.element_dof_map([
        node_dof_array(model.nodes[element.ni]),
        node_dof_array(model.nodes[element.nj]),
    ])


def element_contributions(model: FrameModel, elements=None) -> list:
    """
    (dof_map, ke_global) for each member, ready for assemble_global_K.

    Each member is independent of the others here; only the scatter-add
    into K needs a single writer.
    """
    if elements is None:
        elements = model.elements
    return [
        (element_dof_map(model, e), frame3d_global_stiffness(model.nodes, e))
        for e in elements
    ]
