# File: tests/test_invariants.py
"""
TEST: Physical and Numerical Invariants
=======================================

Properties that must hold for ANY valid model, not just one benchmark:

1. Local element stiffness is exactly symmetric
2. Assembled global K is symmetric (Maxwell reciprocity)
3. The transform T is orthogonal: Tᵀ·T = I
4. Assembly does not depend on element order
5. The vertical/general transform branches meet without a jump
"""

import numpy as np
import pytest

from rcframe.analysis import assemble_stiffness
from rcframe.catalog import building_members
from rcframe.v3d import (
    VERTICAL_TOL,
    Frame3D,
    GridGeometry,
    Node3D,
    build_frame_model,
    frame3d_global_stiffness,
    frame3d_local_stiffness,
    frame3d_rotation,
    frame3d_transform,
)


def make_building(stories=3):
    geometry = GridGeometry([5.0, 4.0], [6.0, 3.5], story_height=3.0, story_count=stories)
    column, beam = building_members("C30", (0.4, 0.5), (0.3, 0.55))
    return build_frame_model(geometry, column, beam)


DIRECTIONS = [
    (0.0, 0.0, 1.0),     # column, up
    (0.0, 0.0, -1.0),    # column, down
    (1.0, 0.0, 0.0),     # beam along x
    (0.0, 1.0, 0.0),     # beam along y
    (-1.0, 0.0, 0.0),
    (1.0, 2.0, 3.0),     # inclined
    (-2.0, 0.5, -1.0),
    (0.005, 0.0, 1.0),   # almost vertical, inside tolerance
]


def test_local_stiffness_symmetric():
    k = frame3d_local_stiffness(E=3.2e7, G=1.33e7, A=0.2, Iy=4e-3, Iz=2e-3, J=3e-3, L=4.0)
    np.testing.assert_array_equal(k, k.T)


def test_local_stiffness_blocks_uncoupled():
    k = frame3d_local_stiffness(E=3.2e7, G=1.33e7, A=0.2, Iy=4e-3, Iz=2e-3, J=3e-3, L=4.0)
    axial = [0, 6]
    torsion = [3, 9]
    bend_z = [1, 5, 7, 11]
    bend_y = [2, 4, 8, 10]
    groups = [axial, torsion, bend_z, bend_y]
    for a in groups:
        for b in groups:
            if a is b:
                continue
            assert np.all(k[np.ix_(a, b)] == 0.0)


def test_local_stiffness_rigid_body_modes():
    """Rigid translation along local z produces no forces."""
    k = frame3d_local_stiffness(E=3.2e7, G=1.33e7, A=0.2, Iy=4e-3, Iz=2e-3, J=3e-3, L=4.0)
    u = np.zeros(12)
    u[2] = u[8] = 1.0
    np.testing.assert_allclose(k @ u, 0.0, atol=1e-6)

    # Rigid rotation about local y: uz = -ry·x
    theta = 1e-3
    u = np.zeros(12)
    u[4] = u[10] = theta
    u[8] = -theta * 4.0
    np.testing.assert_allclose(k @ u, 0.0, atol=1e-6)


@pytest.mark.parametrize("direction", DIRECTIONS)
def test_transform_orthogonal(direction):
    c = np.asarray(direction, dtype=float)
    cx, cy, cz = c / np.linalg.norm(c)
    T = frame3d_transform(cx, cy, cz)
    np.testing.assert_allclose(T.T @ T, np.eye(12), atol=1e-12)


@pytest.mark.parametrize("direction", DIRECTIONS)
def test_rotation_right_handed_and_aligned(direction):
    c = np.asarray(direction, dtype=float)
    c = c / np.linalg.norm(c)
    R = frame3d_rotation(*c)
    assert np.isclose(np.linalg.det(R), 1.0)
    if abs(c[2]) <= VERTICAL_TOL:
        # general branch: local x is exactly the member axis
        np.testing.assert_allclose(R[0], c, atol=1e-12)


def test_global_stiffness_matrix_symmetric():
    model = make_building()
    K = assemble_stiffness(model)
    assert K.shape == (model.ndof, model.ndof)
    scale = np.abs(K).max()
    np.testing.assert_allclose(K, K.T, rtol=1e-10, atol=1e-12 * scale,
                               err_msg="Stiffness matrix is not symmetric!")


def test_global_stiffness_positive_definite():
    K = assemble_stiffness(make_building(stories=2))
    eigenvalues = np.linalg.eigvalsh(K)
    assert eigenvalues.min() > 0.0


def test_assembly_order_independent():
    model = make_building()
    K_ref = assemble_stiffness(model)

    rng = np.random.default_rng(42)
    for _ in range(3):
        shuffled = list(model.elements)
        rng.shuffle(shuffled)
        K = assemble_stiffness(model, shuffled)
        np.testing.assert_allclose(K, K_ref, rtol=1e-12, atol=1e-12 * np.abs(K_ref).max())


def _leaning_column(angle):
    nodes = {
        0: Node3D(0, 0.0, 0.0, 0.0),
        1: Node3D(1, 3.0 * np.sin(angle), 0.0, 3.0 * np.cos(angle)),
    }
    element = Frame3D(0, 'column', 0, 1, E=3.2e7, G=1.33e7, A=0.2, Iy=4e-3, Iz=1e-3, J=3e-3)
    return nodes, element


def test_vertical_branch_continuous_for_x_lean():
    """Just inside vs just outside VERTICAL_TOL: nearly the same stiffness."""
    threshold = np.arccos(VERTICAL_TOL)
    nodes_a, e_a = _leaning_column(threshold * 0.999)  # vertical branch
    nodes_b, e_b = _leaning_column(threshold * 1.001)  # general branch

    k_a = frame3d_global_stiffness(nodes_a, e_a)
    k_b = frame3d_global_stiffness(nodes_b, e_b)

    rel = np.linalg.norm(k_a - k_b) / np.linalg.norm(k_b)
    assert rel < 0.05

    # and the bending part in particular keeps its orientation
    R_b = frame3d_rotation(np.sin(threshold * 1.001), 0.0, np.cos(threshold * 1.001))
    R_a = frame3d_rotation(np.sin(threshold * 0.999), 0.0, np.cos(threshold * 0.999))
    np.testing.assert_allclose(R_a[1:], R_b[1:], atol=0.02)
