# rcframe/kernel/assemble.py
"""
ASSEMBLY: Global Matrix Assembly with Support Elimination
=========================================================

PURPOSE:
--------
Scatter-add of element contributions into the global stiffness matrix and
load vector.

Each contribution is a (dof_map, ke) pair. The DOF map holds one global
equation index per element DOF, or FIXED (-1) where the element end sits on
a support. Entries whose row OR column is FIXED are dropped: that is how the
supports are enforced (elimination, not a penalty spring).

    K = zeros(ndof × ndof)
    for each element:
        keep = positions in dof_map that are not FIXED
        K[dof_map[keep], dof_map[keep]] += ke[keep, keep]

Within one element the kept indices are unique (two different nodes), so
the fancy-indexed += never hits the same cell twice. Across elements the
sum is commutative: element order does not change K.

USAGE:
------
    contributions = [(dof_map, ke_global), ...]
    K = assemble_global_K(ndof, contributions)
"""

import numpy as np
from typing import List, Sequence, Tuple

from .dof import FIXED


def _kept(dof_map: Sequence[int]) -> Tuple[np.ndarray, np.ndarray]:
    """Return (local positions, global indices) of the non-fixed DOFs."""
    dof_map = np.asarray(dof_map, dtype=int)
    local = np.flatnonzero(dof_map != FIXED)
    return local, dof_map[local]


def assemble_global_K(
    ndof: int,
    contributions: List[Tuple[Sequence[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global stiffness matrix from element contributions.

    Parameters:
    -----------
    ndof : int
        Number of free equations (size of K)

    contributions : List[Tuple[Sequence[int], np.ndarray]]
        (dof_map, ke) per element, with ke in GLOBAL coordinates and
        shape (len(dof_map), len(dof_map))

    Returns:
    --------
    np.ndarray
        Global stiffness matrix K, shape (ndof, ndof)
    """
    K = np.zeros((ndof, ndof), dtype=float)

    for dof_map, ke in contributions:
        n_element_dofs = len(dof_map)
        assert ke.shape == (n_element_dofs, n_element_dofs), \
            f"Element ke shape {ke.shape} doesn't match dof_map length {n_element_dofs}"

        local, glob = _kept(dof_map)
        if glob.size == 0:
            continue  # both ends on supports
        K[np.ix_(glob, glob)] += ke[np.ix_(local, local)]

    return K


def assemble_global_F(
    ndof: int,
    contributions: List[Tuple[Sequence[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global load vector from per-node (or per-element) vectors.

    Same scatter-add as assemble_global_K; components that land on a FIXED
    index are dropped.
    """
    F = np.zeros(ndof, dtype=float)

    for dof_map, fe in contributions:
        n_element_dofs = len(dof_map)
        assert fe.shape == (n_element_dofs,), \
            f"Load vector shape {fe.shape} doesn't match dof_map length {n_element_dofs}"

        local, glob = _kept(dof_map)
        np.add.at(F, glob, fe[local])

    return F
