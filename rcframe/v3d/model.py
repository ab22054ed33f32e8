# rcframe/v3d/model.py
"""
3D MODEL DEFINITIONS: Node3D, Frame3D and FrameModel
====================================================

PURPOSE:
--------
This module defines the data structures of a 3D frame analysis:
- Node3D: A point in space, either fixed (ground) or free
- Frame3D: A prismatic member (column or beam) connecting two nodes
- FrameModel: The validated, immutable set of nodes and members

ENGINEERING CONTEXT:
--------------------
A 3D FRAME member carries axial force, torsion and bending about two axes.
Each free node therefore has 6 DOFs: ux, uy, uz, rx, ry, rz.

Columns and beams use EXACTLY the same stiffness formulation. They only
differ in the section properties they are given, so there is one element
record with a `kind` tag instead of two classes.

Coordinate system: x and y horizontal (grid axes), z up.
"""

import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

import numpy as np

from ..kernel.dof import DOF_3D_FRAME, FIXED
from ..kernel.errors import ValidationError

_logger = logging.getLogger(__name__)

ELEMENT_KINDS = ('column', 'beam')


@dataclass(frozen=True)
class Node3D:
    """
    A node (joint) in 3D space.

    Parameters:
    -----------
    id : int
        Unique identifier for this node

    x, y, z : float
        Coordinates in the global system (m); z is vertical

    fixed : bool
        True for ground-level nodes. Fixed nodes are eliminated from the
        system: all six DOF indices are FIXED (-1)

    dofs : Optional[Tuple[int, ...]]
        Global equation indices [ux, uy, uz, rx, ry, rz]. Left as None when
        building a model by hand; make_model() fills them in.

    Examples:
    ---------
    >>> base = Node3D(0, 0.0, 0.0, 0.0, fixed=True)
    >>> top = Node3D(1, 0.0, 0.0, 3.0)
    """
    id: int
    x: float
    y: float
    z: float
    fixed: bool = False
    dofs: Optional[Tuple[int, ...]] = None


@dataclass(frozen=True)
class MemberProperties:
    """
    Material and section properties of a member kind.

    Parameters:
    -----------
    E : float
        Elastic modulus (kN/m² in the building models, any consistent unit)
    G : float
        Shear modulus
    A : float
        Cross-sectional area (m²)
    Iy : float
        Moment of inertia for bending about local y, i.e. deflection
        along local z (m⁴)
    Iz : float
        Moment of inertia for bending about local z, i.e. deflection
        along local y (m⁴). Put the strong axis here when the section
        depth lies along local y.
    J : float
        Torsional constant (m⁴)
    """
    E: float
    G: float
    A: float
    Iy: float
    Iz: float
    J: float


@dataclass(frozen=True)
class Frame3D:
    """
    A 3D frame element (Euler–Bernoulli, 12 DOF) connecting two nodes.

    DOF order: [ux_i, uy_i, uz_i, rx_i, ry_i, rz_i,
                ux_j, uy_j, uz_j, rx_j, ry_j, rz_j]

    Elements reference nodes by id only; they do not own them.
    """
    id: int
    kind: str  # 'column' or 'beam'
    ni: int  # Start node ID
    nj: int  # End node ID
    E: float
    G: float
    A: float
    Iy: float
    Iz: float
    J: float
    label: str = ''

    @classmethod
    def from_properties(cls, id: int, kind: str, ni: int, nj: int,
                        props: MemberProperties, label: str = '') -> 'Frame3D':
        return cls(id=id, kind=kind, ni=ni, nj=nj,
                   E=props.E, G=props.G, A=props.A,
                   Iy=props.Iy, Iz=props.Iz, J=props.J, label=label)


@dataclass(frozen=True)
class FrameModel:
    """
    A validated frame model. Build it with make_model() or
    rcframe.v3d.builder.build_frame_model(), never directly.

    Attributes:
    -----------
    nodes : Mapping[int, Node3D]
        Read-only mapping node id → node (all DOFs allocated)
    elements : Tuple[Frame3D, ...]
        Members, in definition order
    ndof : int
        Number of free equations = 6 × number of free nodes
    """
    nodes: Mapping[int, Node3D]
    elements: Tuple[Frame3D, ...]
    ndof: int

    @property
    def free_nodes(self) -> Tuple[Node3D, ...]:
        return tuple(n for n in self.nodes.values() if not n.fixed)

    @property
    def fixed_nodes(self) -> Tuple[Node3D, ...]:
        return tuple(n for n in self.nodes.values() if n.fixed)


def _scan_key(node: Node3D):
    # story, then row, then column
    return (node.z, node.y, node.x, node.id)


def _check_elements(nodes: Mapping[int, Node3D], elements: Tuple[Frame3D, ...]) -> None:
    seen = set()
    for e in elements:
        if e.id in seen:
            raise ValidationError(f"Duplicate element id {e.id}")
        seen.add(e.id)

        if e.kind not in ELEMENT_KINDS:
            raise ValidationError(f"Element {e.id} has unknown kind {e.kind!r}")
        for nid in (e.ni, e.nj):
            if nid not in nodes:
                raise ValidationError(f"Element {e.id} references missing node {nid}")
        if e.ni == e.nj:
            raise ValidationError(f"Element {e.id} connects node {e.ni} to itself")

        ni, nj = nodes[e.ni], nodes[e.nj]
        L = np.sqrt((nj.x - ni.x) ** 2 + (nj.y - ni.y) ** 2 + (nj.z - ni.z) ** 2)
        if L <= 0.0:
            raise ValidationError(
                f"Element {e.id} has zero length (nodes {e.ni} and {e.nj} "
                f"at same location: ({ni.x}, {ni.y}, {ni.z}))"
            )

        for name in ('E', 'G', 'A', 'Iy', 'Iz', 'J'):
            value = getattr(e, name)
            if not np.isfinite(value) or value <= 0.0:
                raise ValidationError(f"Element {e.id} has invalid {name}={value}")


def make_model(nodes: Iterable[Node3D], elements: Iterable[Frame3D]) -> FrameModel:
    """
    Validate nodes and elements and allocate DOF indices.

    If no node carries DOF indices, they are allocated scanning free nodes by
    story (z), row (y), column (x). If every node carries indices they are
    checked instead. Mixing the two is rejected.

    Raises:
    -------
    ValidationError
        Duplicate node/element id, non-finite coordinate, missing node
        reference, self-connected or
        zero-length element, non-positive section property, or a broken DOF
        table (partial fixity, overlap, gaps).

    Example:
    --------
    >>> model = make_model(
    ...     [Node3D(0, 0, 0, 0, fixed=True), Node3D(1, 0, 0, 3)],
    ...     [Frame3D(0, 'column', 0, 1, E=3e7, G=1.25e7, A=0.16, Iy=2e-3, Iz=2e-3, J=3e-3)],
    ... )
    >>> model.ndof
    6
    """
    node_list = list(nodes)
    element_tuple = tuple(elements)

    by_id = {}
    for n in node_list:
        if n.id in by_id:
            raise ValidationError(f"Duplicate node id {n.id}")
        if not np.all(np.isfinite([n.x, n.y, n.z])):
            raise ValidationError(f"Node {n.id} has non-finite coordinates ({n.x}, {n.y}, {n.z})")
        by_id[n.id] = n

    _check_elements(by_id, element_tuple)

    given = [n.dofs is not None for n in node_list]
    if all(given) and node_list:
        table = {n.id: n.dofs for n in node_list}
        ndof = DOF_3D_FRAME.check(table, {n.id: n.fixed for n in node_list})
        allocated = by_id
    elif not any(given):
        ordered = sorted(node_list, key=_scan_key)
        table = DOF_3D_FRAME.allocate((n.id, n.fixed) for n in ordered)
        ndof = DOF_3D_FRAME.ndof(table)
        allocated = {n.id: replace(n, dofs=table[n.id]) for n in node_list}
    else:
        raise ValidationError("Either all nodes or no nodes may carry DOF indices")

    _logger.debug(f"Model: {len(node_list)} nodes, {len(element_tuple)} elements, {ndof} DOFs")
    return FrameModel(nodes=MappingProxyType(dict(allocated)), elements=element_tuple, ndof=ndof)


def node_dof_array(node: Node3D) -> Tuple[int, ...]:
    """DOF indices of a node; FIXED on every axis for supports."""
    if node.fixed:
        return (FIXED,) * DOF_3D_FRAME.dof_per_node
    return node.dofs
