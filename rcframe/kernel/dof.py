# rcframe/kernel/dof.py
"""
DOF ALLOCATOR: Equation Numbering with Eliminated Supports
==========================================================

PURPOSE:
--------
This module maps every node onto rows of the global system K·d = F.

Fixed (ground) nodes are ELIMINATED from the system instead of being solved
for and discarded afterwards. They get the sentinel index FIXED (-1) on all
six axes, and the assembler simply drops any matrix entry whose row or
column is the sentinel:

    node 0 (fixed)  → (-1, -1, -1, -1, -1, -1)
    node 1 (free)   → ( 0,  1,  2,  3,  4,  5)
    node 2 (free)   → ( 6,  7,  8,  9, 10, 11)

So K only contains free DOFs and its size is 6 × (number of free nodes).

USAGE:
------
    dof = DOFManager(dof_per_node=6)
    table = dof.allocate([(0, True), (1, False), (2, False)])
    # {0: (-1, ...), 1: (0, ..., 5), 2: (6, ..., 11)}
    dof.check(table, fixed={0: True, 1: False, 2: False})
"""

from dataclasses import dataclass
from numbers import Integral
from typing import Dict, Iterable, List, Sequence, Tuple

from .errors import ValidationError


FIXED = -1
DOF_PER_NODE = 6  # ux, uy, uz, rx, ry, rz
DOF_NAMES = ('ux', 'uy', 'uz', 'rx', 'ry', 'rz')


@dataclass
class DOFManager:
    """
    Allocates and checks global equation indices for nodes.

    Attributes:
    -----------
    dof_per_node : int
        Number of DOFs per node (6 for a 3D frame)

    Examples:
    ---------
    >>> dof = DOFManager(dof_per_node=6)
    >>> table = dof.allocate([(10, True), (11, False)])
    >>> table[10]
    (-1, -1, -1, -1, -1, -1)
    >>> table[11]
    (0, 1, 2, 3, 4, 5)
    >>> dof.ndof(table)
    6
    """
    dof_per_node: int = DOF_PER_NODE

    def allocate(self, ordered_nodes: Iterable[Tuple[int, bool]]) -> Dict[int, Tuple[int, ...]]:
        """
        Assign contiguous index blocks to free nodes in the given order.

        Parameters:
        -----------
        ordered_nodes : Iterable[Tuple[int, bool]]
            (node_id, fixed) pairs, already in scanning order

        Returns:
        --------
        Dict[int, Tuple[int, ...]]
            node_id → tuple of dof_per_node global indices (FIXED if fixed)
        """
        table = {}
        counter = 0
        for node_id, fixed in ordered_nodes:
            if node_id in table:
                raise ValidationError(f"Duplicate node id {node_id}")
            if fixed:
                table[node_id] = (FIXED,) * self.dof_per_node
            else:
                table[node_id] = tuple(range(counter, counter + self.dof_per_node))
                counter += self.dof_per_node
        return table

    def ndof(self, table: Dict[int, Sequence[int]]) -> int:
        """Number of free equations described by a DOF table."""
        return sum(1 for dofs in table.values() if dofs[0] != FIXED) * self.dof_per_node

    def check(self, table: Dict[int, Sequence[int]], fixed: Dict[int, bool]) -> int:
        """
        Validate a user supplied DOF table and return the number of equations.

        A node must be either fully fixed (all sentinel) or fully free (a
        contiguous block of dof_per_node indices). Free blocks may not overlap
        and together must cover 0 .. ndof-1 without gaps.

        Raises:
        -------
        ValidationError
            On a wrong length, a non-integer index, a partially fixed node,
            a non-contiguous block, or a DOF index collision between two nodes.
        """
        owner = {}
        for node_id, dofs in table.items():
            dofs = tuple(dofs)
            if len(dofs) != self.dof_per_node:
                raise ValidationError(
                    f"Node {node_id} has {len(dofs)} DOF indices, expected {self.dof_per_node}"
                )
            if any(isinstance(i, bool) or not isinstance(i, Integral) for i in dofs):
                raise ValidationError(f"Node {node_id} DOF indices must be integers: {dofs}")
            if fixed[node_id]:
                if any(i != FIXED for i in dofs):
                    raise ValidationError(f"Fixed node {node_id} carries equation indices {dofs}")
                continue
            if any(i == FIXED for i in dofs):
                raise ValidationError(f"Node {node_id} is partially fixed: {dofs}")
            if dofs != tuple(range(dofs[0], dofs[0] + self.dof_per_node)) or dofs[0] < 0:
                raise ValidationError(f"Node {node_id} DOF indices are not contiguous: {dofs}")
            for i in dofs:
                if i in owner:
                    raise ValidationError(
                        f"DOF index {i} used by both node {owner[i]} and node {node_id}"
                    )
                owner[i] = node_id

        ndof = len(owner)
        if owner and max(owner) != ndof - 1:
            raise ValidationError(f"DOF indices leave gaps: {ndof} equations but max index {max(owner)}")
        return ndof

    def element_dof_map(self, node_dofs: Sequence[Sequence[int]]) -> List[int]:
        """
        Concatenate the DOF arrays of an element's nodes.

        >>> DOFManager(6).element_dof_map([(-1,) * 6, (0, 1, 2, 3, 4, 5)])
        [-1, -1, -1, -1, -1, -1, 0, 1, 2, 3, 4, 5]
        """
        result = []
        for dofs in node_dofs:
            result.extend(dofs)
        return result


DOF_3D_FRAME = DOFManager(dof_per_node=DOF_PER_NODE)
