# rcframe/v3d/builder.py
"""
MODEL BUILDER: Regular RC Building Frames on a Grid
===================================================

Generates the nodes and members of a regular multi-story building:

    - one node per (grid column c, grid row r, story i)
    - story 0 is the ground: all its nodes are fixed
    - a column between every pair of vertically adjacent nodes
    - at every story above ground, beams along x between adjacent grid
      columns and along y between adjacent grid rows

Plan view of one story (nx = 3, ny = 2):

    y
    ^   3 ---Bx--- 4 ---Bx--- 5
    |   |          |          |
    |   By         By         By
    |   |          |          |
    |   0 ---Bx--- 1 ---Bx--- 2
    +-------------------------------> x

Node id = story × (nx·ny) + row × nx + column.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .model import Frame3D, FrameModel, MemberProperties, Node3D, make_model
from ..kernel.errors import ValidationError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridGeometry:
    """
    Plan grid and elevation of a regular building.

    Parameters:
    -----------
    x_spacings : Sequence[float]
        Bay widths along x, in order (m). Empty → a single grid line.
    y_spacings : Sequence[float]
        Bay widths along y, in order (m)
    story_height : float
        Height of every story (m)
    story_count : int
        Number of stories above ground

    Example:
    --------
    >>> geom = GridGeometry([5.0, 4.0], [6.0], story_height=3.0, story_count=4)
    >>> geom.nx, geom.ny
    (3, 2)
    """
    x_spacings: Sequence[float]
    y_spacings: Sequence[float]
    story_height: float
    story_count: int

    @property
    def x_coords(self) -> np.ndarray:
        return np.concatenate([[0.0], np.cumsum(self.x_spacings, dtype=float)])

    @property
    def y_coords(self) -> np.ndarray:
        return np.concatenate([[0.0], np.cumsum(self.y_spacings, dtype=float)])

    @property
    def nx(self) -> int:
        return len(self.x_spacings) + 1

    @property
    def ny(self) -> int:
        return len(self.y_spacings) + 1

    @property
    def nodes_per_story(self) -> int:
        return self.nx * self.ny

    def node_id(self, story: int, row: int, col: int) -> int:
        return story * self.nodes_per_story + row * self.nx + col

    def validate(self) -> None:
        for name, spacings in (('x', self.x_spacings), ('y', self.y_spacings)):
            for s in spacings:
                if not np.isfinite(s) or s <= 0.0:
                    raise ValidationError(f"Grid spacing along {name} must be positive, got {s}")
        if not np.isfinite(self.story_height) or self.story_height <= 0.0:
            raise ValidationError(f"Story height must be positive, got {self.story_height}")
        if int(self.story_count) != self.story_count or self.story_count < 0:
            raise ValidationError(f"Story count must be a non-negative integer, got {self.story_count}")


def build_nodes(geometry: GridGeometry) -> List[Node3D]:
    xs, ys = geometry.x_coords, geometry.y_coords
    nodes = []
    for story in range(geometry.story_count + 1):
        z = story * geometry.story_height
        for row in range(geometry.ny):
            for col in range(geometry.nx):
                nodes.append(Node3D(
                    id=geometry.node_id(story, row, col),
                    x=float(xs[col]),
                    y=float(ys[row]),
                    z=float(z),
                    fixed=(story == 0),
                ))
    return nodes


def build_elements(geometry: GridGeometry, column: MemberProperties,
                   beam: MemberProperties) -> List[Frame3D]:
    elements = []

    def add(kind, ni, nj, props, label):
        elements.append(Frame3D.from_properties(len(elements), kind, ni, nj, props, label))

    # Columns
    for story in range(geometry.story_count):
        for row in range(geometry.ny):
            for col in range(geometry.nx):
                add('column',
                    geometry.node_id(story, row, col),
                    geometry.node_id(story + 1, row, col),
                    column, f"C{story + 1}-{col}-{row}")

    # Beams
    for story in range(1, geometry.story_count + 1):
        for row in range(geometry.ny):
            for col in range(geometry.nx - 1):
                add('beam',
                    geometry.node_id(story, row, col),
                    geometry.node_id(story, row, col + 1),
                    beam, f"B{story}-X-{col}-{row}")
        for col in range(geometry.nx):
            for row in range(geometry.ny - 1):
                add('beam',
                    geometry.node_id(story, row, col),
                    geometry.node_id(story, row + 1, col),
                    beam, f"B{story}-Y-{col}-{row}")

    return elements


def build_frame_model(geometry: GridGeometry, column: MemberProperties,
                      beam: MemberProperties) -> FrameModel:
    """
    Build and validate the frame model of a regular building.

    Parameters:
    -----------
    geometry : GridGeometry
        Plan grid and elevation
    column : MemberProperties
        Properties given to every column
    beam : MemberProperties
        Properties given to every beam

    Returns:
    --------
    FrameModel
        nx·ny·(stories+1) nodes, story 0 fixed; 6·nx·ny·stories DOFs

    Raises:
    -------
    ValidationError
        Non-positive spacing, story height or section property
    """
    geometry.validate()
    nodes = build_nodes(geometry)
    elements = build_elements(geometry, column, beam)
    model = make_model(nodes, elements)
    _logger.info(
        f"Built {geometry.nx}x{geometry.ny} grid, {geometry.story_count} stories: "
        f"{len(nodes)} nodes, {len(elements)} elements, {model.ndof} DOFs"
    )
    return model

