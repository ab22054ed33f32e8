# rcframe/v3d - 3D Frame Elements and Models
"""
V3D: 3D FRAME ANALYSIS
======================

This package provides the 3D specific parts of the solver:
- Node3D / Frame3D / FrameModel: validated model data (model.py)
- 12×12 local stiffness and rotation to global axes (elements.py)
- Regular RC building generator on a grid (builder.py)

USAGE:
------
    from rcframe.v3d import GridGeometry, build_frame_model
    from rcframe.catalog import building_members

    column, beam = building_members("C30", (0.4, 0.4), (0.3, 0.5))
    model = build_frame_model(GridGeometry([5, 5], [4], 3.0, 3), column, beam)
"""

from .model import Node3D, Frame3D, MemberProperties, FrameModel, make_model
from .elements import (
    VERTICAL_TOL,
    element_geometry_3d,
    frame3d_local_stiffness,
    frame3d_rotation,
    frame3d_transform,
    frame3d_global_stiffness,
    element_contributions,
)
from .builder import GridGeometry, build_frame_model

__all__ = [
    'Node3D', 'Frame3D', 'MemberProperties', 'FrameModel', 'make_model',
    'VERTICAL_TOL', 'element_geometry_3d', 'frame3d_local_stiffness',
    'frame3d_rotation', 'frame3d_transform', 'frame3d_global_stiffness',
    'element_contributions', 'GridGeometry', 'build_frame_model',
]
