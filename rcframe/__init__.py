# rcframe - 3D Frame Analysis for Reinforced-Concrete Buildings
"""
RCFRAME: Linear-Elastic 3D Frame Solver
=======================================

This package provides:
- A regular RC building generator (grid + stories → columns and beams)
- 12×12 3D frame element stiffness and local-to-global rotation
- Global assembly with fixed supports eliminated
- A dense linear solve that reports mechanisms and NaN/Inf as failures
- Post-processing: nodal displacements, member end forces, story drift
- An interactive Plotly model viewer

ARCHITECTURE:
-------------
    kernel/         DOF numbering, assembly, solve, error types
    v3d/            Node/element/model data, element stiffness, builder
    catalog.py      Concrete classes and rectangular section properties
    loads.py        Nodal loads → load vector, story load distribution
    analysis.py     The analyze() pipeline
    post.py         Displacement records, member forces, drifts, tables
    viz/            3D visualisation (Plotly)
    config.py       Solver configuration
"""

import logging

from .config import CONFIG, SolverConfig
from .kernel import (
    DOFManager,
    ValidationError,
    SolverError,
    SingularSystemError,
    NumericFailure,
    solve_linear,
)
from .analysis import AnalysisResult, analyze
from .loads import NodalLoad

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
