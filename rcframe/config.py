# rcframe/config.py
"""
Solver configuration and defaults.
"""

from dataclasses import dataclass


@dataclass
class SolverConfig:
    """Global solver configuration."""

    # Conditioning limit above which K is treated as a mechanism
    cond_limit: float = 1e12

    # A diagonal entry with |K_ii| <= zero_pivot_tol * max|K_ii| has no stiffness
    zero_pivot_tol: float = 1e-14

    # Dense K needs 8 * ndof^2 bytes: 6000 DOF is ~290 MB
    max_dof: int = 6000
    warn_dof: int = 3000

    # Cracked-section stiffness factors (TS500 / TBDY practice)
    column_stiffness_factor: float = 0.70
    beam_stiffness_factor: float = 0.35

    # Shear modulus ratio E / G used for concrete
    shear_modulus_ratio: float = 2.4

    def __post_init__(self):
        if self.cond_limit <= 0:
            raise ValueError("cond_limit must be positive")
        if self.max_dof <= 0:
            raise ValueError("max_dof must be positive")
        if self.warn_dof > self.max_dof:
            self.warn_dof = self.max_dof


# Global config instance
CONFIG = SolverConfig()
