# rcframe/catalog.py
"""
CATALOG: CONCRETE MATERIALS AND RECTANGULAR SECTIONS
====================================================

PURPOSE:
--------
Turns the handful of numbers an engineer types in (concrete class, column
and beam dimensions) into the E, G, A, Iy, Iz, J the frame solver needs.

ENGINEERING CONTEXT:
--------------------
- **Material**: TS500 concrete classes. Ec is tabulated in MPa; the building
  models work in kN and m, so E = Ec × 1000 kN/m². G = E / 2.4 (ν ≈ 0.2).

- **Section**: Solid rectangles. Under seismic load RC members are
  cracked, so the bending inertias are reduced with effective stiffness
  factors (0.70 for columns, 0.35 for beams by default, see SolverConfig).

- **Orientation**: `width` is measured along the member's local y axis and
  `depth` along local z. For a beam local z points up, so `depth` is the
  beam height and Iy (bending about local y) is the gravity-plane inertia.
  For a column local y is global Y and local z is global -X.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .config import CONFIG, SolverConfig
from .v3d.model import MemberProperties


class ConcreteClass(Enum):
    C20 = 'C20'
    C25 = 'C25'
    C30 = 'C30'
    C35 = 'C35'
    C40 = 'C40'
    C50 = 'C50'


@dataclass(frozen=True)
class ConcreteMaterial:
    """
    Concrete properties (TS500 Table 3.1).

    Parameters:
    -----------
    name : str
        Class name, e.g. "C30"
    fck : float
        Characteristic compressive strength (MPa)
    Ec : float
        Elastic modulus (MPa)
    E : float
        Elastic modulus in solver units (kN/m²)
    G : float
        Shear modulus in solver units (kN/m²)
    """
    name: str
    fck: float
    Ec: float
    E: float
    G: float


# (fck, Ec) in MPa
_CONCRETE_TABLE = {
    ConcreteClass.C20: (20.0, 28000.0),
    ConcreteClass.C25: (25.0, 30000.0),
    ConcreteClass.C30: (30.0, 32000.0),
    ConcreteClass.C35: (35.0, 33000.0),
    ConcreteClass.C40: (40.0, 34000.0),
    ConcreteClass.C50: (50.0, 37000.0),
}


def concrete_material(concrete_class, config: Optional[SolverConfig] = None) -> ConcreteMaterial:
    """
    Look up a concrete class ("C30" or ConcreteClass.C30).

    >>> concrete_material("C30").E
    32000000.0
    """
    config = config or CONFIG
    concrete_class = ConcreteClass(concrete_class)
    fck, Ec = _CONCRETE_TABLE[concrete_class]
    E = Ec * 1000.0
    return ConcreteMaterial(
        name=concrete_class.value,
        fck=fck,
        Ec=Ec,
        E=E,
        G=E / config.shear_modulus_ratio,
    )


def rectangular_torsion_constant(width: float, depth: float) -> float:
    """
    Saint-Venant torsion constant of a solid rectangle (Roark approximation).

        J = a·b³·(1/3 − 0.21·(b/a)·(1 − b⁴/(12·a⁴)))    with a ≥ b
    """
    a, b = max(width, depth), min(width, depth)
    return a * b**3 * (1.0/3.0 - 0.21 * (b / a) * (1.0 - b**4 / (12.0 * a**4)))


def rectangular_member(
    width: float,
    depth: float,
    material: ConcreteMaterial,
    stiffness_factor: float = 1.0,
) -> MemberProperties:
    """
    Member properties of a solid rectangular RC section.

    Parameters:
    -----------
    width : float
        Dimension along local y (m)
    depth : float
        Dimension along local z (m)
    material : ConcreteMaterial
        Supplies E and G
    stiffness_factor : float
        Cracked-section reduction applied to Iy and Iz

    Returns:
    --------
    MemberProperties
        A = b·h, Iy = b·h³/12·f, Iz = h·b³/12·f, J from the rectangle formula
    """
    if width <= 0 or depth <= 0:
        raise ValueError(f"Section dimensions must be positive, got {width} x {depth}")
    return MemberProperties(
        E=material.E,
        G=material.G,
        A=width * depth,
        Iy=width * depth**3 / 12.0 * stiffness_factor,
        Iz=depth * width**3 / 12.0 * stiffness_factor,
        J=rectangular_torsion_constant(width, depth),
    )


def building_members(
    concrete_class,
    column_size: Tuple[float, float],
    beam_size: Tuple[float, float],
    config: Optional[SolverConfig] = None,
) -> Tuple[MemberProperties, MemberProperties]:
    """
    Column and beam properties for a building from its section sizes.

    Parameters:
    -----------
    concrete_class : str or ConcreteClass
    column_size : (width, depth) in m, width along global Y
    beam_size : (width, height) in m

    Returns:
    --------
    (column_props, beam_props)

    Example:
    --------
    >>> col, beam = building_members("C30", (0.4, 0.4), (0.3, 0.5))
    """
    config = config or CONFIG
    material = concrete_material(concrete_class, config)
    column = rectangular_member(column_size[0], column_size[1], material,
                                config.column_stiffness_factor)
    beam = rectangular_member(beam_size[0], beam_size[1], material,
                              config.beam_stiffness_factor)
    return column, beam
