# File: tests/test_catalog.py
"""
Tests for concrete materials and rectangular section properties.
"""

import pytest

from rcframe.catalog import (
    ConcreteClass,
    building_members,
    concrete_material,
    rectangular_member,
    rectangular_torsion_constant,
)
from rcframe.config import SolverConfig


def test_concrete_class_lookup():
    c30 = concrete_material("C30")
    assert c30.name == "C30"
    assert c30.Ec == 32000.0
    assert c30.E == pytest.approx(3.2e7)          # kN/m²
    assert c30.G == pytest.approx(3.2e7 / 2.4)

    assert concrete_material(ConcreteClass.C50).Ec == 37000.0


def test_unknown_concrete_class():
    with pytest.raises(ValueError):
        concrete_material("C99")


def test_square_torsion_constant():
    # Roark: J ≈ 0.1406 a⁴ for a square
    assert rectangular_torsion_constant(0.4, 0.4) == pytest.approx(0.1406 * 0.4**4, rel=5e-3)


def test_thin_rectangle_torsion_constant():
    # J → a·b³/3 as a/b grows
    J = rectangular_torsion_constant(1.0, 0.05)
    assert J == pytest.approx(1.0 * 0.05**3 / 3.0, rel=0.05)


def test_rectangular_member_orientation():
    c25 = concrete_material("C25")
    props = rectangular_member(width=0.3, depth=0.6, material=c25)

    assert props.A == pytest.approx(0.18)
    # depth along local z resists bending about local y
    assert props.Iy == pytest.approx(0.3 * 0.6**3 / 12.0)
    assert props.Iz == pytest.approx(0.6 * 0.3**3 / 12.0)
    assert props.Iy > props.Iz
    assert props.E == c25.E and props.G == c25.G


def test_rectangular_member_rejects_bad_size():
    with pytest.raises(ValueError):
        rectangular_member(0.0, 0.5, concrete_material("C30"))


def test_building_members_cracked_factors():
    column, beam = building_members("C30", (0.4, 0.4), (0.3, 0.5))

    assert column.Iy == pytest.approx(0.4**4 / 12.0 * 0.70)
    assert beam.Iy == pytest.approx(0.3 * 0.5**3 / 12.0 * 0.35)
    # torsion and area are not reduced
    assert column.A == pytest.approx(0.16)
    assert column.J == pytest.approx(rectangular_torsion_constant(0.4, 0.4))


def test_building_members_custom_config():
    config = SolverConfig(column_stiffness_factor=1.0, beam_stiffness_factor=1.0,
                          shear_modulus_ratio=2.5)
    column, beam = building_members("C30", (0.4, 0.4), (0.3, 0.5), config=config)
    assert column.Iy == pytest.approx(0.4**4 / 12.0)
    assert column.G == pytest.approx(3.2e7 / 2.5)
