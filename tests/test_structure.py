"""
Tests for structural mass.

Hull areas use a half-cylinder side and disc nose/tail approximation;
armor mass per area comes from the heat of vaporization.
"""

import math

import pytest

from accdv.components import DataIntegrityError, ShipArmor, ShipHull
from accdv.structure import (
    ArmorThickness,
    HullAreas,
    StructuralMass,
    armor_mass_per_area,
    compute_armor_coefficients,
    compute_hull_areas,
    compute_structural_mass,
    fuel_mass,
)


@pytest.fixture
def corvette():
    return ShipHull("Corvette", "Corvette", mass_tons=400.0, length_m=100.0, width_m=20.0)


@pytest.fixture
def steel():
    return ShipArmor("Steel", "Steel", heat_of_vaporization_mj_kg=8.0)


class TestHullAreas:
    def test_areas(self, corvette):
        areas = HullAreas.from_hull(corvette)
        assert areas.side == pytest.approx(math.pi * 20 * 100 / 2)
        assert areas.nose_tail == pytest.approx(math.pi * 10 ** 2)

    def test_skips_excluded_hulls(self, corvette):
        alien = ShipHull("AlienHull", "Alien Hull", alien=True, mass_tons=1, length_m=1, width_m=1)
        areas = compute_hull_areas([corvette, alien])
        assert list(areas) == ["Corvette"]


class TestArmorCoefficient:
    def test_coefficient(self, steel):
        assert armor_mass_per_area(steel) == pytest.approx(20 / (8 * 0.005))

    def test_non_positive_heat_of_vaporization(self):
        with pytest.raises(DataIntegrityError):
            armor_mass_per_area(ShipArmor("Foam", "Foam", heat_of_vaporization_mj_kg=0.0))

    def test_skips_excluded_armor(self, steel):
        alien = ShipArmor("Alien", "Alien", required_project="Project_AlienArmor",
                          heat_of_vaporization_mj_kg=100.0)
        assert list(compute_armor_coefficients([steel, alien])) == ["Steel"]


class TestArmorThickness:
    def test_defaults_to_zero(self):
        t = ArmorThickness()
        assert (t.nose, t.sides, t.tail) == (0.0, 0.0, 0.0)

    def test_negative_thickness(self):
        with pytest.raises(ValueError, match="sides"):
            ArmorThickness(sides=-1)


class TestStructuralMass:
    def test_fuel_mass(self):
        assert fuel_mass(0) == 0.0
        assert fuel_mass(3) == 300.0

    def test_full_structure(self, corvette, steel):
        areas = HullAreas.from_hull(corvette)
        mass = compute_structural_mass(
            hull=corvette,
            hull_areas=areas,
            armor_coefficient=armor_mass_per_area(steel),
            thickness=ArmorThickness(nose=1, sides=0.5, tail=2),
            num_fuel_tanks=2,
        )
        assert mass.hull == 400.0
        assert mass.armor_nose == pytest.approx(50 * math.pi)
        assert mass.armor_sides == pytest.approx(250 * math.pi)
        assert mass.armor_tail == pytest.approx(100 * math.pi)
        assert mass.armor == pytest.approx(400 * math.pi)
        assert mass.dry == pytest.approx(400 + 400 * math.pi)
        assert mass.fuel == 200.0

    def test_armor_without_hull_weighs_nothing(self, steel):
        mass = compute_structural_mass(
            hull=None,
            hull_areas=None,
            armor_coefficient=armor_mass_per_area(steel),
            thickness=ArmorThickness(nose=5, sides=5, tail=5),
            num_fuel_tanks=1,
        )
        assert mass == StructuralMass(fuel=100.0)

    def test_hull_without_armor(self, corvette):
        mass = compute_structural_mass(
            hull=corvette,
            hull_areas=HullAreas.from_hull(corvette),
            armor_coefficient=None,
            thickness=ArmorThickness(nose=5),
            num_fuel_tanks=0,
        )
        assert mass.hull == 400.0
        assert mass.armor == 0.0
