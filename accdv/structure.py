"""
Structural mass: hull geometry and armor.

Hulls are approximated as cylinders. The nose and tail are discs of the
hull's width; the sides use a half-cylinder area since most of the length
is thinner or unarmored. Armor mass per unit area comes from an empirical
ablative coefficient on the material's heat of vaporization.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import numpy as np

from .components import DataIntegrityError, ShipArmor, ShipHull


# =============================================================================
# CONSTANTS
# =============================================================================

ARMOR_MASS_COEFFICIENT = 20.0
ARMOR_VAPORIZATION_SCALE = 0.005

FUEL_TANK_CAPACITY_TONS = 100.0


# =============================================================================
# HULL / ARMOR PREPROCESSING
# =============================================================================

@dataclass(frozen=True)
class HullAreas:
    """
    Effective armor areas of a hull.

    Attributes:
        side: Effective side area (m^2).
        nose_tail: Effective area of the nose, and of the tail (m^2).
    """
    side: float
    nose_tail: float

    @classmethod
    def from_hull(cls, hull: ShipHull) -> HullAreas:
        return cls(
            side=float(np.pi * hull.width_m * hull.length_m / 2),
            nose_tail=float(np.pi * (hull.width_m / 2) ** 2),
        )


def armor_mass_per_area(armor: ShipArmor) -> float:
    """
    Get the mass-per-area coefficient for an armor material.

    Raises:
        DataIntegrityError: If the heat of vaporization is not positive.
    """
    if armor.heat_of_vaporization_mj_kg <= 0:
        raise DataIntegrityError(
            f"Armor {armor.data_name!r} has non-positive heat of vaporization"
        )
    return ARMOR_MASS_COEFFICIENT / (armor.heat_of_vaporization_mj_kg * ARMOR_VAPORIZATION_SCALE)


def compute_hull_areas(hulls: Iterable[ShipHull]) -> Dict[str, HullAreas]:
    """Effective areas for every selectable hull, keyed by identifier."""
    return {hull.data_name: HullAreas.from_hull(hull) for hull in hulls if hull.is_selectable}


def compute_armor_coefficients(armors: Iterable[ShipArmor]) -> Dict[str, float]:
    """Mass-per-area coefficients for every selectable armor, keyed by identifier."""
    return {armor.data_name: armor_mass_per_area(armor) for armor in armors if armor.is_selectable}


# =============================================================================
# PER-CONFIGURATION STRUCTURAL MASS
# =============================================================================

@dataclass(frozen=True)
class ArmorThickness:
    """Armor thickness multipliers per hull section."""
    nose: float = 0.0
    sides: float = 0.0
    tail: float = 0.0

    def __post_init__(self) -> None:
        for section in ("nose", "sides", "tail"):
            if getattr(self, section) < 0:
                raise ValueError(f"{section} armor thickness must be >= 0.")


@dataclass(frozen=True)
class StructuralMass:
    """
    Structural mass breakdown of a configuration, in tons.

    Attributes:
        hull: Hull flat mass.
        armor_nose: Nose armor mass.
        armor_sides: Side armor mass.
        armor_tail: Tail armor mass.
        fuel: Propellant mass.
    """
    hull: float = 0.0
    armor_nose: float = 0.0
    armor_sides: float = 0.0
    armor_tail: float = 0.0
    fuel: float = 0.0

    @property
    def armor(self) -> float:
        return self.armor_nose + self.armor_sides + self.armor_tail

    @property
    def dry(self) -> float:
        """Hull and armor mass carried regardless of drive."""
        return self.hull + self.armor


def fuel_mass(num_fuel_tanks: int) -> float:
    return num_fuel_tanks * FUEL_TANK_CAPACITY_TONS


def compute_structural_mass(
    hull: Optional[ShipHull],
    hull_areas: Optional[HullAreas],
    armor_coefficient: Optional[float],
    thickness: ArmorThickness,
    num_fuel_tanks: int,
) -> StructuralMass:
    """
    Compute hull, armor and fuel mass for a configuration.

    Armor needs a hull to cover; without a hull or armor material the
    armor sections weigh nothing.

    Args:
        hull: Selected hull, if any.
        hull_areas: Precomputed effective areas of the hull.
        armor_coefficient: Precomputed mass-per-area of the selected armor.
        thickness: Armor thickness per section.
        num_fuel_tanks: Number of fuel tanks.

    Returns:
        StructuralMass breakdown.
    """
    hull_mass = hull.mass_tons if hull is not None else 0.0

    armor_nose = armor_sides = armor_tail = 0.0
    if hull_areas is not None and armor_coefficient is not None:
        armor_nose = armor_coefficient * hull_areas.nose_tail * thickness.nose / 1000
        armor_sides = armor_coefficient * hull_areas.side * thickness.sides / 1000
        armor_tail = armor_coefficient * hull_areas.nose_tail * thickness.tail / 1000

    return StructuralMass(
        hull=hull_mass,
        armor_nose=armor_nose,
        armor_sides=armor_sides,
        armor_tail=armor_tail,
        fuel=fuel_mass(num_fuel_tanks),
    )
