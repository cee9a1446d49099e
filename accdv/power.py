"""
Power plant selection and drive/power plant derivation.

Power Flow Architecture:
1. The exhaust stream carries kinetic power P = 0.5 * thrust * EV
2. Drive mass grows with that power through the drive's specific power
3. A paired power plant adds mass proportional to P (unless the drive
   carries its own power source)
4. The plant's inefficiency becomes waste heat for closed-cycle drives;
   open-cycle drives dump it with the exhaust

Based on Terra Invicta drive and reactor mechanics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .components import Cooling, DataIntegrityError, Drive, PowerPlant


# =============================================================================
# CONSTANTS
# =============================================================================

# Drives that carry their own power source, already counted in flat mass
SELF_POWERED_CLASSIFICATIONS = frozenset({"Chemical", "Fission_Pulse"})

# Cooling modes that route plant waste heat through radiators
RADIATOR_COOLED = frozenset({Cooling.CLOSED, Cooling.CALC})


# =============================================================================
# BEST POWER PLANT SELECTION
# =============================================================================

def select_best_power_plants(power_plants: Iterable[PowerPlant]) -> Dict[str, PowerPlant]:
    """
    Reduce the power plant catalog to the most efficient plant per class.

    Plants generally gain efficiency as their output grows, so efficiency
    is used as the measure of "best". Ties keep the first plant seen.

    Args:
        power_plants: Power plant catalog, in catalog order.

    Returns:
        Mapping of power plant class to its best plant.
    """
    best: Dict[str, PowerPlant] = {}
    for plant in power_plants:
        current = best.get(plant.power_plant_class)
        if current is None or plant.efficiency > current.efficiency:
            best[plant.power_plant_class] = plant
    return best


# =============================================================================
# DRIVE / POWER PLANT DERIVATION
# =============================================================================

@dataclass(frozen=True)
class DriveDerivedValues:
    """
    Values derived from a drive and (optionally) its paired power plant.

    Attributes:
        power: Kinetic power of the exhaust stream.
        total_mass: Drive mass including its specific power contribution (tons).
        power_plant_mass: Mass the paired plant contributes (tons), None if unpaired.
        waste_heat: Plant waste heat routed to radiators, None if unpaired.
    """
    power: float
    total_mass: float
    power_plant_mass: Optional[float] = None
    waste_heat: Optional[float] = None

    @property
    def is_paired(self) -> bool:
        return self.power_plant_mass is not None


def parse_cooling(drive: Drive) -> Cooling:
    """
    Resolve a drive's cooling mode.

    Raises:
        DataIntegrityError: If the cooling mode is not recognised.
    """
    try:
        return Cooling(drive.cooling)
    except ValueError:
        raise DataIntegrityError(
            f"Unsupported cooling type {drive.cooling!r} for drive {drive.data_name!r}"
        ) from None


def derive_drive_values(drive: Drive, power_plant: Optional[PowerPlant]) -> DriveDerivedValues:
    """
    Compute power, mass and heat for a drive paired with a power plant.

    Args:
        drive: The drive variant.
        power_plant: Paired plant, or None for a reactorless drive awaiting
            a default plant.

    Returns:
        New derived-value record; the drive itself is left untouched.

    Raises:
        DataIntegrityError: If the drive's cooling mode is not recognised.
    """
    cooling = parse_cooling(drive)

    power = 0.5 * drive.thrust_n * 1000 * drive.ev_kps
    # Some drives scale their mass with power instead of (or on top of) flat mass
    total_mass = drive.flat_mass_tons + power * drive.specific_power_kg_mw * 1e-6 * 1e-3

    if power_plant is None:
        return DriveDerivedValues(power=power, total_mass=total_mass)

    power_plant_mass = 0.0
    if drive.classification not in SELF_POWERED_CLASSIFICATIONS:
        power_plant_mass = power * power_plant.specific_power_t_gw * 1e-9

    waste_heat = 0.0
    if cooling in RADIATOR_COOLED:
        waste_heat = power * (1 - power_plant.efficiency)

    return DriveDerivedValues(
        power=power,
        total_mass=total_mass,
        power_plant_mass=power_plant_mass,
        waste_heat=waste_heat,
    )


# =============================================================================
# PAIRINGS
# =============================================================================

@dataclass(frozen=True)
class DrivePowerPlantPairing:
    """
    A drive family paired with the power plant it is evaluated against.

    Attributes:
        family: Drive family key.
        drives: Drive variants of the family, in catalog order.
        power_plant: Paired plant; None while a reactorless family has no default.
        derived: Derived values keyed by drive identifier.
        reactorless: Whether the family has no resolvable required plant class.
    """
    family: str
    drives: Tuple[Drive, ...]
    power_plant: Optional[PowerPlant]
    derived: Dict[str, DriveDerivedValues] = field(default_factory=dict, hash=False)
    reactorless: bool = False

    @property
    def is_paired(self) -> bool:
        return self.power_plant is not None

    def derived_for(self, drive: Drive) -> DriveDerivedValues:
        return self.derived[drive.data_name]


def pair_family(
    family: str,
    drives: Iterable[Drive],
    power_plant: Optional[PowerPlant],
    reactorless: bool = False,
) -> DrivePowerPlantPairing:
    """
    Pair every variant of a drive family with one power plant.

    Raises:
        DataIntegrityError: If any variant fails derivation.
    """
    drives = tuple(drives)
    derived = {drive.data_name: derive_drive_values(drive, power_plant) for drive in drives}
    return DrivePowerPlantPairing(
        family=family,
        drives=drives,
        power_plant=power_plant,
        derived=derived,
        reactorless=reactorless,
    )


def pair_drive_families(
    families: Dict[str, List[Drive]],
    best_power_plants: Dict[str, PowerPlant],
) -> List[DrivePowerPlantPairing]:
    """
    Pair each drive family with the best plant of its required class.

    The family's first variant decides the required class. Families whose
    class is absent or has no best plant are left unpaired (reactorless).
    """
    pairings = []
    for family, drives in families.items():
        required = drives[0].required_power_plant
        power_plant = best_power_plants.get(required) if required is not None else None
        pairings.append(
            pair_family(family, drives, power_plant, reactorless=power_plant is None)
        )
    return pairings


def repair_reactorless(
    pairings: Iterable[DrivePowerPlantPairing],
    default_power_plant: Optional[PowerPlant],
) -> List[DrivePowerPlantPairing]:
    """
    Re-derive reactorless families against a default power plant.

    Paired families are returned as they are. With no default plant,
    reactorless families stay unpaired.
    """
    result = []
    for pairing in pairings:
        if pairing.reactorless and default_power_plant is not None:
            pairing = pair_family(
                pairing.family, pairing.drives, default_power_plant, reactorless=True
            )
        result.append(pairing)
    return result
