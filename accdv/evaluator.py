"""
Configuration evaluation for the acceleration / delta-v calculator.

Given the preprocessed drive/power plant pairings and a player's loadout,
this module produces per-drive mass and performance figures:

1. Reactorless families are re-derived against the default power plant
2. Radiators are sized from each drive's waste heat
3. Hull, armor and fuel mass are added to drive and plant mass
4. Delta-v follows from the rocket equation, boosted by hydrogen modules
5. Acceleration follows from capped thrust, boosted by compatible spikers

Nothing here mutates the pairings it is given; every call returns fresh
records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from .components import Drive, MaterialCostSet, PowerPlant, Radiator, UtilityModule
from .modules import hydrogen_multiplier, spiker_multiplier
from .physics import acceleration_gs, tsiolkovsky_delta_v
from .power import DriveDerivedValues, DrivePowerPlantPairing, repair_reactorless
from .structure import ArmorThickness, StructuralMass
from .thermal import radiator_mass


# =============================================================================
# OPTIONS
# =============================================================================

@dataclass(frozen=True)
class ConfigurationOptions:
    """
    A player's loadout, by component identifier.

    Attributes:
        radiator: Radiator identifier.
        payload: Payload mass (tons).
        num_fuel_tanks: Number of fuel tanks.
        default_power_plant: Power plant for reactorless drive families.
        hydrogen: Hydrogen module identifier, if fitted.
        spiker: Thrust spiker identifier, if fitted.
        hull: Hull identifier, if any.
        armor: Armor material identifier, if any.
        armor_thickness: Armor thickness per hull section.
    """
    radiator: str
    payload: float = 0.0
    num_fuel_tanks: int = 0
    default_power_plant: Optional[str] = None
    hydrogen: Optional[str] = None
    spiker: Optional[str] = None
    hull: Optional[str] = None
    armor: Optional[str] = None
    armor_thickness: ArmorThickness = field(default_factory=ArmorThickness)

    def __post_init__(self) -> None:
        """Validate option values."""
        if not self.radiator:
            raise ValueError("radiator must not be empty.")
        if self.payload < 0:
            raise ValueError("payload must be >= 0.")
        if self.num_fuel_tanks < 0:
            raise ValueError("num_fuel_tanks must be >= 0.")


@dataclass(frozen=True)
class EvaluationContext:
    """Options with their components resolved against a data session."""
    radiator: Radiator
    structure: StructuralMass
    payload: float = 0.0
    num_fuel_tanks: int = 0
    default_power_plant: Optional[PowerPlant] = None
    hydrogen: Optional[UtilityModule] = None
    spiker: Optional[UtilityModule] = None


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class DrivePerformance:
    """
    Mass and performance of one drive in one configuration.

    Attributes:
        drive: The drive variant.
        derived: Drive/power plant values the figures were built from.
        radiator_mass: Radiator mass for the drive's waste heat (tons).
        dry_mass: Mass without propellant (tons).
        fuel_mass: Propellant mass (tons).
        wet_mass: Mass with propellant (tons).
        delta_v: Delta-v (km/s).
        accel: Acceleration at capped thrust (g).
        hydrogen_multiplier: Exhaust velocity multiplier applied.
        spiker_multiplier: Thrust multiplier applied.
        propellant_cost: Material cost of the loaded propellant.
    """
    drive: Drive
    derived: DriveDerivedValues
    radiator_mass: float
    dry_mass: float
    fuel_mass: float
    wet_mass: float
    delta_v: float
    accel: float
    hydrogen_multiplier: float = 1.0
    spiker_multiplier: float = 1.0
    propellant_cost: MaterialCostSet = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class EvaluatedPairing:
    """A drive/power plant pairing with per-drive performance attached."""
    pairing: DrivePowerPlantPairing
    performance: Dict[str, DrivePerformance] = field(default_factory=dict, hash=False)

    @property
    def family(self) -> str:
        return self.pairing.family

    @property
    def drives(self):
        return self.pairing.drives

    @property
    def power_plant(self) -> Optional[PowerPlant]:
        return self.pairing.power_plant

    @property
    def is_evaluated(self) -> bool:
        return self.pairing.is_paired


@dataclass(frozen=True)
class ConfigurationResult:
    """
    Output of one configuration evaluation.

    Attributes:
        pairings: Every drive/power plant pairing, evaluated where paired.
        structure: Hull, armor and fuel mass breakdown.
    """
    pairings: List[EvaluatedPairing]
    structure: StructuralMass

    def evaluated(self) -> List[EvaluatedPairing]:
        """Pairings with a power plant, i.e. with performance figures."""
        return [p for p in self.pairings if p.is_evaluated]

    def iter_performance(self) -> Iterator[DrivePerformance]:
        for pairing in self.pairings:
            for drive in pairing.drives:
                if drive.data_name in pairing.performance:
                    yield pairing.performance[drive.data_name]


# =============================================================================
# EVALUATION
# =============================================================================

def _propellant_cost(drive: Drive, num_fuel_tanks: int) -> MaterialCostSet:
    return {
        resource: amount * num_fuel_tanks
        for resource, amount in drive.per_tank_propellant_materials.items()
    }


def evaluate_drive(
    drive: Drive,
    derived: DriveDerivedValues,
    context: EvaluationContext,
) -> DrivePerformance:
    """
    Compute mass and performance for a paired drive.

    Args:
        drive: The drive variant.
        derived: Its values for the paired power plant.
        context: Resolved configuration.

    Returns:
        DrivePerformance for the drive.

    Raises:
        ValueError: If the drive is unpaired or the dry mass is not positive.
    """
    if not derived.is_paired:
        raise ValueError(f"Drive {drive.data_name!r} has no power plant pairing")

    structure = context.structure
    rad_mass = radiator_mass(derived.waste_heat, context.radiator)

    dry_mass = (
        derived.total_mass
        + derived.power_plant_mass
        + rad_mass
        + structure.hull
        + structure.armor
        + context.payload
    )
    wet_mass = dry_mass + structure.fuel

    h_mult = hydrogen_multiplier(drive, context.hydrogen)
    delta_v = h_mult * tsiolkovsky_delta_v(drive.ev_kps, wet_mass, dry_mass)

    s_mult = spiker_multiplier(drive, context.spiker)
    accel = s_mult * acceleration_gs(drive.thrust_n, drive.thrust_cap, wet_mass)

    return DrivePerformance(
        drive=drive,
        derived=derived,
        radiator_mass=rad_mass,
        dry_mass=dry_mass,
        fuel_mass=structure.fuel,
        wet_mass=wet_mass,
        delta_v=delta_v,
        accel=accel,
        hydrogen_multiplier=h_mult,
        spiker_multiplier=s_mult,
        propellant_cost=_propellant_cost(drive, context.num_fuel_tanks),
    )


def evaluate_pairings(
    pairings: Sequence[DrivePowerPlantPairing],
    context: EvaluationContext,
) -> ConfigurationResult:
    """
    Evaluate every drive pairing for a configuration.

    Reactorless families are re-derived against the context's default
    power plant first. Families still without a plant pass through with
    no performance attached.
    """
    evaluated = []
    for pairing in repair_reactorless(pairings, context.default_power_plant):
        performance = {}
        if pairing.is_paired:
            for drive in pairing.drives:
                performance[drive.data_name] = evaluate_drive(
                    drive, pairing.derived_for(drive), context
                )
        evaluated.append(EvaluatedPairing(pairing=pairing, performance=performance))

    return ConfigurationResult(pairings=evaluated, structure=context.structure)
