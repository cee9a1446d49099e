"""
Component records for the Terra Invicta acceleration / delta-v calculator.

This module defines the immutable catalog entries read from the game's
template tables:
- Drives (TIDriveTemplate.json)
- Power plants (TIPowerPlantTemplate.json)
- Radiators (TIRadiatorTemplate.json)
- Utility modules (TIUtilityModuleTemplate.json)
- Ship hulls (TIShipHullTemplate.json)
- Ship armor (TIShipArmorTemplate.json)

Records are created once per data version through ``from_template`` and are
never mutated afterwards. Derived values live in separate records (see
``power.DriveDerivedValues`` and ``evaluator.DrivePerformance``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


# =============================================================================
# EXCEPTIONS
# =============================================================================

class DataIntegrityError(ValueError):
    """A catalog record cannot be processed without corrupting results."""


class UnknownComponentError(KeyError):
    """A configuration references an identifier absent from the catalog."""

    def __init__(self, kind: str, data_name: str):
        super().__init__(f"Unknown {kind}: {data_name!r}")
        self.kind = kind
        self.data_name = data_name

    def __str__(self) -> str:
        return self.args[0]


# =============================================================================
# CONSTANTS
# =============================================================================

# Project gates that mark alien or faction-restricted components
RESTRICTED_PROJECT_PREFIXES: Tuple[str, ...] = ("Project_Alien",)

MaterialCostSet = Dict[str, float]


class Cooling(Enum):
    """Drive cooling modes."""
    CLOSED = "Closed"
    CALC = "Calc"
    OPEN = "Open"


# =============================================================================
# FIELD PARSING
# =============================================================================

def parse_float(value: Any, field_name: str = "value") -> float:
    """
    Parse a float that may have comma as thousand separator.

    Raises:
        DataIntegrityError: If the value is not numeric.
    """
    if isinstance(value, bool):
        raise DataIntegrityError(f"{field_name} must be numeric, got bool")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.replace(",", ""))
        except ValueError:
            pass
    raise DataIntegrityError(f"{field_name} must be numeric, got {value!r}")


def _require(data: dict, key: str) -> Any:
    if key not in data or data[key] is None:
        name = data.get("dataName", "<unknown>")
        raise DataIntegrityError(f"Template {name!r} is missing required field {key!r}")
    return data[key]


def _float(data: dict, key: str) -> float:
    return parse_float(_require(data, key), f"{data.get('dataName', '<unknown>')}.{key}")


def _optional_float(data: dict, key: str) -> Optional[float]:
    if data.get(key) is None:
        return None
    return _float(data, key)


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _materials(data: dict, key: str) -> MaterialCostSet:
    raw = data.get(key) or {}
    return {
        str(resource): parse_float(amount, f"{data.get('dataName', '<unknown>')}.{key}.{resource}")
        for resource, amount in raw.items()
    }


# =============================================================================
# COMPONENTS
# =============================================================================

@dataclass(frozen=True)
class Component:
    """
    Base catalog entry.

    Attributes:
        data_name: Identifier, unique within its catalog.
        friendly_name: Display name.
        required_project: Research project gating the component, if any.
        alien: Explicit alien flag from the template.
        disabled: Explicit disable flag from the template.
    """
    data_name: str
    friendly_name: str
    required_project: Optional[str] = None
    alien: bool = False
    disabled: bool = False

    @property
    def is_selectable(self) -> bool:
        """Whether the component may be offered as a player option."""
        if self.alien or self.disabled:
            return False
        if self.required_project is None:
            return True
        return not self.required_project.startswith(RESTRICTED_PROJECT_PREFIXES)

    @staticmethod
    def _base_fields(data: dict) -> dict:
        data_name = str(_require(data, "dataName"))
        return {
            "data_name": data_name,
            "friendly_name": str(data.get("friendlyName") or data_name),
            "required_project": _optional_str(data, "requiredProjectName"),
            "alien": bool(data.get("alien", False)),
            "disabled": bool(data.get("disable", False)),
        }


@dataclass(frozen=True)
class Drive(Component):
    """
    A propulsion drive variant.

    Attributes:
        classification: Propulsion family (e.g. "Chemical", "Fusion_Thermal").
        thrust_n: Raw thrust.
        ev_kps: Effective exhaust velocity in km/s.
        specific_power_kg_mw: Specific power of the drive itself.
        efficiency: Base drive efficiency.
        flat_mass_tons: Flat mass of the drive.
        required_power_plant: Power plant class required, None if reactorless.
        thrust_cap: Fraction of thrust usable in combat.
        cooling: Raw cooling mode string; validated during derivation.
        propellant: Propellant type (e.g. "Hydrogen").
        build_materials: Weighted build material costs.
        per_tank_propellant_materials: Propellant material cost per fuel tank.
    """
    classification: str = ""
    thrust_n: float = 0.0
    ev_kps: float = 0.0
    specific_power_kg_mw: float = 0.0
    efficiency: float = 0.0
    flat_mass_tons: float = 0.0
    required_power_plant: Optional[str] = None
    thrust_cap: float = 1.0
    cooling: str = Cooling.CLOSED.value
    propellant: Optional[str] = None
    build_materials: MaterialCostSet = field(default_factory=dict, hash=False)
    per_tank_propellant_materials: MaterialCostSet = field(default_factory=dict, hash=False)

    @classmethod
    def from_template(cls, data: dict) -> Drive:
        """Create a drive from a TIDriveTemplate entry."""
        thrust_cap = _optional_float(data, "thrustCap")
        return cls(
            **cls._base_fields(data),
            classification=str(_require(data, "driveClassification")),
            thrust_n=_float(data, "thrust_N"),
            ev_kps=_float(data, "EV_kps"),
            specific_power_kg_mw=_optional_float(data, "specificPower_kgMW") or 0.0,
            efficiency=_optional_float(data, "efficiency") or 0.0,
            flat_mass_tons=_optional_float(data, "flatMass_tons") or 0.0,
            required_power_plant=_optional_str(data, "requiredPowerPlant"),
            thrust_cap=1.0 if thrust_cap is None else thrust_cap,
            cooling=str(_require(data, "cooling")),
            propellant=_optional_str(data, "propellant"),
            build_materials=_materials(data, "weightedBuildMaterials"),
            per_tank_propellant_materials=_materials(data, "perTankPropellantMaterials"),
        )


@dataclass(frozen=True)
class PowerPlant(Component):
    """
    A reactor / power plant.

    Attributes:
        power_plant_class: Class tag matched against drive requirements.
        efficiency: Conversion efficiency (0-1); waste heat = 1 - efficiency.
        specific_power_t_gw: Mass per unit power (tons per GW).
        max_output_gw: Maximum output, if listed.
    """
    power_plant_class: str = ""
    efficiency: float = 0.0
    specific_power_t_gw: float = 0.0
    max_output_gw: Optional[float] = None

    @classmethod
    def from_template(cls, data: dict) -> PowerPlant:
        """Create a power plant from a TIPowerPlantTemplate entry."""
        efficiency = _float(data, "efficiency")
        if not 0.0 <= efficiency <= 1.0:
            raise DataIntegrityError(
                f"Power plant {data['dataName']!r}: efficiency must be in [0, 1], got {efficiency}"
            )
        return cls(
            **cls._base_fields(data),
            power_plant_class=str(_require(data, "powerPlantClass")),
            efficiency=efficiency,
            specific_power_t_gw=_float(data, "specificPower_tGW"),
            max_output_gw=_optional_float(data, "maxOutput_GW"),
        )


@dataclass(frozen=True)
class Radiator(Component):
    """A radiator type, sized from the waste heat it must reject."""
    specific_power_kw_kg: float = 0.0

    @classmethod
    def from_template(cls, data: dict) -> Radiator:
        """Create a radiator from a TIRadiatorTemplate entry."""
        return cls(
            **cls._base_fields(data),
            specific_power_kw_kg=_float(data, "specificPower_2s_KWkg"),
        )


@dataclass(frozen=True)
class UtilityModule(Component):
    """
    A utility module. Only hydrogen modules and spikers affect performance.

    Attributes:
        rules: Special module rules (e.g. "ThrustMultiplier").
        value: Special module value; the multiplier for the relevant rules.
        mass_tons: Module mass.
    """
    rules: Tuple[str, ...] = ()
    value: Optional[float] = None
    mass_tons: float = 0.0

    @classmethod
    def from_template(cls, data: dict) -> UtilityModule:
        """Create a utility module from a TIUtilityModuleTemplate entry."""
        return cls(
            **cls._base_fields(data),
            rules=tuple(str(rule) for rule in data.get("specialModuleRules") or ()),
            value=_optional_float(data, "specialModuleValue"),
            mass_tons=_optional_float(data, "mass_tons") or 0.0,
        )

    def has_rule(self, rule: str) -> bool:
        return rule in self.rules


@dataclass(frozen=True)
class ShipHull(Component):
    """A ship hull with the geometry used for armor areas."""
    mass_tons: float = 0.0
    length_m: float = 0.0
    width_m: float = 0.0

    @classmethod
    def from_template(cls, data: dict) -> ShipHull:
        """Create a hull from a TIShipHullTemplate entry."""
        return cls(
            **cls._base_fields(data),
            mass_tons=_float(data, "mass_tons"),
            length_m=_float(data, "length_m"),
            width_m=_float(data, "width_m"),
        )


@dataclass(frozen=True)
class ShipArmor(Component):
    """An armor material."""
    heat_of_vaporization_mj_kg: float = 0.0

    @classmethod
    def from_template(cls, data: dict) -> ShipArmor:
        """Create an armor material from a TIShipArmorTemplate entry."""
        return cls(
            **cls._base_fields(data),
            heat_of_vaporization_mj_kg=_float(data, "heatofVaporization_MJkg"),
        )
