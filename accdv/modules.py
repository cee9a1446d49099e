"""
Utility module effects on drive performance.

Two kinds of utility module change a configuration's numbers:
- Hydrogen modules multiply exhaust velocity for hydrogen-propellant drives
- Thrust spikers multiply thrust for drives of a compatible family

Modules are recognised by their special module rules; the multiplier is
the module's special module value.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Optional

from .components import Drive, UtilityModule


# =============================================================================
# MODULE RULES
# =============================================================================

HYDROGEN_EV_RULE = "HydrogenEVMultiplier"
THRUST_MULTIPLIER_RULE = "ThrustMultiplier"

REQUIRES_NUCLEAR_DRIVE_RULE = "RequiresNuclearDrive"
REQUIRES_FUSION_DRIVE_RULE = "RequiresFusionDrive"

HYDROGEN_PROPELLANT = "Hydrogen"

# Drive classifications each spiker requirement accepts
SPIKER_REQUIREMENTS: Dict[str, FrozenSet[str]] = {
    REQUIRES_NUCLEAR_DRIVE_RULE: frozenset({"Fission_Thermal", "Fusion_Thermal"}),
    REQUIRES_FUSION_DRIVE_RULE: frozenset({"Fusion_Thermal"}),
}


def is_hydrogen_module(module: UtilityModule) -> bool:
    return module.has_rule(HYDROGEN_EV_RULE)


def is_spiker(module: UtilityModule) -> bool:
    return module.has_rule(THRUST_MULTIPLIER_RULE)


def selectable_hydrogen_modules(modules: Iterable[UtilityModule]) -> Dict[str, UtilityModule]:
    return {m.data_name: m for m in modules if m.is_selectable and is_hydrogen_module(m)}


def selectable_spikers(modules: Iterable[UtilityModule]) -> Dict[str, UtilityModule]:
    return {m.data_name: m for m in modules if m.is_selectable and is_spiker(m)}


# =============================================================================
# MULTIPLIERS
# =============================================================================

def _module_multiplier(module: UtilityModule) -> float:
    return 1.0 if module.value is None else module.value


def hydrogen_multiplier(drive: Drive, module: Optional[UtilityModule]) -> float:
    """
    Exhaust velocity multiplier a hydrogen module gives a drive.

    Returns:
        The module's multiplier for hydrogen-propellant drives, else 1.
    """
    if module is None or drive.propellant != HYDROGEN_PROPELLANT:
        return 1.0
    return _module_multiplier(module)


def spiker_accepts(spiker: UtilityModule, drive: Drive) -> bool:
    """
    Check whether a spiker's drive requirement accepts a drive.

    A spiker without a requirement rule accepts every drive. With several
    requirement rules, the drive must satisfy all of them.
    """
    for rule, classifications in SPIKER_REQUIREMENTS.items():
        if spiker.has_rule(rule) and drive.classification not in classifications:
            return False
    return True


def spiker_multiplier(drive: Drive, spiker: Optional[UtilityModule]) -> float:
    """
    Thrust multiplier a spiker gives a drive.

    Returns:
        The spiker's multiplier when it accepts the drive, else 1.
    """
    if spiker is None or not spiker_accepts(spiker, drive):
        return 1.0
    return _module_multiplier(spiker)
