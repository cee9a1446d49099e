"""
Radiator sizing for the acceleration / delta-v calculator.

Waste heat from a drive's power plant must be rejected by radiators. The
radiator mass needed scales linearly with that heat and inversely with the
radiator type's specific power.

Based on Terra Invicta radiator mechanics.
"""

from __future__ import annotations

from .components import DataIntegrityError, Radiator


def tons_per_waste_heat(radiator: Radiator) -> float:
    """
    Radiator mass needed per unit of waste heat, before unit scaling.

    Raises:
        DataIntegrityError: If the radiator's specific power is not positive.
    """
    if radiator.specific_power_kw_kg <= 0:
        raise DataIntegrityError(
            f"Radiator {radiator.data_name!r} has non-positive specific power"
        )
    return 1000 / radiator.specific_power_kw_kg


def radiator_mass(waste_heat: float, radiator: Radiator) -> float:
    """
    Calculate the radiator mass needed to reject a drive's waste heat.

    Args:
        waste_heat: Waste heat from the drive/power plant pairing.
        radiator: Selected radiator type.

    Returns:
        Radiator mass in tons.
    """
    return waste_heat * tons_per_waste_heat(radiator) * 1e-9
