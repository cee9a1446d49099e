"""
Rocket performance for the acceleration / delta-v calculator.

Implements:
- Delta-v calculations (Tsiolkovsky rocket equation)
- Acceleration in gravities from thrust and wet mass

Masses are in tons and exhaust velocity in km/s, matching the game's
template tables.
"""

from __future__ import annotations

import math


# =============================================================================
# PHYSICAL CONSTANTS
# =============================================================================

# Standard gravity (m/s^2)
G_STANDARD = 9.81


# =============================================================================
# DELTA-V CALCULATIONS (TSIOLKOVSKY EQUATION)
# =============================================================================

def tsiolkovsky_delta_v(
    exhaust_velocity_kps: float,
    wet_mass: float,
    dry_mass: float
) -> float:
    """
    Calculate delta-v using the Tsiolkovsky rocket equation.

    delta_v = v_e * ln(m_wet / m_dry)

    Args:
        exhaust_velocity_kps: Effective exhaust velocity (km/s)
        wet_mass: Mass with propellant
        dry_mass: Mass without propellant

    Returns:
        Delta-v in km/s

    Raises:
        ValueError: If dry mass is not positive or exceeds wet mass.
    """
    if dry_mass <= 0:
        raise ValueError("dry mass must be > 0.")
    if wet_mass < dry_mass:
        raise ValueError("wet mass must be >= dry mass.")

    return exhaust_velocity_kps * math.log(wet_mass / dry_mass)


# =============================================================================
# ACCELERATION
# =============================================================================

def acceleration_gs(thrust: float, thrust_cap: float, wet_mass: float) -> float:
    """
    Calculate acceleration in gravities at full (capped) thrust.

    Args:
        thrust: Drive thrust
        thrust_cap: Fraction of thrust usable
        wet_mass: Mass with propellant

    Returns:
        Acceleration in g
    """
    if wet_mass <= 0:
        raise ValueError("wet mass must be > 0.")
    return (thrust * thrust_cap / wet_mass) / G_STANDARD
