"""
Mass and performance model for an electric-propulsion stage.

Implements the static single-burn balance of a stage built from one engine,
a number of propellant tanks and a number of batteries:
- Dry and wet mass of a build configuration
- Delta-v (Tsiolkovsky rocket equation) and thrust-to-weight
- Propellant required for a target delta-v (inverted rocket equation)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional

from .constants import StageParts


# =============================================================================
# BUILD CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class BuildConfiguration:
    """
    A stage build: how many tanks and batteries, plus extra payload.

    Attributes:
        tank_count: Number of propellant tanks (>= 1).
        battery_count: Number of batteries (>= 0).
        dead_weight_kg: Added mass that does nothing (kg, >= 0).
    """
    tank_count: int
    battery_count: int = 0
    dead_weight_kg: float = 0.0

    def __post_init__(self) -> None:
        if isinstance(self.tank_count, bool) or not isinstance(self.tank_count, int):
            raise ValueError(f"Tank count must be an integer, got {self.tank_count!r}")
        if self.tank_count < 1:
            raise ValueError(f"Tank count must be at least 1, got {self.tank_count}")
        if isinstance(self.battery_count, bool) or not isinstance(self.battery_count, int):
            raise ValueError(f"Battery count must be an integer, got {self.battery_count!r}")
        if self.battery_count < 0:
            raise ValueError(f"Battery count must be non-negative, got {self.battery_count}")
        if not self.dead_weight_kg >= 0:
            raise ValueError(f"Dead weight must be non-negative, got {self.dead_weight_kg}")

    def with_batteries(self, battery_count: int) -> BuildConfiguration:
        """Return the same build with a different battery count."""
        return replace(self, battery_count=battery_count)


# =============================================================================
# MASS MODEL
# =============================================================================

def dry_and_wet_mass(parts: StageParts, config: BuildConfiguration) -> tuple[float, float]:
    """
    Calculate dry and wet mass of a build.

    Args:
        parts: Engine, tank and battery specifications.
        config: Tank count, battery count and dead weight.

    Returns:
        (dry_mass_kg, wet_mass_kg), wet mass having every tank full.
    """
    dry_mass = (
        parts.engine.dry_mass_kg
        + parts.tank.dry_mass_kg * config.tank_count
        + parts.battery.mass_kg * config.battery_count
        + config.dead_weight_kg
    )
    wet_mass = dry_mass + parts.tank.propellant_mass_kg * config.tank_count
    return dry_mass, wet_mass


def max_propellant(parts: StageParts, tank_count: int) -> float:
    """Total propellant the tanks hold (units)."""
    return tank_count * parts.tank.capacity


# =============================================================================
# PERFORMANCE MODEL
# =============================================================================

def delta_v(parts: StageParts, dry_mass_kg: float, wet_mass_kg: float) -> float:
    """
    Calculate delta-v using the Tsiolkovsky rocket equation.

    delta_v = Isp * g0 * ln(m_wet / m_dry)

    Args:
        parts: Stage parts (engine Isp and g0 are used).
        dry_mass_kg: Mass after the burn (kg).
        wet_mass_kg: Mass before the burn (kg).

    Returns:
        Delta-v in m/s.
    """
    return parts.exhaust_velocity_ms * math.log(wet_mass_kg / dry_mass_kg)


def thrust_to_weight(parts: StageParts, wet_mass_kg: float) -> float:
    """Thrust-to-weight ratio at local gravity."""
    return parts.engine.thrust_n / wet_mass_kg / parts.g_local


def max_delta_v(parts: StageParts, config: BuildConfiguration) -> float:
    """Delta-v of a build when burning every tank dry."""
    dry_mass, wet_mass = dry_and_wet_mass(parts, config)
    return delta_v(parts, dry_mass, wet_mass)


# =============================================================================
# PROPELLANT DEMAND
# =============================================================================

def propellant_required_for_delta_v(
    parts: StageParts,
    target_delta_v_ms: float,
    wet_mass_kg: float,
    max_propellant_units: float,
) -> Optional[float]:
    """
    Calculate propellant needed to reach a delta-v from a given wet mass.

    From Tsiolkovsky: m_wet / m_dry = exp(delta_v / (Isp * g0)) = k
    so m_dry = m_wet / k and the burned mass is m_wet - m_dry:

        propellant = (k - 1) * m_wet / k / density

    Args:
        parts: Stage parts (Isp, g0 and propellant density are used).
        target_delta_v_ms: Desired delta-v (m/s).
        wet_mass_kg: Mass at ignition (kg).
        max_propellant_units: What the tanks can hold (units).

    Returns:
        Required propellant in units, or None if the tanks cannot hold it.
    """
    mass_ratio = math.exp(target_delta_v_ms / parts.exhaust_velocity_ms)
    required = (mass_ratio - 1.0) * wet_mass_kg / mass_ratio / parts.tank.propellant_density

    if required <= max_propellant_units:
        return required
    return None
