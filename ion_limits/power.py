"""
Electrical energy demand of a burn.

The engine draws electric charge in proportion to the propellant it
processes, so a burn that uses a given amount of propellant needs a fixed
amount of stored energy. Batteries are whole parts: any fractional
requirement rounds up to the next battery.
"""

from __future__ import annotations

import math

from .constants import StageParts


def energy_required_for_propellant(parts: StageParts, propellant_units: float) -> float:
    """
    Calculate the electric charge needed to burn an amount of propellant.

    energy = propellant * power_drain / propellant_drain

    Args:
        parts: Stage parts (engine drain rates are used).
        propellant_units: Propellant burned (units).

    Returns:
        Required energy in EC.
    """
    return propellant_units * parts.engine.energy_per_unit


def batteries_for_energy(parts: StageParts, energy_ec: float) -> int:
    """Smallest number of batteries storing at least energy_ec."""
    if energy_ec <= 0:
        return 0
    return math.ceil(energy_ec / parts.battery.capacity_ec)


def batteries_required_for_propellant(parts: StageParts, propellant_units: float) -> int:
    """Batteries needed to burn an amount of propellant in one go."""
    return batteries_for_energy(parts, energy_required_for_propellant(parts, propellant_units))
