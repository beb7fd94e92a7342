"""
Fixed-point battery sizing.

Adding batteries adds mass, more mass needs more propellant for the same
delta-v, and more propellant needs more energy to burn. The solver walks
the battery count upward from zero until the count it feeds in covers the
count the energy demand asks for:

    trial = 0
    repeat:
        wet mass at trial -> propellant for target -> energy -> batteries
        if trial >= batteries: done, answer is batteries
        trial = batteries

The walk stops early when the tanks cannot hold the propellant needed,
since more batteries only make that worse, and gives up after a bounded
number of iterations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .constants import StageParts
from .physics import (
    BuildConfiguration,
    delta_v,
    dry_and_wet_mass,
    max_delta_v,
    max_propellant,
    propellant_required_for_delta_v,
    thrust_to_weight,
)
from .power import batteries_for_energy, energy_required_for_propellant

logger = logging.getLogger(__name__)


# Iteration cap per solve
DEFAULT_MAX_ITERATIONS = 100


# =============================================================================
# SOLVER TYPES
# =============================================================================

class SolverOutcome(Enum):
    """How a solve ended."""
    CONVERGED = "converged"
    CAPACITY_INFEASIBLE = "capacity_infeasible"
    NON_CONVERGENCE = "non_convergence"


@dataclass(frozen=True)
class SolverStep:
    """
    One trial of the fixed-point iteration.

    Attributes:
        iteration: Zero-based iteration index.
        battery_count: Trial battery count fed into the mass model.
        dry_mass_kg: Dry mass at the trial count (kg).
        wet_mass_kg: Wet mass at the trial count (kg).
        required_propellant: Propellant needed (units), None if over capacity.
        required_energy_ec: Energy needed to burn it (EC), None if over capacity.
        required_batteries: Batteries needed for that energy, None if over capacity.
    """
    iteration: int
    battery_count: int
    dry_mass_kg: float
    wet_mass_kg: float
    required_propellant: Optional[float] = None
    required_energy_ec: Optional[float] = None
    required_batteries: Optional[int] = None

    def __str__(self) -> str:
        if self.required_batteries is None:
            return (
                f"#{self.iteration} batteries={self.battery_count} "
                f"wet={self.wet_mass_kg:.2f}kg over capacity"
            )
        return (
            f"#{self.iteration} batteries={self.battery_count} "
            f"wet={self.wet_mass_kg:.2f}kg propellant={self.required_propellant:.3f} "
            f"energy={self.required_energy_ec:.2f}EC -> {self.required_batteries}"
        )


SolverObserver = Callable[[SolverStep], None]


@dataclass
class SolveReport:
    """
    Result of one fixed-point solve.

    Attributes:
        outcome: Why the solve stopped.
        battery_count: Final battery count, only set when converged.
        iterations: Number of iterations run.
        trials: Battery counts tried, in order.
    """
    outcome: SolverOutcome
    battery_count: Optional[int] = None
    iterations: int = 0
    trials: List[int] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        """Check if a battery count was found."""
        return self.outcome == SolverOutcome.CONVERGED


@dataclass(frozen=True)
class SizingResult:
    """
    A feasible stage: the battery count and what the stage actually achieves.

    Attributes:
        delta_v_ms: Delta-v with every tank burned (m/s).
        twr: Thrust-to-weight ratio at local gravity, full tanks.
        battery_count: Batteries carried.
    """
    delta_v_ms: float
    twr: float
    battery_count: int

    def to_cell_text(self) -> str:
        """Format as a three-line table cell."""
        return (
            f"{self.delta_v_ms:.2f} m/s ΔV\n"
            f"{self.twr:.3f} TWR\n"
            f"{self.battery_count} batteries"
        )


# =============================================================================
# SOLVER
# =============================================================================

def _notify(observer: Optional[SolverObserver], step: SolverStep) -> None:
    logger.debug("Battery trial %s", step)
    if observer is None:
        return
    try:
        observer(step)
    except Exception as e:
        logger.warning("Solver observer error: %s", e)


def solve_battery_count(
    parts: StageParts,
    tank_count: int,
    target_delta_v_ms: float,
    dead_weight_kg: float = 0.0,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    observer: Optional[SolverObserver] = None,
) -> SolveReport:
    """
    Find the smallest self-consistent battery count for a build.

    Args:
        parts: Engine, tank and battery specifications.
        tank_count: Number of tanks (>= 1).
        target_delta_v_ms: Delta-v the single burn must reach (m/s).
        dead_weight_kg: Added mass (kg, >= 0).
        max_iterations: Iteration cap (>= 1).
        observer: Optional callable receiving every SolverStep.

    Returns:
        SolveReport. When converged, battery_count is the count the energy
        demand asked for at the fixed point, which may be below the last
        trial count.

    Raises:
        ValueError: If the build or the iteration cap is invalid.
    """
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
    config = BuildConfiguration(tank_count=tank_count, dead_weight_kg=dead_weight_kg)
    propellant_limit = max_propellant(parts, tank_count)

    current = 0
    trials: List[int] = []

    for iteration in range(max_iterations):
        trials.append(current)
        dry_mass, wet_mass = dry_and_wet_mass(parts, config.with_batteries(current))

        required = propellant_required_for_delta_v(
            parts, target_delta_v_ms, wet_mass, propellant_limit
        )
        if required is None:
            _notify(observer, SolverStep(iteration, current, dry_mass, wet_mass))
            logger.debug(
                "Over capacity at %d batteries: full tanks give %.2f m/s of %.2f m/s",
                current, max_delta_v(parts, config.with_batteries(current)), target_delta_v_ms,
            )
            return SolveReport(
                outcome=SolverOutcome.CAPACITY_INFEASIBLE,
                iterations=iteration + 1,
                trials=trials,
            )

        energy = energy_required_for_propellant(parts, required)
        new_count = batteries_for_energy(parts, energy)
        _notify(observer, SolverStep(
            iteration, current, dry_mass, wet_mass, required, energy, new_count
        ))

        if current >= new_count:
            return SolveReport(
                outcome=SolverOutcome.CONVERGED,
                battery_count=new_count,
                iterations=iteration + 1,
                trials=trials,
            )
        current = new_count

    logger.warning(
        "No fixed point within %d iterations (tanks=%d, target=%.0f m/s, dead weight=%.0f kg)",
        max_iterations, tank_count, target_delta_v_ms, dead_weight_kg,
    )
    return SolveReport(
        outcome=SolverOutcome.NON_CONVERGENCE,
        iterations=max_iterations,
        trials=trials,
    )


def evaluate_build(parts: StageParts, config: BuildConfiguration) -> SizingResult:
    """Achieved delta-v and TWR of a build with full tanks."""
    dry_mass, wet_mass = dry_and_wet_mass(parts, config)
    return SizingResult(
        delta_v_ms=delta_v(parts, dry_mass, wet_mass),
        twr=thrust_to_weight(parts, wet_mass),
        battery_count=config.battery_count,
    )


def size_stage(
    parts: StageParts,
    tank_count: int,
    target_delta_v_ms: float,
    dead_weight_kg: float = 0.0,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    observer: Optional[SolverObserver] = None,
) -> tuple[Optional[SizingResult], SolveReport]:
    """
    Solve for the battery count and evaluate the resulting stage.

    Returns:
        (result, report). result is None unless the solve converged.
    """
    report = solve_battery_count(
        parts, tank_count, target_delta_v_ms, dead_weight_kg, max_iterations, observer
    )
    if not report.converged:
        return None, report

    config = BuildConfiguration(
        tank_count=tank_count,
        battery_count=report.battery_count,
        dead_weight_kg=dead_weight_kg,
    )
    return evaluate_build(parts, config), report
