"""
Sweep driver: runs the battery solver over every tank count and target
delta-v for each dead-weight scenario.

Each cell of a sweep is an independent solve; nothing is shared between
cells, so a cell that cannot be built never affects its neighbours.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from .config import SweepConfig
from .constants import DAWN_STAGE, StageParts
from .solver import (
    DEFAULT_MAX_ITERATIONS,
    SizingResult,
    SolverObserver,
    SolverOutcome,
    size_stage,
)

logger = logging.getLogger(__name__)


# =============================================================================
# RESULTS MATRIX
# =============================================================================

class ResultsMatrix:
    """
    Sizing results for one dead-weight scenario.

    Rows follow tank_counts and columns follow target_delta_vs. A cell
    holds a SizingResult, or None when the stage cannot be built.
    """

    def __init__(
        self,
        tank_counts: Sequence[int],
        target_delta_vs: Sequence[float],
        dead_weight_kg: float = 0.0,
    ):
        self.tank_counts = list(tank_counts)
        self.target_delta_vs = list(target_delta_vs)
        self.dead_weight_kg = dead_weight_kg
        shape = (len(self.tank_counts), len(self.target_delta_vs))
        self._cells = np.full(shape, None, dtype=object)
        self._outcomes = np.full(shape, None, dtype=object)

    @property
    def shape(self) -> tuple[int, int]:
        return self._cells.shape

    def __getitem__(self, index: tuple[int, int]) -> Optional[SizingResult]:
        return self._cells[index]

    def set_cell(
        self,
        tank_index: int,
        dv_index: int,
        result: Optional[SizingResult],
        outcome: SolverOutcome,
    ) -> None:
        """Store the result and solver outcome of one cell."""
        self._cells[tank_index, dv_index] = result
        self._outcomes[tank_index, dv_index] = outcome

    def outcome(self, tank_index: int, dv_index: int) -> Optional[SolverOutcome]:
        """How the solve for one cell ended, None if not yet solved."""
        return self._outcomes[tank_index, dv_index]

    def rows(self):
        """Yield (tank_count, [cell, ...]) per row."""
        for tank_index, tank_count in enumerate(self.tank_counts):
            yield tank_count, list(self._cells[tank_index])

    def to_array(self, attribute: str) -> np.ndarray:
        """
        Extract one SizingResult attribute as a float array.

        Args:
            attribute: "delta_v_ms", "twr" or "battery_count".

        Returns:
            Array shaped like the matrix, NaN where no result exists.
        """
        if attribute not in ("delta_v_ms", "twr", "battery_count"):
            raise ValueError(f"Unknown result attribute '{attribute}'")
        values = np.full(self.shape, np.nan)
        for index, cell in np.ndenumerate(self._cells):
            if cell is not None:
                values[index] = getattr(cell, attribute)
        return values

    def summary(self) -> Dict[str, int]:
        """Count cells by solver outcome."""
        counts = {outcome.value: 0 for outcome in SolverOutcome}
        for outcome in self._outcomes.flat:
            if outcome is not None:
                counts[outcome.value] += 1
        return counts


# =============================================================================
# SWEEP
# =============================================================================

@dataclass
class ScenarioResults:
    """The results matrix of one dead-weight scenario."""
    dead_weight_kg: float
    matrix: ResultsMatrix
    summary: Dict[str, int] = field(default_factory=dict)


def generate_results(
    dead_weight_kg: float,
    tank_counts: Sequence[int],
    target_delta_vs: Sequence[float],
    parts: StageParts = DAWN_STAGE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    observer: Optional[SolverObserver] = None,
) -> ResultsMatrix:
    """
    Solve every (tank count, target delta-v) cell for one dead weight.

    Args:
        dead_weight_kg: Added mass for every cell (kg).
        tank_counts: Row domain.
        target_delta_vs: Column domain (m/s).
        parts: Stage parts.
        max_iterations: Solver iteration cap.
        observer: Optional solver step observer, shared by all cells.

    Returns:
        Filled ResultsMatrix.
    """
    matrix = ResultsMatrix(tank_counts, target_delta_vs, dead_weight_kg)

    for dv_index, target_dv in enumerate(matrix.target_delta_vs):
        for tank_index, tank_count in enumerate(matrix.tank_counts):
            result, report = size_stage(
                parts,
                tank_count,
                target_dv,
                dead_weight_kg,
                max_iterations=max_iterations,
                observer=observer,
            )
            matrix.set_cell(tank_index, dv_index, result, report.outcome)

    return matrix


def run_scenarios(
    config: SweepConfig,
    parts: StageParts = DAWN_STAGE,
    observer: Optional[SolverObserver] = None,
) -> List[ScenarioResults]:
    """
    Run the sweep for every dead-weight scenario in a configuration.

    Raises:
        ValueError: If the configuration is invalid; raised before any
            cell is solved.
    """
    config.validate()

    scenarios = []
    for dead_weight in config.dead_weights:
        logger.info("Sizing scenario with %s kg dead weight", dead_weight)
        matrix = generate_results(
            float(dead_weight),
            config.tank_counts,
            config.target_delta_vs,
            parts=parts,
            max_iterations=config.max_iterations,
            observer=observer,
        )
        summary = matrix.summary()
        logger.info("Scenario %s kg: %s", dead_weight, summary)
        scenarios.append(ScenarioResults(
            dead_weight_kg=dead_weight,
            matrix=matrix,
            summary=summary,
        ))
    return scenarios
