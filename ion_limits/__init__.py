"""Limits of Ions: battery sizing for single-burn electric-propulsion stages."""

from .constants import (
    # Constants
    G_0,
    G_KERBIN,
    # Part specifications
    EngineSpec,
    TankSpec,
    BatterySpec,
    StageParts,
    # Reference parts
    DAWN_ENGINE,
    XENON_TANK,
    Z100_BATTERY,
    DAWN_STAGE,
)

from .physics import (
    BuildConfiguration,
    dry_and_wet_mass,
    max_propellant,
    delta_v,
    thrust_to_weight,
    max_delta_v,
    propellant_required_for_delta_v,
)

from .power import (
    energy_required_for_propellant,
    batteries_for_energy,
    batteries_required_for_propellant,
)

from .solver import (
    DEFAULT_MAX_ITERATIONS,
    SolverOutcome,
    SolverStep,
    SolveReport,
    SizingResult,
    solve_battery_count,
    evaluate_build,
    size_stage,
)

from .config import SweepConfig, load_part_data

from .sweep import (
    ResultsMatrix,
    ScenarioResults,
    generate_results,
    run_scenarios,
)

from .report import generate_table, report_scenarios

__all__ = [
    # Constants
    "G_0",
    "G_KERBIN",
    "EngineSpec",
    "TankSpec",
    "BatterySpec",
    "StageParts",
    "DAWN_ENGINE",
    "XENON_TANK",
    "Z100_BATTERY",
    "DAWN_STAGE",
    # Mass and performance
    "BuildConfiguration",
    "dry_and_wet_mass",
    "max_propellant",
    "delta_v",
    "thrust_to_weight",
    "max_delta_v",
    "propellant_required_for_delta_v",
    # Energy demand
    "energy_required_for_propellant",
    "batteries_for_energy",
    "batteries_required_for_propellant",
    # Solver
    "DEFAULT_MAX_ITERATIONS",
    "SolverOutcome",
    "SolverStep",
    "SolveReport",
    "SizingResult",
    "solve_battery_count",
    "evaluate_build",
    "size_stage",
    # Sweep
    "SweepConfig",
    "load_part_data",
    "ResultsMatrix",
    "ScenarioResults",
    "generate_results",
    "run_scenarios",
    # Report
    "generate_table",
    "report_scenarios",
]
