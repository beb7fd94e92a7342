"""
Sweep configuration for the Limits of Ions stage sizer.

A sweep is the cross product of target delta-v values and tank counts,
repeated for every dead-weight scenario. Two presets are built in:
- "reference": ten hand-picked tank counts, one results file per scenario
- "legacy": tank counts 1 to 10, tables printed to standard output only
"""

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .solver import DEFAULT_MAX_ITERATIONS


# Largest integer a float holds exactly
_MAX_EXACT_INT = 2 ** 53

DEFAULT_TARGET_DELTA_VS = [
    10.0, 20.0, 30.0, 50.0, 80.0, 100.0, 150.0, 200.0, 250.0, 300.0, 350.0, 400.0,
    450.0, 500.0, 600.0, 700.0, 800.0, 900.0, 1000.0, 1100.0, 1200.0, 1300.0,
    1400.0, 1500.0,
]
DEFAULT_TANK_COUNTS = [1, 2, 4, 5, 6, 8, 10, 12, 15, 20]
LEGACY_TANK_COUNTS = list(range(1, 11))
DEFAULT_DEAD_WEIGHTS = [0, 100, 200, 300, 400, 500]

DEFAULT_FILENAME_TEMPLATE = "limits_of_ions_{weight}kg_dead_weight.txt"


@dataclass
class SweepConfig:
    """Domains and output policy of a sweep."""
    target_delta_vs: List[float] = field(default_factory=lambda: list(DEFAULT_TARGET_DELTA_VS))
    tank_counts: List[int] = field(default_factory=lambda: list(DEFAULT_TANK_COUNTS))
    dead_weights: List[float] = field(default_factory=lambda: list(DEFAULT_DEAD_WEIGHTS))
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    output_dir: str = "results"
    filename_template: str = DEFAULT_FILENAME_TEMPLATE
    write_files: bool = True
    print_tables: bool = False

    @classmethod
    def preset(cls, name: str) -> 'SweepConfig':
        """Create one of the built-in configurations."""
        if name == "reference":
            return cls()
        if name == "legacy":
            return cls(
                tank_counts=list(LEGACY_TANK_COUNTS),
                write_files=False,
                print_tables=True,
            )
        raise KeyError(f"Sweep preset '{name}' not found (expected 'reference' or 'legacy')")

    @classmethod
    def from_json(cls, path: str) -> 'SweepConfig':
        """Load configuration from JSON file."""
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Sweep config not found: {path}")

        with open(config_path) as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Sweep config must be a JSON object: {path}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SweepConfig':
        """
        Create configuration from dictionary.

        A "preset" key selects the base configuration; any other key
        overrides the matching field.
        """
        base = cls.preset(data.get("preset", "reference"))
        return cls(
            target_delta_vs=[float(v) for v in data.get("target_delta_vs", base.target_delta_vs)],
            tank_counts=list(data.get("tank_counts", base.tank_counts)),
            dead_weights=list(data.get("dead_weights", base.dead_weights)),
            max_iterations=data.get("max_iterations", base.max_iterations),
            output_dir=data.get("output_dir", base.output_dir),
            filename_template=data.get("filename_template", base.filename_template),
            write_files=data.get("write_files", base.write_files),
            print_tables=data.get("print_tables", base.print_tables),
        )

    def validate(self) -> 'SweepConfig':
        """
        Check the configuration before any solver work.

        Returns:
            self, so calls can be chained.

        Raises:
            ValueError: On the first invalid value found.
        """
        if not self.target_delta_vs:
            raise ValueError("Sweep needs at least one target delta-v")
        if not self.tank_counts:
            raise ValueError("Sweep needs at least one tank count")
        if not self.dead_weights:
            raise ValueError("Sweep needs at least one dead weight")

        for dv in self.target_delta_vs:
            if isinstance(dv, bool) or not isinstance(dv, (int, float)):
                raise ValueError(f"Target delta-v must be a number, got {dv!r}")
            if not (math.isfinite(dv) and dv > 0):
                raise ValueError(f"Target delta-v must be positive and finite, got {dv}")

        for tanks in self.tank_counts:
            if isinstance(tanks, bool) or not isinstance(tanks, int):
                raise ValueError(f"Tank count must be an integer, got {tanks!r}")
            if tanks < 1:
                raise ValueError(f"Tank count must be at least 1, got {tanks}")
            if tanks > _MAX_EXACT_INT:
                raise ValueError(f"Tank count {tanks} is not exactly representable as a float")

        for weight in self.dead_weights:
            if isinstance(weight, bool) or not isinstance(weight, (int, float)):
                raise ValueError(f"Dead weight must be a number, got {weight!r}")
            if not (math.isfinite(weight) and weight >= 0):
                raise ValueError(f"Dead weight must be non-negative and finite, got {weight}")

        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
            raise ValueError(f"max_iterations must be an integer, got {self.max_iterations!r}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")

        if "{weight}" not in self.filename_template:
            raise ValueError("filename_template must contain '{weight}'")

        return self

    def output_path(self, dead_weight: float) -> Path:
        """Path of the results file for one dead-weight scenario."""
        return Path(self.output_dir) / self.filename_template.format(
            weight=format_weight(dead_weight)
        )


def format_weight(weight: float) -> str:
    """Format a dead weight without a trailing '.0' for whole kilograms."""
    if float(weight).is_integer():
        return str(int(weight))
    return f"{weight:g}"


def load_part_data(path: Optional[str] = None) -> Dict[str, Any]:
    """Load part data from JSON file."""
    if path is None:
        path = Path(__file__).parent / "data" / "parts.json"
    else:
        path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Part data not found: {path}")

    with open(path) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Part data must be a JSON object: {path}")
    return data
