"""
Part constants for the Limits of Ions stage sizer.

Everything is in SI units, with propellant measured in tank "units" and
electrical energy in EC (electric charge). Reference values come from the
Kerbal Space Program wiki:

- IX-6315 "Dawn" Electric Propulsion System
- Xenon gas
- PB-X50R Xenon Container
- Z-100 Rechargeable Battery Pack
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict


# =============================================================================
# GRAVITATIONAL CONSTANTS
# =============================================================================

# Standard gravity used in the rocket equation (m/s^2)
G_0 = 9.80665

# Surface gravity of the reference body, only used for TWR (m/s^2)
G_KERBIN = 9.81


# =============================================================================
# VALIDATION
# =============================================================================

def _require_number(part: str, field_name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"{part} {field_name} must be a finite number, got {value!r}")


def _require_positive(part: str, field_name: str, value: Any) -> None:
    _require_number(part, field_name, value)
    if value <= 0:
        raise ValueError(f"{part} {field_name} must be positive, got {value}")


def _require_non_negative(part: str, field_name: str, value: Any) -> None:
    _require_number(part, field_name, value)
    if value < 0:
        raise ValueError(f"{part} {field_name} must be non-negative, got {value}")


# =============================================================================
# PART SPECIFICATIONS
# =============================================================================

@dataclass(frozen=True)
class EngineSpec:
    """
    Electric engine specification.

    Attributes:
        name: Part name.
        dry_mass_kg: Engine mass (kg).
        thrust_n: Vacuum thrust (N).
        isp_s: Specific impulse (s).
        propellant_drain: Propellant consumption at full thrust (units/s).
        power_drain: Electric charge consumption at full thrust (EC/s).
    """
    name: str
    dry_mass_kg: float
    thrust_n: float
    isp_s: float
    propellant_drain: float
    power_drain: float

    def __post_init__(self) -> None:
        _require_positive("Engine", "dry_mass_kg", self.dry_mass_kg)
        _require_positive("Engine", "thrust_n", self.thrust_n)
        _require_positive("Engine", "isp_s", self.isp_s)
        _require_positive("Engine", "propellant_drain", self.propellant_drain)
        _require_non_negative("Engine", "power_drain", self.power_drain)

    @property
    def energy_per_unit(self) -> float:
        """Electric charge consumed per unit of propellant (EC/unit)."""
        return self.power_drain / self.propellant_drain


@dataclass(frozen=True)
class TankSpec:
    """
    Propellant tank specification.

    Attributes:
        name: Part name.
        dry_mass_kg: Empty tank mass (kg).
        capacity: Propellant capacity (units).
        propellant_density: Propellant mass per unit (kg/unit).
    """
    name: str
    dry_mass_kg: float
    capacity: float
    propellant_density: float

    def __post_init__(self) -> None:
        _require_non_negative("Tank", "dry_mass_kg", self.dry_mass_kg)
        _require_positive("Tank", "capacity", self.capacity)
        _require_positive("Tank", "propellant_density", self.propellant_density)

    @property
    def propellant_mass_kg(self) -> float:
        """Mass of a full load of propellant (kg)."""
        return self.capacity * self.propellant_density


@dataclass(frozen=True)
class BatterySpec:
    """
    Battery specification.

    Attributes:
        name: Part name.
        mass_kg: Battery mass (kg).
        capacity_ec: Stored electric charge (EC).
    """
    name: str
    mass_kg: float
    capacity_ec: float

    def __post_init__(self) -> None:
        _require_non_negative("Battery", "mass_kg", self.mass_kg)
        _require_positive("Battery", "capacity_ec", self.capacity_ec)


@dataclass(frozen=True)
class StageParts:
    """
    The parts and gravity constants a stage is sized with.

    Attributes:
        engine: The single engine of the stage.
        tank: The tank type, repeated tank-count times.
        battery: The battery type, repeated battery-count times.
        g0: Standard gravity for the rocket equation (m/s^2).
        g_local: Local gravity for thrust-to-weight (m/s^2).
    """
    engine: EngineSpec
    tank: TankSpec
    battery: BatterySpec
    g0: float = G_0
    g_local: float = G_KERBIN

    def __post_init__(self) -> None:
        _require_positive("Gravity", "g0", self.g0)
        _require_positive("Gravity", "g_local", self.g_local)

    @property
    def exhaust_velocity_ms(self) -> float:
        """Effective exhaust velocity, Isp * g0 (m/s)."""
        return self.engine.isp_s * self.g0

    @classmethod
    def from_part_data(
        cls,
        data: Dict[str, Any],
        engine: str = "dawn",
        tank: str = "pb_x50r",
        battery: str = "z_100",
    ) -> StageParts:
        """
        Build a parts bundle from a part-data dictionary.

        Args:
            data: Parsed part data with "engines", "tanks", "batteries"
                and an optional "gravity" section.
            engine: Key of the engine entry.
            tank: Key of the tank entry.
            battery: Key of the battery entry.

        Returns:
            StageParts built from the selected entries.

        Raises:
            KeyError: If a selected part is not in the data.
            ValueError: If a part value is not a number or out of range.
        """
        engines = data.get("engines", {})
        tanks = data.get("tanks", {})
        batteries = data.get("batteries", {})
        if engine not in engines:
            raise KeyError(f"Engine '{engine}' not found in part data")
        if tank not in tanks:
            raise KeyError(f"Tank '{tank}' not found in part data")
        if battery not in batteries:
            raise KeyError(f"Battery '{battery}' not found in part data")

        e = engines[engine]
        t = tanks[tank]
        b = batteries[battery]
        gravity = data.get("gravity", {})

        return cls(
            engine=EngineSpec(
                name=e.get("name", engine),
                dry_mass_kg=e["mass_kg"],
                thrust_n=e["thrust_n"],
                isp_s=e["isp_s"],
                propellant_drain=e["propellant_drain"],
                power_drain=e["power_drain"],
            ),
            tank=TankSpec(
                name=t.get("name", tank),
                dry_mass_kg=t["dry_mass_kg"],
                capacity=t["capacity"],
                propellant_density=t["propellant_density"],
            ),
            battery=BatterySpec(
                name=b.get("name", battery),
                mass_kg=b["mass_kg"],
                capacity_ec=b["capacity_ec"],
            ),
            g0=gravity.get("g0", G_0),
            g_local=gravity.get("g_local", G_KERBIN),
        )


# =============================================================================
# REFERENCE PARTS
# =============================================================================

DAWN_ENGINE = EngineSpec(
    name='IX-6315 "Dawn" Electric Propulsion System',
    dry_mass_kg=250.0,
    thrust_n=2000.0,
    isp_s=4200.0,
    propellant_drain=0.486,
    power_drain=8.74,
)

XENON_TANK = TankSpec(
    name="PB-X50R Xenon Container",
    dry_mass_kg=13.5,
    capacity=405.0,
    propellant_density=0.1,
)

Z100_BATTERY = BatterySpec(
    name="Z-100 Rechargeable Battery Pack",
    mass_kg=5.0,
    capacity_ec=100.0,
)

DAWN_STAGE = StageParts(
    engine=DAWN_ENGINE,
    tank=XENON_TANK,
    battery=Z100_BATTERY,
)
