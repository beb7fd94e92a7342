"""
Tests for the electrical energy demand of a burn.

Tests cover:
- Energy needed per unit of propellant
- Rounding energy up to whole batteries
"""

import pytest

from ion_limits.constants import DAWN_ENGINE, DAWN_STAGE
from ion_limits.power import (
    batteries_for_energy,
    batteries_required_for_propellant,
    energy_required_for_propellant,
)


class TestEnergyDemand:
    """Tests for energy_required_for_propellant."""

    def test_one_second_of_thrust(self):
        """Test one second of propellant costs one second of power."""
        energy = energy_required_for_propellant(DAWN_STAGE, 0.486)
        assert energy == pytest.approx(8.74)

    def test_energy_per_unit(self):
        """Test the engine's EC per unit ratio."""
        assert DAWN_ENGINE.energy_per_unit == pytest.approx(8.74 / 0.486)
        assert energy_required_for_propellant(DAWN_STAGE, 10.0) == pytest.approx(
            10.0 * DAWN_ENGINE.energy_per_unit
        )

    def test_no_propellant(self):
        """Test zero propellant needs zero energy."""
        assert energy_required_for_propellant(DAWN_STAGE, 0.0) == 0.0


class TestBatteryCount:
    """Tests for batteries_for_energy and batteries_required_for_propellant."""

    @pytest.mark.parametrize("energy,expected", [
        (0.0, 0),
        (0.001, 1),
        (13.27, 1),
        (100.0, 1),
        (100.5, 2),
        (200.0, 2),
        (2887.7, 29),
    ])
    def test_rounds_up(self, energy, expected):
        """Test fractional batteries round up to a whole battery."""
        assert batteries_for_energy(DAWN_STAGE, energy) == expected

    def test_from_propellant(self):
        """Test 48.6 units need 874 EC, so nine batteries."""
        assert batteries_required_for_propellant(DAWN_STAGE, 48.6) == 9

    def test_returns_int(self):
        """Test battery counts are integers."""
        assert isinstance(batteries_required_for_propellant(DAWN_STAGE, 100.0), int)
