"""
Tests for the command line entry point.
"""

import json
from pathlib import Path

import pytest

import ion_limits
from ion_limits.cli import build_parser, load_config, main


BUNDLED_PARTS = Path(ion_limits.__file__).parent / "data" / "parts.json"


@pytest.fixture
def small_config(tmp_path):
    """A two-by-two sweep over two dead weights."""
    path = tmp_path / "sweep.json"
    path.write_text(json.dumps({
        "target_delta_vs": [10, 1500],
        "tank_counts": [1, 2],
        "dead_weights": [0, 500],
        "output_dir": str(tmp_path / "results"),
    }))
    return path


class TestArguments:
    """Tests for argument handling."""

    def test_defaults_to_reference(self):
        """Test no arguments selects the reference preset."""
        config = load_config(build_parser().parse_args([]))
        assert config.tank_counts == [1, 2, 4, 5, 6, 8, 10, 12, 15, 20]
        assert config.write_files is True

    def test_legacy_preset(self):
        """Test the legacy preset prints instead of writing."""
        config = load_config(build_parser().parse_args(["--preset", "legacy"]))
        assert config.tank_counts == list(range(1, 11))
        assert config.print_tables is True

    def test_overrides(self, tmp_path):
        """Test command line values override the configuration."""
        args = build_parser().parse_args([
            "--dead-weight", "0",
            "--dead-weight", "250",
            "--max-iterations", "20",
            "--output-dir", str(tmp_path),
            "--stdout",
        ])
        config = load_config(args)
        assert config.dead_weights == [0.0, 250.0]
        assert config.max_iterations == 20
        assert config.output_dir == str(tmp_path)
        assert config.write_files is False
        assert config.print_tables is True


class TestMain:
    """Tests for full runs through main()."""

    def test_writes_files(self, small_config, tmp_path, capsys):
        """Test one results file per dead weight."""
        assert main(["--config", str(small_config)]) == 0

        results = tmp_path / "results"
        assert (results / "limits_of_ions_0kg_dead_weight.txt").exists()
        heavy = (results / "limits_of_ions_500kg_dead_weight.txt").read_text(encoding="utf-8")
        assert "Unachievable" in heavy
        assert "batteries" in heavy

        err = capsys.readouterr().err
        assert "500 kg dead weight: 3 sized, 1 over capacity, 0 not converged" in err

    def test_stdout(self, small_config, tmp_path, capsys):
        """Test --stdout prints tables and writes nothing."""
        assert main(["--config", str(small_config), "--stdout"]) == 0

        out = capsys.readouterr().out
        assert "Added dead weight: 0 kg" in out
        assert "Added dead weight: 500 kg" in out
        assert not (tmp_path / "results").exists()

    def test_custom_parts(self, small_config, tmp_path):
        """Test part data from a file is used."""
        parts = tmp_path / "parts.json"
        parts.write_text(json.dumps({
            "engines": {"dawn": {
                "mass_kg": 250.0, "thrust_n": 2000.0, "isp_s": 4200.0,
                "propellant_drain": 0.486, "power_drain": 8.74,
            }},
            "tanks": {"pb_x50r": {"dry_mass_kg": 13.5, "capacity": 405.0, "propellant_density": 0.1}},
            "batteries": {"z_100": {"mass_kg": 5.0, "capacity_ec": 100.0}},
        }))
        assert main(["--config", str(small_config), "--parts", str(parts)]) == 0

    @pytest.mark.parametrize("argv", [
        ["--max-iterations", "0"],
        ["--dead-weight", "-5"],
        ["--config", "does-not-exist.json"],
        ["--parts", "does-not-exist.json"],
    ])
    def test_configuration_errors(self, argv, tmp_path, capsys):
        """Test configuration errors exit with status 1 before solving."""
        assert main(argv + ["--output-dir", str(tmp_path / "out")]) == 1
        assert "Error:" in capsys.readouterr().err
        assert not (tmp_path / "out").exists()

    def test_unknown_engine(self, small_config, capsys):
        """Test an unknown part key is a configuration error."""
        assert main(["--config", str(small_config), "--parts",
                     str(BUNDLED_PARTS), "--engine", "nerv"]) == 1
        assert "nerv" in capsys.readouterr().err

    def test_invalid_part_value(self, tmp_path, capsys):
        """Test a zero battery capacity exits with status 1 before solving."""
        data = json.loads(BUNDLED_PARTS.read_text(encoding="utf-8"))
        data["batteries"]["z_100"]["capacity_ec"] = 0
        parts = tmp_path / "parts.json"
        parts.write_text(json.dumps(data))

        assert main(["--parts", str(parts), "--stdout", "--dead-weight", "0"]) == 1
        captured = capsys.readouterr()
        assert "Battery capacity_ec must be positive" in captured.err
        assert "Added dead weight" not in captured.out

    def test_config_not_an_object(self, tmp_path, capsys):
        """Test a sweep config that is not a JSON object exits with status 1."""
        path = tmp_path / "sweep.json"
        path.write_text(json.dumps([0, 100]))

        assert main(["--config", str(path)]) == 1
        assert "must be a JSON object" in capsys.readouterr().err
