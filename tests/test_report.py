"""
Tests for table rendering and output.

Tests cover:
- Cell and header text
- Grid layout, alignment and multi-line cells
- Writing result files and printing tables
"""

import io

from ion_limits.config import SweepConfig
from ion_limits.report import (
    CORNER_HEADER,
    UNACHIEVABLE,
    format_cell,
    format_delta_v_header,
    generate_table,
    render_grid,
    report_scenarios,
    write_table,
)
from ion_limits.solver import SizingResult, SolverOutcome
from ion_limits.sweep import ResultsMatrix, ScenarioResults


def _mixed_matrix() -> ResultsMatrix:
    matrix = ResultsMatrix([1], [10.0, 20.0])
    matrix.set_cell(0, 0, SizingResult(5786.5142, 0.65978, 1), SolverOutcome.CONVERGED)
    matrix.set_cell(0, 1, None, SolverOutcome.CAPACITY_INFEASIBLE)
    return matrix


class TestCellText:
    """Tests for cell and header formatting."""

    def test_unachievable(self):
        """Test empty cells render as the literal marker."""
        assert format_cell(None) == "Unachievable"
        assert UNACHIEVABLE == "Unachievable"

    def test_feasible(self):
        """Test feasible cells carry three newline-separated fields."""
        text = format_cell(SizingResult(1234.567, 1.23456, 7))
        assert text.split("\n") == ["1234.57 m/s ΔV", "1.235 TWR", "7 batteries"]

    def test_header(self):
        """Test delta-v headers drop decimals."""
        assert format_delta_v_header(10.0) == "10 m/s"
        assert format_delta_v_header(1500.0) == "1500 m/s"

    def test_corner_header(self):
        """Test the corner header labels both axes."""
        assert CORNER_HEADER == "Max ΔV from single burn →\nNumber of tanks ↓"


class TestGrid:
    """Tests for render_grid and generate_table."""

    def test_simple_grid(self):
        """Test borders and header separator."""
        grid = render_grid(["a", "bb"], [["1", "2"]], ["left", "right"])
        assert grid.split("\n") == [
            "+---+----+",
            "| a | bb |",
            "+===+====+",
            "| 1 |  2 |",
            "+---+----+",
        ]

    def test_multi_line_cells_pad_row(self):
        """Test shorter cells are blank on extra lines."""
        grid = render_grid(["h"], [["x\ny"]], ["center"])
        assert grid.split("\n")[3:5] == ["| x |", "| y |"]

    def test_mixed_table(self):
        """Test one feasible and one unachievable cell."""
        table = generate_table(_mixed_matrix())
        lines = table.split("\n")

        assert "| Unachievable |" in table
        assert "| 5786.51 m/s ΔV |" in table
        assert "|      0.660 TWR |" in table
        assert "|    1 batteries |" in table
        # The three fields sit on consecutive lines of the same row
        first = next(i for i, line in enumerate(lines) if "m/s ΔV" in line)
        assert "TWR" in lines[first + 1]
        assert "batteries" in lines[first + 2]

    def test_headers_right_aligned(self):
        """Test delta-v columns are right-aligned."""
        table = generate_table(_mixed_matrix())
        assert "|         10 m/s |       20 m/s |" in table

    def test_tank_column_centred(self):
        """Test the tank-count column is centred."""
        table = generate_table(_mixed_matrix())
        assert "|     Number of tanks ↓     |" in table
        assert "|             1             |" in table

    def test_row_per_tank_count(self):
        """Test every tank count gets a row."""
        matrix = ResultsMatrix([1, 2, 4], [10.0])
        table = generate_table(matrix)
        assert table.count(UNACHIEVABLE) == 3


class TestOutput:
    """Tests for writing and printing tables."""

    def test_write_table_creates_directories(self, tmp_path):
        """Test parent directories are created."""
        path = tmp_path / "nested" / "results" / "table.txt"
        write_table(path, "grid")
        assert path.read_text(encoding="utf-8") == "grid"

    def test_report_writes_one_file_per_scenario(self, tmp_path):
        """Test file names follow the dead weight."""
        config = SweepConfig(output_dir=str(tmp_path / "results"))
        scenarios = [
            ScenarioResults(0, _mixed_matrix()),
            ScenarioResults(100, _mixed_matrix()),
        ]
        written = report_scenarios(scenarios, config)

        assert [p.name for p in written] == [
            "limits_of_ions_0kg_dead_weight.txt",
            "limits_of_ions_100kg_dead_weight.txt",
        ]
        content = written[0].read_text(encoding="utf-8")
        assert content == generate_table(_mixed_matrix())

    def test_report_prints_legacy(self, tmp_path):
        """Test the legacy preset prints and writes nothing."""
        config = SweepConfig.preset("legacy")
        config.output_dir = str(tmp_path / "results")
        stream = io.StringIO()

        written = report_scenarios([ScenarioResults(200.0, _mixed_matrix())], config, stream)

        assert written == []
        assert not (tmp_path / "results").exists()
        output = stream.getvalue()
        assert "Added dead weight: 200 kg" in output
        assert UNACHIEVABLE in output
