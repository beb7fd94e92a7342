"""
Table rendering for sweep results.

Formats a ResultsMatrix as a plain-text grid, one row per tank count and one
column per target delta-v:

    +---------------------------+----------------+
    | Max ΔV from single burn → |         10 m/s |
    |     Number of tanks ↓     |                |
    +===========================+================+
    |             1             | 5786.51 m/s ΔV |
    |                           |      0.660 TWR |
    |                           |    1 batteries |
    +---------------------------+----------------+

Cells may span several lines; every line of a row is padded to the tallest
cell in that row.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .config import SweepConfig, format_weight
from .sweep import ResultsMatrix, ScenarioResults

logger = logging.getLogger(__name__)


CORNER_HEADER = "Max ΔV from single burn →\nNumber of tanks ↓"
UNACHIEVABLE = "Unachievable"

ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"


# =============================================================================
# CELL TEXT
# =============================================================================

def format_delta_v_header(target_delta_v: float) -> str:
    """Column header for a target delta-v."""
    return f"{target_delta_v:.0f} m/s"


def format_cell(result) -> str:
    """Cell text for a SizingResult, or the unachievable marker for None."""
    if result is None:
        return UNACHIEVABLE
    return result.to_cell_text()


# =============================================================================
# GRID
# =============================================================================

def _align(text: str, width: int, alignment: str) -> str:
    if alignment == ALIGN_RIGHT:
        return text.rjust(width)
    if alignment == ALIGN_CENTER:
        return text.center(width)
    return text.ljust(width)


def _border(widths: List[int], char: str = "-") -> str:
    return "+" + "+".join(char * (w + 2) for w in widths) + "+"


def _render_row(cells: List[str], widths: List[int], alignments: List[str]) -> List[str]:
    split = [cell.split("\n") for cell in cells]
    height = max(len(lines) for lines in split)
    out = []
    for line_index in range(height):
        parts = []
        for lines, width, alignment in zip(split, widths, alignments):
            text = lines[line_index] if line_index < len(lines) else ""
            parts.append(" " + _align(text, width, alignment) + " ")
        out.append("|" + "|".join(parts) + "|")
    return out


def render_grid(header: List[str], rows: List[List[str]], alignments: List[str]) -> str:
    """
    Render a header and rows of multi-line cells as a bordered grid.

    Args:
        header: Header cell texts.
        rows: Body rows, each as long as the header.
        alignments: Per-column alignment, applied to header and body.

    Returns:
        The grid as a single string without a trailing newline.
    """
    widths = [0] * len(header)
    for row in [header] + rows:
        for column, cell in enumerate(row):
            longest = max(len(line) for line in cell.split("\n"))
            widths[column] = max(widths[column], longest)

    lines = [_border(widths)]
    lines.extend(_render_row(header, widths, alignments))
    lines.append(_border(widths, "="))
    for row in rows:
        lines.extend(_render_row(row, widths, alignments))
        lines.append(_border(widths))
    return "\n".join(lines)


def generate_table(matrix: ResultsMatrix) -> str:
    """
    Render a results matrix as a text table.

    The tank-count column is centred and every delta-v column is
    right-aligned.
    """
    header = [CORNER_HEADER] + [format_delta_v_header(dv) for dv in matrix.target_delta_vs]
    rows = [
        [str(tank_count)] + [format_cell(cell) for cell in cells]
        for tank_count, cells in matrix.rows()
    ]
    alignments = [ALIGN_CENTER] + [ALIGN_RIGHT] * len(matrix.target_delta_vs)
    return render_grid(header, rows, alignments)


# =============================================================================
# OUTPUT
# =============================================================================

def write_table(path: Path, table: str) -> Path:
    """Write a rendered table, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(table)
    logger.info("Wrote %s", path)
    return path


def report_scenarios(
    scenarios: List[ScenarioResults],
    config: SweepConfig,
    stream: Optional[TextIO] = None,
) -> List[Path]:
    """
    Write and/or print one table per dead-weight scenario.

    Args:
        scenarios: Sweep output.
        config: Decides whether tables go to files, to the stream, or both.
        stream: Where printed tables go (default: standard output).

    Returns:
        Paths of the files written.
    """
    stream = stream or sys.stdout
    written = []
    for scenario in scenarios:
        table = generate_table(scenario.matrix)
        if config.write_files:
            written.append(write_table(config.output_path(scenario.dead_weight_kg), table))
        if config.print_tables:
            stream.write(f"Added dead weight: {format_weight(scenario.dead_weight_kg)} kg\n")
            stream.write(table + "\n\n")
    return written
