"""Turning accumulated volumes into density functions and reporting run results."""

from __future__ import annotations

import itertools
import os
import re
from typing import Any, Sequence

from densfn.naming import data_file_name

TINY = 1e-10
_DENSIGRAM_FLOOR = TINY * 1e5
_ZERO_DENSITY_LIMIT = TINY * 1e4

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _floor_small(value: float, floor: float) -> float:
    return floor if abs(value) < floor or value < 0 else value


def combine_results(
    f_p: Any, input: Any, cell_volume: Sequence[float], results: Sequence[Sequence[float]]
) -> list[list[float]]:
    """Convert per-radius "at least k" volumes into density functions.

    Each row is ``[radius, v_1, ..., v_zone_limit]``. The volumes are divided
    by the cell volumes, differenced into "exactly k" values, optionally summed
    into a densigram, and optionally preceded by the zeroth density function.
    A new list of rows is returned; the input is left untouched.
    """
    zone_limit = input.zone_limit
    if zone_limit < 1:
        raise ValueError("zone_limit must be at least 1")
    if len(cell_volume) < zone_limit:
        raise ValueError(f"need {zone_limit} cell volumes, got {len(cell_volume)}")

    rows: list[list[float]] = []
    for source in results:
        if len(source) < zone_limit + 1:
            raise ValueError(f"a result row needs {zone_limit + 1} values, got {len(source)}")
        row = [float(value) for value in source]
        for j, volume in enumerate(cell_volume[:zone_limit], start=1):
            row[j] /= volume
        rows.append(row)

    at_least_1 = [row[1] for row in rows]

    for row in rows:
        at_least = row[:]
        for j in range(1, zone_limit):
            row[j] = _floor_small(at_least[j] - at_least[j + 1], TINY)
        if f_p.densigram:
            row[1:] = itertools.accumulate(row[1:])
            for j in range(1, zone_limit):
                row[j] = _floor_small(min(row[j], 1 - _DENSIGRAM_FLOOR), _DENSIGRAM_FLOOR)

    if not f_p.densigram and f_p.zero_density:
        zeroth_vanished = False
        for row, first in zip(rows, at_least_1):
            row[2 : zone_limit + 1] = row[1:zone_limit]
            row[1] = TINY if zeroth_vanished else 1 - first
            if row[1] < _ZERO_DENSITY_LIMIT:
                zeroth_vanished = True

    return rows


def write_results(
    path: str | os.PathLike[str], results: Sequence[Sequence[float]], columns: int
) -> str | os.PathLike[str]:
    """Write rows as comma-separated lines: the radius and ``columns`` values.

    Numbers have ten significant digits; there is no newline after the last row.
    """
    if not results:
        raise ValueError("there are no results to write")
    lines = []
    for row in results:
        if len(row) < columns + 1:
            raise ValueError(f"a result row needs {columns + 1} values, got {len(row)}")
        lines.append(",".join(format(value, ".10g") for value in row[: columns + 1]))
    with open(path, "w", encoding="utf-8") as fh:
        fh.write("\n".join(lines))
    return path


def combine_and_write(
    f_p: Any, input: Any, cell_volume: Sequence[float], results: Sequence[Sequence[float]]
) -> str:
    """Combine the results into density functions, write them, and return the file path."""
    rows = combine_results(f_p, input, cell_volume, results)
    if f_p.uplusv:
        path = f"{f_p.output_dir}{input.data_file}{input.num_v}_{input.rep_iter}.txt"
    else:
        path = data_file_name(f_p, input, input.rep_iter)
    columns = input.zone_limit if f_p.zero_density else input.zone_limit - 1
    write_results(path, rows, columns)
    print("Data extracted.")
    return path


def _last_radius(path: str) -> float:
    try:
        with open(path, encoding="utf-8") as fh:
            lines = fh.read().splitlines()
    except OSError:
        return 0.0
    radius = 0.0
    for line in lines:
        if not line.strip():
            continue
        match = _LEADING_NUMBER.match(line)
        radius = float(match.group(1)) if match else 0.0
    return radius


def replot_max_radius(f_p: Any, input: Any, data_file_1: str, data_file_2: str) -> float:
    """Set ``input.max_radius`` to the largest final radius in the data file(s).

    The radius is the first number of the last line; the second file is only
    read when the plot is superimposed. A missing file counts as radius 0.
    """
    input.max_radius = _last_radius(f_p.output_dir + data_file_1)
    if f_p.superimposed:
        input.max_radius = max(input.max_radius, _last_radius(f_p.output_dir + data_file_2))
    return input.max_radius


def format_timing(cpu_seconds: float, wall_seconds: float) -> str:
    """Report of processor time and elapsed time (truncated to milliseconds)."""
    wall_ms = int(wall_seconds * 1000)
    return f"Code runtime: {cpu_seconds:g}s.\nElapsed time: {wall_ms / 1000:g}s.\n"