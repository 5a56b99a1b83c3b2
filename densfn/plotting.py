"""Gnuplot scripts for density-function graphs and experiment summaries."""

from __future__ import annotations

import os
from typing import Any

from densfn.naming import graph_title, plot_file_names
from densfn.results import replot_max_radius

_LINE_COLOURS = (
    "#94E3FF", "#0d61ec", "#24ae1d", "#ffae00", "#e70000",
    "#db0dec", "#7B0985", "#87663E", "#000000",
)
_DENSIGRAM_COLOURS = (
    "#BDDAFF", "#A0C7FA", "#75AAEF", "#548FDA", "#3174CA",
    "#1760BB", "#064AA0", "#003983", "#000000",
)

_EXPERIMENT_AXES = {
    "k": ("Order k of Voronoi Zone", "[1:8]"),
    "m": ("Number m of Motif Points", "[1:10]"),
}


def _fixed(value: float) -> str:
    return f"{value:f}"


def _header(output_dir: str, size: tuple[float, float], margins: dict[str, float]) -> list[str]:
    lines = [
        f'cd "{output_dir}"',
        f"set terminal pdfcairo size {_fixed(size[0])}, {_fixed(size[1])}",
        f"set border {_fixed(3)}",
        "set grid",
    ]
    lines.extend(f"set {name} {_fixed(value)}" for name, value in margins.items())
    return lines


def graph_script(f_p: Any, input: Any) -> str:
    """The gnuplot script that draws the density functions of this run."""
    files = plot_file_names(f_p, input)
    data_1, data_2 = files.data_file_1, files.data_file_2
    if f_p.replot:
        replot_max_radius(f_p, input, data_1, data_2)

    zone_limit = input.zone_limit
    lines = _header(
        f_p.output_dir, (10, 3.5), {"bmargin": 5.5, "lmargin": 13, "rmargin": 3}
    )
    tmargin = 5.0
    if f_p.title:
        title = graph_title(f_p, input, input.rep_iter)
        lines.append(f"set tmargin {_fixed(tmargin + 2)}")
        lines.append(f"set title '{title}' font ', 24' tc rgb 'white' offset 0, 1.2")
    else:
        lines.append(f"set tmargin {_fixed(tmargin)}")

    if not f_p.densigram:
        if not f_p.superimposed:
            lines.append("set ylabel '{/Symbol y}@_k^A(t)' font ', 24' offset -1.2, 0")
        else:
            lines.append("set ylabel '{/Symbol y}_k(t)' font ', 24' tc rgb 'white' offset -1.2, 0")
    elif not f_p.superimposed:
        lines.append("set ylabel '{/Symbol S}@_1^n{/Symbol y}@_k^A(t)' font ', 20' offset -0.5, 0")
    else:
        lines.append("set ylabel '{/Symbol S}@_1^n{/Symbol y}_k(t)' font ', 20' offset -0.5, 0")

    if f_p.t2:
        lines.append("set xlabel 'Radius of Balls (Angstroms)' font ', 24' tc rgb 'white' offset 0, -0.4")
    else:
        lines.append("set xlabel 'Radius of Balls' font ', 20' offset 0, -0.4")

    lines.append(f"set xrange [0: {input.max_radius:.18e}]")
    lines.append(f"set yrange [0: {_fixed(1.0001)}]")
    lines.append("set xtics font ', 24'")
    lines.append("set ytics font ', 24'")
    lines.append("set key horizontal at graph 0.5, graph 1.06 center bottom font ', 17' tc rgb 'white'")

    colours = _DENSIGRAM_COLOURS if f_p.densigram else _LINE_COLOURS
    lines.extend(
        f"set style line {n} lc rgb '{colour}' lw 3" for n, colour in enumerate(colours, start=1)
    )
    lines.append(f'set output "{files.graph_file}"')
    lines.append("set samples 1000")

    key = "{/Symbol y}@_0^A"
    if f_p.superimposed:
        key = "k = 0"
    if f_p.densigram:
        key = "n = 1"

    if not f_p.densigram:
        plot = f"plot '{data_1}' using 1:2 smooth csplines ls 1 title '{key}'"
        for n in range(1, zone_limit):
            key = f" k = {n}" if f_p.superimposed else f"  {{/Symbol y}}@_{{{n}}}^A"
            plot += (
                f", '{data_1}' using 1:{n + 2}smooth csplines ls {n + 1} title '{key}'"
            )
    else:
        filled = "smooth csplines with filledcurves above y1 = 0"
        plot = f"plot '{data_1}' using 1:2 {filled} ls 1 title '{key}'"
        for n in range(1, zone_limit - 1):
            plot += f", '{data_1}' using 1:{n + 2} {filled} ls {n + 1} title ' n = {n + 1}'"
        lines.append("f(x) = 1")
        lines.append("g(x) = 0")
        plot += ", '+' using 1:(f($1)):(g($1)) lc '#F3F9FE' with filledcurves closed notitle"
        lines.append("h(x) = 350 - 10 * x")
        plot += ", '+' using 1:(f($1)):(h($1)) lc '#8C9196' with filledcurves closed notitle"
        for n in range(zone_limit - 2, -1, -1):
            plot += f", '{data_1}' using 1:{n + 2} {filled} ls {n + 1} notitle"
        for n in range(zone_limit - 1):
            plot += f", '{data_1}' using 1:{n + 2} smooth csplines ls 9 notitle"

    if f_p.superimposed:
        if not f_p.densigram:
            lines.extend(
                f"set style line {n} dt 2 lc rgb '{colour}' lw 3"
                for n, colour in enumerate(_LINE_COLOURS, start=11)
            )
            for n in range(zone_limit):
                plot += f", '{data_2}' using 1:{n + 2} smooth csplines ls {n + 11} notitle"
        else:
            lines.append("set style line 10 dt 2 lc rgb '#8AFF05' lw 3")
            for n in range(zone_limit - 1):
                plot += f", '{data_2}' using 1:{n + 2} smooth csplines ls 10 notitle"

    lines.append(plot)
    return "\n".join(lines) + "\n"


def experiment_script(f_p: Any, file_name: str, y_label: str, vary: str) -> str:
    """Script plotting an experiment summary against zone order (``k``) or motif size (``m``)."""
    if vary not in _EXPERIMENT_AXES:
        raise ValueError(f"vary must be 'k' or 'm', not {vary!r}")
    x_label, x_range = _EXPERIMENT_AXES[vary]
    data_file = f"Experiments/Data/{file_name}.txt"
    graph_file = f"Experiments/Graphs/{file_name}.pdf"
    lines = _header(
        f_p.output_dir,
        (8, 3.5),
        {"bmargin": 5, "lmargin": 13, "rmargin": 3, "tmargin": 2},
    )
    lines.extend(
        [
            f"set ylabel '{y_label}' font ', 26' offset -4, 0",
            f"set xlabel '{x_label}' font ', 26' offset 0, -1",
            f"set xrange {x_range}",
            "set xtics font ', 24'",
            "set ytics font ', 24'",
            "set style line 1 lc rgb '#0d61ec' lw 3",
            f'set output "{graph_file}"',
            "set samples 1000",
            f"plot '{data_file}' with linespoints ls 1 notitle",
        ]
    )
    return "\n".join(lines) + "\n"


def experiment_scripts(f_p: Any) -> list[str]:
    """Scripts for every experiment summary the parameters ask for, in order."""
    wanted: list[tuple[str, str, str]] = []
    if f_p.time_vary_k:
        wanted.append(("Runtime", "Runtime (s)", "k"))
    if f_p.time_vary_m:
        wanted.append(("Runtime", "Runtime (s)", "m"))
    if f_p.vary_k:
        wanted.append(("Vertices", "Number of Vertices", "k"))
        wanted.append(("Polys", "Number of Polyhedrons", "k"))
    if f_p.vary_m:
        wanted.append(("Vertices", "Number of Vertices", "m"))
        wanted.append(("Polys", "Number of Polyhedrons", "m"))
    return [experiment_script(f_p, name, label, vary) for name, label, vary in wanted]


def write_script(script: str, path: str | os.PathLike[str]) -> str | os.PathLike[str]:
    """Save a gnuplot script to a file and return its path."""
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(script)
    return path