"""Reading the framework parameters, experiment descriptions and structure inputs."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from densfn.lattice import Matrix, Point3


class ConfigError(Exception):
    """Raised when an input or configuration file is missing or malformed."""


@dataclass
class FrameworkParameters:
    """Settings that drive a whole run."""

    input_dir: str = ""
    output_dir: str = ""
    t2_dir: str = ""
    t2l_dir: str = ""
    input_file: str = ""
    experiment_file: str = ""
    v_file: str = ""
    replot: bool = False
    extract_data: bool = False
    sample_rate: int = 0
    densigram: bool = False
    plot_graph: bool = False
    zero_density: bool = False
    title: bool = False
    title_str: str = ""
    extract_experiment_data: bool = False
    plot_experiments: bool = False
    time_vary_k: bool = False
    time_vary_m: bool = False
    vary_k: bool = False
    vary_m: bool = False
    uplusv: bool = False
    superimposed: bool = False
    use_threads_1: bool = False
    use_threads_2: bool = False
    num_threads: int = 1
    t2: bool = False
    t2l: bool = False
    type_of_experiment: str = ""
    experimental_t2: bool = False
    experimental_t2_label: str = ""
    t2_start_index: int = 0


@dataclass
class Input:
    """A periodic structure and the per-run state computed from it."""

    cell_param_a: float = 10.0
    cell_param_b: float = 10.0
    cell_param_c: float = 10.0
    cell_param_alpha: float = 90.0
    cell_param_beta: float = 90.0
    cell_param_gamma: float = 90.0
    u: float = -0.03
    homometric: bool = False
    fcc: bool = False
    hcp: bool = False
    frac_base_pts: list[Point3] = field(default_factory=list)
    frac_random_pts: list[Point3] = field(default_factory=list)
    frac_v: list[Point3] = field(default_factory=list)
    base_pts: list[Point3] = field(default_factory=list)
    lattice_vectors: list[Point3] = field(default_factory=list)
    matrix: Matrix | None = None
    random_pts: int = 0
    perim: int = 1
    zone_limit: int = 1
    rep_iter: int = 0
    num_v: int = 0
    max_radius: float = 0.0
    data_file: str = ""
    graph_file: str = ""
    t2l_label: str = ""


@dataclass
class Experiment:
    """Motif sizes and zone orders to sweep, with a repetition count."""

    motif_sizes: list[int] = field(default_factory=list)
    k: list[int] = field(default_factory=list)
    repetitions: int = 0


_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _stoi(text: str, what: str) -> int:
    match = _INT_RE.match(text)
    if match is None:
        raise ConfigError(f"invalid integer for {what}: {text!r}")
    return int(match.group(1))


def _stod(text: str, what: str) -> float:
    match = _FLOAT_RE.match(text)
    if match is None:
        raise ConfigError(f"invalid number for {what}: {text!r}")
    return float(match.group(1))


def _to_bool(text: str, what: str) -> bool:
    return bool(_stoi(text, what))


# A converter of None keeps the raw text of the value.
_FRAMEWORK_FIELDS: tuple[tuple[str, Optional[Callable[[str, str], object]]], ...] = (
    ("input_dir", None),
    ("output_dir", None),
    ("t2_dir", None),
    ("t2l_dir", None),
    ("input_file", None),
    ("experiment_file", None),
    ("v_file", None),
    ("replot", _to_bool),
    ("extract_data", _to_bool),
    ("sample_rate", _stoi),
    ("densigram", _to_bool),
    ("plot_graph", _to_bool),
    ("zero_density", _to_bool),
    ("title", _to_bool),
    ("title_str", None),
    ("extract_experiment_data", _to_bool),
    ("plot_experiments", _to_bool),
    ("time_vary_k", _to_bool),
    ("time_vary_m", _to_bool),
    ("vary_k", _to_bool),
    ("vary_m", _to_bool),
    ("uplusv", _to_bool),
    ("superimposed", _to_bool),
    ("use_threads_1", _to_bool),
    ("use_threads_2", _to_bool),
    ("num_threads", _stoi),
    ("t2", _to_bool),
    ("t2l", _to_bool),
    ("type_of_experiment", None),
    ("experimental_t2", _to_bool),
    ("experimental_t2_label", None),
    ("t2_start_index", _stoi),
)


def _read_lines(path: str | os.PathLike[str], missing_message: str) -> list[str]:
    try:
        with open(path, encoding="utf-8") as fh:
            return fh.read().splitlines()
    except OSError as exc:
        raise ConfigError(missing_message) from exc


def _fields(line: str) -> list[str]:
    """Comma-separated fields; a trailing empty field is not counted."""
    if not line:
        return []
    parts = line.split(",")
    if parts[-1] == "":
        parts.pop()
    return parts


def _line(lines: list[str], index: int) -> str:
    return lines[index] if index < len(lines) else ""


def _first_field(line: str) -> str:
    return line.split(",", 1)[0]


def _point(line: str, what: str) -> Point3:
    parts = line.split(",")
    if len(parts) < 3:
        raise ConfigError(f"expected three coordinates in {what}: {line!r}")
    return Point3(*(_stod(value, what) for value in parts[:3]))


def read_framework_parameters(path: str | os.PathLike[str]) -> FrameworkParameters:
    """Read the ``key,value`` framework parameter file, one setting per line."""
    lines = _read_lines(path, "Framework parameters file not found!")
    values: dict[str, object] = {}
    for index, (name, convert) in enumerate(_FRAMEWORK_FIELDS):
        if index >= len(lines):
            raise ConfigError(f"missing framework parameter {name!r}")
        parts = lines[index].split(",")
        if len(parts) < 2:
            raise ConfigError(f"no value given for framework parameter {name!r}")
        raw = parts[1]
        values[name] = raw if convert is None else convert(raw, name)
    return FrameworkParameters(**values)


def read_experiment(f_p: FrameworkParameters) -> Experiment:
    """Read motif sizes, zone orders and repetitions for an experiment sweep."""
    lines = _read_lines(f_p.input_dir + f_p.experiment_file, "Experiment file not found!")
    motif_sizes = [_stoi(v, "motif size") for v in _fields(_line(lines, 0))]
    k = [_stoi(v, "k") for v in _fields(_line(lines, 1))]
    repetitions = _stoi(_line(lines, 2), "repetitions")
    return Experiment(motif_sizes=motif_sizes, k=k, repetitions=repetitions)


def load_input(f_p: FrameworkParameters, input_file: str) -> Input:
    """Read a structure from a global file naming its cell, coordinates and outputs."""
    global_lines = _read_lines(f_p.input_dir + input_file, "Global file not found!")
    result = Input()

    cell_name = _first_field(_line(global_lines, 0))
    cell_lines = _read_lines(f_p.input_dir + cell_name, "Cell file not found!")
    cell_values = _line(cell_lines, 0).split(",")
    names = (
        "cell_param_a",
        "cell_param_b",
        "cell_param_c",
        "cell_param_alpha",
        "cell_param_beta",
        "cell_param_gamma",
    )
    if len(cell_values) < len(names):
        raise ConfigError("cell file needs six comma-separated values")
    for name, value in zip(names, cell_values):
        setattr(result, name, _stod(value, name))

    coords_name = _first_field(_line(global_lines, 1))
    coord_lines = _read_lines(f_p.input_dir + coords_name, "Frac_Coords file not found!")
    result.frac_base_pts = [_point(line, "fractional coordinates") for line in coord_lines]

    names_name = _first_field(_line(global_lines, 2))
    name_lines = _read_lines(f_p.input_dir + names_name, "File_Names file not found!")
    result.data_file = _line(name_lines, 0)
    result.graph_file = _line(name_lines, 1)
    return result


def read_v(f_p: FrameworkParameters, v_file: str) -> list[Point3]:
    """Read a list of fractional displacement vectors, one ``x,y,z`` per line."""
    lines = _read_lines(f_p.input_dir + v_file, "V not found!")
    return [_point(line, "V") for line in lines]