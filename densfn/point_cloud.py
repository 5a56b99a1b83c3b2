"""Building the Cartesian motif (base points) of a periodic point set."""

from __future__ import annotations

import random
from typing import Any

from densfn.cif import CifError, read_atom_coords, read_cell_shape, read_cif
from densfn.config import ConfigError
from densfn.lattice import Point3, frac_to_cart, lattice_vectors, transformation_matrix
from densfn.t2 import (
    ATOMS_PER_MOLECULE,
    base_points_from_atoms,
    experimental_cell_shape,
    experimental_points,
)

_RANDOM_STEPS = 10000
_T2L_HEADER_LINES = 6


def add_random_points(input: Any, rng: random.Random | None = None) -> list[Point3]:
    """Replace ``input.frac_random_pts`` with ``input.random_pts`` random fractional points.

    Each coordinate is a multiple of 1/10000 in [0, 1).
    """
    rng = rng if rng is not None else random.Random()

    def coordinate() -> float:
        return rng.randrange(_RANDOM_STEPS) / _RANDOM_STEPS

    input.frac_random_pts = [
        Point3(coordinate(), coordinate(), coordinate()) for _ in range(input.random_pts)
    ]
    return input.frac_random_pts


def initialise_pt_cloud(f_p: Any, input: Any, index: int, uplusv: bool) -> list[Point3]:
    """Produce the Cartesian base points from the source the parameters select."""
    if f_p.t2:
        return initialise_t2(f_p, input, index)
    if f_p.t2l:
        return initialise_t2l(f_p, input)
    return initialise_custom(input, uplusv)


def _wrap(value: float) -> float:
    value -= int(value)
    return value + 1 if value < 0 else value


def initialise_custom(input: Any, uplusv: bool) -> list[Point3]:
    """Base points of a user-defined structure.

    With ``uplusv`` every base point is shifted by every vector of ``frac_v``
    (added on even repetitions, subtracted on odd ones) and wrapped into the
    unit cell; otherwise the base points are followed by the random points.
    """
    if input.matrix is None:
        raise ValueError("the transformation matrix has not been set")
    if uplusv:
        sign = 1 if input.rep_iter % 2 == 0 else -1
        fractional = [
            Point3(*(_wrap(c) for c in base + sign * v))
            for base in input.frac_base_pts
            for v in input.frac_v
        ]
    else:
        fractional = [*input.frac_base_pts, *input.frac_random_pts]
    input.base_pts = [frac_to_cart(input.matrix, p) for p in fractional]
    return input.base_pts


def initialise_t2(f_p: Any, input: Any, index: int) -> list[Point3]:
    """Base points of a T2 crystal, experimental or read from entry ``index``'s CIF file."""
    if f_p.experimental_t2:
        label = f_p.experimental_t2_label
        matrix = transformation_matrix(experimental_cell_shape(label))
        points = experimental_points(label, f_p.type_of_experiment, matrix)
    else:
        file_path = f"{f_p.t2_dir}T2_{index}_num_molGeom.cif"
        blocks = read_cif(file_path)
        if len(blocks) < 2:
            raise CifError(f"{file_path} has no second data block")
        block = blocks[1]
        matrix = transformation_matrix(read_cell_shape(block))
        atoms = read_atom_coords(block, matrix)
        points = base_points_from_atoms(atoms, f_p.type_of_experiment)
    input.matrix = matrix
    input.base_pts = points
    input.lattice_vectors = lattice_vectors(matrix)
    return input.base_pts


def _number(text: str, what: str) -> float:
    try:
        return float(text)
    except ValueError as exc:
        raise ConfigError(f"invalid number for {what}: {text!r}") from exc


def _integer(text: str, what: str) -> int:
    try:
        return int(text.strip())
    except ValueError as exc:
        raise ConfigError(f"invalid integer for {what}: {text!r}") from exc


def _matrix_column(line: str) -> tuple[float, float, float]:
    parts = line.split(",")
    if len(parts) < 3:
        raise ConfigError(f"expected three matrix entries: {line!r}")
    a, b, c = (_number(value, "matrix entry") for value in parts[:3])
    return a, b, c


def initialise_t2l(f_p: Any, input: Any) -> list[Point3]:
    """Base points of a T2L crystal read from its ``job_0<label>.csv`` file.

    The first three lines hold the lattice vectors (the matrix columns), three
    more lines are skipped, and each following line is
    ``index,atom_type,x,y,z,molecule_index`` in fractional coordinates.
    """
    file_path = f"{f_p.t2l_dir}job_0{input.t2l_label}.csv"
    try:
        with open(file_path, encoding="utf-8") as fh:
            lines = fh.read().splitlines()
    except OSError as exc:
        raise ConfigError(f"T2L file not found: {file_path}") from exc
    if len(lines) < 3:
        raise ConfigError(f"T2L file has no lattice: {file_path}")

    columns = [_matrix_column(line) for line in lines[:3]]
    matrix = tuple(tuple(column[row] for column in columns) for row in range(3))

    atoms: list[tuple[Point3, str, int]] = []
    for line in lines[_T2L_HEADER_LINES:]:
        if not line.strip():
            continue
        parts = line.split(",")
        if len(parts) < 6:
            raise ConfigError(f"malformed atom line: {line!r}")
        frac = (_number(value, "atom coordinate") for value in parts[2:5])
        atoms.append((frac_to_cart(matrix, frac), parts[1], _integer(parts[5], "molecule index")))

    experiment = f_p.type_of_experiment
    points: list[Point3] = []
    if experiment in ("Molecule_Centres", "Centres_Plus_Ox"):
        for molecule in range(len(atoms) // ATOMS_PER_MOLECULE):
            total = Point3(0, 0, 0)
            for p, _, owner in atoms:
                if owner == molecule:
                    total = total + p
            points.append(total * (1 / ATOMS_PER_MOLECULE))
    if experiment == "Centres_Plus_Ox":
        points.extend(p for p, atom_type, _ in atoms if atom_type == "O")

    input.matrix = matrix
    input.base_pts = points
    input.lattice_vectors = lattice_vectors(matrix)
    return input.base_pts