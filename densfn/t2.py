"""Reference data and point extraction for T2 crystal structures."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

from densfn.lattice import CellShape, Point3, frac_to_cart

ATOMS_PER_MOLECULE = 46
_ATOM_STRIDE = 32

_CELL_SHAPES: dict[str, CellShape] = {
    "a": CellShape(22.5124, 22.5124, 7.3367, 90, 90, 90),
    "b": CellShape(7.246, 13.0328, 20.66, 72.464, 86.349, 74.035),
    "b2": CellShape(7.2523, 13.033, 20.693, 72.701, 86.552, 73.915),
    "c": CellShape(23.2209, 23.2209, 7.2864, 90, 90, 120),
    "d": CellShape(24.316, 7.284, 14.9, 90, 119.038, 90),
    "e": CellShape(12.6079, 12.6079, 7.4937, 90, 90, 120),
}

_Frac = tuple[float, float, float]

# Fractional molecule centres and oxygen positions for each experimental form.
_POINTS: dict[str, tuple[tuple[_Frac, ...], tuple[_Frac, ...]]] = {
    "a": (
        ((0.764, 0.187, 0), (0.187, 0.236, 0.5), (0.813, 0.764, 0.5), (0.236, 0.813, 0)),
        (
            (0.13795, 0.51044, 0),
            (0.54737, 0.86013, 0),
            (0.03413, 1.06044, 0),
            (0.86205, 0.48956, 0),
            (0.45263, 0.13987, 0),
            (0.96587, -0.06044, 0),
            (0.48956, 0.13795, 0.5),
            (0.13987, 0.54737, 0.5),
            (-0.06044, 0.03413, 0.5),
            (0.51044, 0.86205, 0.5),
            (0.86013, 0.45263, 0.5),
            (1.06044, 0.96587, 0.5),
        ),
    ),
    "b": (
        ((0.736, 0.663, 0.172), (0.264, 0.337, 0.828)),
        (
            (0.99574, 0.19939, 0.03063),
            (0.46451, 1.26401, 0.03389),
            (0.75010, 0.48915, 0.52199),
            (0.00426, 0.80061, 0.96937),
            (0.53549, -0.26401, 0.96611),
            (0.24990, 0.51085, 0.47801),
        ),
    ),
    "b2": (
        ((0.769, 0.338, 0.328), (0.231, 0.662, 0.672)),
        (),
    ),
    "c": (
        ((0.333, 0.667, 0.75), (0.667, 0.333, 0.25)),
        (
            (0.51096, 0.48904, 0.75),
            (0.51096, 1.02192, 0.75),
            (-0.02192, 0.48904, 0.75),
            (0.48904, 0.51096, 0.25),
            (0.48904, -0.02192, 0.25),
            (1.02192, 0.51096, 0.25),
        ),
    ),
    "d": (
        ((0.744, 0, 0.255), (0.756, 0.5, 0.745), (0.244, 0.5, 0.255), (0.256, 0, 0.745)),
        (
            (1.04320, -0.26340, 0.46580),
            (0.74960, 0.51120, -0.02200),
            (0.51280, 0.80180, 0.46930),
            (-0.04320, 1.26340, 0.53420),
            (0.25040, 0.48880, 1.02200),
            (0.48720, 0.19820, 0.53070),
        ),
    ),
    "e": (
        ((0.667, 0.333, 0.75), (0.333, 0.667, 0.25)),
        (),
    ),
}


def _check_label(label: str) -> None:
    if label not in _CELL_SHAPES:
        raise ValueError(f"unknown experimental T2 label: {label!r}")


def experimental_cell_shape(label: str) -> CellShape:
    """Unit cell of the experimentally observed T2 form with the given label."""
    _check_label(label)
    return _CELL_SHAPES[label]


def experimental_points(
    label: str, type_of_experiment: str, matrix: Sequence[Sequence[float]]
) -> list[Point3]:
    """Cartesian points of an experimental T2 form.

    ``Molecule_Centres`` gives the molecule centres,
    ``Molecule_Centres_with_Oxygens`` the centres followed by the oxygens,
    and any other experiment type the oxygens alone.
    """
    _check_label(label)
    centre_fracs, oxygen_fracs = _POINTS[label]
    centres = [frac_to_cart(matrix, p) for p in centre_fracs]
    oxygens = [frac_to_cart(matrix, p) for p in oxygen_fracs]
    if type_of_experiment == "Molecule_Centres":
        return centres
    if type_of_experiment == "Molecule_Centres_with_Oxygens":
        return centres + oxygens
    return oxygens


def base_points_from_atoms(atom_cloud: Sequence[Point3], type_of_experiment: str) -> list[Point3]:
    """Motif points derived from the atoms of a predicted T2 crystal.

    Each molecule contributes the midpoint of two ring atoms as its centre and
    its first three atoms as oxygens, chosen by the experiment type as in
    :func:`experimental_points` (with oxygens first when both are kept).
    """
    points: list[Point3] = []
    for molecule in range(len(atom_cloud) // ATOMS_PER_MOLECULE):
        start = molecule * _ATOM_STRIDE
        oxygens = list(atom_cloud[start : start + 3])
        centre = (atom_cloud[start + 9] + atom_cloud[start + 22]) * 0.5
        if type_of_experiment == "Molecule_Centres":
            points.append(centre)
        elif type_of_experiment == "Molecule_Centres_with_Oxygens":
            points.extend(oxygens)
            points.append(centre)
        else:
            points.extend(oxygens)
    return points


def read_t2l_labels(directory: str | os.PathLike[str]) -> list[str]:
    """Four-character labels (characters 5 to 8) of the entries in a directory, sorted."""
    labels = []
    for entry in sorted(Path(directory).iterdir()):
        name = entry.name
        if len(name) < 5:
            raise ValueError(f"file name too short for a label: {name!r}")
        labels.append(name[5:9])
    return labels