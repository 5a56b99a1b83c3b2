"""Unit-cell geometry: fractional/Cartesian conversion, lattices and point clouds."""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Iterator, Sequence

Matrix = tuple[tuple[float, float, float], tuple[float, float, float], tuple[float, float, float]]

BCC_ANGLE = 70.52877937
HOMOMETRIC_CELL_LENGTH = 100.0


@dataclass(frozen=True)
class Point3:
    """A point (or displacement) in three-dimensional space."""

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: object) -> Point3:
        if not isinstance(other, Point3):
            return NotImplemented
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: object) -> Point3:
        if not isinstance(other, Point3):
            return NotImplemented
        return Point3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Point3:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Point3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Point3:
        return Point3(-self.x, -self.y, -self.z)

    def squared_distance(self, other: Point3) -> float:
        """Squared Euclidean distance to another point."""
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2


@dataclass(frozen=True)
class CellShape:
    """Unit-cell lengths and angles (angles in degrees)."""

    a: float
    b: float
    c: float
    alpha: float
    beta: float
    gamma: float

    LABELS: ClassVar[tuple[str, ...]] = (
        "_cell_length_a",
        "_cell_length_b",
        "_cell_length_c",
        "_cell_angle_alpha",
        "_cell_angle_beta",
        "_cell_angle_gamma",
    )

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, float]]) -> CellShape:
        """Build a cell from (label, value) pairs in the standard CIF order."""
        values = [float(value) for _, value in pairs]
        if len(values) != 6:
            raise ValueError(f"a cell shape needs 6 values, got {len(values)}")
        return cls(*values)

    def items(self) -> list[tuple[str, float]]:
        """The cell as (CIF label, value) pairs."""
        values = (self.a, self.b, self.c, self.alpha, self.beta, self.gamma)
        return list(zip(self.LABELS, values))

    @property
    def volume(self) -> float:
        """Volume of the cell."""
        ca = math.cos(math.radians(self.alpha))
        cb = math.cos(math.radians(self.beta))
        cg = math.cos(math.radians(self.gamma))
        return self.a * self.b * self.c * math.sqrt(
            1 - ca * ca - cb * cb - cg * cg + 2 * ca * cb * cg
        )


def frac_to_cart(matrix: Sequence[Sequence[float]], p: Iterable[float]) -> Point3:
    """Map fractional coordinates to Cartesian ones with the given matrix."""
    coords = tuple(p)
    return Point3(*(sum(m * c for m, c in zip(row, coords)) for row in matrix))


def transformation_matrix(cell_shape: CellShape | Iterable[tuple[str, float]]) -> Matrix:
    """Matrix whose columns are the Cartesian lattice vectors of the cell."""
    cell = cell_shape if isinstance(cell_shape, CellShape) else CellShape.from_pairs(cell_shape)
    alpha = math.radians(cell.alpha)
    beta = math.radians(cell.beta)
    gamma = math.radians(cell.gamma)
    sin_g = math.sin(gamma)
    return (
        (cell.a, cell.b * math.cos(gamma), cell.c * math.cos(beta)),
        (
            0.0,
            cell.b * sin_g,
            cell.c * (math.cos(alpha) - math.cos(beta) * math.cos(gamma)) / sin_g,
        ),
        (0.0, 0.0, cell.volume / (cell.a * cell.b * sin_g)),
    )


def lattice_vectors(matrix: Sequence[Sequence[float]]) -> list[Point3]:
    """The three Cartesian lattice vectors described by the matrix."""
    units = (Point3(1, 0, 0), Point3(0, 1, 0), Point3(0, 0, 1))
    return [frac_to_cart(matrix, unit) for unit in units]


def initialise_lattice(input: Any) -> list[Point3]:
    """Set ``matrix`` and ``lattice_vectors`` on the input from its cell parameters."""
    cell = CellShape(
        input.cell_param_a,
        input.cell_param_b,
        input.cell_param_c,
        input.cell_param_alpha,
        input.cell_param_beta,
        input.cell_param_gamma,
    )
    input.matrix = transformation_matrix(cell)
    input.lattice_vectors = lattice_vectors(input.matrix)
    return input.lattice_vectors


def surrounding_cloud(input: Any, index: int) -> list[tuple[float, Point3]]:
    """Periodic neighbours of base point ``index``, sorted by squared distance.

    All translates of the base points within ``input.perim`` cells in each
    direction are included, except the centre point itself. Ties keep the
    order in which the points were generated.
    """
    v1, v2, v3 = input.lattice_vectors
    centre = input.base_pts[index]
    perim = input.perim
    span = range(-perim, perim + 1)
    cloud: list[tuple[float, Point3]] = []
    for i, j, k in itertools.product(span, repeat=3):
        shift = i * v1 + j * v2 + k * v3
        for n, base in enumerate(input.base_pts):
            if i == 0 and j == 0 and k == 0 and n == index:
                continue
            p = base + shift
            cloud.append((centre.squared_distance(p), p))
    cloud.sort(key=lambda item: item[0])
    return cloud


def _homometric_points(u: float) -> list[Point3]:
    return [
        Point3(u, 0, 0.25),
        Point3(-u, 0.5, 0.25),
        Point3(0.5 - u, 0, 0.75),
        Point3(u + 0.5, 0.5, 0.75),
        Point3(0.25, u, 0),
        Point3(0.25, -u, 0.5),
        Point3(0.75, 0.5 - u, 0),
        Point3(0.75, u + 0.5, 0.5),
        Point3(0, 0.25, u),
        Point3(0.5, 0.25, -u),
        Point3(0, 0.75, 0.5 - u),
        Point3(0.5, 0.75, u + 0.5),
        Point3(-u, 0, 0.75),
        Point3(u, 0.5, 0.75),
        Point3(u + 0.5, 0, 0.25),
        Point3(0.5 - u, 0.5, 0.25),
        Point3(0.75, -u, 0),
        Point3(0.75, u, 0.5),
        Point3(0.25, u + 0.5, 0),
        Point3(0.25, 0.5 - u, 0.5),
        Point3(0, 0.75, -u),
        Point3(0.5, 0.75, u),
        Point3(0, 0.25, u + 0.5),
        Point3(0.5, 0.25, 0.5 - u),
    ]


def _set_cell(input: Any, cell: CellShape) -> None:
    input.cell_param_a = cell.a
    input.cell_param_b = cell.b
    input.cell_param_c = cell.c
    input.cell_param_alpha = cell.alpha
    input.cell_param_beta = cell.beta
    input.cell_param_gamma = cell.gamma


def preset_parameters(input: Any) -> None:
    """Fill in the cell and motif of a built-in structure selected on the input.

    Homometric, FCC (a body-centred rhombohedral cell) and HCP presets set the
    cell parameters; otherwise a single point at the origin is added to the
    existing cell.
    """
    if input.homometric:
        side = HOMOMETRIC_CELL_LENGTH
        _set_cell(input, CellShape(side, side, side, 90, 90, 90))
        input.frac_base_pts.extend(_homometric_points(input.u))
    elif input.fcc:
        _set_cell(input, CellShape(10, 10, 10, BCC_ANGLE, BCC_ANGLE, BCC_ANGLE))
        input.frac_base_pts.append(Point3(0, 0, 0))
    elif input.hcp:
        _set_cell(input, CellShape(1, 1, 2 * math.sqrt(6) / 3, 90, 90, 120))
        input.frac_base_pts.append(Point3(0, 0, 0))
        input.frac_base_pts.append(Point3(2 / 3, 1 / 3, 0.5))
    else:
        input.frac_base_pts.append(Point3(0, 0, 0))