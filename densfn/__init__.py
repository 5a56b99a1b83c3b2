"""Periodic point sets in 3D: lattices, input and CIF readers, T2 data, result combination and gnuplot scripts."""

__version__ = "0.1.0"

__all__ = [
    "cif",
    "config",
    "lattice",
    "naming",
    "plotting",
    "point_cloud",
    "results",
    "t2",
]