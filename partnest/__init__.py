"""Genetic search over placement orders and rotations of polygonal parts, with no-fit polygons and a job worker."""

__version__ = "0.1.0"