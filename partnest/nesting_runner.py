"""Runs one nesting job and reports its progress."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Callable

from .genetic_algorithm import Population
from .job import GenerationResult, Input, Status, Update
from .nest_polygon import NestPolygon


@dataclass
class NestPart:
    """A part prepared for nesting."""

    quantity: int
    polygon: NestPolygon
    rotations: list[int]


class NestingRunner:
    """Evolves placements for a job, passing each generation's best to a callback."""

    def __init__(self, job: Input, update_callback: Callable[[Update], None]) -> None:
        self.job = job
        self.update_callback = update_callback
        parts = [
            NestPart(
                quantity=part.quantity,
                polygon=NestPolygon(part.contour),
                rotations=list(part.rotations),
            )
            for part in job.parts
        ]
        self.population = Population(parts)
        self.best_solution: GenerationResult | None = None

    def start(self) -> None:
        """Run generations until progress stops, then report completion."""
        for result in copy.copy(self.population):
            self.update_callback(Update(status=Status.RUNNING, nesting_solution=result))
        self.update_callback(Update(status=Status.DONE, nesting_solution=self.best_solution))