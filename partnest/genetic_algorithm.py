"""Genetic search over placement sequences."""

from __future__ import annotations

import math
import random
from dataclasses import replace
from typing import TYPE_CHECKING, Iterable

from .job import GenerationResult, Placement
from .packing import PackingResult, PlacementSequence

if TYPE_CHECKING:
    from .nesting_runner import NestPart

NO_PROGRESS_LIMIT = 6
POPULATION_SIZE = 2
MUTATION_RATE = 0.1

_SHEET_COUNT = 1
_LAST_SHEET_LEFT_OVER = 0
_CUT_LOSS_RATIO = 0.7


def random_weighted_index(length: int, rng: random.Random | None = None) -> int:
    """Pick an index below ``length``, favouring the low (fitter) end."""
    rng = rng if rng is not None else random.Random()
    n = float(length)
    y = rng.random() * n
    x = -0.5 * math.sqrt(4.0 * n * n - 4.0 * n * (y - 2.0) + 1.0) + n + 1.5
    return max(0, math.floor(x))


class Population:
    """A population of placement sequences; iterating it runs one generation per step."""

    def __init__(self, parts: Iterable[NestPart], rng: random.Random | None = None) -> None:
        self.parts = list(parts)
        if len(self.parts) < 2:
            raise ValueError("a population needs at least two parts")
        self.rng = rng if rng is not None else random.Random()
        self.individuals = [self._initial_individual(code) for code in range(POPULATION_SIZE)]
        self.generation = 0
        self.last_improvement = 0
        self.last_fitness = 0.0

    def _initial_individual(self, code: int) -> PlacementSequence:
        # ``code`` is read as a mixed-radix number: each digit picks the rotation of one copy.
        placements = []
        for part_index, part in enumerate(self.parts):
            count = len(part.rotations)
            for nth_part in range(part.quantity):
                placements.append(Placement(part_index, nth_part, part.rotations[code % count]))
                code //= count
        return PlacementSequence(placements)

    def __iter__(self) -> Population:
        return self

    def __next__(self) -> GenerationResult:
        results = self._packing_results()
        self.individuals = self._next_population(results)
        fittest_result, fittest_sequence = results[0]

        self.generation += 1
        if self.last_fitness < fittest_result.fitness:
            self.last_fitness = fittest_result.fitness
            self.last_improvement = 0
        else:
            self.last_improvement += 1

        if self.last_improvement >= NO_PROGRESS_LIMIT:
            raise StopIteration

        return GenerationResult(
            sheet_count=_SHEET_COUNT,
            last_sheet_left_over=_LAST_SHEET_LEFT_OVER,
            cut_loss_ratio=_CUT_LOSS_RATIO,
            placements_and_location=list(
                zip(fittest_sequence.placements, fittest_result.placed_at)
            ),
        )

    def _packing_results(self) -> list[tuple[PackingResult, PlacementSequence]]:
        results = [(individual.pack(), individual) for individual in self.individuals]
        results.sort(key=lambda pair: pair[0].fitness)
        return results

    def _next_population(
        self, results: list[tuple[PackingResult, PlacementSequence]]
    ) -> list[PlacementSequence]:
        target = len(self.individuals)
        next_population: list[PlacementSequence] = []
        while True:
            male_ix = random_weighted_index(len(results), self.rng)
            female_ix = random_weighted_index(len(results) - 1, self.rng)
            if female_ix == male_ix:
                female_ix += 1

            for child in self.mate(results[male_ix][1], results[female_ix][1]):
                next_population.append(self.mutate(child))
                if len(next_population) == target:
                    return next_population

    def mate(
        self, male: PlacementSequence, female: PlacementSequence
    ) -> tuple[PlacementSequence, PlacementSequence]:
        """Cross two parents over at a random point and return two children."""
        length = len(male.placements)
        if length != len(female.placements):
            raise ValueError("parents must hold the same number of placements")

        ignore_count = length // 10
        cross_ix = self.rng.randint(ignore_count, length - ignore_count)

        def child_of(head_parent: PlacementSequence) -> PlacementSequence:
            head = head_parent.placements[:cross_ix]
            taken = {(p.part_index, p.nth_part) for p in head}
            tail = [p for p in female.placements if (p.part_index, p.nth_part) not in taken]
            child = PlacementSequence(head + tail)
            if len(child.placements) != length:
                raise ValueError("parents must hold the same placements")
            return child

        return child_of(male), child_of(female)

    def mutate(self, individual: PlacementSequence) -> PlacementSequence:
        """Return a copy with occasional neighbour swaps and rotation changes."""
        placements = list(individual.placements)

        for i in range(len(placements) - 1):
            if self.rng.random() > MUTATION_RATE:
                continue
            placements[i], placements[i + 1] = placements[i + 1], placements[i]

        for position, placement in enumerate(placements):
            if self.rng.random() > MUTATION_RATE:
                continue
            rotations = self.parts[placement.part_index].rotations
            index = rotations.index(placement.angle)
            index += self.rng.randrange(len(rotations) - 1)
            index %= len(rotations)
            placements[position] = replace(placement, angle=rotations[index])

        return PlacementSequence(placements)