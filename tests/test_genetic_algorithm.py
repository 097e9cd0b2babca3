import random

import pytest

from partnest.genetic_algorithm import (
    NO_PROGRESS_LIMIT,
    POPULATION_SIZE,
    Population,
    random_weighted_index,
)
from partnest.job import Coord, GenerationResult, Placement
from partnest.nest_polygon import NestPolygon
from partnest.nesting_runner import NestPart
from partnest.packing import PlacementSequence

TRIANGLE = [Coord(70.0, 10.0), Coord(80.0, 20.0), Coord(90.0, 40.0)]


def make_part(quantity, rotations):
    return NestPart(quantity=quantity, polygon=NestPolygon(TRIANGLE), rotations=list(rotations))


class FixedRandom(random.Random):
    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def keys(sequence):
    return sorted((p.part_index, p.nth_part) for p in sequence.placements)


def test_single_part_is_rejected():
    with pytest.raises(ValueError):
        Population([make_part(4, [0, 90, 180, 270])])


def test_mutates():
    parts = [make_part(4, [0, 90, 180, 270]), make_part(2, [0, 90, 180, 270])]
    population = Population(parts, random.Random(7))
    original = population.individuals[0]
    mutated = population.mutate(original)
    assert keys(mutated) == keys(original)
    assert all(p.angle in parts[p.part_index].rotations for p in mutated.placements)


def test_initial_population_encodes_rotations():
    population = Population([make_part(1, [0, 90]), make_part(1, [0, 90])], random.Random(1))
    assert len(population.individuals) == POPULATION_SIZE
    assert [p.angle for p in population.individuals[0].placements] == [0, 0]
    assert [p.angle for p in population.individuals[1].placements] == [90, 0]
    assert [(p.part_index, p.nth_part) for p in population.individuals[1].placements] == [
        (0, 0),
        (1, 0),
    ]


def test_mutate_without_mutation_keeps_individual():
    population = Population([make_part(3, [0, 90]), make_part(1, [0, 90])], FixedRandom(1.0))
    original = population.individuals[1]
    assert population.mutate(original) == original


def test_mutate_always_swaps_neighbours():
    population = Population([make_part(3, [0, 180]), make_part(1, [0, 180])], FixedRandom(0.0))
    original = population.individuals[0].placements
    mutated = population.mutate(PlacementSequence(list(original))).placements
    assert [(p.part_index, p.nth_part) for p in mutated] == [
        (p.part_index, p.nth_part) for p in original[1:] + original[:1]
    ]


def test_mate_children_are_permutations():
    population = Population([make_part(3, [0, 90]), make_part(2, [0, 90])], random.Random(3))
    male = population.individuals[0]
    female = PlacementSequence(list(reversed(population.individuals[1].placements)))
    child1, child2 = population.mate(male, female)
    assert keys(child1) == keys(male)
    assert child2 == female
    assert child1.placements[0] in (male.placements[0], female.placements[0])


def test_mate_rejects_different_lengths():
    population = Population([make_part(2, [0, 90]), make_part(1, [0, 90])], random.Random(0))
    short = PlacementSequence([Placement(0, 0, 0)])
    with pytest.raises(ValueError):
        population.mate(population.individuals[0], short)


def test_iteration_stops_without_progress():
    population = Population([make_part(2, [0, 90]), make_part(1, [0, 90])], random.Random(5))
    results = list(population)
    assert len(results) == NO_PROGRESS_LIMIT
    assert population.generation == NO_PROGRESS_LIMIT + 1
    assert population.last_fitness == 123.0
    assert all(isinstance(r, GenerationResult) and r.sheet_count == 1 for r in results)
    assert all(r.cut_loss_ratio == 0.7 and r.last_sheet_left_over == 0 for r in results)


def test_generation_pairs_placements_with_locations():
    population = Population([make_part(2, [0, 90]), make_part(1, [0, 90])], random.Random(2))
    result = next(population)
    assert len(result.placements_and_location) == 3
    assert all(location == Coord(0.0, 0.0) for _, location in result.placements_and_location)
    assert sorted((p.part_index, p.nth_part) for p, _ in result.placements_and_location) == [
        (0, 0),
        (0, 1),
        (1, 0),
    ]


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("length", [1, 2, 5, 10])
def test_random_weighted_index_in_range(seed, length):
    assert 0 <= random_weighted_index(length, random.Random(seed)) < length


def test_random_weighted_index_ends():
    assert random_weighted_index(2, FixedRandom(0.0)) == 0
    assert random_weighted_index(2, FixedRandom(0.999)) == 1
    assert random_weighted_index(1, FixedRandom(0.999)) == 0