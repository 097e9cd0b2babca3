from partnest.job import Coord, Placement
from partnest.packing import PlacementSequence


def test_pack_reports_fixed_fitness():
    sequence = PlacementSequence([Placement(0, 0, 0), Placement(0, 1, 90)])
    assert sequence.pack().fitness == 123.0


def test_pack_places_ten_copies_at_origin():
    result = PlacementSequence().pack()
    assert len(result.placed_at) == 10
    assert all(c == Coord(0.0, 0.0) for c in result.placed_at)


def test_pack_is_independent_of_order():
    a = PlacementSequence([Placement(0, 0, 0), Placement(1, 0, 180)])
    b = PlacementSequence(list(reversed(a.placements)))
    assert a.pack() == b.pack()


def test_pack_results_do_not_share_state():
    sequence = PlacementSequence([Placement(0, 0, 0)])
    first = sequence.pack()
    first.placed_at.clear()
    assert len(sequence.pack().placed_at) == 10