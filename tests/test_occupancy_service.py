"""Testes do grid de ocupação."""
from types import SimpleNamespace

import pytest

from services.codecs import Depth
from services.errors import NotFoundError
from services.occupancy_service import OccupancyService
from services.placement_service import PlacementService


def _assignment(shelf, column, depth, wine_id=1, producer="Ridge"):
    return SimpleNamespace(
        id=wine_id * 100,
        shelf=shelf,
        column_position=column,
        depth=depth,
        wine=SimpleNamespace(id=wine_id, producer=producer, vintage=2016, wine_name="Monte Bello"),
    )


def test_percentage_rounding_quarter():
    layout = SimpleNamespace(shelves=2, columns=1)
    result = OccupancyService.build_occupancy(layout, [_assignment(1, 1, Depth.FRONT)])

    assert result.total_slots == 4
    assert result.occupied_slots == 1
    assert result.occupancy_percentage == 25


def test_percentage_rounds_half_up():
    assert OccupancyService.occupancy_percentage(1, 8) == 13
    assert OccupancyService.occupancy_percentage(1, 3) == 33
    assert OccupancyService.occupancy_percentage(2, 3) == 67


def test_empty_layout_has_zero_percentage():
    layout = SimpleNamespace(shelves=0, columns=0)
    result = OccupancyService.build_occupancy(layout, [])

    assert result.total_slots == 0
    assert result.occupancy_percentage == 0
    assert result.slots == []


@pytest.mark.parametrize("occupied", [0, 1, 7, 60])
def test_sum_invariant_and_bounds(occupied):
    layout = SimpleNamespace(shelves=6, columns=5)
    all_addresses = [(s, c, d) for s in range(1, 7) for c in range(1, 6) for d in (Depth.FRONT, Depth.BACK)]
    assignments = [_assignment(*a, wine_id=i + 1) for i, a in enumerate(all_addresses[:occupied])]

    result = OccupancyService.build_occupancy(layout, assignments)

    assert result.occupied_slots + result.free_slots == 6 * 5 * 2
    assert result.total_slots == 60
    assert result.occupied_slots == occupied
    assert 0 <= result.occupancy_percentage <= 100
    assert sum(1 for s in result.slots if s.is_occupied) == occupied


def test_full_layout_is_100_percent():
    layout = SimpleNamespace(shelves=1, columns=1)
    result = OccupancyService.build_occupancy(
        layout, [_assignment(1, 1, Depth.FRONT, 1), _assignment(1, 1, Depth.BACK, 2)]
    )
    assert result.occupancy_percentage == 100


def test_grid_order_and_wine_summary():
    layout = SimpleNamespace(shelves=2, columns=2)
    result = OccupancyService.build_occupancy(layout, [_assignment(2, 1, Depth.BACK, wine_id=9, producer="Turley")])

    order = [(s.shelf, s.column, s.depth) for s in result.slots]
    assert order[0] == (1, 1, Depth.FRONT)
    assert order[1] == (1, 1, Depth.BACK)
    assert order[-1] == (2, 2, Depth.BACK)

    occupied = [s for s in result.slots if s.is_occupied]
    assert len(occupied) == 1
    assert (occupied[0].shelf, occupied[0].column, occupied[0].depth) == (2, 1, Depth.BACK)
    assert occupied[0].wine.producer == "Turley"
    assert occupied[0].assignment_id == 900


def test_assignments_outside_layout_are_ignored():
    layout = SimpleNamespace(shelves=1, columns=1)
    result = OccupancyService.build_occupancy(layout, [_assignment(3, 3, Depth.FRONT)])

    assert result.occupied_slots == 0
    assert result.total_slots == 2


def test_fridge_occupancy_from_database(db, make_layout, make_wine):
    layout = make_layout(shelves=6, columns=5)
    wine = make_wine("Château Musar", vintage=2012)
    PlacementService.assign(db, wine.id, layout.id, 2, 3, Depth.FRONT)

    result = OccupancyService.get_fridge_occupancy(db, layout.id)

    assert result.fridge_id == layout.id
    assert result.total_slots == 60
    assert result.occupied_slots == 1
    assert result.occupancy_percentage == 2
    slot = next(s for s in result.slots if s.is_occupied)
    assert slot.wine.producer == "Château Musar"


def test_fridge_occupancy_missing_layout(db):
    with pytest.raises(NotFoundError):
        OccupancyService.get_fridge_occupancy(db, 999)
