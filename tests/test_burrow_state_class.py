"""Tests for the burrow state model: amphipods, hallway scans, room stacks and successors."""

from collections import Counter

import pytest

from amphipod import parse_burrow
from burrow_state_class import (
    ROOM_HALLWAY_POSITIONS,
    Amphipod,
    Burrow,
    Hallway,
    Room,
    Walk,
    validate_state,
)
from classic_start import sample_start, solved_start

A, B, C, D = Amphipod.AMBER, Amphipod.BRONZE, Amphipod.COPPER, Amphipod.DESERT


# ── Amphipod ──────────────────────────────────────────────────────────────────


def test_unit_costs_increase_by_kind():
    assert [a.unit_cost for a in (A, B, C, D)] == [1, 10, 100, 1000]


def test_room_index_is_a_bijection():
    assert [a.room_index for a in (A, B, C, D)] == [0, 1, 2, 3]


def test_step_cost():
    assert D.step_cost(7) == 7000
    assert B.step_cost(0) == 0


def test_from_letter_rejects_unknown():
    assert Amphipod.from_letter("C") is C
    with pytest.raises(ValueError):
        Amphipod.from_letter("E")


# ── Hallway ───────────────────────────────────────────────────────────────────


def test_hallway_amphipods_in_position_order():
    hallway = Hallway().occupy(0, B).occupy(6, A).occupy(1, C)
    assert hallway.amphipods() == [(0, B), (1, C), (6, A)]


def test_hallway_leave_returns_amphipod():
    hallway, amphipod = Hallway().occupy(4, D).leave(4)
    assert amphipod is D
    assert hallway == Hallway()


def test_hallway_leave_empty_cell():
    hallway, amphipod = Hallway().leave(4)
    assert amphipod is None
    assert hallway == Hallway()


def test_walk_occupied_hallway():
    hallway = Hallway().occupy(0, B).occupy(6, A)
    assert hallway.walk(3) == [(2, 1), (1, 2), (4, 1), (5, 2)]


def test_walk_partially_occupied_hallway():
    hallway = Hallway().occupy(6, A)
    assert hallway.walk(3) == [(2, 1), (1, 2), (0, 3), (4, 1), (5, 2)]


def test_walk_empty_hallway():
    walks = Hallway().walk(3)
    assert walks == [(2, 1), (1, 2), (0, 3)] + [(p, p - 3) for p in range(4, 11)]


def test_walk_from_edge():
    assert Hallway().walk(0) == [(p, p) for p in range(1, 11)]
    assert Hallway().occupy(9, A).walk(10) == []


# ── Room ──────────────────────────────────────────────────────────────────────


def test_room_stack_discipline():
    room = Room.empty(4)
    steps = []
    for amphipod in (D, B, C, D):
        room, s = room.occupy(amphipod)
        steps.append(s)
    assert steps == [4, 3, 2, 1]

    left = []
    for _ in range(4):
        room, amphipod, s = room.leave()
        left.append((amphipod, s))
    assert room.leave() is None
    assert left == [(D, 1), (C, 2), (B, 3), (D, 4)]


def test_room_occupy_and_leave():
    room = Room.empty(4)
    room, steps = room.occupy(D)
    assert steps == 4
    room, steps = room.occupy(D)
    assert steps == 3
    assert room.is_settled(D)
    room, amphipod, steps = room.leave()
    assert (amphipod, steps) == (D, 3)

    room, _ = room.occupy(B)
    room, _ = room.occupy(C)
    room, steps = room.occupy(A)
    assert steps == 1
    assert not room.is_settled(D)


def test_empty_room_is_settled_for_any_kind():
    room = Room.empty(2)
    assert all(room.is_settled(a) for a in (A, B, C, D))
    assert room.leave() is None


def test_occupy_full_room_is_fatal():
    room = Room((A, A))
    with pytest.raises(RuntimeError):
        room.occupy(A)


# ── Burrow ────────────────────────────────────────────────────────────────────


def test_parse_rooms_without_blockages():
    burrow = parse_burrow("""
#############
#...........#
###B#C#B#D###
  #A#D#C#A#
  #A#B#C#D#
  #A#B#C#D#
  #########""")
    expected = Burrow.empty(4)
    for room_index, units in enumerate([(A, A, A, B), (B, B, D, C), (C, C, C, B), (D, D, A, D)]):
        room = expected.rooms[room_index]
        for a in units:
            room, _ = room.occupy(a)
        expected = expected.with_room(room_index, room)
    assert burrow == expected


def test_rooms_needing_evictions(sample_burrow):
    assert sample_burrow.rooms_needing_evictions() == [0]
    assert solved_start().rooms_needing_evictions() == []


def test_generate_successors(sample_burrow):
    burrow = sample_burrow
    expected = [
        burrow.successor_from_room_to_hallway(0, Walk(3, 1)),
        burrow.successor_from_hallway_to_room(5, Walk(ROOM_HALLWAY_POSITIONS[3], 3)),
        burrow.successor_from_hallway_to_room(9, Walk(ROOM_HALLWAY_POSITIONS[3], 1)),
    ]
    assert [cost for _, cost in expected] == [2, 7000, 5000]
    assert burrow.successors() == expected


def test_eviction_then_homecoming_costs():
    burrow = parse_burrow("""
#############
#B.........D#
###A#.#C#B###
  #A#.#C#D#
  #########""")
    successors = dict(burrow.successors())

    evicted, cost = burrow.successor_from_room_to_hallway(3, Walk(7, 1))
    assert cost == 10 * (1 + 1)
    assert successors[evicted] == cost
    # the hallway B at 0 can already walk home
    home, cost = burrow.successor_from_hallway_to_room(0, Walk(4, 4))
    assert cost == 10 * (4 + 2)
    assert successors[home] == cost

    back_home, cost = evicted.successor_from_hallway_to_room(7, Walk(4, 3))
    assert cost == 10 * (3 + 2)
    assert dict(evicted.successors())[back_home] == cost


def test_no_stop_cells_are_never_destinations():
    for successor, _ in sample_start().successors():
        for pos in ROOM_HALLWAY_POSITIONS:
            assert successor.hallway.cells[pos] is None


def test_blocked_hallway_has_no_successors():
    burrow = parse_burrow("""
#############
#...D.A.....#
###.#B#C#.###
  #A#B#C#D#
  #########""")
    assert validate_state(burrow) == []
    assert burrow.successors() == []
    assert not burrow.is_solved()


def test_conservation_over_reachable_states():
    start = sample_start()
    initial = Counter(start.amphipods())
    frontier, seen = [start], {start}
    for _ in range(3):
        nxt = []
        for s in frontier:
            for successor, cost in s.successors():
                assert cost > 0
                assert Counter(successor.amphipods()) == initial
                assert validate_state(successor) == []
                if successor not in seen:
                    seen.add(successor)
                    nxt.append(successor)
        frontier = nxt
    assert len(seen) > 1


def test_successors_do_not_mutate_parent():
    start = sample_start()
    before = start.rooms
    start.successors()
    assert start.rooms == before
    assert start == sample_start()


def test_equal_states_hash_equal():
    a = sample_start().successor_from_room_to_hallway(0, Walk(3, 1))[0]
    b = sample_start().successor_from_room_to_hallway(0, Walk(3, 1))[0]
    assert a == b
    assert len({a, b}) == 1


def test_is_solved():
    assert solved_start(2).is_solved()
    assert solved_start(4).is_solved()
    assert not sample_start().is_solved()


def test_validate_state_reports_problems():
    burrow = Burrow(Hallway().occupy(2, A), (Room((A, None)), Room((B, B)), Room((None, C)), Room((D, D))))
    errs = validate_state(burrow)
    assert any("parked above" in e for e in errs)
    assert any("gap" in e for e in errs)
    assert any("COPPER" in e for e in errs)


def test_validate_state_accepts_sample():
    assert validate_state(sample_start()) == []
