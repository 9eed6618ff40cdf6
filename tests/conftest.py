import pytest

from amphipod import parse_burrow
from burrow_state_class import Walk

SAMPLE_FOUR_DEEP = """
#############
#...........#
###A#B#D#A###
  #D#B#C#D#
  #C#B#C#A#
  #D#B#C#A#
  #########"""


@pytest.fixture
def sample_burrow():
    """
    #############
    #AA...D...DA#
    ###A#B#.#.###
      #D#B#C#.#
      #C#B#C#.#
      #D#B#C#.#
      #########
    """
    burrow = parse_burrow(SAMPLE_FOUR_DEEP)
    for room_index, position, steps in [(3, 10, 2), (3, 9, 1), (3, 0, 8), (3, 1, 7), (2, 5, 1)]:
        burrow, _ = burrow.successor_from_room_to_hallway(room_index, Walk(position, steps))
    return burrow
