from amphipod import parse_burrow, unfold
from burrow_state_class import AMPHIPODS_BY_ROOM, Burrow, Hallway, Room

# ----------------------------
# Demo: the worked example layout
# ----------------------------
SAMPLE_LAYOUT = """\
#############
#...........#
###B#C#B#D###
  #A#D#C#A#
  #########"""


def sample_start():
    # two-deep rooms, optimal cost 12521
    return parse_burrow(SAMPLE_LAYOUT)


def sample_unfolded_start():
    # four-deep rooms, optimal cost 44169
    return parse_burrow(unfold(SAMPLE_LAYOUT))


def solved_start(depth=2):
    rooms = tuple(Room((a,) * depth) for a in AMPHIPODS_BY_ROOM)
    return Burrow(Hallway(), rooms)
