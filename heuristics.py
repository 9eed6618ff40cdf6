from burrow_state_class import AMPHIPODS_BY_ROOM, ROOM_HALLWAY_POSITIONS


# ----------------------------
# Heuristics
# ----------------------------
def trivial_h(s):
    # uniform-cost search
    return 0


def room_eviction_cost(s):
    """Cost of emptying every unsettled room, ignoring anything in the way.

    Own-kind amphipods stuck above a stranger pay for stepping out, one cell
    aside, back, and in again (``steps + 3``). Strangers walk straight to
    their home entrance and take one step in.
    """
    cost = 0
    for room_index in s.rooms_needing_evictions():
        room_pos = ROOM_HALLWAY_POSITIONS[room_index]
        room_amphipod = AMPHIPODS_BY_ROOM[room_index]
        room = s.rooms[room_index]
        while not room.is_settled(room_amphipod):
            room, amphipod, steps = room.leave()
            if amphipod == room_amphipod:
                steps += 3
            else:
                steps += abs(room_pos - ROOM_HALLWAY_POSITIONS[amphipod.room_index]) + 1
            cost += amphipod.step_cost(steps)
    return cost


def hallway_return_cost(s):
    cost = 0
    for pos, amphipod in s.hallway.amphipods():
        room_pos = ROOM_HALLWAY_POSITIONS[amphipod.room_index]
        cost += amphipod.step_cost(abs(room_pos - pos) + 1)
    return cost


def estimated_cost(s):
    # admissible: every term assumes an unobstructed hallway
    return room_eviction_cost(s) + hallway_return_cost(s)
