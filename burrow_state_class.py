from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

HALLWAY_LENGTH = 11
# hallway cells directly above each room entrance, never a resting place
ROOM_HALLWAY_POSITIONS = (2, 4, 6, 8)


# ----------------------------
# Amphipod
# ----------------------------
class Amphipod(Enum):
    AMBER = "A"
    BRONZE = "B"
    COPPER = "C"
    DESERT = "D"

    @classmethod
    def from_letter(cls, ch):
        try:
            return cls(ch)
        except ValueError:
            raise ValueError(f"{ch!r} is not a supported amphipod") from None

    @property
    def room_index(self) -> int:
        return AMPHIPODS_BY_ROOM.index(self)

    @property
    def unit_cost(self) -> int:
        return 10 ** self.room_index

    def step_cost(self, steps: int) -> int:
        return steps * self.unit_cost


AMPHIPODS_BY_ROOM = (Amphipod.AMBER, Amphipod.BRONZE, Amphipod.COPPER, Amphipod.DESERT)


class Walk(NamedTuple):
    position: int
    steps: int


# ----------------------------
# Hallway
# ----------------------------
@dataclass(frozen=True)
class Hallway:
    cells: Tuple[Optional[Amphipod], ...] = (None,) * HALLWAY_LENGTH

    def amphipods(self) -> List[Tuple[int, Amphipod]]:
        return [(pos, a) for pos, a in enumerate(self.cells) if a is not None]

    def occupy(self, position: int, amphipod: Amphipod) -> "Hallway":
        cells = list(self.cells)
        cells[position] = amphipod
        return Hallway(tuple(cells))

    def leave(self, position: int) -> Tuple["Hallway", Optional[Amphipod]]:
        amphipod = self.cells[position]
        if amphipod is None:
            return self, None
        cells = list(self.cells)
        cells[position] = None
        return Hallway(tuple(cells)), amphipod

    def walk(self, start: int) -> List[Walk]:
        """Every empty cell reachable from ``start`` without passing another amphipod.

        The left side is scanned first, nearest cell first, then the right side.
        """
        walks = []
        for direction in (-1, 1):
            pos, steps = start + direction, 1
            while 0 <= pos < len(self.cells) and self.cells[pos] is None:
                walks.append(Walk(pos, steps))
                pos += direction
                steps += 1
        return walks


# ----------------------------
# Room
# ----------------------------
@dataclass(frozen=True)
class Room:
    # index 0 is the closed end, index depth-1 sits right below the hallway
    cells: Tuple[Optional[Amphipod], ...]

    @classmethod
    def empty(cls, depth):
        return cls((None,) * depth)

    @property
    def depth(self) -> int:
        return len(self.cells)

    def amphipods(self) -> List[Amphipod]:
        return [a for a in self.cells if a is not None]

    def is_settled(self, amphipod: Amphipod) -> bool:
        return all(a == amphipod for a in self.cells if a is not None)

    def leave(self) -> Optional[Tuple["Room", Amphipod, int]]:
        for index in reversed(range(self.depth)):
            amphipod = self.cells[index]
            if amphipod is not None:
                cells = list(self.cells)
                cells[index] = None
                return Room(tuple(cells)), amphipod, self.depth - index
        return None

    def occupy(self, amphipod: Amphipod) -> Tuple["Room", int]:
        for index, entry in enumerate(self.cells):
            if entry is None:
                cells = list(self.cells)
                cells[index] = amphipod
                return Room(tuple(cells)), self.depth - index
        raise RuntimeError("Room full")


# ----------------------------
# Burrow
# ----------------------------
@dataclass(frozen=True)
class Burrow:
    hallway: Hallway
    rooms: Tuple[Room, ...]

    @classmethod
    def empty(cls, depth):
        return cls(Hallway(), tuple(Room.empty(depth) for _ in AMPHIPODS_BY_ROOM))

    @property
    def depth(self) -> int:
        return self.rooms[0].depth

    def amphipods(self) -> List[Amphipod]:
        units = [a for _, a in self.hallway.amphipods()]
        for room in self.rooms:
            units.extend(room.amphipods())
        return units

    def is_solved(self) -> bool:
        if self.hallway.amphipods():
            return False
        return all(room.is_settled(a) for room, a in zip(self.rooms, AMPHIPODS_BY_ROOM))

    def with_room(self, room_index, room):
        rooms = list(self.rooms)
        rooms[room_index] = room
        return Burrow(self.hallway, tuple(rooms))

    def rooms_needing_evictions(self) -> List[int]:
        return [
            index
            for index, (room, a) in enumerate(zip(self.rooms, AMPHIPODS_BY_ROOM))
            if not room.is_settled(a)
        ]

    def hallway_ready_to_enter_room(self) -> List[Tuple[int, Walk]]:
        ready = []
        for start, amphipod in self.hallway.amphipods():
            if not self.rooms[amphipod.room_index].is_settled(amphipod):
                continue
            entrance = ROOM_HALLWAY_POSITIONS[amphipod.room_index]
            for walk in self.hallway.walk(start):
                if walk.position == entrance:
                    ready.append((start, walk))
                    break
        return ready

    def successor_from_room_to_hallway(self, room_index: int, walk: Walk) -> Tuple["Burrow", int]:
        left = self.rooms[room_index].leave()
        if left is None:
            raise RuntimeError(f"Room {room_index} is empty, nothing to evict")
        room, amphipod, leave_steps = left
        successor = Burrow(self.hallway.occupy(walk.position, amphipod), self.rooms)
        successor = successor.with_room(room_index, room)
        return successor, amphipod.step_cost(leave_steps + walk.steps)

    def successor_from_hallway_to_room(self, start: int, walk: Walk) -> Tuple["Burrow", int]:
        hallway, amphipod = self.hallway.leave(start)
        if amphipod is None:
            raise RuntimeError(f"Hallway position {start} is empty")
        room, enter_steps = self.rooms[amphipod.room_index].occupy(amphipod)
        successor = Burrow(hallway, self.rooms).with_room(amphipod.room_index, room)
        return successor, amphipod.step_cost(walk.steps + enter_steps)

    def successors(self) -> List[Tuple["Burrow", int]]:
        result = []
        for room_index in self.rooms_needing_evictions():
            for walk in self.hallway.walk(ROOM_HALLWAY_POSITIONS[room_index]):
                if walk.position in ROOM_HALLWAY_POSITIONS:
                    continue
                result.append(self.successor_from_room_to_hallway(room_index, walk))
        for start, walk in self.hallway_ready_to_enter_room():
            result.append(self.successor_from_hallway_to_room(start, walk))
        return result


def validate_state(burrow):
    errs = []
    if len(burrow.rooms) != len(AMPHIPODS_BY_ROOM):
        errs.append(f"Expected {len(AMPHIPODS_BY_ROOM)} rooms, got {len(burrow.rooms)}")
        return errs
    if len(burrow.hallway.cells) != HALLWAY_LENGTH:
        errs.append(f"Hallway has {len(burrow.hallway.cells)} cells, expected {HALLWAY_LENGTH}")
    depths = {room.depth for room in burrow.rooms}
    if len(depths) != 1:
        errs.append(f"Rooms have mixed depths {sorted(depths)}")
        return errs
    for idx, room in enumerate(burrow.rooms):
        seen_empty = False
        for a in room.cells:
            if a is None:
                seen_empty = True
            elif seen_empty:
                errs.append(f"Room {idx} has a gap below an amphipod")
                break
    for pos in ROOM_HALLWAY_POSITIONS:
        if pos < len(burrow.hallway.cells) and burrow.hallway.cells[pos] is not None:
            errs.append(f"Amphipod parked above room entrance at {pos}")
    counts = Counter(burrow.amphipods())
    for a in AMPHIPODS_BY_ROOM:
        if counts[a] != burrow.depth:
            errs.append(f"Found {counts[a]} {a.name} amphipods, expected {burrow.depth}")
    return errs
