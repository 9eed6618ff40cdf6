import argparse
import colorsys
import heapq
import logging
import sys
import time

import pygame

from burrow_state_class import (
    AMPHIPODS_BY_ROOM,
    HALLWAY_LENGTH,
    Amphipod,
    Burrow,
    Hallway,
    Room,
    validate_state,
)
from graph import GraphLogger
from heuristics import estimated_cost

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 10**7
PROGRESS_EVERY = 10000
# extra rows folded out of the second-part diagram
UNFOLDED_ROWS = ("  #D#C#B#A#", "  #D#B#A#C#")
NO_SOLUTION_HINT = """No solution found.

[HINT] Did you set up the input correctly?"""


# ----------------------------
# Parsing / ASCII rendering
# ----------------------------
def _parse_cell(ch):
    if ch == ".":
        return None
    return Amphipod.from_letter(ch)


def parse_burrow(text):
    lines = [ln.rstrip() for ln in text.strip().splitlines() if ln.strip()]
    if len(lines) < 4:
        raise ValueError(f"Burrow diagram needs at least 4 lines, got {len(lines)}")

    hallway_line = lines[1].strip()
    if len(hallway_line) != HALLWAY_LENGTH + 2 or hallway_line[0] != "#" or hallway_line[-1] != "#":
        raise ValueError(f"Malformed hallway line: {lines[1]!r}")
    hallway = Hallway(tuple(_parse_cell(ch) for ch in hallway_line[1:-1]))

    rows = []
    for line in lines[2:-1]:
        cells = [ch for ch in line if ch not in "# "]
        if len(cells) != len(AMPHIPODS_BY_ROOM):
            raise ValueError(f"Malformed room line: {line!r}")
        rows.append([_parse_cell(ch) for ch in cells])

    if lines[-1].strip().strip("#"):
        raise ValueError(f"Malformed closing wall: {lines[-1]!r}")

    # diagram rows run from the entrance down, rooms are stored from the closed end up
    rooms = tuple(
        Room(tuple(row[idx] for row in reversed(rows)))
        for idx in range(len(AMPHIPODS_BY_ROOM))
    )
    return Burrow(hallway, rooms)


def unfold(text):
    lines = [ln for ln in text.strip().splitlines() if ln.strip()]
    lines[3:3] = UNFOLDED_ROWS
    return "\n".join(lines)


def _cell_char(a):
    return "." if a is None else a.value


def render_ascii(s):
    lines = ["#" * (HALLWAY_LENGTH + 2)]
    lines.append("#" + "".join(_cell_char(a) for a in s.hallway.cells) + "#")
    for depth_index in reversed(range(s.depth)):
        row = "#".join(_cell_char(room.cells[depth_index]) for room in s.rooms)
        if depth_index == s.depth - 1:
            lines.append("###" + row + "###")
        else:
            lines.append("  #" + row + "#")
    lines.append("  " + "#" * 9)
    return "\n".join(lines)


# ----------------------------
# A* search
# ----------------------------
def astar(start, h=estimated_cost, max_steps=DEFAULT_MAX_STEPS, log_html_path=None):
    t0 = time.time()
    open_heap = []  # (f, g, id, Burrow)
    g_cost = {start: 0}
    parent = {start: None}

    graph_logger = GraphLogger(render_ascii) if log_html_path is not None else None
    counter = 0
    heapq.heappush(open_heap, (h(start), 0, counter, start))

    expanded = 0
    goal_state = None

    while open_heap and expanded < max_steps:
        f, g, _, s = heapq.heappop(open_heap)
        if g > g_cost[s]:
            # stale entry, a cheaper route was pushed later
            continue
        expanded += 1
        if expanded % PROGRESS_EVERY == 0:
            logger.info("expanded %d states, frontier %d, f=%d", expanded, len(open_heap), f)
        if graph_logger is not None:
            graph_logger.add_or_get(s, g=g, f=f, parent_state=parent[s])

        if s.is_solved():
            goal_state = s
            break

        for nb, step_cost in s.successors():
            ng = g + step_cost
            if nb not in g_cost or ng < g_cost[nb]:
                g_cost[nb] = ng
                parent[nb] = s
                counter += 1
                heapq.heappush(open_heap, (ng + h(nb), ng, counter, nb))

    path, cost, moves = None, None, None
    if goal_state is not None:
        path = []
        cur = goal_state
        while cur is not None:
            path.append(cur)
            cur = parent[cur]
        path.reverse()
        cost = g_cost[goal_state]
        moves = len(path) - 1
    elif open_heap:
        logger.warning("gave up after expanding %d states", expanded)

    if graph_logger is not None:
        if path is not None:
            graph_logger.mark_solution_path(path)
        graph_logger.write_html(log_html_path)

    result = {
        "path": path,
        "cost": cost,
        "moves": moves,
        "expanded": expanded,
        "time": time.time() - t0
    }
    logger.debug("search finished: cost=%s expanded=%d time=%.2fs", cost, expanded, result["time"])
    return result


def solve(text, h=estimated_cost, **kwargs):
    burrow = parse_burrow(text)
    errs = validate_state(burrow)
    if errs:
        raise ValueError("Invalid burrow: " + "; ".join(errs))
    return astar(burrow, h, **kwargs)


# ----------------------------
# Loading several layouts
# ----------------------------
def load_burrows(filename):
    """
    Read a file of burrow diagrams separated by blank lines.
    Each diagram may be preceded by ``NAME <name>``; ``COST`` lines written by
    solve_and_dump are skipped. Returns [(name_or_None, Burrow), ...]
    """
    with open(filename, "r", encoding="utf-8") as f:
        raw = [ln.rstrip("\n") for ln in f]

    results = []
    name, block = None, []

    def flush():
        if block:
            results.append((name, parse_burrow("\n".join(block))))

    for line in raw:
        if not line.strip():
            flush()
            name, block = None, []
        elif line.startswith("COST"):
            continue
        elif line.startswith("NAME "):
            flush()
            name, block = line[5:].strip(), []
        else:
            block.append(line)
    flush()

    logger.info("loaded %d burrows from %s", len(results), filename)
    return results


# ----------------------------
# GUI path playback
# ----------------------------
def generate_colors(n):
    colors = []
    for i in range(n):
        r, g, b = colorsys.hls_to_rgb(i / n, 0.6, 0.7)
        colors.append((int(r*255), int(g*255), int(b*255)))
    return colors


def visualize_path(path, cell_size=48, delay=500):
    """
    Plays back a solution:
    - space: play / pause
    - left / right: step back / forward
    - ESC or closing the window: quit
    """
    pygame.init()
    grids = [render_ascii(s).splitlines() for s in path]
    width = max(len(line) for line in grids[0])
    height = len(grids[0])
    screen = pygame.display.set_mode((width * cell_size, height * cell_size))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont(None, cell_size)
    colors = dict(zip(AMPHIPODS_BY_ROOM, generate_colors(len(AMPHIPODS_BY_ROOM))))

    step = 0
    running = True
    autoplay = True
    last_update = pygame.time.get_ticks()

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    autoplay = not autoplay
                elif event.key == pygame.K_RIGHT:
                    step = min(step + 1, len(path) - 1)
                elif event.key == pygame.K_LEFT:
                    step = max(step - 1, 0)

        now = pygame.time.get_ticks()
        if autoplay and step < len(path) - 1 and now - last_update > delay:
            step += 1
            last_update = now

        screen.fill((240, 240, 240))
        for y, line in enumerate(grids[step]):
            for x, ch in enumerate(line):
                rect = pygame.Rect(x*cell_size, y*cell_size, cell_size, cell_size)
                if ch == "#":
                    pygame.draw.rect(screen, (60, 60, 60), rect)
                elif ch == ".":
                    pygame.draw.rect(screen, (210, 200, 180), rect)
                elif ch != " ":
                    pygame.draw.rect(screen, colors[Amphipod(ch)], rect)
                    pygame.draw.rect(screen, (0, 0, 0), rect, 2)
                    text = font.render(ch, True, (0, 0, 0))
                    screen.blit(text, text.get_rect(center=rect.center))

        pygame.display.flip()
        clock.tick(60)

    pygame.quit()


# ----------------------------
# Main
# ----------------------------
def get_cost_to_solve(text, args):
    result = solve(text, max_steps=args.max_steps, log_html_path=args.log_html)
    if result["path"] is None:
        print(NO_SOLUTION_HINT)
        return False
    print(f"Completed in {result['moves']} moves with cost {result['cost']}")
    logger.info("expanded %d states in %.2fs", result["expanded"], result["time"])
    if args.visualize:
        visualize_path(result["path"])
    return True


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Minimum-energy amphipod burrow solver")
    parser.add_argument("input", nargs="?", help="burrow diagram file (default: stdin)")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--folded-only", action="store_true", help="solve only the diagram as given")
    group.add_argument("--unfolded-only", action="store_true", help="solve only the unfolded four-deep diagram")
    parser.add_argument("--max-steps", type=int, default=DEFAULT_MAX_STEPS, help="expansion limit")
    parser.add_argument("--log-html", default=None, help="write the explored search tree to this HTML file")
    parser.add_argument("--visualize", action="store_true", help="play back each solution with pygame")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.input:
        with open(args.input, "r", encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    texts = []
    if not args.unfolded_only:
        texts.append(text)
    if not args.folded_only:
        texts.append(unfold(text))

    ok = True
    for t in texts:
        try:
            ok = get_cost_to_solve(t, args) and ok
        except ValueError as e:
            print(f"Invalid input: {e}", file=sys.stderr)
            return 2
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
