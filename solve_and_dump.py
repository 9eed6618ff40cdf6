import argparse
import datetime
import logging

from amphipod import DEFAULT_MAX_STEPS, astar, load_burrows, render_ascii
from burrow_state_class import validate_state
from heuristics import estimated_cost

logger = logging.getLogger(__name__)


def dump_block_with_cost(state, name, cost):
    """Text block for one burrow, closed by its optimal ``COST`` (-1 when unsolved)."""
    lines = []
    if name:
        lines.append(f"NAME {name}")
    lines.append(render_ascii(state))
    lines.append(f"COST {cost if cost is not None else -1}")
    lines.append("")
    return "\n".join(lines)


def solve_and_dump(input_file, output_file, max_steps=DEFAULT_MAX_STEPS):
    entries = load_burrows(input_file)
    print(f"Loaded {len(entries)} burrows")

    with open(output_file, "w", encoding="utf-8") as f:
        for idx, (name, state) in enumerate(entries):
            print(f"[{idx+1}/{len(entries)}] solving {name or '(no name)'}...")

            errs = validate_state(state)
            if errs:
                logger.warning("skipping %s: %s", name or idx, "; ".join(errs))
                cost = None
            else:
                result = astar(state, estimated_cost, max_steps=max_steps)
                cost = result["cost"]
                print(f"   cost={cost}, moves={result['moves']}, "
                      f"expanded={result['expanded']}, time={result['time']:.2f}s")

            f.write(dump_block_with_cost(state, name, cost) + "\n")

    print(f"Wrote {output_file}")


if __name__ == "__main__":
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    parser = argparse.ArgumentParser(description="Solve every burrow in a layouts file")
    parser.add_argument("input_file")
    parser.add_argument("-o", "--output-file", default=f"burrows_{timestamp}_cost.txt")
    parser.add_argument("--max-steps", type=int, default=DEFAULT_MAX_STEPS)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    solve_and_dump(args.input_file, args.output_file, max_steps=args.max_steps)
