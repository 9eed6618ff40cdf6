import inspect

from amphipod import DEFAULT_MAX_STEPS, load_burrows, render_ascii
from classic_start import SAMPLE_LAYOUT, sample_start, solved_start
from solve_and_dump import dump_block_with_cost, solve_and_dump


def test_dump_block_with_cost():
    block = dump_block_with_cost(sample_start(), "sample", 12521)
    assert block.splitlines() == ["NAME sample"] + SAMPLE_LAYOUT.splitlines() + ["COST 12521"]


def test_dump_block_without_solution():
    block = dump_block_with_cost(solved_start(), None, None)
    assert block.splitlines()[0] == "#############"
    assert block.splitlines()[-1] == "COST -1"


def test_solve_and_dump_round_trip(tmp_path):
    src = tmp_path / "levels.txt"
    dst = tmp_path / "levels_cost.txt"
    broken = SAMPLE_LAYOUT.replace("###B#C#B#D###", "###B#C#B#B###")
    src.write_text(
        "NAME sample\n" + SAMPLE_LAYOUT + "\n\nNAME solved\n" + render_ascii(solved_start())
        + "\n\nNAME broken\n" + broken + "\n",
        encoding="utf-8",
    )

    solve_and_dump(str(src), str(dst))

    costs = [line for line in dst.read_text(encoding="utf-8").splitlines() if line.startswith("COST")]
    assert costs == ["COST 12521", "COST 0", "COST -1"]
    names = [name for name, _ in load_burrows(str(dst))]
    assert names == ["sample", "solved", "broken"]


def test_default_expansion_limit_matches_solver():
    default = inspect.signature(solve_and_dump).parameters["max_steps"].default
    assert default == DEFAULT_MAX_STEPS
