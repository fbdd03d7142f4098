from linear_program import LinearProgram
from lp_io import format_lp, format_solution
from two_phase_simplex import solution_mapping, two_phase_simplex

EXAMPLES = {
    "production": {
        "name": "2D Production Mix",
        "c": [3, 2],
        "constraints": [
            ([1, 1], "<=", 4),
            ([1, 3], "<=", 6),
        ],
        "ge0": [True, True],
        "maximize": True,
    },
    "covering": {
        "name": "2D Covering (minimize)",
        "c": [1, 1],
        "constraints": [
            ([1, 1], ">=", 2),
            ([1, 0], "<=", 3),
        ],
        "ge0": [True, True],
        "maximize": False,
    },
    "free": {
        "name": "Free Variable",
        "c": [-1, 1],
        "constraints": [
            ([1, 0], ">=", -3),
            ([0, 1], "<=", 2),
        ],
        "ge0": [False, True],
        "maximize": True,
    },
    "unbounded": {
        "name": "Unbounded Ray",
        "c": [1, 0],
        "constraints": [
            ([1, -1], ">=", 0),
            ([0, 1], "<=", 1),
        ],
        "ge0": [True, True],
        "maximize": True,
    },
    "infeasible": {
        "name": "Contradictory Bounds",
        "c": [1, 0],
        "constraints": [
            ([1, 0], ">=", 1),
            ([1, 0], "<=", 0),
        ],
        "ge0": [True, True],
        "maximize": True,
    },
}


def build_example(key):
    ex = EXAMPLES[key]
    return LinearProgram(ex["c"], ex["constraints"], ge0=ex["ge0"], maximize=ex["maximize"])


RULE_LABELS = {
    "first": "First positive reduced cost",
    "bland": "Bland (smallest index on ties)",
    "dantzig": "Dantzig (largest reduced cost)",
}

QUIT = {"q", "quit", "exit"}


def _choose(prompt, labels, default):
    """Ask for one key of ``labels`` by number, by name or by a unique prefix."""
    keys = list(labels)
    while True:
        print(prompt)
        for i, key in enumerate(keys, start=1):
            mark = "*" if key == default else " "
            print(f" {mark}{i}) {labels[key]}")
        raw = input("> ").strip().lower()
        if raw in QUIT:
            raise KeyboardInterrupt
        if not raw:
            return default
        if raw.isdigit() and 1 <= int(raw) <= len(keys):
            return keys[int(raw) - 1]
        matches = [key for key in keys if key.startswith(raw)]
        if len(matches) == 1:
            return matches[0]
        print(f"Invalid choice {raw!r}: enter 1-{len(keys)}, a name, or q to quit.")


def _confirm_run(label, rule):
    while True:
        raw = input(f"Solve {label} with the {rule} rule? [Y/n]: ").strip().lower()
        if raw in QUIT:
            raise KeyboardInterrupt
        if raw in {"", "y", "yes"}:
            return True
        if raw in {"n", "no"}:
            return False
        print("Answer y or n (q quits).")


def run_showcase(launch_viewer=True):
    print("Two-Phase Simplex Showcase")
    print("--------------------------")
    print("Enter picks the starred default. Type q to quit.")
    try:
        key = _choose("Example program:", {k: ex["name"] for k, ex in EXAMPLES.items()}, "production")
        rule = _choose("Pivot rule:", RULE_LABELS, "first")
        if not _confirm_run(EXAMPLES[key]["name"], rule):
            print("Cancelled.")
            return None
    except KeyboardInterrupt:
        print("\nCancelled.")
        return None

    P = build_example(key)
    print(f"\nRunning: {EXAMPLES[key]['name']}")
    print(format_lp(P), end="")

    res = two_phase_simplex(P, opts={"pivot_rule": rule, "launch_viewer": launch_viewer})

    print("\nDone.")
    print("status =", res["status"])
    print(format_solution(solution_mapping(res["x"])), end="")
    if res["z"] is not None:
        print("z* =", res["z"])
    print("states =", len(res["states"]))
    return res


if __name__ == "__main__":
    run_showcase()
