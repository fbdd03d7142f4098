"""Command line entry point: read an LP, solve it, print the optimal point."""

import argparse
import logging
import sys

from lp_io import format_column, format_lp, read_lp
from two_phase_simplex import two_phase_simplex

log = logging.getLogger(__name__)


def build_parser():
    p = argparse.ArgumentParser(
        prog="lp-solve",
        description="Two-phase simplex solver. Reads an LP in text form and prints "
                    "the optimal point as a column, or NULL when none exists.",
    )
    p.add_argument("input", nargs="?", default="-",
                   help="LP file to read ('-' or omitted for stdin)")
    p.add_argument("--tol", type=float, default=1e-10, help="zero tolerance for pivoting")
    p.add_argument("--pivot-rule", choices=["first", "bland", "dantzig"], default="first",
                   help="entering/leaving variable rule")
    p.add_argument("--max-iter", type=int, default=10000, help="pivot limit per phase")
    p.add_argument("--show-sef", action="store_true",
                   help="print the final SEF program before the solution")
    p.add_argument("--plot", action="store_true",
                   help="open a plot of the feasible region (two-variable LPs only)")
    p.add_argument("--save-plot", metavar="PATH", default=None,
                   help="save the feasible-region plot to PATH")
    p.add_argument("-v", "--verbose", action="store_true", help="log every pivot")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.input == "-":
            P = read_lp(sys.stdin)
        else:
            with open(args.input, encoding="utf-8") as fh:
                P = read_lp(fh)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    res = two_phase_simplex(P, opts={
        "tol": args.tol,
        "pivot_rule": args.pivot_rule,
        "max_iter": args.max_iter,
        "launch_viewer": args.plot,
        "plot_path": args.save_plot,
    })
    log.info("status: %s", res["status"])

    if args.show_sef:
        print(format_lp(P), end="")
    if res["x"] is None:
        print("NULL")
    else:
        print(format_column(res["x"]), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
