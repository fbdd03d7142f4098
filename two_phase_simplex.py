import logging

import numpy as np

from dense_matrix import Matrix
from linear_program import LinearProgram, build_lp
from simplex_utils import (
    INFEASIBLE,
    OPTIMAL,
    UNBOUNDED,
    _defaults,
    _pivot_out_artificial_basics,
    simplex,
)

log = logging.getLogger(__name__)


def two_phase_simplex(P, opts=None):
    """Solve the raw linear program ``P`` with the two-phase simplex method.

    ``P`` is converted to SEF in place. The result is a dict whose ``status``
    is one of "optimal", "infeasible" or "unbounded"; ``x`` and ``z`` are the
    optimal point in the caller's variables and the objective value in the
    caller's sense, both None unless the status is optimal.
    """
    if opts is None:
        opts = {}
    opts = _defaults(opts)
    tol = opts["tol"]

    if P.is_sef:
        raise ValueError("two_phase_simplex expects a raw (non-SEF) linear program.")
    P.to_sef()
    flipped = P.make_rhs_nonnegative()
    if flipped:
        log.debug("negated rows %s to make the right-hand side non-negative", flipped)

    m, n = P.A.n, P.A.m
    names = P.var_names
    states = []

    Q = P.copy()
    Q.A.join_right(Matrix.identity(m))
    Q.c = Matrix(n + m, 1)
    Q.z = 0.0
    basis = []
    for i in range(m):
        Q.c.set(n + i, 0, -1.0)
        basis.append(n + i)
    aux_names = names + [f"a{i+1}" for i in range(m)]

    simplex(Q, basis, opts, phase="PHASE I", states=states, names=aux_names, owner=P)
    x = Q.basic_solution(basis)
    if np.any(x[n:] > tol):
        log.info("infeasible: phase I optimum %.6g leaves artificial variables positive", Q.z)
        return _result(INFEASIBLE, P, basis, names, states)

    actions, redundant = _pivot_out_artificial_basics(Q, basis, n, aux_names, tol)
    if actions:
        log.debug("drove artificial variables out of the basis: %s", actions)
    keep = [i for i in range(m) if i not in redundant]
    if redundant:
        log.info("dropping %d redundant constraint row(s): %s", len(redundant), redundant)
    if not keep:
        return _without_constraints(P, names, states, tol)

    # phase I rows form an equivalent system already in canonical form
    P.A = Q.A.take_columns(range(n)).take_rows(keep)
    P.b = Q.b.take_rows(keep)
    basis = [basis[i] for i in keep]
    states.append({
        "names": names[:],
        "basis": list(basis),
        "phase": "PHASE II",
        "step": 0,
        "entering": "",
        "leaving": "",
        "x": P.recover(P.basic_solution(basis)[:P.num_structural]),
        "z": float(P.z),
        "info": {
            "event": "phase_transition",
            "phase1_objective": float(Q.z),
            "pivot_out_actions": actions,
            "redundant_rows": [i + 1 for i in redundant],
        },
    })

    final = simplex(P, basis, opts, phase="PHASE II", states=states, names=names, owner=P)
    if final == UNBOUNDED:
        return _result(UNBOUNDED, P, basis, names, states)

    out = _result(OPTIMAL, P, basis, names, states)
    if (opts["launch_viewer"] or opts["plot_path"]) and P.variables != 2:
        log.warning("plotting skipped: only two-variable programs can be drawn")
    elif opts["launch_viewer"] or opts["plot_path"]:
        from lp_viewer import visualize
        visualize(P, out, path=opts["plot_path"], show=opts["launch_viewer"])
    return out


def _result(status, P, basis, names, states, x_sef=None):
    out = {
        "status": status,
        "x": None,
        "z": None,
        "x_sef": None,
        "basis": list(basis),
        "var_names": names[:],
        "states": states,
    }
    if status == OPTIMAL:
        if x_sef is None:
            x_sef = P.basic_solution(basis)
        out["x_sef"] = x_sef
        out["x"] = P.recover(x_sef)
        out["z"] = float(P.z) if P.maximize else -float(P.z)
    return out


def _without_constraints(P, names, states, tol):
    # every row was 0 = 0; the objective alone decides the outcome
    reduced_costs = P.c.data[:, 0]
    if np.any(reduced_costs > tol):
        return _result(UNBOUNDED, P, [], names, states)
    return _result(OPTIMAL, P, [], names, states, x_sef=np.zeros(P.A.m))


def solve(P, opts=None):
    """Optimal point of ``P`` in its own variables, or None when none exists."""
    return two_phase_simplex(P, opts)["x"]


def solve_arrays(c, A, b, sense, ge0=None, maximize=True, opts=None):
    return two_phase_simplex(build_lp(c, A, b, sense, ge0=ge0, maximize=maximize), opts)


def solution_mapping(x):
    if x is None:
        return None
    return {i: float(v) for i, v in enumerate(np.asarray(x, dtype=float).reshape(-1))}


def demo():
    """Small demo run. Safe to import this module from other files."""
    # Maximize:
    #   z = 3x1 + 2x2
    #
    # Subject to:
    #   x1 +  x2 <= 4
    #   x1 + 3x2 <= 6
    #   x1, x2 >= 0

    P = LinearProgram([3, 2], [([1, 1], "<=", 4), ([1, 3], "<=", 6)])
    res = two_phase_simplex(P)
    print("status =", res["status"], "x* =", res["x"], "z* =", res["z"])
    return res


if __name__ == "__main__":
    demo()
