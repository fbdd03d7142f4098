import logging
from itertools import combinations

import numpy as np

log = logging.getLogger(__name__)

OPTIMAL = "optimal"
UNBOUNDED = "unbounded"
INFEASIBLE = "infeasible"

PIVOT_RULES = ("first", "bland", "dantzig")


def canonical_form(P, B, tol=0.0):
    """Rewrite the SEF program ``P`` in canonical form for basis ``B``.

    After the call ``P.A[:, B]`` is the identity, the reduced costs of the
    basic columns are zero and ``P.z`` holds the objective value of the basic
    solution. The basis columns must be linearly independent.
    """
    A_B = P.A.take_columns(B)
    A_B.invert(tol)

    A_BT = A_B.copy()
    A_BT.transpose()
    c_B = P.c.take_rows(B)
    y = A_BT.multiply(c_B)
    y.transpose()

    P.z += y.multiply(P.b).to_scalar()

    c_diff = y.multiply(P.A)
    c_diff.scale(-1)
    c_diff.transpose()
    P.c.add(c_diff)

    P.A = A_B.multiply(P.A)
    P.b = A_B.multiply(P.b)

    # basic columns are exact unit vectors with zero reduced cost
    for i, bi in enumerate(B):
        P.A.data[:, bi] = 0.0
        P.A.data[i, bi] = 1.0
        P.c.data[bi, 0] = 0.0
    if tol > 0:
        P.b.data[np.abs(P.b.data) <= tol] = 0.0
    return P


def check_basis(mtr, B, tol=0.0):
    A_B = mtr.take_columns(B)
    return A_B.rref(tol) == mtr.n


def find_basis(mtr, tol=0.0):
    """First size-n column subset (lexicographic order) with full rank, or None."""
    if mtr.m < mtr.n:
        return None
    for B in combinations(range(mtr.m), mtr.n):
        if check_basis(mtr, B, tol):
            return list(B)
    return None


def simplex(P, B, opts=None, phase="PHASE II", states=None, names=None, owner=None):
    """Run simplex iterations on ``P`` starting from the feasible basis ``B``.

    ``B`` is updated in place. Returns OPTIMAL or UNBOUNDED; when OPTIMAL the
    program is left in canonical form for the final basis. Each basis visited
    is appended to ``states`` when a list is given.
    """
    opts = _defaults(opts or {})
    tol = opts["tol"]
    rule = opts["pivot_rule"]
    if names is None:
        names = [f"v{j+1}" for j in range(P.A.m)]
    if owner is None:
        owner = P

    step = 0
    entering, leaving, info = "", "", {"event": "phase_start"}
    while True:
        canonical_form(P, B, tol)
        if states is not None:
            _add_state(states, P, B, names, phase, step, entering, leaving, owner, info)

        reduced_costs = P.c.data[:, 0]
        k = _entering_column(reduced_costs, tol, rule)
        if k is None:
            log.info("%s optimal after %d pivots, objective %.6g", phase, step, P.z)
            return OPTIMAL

        r, ratios = _leaving_row(P.A.data[:, k], P.b.data[:, 0], B, tol, rule)
        if r is None:
            log.info("%s unbounded: column %s has no positive entry", phase, names[k])
            return UNBOUNDED

        if step >= opts["max_iter"]:
            raise RuntimeError(f"Simplex did not terminate within {opts['max_iter']} pivots.")

        entering, leaving = names[k], names[B[r]]
        info = {
            "event": "pivot",
            "pivot_rule": rule,
            "enter_value": float(reduced_costs[k]),
            "min_ratio": float(ratios[r]),
            "pivot_value": float(P.A.data[r, k]),
            "is_degenerate_step": bool(ratios[r] <= tol),
        }
        log.debug("%s step %d: %s enters, %s leaves (ratio %.6g)",
                  phase, step + 1, entering, leaving, ratios[r])
        B[r] = k
        step += 1


def _entering_column(reduced_costs, tol, rule):
    eligible = np.where(reduced_costs > tol)[0]
    if eligible.size == 0:
        return None
    if rule == "dantzig":
        best = float(np.max(reduced_costs[eligible]))
        return int(eligible[reduced_costs[eligible] == best][0])
    return int(eligible[0])


def _leaving_row(col, rhs, B, tol, rule):
    ratios = np.full(col.size, np.inf)
    mask = col > tol
    if not np.any(mask):
        return None, ratios
    ratios[mask] = rhs[mask] / col[mask]

    min_ratio = float(np.min(ratios[mask]))
    if rule == "bland":
        # ratios within tol of the minimum tie; smallest basic index leaves
        ties = np.where(mask & (np.abs(ratios - min_ratio) <= tol))[0]
        return int(min(ties, key=lambda i: B[i])), ratios
    return int(np.where(mask & (ratios == min_ratio))[0][0]), ratios


def _pivot_out_artificial_basics(Q, B, first_art, names, tol):
    """Swap zero-level artificial variables out of ``B``.

    Returns the pivot actions taken and the rows whose original columns are
    all zero (redundant constraints that keep their artificial).
    """
    actions = []
    redundant = []
    for i in range(len(B)):
        if B[i] < first_art:
            continue
        row = Q.A.data[i, :first_art]
        candidates = np.where(np.abs(row) > tol)[0]
        if candidates.size == 0:
            redundant.append(i)
            continue
        j = int(candidates[0])
        actions.append({"row": i + 1, "from": names[B[i]], "to": names[j], "pivot": float(row[j])})
        B[i] = j
        canonical_form(Q, B, tol)
    return actions, redundant


def _add_state(states, P, B, names, phase, step, entering, leaving, owner, info=None):
    x_sef = P.basic_solution(B)
    states.append({
        "names": names[:],
        "basis": list(B),
        "phase": phase,
        "step": step,
        "entering": entering,
        "leaving": leaving,
        "x": owner.recover(x_sef[:owner.num_structural]),
        "z": float(P.z),
        "info": {} if info is None else info,
    })
    return states


def _defaults(opts):
    out = dict(opts)
    out.setdefault("tol", 1e-10)
    out.setdefault("pivot_rule", "first")
    out.setdefault("max_iter", 10000)
    out.setdefault("launch_viewer", False)
    out.setdefault("plot_path", None)

    tol = float(out["tol"])
    if not np.isfinite(tol) or tol < 0:
        raise ValueError("opts['tol'] must be a non-negative finite number.")
    out["tol"] = tol

    pivot_rule = str(out["pivot_rule"]).strip().lower()
    if pivot_rule not in PIVOT_RULES:
        raise ValueError("opts['pivot_rule'] must be 'first', 'bland' or 'dantzig'.")
    out["pivot_rule"] = pivot_rule

    if int(out["max_iter"]) <= 0:
        raise ValueError("opts['max_iter'] must be a positive integer.")
    out["max_iter"] = int(out["max_iter"])

    plot_path = out["plot_path"]
    if plot_path is not None and not (isinstance(plot_path, str) and plot_path.strip()):
        raise ValueError("opts['plot_path'] must be None or a non-empty path string.")
    return out
