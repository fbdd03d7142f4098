from itertools import combinations

import numpy as np
import matplotlib.pyplot as plt


def _require_two_variables(P):
    if P.variables != 2:
        raise ValueError(f"Only two-variable programs can be drawn, this one has {P.variables}.")


def extreme_points_2d(P, tol=1e-8):
    """Vertices of the feasible region of a two-variable raw LP.

    Returns the vertices and their order around the polygon (None when the
    region has no vertex).
    """
    _require_two_variables(P)

    G, h = [], []
    for con in P.constraints:
        ai, bi = np.asarray(con.coefficients, dtype=float), con.constant
        if con.sense == "<=":
            G.append(ai)
            h.append(bi)
        elif con.sense == ">=":
            G.append(-ai)
            h.append(-bi)
        else:
            G.append(ai)
            h.append(bi)
            G.append(-ai)
            h.append(-bi)

    for j in range(2):
        if P.ge0[j]:
            ej = np.zeros(2)
            ej[j] = -1.0
            G.append(ej)
            h.append(0.0)

    G = np.asarray(G, dtype=float)
    h = np.asarray(h, dtype=float)

    pts = []
    for idxs in combinations(range(len(h)), 2):
        M = G[list(idxs), :]
        d = h[list(idxs)]
        if np.linalg.matrix_rank(M) < 2:
            continue
        try:
            x = np.linalg.solve(M, d)
        except np.linalg.LinAlgError:
            continue
        if np.all(G @ x <= h + tol):
            pts.append(x)

    if not pts:
        return np.empty((0, 2)), None

    E = np.unique(np.round(np.vstack(pts), 10), axis=0)
    if E.shape[0] >= 3:
        c = E.mean(axis=0)
        ang = np.arctan2(E[:, 1] - c[1], E[:, 0] - c[0])
        return E, np.argsort(ang)
    return E, np.arange(E.shape[0])


def _draw_objective_2d(ax, c2, z, E):
    c2 = np.asarray(c2, dtype=float)
    c1, c2y = c2[0], c2[1]
    if abs(c1) < 1e-12 and abs(c2y) < 1e-12:
        return

    x_min = min(0.0, np.min(E[:, 0]) if E.size else 0.0) - 1.0
    x_max = max(1.0, np.max(E[:, 0]) if E.size else 1.0) + 1.0
    y_min = min(0.0, np.min(E[:, 1]) if E.size else 0.0) - 1.0
    y_max = max(1.0, np.max(E[:, 1]) if E.size else 1.0) + 1.0

    if abs(c2y) >= abs(c1):
        xx = np.linspace(x_min, x_max, 300)
        yy = (z - c1 * xx) / c2y
    else:
        yy = np.linspace(y_min, y_max, 300)
        xx = (z - c2y * yy) / c1
    ax.plot(xx, yy, "k--", linewidth=1.6, label=f"{c1:.3g}x1 + {c2y:.3g}x2 = {z:.3g}", zorder=1)
    ax.legend(loc="upper right", fontsize=8, frameon=True)


def plot_lp(P, result=None, ax=None):
    """Draw the feasible region, its vertices and the simplex path of ``result``."""
    _require_two_variables(P)
    E, hull = extreme_points_2d(P)

    if ax is None:
        fig = plt.figure(figsize=(8, 6))
        ax = fig.add_subplot(111)
    else:
        fig = ax.figure

    ax.set_xlabel("x1")
    ax.set_ylabel("x2")
    ax.set_title("Feasible region + extreme points + simplex path")
    ax.grid(True)

    if E.size:
        ax.scatter(E[:, 0], E[:, 1], c="k", s=25, zorder=3)
    if hull is not None and len(hull) >= 3:
        poly = E[hull]
        ax.fill(poly[:, 0], poly[:, 1], color="#8ecae6", alpha=0.35, edgecolor="#1f5f8b", zorder=2)

    if result is not None:
        states = [s for s in result.get("states", []) if s["phase"] == "PHASE II"]
        if states:
            p = np.array([s["x"] for s in states], dtype=float)
            ax.plot(p[:, 0], p[:, 1], "-o", color="#d6451d", linewidth=2, markersize=5, zorder=4)
        if result.get("x") is not None:
            x = result["x"]
            ax.plot(x[0], x[1], "ro", markersize=8, zorder=5)
            _draw_objective_2d(ax, P.objective, result["z"], E)

    if E.size:
        pad = 0.6
        ax.set_xlim(np.min(E[:, 0]) - pad, np.max(E[:, 0]) + pad)
        ax.set_ylim(np.min(E[:, 1]) - pad, np.max(E[:, 1]) + pad)
    return fig


def visualize(P, result=None, path=None, show=True):
    _require_two_variables(P)
    fig = plot_lp(P, result)
    if path:
        fig.savefig(path, bbox_inches="tight")
    if show:
        plt.show()
    return fig
