"""Linear programs in general ("raw") form and in Standard Equality Form.

A LinearProgram is built once from an in-memory description, converted once
to SEF (``max c^T x + z, Ax = b, x >= 0``) and then handed to the solver.
The raw constraints, objective and non-negativity flags stay readable after
the conversion; only the SEF matrices are used by the simplex code.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from dense_matrix import Matrix

SENSES = ("<=", ">=", "=")


@dataclass(frozen=True)
class Constraint:
    coefficients: Tuple[float, ...]
    sense: str
    constant: float


class LinearProgram:
    def __init__(self, c, constraints, ge0=None, maximize=True):
        c = [float(v) for v in np.asarray(c, dtype=float).reshape(-1)]
        if not c:
            raise ValueError("The objective needs at least one variable.")
        n = len(c)

        cons = []
        for coeffs, sense, constant in constraints:
            coeffs = tuple(float(v) for v in np.asarray(coeffs, dtype=float).reshape(-1))
            if len(coeffs) != n:
                raise ValueError(f"Constraint has {len(coeffs)} coefficients, expected {n}.")
            if sense not in SENSES:
                raise ValueError("sense entries must be <=, >=, =")
            cons.append(Constraint(coeffs, sense, float(constant)))
        if not cons:
            raise ValueError("A linear program needs at least one constraint.")

        if ge0 is None:
            ge0 = [True] * n
        ge0 = [bool(g) for g in ge0]
        if len(ge0) != n:
            raise ValueError(f"Expected {n} non-negativity flags, got {len(ge0)}.")

        self.variables = n
        self.objective = tuple(c)
        self.maximize = bool(maximize)
        self.constraints = cons
        self.ge0 = ge0
        self.num_not_ge0 = ge0.count(False)

        self.obj_max = self.maximize
        self.c = Matrix.column(c)
        self.A = None
        self.b = None
        self.z = 0.0
        self.is_sef = False

    @property
    def num_cons(self):
        return len(self.constraints) if self.A is None else self.A.n

    @property
    def num_structural(self):
        return self.variables + self.num_not_ge0

    @property
    def var_names(self):
        names = []
        for v in range(self.variables):
            if self.ge0[v]:
                names.append(f"x{v+1}")
            else:
                names += [f"x{v+1}+", f"x{v+1}-"]
        for i, con in enumerate(self.constraints):
            if con.sense != "=":
                names.append(f"s{i+1}")
        return names

    def to_sef(self):
        if self.is_sef:
            raise ValueError("Linear program is already in SEF.")
        if not self.obj_max:
            self.z *= -1
            self.c.scale(-1)
            self.obj_max = True

        ineqs = sum(1 for con in self.constraints if con.sense != "=")
        total = self.num_structural + ineqs
        A = Matrix(len(self.constraints), total)
        b = Matrix(len(self.constraints), 1)
        new_c = Matrix(total, 1)

        i = 0
        for v in range(self.variables):
            cv = self.c.get(v, 0)
            new_c.set(i, 0, cv)
            for j, con in enumerate(self.constraints):
                A.set(j, i, con.coefficients[v])
            if not self.ge0[v]:
                i += 1
                new_c.set(i, 0, -cv)
                for j, con in enumerate(self.constraints):
                    A.set(j, i, -con.coefficients[v])
            i += 1

        slack = self.num_structural
        for j, con in enumerate(self.constraints):
            b.set(j, 0, con.constant)
            if con.sense != "=":
                A.set(j, slack, 1.0 if con.sense == "<=" else -1.0)
                slack += 1

        self.A, self.b, self.c = A, b, new_c
        self.is_sef = True
        return self

    def make_rhs_nonnegative(self):
        """Negate every SEF row whose right-hand side is negative."""
        if not self.is_sef:
            raise ValueError("make_rhs_nonnegative needs an LP in SEF.")
        flipped = []
        for i in range(self.b.n):
            if self.b.get(i, 0) < 0:
                self.A.data[i, :] *= -1.0
                self.b.data[i, 0] *= -1.0
                flipped.append(i)
        return flipped

    def copy(self):
        q = LinearProgram.__new__(LinearProgram)
        q.__dict__.update(self.__dict__)
        q.constraints = list(self.constraints)
        q.ge0 = list(self.ge0)
        q.c = self.c.copy()
        q.A = self.A.copy() if self.A is not None else None
        q.b = self.b.copy() if self.b is not None else None
        return q

    def basic_solution(self, basis):
        # valid only while the LP is in canonical form for ``basis``
        x = np.zeros(self.A.m)
        for i, bi in enumerate(basis):
            x[bi] = self.b.get(i, 0)
        return x

    def recover(self, x_sef):
        """Fold an SEF vector back to the caller's variables (x = x+ - x-)."""
        x_sef = np.asarray(x_sef, dtype=float).reshape(-1)
        x = np.zeros(self.variables)
        i = 0
        for v in range(self.variables):
            if self.ge0[v]:
                x[v] = x_sef[i]
            else:
                x[v] = x_sef[i] - x_sef[i + 1]
                i += 1
            i += 1
        return x

    def objective_value(self, x):
        return float(np.dot(self.objective, np.asarray(x, dtype=float).reshape(-1)))

    def is_feasible(self, x, tol=1e-9):
        x = np.asarray(x, dtype=float).reshape(-1)
        for v in range(self.variables):
            if self.ge0[v] and x[v] < -tol:
                return False
        for con in self.constraints:
            lhs = float(np.dot(con.coefficients, x))
            if con.sense == "<=" and lhs > con.constant + tol:
                return False
            if con.sense == ">=" and lhs < con.constant - tol:
                return False
            if con.sense == "=" and abs(lhs - con.constant) > tol:
                return False
        return True


def build_lp(c, A, b, sense, ge0=None, maximize=True):
    """Build a raw LP from the array description used across the solver."""
    A = np.asarray(A, dtype=float)
    b = np.asarray(b, dtype=float).reshape(-1)
    sense = list(np.asarray(sense).reshape(-1))
    if A.ndim != 2 or A.shape[0] != b.size or len(sense) != b.size:
        raise ValueError("A, b and sense must describe the same number of constraints.")
    return LinearProgram(c, zip(A, [str(s) for s in sense], b), ge0=ge0, maximize=maximize)
