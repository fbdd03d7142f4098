"""Dense matrix engine used by the simplex solver.

A Matrix owns one n x m float64 numpy array. Row reduction is written out
with elementary row operations rather than delegated to numpy.linalg, so the
pivot order and the rank it reports are exactly the ones the solver relies on.
Operators that reshape (transpose, invert, join_right, join_bottom) swap in a
new backing array; references to the old ``data`` are stale afterwards.
"""

import numpy as np


class Matrix:
    def __init__(self, n, m):
        n, m = int(n), int(m)
        if n <= 0 or m <= 0:
            raise ValueError(f"Matrix dimensions must be positive, got {n}x{m}.")
        self.data = np.zeros((n, m), dtype=float)

    @property
    def n(self):
        return self.data.shape[0]

    @property
    def m(self):
        return self.data.shape[1]

    @property
    def shape(self):
        return self.data.shape

    @classmethod
    def from_rows(cls, rows):
        arr = np.array(rows, dtype=float)
        if arr.ndim != 2:
            raise ValueError("rows must describe a rectangular 2-D grid")
        mtr = cls(*arr.shape)
        mtr.data[:, :] = arr
        return mtr

    @classmethod
    def column(cls, values):
        arr = np.asarray(values, dtype=float).reshape(-1)
        mtr = cls(arr.size, 1)
        mtr.data[:, 0] = arr
        return mtr

    @classmethod
    def identity(cls, n):
        mtr = cls(n, n)
        for i in range(n):
            mtr.data[i, i] = 1.0
        return mtr

    def get(self, i, j):
        return float(self.data[i, j])

    def set(self, i, j, x):
        self.data[i, j] = x

    def copy(self):
        c = Matrix(self.n, self.m)
        c.data[:, :] = self.data
        return c

    def tolist(self):
        return self.data.tolist()

    def to_scalar(self):
        if self.shape != (1, 1):
            raise ValueError(f"Expected a 1x1 matrix, got {self.n}x{self.m}.")
        return float(self.data[0, 0])

    def transpose(self):
        nd = np.zeros((self.m, self.n), dtype=float)
        for i in range(self.n):
            nd[:, i] = self.data[i, :]
        self.data = nd

    def multiply(self, other):
        if self.m != other.n:
            raise ValueError(f"Cannot multiply {self.n}x{self.m} by {other.n}x{other.m}.")
        out = Matrix(self.n, other.m)
        for i in range(self.n):
            for j in range(other.m):
                acc = 0.0
                for p in range(self.m):
                    acc += self.data[i, p] * other.data[p, j]
                out.data[i, j] = acc
        return out

    def scale(self, s):
        self.data *= s

    def add(self, other):
        if self.shape != other.shape:
            raise ValueError(f"Cannot add {other.n}x{other.m} to {self.n}x{self.m}.")
        self.data += other.data

    def take_columns(self, cols):
        cols = [int(j) for j in cols]
        for j in cols:
            if not 0 <= j < self.m:
                raise IndexError(f"Column index {j} out of range for {self.m} columns.")
        out = Matrix(self.n, len(cols))
        for k, j in enumerate(cols):
            out.data[:, k] = self.data[:, j]
        return out

    def take_rows(self, rows):
        rows = [int(i) for i in rows]
        for i in rows:
            if not 0 <= i < self.n:
                raise IndexError(f"Row index {i} out of range for {self.n} rows.")
        out = Matrix(len(rows), self.m)
        for k, i in enumerate(rows):
            out.data[k, :] = self.data[i, :]
        return out

    def join_right(self, other):
        if self.n != other.n:
            raise ValueError(f"join_right needs equal row counts ({self.n} != {other.n}).")
        nd = np.zeros((self.n, self.m + other.m), dtype=float)
        nd[:, :self.m] = self.data
        nd[:, self.m:] = other.data
        self.data = nd

    def join_bottom(self, other):
        if self.m != other.m:
            raise ValueError(f"join_bottom needs equal column counts ({self.m} != {other.m}).")
        nd = np.zeros((self.n + other.n, self.m), dtype=float)
        nd[:self.n, :] = self.data
        nd[self.n:, :] = other.data
        self.data = nd

    def rref(self, tol=0.0):
        """Row-reduce in place to reduced row echelon form and return the rank.

        Columns are scanned left to right. When the entry at the pivot cursor
        is zero the first non-zero entry below it is swapped up; a column with
        no such entry is skipped without advancing the pivot row. Only the
        first min(rows, cols) columns are scanned. Entries with
        ``abs(v) <= tol`` count as zero, so ``tol=0.0`` is an exact test.
        """
        d = self.data
        rows, cols = d.shape
        last = min(rows, cols)
        lead = 0
        col = 0
        while lead < rows and col < last:
            if abs(d[lead, col]) <= tol:
                r = lead + 1
                while r < rows and abs(d[r, col]) <= tol:
                    r += 1
                if r == rows:
                    col += 1
                    continue
                d[[lead, r], :] = d[[r, lead], :]

            d[lead, :] = d[lead, :] / d[lead, col]
            for i in range(rows):
                if i != lead and d[i, col] != 0:
                    d[i, :] -= d[i, col] * d[lead, :]
                    d[i, col] = 0.0
            col += 1
            lead += 1
        return lead

    def invert(self, tol=0.0):
        # caller guarantees the matrix is invertible; singular input is refused
        if self.n != self.m:
            raise ValueError(f"Only square matrices can be inverted, got {self.n}x{self.m}.")
        n = self.n
        original = self.data
        self.join_right(Matrix.identity(n))
        self.rref(tol)
        for i in range(n):
            if self.data[i, i] != 1.0:
                self.data = original
                raise ValueError("Matrix is singular and cannot be inverted.")
        inv = self.take_columns(range(n, 2 * n))
        self.data = inv.data

    def determinant(self):
        if self.n != self.m:
            raise ValueError("determinant is only defined for square matrices")
        if self.n == 2:
            d = self.data
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        # only the 2x2 case is implemented
        return 0.0

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.data, other.data))

    def __repr__(self):
        return f"Matrix({self.n}x{self.m})"
