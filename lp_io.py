"""Text input and output for matrices and linear programs.

LP text format (whitespace separated tokens)::

    maxmin nvars
    c_1 ... c_n
    ncons
    a_11 ... a_1n rel const      (one line per constraint, rel is <=, >= or =)
    ...
    g_1 ... g_n                  (1 if the variable is >= 0, 0 if free)

``maxmin`` is 0 for minimization and any other integer for maximization.
"""

from dense_matrix import Matrix
from linear_program import LinearProgram


class _Tokens:
    def __init__(self, text):
        self.items = text.split()
        self.pos = 0

    def next(self, what):
        if self.pos >= len(self.items):
            raise ValueError(f"Unexpected end of input while reading {what}.")
        tok = self.items[self.pos]
        self.pos += 1
        return tok

    def next_int(self, what):
        tok = self.next(what)
        try:
            return int(tok)
        except ValueError:
            raise ValueError(f"Expected an integer for {what}, got {tok!r}.") from None

    def next_float(self, what):
        tok = self.next(what)
        try:
            return float(tok)
        except ValueError:
            raise ValueError(f"Expected a number for {what}, got {tok!r}.") from None


def _read_text(source):
    if hasattr(source, "read"):
        return source.read()
    return str(source)


def _relation(tok):
    if tok.startswith("="):
        return "="
    if tok.startswith(">"):
        return ">="
    return "<="


def read_lp(source):
    """Parse an LP from a string or a readable text stream."""
    toks = _Tokens(_read_text(source))
    maximize = toks.next_int("the objective direction") != 0

    n = toks.next_int("the number of variables")
    if n <= 0:
        raise ValueError("The number of variables must be positive.")
    c = [toks.next_float(f"objective coefficient {j+1}") for j in range(n)]

    num_cons = toks.next_int("the number of constraints")
    if num_cons <= 0:
        raise ValueError("The number of constraints must be positive.")
    constraints = []
    for i in range(num_cons):
        coeffs = [toks.next_float(f"coefficient {j+1} of constraint {i+1}") for j in range(n)]
        rel = _relation(toks.next(f"the relation of constraint {i+1}"))
        constant = toks.next_float(f"the constant of constraint {i+1}")
        constraints.append((coeffs, rel, constant))

    ge0 = [toks.next_int(f"the sign flag of variable {j+1}") != 0 for j in range(n)]
    return LinearProgram(c, constraints, ge0=ge0, maximize=maximize)


def read_matrix(source):
    toks = _Tokens(_read_text(source))
    n = toks.next_int("the row count")
    m = toks.next_int("the column count")
    mtr = Matrix(n, m)
    for i in range(n):
        for j in range(m):
            mtr.set(i, j, toks.next_float(f"entry ({i}, {j})"))
    return mtr


def _fnum(v):
    return f"{v:5.1f}"


def format_matrix(mtr):
    lines = []
    for i in range(mtr.n):
        lines.append("[ " + "".join(_fnum(mtr.get(i, j)) + " " for j in range(mtr.m)) + "]")
    return "".join(line + "\n" for line in lines) + "\n"


def format_column(x):
    return format_matrix(Matrix.column(x))


def format_lp(P):
    if not P.is_sef:
        return _format_raw_lp(P)
    out = []
    head = "max" if P.obj_max else "min"
    cs = "".join(_fnum(P.c.get(j, 0)) + " " for j in range(P.c.n))
    out.append(f"{head} {_fnum(P.z)} + [ {cs}]x")
    for i in range(P.A.n):
        row = "".join(_fnum(P.A.get(i, j)) + " " for j in range(P.A.m))
        mid = "] x = " if i == P.A.n // 2 else "]     "
        out.append(f"[ {row}{mid}[ {_fnum(P.b.get(i, 0))} ]")
    return "\n".join(out) + "\n\n"


def _format_raw_lp(P):
    def term(coef, j):
        return f"{coef:+g}x{j+1}"

    out = [("max " if P.maximize else "min ") + " ".join(term(v, j) for j, v in enumerate(P.objective))]
    out.append("s.t.")
    for con in P.constraints:
        lhs = " ".join(term(v, j) for j, v in enumerate(con.coefficients))
        out.append(f"  {lhs} {con.sense} {con.constant:g}")
    free = [f"x{j+1}" for j in range(P.variables) if not P.ge0[j]]
    nonneg = [f"x{j+1}" for j in range(P.variables) if P.ge0[j]]
    if nonneg:
        out.append("  " + ", ".join(nonneg) + " >= 0")
    if free:
        out.append("  " + ", ".join(free) + " free")
    return "\n".join(out) + "\n"


def format_solution(mapping, precision=6):
    if mapping is None:
        return "NULL\n"
    lines = []
    for i, v in sorted(mapping.items()):
        v = round(float(v), precision) + 0.0
        lines.append(f"x{i+1} = {v:g}")
    return "\n".join(lines) + "\n"
