"""Tests for the dense matrix engine."""

import pytest
import numpy as np

from dense_matrix import Matrix


# ── Construction and access ─────────────────────────────────────────────

class TestConstruction:
    def test_zero_filled(self):
        m = Matrix(2, 3)
        assert m.shape == (2, 3)
        assert m.tolist() == [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]

    def test_non_positive_dimensions_rejected(self):
        with pytest.raises(ValueError):
            Matrix(0, 3)
        with pytest.raises(ValueError):
            Matrix(2, -1)

    def test_identity_and_column(self):
        assert Matrix.identity(3).tolist() == np.eye(3).tolist()
        col = Matrix.column([1, 2, 3])
        assert col.shape == (3, 1)
        assert col.get(2, 0) == 3.0

    def test_entry_access(self):
        m = Matrix(2, 2)
        m.set(1, 0, 5.5)
        assert m.get(1, 0) == 5.5

    def test_copy_is_independent(self):
        m = Matrix.from_rows([[1, 2], [3, 4]])
        c = m.copy()
        c.set(0, 0, 99)
        assert m.get(0, 0) == 1.0
        assert c == Matrix.from_rows([[99, 2], [3, 4]])

    def test_to_scalar(self):
        assert Matrix.from_rows([[7]]).to_scalar() == 7.0
        with pytest.raises(ValueError):
            Matrix(2, 1).to_scalar()


# ── Algebraic operators ─────────────────────────────────────────────────

class TestOperators:
    def test_transpose_replaces_storage(self):
        m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        old = m.data
        m.transpose()
        assert m.shape == (3, 2)
        assert m.tolist() == [[1, 4], [2, 5], [3, 6]]
        assert old.shape == (2, 3)
        assert m.data is not old

    def test_multiply(self):
        a = Matrix.from_rows([[1, 2], [3, 4]])
        b = Matrix.from_rows([[5], [6]])
        out = a.multiply(b)
        assert out.tolist() == [[17.0], [39.0]]
        assert a.tolist() == [[1, 2], [3, 4]]

    def test_multiply_dimension_mismatch(self):
        with pytest.raises(ValueError, match="Cannot multiply"):
            Matrix(2, 3).multiply(Matrix(2, 3))

    def test_scale_and_add(self):
        a = Matrix.from_rows([[1, 2], [3, 4]])
        a.scale(-2)
        a.add(Matrix.from_rows([[1, 1], [1, 1]]))
        assert a.tolist() == [[-1, -3], [-5, -7]]

    def test_add_dimension_mismatch(self):
        with pytest.raises(ValueError):
            Matrix(2, 2).add(Matrix(2, 3))

    def test_take_columns_and_rows_keep_order(self):
        m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        assert m.take_columns([2, 0]).tolist() == [[3, 1], [6, 4]]
        assert m.take_rows([1, 1, 0]).tolist() == [[4, 5, 6], [4, 5, 6], [1, 2, 3]]

    def test_take_out_of_range(self):
        m = Matrix(2, 3)
        with pytest.raises(IndexError):
            m.take_columns([3])
        with pytest.raises(IndexError):
            m.take_rows([0, 2])

    def test_join_right(self):
        m = Matrix.from_rows([[1], [2]])
        m.join_right(Matrix.identity(2))
        assert m.tolist() == [[1, 1, 0], [2, 0, 1]]
        with pytest.raises(ValueError):
            m.join_right(Matrix(3, 1))

    def test_join_bottom(self):
        m = Matrix.from_rows([[1, 2]])
        m.join_bottom(Matrix.from_rows([[3, 4]]))
        assert m.tolist() == [[1, 2], [3, 4]]
        with pytest.raises(ValueError):
            m.join_bottom(Matrix(1, 3))


# ── Row reduction ───────────────────────────────────────────────────────

class TestRref:
    def test_invertible_has_full_rank(self):
        m = Matrix.from_rows([[2, 1, 1], [1, 3, 2], [1, 0, 0]])
        assert m.rref() == 3
        assert np.allclose(m.data, np.eye(3))

    def test_rank_deficient_zero_row_sinks(self):
        m = Matrix.from_rows([[0, 0], [1, 2]])
        assert m.rref() == 1
        assert m.tolist() == [[1, 2], [0, 0]]

    def test_dependent_rows(self):
        m = Matrix.from_rows([[1, 2], [2, 4]])
        assert m.rref() == 1
        assert m.tolist() == [[1, 2], [0, 0]]

    def test_pivot_is_exactly_one(self):
        m = Matrix.from_rows([[49, 1], [0, 1]])
        m.rref()
        assert m.get(0, 0) == 1.0
        assert m.get(0, 1) == 0.0

    def test_scan_stops_at_smaller_dimension(self):
        m = Matrix.from_rows([[0, 0, 1, 0], [0, 0, 0, 1]])
        assert m.rref() == 0
        assert m.tolist() == [[0, 0, 1, 0], [0, 0, 0, 1]]

    def test_skipped_column_uses_up_the_scan(self):
        m = Matrix.from_rows([[0, 1, 0], [0, 0, 1]])
        assert m.rref() == 1
        assert m.tolist() == [[0, 1, 0], [0, 0, 1]]

    def test_wide_matrix_with_leading_pivots(self):
        m = Matrix.from_rows([[2, 4, 2], [1, 3, 5]])
        assert m.rref() == 2
        assert np.allclose(m.data, [[1, 0, -7], [0, 1, 4]])

    def test_tolerance_treats_noise_as_zero(self):
        exact = Matrix.from_rows([[1e-14, 1], [1, 1]])
        noisy = exact.copy()
        assert exact.rref() == 2
        assert noisy.rref(tol=1e-12) == 2
        assert np.allclose(noisy.data, np.eye(2))


# ── Inversion and determinant ───────────────────────────────────────────

class TestInvert:
    def test_round_trip(self):
        m = Matrix.from_rows([[4, 7], [2, 6]])
        inv = m.copy()
        inv.invert()
        assert np.allclose(inv.data, np.array([[0.6, -0.7], [-0.2, 0.4]]))
        assert np.allclose(m.multiply(inv).data, np.eye(2))

    def test_round_trip_3x3(self):
        m = Matrix.from_rows([[2, 1, 1], [1, 3, 2], [1, 0, 0]])
        inv = m.copy()
        inv.invert()
        assert np.allclose(m.multiply(inv).data, np.eye(3))

    def test_singular_is_refused(self):
        m = Matrix.from_rows([[1, 2], [2, 4]])
        with pytest.raises(ValueError, match="singular"):
            m.invert()
        assert m.tolist() == [[1, 2], [2, 4]]

    def test_non_square_is_refused(self):
        with pytest.raises(ValueError):
            Matrix(2, 3).invert()

    def test_determinant_two_by_two_only(self):
        assert Matrix.from_rows([[1, 2], [3, 4]]).determinant() == -2.0
        assert Matrix.identity(3).determinant() == 0.0
        with pytest.raises(ValueError):
            Matrix(2, 3).determinant()
