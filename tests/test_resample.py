import numpy as np
import pytest

from cwtcore.errors import AxisLengthMismatch, InvalidWidth, InvertedWindow, OutOfRange
from cwtcore.resample import compress_axis, compress_matrix, time_window


@pytest.fixture
def ramp_matrix():
    return np.tile(np.arange(1.0, 11.0), (3, 1))


class TestCompressMatrix:
    def test_even_division(self, ramp_matrix):
        out = compress_matrix(ramp_matrix, 5)
        assert out.shape == (3, 5)
        assert out[0, 1] == pytest.approx((3 + 4) / 2)
        np.testing.assert_allclose(out[2], [1.5, 3.5, 5.5, 7.5, 9.5])

    def test_uneven_division_last_block_takes_remainder(self, ramp_matrix):
        out = compress_matrix(ramp_matrix, 3)
        assert out.shape == (3, 3)
        assert out[0, 1] == pytest.approx((5 + 6 + 7 + 8) / 4)
        assert out[0, 2] == pytest.approx((9 + 10) / 2)

    def test_no_empty_blocks(self, ramp_matrix):
        out = compress_matrix(ramp_matrix, 6)
        np.testing.assert_allclose(out[0], [1.5, 3.5, 5.5, 7.5, 9.0, 10.0])

    def test_identity_width(self, ramp_matrix):
        np.testing.assert_allclose(compress_matrix(ramp_matrix, 10), ramp_matrix)

    def test_single_block(self, ramp_matrix):
        np.testing.assert_allclose(compress_matrix(ramp_matrix, 1), [[5.5]] * 3)

    def test_rows_independent(self):
        data = np.array([[1.0, 3.0, 5.0, 7.0], [0.0, 0.0, 10.0, 10.0]])
        np.testing.assert_allclose(compress_matrix(data, 2), [[2.0, 6.0], [0.0, 10.0]])

    @pytest.mark.parametrize("width", [-5, 0, 11])
    def test_invalid_width(self, ramp_matrix, width):
        before = ramp_matrix.copy()
        with pytest.raises(InvalidWidth) as exc:
            compress_matrix(ramp_matrix, width)
        assert exc.value.value == width
        np.testing.assert_array_equal(ramp_matrix, before)

    def test_accepts_nested_lists(self):
        out = compress_matrix([[1, 2, 3, 4]], 2)
        np.testing.assert_allclose(out, [[1.5, 3.5]])


class TestCompressAxis:
    def setup_method(self):
        self.axis = np.arange(1.0, 11.0)

    def test_even_division(self):
        out = compress_axis(self.axis, 5)
        assert len(out) == 5
        assert out[1] == (3 + 4) / 2

    def test_uneven_division(self):
        out = compress_axis(self.axis, 3)
        assert len(out) == 3
        assert out[2] == (9 + 10) / 2

    def test_matches_matrix_compression(self, ramp_matrix):
        np.testing.assert_allclose(compress_axis(self.axis, 4), compress_matrix(ramp_matrix, 4)[0])

    def test_invalid_width(self):
        with pytest.raises(InvalidWidth):
            compress_axis(self.axis, -5)


class TestTimeWindow:
    def setup_method(self):
        self.data = np.array([
            [1, 2, 3, 4, 5, 6],
            [7, 8, 9, 10, 11, 12],
            [13, 14, 15, 16, 17, 18],
        ], dtype=float)
        self.axis = np.array([0.1, 0.2, 0.3, 0.4, 0.5, 0.6])

    def test_window(self):
        t, w = time_window(0.2, 0.38, self.axis, self.data)
        assert w.shape == (3, 3)
        assert len(t) == 3
        assert w[1, 2] == self.data[1, 3]
        np.testing.assert_allclose(t, [0.2, 0.3, 0.4])

    def test_window_on_samples(self):
        t, w = time_window(0.3, 0.5, self.axis, self.data)
        np.testing.assert_allclose(t, [0.3, 0.4, 0.5])
        np.testing.assert_array_equal(w[0], [3, 4, 5])

    def test_full_span(self):
        t, w = time_window(0.1, 0.6, self.axis, self.data)
        np.testing.assert_array_equal(w, self.data)
        np.testing.assert_array_equal(t, self.axis)

    def test_result_is_a_copy(self):
        _, w = time_window(0.2, 0.4, self.axis, self.data)
        w[0, 0] = -1
        assert self.data[0, 1] == 2

    def test_inverted(self):
        with pytest.raises(InvertedWindow):
            time_window(0.42, 0.2, self.axis, self.data)

    @pytest.mark.parametrize("start,end", [(float("nan"), 0.4), (0.2, float("nan"))])
    def test_nan_bounds_rejected(self, start, end):
        with pytest.raises(InvertedWindow) as exc:
            time_window(start, end, self.axis, self.data)
        assert exc.value.param == "end_time"

    def test_start_before_axis(self):
        with pytest.raises(OutOfRange) as exc:
            time_window(0.01, 0.2, self.axis, self.data)
        assert exc.value.param == "start_time"

    def test_end_after_axis(self):
        with pytest.raises(OutOfRange) as exc:
            time_window(0.2, 0.9, self.axis, self.data)
        assert exc.value.param == "end_time"

    def test_axis_length_mismatch(self):
        with pytest.raises(AxisLengthMismatch):
            time_window(0.2, 0.5, np.array([0.1, 0.2, 0.3, 0.4, 0.5]), self.data)
