import numpy as np
import pytest

from timelag import IndexOutOfBounds, LagMatrix, MatrixLayout, ShapeMismatch, lag_matrix, lag_matrix_2d

INF = np.inf


@pytest.fixture
def lagged():
    return lag_matrix([1.0, 2.0, 3.0, 4.0], 3, INF, out_row_len=5, backend="numpy")


def test_shape_accessors(lagged):
    assert lagged.row_count == 4
    assert lagged.col_count == 5
    assert lagged.shape == (4, 5)
    assert lagged.series_count == 1
    assert lagged.series_length == 4
    assert lagged.num_lags == 4
    assert len(lagged) == 20


def test_two_dimensional_access(lagged):
    assert lagged[0, 0] == 1.0
    assert lagged[1, 0] == INF
    assert lagged[3, 3] == 1.0
    assert lagged[2, 4] == INF


@pytest.mark.parametrize("index", [(4, 0), (0, 5), (-1, 0), (0, -1)])
def test_out_of_range_access_raises(lagged, index):
    with pytest.raises(IndexOutOfBounds):
        lagged[index]


def test_out_of_range_access_is_index_error(lagged):
    with pytest.raises(IndexError):
        lagged.row(4)


def test_rows_and_2d_view(lagged):
    np.testing.assert_array_equal(lagged.row(1), [INF, 1.0, 2.0, 3.0, INF])
    view = lagged.as_2d()
    assert view.shape == (4, 5)
    np.testing.assert_array_equal(view[2], [INF, INF, 1.0, 2.0, INF])
    np.testing.assert_array_equal(np.asarray(lagged), view)


def test_buffer_is_read_only(lagged):
    with pytest.raises(ValueError):
        lagged.flat[0] = 0.0
    with pytest.raises(ValueError):
        lagged.as_2d()[0, 0] = 0.0


def test_to_numpy(lagged):
    shared = lagged.to_numpy()
    assert np.shares_memory(shared, lagged.flat)

    owned = lagged.to_numpy(copy=True)
    owned[0] = -5.0
    assert lagged[0, 0] == 1.0


def test_flat_roundtrip_yields_equal_matrix():
    original = lag_matrix_2d(
        np.arange(1.0, 9.0), MatrixLayout.row_major(4), 2, INF, out_row_len=6, backend="numpy"
    )

    rewrapped = LagMatrix.from_array(
        original.to_numpy(), original.row_count, original.col_count, series_count=original.series_count
    )

    assert rewrapped == original
    assert rewrapped.series_count == 2


def test_equality_against_sequences(lagged):
    expected = np.array(lagged.flat)
    assert lagged == expected
    assert lagged == expected.tolist()
    assert lagged != expected[:-1].tolist()
    assert lagged != "not a matrix"


def test_ragged_sequence_is_not_equal(lagged):
    assert lagged != [[1.0, 2.0], [3.0]]
    assert not (lagged == [[1.0, 2.0, 3.0, 4.0, INF], [INF]])


def test_equality_between_matrices_compares_shape():
    first = LagMatrix(np.zeros(6), 2, 3)
    second = LagMatrix(np.zeros(6), 3, 2)
    assert first != second
    assert first == LagMatrix(np.zeros(6), 2, 3)


def test_construction_checks_length():
    with pytest.raises(ShapeMismatch):
        LagMatrix(np.zeros(5), 2, 3)


def test_construction_leaves_caller_buffer_writable():
    data = np.zeros(4)
    LagMatrix(data, 2, 2)
    data[0] = 1.0


def test_matrix_is_not_hashable(lagged):
    with pytest.raises(TypeError):
        hash(lagged)


def test_repr(lagged):
    assert repr(lagged) == "LagMatrix(rows=4, cols=5, series=1, dtype=float64)"
