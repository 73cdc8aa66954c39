import numpy as np
import pytest

from morphseg.dict import ConnectionCostMatrix
from morphseg.errors import DictionaryUnavailableError


def _matrix(tmp_path, text):
    path = tmp_path / "matrix.def"
    path.write_text(text, encoding="utf-8")
    return ConnectionCostMatrix(path)


def test_load_matrix_def(tmp_path):
    conn = _matrix(tmp_path, "\n2 3\n0 0 10\n1 2 -5\n# comment\n0 1 3\n")
    assert conn.cost(0, 0) == 10
    assert conn.cost(1, 2) == -5
    assert conn.cost(0, 1) == 3
    assert conn.cost(1, 0) == 0
    assert (conn.right_size, conn.left_size) == (2, 3)


def test_out_of_range_ids_cost_nothing(tmp_path):
    conn = _matrix(tmp_path, "1 1\n0 0 42\n")
    assert conn.cost(5, 0) == 0
    assert conn.cost(0, -1) == 0


@pytest.mark.parametrize("text, match", [
    ("", "empty"),
    ("3\n", "header"),
    ("-1 2\n", "negative"),
    ("2 2\n0 x 1\n", "not numeric"),
    ("2 2\n2 0 1\n", "out of bounds"),
])
def test_corrupt_matrix_def(tmp_path, text, match):
    conn = _matrix(tmp_path, text)
    with pytest.raises(DictionaryUnavailableError, match=match):
        conn.load()


def test_missing_matrix_def(tmp_path):
    with pytest.raises(DictionaryUnavailableError):
        ConnectionCostMatrix(tmp_path / "matrix.def").load()
    with pytest.raises(DictionaryUnavailableError):
        ConnectionCostMatrix().load()


def test_from_array():
    conn = ConnectionCostMatrix.from_array([[1, 2], [3, 4]])
    assert conn.cost(1, 0) == 3
    assert conn.mat.dtype == np.int32
    with pytest.raises(ValueError):
        ConnectionCostMatrix.from_array([1, 2, 3])
