import numpy as np
import pytest

from acs import EXAMPLE_DISTANCES, TSPInstance, load_distance_matrix
from acs.cost_model import CostModel
from acs.errors import InvalidDistance


def test_example_matrix_is_symmetric_and_usable():
    assert EXAMPLE_DISTANCES.shape == (10, 10)
    assert np.array_equal(EXAMPLE_DISTANCES, EXAMPLE_DISTANCES.T)
    CostModel(EXAMPLE_DISTANCES)


def test_load_distance_matrix(tmp_path):
    path = tmp_path / "d.csv"
    path.write_text("0,2,9\n1,0,6\n15,7,0\n")
    D = load_distance_matrix(str(path))
    assert D.shape == (3, 3)
    assert D[2, 0] == 15.0


def test_load_distance_matrix_rejects_non_square(tmp_path):
    path = tmp_path / "d.csv"
    path.write_text("0,2,9\n1,0,6\n")
    with pytest.raises(InvalidDistance):
        load_distance_matrix(str(path))


def test_random_euclidean_instance():
    inst = TSPInstance.random_euclidean(6, seed=8)
    again = TSPInstance.random_euclidean(6, seed=8)
    assert inst.coords == again.coords
    D = inst.distance_matrix()
    assert D.shape == (6, 6)
    assert np.allclose(D, D.T)
    assert np.all(np.diag(D) == 0)
    assert D[1, 4] == pytest.approx(inst.distance(1, 4))


def test_path_length_is_open():
    inst = TSPInstance(coords=[(0, 0), (3, 0), (3, 4)])
    assert inst.path_length([0, 1, 2]) == pytest.approx(7.0)
