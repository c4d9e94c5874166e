import numpy as np
import pytest

from acs.errors import EmptyBestTour, InvalidConfig
from acs.pheromone import PheromoneField, initialize


def test_initialize_sets_off_diagonal_and_zero_diagonal():
    tau = initialize(4, 0.3)
    assert np.all(np.diag(tau) == 0.0)
    off = ~np.eye(4, dtype=bool)
    assert np.all(tau[off] == 0.3)


def test_initialize_rejects_negative_level():
    with pytest.raises(InvalidConfig):
        initialize(3, -0.1)


@pytest.mark.parametrize("pre,phi,tau0", [(0.7, 0.5, 0.1), (0.0, 1.0, 0.2), (2.5, 0.0, 0.1), (0.05, 0.3, 0.0)])
def test_local_update(pre, phi, tau0):
    field = PheromoneField(3, 0.1)
    field.tau[0, 2] = pre
    before, after = field.local_update((0, 2), phi, tau0)
    assert before == pre
    assert after == pytest.approx((1 - phi) * pre + phi * tau0)
    assert field.tau[0, 2] == after
    assert after >= 0
    # only the directed edge moves
    assert field.tau[2, 0] == 0.1


def test_local_update_ignores_diagonal():
    field = PheromoneField(3, 0.1)
    field.local_update((1, 1), 0.5, 0.1)
    assert field.tau[1, 1] == 0.0


def test_global_update_touches_only_best_tour_edges():
    field = PheromoneField(4, 0.1)
    rng = np.random.default_rng(0)
    field.tau[:] = rng.uniform(0.1, 1.0, size=(4, 4))
    np.fill_diagonal(field.tau, 0.0)
    pre = field.snapshot()

    tour, rho, q, best = [2, 0, 3, 1], 0.4, 2.0, 8.0
    updates = field.global_update(tour, rho, q, best)

    on_tour = {(2, 0), (0, 3), (3, 1)}
    assert [(u.r, u.c) for u in updates] == [(2, 0), (0, 3), (3, 1)]
    for r in range(4):
        for c in range(4):
            if r == c:
                assert field.tau[r, c] == 0.0
            elif (r, c) in on_tour:
                assert field.tau[r, c] == pytest.approx((1 - rho) * pre[r, c] + rho * (q / best))
            else:
                assert field.tau[r, c] == pre[r, c]


def test_global_update_reports_before_and_after():
    field = PheromoneField(3, 0.2)
    (u,) = field.global_update([1, 2], 0.5, 1.0, 4.0)
    assert (u.before, u.evaporated, u.deposit) == pytest.approx((0.2, 0.1, 0.125))
    assert u.after == pytest.approx(0.225)


@pytest.mark.parametrize("tour", [None, []])
def test_global_update_without_best_tour(tour):
    field = PheromoneField(3, 0.2)
    with pytest.raises(EmptyBestTour):
        field.global_update(tour, 0.5, 1.0, 4.0)


def test_local_update_defaults_to_initial_level():
    field = PheromoneField(3, 0.2)
    field.tau[1, 2] = 1.0
    _, after = field.local_update((1, 2), 0.25)
    assert after == pytest.approx(0.75 * 1.0 + 0.25 * 0.2)
