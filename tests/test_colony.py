import random

import numpy as np
import pytest

from acs import ACSConfig, Colony, EXAMPLE_DISTANCES, TSPInstance
from acs.errors import InvalidConfig, InvalidDistance
from acs.events import (DecisionMade, GenerationCompleted, GenerationStarted,
                        GlobalUpdateApplied, LocalUpdateApplied, TourCompleted)


def test_greedy_scenario_four_cities(four_cities, greedy_cfg):
    colony = Colony(four_cities, greedy_cfg, rng=random.Random(1))
    solutions = colony.run_generation()
    # open path 0 -> 1 -> 3 -> 2 costs d01 + d13 + d32
    assert solutions == [([0, 1, 3, 2], 18.0)]
    assert colony.best_tour == [0, 1, 3, 2]
    assert colony.best_cost == 18.0

    expected = 0.5 * 0.1 + 0.5 * (1.0 / 18.0)
    for r, c in [(0, 1), (1, 3), (3, 2)]:
        assert colony.pheromones[r, c] == pytest.approx(expected)
    assert colony.pheromones[1, 0] == pytest.approx(0.1)
    assert np.all(np.diag(colony.pheromones) == 0.0)


def test_zero_distance_fails_construction(four_cities, greedy_cfg):
    D = four_cities.copy()
    D[1, 2] = 0.0
    with pytest.raises(InvalidDistance):
        Colony(D, greedy_cfg)


@pytest.mark.parametrize("start", [-1, 4])
def test_initial_city_must_be_in_range(four_cities, start):
    with pytest.raises(InvalidConfig):
        Colony(four_cities, ACSConfig(initial_city=start))


def test_invalid_config_is_rejected(four_cities):
    with pytest.raises(InvalidConfig):
        Colony(four_cities, ACSConfig(rho=1.5))


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
@pytest.mark.parametrize("q0", [0.0, 0.5, 1.0])
def test_every_tour_is_an_anchored_permutation(seed, q0):
    inst = TSPInstance.random_euclidean(9, seed=seed)
    start = seed % 9
    cfg = ACSConfig(q0=q0, beta=2.0, n_ants=4, initial_city=start, seed=seed)
    colony = Colony(inst.distance_matrix(), cfg)
    for _ in range(3):
        for tour, cost in colony.run_generation():
            assert len(tour) == 9
            assert tour[0] == start
            assert sorted(tour) == list(range(9))
            assert cost == pytest.approx(inst.path_length(tour))


def test_best_cost_never_increases():
    colony = Colony(EXAMPLE_DISTANCES, ACSConfig(n_ants=3, q0=0.3, seed=11))
    costs = []
    for _ in range(15):
        solutions = colony.run_generation()
        assert colony.best_cost <= min(c for _, c in solutions)
        costs.append(colony.best_cost)
    assert all(b <= a for a, b in zip(costs, costs[1:]))


def test_same_seed_same_run():
    def run(seed):
        colony = Colony(EXAMPLE_DISTANCES, ACSConfig(n_ants=4, q0=0.5, seed=seed))
        return [colony.run_generation() for _ in range(5)], colony.pheromones.copy()

    gens_a, tau_a = run(2024)
    gens_b, tau_b = run(2024)
    assert gens_a == gens_b
    assert np.array_equal(tau_a, tau_b)


def test_injected_random_source_overrides_seed(four_cities, scripted):
    cfg = ACSConfig(q0=0.5, n_ants=1, seed=99)
    rng = scripted([0.1, 0.1, 0.1])
    colony = Colony(four_cities, cfg, rng=rng)
    colony.run_generation()
    assert rng.calls == 3


def test_later_ants_see_earlier_local_updates(four_cities, greedy_cfg, recorder):
    cfg = ACSConfig(**{**greedy_cfg.to_dict(), "n_ants": 2})
    colony = Colony(four_cities, cfg, rng=random.Random(5), observer=recorder)
    colony.run_generation()
    colony.run_generation()

    gen2 = next(i for i, e in enumerate(recorder.events)
                if isinstance(e, GenerationStarted) and e.generation == 2)
    events = recorder.events[gen2:]
    ant0 = next(e for e in events if isinstance(e, LocalUpdateApplied) and e.ant == 0 and e.edge == (0, 1))
    ant1 = next(e for e in events if isinstance(e, DecisionMade) and e.ant == 1 and e.current == 0)
    seen = next(c for c in ant1.candidates if c.city == 1)
    assert ant0.before != pytest.approx(ant0.after)
    assert seen.pheromone == pytest.approx(ant0.after)


def test_generation_events(four_cities, recorder):
    cfg = ACSConfig(n_ants=3, q0=0.5, seed=3)
    colony = Colony(four_cities, cfg, observer=recorder)
    solutions = colony.run_generation()

    started = recorder.of(GenerationStarted)
    assert len(started) == 1 and started[0].generation == 1
    assert np.array_equal(started[0].visibility, colony.visibility)

    tours = recorder.of(TourCompleted)
    assert [(e.tour, e.cost) for e in tours] == solutions

    (done,) = recorder.of(GenerationCompleted)
    assert done.best_cost == min(c for _, c in solutions)
    assert done.global_best_tour == colony.best_tour

    (glob,) = recorder.of(GlobalUpdateApplied)
    best = colony.best_tour
    assert [(u.r, u.c) for u in glob.updates] == list(zip(best, best[1:]))
    assert recorder.events[-1] is glob


def test_snapshot_is_not_the_live_matrix(four_cities, recorder):
    colony = Colony(four_cities, ACSConfig(n_ants=1, seed=0), observer=recorder)
    colony.run_generation()
    (started,) = recorder.of(GenerationStarted)
    assert started.pheromones is not colony.pheromones
    assert np.all(started.pheromones[~np.eye(4, dtype=bool)] == 0.1)
