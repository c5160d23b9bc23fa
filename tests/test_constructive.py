"""
Unit tests for the two-stage GRASP construction.
"""
import numpy as np
import pytest
import qapgrasp.grasp.constructive as constructive
from qapgrasp.core.problem import Problem
from qapgrasp.core.rng import RandomStream, randp
from qapgrasp.grasp.candidates import build_candidate_list
from qapgrasp.grasp.config import GraspParams
from qapgrasp.grasp.constructive import construct, select_rank, stage1, stage2
from qapgrasp.utils.generators import random_instance

def _setup(n, seed=3, **kw):
    problem = random_instance(n, seed=seed)
    params = GraspParams(**kw).validate(n)
    return problem, params, build_candidate_list(problem, params.beta)

# 1) Rank selection
def test_select_rank_seed_rule_uses_raw_state():
    stream = RandomStream(270001)
    _, nxt = randp(270001)
    rank = select_rank(stream, 10, 'seed')
    assert stream.seed == nxt
    assert rank == 1 + nxt // (2147483647 // 10)

@pytest.mark.parametrize("rule", ['seed', 'uniform'])
def test_select_rank_stays_in_range(rule):
    stream = RandomStream(12345)
    for high in (0, 1, 2, 7, 1000, 70000):
        for _ in range(50):
            assert 1 <= select_rank(stream, high, rule) <= max(1, high)

# 2) Stage 1
def test_stage1_commits_candidate_pairs():
    problem, params, cands = _setup(6)
    a, b, cost, (i, j, k, l) = stage1(problem, cands, RandomStream(4711), params)
    assert list(a)[:2] == [i, j]
    assert list(b)[:2] == [k, l]
    assert cost == problem.flow[i, j] * problem.distance[k, l]
    assert a.is_valid() and b.is_valid()

def test_stage1_alpha_limits_choice_to_list_head():
    problem, params, cands = _setup(6, alpha=0.1, beta=0.5)
    high = int(0.1 * 0.5 * 30)
    head = {(c.flow_pair, c.distance_pair) for c in cands[:high]}
    stream = RandomStream(99)
    for _ in range(30):
        _, _, _, (i, j, k, l) = stage1(problem, cands, stream, params)
        assert ((i, j), (k, l)) in head

# 3) Stage 2 / full construction
@pytest.mark.parametrize("n", [2, 3, 4, 7, 9])
def test_construction_is_a_valid_assignment_with_exact_cost(n):
    problem, params, cands = _setup(n, seed=n)
    built = construct(problem, cands, RandomStream(1000 + n), params)
    assert built.facilities.is_valid() and built.locations.is_valid()
    assignment = built.assignment()
    assert sorted(assignment.tolist()) == list(range(n))
    assert built.cost == problem.cost(assignment)

def test_stage2_consumes_one_draw_per_open_position():
    problem, params, cands = _setup(8)
    stream = RandomStream(555)
    a, b, cost, _ = stage1(problem, cands, stream, params)
    after_stage1 = stream.seed
    stage2(problem, a, b, cost, stream, params)
    expected = after_stage1
    for _ in range(8 - 3):
        _, expected = randp(expected)
    assert stream.seed == expected

def test_greedy_alpha_picks_cheapest_marginal_pair():
    # with alpha small every stage 2 step takes the head of the heap
    problem, params, cands = _setup(6, alpha=0.01, beta=1.0)
    stream = RandomStream(42)
    a, b, cost, _ = stage1(problem, cands, stream, params)
    first_a, first_b = a.copy(), b.copy()
    stage2(problem, a, b, cost, stream, params)
    fac, loc = first_a.order, first_b.order
    marginal = problem.flow[np.ix_(fac[2:], fac[:2])] @ problem.distance[np.ix_(loc[2:], loc[:2])].T
    chosen = problem.flow[a[2], fac[:2]] @ problem.distance[b[2], loc[:2]]
    assert chosen == marginal.min()

def test_asymmetric_instance_reports_exact_cost():
    rng = np.random.default_rng(8)
    flow = rng.integers(0, 9, size=(6, 6))
    dist = rng.integers(0, 9, size=(6, 6))
    problem = Problem.from_matrices(flow, dist)
    assert not problem.symmetric
    params = GraspParams().validate(6)
    built = construct(problem, build_candidate_list(problem, params.beta), RandomStream(7), params)
    assert built.cost == problem.cost(built.assignment())

def test_same_seed_same_construction():
    problem, params, cands = _setup(7)
    one = construct(problem, cands, RandomStream(31337), params)
    two = construct(problem, cands, RandomStream(31337), params)
    assert one.facilities == two.facilities and one.locations == two.locations
    assert one.cost == two.cost

def test_stage1_rank_range_is_computed_in_single_precision(monkeypatch):
    problem, params, cands = _setup(25, alpha=0.1, beta=0.7)
    seen = []
    draw = constructive.select_rank
    def spy(stream, high, rule='seed'):
        seen.append(high)
        return draw(stream, high, rule)
    monkeypatch.setattr(constructive, "select_rank", spy)
    stage1(problem, cands, RandomStream(4711), params)
    assert seen == [42]
