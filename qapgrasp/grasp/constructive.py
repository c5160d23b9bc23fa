"""
GRASP construction phase for the QAP
====================================

A construction builds facility and location permutations ``a`` and ``b``
side by side: facility ``a[p]`` is assigned to location ``b[p]`` for every
position ``p``.

- Stage 1 fixes positions 0 and 1 with an elementary assignment drawn near
  the head of the candidate list.
- Stage 2 fixes positions 2 .. n-2 one at a time. At each step the marginal
  cost of every still-free (facility, location) pair against the pairs already
  fixed is ranked in a min-heap and one of the ``alpha``-best is drawn.
  Position n-1 receives the last free pair.

Reference: Li, Pardalos & Resende (1994) "A greedy randomized adaptive search
procedure for the quadratic assignment problem." DIMACS Series 16, pp. 237-261.
Resende, Pardalos & Li (1996) "Algorithm 754: Fortran subroutines for
approximate solution of dense quadratic assignment problems using GRASP."
ACM Transactions on Mathematical Software 22(1), pp. 104-118.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from qapgrasp.core.heap import BoundedPriorityQueue
from qapgrasp.core.permutation import Permutation
from qapgrasp.core.problem import Problem
from qapgrasp.core.rng import MODULUS, RandomStream
from qapgrasp.grasp.candidates import CandidateEntry
from qapgrasp.grasp.config import GraspParams, single_precision_count

logger = logging.getLogger(__name__)


@dataclass
class Construction:
    facilities: Permutation      # a: position -> facility
    locations: Permutation       # b: position -> location
    cost: int
    seed_pairs: tuple[int, int, int, int]  # (i, j, k, l) committed by stage 1

    def assignment(self) -> np.ndarray:
        """Facility -> location array."""
        assign = np.empty(len(self.facilities), dtype=np.int64)
        assign[self.facilities.order] = self.locations.order
        return assign


def select_rank(stream: RandomStream, high: int, rule: str = 'seed') -> int:
    """
    Draw a 1-based rank in [1, high].

    With ``rule='seed'`` the raw generator state is split into ``high`` equal
    buckets. Together with rank ranges computed in float32 (see
    ``single_precision_count``) this reproduces Algorithm 754 runs.
    ``rule='uniform'`` scales the returned [0, 1) value instead.
    """
    value = stream.draw()
    high = max(1, high)
    if rule == 'uniform':
        rank = 1 + int(value * high)
    else:
        rank = 1 + stream.seed // (MODULUS // high)
    return min(rank, high)


def stage1(problem: Problem, candidates: list[CandidateEntry], stream: RandomStream,
           params: GraspParams):
    """
    Stage 1: pick two facility/location pairs from the candidate list.

    Args:
        problem: QAP instance
        candidates: ascending candidate list (see ``build_candidate_list``)
        stream: random stream, advanced once
        params: GRASP parameters (alpha, beta, selection)

    Returns:
        (a, b, cost, (i, j, k, l)) with facility i -> location k at position 0
        and facility j -> location l at position 1
    """
    n = problem.n
    a = Permutation.identity(n)
    b = Permutation.identity(n)

    high = min(single_precision_count(params.alpha, params.beta, n * n - n), len(candidates))
    rank = select_rank(stream, high, params.selection)
    cost, (i, j), (k, l) = candidates[rank - 1]

    a.place(i, 0)
    a.place(j, 1)
    b.place(k, 0)
    b.place(l, 1)
    return a, b, cost, (i, j, k, l)


def stage2(problem: Problem, a: Permutation, b: Permutation, cost: int, stream: RandomStream,
           params: GraspParams, queue: Optional[BoundedPriorityQueue] = None) -> int:
    """
    Stage 2: complete ``a`` and ``b`` in place, one position at a time.

    The running cost accumulates each unordered pair once and is doubled at
    the end, so it is the true objective for symmetric instances.

    Returns:
        Cost of the complete assignment.
    """
    n = problem.n
    flow, dist = problem.flow, problem.distance
    if queue is None:
        queue = BoundedPriorityQueue(n * n)

    for s in range(2, n - 1):
        queue.reset()
        fac, loc = a.order, b.order
        marginal = flow[np.ix_(fac[s:], fac[:s])] @ dist[np.ix_(loc[s:], loc[:s])].T
        for dk, row in enumerate(marginal.tolist()):
            for dl, value in enumerate(row):
                queue.insert(value, (s + dk, s + dl))

        high = min(single_precision_count(params.alpha, queue.size), queue.size)
        rank = select_rank(stream, high, params.selection)
        for _ in range(rank):
            value, (k, l) = queue.extract_min()
        cost += value
        a.swap(s, k)
        b.swap(s, l)

    if n > 2:
        last = n - 1
        fac, loc = a.order, b.order
        cost += int(flow[fac[last], fac[:last]] @ dist[loc[last], loc[:last]])
    assert a.is_valid() and b.is_valid()
    return cost + cost


def construct(problem: Problem, candidates: list[CandidateEntry], stream: RandomStream,
              params: GraspParams, queue: Optional[BoundedPriorityQueue] = None) -> Construction:
    """Run both construction stages and return the complete assignment."""
    a, b, cost, seed_pairs = stage1(problem, candidates, stream, params)
    cost = stage2(problem, a, b, cost, stream, params, queue=queue)
    result = Construction(a, b, cost, seed_pairs)
    if not problem.symmetric:
        result.cost = problem.cost(result.assignment())
    logger.debug(f"[BUILD] stage1 pairs={seed_pairs} cost={result.cost}")
    return result
