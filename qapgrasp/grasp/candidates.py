"""
Candidate list for stage 1 of the GRASP construction.

The n^2 - n off-diagonal distances are sorted ascending and the off-diagonal
flows descending. The i-th shortest distance is paired with the i-th largest
flow and the products of the first ``beta * (n^2 - n)`` pairs are sorted again.
The resulting list ranks cheap elementary assignments (two facilities with a
large flow placed on two close locations) without evaluating true assignment
costs.

Reference: Li, Pardalos & Resende (1994) "A greedy randomized adaptive search
procedure for the quadratic assignment problem." DIMACS Series in Discrete
Mathematics and Theoretical Computer Science 16, pp. 237-261.
"""
from __future__ import annotations

from typing import NamedTuple

from qapgrasp.core.heap import BoundedPriorityQueue
from qapgrasp.core.problem import Problem
from qapgrasp.grasp.config import single_precision_count


class CandidateEntry(NamedTuple):
    cost: int
    flow_pair: tuple[int, int]      # facilities (i, j)
    distance_pair: tuple[int, int]  # locations (k, l)


def build_candidate_list(problem: Problem, beta: float) -> list[CandidateEntry]:
    """
    Build the ascending candidate list of elementary assignments.

    Args:
        problem: QAP instance
        beta: retention fraction in (0, 1]

    Returns:
        ``beta * (n^2 - n)`` entries (float32 product, truncated) sorted by increasing cost
    """
    n = problem.n
    flow = problem.flow.tolist()
    dist = problem.distance.tolist()

    nbeta = single_precision_count(beta, n * n - n)
    queue_d = BoundedPriorityQueue(n * n)
    queue_f = BoundedPriorityQueue(n * n)
    for i in range(n):
        for j in range(n):
            if i != j:
                queue_d.insert(dist[i][j], (i, j))
                queue_f.insert(-flow[i][j], (i, j))

    # pair the i-th shortest distance with the i-th largest flow
    pairs = []
    queue_c = BoundedPriorityQueue(nbeta)
    for idx in range(nbeta):
        dv, dpair = queue_d.extract_min()
        fv, fpair = queue_f.extract_min()
        pairs.append((fpair, dpair))
        queue_c.insert(-dv * fv, idx)

    candidates = []
    for _ in range(nbeta):
        cost, idx = queue_c.extract_min()
        fpair, dpair = pairs[idx]
        candidates.append(CandidateEntry(cost, fpair, dpair))
    return candidates
