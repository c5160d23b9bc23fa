"""
GRASP driver for the Quadratic Assignment Problem
=================================================

Each iteration builds a randomized greedy assignment (stages 1 and 2) and
improves it with 2-exchange local search; the best assignment seen is kept.
The run ends when an assignment of cost <= ``look4`` is found ("target met")
or after ``niter`` iterations ("budget exhausted").

Reference: Feo & Resende (1995) "Greedy randomized adaptive search
procedures." Journal of Global Optimization 6, pp. 109-133.
Resende, Pardalos & Li (1996) "Algorithm 754", ACM TOMS 22(1), pp. 104-118.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Optional

import numpy as np
import pandas as pd

from qapgrasp.core.heap import BoundedPriorityQueue
from qapgrasp.core.problem import Problem
from qapgrasp.core.rng import RandomStream
from qapgrasp.grasp.candidates import build_candidate_list
from qapgrasp.grasp.config import GraspParams
from qapgrasp.grasp.constructive import construct
from qapgrasp.grasp.local_search import local_search, placement_from

logger = logging.getLogger(__name__)


@dataclass
class IterationRecord:
    iteration: int
    construction_cost: int
    local_search_cost: int
    best_cost: int
    sweeps: int


@dataclass
class GraspResult:
    assignment: Optional[np.ndarray]   # facility -> location, 0-based
    cost: float
    iterations: int
    seed: int
    target_met: bool = False
    history: list[IterationRecord] = field(default_factory=list)

    @property
    def permutation(self) -> list[int]:
        """1-based location of every facility (QAPLIB convention)."""
        return [int(p) + 1 for p in self.assignment]

    def to_frame(self) -> pd.DataFrame:
        columns = ["iteration", "construction_cost", "local_search_cost", "best_cost", "sweeps"]
        return pd.DataFrame([asdict(rec) for rec in self.history], columns=columns)


def grasp(problem: Problem, params: Optional[GraspParams] = None, max_sweeps=None) -> GraspResult:
    """
    Run GRASP on ``problem``.

    Args:
        problem: validated QAP instance
        params: GRASP parameters (defaults if None); validated before any iteration
        max_sweeps: optional cap on local search sweeps per iteration

    Returns:
        GraspResult with the best assignment, its cost, the number of
        iterations performed and the advanced seed.
    """
    params = (params or GraspParams()).validate(problem.n)
    stream = RandomStream(params.seed)
    look4 = params.look4

    candidates = build_candidate_list(problem, params.beta)
    queue = BoundedPriorityQueue(problem.n * problem.n)
    logger.info(f"[GRASP] n={problem.n} candidates={len(candidates)} alpha={params.alpha} "
                f"beta={params.beta} niter={params.niter} look4={look4} seed={params.seed}")

    best = GraspResult(assignment=None, cost=float('inf'), iterations=params.niter, seed=params.seed)
    for it in range(1, params.niter + 1):
        built = construct(problem, candidates, stream, params, queue=queue)
        placement = placement_from(built.facilities, built.locations)
        cost, sweeps = local_search(problem, placement, built.cost, max_sweeps=max_sweeps)

        if cost < best.cost:
            # placement is location -> facility; store its inverse
            best.assignment = placement.inverse().order.copy()
            best.cost = cost
            logger.info(f"[GRASP] iteration {it}: new best cost {cost}")
        best.history.append(IterationRecord(it, built.cost, cost, best.cost, sweeps))
        logger.debug(f"[GRASP] iteration {it}: built={built.cost} local={cost} sweeps={sweeps}")

        if look4 is not None and best.cost <= look4:
            best.iterations = it
            best.target_met = True
            break

    best.seed = stream.seed
    status = "target met" if best.target_met else "budget exhausted"
    logger.info(f"[GRASP] {status} after {best.iterations} iterations, best cost {best.cost}")
    return best


def solve(flow, distance, name=None, **params) -> GraspResult:
    """Validate the matrices, then run GRASP with ``GraspParams(**params)``."""
    problem = Problem.from_matrices(flow, distance, name=name)
    return grasp(problem, GraspParams(**params))
