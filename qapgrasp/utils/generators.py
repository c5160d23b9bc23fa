"""
Random QAP instances for tests and benchmarks.
"""
import numpy as np

from qapgrasp.core.problem import Problem


def random_instance(n, seed=None, low=0, high=10, symmetric=True):
    """
    Uniform random flow and distance matrices with a zero diagonal.

    Args:
        n: number of facilities / locations
        seed: numpy seed (None = nondeterministic)
        low, high: integer range [low, high) of the entries
        symmetric: mirror the upper triangle onto the lower one

    Returns:
        Problem
    """
    rng = np.random.default_rng(seed)
    mats = []
    for _ in range(2):
        m = rng.integers(low, high, size=(n, n))
        if symmetric:
            m = np.triu(m, 1)
            m = m + m.T
        np.fill_diagonal(m, 0)
        mats.append(m)
    return Problem.from_matrices(mats[0], mats[1], name=f"rand{n}")


def grid_instance(rows, cols, seed=None, max_flow=10, density=0.5):
    """
    Locations on a rows x cols grid with Manhattan distances and sparse
    symmetric random flows (the construction used by the nug* instances).
    """
    rng = np.random.default_rng(seed)
    n = rows * cols
    coords = np.array([(r, c) for r in range(rows) for c in range(cols)])
    distance = np.abs(coords[:, None, :] - coords[None, :, :]).sum(axis=2)
    flow = rng.integers(1, max_flow + 1, size=(n, n))
    flow = np.where(rng.random((n, n)) < density, flow, 0)
    flow = np.triu(flow, 1)
    flow = flow + flow.T
    return Problem.from_matrices(flow, distance, name=f"grid{rows}x{cols}")
