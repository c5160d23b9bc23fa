"""
Evaluation helpers for QAP assignments.
"""
import numpy as np


def objective(flow, distance, assignment):
    """
    Koopmans-Beckmann objective of an assignment.

    cost = sum_{i,j} F[i, j] * D[p(i), p(j)]

    Args:
        flow: n x n flow matrix (facilities)
        distance: n x n distance matrix (locations)
        assignment: facility -> location, 0-based

    Returns:
        Total cost (int). Smaller is better.
    """
    p = np.asarray(assignment, dtype=np.int64)
    flow = np.asarray(flow, dtype=np.int64)
    distance = np.asarray(distance, dtype=np.int64)
    return int((flow * distance[np.ix_(p, p)]).sum())


def gap(cost, reference):
    """Relative gap in percent of ``cost`` above ``reference`` (best known / optimal)."""
    if reference == 0:
        return 0.0 if cost == 0 else float('inf')
    return 100.0 * (cost - reference) / abs(reference)
