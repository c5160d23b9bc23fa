"""
QAPLIB instance and solution files.

Instance format: n, then the two n x n matrices, all whitespace separated
(rows may wrap across lines, blank lines are ignored). The first matrix is
the flow matrix unless ``distance_first`` is set.

Solution format (.sln): n and the cost on the first line, then the 1-based
permutation (location of each facility).

Reference: Burkard, Karisch & Rendl (1997) "QAPLIB - A Quadratic Assignment
Problem Library." Journal of Global Optimization 10, pp. 391-403.
"""
import io
import os

import numpy as np

from qapgrasp.core.exceptions import InvalidInstanceError
from qapgrasp.core.problem import Problem


def _read_tokens(source):
    if hasattr(source, "read"):
        text = source.read()
    else:
        with open(source, "r", encoding="utf-8") as f:
            text = f.read()
    try:
        return [int(tok) for tok in text.split()]
    except ValueError as e:
        raise InvalidInstanceError(f"non-integer token in QAPLIB data: {e}") from e


def read_qaplib(source, distance_first=False, name=None):
    """
    Load a QAPLIB instance.

    Args:
        source: path or text stream
        distance_first: True if the file lists the distance matrix first
        name: instance name (defaults to the file stem)

    Returns:
        Problem
    """
    tokens = _read_tokens(source)
    if not tokens:
        raise InvalidInstanceError("empty QAPLIB instance")
    n = tokens[0]
    if n < 2:
        raise InvalidInstanceError(f"QAPLIB instance size must be >= 2, got {n}")
    if len(tokens) != 1 + 2 * n * n:
        raise InvalidInstanceError(
            f"expected {2 * n * n} matrix entries for n={n}, found {len(tokens) - 1}")
    first = np.array(tokens[1:1 + n * n], dtype=np.int64).reshape(n, n)
    second = np.array(tokens[1 + n * n:], dtype=np.int64).reshape(n, n)
    flow, distance = (second, first) if distance_first else (first, second)
    if name is None and not hasattr(source, "read"):
        name = os.path.splitext(os.path.basename(str(source)))[0]
    return Problem.from_matrices(flow, distance, name=name)


def write_qaplib(path, problem, distance_first=False):
    """Write ``problem`` in QAPLIB format."""
    first, second = (problem.distance, problem.flow) if distance_first else (problem.flow, problem.distance)
    s = io.StringIO()
    s.write(f"{problem.n}\n\n")
    np.savetxt(s, first, fmt="%d")
    s.write("\n")
    np.savetxt(s, second, fmt="%d")
    with open(path, "w", encoding="utf-8") as f:
        f.write(s.getvalue())


def read_solution(source):
    """
    Load a QAPLIB .sln file.

    Returns:
        (cost, assignment) with a 0-based facility -> location array
    """
    tokens = _read_tokens(source)
    if len(tokens) < 2:
        raise InvalidInstanceError("QAPLIB solution needs a size and a cost")
    n, cost = tokens[0], tokens[1]
    perm = tokens[2:]
    if len(perm) != n or sorted(perm) != list(range(1, n + 1)):
        raise InvalidInstanceError(f"solution is not a permutation of 1..{n}")
    return cost, np.array(perm, dtype=np.int64) - 1


def write_solution(path, cost, assignment):
    """Write a QAPLIB .sln file from a 0-based assignment."""
    perm = " ".join(str(int(p) + 1) for p in assignment)
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"{len(assignment)} {cost}\n{perm}\n")
