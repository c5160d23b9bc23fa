"""
QAP instance value type.

A problem is a pair of dense n x n integer matrices: ``flow`` between
facilities and ``distance`` between locations. Both are validated once, copied
and frozen, then shared read-only by every GRASP iteration.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from qapgrasp.core.exceptions import InvalidInstanceError
from qapgrasp.utils.metrics import objective


def _as_matrix(values, label: str) -> np.ndarray:
    try:
        arr = np.asarray(values)
    except ValueError as e:  # ragged nested sequences
        raise InvalidInstanceError(f"{label} matrix is ragged: {e}") from e
    if arr.dtype == object:
        raise InvalidInstanceError(f"{label} matrix is ragged or not numeric")
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise InvalidInstanceError(f"{label} matrix must be square, got shape {arr.shape}")
    if arr.dtype.kind == 'f':
        if not np.all(np.isfinite(arr)):
            raise InvalidInstanceError(f"{label} matrix contains non-finite values")
        if not np.all(arr == np.round(arr)):
            raise InvalidInstanceError(f"{label} matrix must be integer-valued")
    elif arr.dtype.kind not in 'iub':
        raise InvalidInstanceError(f"{label} matrix must be numeric, got dtype {arr.dtype}")
    arr = arr.astype(np.int64)
    if np.any(arr < 0):
        raise InvalidInstanceError(f"{label} matrix must be non-negative")
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Problem:
    flow: np.ndarray
    distance: np.ndarray
    name: Optional[str] = None
    symmetric: bool = field(init=False)

    def __post_init__(self):
        f = _as_matrix(self.flow, "flow")
        d = _as_matrix(self.distance, "distance")
        if f.shape != d.shape:
            raise InvalidInstanceError(
                f"flow {f.shape} and distance {d.shape} matrices differ in size")
        if f.shape[0] < 2:
            raise InvalidInstanceError(f"QAP needs n >= 2, got n={f.shape[0]}")
        object.__setattr__(self, "flow", f)
        object.__setattr__(self, "distance", d)
        # One-sided accumulation doubled is exact only when both matrices are
        # symmetric and no facility contributes a diagonal term.
        diag_zero = not np.any(np.diag(f)) or not np.any(np.diag(d))
        object.__setattr__(
            self, "symmetric",
            bool(np.array_equal(f, f.T) and np.array_equal(d, d.T) and diag_zero))

    @classmethod
    def from_matrices(cls, flow, distance, name: Optional[str] = None) -> "Problem":
        """Validate and freeze a flow/distance pair (same checks as the constructor)."""
        return cls(flow=flow, distance=distance, name=name)

    @property
    def n(self) -> int:
        return self.flow.shape[0]

    def cost(self, assignment) -> int:
        """Objective of ``assignment`` (facility -> location, 0-based)."""
        return objective(self.flow, self.distance, assignment)

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<Problem{label} n={self.n} symmetric={self.symmetric}>"
