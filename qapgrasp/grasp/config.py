"""Centralized GRASP parameters.

Size-based defaults (number of facilities n):
  - small  (<=20)
  - medium (21-50)
  - large  (51-100)
  - xlarge (>100)

Construction and local search both cost O(n^3) per iteration, so the default
iteration budget shrinks as n grows.
"""
from __future__ import annotations

import json
import numbers
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Optional

import numpy as np

from qapgrasp.core.exceptions import InvalidParameterError
from qapgrasp.core.rng import MODULUS

SELECTION_RULES = ('seed', 'uniform')


def single_precision_count(*factors) -> int:
    """Product of ``factors`` in float32, left to right, truncated toward zero."""
    product = np.float32(factors[0])
    for x in factors[1:]:
        product = np.float32(product * np.float32(x))
    return int(product)


def _is_integer(x) -> bool:
    return isinstance(x, numbers.Integral) and not isinstance(x, bool)


@dataclass
class SizeParams:
    niter: int
    alpha: float
    beta: float


def classify(n: int) -> str:
    if n <= 20: return 'small'
    if n <= 50: return 'medium'
    if n <= 100: return 'large'
    return 'xlarge'


PARAMS = {
    'small':  SizeParams(200, 0.25, 0.5),
    'medium': SizeParams(100, 0.25, 0.5),
    'large':  SizeParams( 50, 0.25, 0.5),
    'xlarge': SizeParams( 20, 0.25, 0.5),
}


@dataclass
class GraspParams:
    """
    Parameters of one GRASP run.

    alpha     - construction greediness in (0, 1]; smaller is greedier
    beta      - fraction of the n^2 - n off-diagonal pairs kept in the candidate list
    niter     - maximum number of GRASP iterations
    look4     - stop as soon as a permutation of cost <= look4 is found (None disables)
    seed      - random stream state, 1 <= seed <= 2^31 - 2
    selection - 'seed' ranks draws from the raw generator state (Algorithm 754
                behaviour), 'uniform' from the returned [0, 1) value

    Integer fields accept any integral type and are stored as int once validated.
    """
    alpha: float = 0.25
    beta: float = 0.5
    niter: int = 100
    look4: Optional[int] = None
    seed: int = 270001
    selection: str = 'seed'

    def candidate_count(self, n: int) -> int:
        return single_precision_count(self.beta, n * n - n)

    def validate(self, n: int) -> "GraspParams":
        """Fail fast on any precondition violation. Returns self."""
        if n < 2:
            raise InvalidParameterError(f"QAP needs n >= 2, got n={n}")
        if not 0.0 < self.alpha <= 1.0:
            raise InvalidParameterError(f"alpha must be in (0, 1], got {self.alpha}")
        if not 0.0 < self.beta <= 1.0:
            raise InvalidParameterError(f"beta must be in (0, 1], got {self.beta}")
        if self.candidate_count(n) < 1:
            raise InvalidParameterError(
                f"beta={self.beta} keeps no candidate out of {n * n - n} pairs")
        if not _is_integer(self.niter) or self.niter < 1:
            raise InvalidParameterError(f"niter must be a positive integer, got {self.niter!r}")
        if not _is_integer(self.seed) or not 0 < self.seed < MODULUS:
            raise InvalidParameterError(
                f"seed must be an integer in [1, {MODULUS - 1}], got {self.seed!r}")
        if self.look4 is not None and not _is_integer(self.look4):
            raise InvalidParameterError(f"look4 must be an integer cost or None, got {self.look4!r}")
        if self.selection not in SELECTION_RULES:
            raise InvalidParameterError(
                f"selection must be one of {SELECTION_RULES}, got {self.selection!r}")
        self.niter, self.seed = int(self.niter), int(self.seed)
        if self.look4 is not None:
            self.look4 = int(self.look4)
        return self


def default_params(n: int, **overrides: Any) -> GraspParams:
    """Size-adapted defaults, optionally overridden field by field."""
    size = PARAMS[classify(n)]
    params = GraspParams(alpha=size.alpha, beta=size.beta, niter=size.niter)
    return replace(params, **overrides)


def safe_get(d: dict, key: str, default: Any) -> Any:
    """Get dictionary value with default fallback."""
    return d[key] if key in d else default


def load_params(path: str | None = "data/grasp/params.json", base: Optional[GraspParams] = None) -> GraspParams:
    """Load GRASP parameters from a JSON file over ``base`` (or the defaults)."""
    base = base if base is not None else GraspParams()
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        unknown = set(data) - {f.name for f in fields(GraspParams)}
        if unknown:
            raise InvalidParameterError(f"unknown GRASP parameters in {path}: {sorted(unknown)}")
        return replace(base, **{f.name: safe_get(data, f.name, getattr(base, f.name))
                                for f in fields(GraspParams)})
    return base


__all__ = ['PARAMS', 'classify', 'SizeParams', 'GraspParams', 'SELECTION_RULES', 'single_precision_count',
           'default_params', 'load_params']
