"""Top-level package exports for qapgrasp.

Convenience re-exports so users can:

	from qapgrasp import run_grasp, solve, Problem, GraspParams

The driver is exported as ``run_grasp`` so that ``qapgrasp.grasp`` keeps
naming the sub-package. Versioning kept simple (manual bump).
"""

__all__ = [
	'run_grasp', 'solve', 'Problem', 'GraspParams', 'GraspResult', 'VERSION'
]

from .core.problem import Problem
from .grasp.config import GraspParams
from .grasp.driver import grasp as run_grasp, solve, GraspResult

VERSION = '0.1.0'
