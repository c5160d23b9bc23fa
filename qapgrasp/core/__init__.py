from .exceptions import QAPError, InvalidInstanceError, InvalidParameterError
from .rng import RandomStream, randp
from .heap import BoundedPriorityQueue, HeapEntry
from .permutation import Permutation
from .problem import Problem
