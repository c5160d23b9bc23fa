"""
Exceptions raised by the QAP GRASP solver.
"""


class QAPError(Exception):
    """Base class for solver errors."""
    pass


class InvalidInstanceError(QAPError, ValueError):
    """Raised when flow/distance matrices or an instance file are malformed."""
    pass


class InvalidParameterError(QAPError, ValueError):
    """Raised when GRASP parameters violate their preconditions."""
    pass
