"""
Weak Learner Exceptions

Error and warning types raised by the weak learner components.
"""


class InvalidConfiguration(ValueError):
    """Raised for bad constructor parameters or an unusable training set."""


class InputLengthMismatch(ValueError):
    """Raised when an input vector length disagrees with the established feature count."""


class NonConvergenceWarning(RuntimeWarning):
    """Issued when the optimizer exhausts its iteration or time budget before converging."""
