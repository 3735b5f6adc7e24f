class InvalidParameter(ValueError):
    """Raised when a problem, algorithm or configuration parameter is out of its domain."""


class PreconditionError(Exception):
    """Raised when an operation is called on a problem it does not support,
    e.g. the analytic solution of a problem whose initial state is not a single point."""
