"""
Custom exceptions for fast_distances.
"""


class FastDistancesError(Exception):
    """Base exception for fast_distances."""
    pass


class ContractViolationError(FastDistancesError, ValueError):
    """A metric was called with inputs that break its preconditions."""
    pass


class DimensionMismatchError(ContractViolationError):
    """Vector lengths or parameter shapes don't match."""
    pass


class UnknownMetricError(FastDistancesError, KeyError):
    """No metric registered under the requested name."""
    pass


class GradientNotAvailableError(FastDistancesError):
    """The metric has no analytic gradient."""
    pass


class ConfigurationError(FastDistancesError):
    """Invalid configuration value."""
    pass
