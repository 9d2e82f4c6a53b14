"""Exception classes raised by pyCorrInt.

Configuration and length errors are fatal and raised before any distance
is computed. InsufficientNeighbors is raised per anchor and recovered by
the estimation classes, which skip the anchor and report an aggregate
diagnostic. ScalingSearchDidNotConverge is a warning category, not an
exception.
"""


class CorrIntError(Exception):
    """Base class for all pyCorrInt errors."""


class InvalidConfiguration(CorrIntError, ValueError):
    """Unknown mode, non-positive dimension or step, or a parameter
    required by the selected mode is missing."""


class InsufficientLength(CorrIntError, ValueError):
    """Series is too short for the requested embedding geometry."""

    def __init__(self, length: int, windowLength: int):
        self.length = length
        self.windowLength = windowLength
        super().__init__(
            f'Series of length {length} is too short for an embedding '
            f'window of {windowLength} samples.'
        )


class InsufficientNeighbors(CorrIntError, RuntimeError):
    """A query point has fewer eligible neighbors than required."""

    def __init__(self, anchor: int, available: int, required: int):
        self.anchor = anchor
        self.available = available
        self.required = required
        super().__init__(
            f'Anchor {anchor}: {available} eligible neighbors, '
            f'{required} required.'
        )


class NoZeroCrossing(CorrIntError, RuntimeError):
    """Autocorrelation never crossed zero. Supply an explicit timeLag."""


class AnalysisCancelled(CorrIntError, RuntimeError):
    """The run was cancelled through its CancellationToken."""


class ScalingSearchDidNotConverge(UserWarning):
    """Scaling region bisection exhausted its budget or could not reach
    the target ratio. The nearest r2 found is used."""
