"""
Error types raised by permu-eda.

Every error derives from PermutationError, itself a ValueError, so callers
can catch the whole family or a single failure mode.
"""


class PermutationError(ValueError):
    """Base class for all permu-eda errors."""


class LengthMismatchError(PermutationError):
    """A container's length disagrees with the length implied by another argument."""


class InvalidPermutationError(PermutationError):
    """A sequence is not a bijection on [0, n): duplicate or out-of-range value."""


class InvalidInversionVectorError(PermutationError):
    """A vector component lies outside its position's value domain."""


class PopulationKindError(PermutationError):
    """A population holds a different kind of individual than the operation expects."""


class DegenerateDistributionError(PermutationError):
    """
    A distribution row has zero total sampling weight.

    Unreachable once the model has been softened; it signals an earlier
    consistency violation and must not be retried.
    """
