"""
Exceptions raised by screw_algebra.

The default algebra never raises on a domain singularity; non-finite values
propagate instead. These exceptions are raised only by the opt-in checked
variants, by role conversions, and by configuration errors.
"""


class AlgebraError(Exception):
    """Base class for all screw_algebra errors."""


class SingularityError(AlgebraError, ValueError):
    """An operation was evaluated at a domain singularity.

    Raised for zero-length rotation axes, zero-norm normalisation, and
    logarithms on a branch cut.
    """

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation}: {reason}")


class PreconditionError(AlgebraError, ValueError):
    """An operand does not play the role the operation requires."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation}: {reason}")


class RoleError(AlgebraError, TypeError):
    """A raw dual quaternion could not be converted to a geometric role."""
