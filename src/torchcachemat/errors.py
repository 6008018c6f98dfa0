"""Exception types raised by torchcachemat.

Each error also derives from the builtin a caller would naturally catch,
so ``except ValueError`` keeps working for validation failures.
"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"


class CacheMatrixError(Exception):
    """Base class for all torchcachemat errors."""


class InvalidInputError(CacheMatrixError, ValueError):
    """Argument is not a well-formed two-dimensional numeric matrix."""


class IndexOutOfRangeError(CacheMatrixError, IndexError):
    """Element coordinates fall outside the current matrix bounds."""


class NotSquareError(CacheMatrixError, ValueError):
    """Matrix cannot be inverted because it is not square."""


class SingularMatrixError(CacheMatrixError, ArithmeticError):
    """Matrix cannot be inverted because it is singular."""
