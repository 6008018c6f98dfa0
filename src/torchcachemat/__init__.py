"""torchcachemat: Tensor matrices that memoize their own inverse.

A :class:`CacheableMatrix` owns a 2-D tensor plus a cache slot for its
inverse. :func:`cache_solve` consults the slot first and only inverts on a
miss. Any mutation that changes the matrix empties the slot.

Basic usage:
    >>> from torchcachemat import CacheableMatrix, cache_solve
    >>>
    >>> m = CacheableMatrix([[11, 14, 17], [67, 45, 18], [13, 16, 19]])
    >>> inv = cache_solve(m)        # cache-miss: computes and stores
    >>> inv is cache_solve(m)       # cache-hit: same object
    True
    >>> m.set_element(0, 0, 190)    # clears the cached inverse
    190
    >>> m.get_inverse() is None
    True
"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"
__version__ = "0.1.0"

from .errors import (
    CacheMatrixError,
    IndexOutOfRangeError,
    InvalidInputError,
    NotSquareError,
    SingularMatrixError,
)
from .matrix import CacheableMatrix
from .solve import cache_solve

__all__ = [
    "CacheMatrixError",
    "CacheableMatrix",
    "IndexOutOfRangeError",
    "InvalidInputError",
    "NotSquareError",
    "SingularMatrixError",
    "cache_solve",
    "__version__",
]
