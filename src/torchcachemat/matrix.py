"""Matrix container that memoizes its own inverse.

The container owns a 2-D tensor and an optional cached inverse. Every
mutation that changes the matrix content empties the cache slot in the
same call, so a stored inverse always belongs to the current matrix.
"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"

import logging
import math
import operator
from typing import Any

import torch

from .errors import IndexOutOfRangeError
from .utils import _as_matrix, _as_scalar, _identical, _resolve_dtype

logger = logging.getLogger(__name__)


class CacheableMatrix:
    """A matrix that can cache its inverse.

    The cache slot is either empty or holds the inverse of the current
    matrix. Mutations clear it:
    - ``set_matrix`` with a matrix that differs from the current one
    - ``set_element`` with a value that differs from the stored element

    Inversion itself lives in :func:`torchcachemat.cache_solve`; this class
    never computes an inverse.

    Instances are not thread-safe. Callers sharing one instance across
    threads must serialize access themselves.

    Args:
        value: Initial matrix (tensor, ndarray or nested sequence).
            Defaults to an empty 0x0 matrix.
        dtype: Storage dtype (default: ``TORCHCACHEMAT_DTYPE`` env var,
            falling back to float64)
        device: Storage device (default: "cpu")

    Example:
        >>> m = CacheableMatrix([[2.0, 3.0], [5.0, 9.0]])
        >>> inv = cache_solve(m)  # computed
        >>> inv = cache_solve(m)  # from cache
        >>> m.set_element(0, 0, 4.0)
        4.0
        >>> m.has_inverse
        False
    """

    def __init__(
        self,
        value: Any = None,
        *,
        dtype: torch.dtype | str | None = None,
        device: torch.device | str = "cpu",
    ):
        self.dtype = _resolve_dtype(dtype)
        self.device = torch.device(device)

        if value is None:
            value = torch.empty((0, 0))
        self._value: torch.Tensor = _as_matrix(value, self.dtype, self.device)
        self._inverse: Any | None = None
        self._invalidations = 0

        logger.info(
            f"Created CacheableMatrix (shape: {tuple(self._value.shape)}, "
            f"dtype: {self.dtype}, device: {self.device})"
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(shape={tuple(self._value.shape)}, "
            f"cached={self.has_inverse})"
        )

    @property
    def shape(self) -> tuple[int, int]:
        return tuple(self._value.shape)

    @property
    def has_inverse(self) -> bool:
        """Whether the cache slot currently holds an inverse."""
        return self._inverse is not None

    def get_matrix(self) -> torch.Tensor:
        """Return a copy of the current matrix."""
        return self._value.clone()

    def set_matrix(self, new_value: Any) -> torch.Tensor:
        """Replace the whole matrix.

        If ``new_value`` is element-wise identical to the current matrix the
        call is a no-op: the cached inverse is kept and a warning is logged.

        Args:
            new_value: Replacement matrix, any shape

        Returns:
            Copy of the matrix now held

        Raises:
            InvalidInputError: If ``new_value`` is not a 2-D numeric matrix
        """
        candidate = _as_matrix(new_value, self.dtype, self.device)

        if _identical(candidate, self._value):
            logger.warning("Identical with previous matrix; keeping cached inverse")
            return self.get_matrix()

        self._value = candidate
        self._invalidate("set_matrix")
        return self.get_matrix()

    def set_element(self, row: int, col: int, val: Any) -> Any:
        """Set a single element in place.

        The cache is cleared only when the stored element changes. A NaN
        element counts as unset and is always overwritten.

        Args:
            row: Row index (negative indices count from the end)
            col: Column index (negative indices count from the end)
            val: New element value

        Returns:
            ``val``, unchanged

        Raises:
            IndexOutOfRangeError: If ``(row, col)`` is outside the matrix
            InvalidInputError: If ``val`` is not a real number
        """
        n_rows, n_cols = self._value.shape
        try:
            row, col = operator.index(row), operator.index(col)
        except TypeError:
            raise IndexOutOfRangeError(
                f"Indices must be integers, got ({row!r}, {col!r})"
            ) from None
        if not (-n_rows <= row < n_rows and -n_cols <= col < n_cols):
            raise IndexOutOfRangeError(
                f"Index ({row}, {col}) out of range for matrix of shape "
                f"({n_rows}, {n_cols})"
            )
        # Compare in storage precision so a repeated write is not seen as a change
        new = torch.tensor(_as_scalar(val), dtype=self.dtype).item()

        current = self._value[row, col].item()
        if math.isnan(current) or current != new:
            self._value[row, col] = new
            self._invalidate("set_element")

        return val

    def get_inverse(self) -> Any | None:
        """Return the cached inverse, or None if the slot is empty."""
        return self._inverse

    def set_inverse(self, inv: Any | None) -> None:
        """Store ``inv`` as the cached inverse without validating it.

        Passing None empties the slot.
        """
        self._inverse = inv

    def _invalidate(self, reason: str) -> None:
        if self._inverse is not None:
            self._invalidations += 1
            logger.debug(f"Cached inverse invalidated by {reason}")
        self._inverse = None

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dict with cache stats
        """
        return {
            "shape": self.shape,
            "cached": self.has_inverse,
            "invalidations": self._invalidations,
            "dtype": str(self.dtype),
            "device": str(self.device),
        }
