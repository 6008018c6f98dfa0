"""Read-through inversion for :class:`CacheableMatrix`."""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"

import logging

import torch

from .errors import NotSquareError, SingularMatrixError
from .matrix import CacheableMatrix

logger = logging.getLogger(__name__)


def cache_solve(m: CacheableMatrix) -> torch.Tensor:
    """Return the inverse of ``m``, computing it only on a cache miss.

    On a hit the stored object itself is returned. On a miss the inverse
    is computed from the current matrix, stored via ``m.set_inverse`` and
    returned.

    Args:
        m: Matrix whose inverse is wanted

    Returns:
        Inverse of ``m.get_matrix()``

    Raises:
        NotSquareError: If the matrix is not square
        SingularMatrixError: If the matrix is not invertible
    """
    inverse = m.get_inverse()
    if inverse is not None:
        logger.info("cache-hit: Retrieving the inverse from the cache...")
        return inverse

    logger.info("cache-miss: Calculating inverse of the matrix...")
    inverse = _invert(m.get_matrix())
    m.set_inverse(inverse)
    return inverse


def _invert(a: torch.Tensor) -> torch.Tensor:
    rows, cols = a.shape
    if rows != cols:
        raise NotSquareError(f"Cannot invert non-square matrix of shape ({rows}, {cols})")

    inverse, info = torch.linalg.inv_ex(a)
    if info.item() != 0 or not torch.isfinite(inverse).all():
        raise SingularMatrixError(f"Matrix of shape ({rows}, {cols}) is singular")
    if a.numel() == 0:
        return inverse

    # Reciprocal 1-norm condition number, from the inverse already computed
    rcond = 1.0 / (
        torch.linalg.matrix_norm(a, ord=1) * torch.linalg.matrix_norm(inverse, ord=1)
    ).item()
    if rcond < torch.finfo(a.dtype).eps:
        raise SingularMatrixError(
            f"Matrix of shape ({rows}, {cols}) is computationally singular "
            f"(reciprocal condition number {rcond:.3g})"
        )
    return inverse
