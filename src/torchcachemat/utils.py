"""Helpers for coercing inputs into owned 2-D tensors.

Matrices enter the library as tensors, numpy arrays or nested sequences.
Everything is funnelled through :func:`_as_matrix` so that validation
happens once, before any cached state is touched.
"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Production"

import logging
import numbers
import os
from typing import Any

import numpy as np
import torch

from .errors import InvalidInputError

logger = logging.getLogger(__name__)

DTYPE_ENV_VAR = "TORCHCACHEMAT_DTYPE"

_DTYPES = {
    "float32": torch.float32,
    "float64": torch.float64,
}


def _resolve_dtype(dtype: torch.dtype | str | None) -> torch.dtype:
    """Resolve the storage dtype.

    Args:
        dtype: Explicit dtype, its name, or None to read ``TORCHCACHEMAT_DTYPE``

    Returns:
        torch floating dtype (default: float64)
    """
    if isinstance(dtype, torch.dtype):
        if dtype not in _DTYPES.values():
            raise ValueError(f"Unsupported dtype: {dtype}")
        return dtype

    name = dtype if dtype is not None else os.getenv(DTYPE_ENV_VAR, "float64")
    try:
        return _DTYPES[name]
    except KeyError:
        raise ValueError(
            f"Unsupported dtype {name!r}; expected one of {sorted(_DTYPES)}"
        ) from None


def _as_matrix(
    value: Any, dtype: torch.dtype, device: torch.device | str = "cpu"
) -> torch.Tensor:
    """Validate ``value`` and return an owned 2-D tensor.

    Accepts:
    - torch.Tensor with a real numeric dtype
    - numpy.ndarray with a real numeric dtype
    - nested sequences of real numbers (must be rectangular)

    Args:
        value: Candidate matrix
        dtype: Target dtype
        device: Target device

    Returns:
        A new tensor of shape (rows, cols) that shares no memory with ``value``

    Raises:
        InvalidInputError: If ``value`` is not a well-formed 2-D numeric array
    """
    if torch.is_tensor(value):
        if value.is_complex() or value.dtype == torch.bool:
            raise InvalidInputError(f"Matrix must be real-valued, got {value.dtype}")
        tensor = value.detach()
    else:
        try:
            arr = np.asarray(value)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Not a matrix: {e}") from e
        # Kinds: signed int, unsigned int, float
        if arr.dtype.kind not in "iuf":
            raise InvalidInputError(
                f"Matrix must hold real numbers, got dtype {arr.dtype}"
            )
        tensor = torch.as_tensor(arr)

    if tensor.dim() != 2:
        raise InvalidInputError(
            f"Matrix must be two-dimensional, got shape {tuple(tensor.shape)}"
        )

    if (
        tensor.is_floating_point()
        and torch.finfo(tensor.dtype).bits > torch.finfo(dtype).bits
    ):
        logger.debug(
            f"Downcasting matrix from {tensor.dtype} to {dtype}; precision may be lost"
        )

    return tensor.to(device=device, dtype=dtype, copy=True)


def _as_scalar(val: Any) -> float:
    """Validate a single matrix element.

    Raises:
        InvalidInputError: If ``val`` is not a real number
    """
    if torch.is_tensor(val):
        if val.numel() != 1 or val.is_complex() or val.dtype == torch.bool:
            raise InvalidInputError(f"Element must be a real scalar, got {val!r}")
        return float(val.item())
    if isinstance(val, bool) or not isinstance(val, numbers.Real):
        raise InvalidInputError(f"Element must be a real number, got {val!r}")
    try:
        return float(val)
    except OverflowError as e:
        raise InvalidInputError(f"Element out of floating-point range: {e}") from e


def _identical(a: torch.Tensor, b: torch.Tensor) -> bool:
    """Element-wise identity with NaN equal to NaN in the same position."""
    if a.shape != b.shape:
        return False
    return bool(torch.isclose(a, b, rtol=0.0, atol=0.0, equal_nan=True).all())
