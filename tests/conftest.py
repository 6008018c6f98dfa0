"""Pytest configuration and fixtures for torchcachemat tests."""
import logging

import pytest
import torch

from torchcachemat import CacheableMatrix


@pytest.fixture
def matrix_a():
    """The 3x3 invertible matrix used throughout the walkthrough."""
    return torch.tensor(
        [[11.0, 14.0, 17.0], [67.0, 45.0, 18.0], [13.0, 16.0, 19.0]],
        dtype=torch.float64,
    )


@pytest.fixture
def cached_a(matrix_a):
    """A CacheableMatrix wrapping matrix_a with an empty cache slot."""
    return CacheableMatrix(matrix_a)


@pytest.fixture
def solve_log(caplog):
    """Capture hit/miss records emitted by cache_solve."""
    caplog.set_level(logging.INFO, logger="torchcachemat")

    def events():
        return [
            r.getMessage().split(":")[0]
            for r in caplog.records
            if r.name == "torchcachemat.solve"
        ]

    return events


@pytest.fixture
def assert_inverse():
    """Check that ``a @ inv`` approximates the identity."""

    def check(a, inv, atol=1e-8):
        eye = torch.eye(a.shape[0], dtype=a.dtype)
        assert torch.allclose(a @ inv, eye, atol=atol)

    return check
