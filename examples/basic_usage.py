"""Basic usage example for torchcachemat.

Walks through the cache lifecycle: compute on first solve, reuse on the
second, recompute after a mutation, and handle a resize.
"""

import logging

import torch

from torchcachemat import CacheableMatrix, cache_solve

logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s: %(message)s")

# 1. Wrap a matrix
a = torch.tensor([[11.0, 14.0, 17.0], [67.0, 45.0, 18.0], [13.0, 16.0, 19.0]])
mat = CacheableMatrix(a)
print(mat.get_matrix())

# 2. First solve computes, second reads the cache
print(cache_solve(mat))
print(mat.get_inverse())
print(cache_solve(mat))

# 3. Changing an element clears the cached inverse
print(mat.set_element(0, 0, 190))
print(mat.get_inverse())  # None
print(cache_solve(mat))

# 4. Replace with a differently shaped matrix
print(mat.set_matrix([[2, 3], [5, 9]]))
print(cache_solve(mat))
print(cache_solve(mat))

# 5. Setting the same matrix again keeps the cache (logs a warning)
mat.set_matrix([[2, 3], [5, 9]])
print(mat.get_stats())
