# core/cache/solve.py
"""
Memoised matrix inversion.

``cache_solve`` returns the inverse held by a :class:`CachedMatrix` when it
was computed with the same options as the current call, and otherwise runs the
solver and stores the fresh result together with the options' fingerprint.
"""
from typing import Any, Callable

import numpy as np

from core.cache.cached_matrix import CachedMatrix, InverseEntry
from core.cache.fingerprint import options_fingerprint
from utils.logging_config import get_logger
from utils.matrix import solve_inverse

logger = get_logger(__name__)

Solver = Callable[..., np.ndarray]

def cache_solve(cached: CachedMatrix, *, solver: Solver = solve_inverse, **options: Any) -> np.ndarray:
    """
    Return the inverse of ``cached.get()``, reusing the cached one when possible.

    Args:
        cached: Container holding the matrix and its cached inverse.
        solver: Called as ``solver(matrix, **options)`` on a cache miss.
        **options: Passed to ``solver`` and fingerprinted (all of them).

    Returns:
        The inverse matrix (or solution, if the solver was given ``b``).

    Raises:
        InvalidOptionsError: The options cannot be fingerprinted.
        Any exception raised by ``solver``; the cache is left as it was.
    """
    curr_key = options_fingerprint(options)

    entry = cached.get_inverse()
    if entry is not None:
        if entry.options_key == curr_key:
            cached.stats.hits += 1
            logger.info("cache_solve: returning cached inverse matrix")
            return entry.matrix
        logger.debug("cache_solve: solve options changed, discarding cached inverse")

    result = solver(cached.get(), **options)
    if isinstance(result, np.ndarray):
        # frozen private copy; the solver keeps ownership of its own array
        result = np.array(result, copy=True)
        result.setflags(write=False)

    cached.set_inverse(InverseEntry(matrix=result, options_key=curr_key))
    cached.stats.misses += 1
    logger.debug("cache_solve: stored inverse of %s matrix", cached.get().shape)
    return result
