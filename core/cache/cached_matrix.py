# core/cache/cached_matrix.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import numpy as np
import scipy.sparse as sp


@dataclass(frozen=True)
class InverseEntry:
    matrix     : np.ndarray    # inverse (or solution) computed from the current data
    options_key: bytes         # fingerprint of the options it was computed with


@dataclass
class CacheStats:
    """Hit/miss counters maintained by ``cache_solve``; diagnostic only."""
    hits  : int = 0
    misses: int = 0

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0


def _own_copy(x: "np.ndarray|sp.spmatrix"):
    """
    Private, read-only copy of *x* so outside aliases cannot mutate it.

    Sparse input is stored as CSR with its data, indices and indptr frozen,
    so assigning to an existing entry raises. Inserting a new nonzero makes
    scipy allocate fresh arrays and is not caught.
    """
    if sp.issparse(x):
        csr = x.tocsr(copy=True)
        for arr in (csr.data, csr.indices, csr.indptr):
            arr.setflags(write=False)
        return csr
    arr = np.array(x, copy=True)
    arr.setflags(write=False)
    return arr


class CachedMatrix:
    """
    A matrix bundled with at most one cached inverse.

    Replacing the matrix through :meth:`set` always drops the cached inverse,
    whether or not the new value differs from the old one. The cached entry
    itself is only ever validated by ``cache_solve``.

    Not thread-safe: callers sharing an instance must serialise ``set`` and
    ``cache_solve`` themselves.
    """
    __slots__ = ("_matrix", "_inverse", "stats")

    def __init__(self, x: "np.ndarray|sp.spmatrix|None" = None):
        self._matrix = _own_copy(np.empty((0, 0)) if x is None else x)
        self._inverse: Optional[InverseEntry] = None
        self.stats = CacheStats()

    def get(self):
        return self._matrix

    def set(self, y) -> None:
        self._matrix = _own_copy(y)
        # underlying matrix changed
        self._inverse = None

    def get_inverse(self) -> Optional[InverseEntry]:
        return self._inverse

    def set_inverse(self, entry: InverseEntry) -> None:
        self._inverse = entry

    def __repr__(self):
        cached = "cached" if self._inverse is not None else "empty"
        return f"<CachedMatrix shape={self._matrix.shape}, inverse={cached}>"
