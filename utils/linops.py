# utils/linops.py
from __future__ import annotations
import warnings
import numpy as np
import scipy.linalg as la
import scipy.sparse as sp
import scipy.sparse.linalg as sla


def _superlu_rcond(fac, anorm: float, shape, dtype) -> float:
    """1-norm rcond of a SuperLU factor via Higham's estimate of ||A^-1||_1."""
    trans = "H" if np.issubdtype(dtype, np.complexfloating) else "T"
    inv = sla.LinearOperator(shape, dtype=dtype,
                             matvec=fac.solve,
                             rmatvec=lambda x: fac.solve(x, trans=trans))
    inv_norm = sla.onenormest(inv)
    if anorm == 0 or inv_norm == 0 or not np.isfinite(inv_norm):
        return 0.0
    return float(1.0 / (anorm * inv_norm))


class LinearOperator:
    """
    Factorise ``A`` once (dense LU/Cholesky or sparse SuperLU) and expose
    ``.solve(b)`` plus a LAPACK-style reciprocal condition estimate.

    A factorisation that hits an exact zero pivot does not raise here;
    ``rcond()`` then reports 0.0.
    """
    __slots__ = ("_solve", "_rcond")

    def __init__(self, A: "sp.spmatrix|np.ndarray", assume_posdef=False):
        if sp.issparse(A):
            if assume_posdef:
                A = A.toarray()                            # no sparse Cholesky in scipy
            else:
                A = A.tocsc()
                anorm = float(sla.norm(A, 1))
                fac = sla.splu(A)
                self._solve = fac.solve                    # SuperLU solve
                self._rcond = lambda: _superlu_rcond(fac, anorm, A.shape, fac.U.dtype)
                return

        anorm = float(np.linalg.norm(A, 1))
        if assume_posdef:
            c, lower = la.cho_factor(A, lower=True)        # dense Cholesky
            pocon, = la.get_lapack_funcs(("pocon",), (c,))
            self._solve = lambda b: la.cho_solve((c, lower), b)
            self._rcond = lambda: float(pocon(c, anorm, uplo="L")[0])
        else:
            with warnings.catch_warnings():
                # singular pivots surface through rcond() instead
                warnings.simplefilter("ignore", la.LinAlgWarning)
                lu, piv = la.lu_factor(A)                  # dense LU
            gecon, = la.get_lapack_funcs(("gecon",), (lu,))
            self._solve = lambda b: la.lu_solve((lu, piv), b)
            self._rcond = lambda: float(gecon(lu, anorm, norm="1")[0])

    def __call__(self, rhs):
        return self._solve(rhs)

    def solve(self, rhs: "np.ndarray") -> "np.ndarray":
        return self._solve(rhs)

    def rcond(self) -> float:
        """Estimated 1-norm reciprocal condition number of the factorised matrix."""
        return self._rcond()
