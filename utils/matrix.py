# utils/matrix.py
import numbers
from typing import Optional
import numpy as np
import scipy.sparse as sp
from core.exceptions import ComputeError, InvalidOptionsError, NonSquareMatrixError, SingularMatrixError
from utils.linops import LinearOperator

_METHODS = {"lu": False, "cholesky": True}   # method -> assume_posdef

def reciprocal_condition(A: "np.ndarray|sp.spmatrix") -> float:
    """1-norm reciprocal condition estimate; 0.0 for an exactly singular matrix."""
    if A.shape[0] == 0:
        return 1.0
    try:
        return LinearOperator(A).rcond()
    except (np.linalg.LinAlgError, RuntimeError):
        return 0.0

def _check_tol(tol) -> float:
    if tol is None:
        return float(np.finfo(float).eps)
    if isinstance(tol, bool) or not isinstance(tol, numbers.Real) or not np.isfinite(tol) or tol < 0:
        raise InvalidOptionsError(f"tol must be a finite non-negative real number, got {tol!r}")
    return float(tol)

def solve_inverse(A: "np.ndarray|sp.spmatrix",
                  tol: Optional[float] = None,
                  method: str = "lu",
                  b: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Invert ``A``, or solve ``A x = b`` when a right-hand side is given.

    The matrix is factorised once; the reciprocal condition number is
    estimated from that factorisation and the same factors do the solve.

    Args:
        A: Square dense or sparse matrix.
        tol: Reject ``A`` when its reciprocal condition number is below this
            value. Defaults to machine epsilon; 0 keeps only the exact check.
        method: "lu" for a general LU factorisation, "cholesky" for
            Hermitian positive definite matrices.
        b: Optional right-hand side vector or matrix.

    Returns:
        The inverse of ``A`` (or the solution ``x``) as a dense array.

    Raises:
        NonSquareMatrixError: ``A`` is not a 2-D square matrix.
        SingularMatrixError: ``A`` is (computationally) singular.
        InvalidOptionsError: ``tol``, ``method`` or ``b`` is not usable.
    """
    if not isinstance(method, str) or method not in _METHODS:
        raise InvalidOptionsError(f"Unknown solve method {method!r}; expected one of {sorted(_METHODS)}")
    tol = _check_tol(tol)

    sparse = sp.issparse(A)
    M = A if sparse else np.asarray(A)
    if len(M.shape) != 2 or M.shape[0] != M.shape[1]:
        raise NonSquareMatrixError(f"Matrix must be square, got shape {M.shape}")
    N = M.shape[0]

    if b is None:
        rhs = np.eye(N, dtype=np.result_type(M.dtype, float))
    else:
        rhs = np.asarray(b)
        if rhs.ndim not in (1, 2) or rhs.shape[0] != N:
            raise InvalidOptionsError(f"Right-hand side of shape {rhs.shape} does not match a {N}x{N} matrix")
    if N == 0:
        return rhs.copy()

    if not np.all(np.isfinite(M.data if sparse else M)):
        raise ComputeError("Matrix contains non-finite values")

    try:
        solver = LinearOperator(M, assume_posdef=_METHODS[method])
    except (np.linalg.LinAlgError, RuntimeError) as exc:   # splu reports singular factors as RuntimeError
        if method == "cholesky":
            raise ComputeError(f"Cholesky factorisation failed, matrix is not positive definite: {exc}") from exc
        raise SingularMatrixError(f"LU factorisation failed: {exc}") from exc

    rcond = solver.rcond()
    if not rcond > 0.0 or rcond < tol:
        raise SingularMatrixError(
            f"system is computationally singular: reciprocal condition number = {rcond:.6g}")
    return np.asarray(solver.solve(rhs))
