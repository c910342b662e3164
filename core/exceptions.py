# core/exceptions.py

class CacheSolveError(Exception):
    """Base exception for cachesolve errors."""
    pass

class ComputeError(CacheSolveError):
    """Raised when the wrapped matrix computation fails."""
    pass

class SingularMatrixError(ComputeError):
    """Raised when a matrix is singular to working precision."""
    pass

class NonSquareMatrixError(ComputeError):
    """Raised when an inverse is requested for a non-square matrix."""
    pass

class InvalidOptionsError(ComputeError):
    """Raised when solve options are not accepted or cannot be fingerprinted."""
    pass

class ConfigError(CacheSolveError):
    """Raised when a configuration file is missing or invalid."""
    pass
