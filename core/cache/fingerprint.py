# core/cache/fingerprint.py
from __future__ import annotations
import hashlib
import io
import pickle
from typing import Any, Mapping

import numpy as np

from core.exceptions import InvalidOptionsError

def _canonical(value: Any) -> Any:
    """Reduce *value* to plain, order-stable Python objects for pickling."""
    if isinstance(value, np.ndarray):
        if value.dtype.hasobject:
            # raw bytes would be object pointers
            return ("ndarray", "O", value.shape, tuple(_canonical(v) for v in value.ravel().tolist()))
        return ("ndarray", value.dtype.str, value.shape, np.ascontiguousarray(value).tobytes())
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, Mapping):
        # keys may be of mixed types, so sort on their repr as a tiebreak
        items = [(_canonical(k), _canonical(v)) for k, v in value.items()]
        return ("mapping", tuple(sorted(items, key=lambda kv: (type(kv[0]).__name__, repr(kv[0])))))
    if isinstance(value, (list, tuple)):
        return (type(value).__name__, tuple(_canonical(v) for v in value))
    if isinstance(value, (set, frozenset)):
        return ("set", tuple(sorted((_canonical(v) for v in value), key=repr)))
    return value

def options_fingerprint(options: Mapping[str, Any]) -> bytes:
    """
    Return a 16-byte digest of a set of solve options.

    Keyword order is irrelevant; values, sequence order, array shapes and
    dtypes all contribute. Every option is hashed, whether or not the solver
    actually uses it.
    """
    buf = io.BytesIO()
    pickler = pickle.Pickler(buf, protocol=4)
    pickler.fast = True     # memo off, so equal values pickle identically
    try:
        pickler.dump(_canonical(options))
    except (pickle.PicklingError, TypeError, AttributeError) as exc:
        raise InvalidOptionsError(f"Solve options cannot be fingerprinted: {exc}") from exc
    return hashlib.blake2b(buf.getvalue(), digest_size=16).digest()
