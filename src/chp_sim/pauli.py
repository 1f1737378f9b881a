"""
Pauli-string row algebra.

A single-qubit Pauli is encoded as an (x, z) bit pair::

    (0, 0) -> I    (1, 0) -> X    (1, 1) -> Y    (0, 1) -> Z

A row is a pair of equal-length bit vectors plus a sign bit; the operator it
stands for is ``(-1)^sign * P_0 ⊗ P_1 ⊗ ...``.
"""

from __future__ import annotations

import numpy as np

from .errors import InternalConsistencyError

# Indexed by code = x | (z << 1), i.e. I=0, X=1, Z=2, Y=3.
# Entry [a, b] is the power of i picked up by P_a * P_b:
# +1 going forward around X -> Y -> Z -> X, -1 going backward.
_PHASE_TABLE = np.array(
    [
        [0, 0, 0, 0],
        [0, 0, -1, 1],
        [0, 1, 0, -1],
        [0, -1, 1, 0],
    ],
    dtype=np.int64,
)

PAULI_CHARS = (".", "X", "Z", "Y")


def _codes(x: np.ndarray, z: np.ndarray) -> np.ndarray:
    return np.asarray(x, dtype=np.int64) | (np.asarray(z, dtype=np.int64) << 1)


def pauli_product_phase(x1: bool, z1: bool, x2: bool, z2: bool) -> int:
    """
    Exponent of ``i`` produced by multiplying two single-qubit Paulis.

    >>> pauli_product_phase(True, False, True, True)   # X * Y = iZ
    1
    """
    return int(_PHASE_TABLE[int(x1) | (int(z1) << 1), int(x2) | (int(z2) << 1)])


def row_product_sign(x1, z1, r1: bool, x2, z2, r2: bool) -> bool:
    """
    Sign bit of the product of row 1 and row 2 (row 1 on the left).

    Raises
    ------
    InternalConsistencyError
        If the summed phase is odd, which means the two rows anticommute and
        the tableau has lost its symplectic structure.
    """
    total = int(_PHASE_TABLE[_codes(x1, z1), _codes(x2, z2)].sum())
    if total & 1:
        raise InternalConsistencyError(
            f"Row product has odd phase sum {total}; the rows anticommute"
        )
    return bool(r1) ^ bool(r2) ^ bool((total >> 1) & 1)


def row_mult(x1: np.ndarray, z1: np.ndarray, r1: bool,
             x2: np.ndarray, z2: np.ndarray, r2: bool) -> bool:
    """
    Multiply row 1 by row 2 in place: ``row1 := row1 * row2``.

    ``x1`` and ``z1`` are updated in place; the new sign bit is returned,
    since a lone bit cannot be updated through a numpy view.
    """
    sign = row_product_sign(x1, z1, r1, x2, z2, r2)
    x1 ^= x2
    z1 ^= z2
    return sign


def pauli_string(x: np.ndarray, z: np.ndarray, sign: bool) -> str:
    """Render a signed row as ``+`` / ``-`` followed by ``.XYZ`` characters."""
    return ("-" if sign else "+") + "".join(PAULI_CHARS[c] for c in _codes(x, z))


def commutes(x1, z1, x2, z2) -> bool:
    """True if the two Pauli strings commute (symplectic product is zero)."""
    x1, z1 = np.asarray(x1, dtype=np.bool_), np.asarray(z1, dtype=np.bool_)
    x2, z2 = np.asarray(x2, dtype=np.bool_), np.asarray(z2, dtype=np.bool_)
    return not (np.count_nonzero((x1 & z2) ^ (z1 & x2)) & 1)
