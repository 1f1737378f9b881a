"""
Z-basis measurement on a stabilizer tableau.

If some stabilizer has an X or Y on the measured qubit the outcome is random
and the state collapses; otherwise the outcome is already fixed and is
recovered from the destabilizers without touching the tableau.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

import numpy as np

from .pauli import row_mult
from .utils.logging import get_logger

if TYPE_CHECKING:
    from .tableau import Tableau

logger = get_logger(__name__)


@dataclass(frozen=True)
class MeasureResult:
    """Outcome of one qubit measurement."""
    value: bool
    determined: bool

    def __bool__(self) -> bool:
        return self.value

    def __int__(self) -> int:
        return int(self.value)

    def __str__(self) -> str:
        return f"{int(self.value)} ({'determined' if self.determined else 'random'})"


def coerce_rng(rng=None, seed=None) -> np.random.Generator:
    """
    Return a numpy Generator:
    - if rng is provided, use it;
    - else create a local Generator from seed (unseeded if seed is None).
    """
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


def measure(tableau: Tableau, qubit: int, rng=None, bias: float = 0.5, *, seed=None) -> MeasureResult:
    """
    Measure *qubit* in the Z basis.

    Parameters
    ----------
    tableau : Tableau
        Mutated in place when the outcome is random.
    qubit : int
        Qubit index in ``[0, n)``.
    rng : numpy.random.Generator, optional
        Source of the random outcome. If omitted, a local Generator is built
        from *seed* for this call only.
    bias : float
        Probability of reading 1 when the outcome is random. Must lie in
        [0, 1]; this is not checked.

    Returns
    -------
    MeasureResult
    """
    qubit = tableau.check_qubit(qubit)
    n = tableau.n

    # The first stabilizer with x=1 is the pivot; the choice fixes the row
    # layout afterwards, so it must stay "first" for reproducible replays.
    candidates = np.flatnonzero(tableau.x.column_bits(qubit)[n:])
    if candidates.size:
        return _measure_random(tableau, qubit, int(candidates[0]), coerce_rng(rng, seed), bias)
    return _measure_determined(tableau, qubit)


def measure_all(tableau: Tableau, rng=None, bias: float = 0.5, *, seed=None) -> List[MeasureResult]:
    """Measure every qubit in ascending order, sharing one Generator."""
    rng = coerce_rng(rng, seed)
    return [measure(tableau, q, rng, bias) for q in range(tableau.n)]


def _measure_random(tableau: Tableau, qubit: int, p: int, rng: np.random.Generator,
                    bias: float) -> MeasureResult:
    n = tableau.n
    x, z, r = tableau.x, tableau.z, tableau.r
    stab = n + p

    # Old stabilizer becomes the destabilizer paired with the new one.
    x.copy_row(p, stab)
    z.copy_row(p, stab)
    r[p] = r[stab]

    x.zero_row(stab)
    z.zero_row(stab)
    z.set(stab, qubit, True)
    value = bool(rng.random() < bias)
    r[stab] = value

    px, pz, pr = x.row(p), z.row(p), r[p]
    rows = np.flatnonzero(x.column_bits(qubit))
    for i in rows:
        i = int(i)
        if i == p or i == stab:
            continue
        xi, zi = x.row(i), z.row(i)
        r[i] = row_mult(xi, zi, r[i], px, pz, pr)
        x.set_row(i, xi)
        z.set_row(i, zi)

    logger.debug(f"qubit {qubit}: random outcome {int(value)}, pivot row {stab}, "
                 f"{rows.size - 1} rows updated")
    return MeasureResult(value, determined=False)


def _measure_determined(tableau: Tableau, qubit: int) -> MeasureResult:
    n = tableau.n
    x, z, r = tableau.x, tableau.z, tableau.r

    scratch = tableau._scratch
    scratch[:] = False
    tx, tz = scratch[:n], scratch[n:]
    sign = False
    for i in np.flatnonzero(x.column_bits(qubit)[:n]):
        stab = n + int(i)
        sign = row_mult(tx, tz, sign, x.row(stab), z.row(stab), r[stab])
    tableau._scratch_sign[0] = sign

    logger.debug(f"qubit {qubit}: determined outcome {int(sign)}")
    return MeasureResult(bool(tableau._scratch_sign[0]), determined=True)
