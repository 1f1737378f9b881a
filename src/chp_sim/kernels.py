from __future__ import annotations
from typing import Sequence

import numpy as np
from numba import njit

from .errors import InvalidArgumentError


GATE_H = 0
GATE_S = 1
GATE_CNOT = 2

NAME_TO_ID = {
    "H": GATE_H,
    "S": GATE_S,
    "CNOT": GATE_CNOT,
    "CX": GATE_CNOT,
}

ID_TO_NAME = {GATE_H: "H", GATE_S: "S", GATE_CNOT: "CNOT"}

_ARITY = {GATE_H: 1, GATE_S: 1, GATE_CNOT: 2}


def pack_circuit(ops: Sequence[Sequence], n: int) -> np.ndarray:
    """
    Pack gate tuples into an int64 array G of shape (L, 3):
    G[k] = [gate_id, q1, q2], with q2 = -1 for single-qubit gates.

    Every entry is validated against *n* before anything is returned, so a
    bad circuit never reaches a tableau half-applied.
    """
    packed_ops = []
    for k, op in enumerate(ops):
        if isinstance(op, str) or len(op) == 0:
            raise InvalidArgumentError(f"Operation {k} must be a (name, *qubits) tuple, got {op!r}")
        name, *qubits = op
        gid = NAME_TO_ID.get(str(name).upper(), -1)
        if gid < 0:
            raise InvalidArgumentError(f"Operation {k}: unknown gate {name!r}")
        if len(qubits) != _ARITY[gid]:
            raise InvalidArgumentError(
                f"Operation {k}: {name} takes {_ARITY[gid]} qubit(s), got {len(qubits)}"
            )
        for q in qubits:
            if isinstance(q, bool) or not isinstance(q, (int, np.integer)):
                raise TypeError(f"Operation {k}: qubit index must be int, got {type(q).__name__}")
            if not (0 <= q < n):
                raise InvalidArgumentError(f"Operation {k}: qubit index {q} is out of bounds for n={n}.")
        if gid == GATE_CNOT and qubits[0] == qubits[1]:
            raise InvalidArgumentError(f"Operation {k}: CNOT control and target must differ")
        q2 = int(qubits[1]) if len(qubits) > 1 else -1
        packed_ops.append([gid, int(qubits[0]), q2])

    if not packed_ops:
        return np.empty((0, 3), dtype=np.int64)

    return np.array(packed_ops, dtype=np.int64)


@njit(cache=True)
def nb_apply_gate(x, z, r, gid, q1, q2):
    """
    Apply a single packed gate in-place to dense bool arrays (x, z, r).
    """
    rows = x.shape[0]

    if gid == GATE_H:
        for i in range(rows):
            xi = x[i, q1]
            zi = z[i, q1]
            if xi and zi:
                r[i] = not r[i]
            x[i, q1] = zi
            z[i, q1] = xi

    elif gid == GATE_S:
        for i in range(rows):
            xi = x[i, q1]
            zi = z[i, q1]
            if xi and zi:
                r[i] = not r[i]
            z[i, q1] = zi != xi

    elif gid == GATE_CNOT:
        for i in range(rows):
            xc = x[i, q1]
            zc = z[i, q1]
            xt = x[i, q2]
            zt = z[i, q2]
            # x_t ^ z_c ^ 1 is set exactly when x_t == z_c
            if xc and zt and xt == zc:
                r[i] = not r[i]
            x[i, q2] = xt != xc
            z[i, q1] = zc != zt


@njit(cache=True)
def nb_apply_circuit(x, z, r, G):
    """
    Fast path: apply all gates in G in order.
    """
    L = G.shape[0]
    for k in range(L):
        nb_apply_gate(x, z, r, G[k, 0], G[k, 1], G[k, 2])
