"""
Clifford gate engine.

Each gate conjugates every tableau row in one pass over the affected columns.
The updates are written with numpy bitwise operators on *native* columns, so
the same code drives dense bool arrays and packed uint8 words alike.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .errors import InvalidArgumentError

if TYPE_CHECKING:
    from .tableau import Tableau


def cnot(tableau: Tableau, control: int, target: int) -> None:
    """
    CNOT with *control* and *target*.

    Update rules (every row i)
    --------------------------
        r_i   ^=  x_ic & z_it & (x_it ^ z_ic ^ 1)
        x_it  ^=  x_ic
        z_ic  ^=  z_it
    """
    control = tableau.check_qubit(control)
    target = tableau.check_qubit(target)
    if control == target:
        raise InvalidArgumentError(f"CNOT control and target must differ, both are {control}")

    x, z, r = tableau.x, tableau.z, tableau.r
    xc, xt = x.column(control), x.column(target)
    zc, zt = z.column(control), z.column(target)

    # xc is zero in any padding bits, so ~ cannot leak into r
    r.data ^= xc & zt & ~(xt ^ zc)
    x.set_column(target, xt ^ xc)
    z.set_column(control, zc ^ zt)


def hadamard(tableau: Tableau, qubit: int) -> None:
    """
    Hadamard on *qubit*: swaps X and Z, flipping the sign of Y.

        r_i  ^=  x_iq & z_iq
        x_iq <-> z_iq
    """
    qubit = tableau.check_qubit(qubit)

    x, z, r = tableau.x, tableau.z, tableau.r
    xq, zq = x.column(qubit), z.column(qubit)

    r.data ^= xq & zq
    x.set_column(qubit, zq)
    z.set_column(qubit, xq)


def phase(tableau: Tableau, qubit: int) -> None:
    """
    Phase gate S on *qubit*: X -> Y, Y -> -X, Z -> Z.

        r_i  ^=  x_iq & z_iq
        z_iq ^=  x_iq
    """
    qubit = tableau.check_qubit(qubit)

    x, z, r = tableau.x, tableau.z, tableau.r
    xq, zq = x.column(qubit), z.column(qubit)

    r.data ^= xq & zq
    z.set_column(qubit, zq ^ xq)


GATES = {
    "H": hadamard,
    "S": phase,
    "CNOT": cnot,
}


def apply_gate(tableau: Tableau, name: str, q1: int, q2: int = -1) -> None:
    """Dispatch a gate by name; *q2* is ignored for single-qubit gates."""
    name_upper = name.upper()
    if name_upper == "CX":
        name_upper = "CNOT"
    if name_upper not in GATES:
        raise InvalidArgumentError(f"Unknown gate {name!r}; expected one of {sorted(GATES)}")
    if name_upper == "CNOT":
        cnot(tableau, q1, q2)
    else:
        GATES[name_upper](tableau, q1)
