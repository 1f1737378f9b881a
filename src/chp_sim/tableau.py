from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from . import gates
from . import measurement
from .errors import InvalidArgumentError
from .kernels import nb_apply_circuit, pack_circuit, ID_TO_NAME
from .pauli import pauli_string
from .storage import BoolMatrix, BoolVector, get_storage


class Tableau:
    """
    Aaronson-Gottesman (CHP) stabilizer tableau for n qubits.

    Rows ``0..n-1`` are destabilizers, rows ``n..2n-1`` are stabilizers. Row i
    is the signed Pauli string ``(-1)^r[i] * prod_j P(x[i, j], z[i, j])``.

    The bit matrices live in a pluggable storage (``"dense"`` numpy bools or
    ``"bitpacked"`` uint8 words); the choice has no effect on results.

    A tableau owns two scratch buffers reused by every deterministic
    measurement. Calls on the *same* tableau are therefore not re-entrant and
    must not run concurrently; distinct tableaux share nothing.
    """
    def __init__(
        self,
        n: int,
        *,
        storage: str = "dense",
        x: Optional[np.ndarray] = None,
        z: Optional[np.ndarray] = None,
        r: Optional[np.ndarray] = None,
    ):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise InvalidArgumentError(f"Qubit count must be an int, got {type(n).__name__}")
        n = int(n)
        if n < 0:
            raise InvalidArgumentError(f"Qubit count must be >= 0, got {n}")

        strategy = get_storage(storage)
        rows = 2 * n

        provided = [a is not None for a in (x, z, r)]
        if any(provided) and not all(provided):
            raise InvalidArgumentError("x, z and r must be provided together")

        if all(provided):
            x = np.asarray(x, dtype=np.bool_)
            z = np.asarray(z, dtype=np.bool_)
            r = np.asarray(r, dtype=np.bool_)
            if x.shape != (rows, n):
                raise InvalidArgumentError(f"Provided x has shape {x.shape}, expected {(rows, n)}")
            if z.shape != (rows, n):
                raise InvalidArgumentError(f"Provided z has shape {z.shape}, expected {(rows, n)}")
            if r.shape != (rows,):
                raise InvalidArgumentError(f"Provided r has shape {r.shape}, expected {(rows,)}")
        else:
            # |0...0>: destabilizer i = X_i, stabilizer i = Z_i
            eye = np.eye(n, dtype=np.bool_)
            x = np.zeros((rows, n), dtype=np.bool_)
            z = np.zeros((rows, n), dtype=np.bool_)
            r = np.zeros(rows, dtype=np.bool_)
            x[:n, :] = eye
            z[n:, :] = eye

        self._n = n
        self._storage = strategy.name
        self._x: BoolMatrix = strategy.matrix.from_dense(x)
        self._z: BoolMatrix = strategy.matrix.from_dense(z)
        self._r: BoolVector = strategy.vector.from_dense(r)

        # x half then z half of one row, plus its sign
        self._scratch = np.zeros(rows, dtype=np.bool_)
        self._scratch_sign = np.zeros(1, dtype=np.bool_)

    # --- Properties for read-only access ---
    @property
    def n(self) -> int:
        return self._n

    @property
    def num_rows(self) -> int:
        return 2 * self._n

    @property
    def storage(self) -> str:
        return self._storage

    @property
    def x(self) -> BoolMatrix:
        return self._x

    @property
    def z(self) -> BoolMatrix:
        return self._z

    @property
    def r(self) -> BoolVector:
        return self._r

    @classmethod
    def zero_state(cls, n: int, storage: str = "dense") -> Tableau:
        """Create a tableau representing the all-|0> state."""
        return cls(n, storage=storage)

    @classmethod
    def from_rows(cls, n: int, x, z, r, storage: str = "dense") -> Tableau:
        """Construct a tableau from raw (2n, n), (2n, n), (2n,) bit arrays."""
        return cls(n, storage=storage, x=x, z=z, r=r)

    def copy(self, storage: Optional[str] = None) -> Tableau:
        """Deep copy, optionally converting to another storage strategy."""
        x, z, r = self.to_dense()
        return Tableau(self._n, storage=storage or self._storage, x=x, z=z, r=r)

    def to_dense(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return dense bool copies of (x, z, r)."""
        return self._x.to_dense(), self._z.to_dense(), self._r.bits()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tableau):
            return NotImplemented
        if self._n != other._n:
            return False
        return all(np.array_equal(a, b) for a, b in zip(self.to_dense(), other.to_dense()))

    def _row_strings(self, rows: Iterable[int]) -> List[str]:
        x, z, r = self.to_dense()
        return [pauli_string(x[i], z[i], r[i]) for i in rows]

    def destabilizers(self) -> List[str]:
        """Signed destabilizer rows, e.g. ``['+X.', '+.X']``."""
        return self._row_strings(range(self._n))

    def stabilizers(self) -> List[str]:
        """Signed stabilizer rows, e.g. ``['+Z.', '+.Z']``."""
        return self._row_strings(range(self._n, 2 * self._n))

    def __str__(self):
        sep = "-" * (self._n + 1)
        return "\n".join([*self.destabilizers(), sep, *self.stabilizers()])

    def __repr__(self):
        return f"Tableau(n={self._n}, storage={self._storage!r})"

    def is_symplectic(self) -> bool:
        """
        Check the commutation structure: stabilizers pairwise commute and
        destabilizer i anticommutes with stabilizer i only.

        O(n^3); meant for tests and tooling, never called by the engines.
        """
        n = self._n
        x = self._x.to_dense().astype(np.int64)
        z = self._z.to_dense().astype(np.int64)
        products = (x @ z.T + z @ x.T) % 2
        expected = np.zeros((2 * n, 2 * n), dtype=np.int64)
        expected[:n, n:] = np.eye(n, dtype=np.int64)
        expected[n:, :n] = np.eye(n, dtype=np.int64)
        return bool(np.array_equal(products, expected))

    def check_qubit(self, qubit: int) -> int:
        """Validate a qubit index and return it as a plain int."""
        if isinstance(qubit, bool) or not isinstance(qubit, (int, np.integer)):
            raise TypeError(f"Qubit index must be int, got {type(qubit).__name__}")
        qubit = int(qubit)
        if not (0 <= qubit < self._n):
            raise InvalidArgumentError(f"Qubit index {qubit} is out of bounds for n={self._n}.")
        return qubit

    # ===============================================================================================================
    # Gates and measurement
    # ===============================================================================================================
    def cnot(self, control: int, target: int) -> None:
        gates.cnot(self, control, target)

    def hadamard(self, qubit: int) -> None:
        gates.hadamard(self, qubit)

    def phase(self, qubit: int) -> None:
        gates.phase(self, qubit)

    def measure(self, qubit: int, rng=None, bias: float = 0.5, *, seed=None) -> measurement.MeasureResult:
        return measurement.measure(self, qubit, rng, bias, seed=seed)

    def measure_all(self, rng=None, bias: float = 0.5, *, seed=None) -> List[measurement.MeasureResult]:
        return measurement.measure_all(self, rng, bias, seed=seed)

    def apply_circuit(self, ops: Sequence[Sequence]) -> Tableau:
        """
        Apply a sequence of gate tuples such as ``[("H", 0), ("CNOT", 0, 1)]``.

        The whole sequence is validated before any gate runs. Dense tableaux
        go through the compiled kernel; other storages through the gate engine.
        Returns ``self`` for chaining.
        """
        program = pack_circuit(ops, self._n)
        if self._storage == "dense":
            nb_apply_circuit(self._x.data, self._z.data, self._r.data, program)
        else:
            for gid, q1, q2 in program:
                gates.apply_gate(self, ID_TO_NAME[int(gid)], int(q1), int(q2))
        return self
