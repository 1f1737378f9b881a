"""Tests for the Pauli row algebra."""

import numpy as np
import pytest

from chp_sim.errors import InternalConsistencyError
from chp_sim.pauli import (
    commutes,
    pauli_product_phase,
    pauli_string,
    row_mult,
    row_product_sign,
)

# I, X, Y, Z as (x, z)
PAULIS = [(False, False), (True, False), (True, True), (False, True)]
EXPECTED_PHASES = [
    [0, 0, 0, 0],
    [0, 0, 1, -1],
    [0, -1, 0, 1],
    [0, 1, -1, 0],
]


def test_phase_table_matches_cycle():
    for i, a in enumerate(PAULIS):
        for j, b in enumerate(PAULIS):
            assert pauli_product_phase(*a, *b) == EXPECTED_PHASES[i][j]


def test_phase_table_named_entries():
    X, Y, Z = PAULIS[1], PAULIS[2], PAULIS[3]
    assert pauli_product_phase(*X, *Y) == 1
    assert pauli_product_phase(*Y, *X) == -1
    assert pauli_product_phase(*Y, *Z) == 1
    assert pauli_product_phase(*Z, *Y) == -1
    assert pauli_product_phase(*Z, *X) == 1
    assert pauli_product_phase(*X, *Z) == -1


def test_phase_table_is_antisymmetric():
    for a in PAULIS:
        for b in PAULIS:
            assert pauli_product_phase(*a, *b) == -pauli_product_phase(*b, *a)


def test_xx_times_yy_is_minus_zz():
    x1, z1 = np.array([True, True]), np.array([False, False])
    x2, z2 = np.array([True, True]), np.array([True, True])
    sign = row_mult(x1, z1, False, x2, z2, False)
    assert sign is True
    assert pauli_string(x1, z1, sign) == "-ZZ"


def test_xz_times_zx_is_plus_yy():
    x1, z1 = np.array([True, False]), np.array([False, True])
    x2, z2 = np.array([False, True]), np.array([True, False])
    assert row_product_sign(x1, z1, False, x2, z2, False) is False


def test_signs_combine_by_xor():
    x = np.array([False, False])
    z = np.array([True, True])
    assert row_product_sign(x, z, True, x, z, False) is True
    assert row_product_sign(x, z, True, x, z, True) is False


def test_row_mult_updates_bits_in_place():
    x1, z1 = np.array([True, False, True]), np.array([False, False, True])
    x2, z2 = np.array([True, True, False]), np.array([False, True, False])
    # X . Y  *  X Y .  -> . Y Y with phases 0 + 0 + 0
    row_mult(x1, z1, False, x2, z2, False)
    np.testing.assert_array_equal(x1, [False, True, True])
    np.testing.assert_array_equal(z1, [False, True, True])


def test_anticommuting_rows_raise():
    x1, z1 = np.array([True]), np.array([False])
    x2, z2 = np.array([False]), np.array([True])
    with pytest.raises(InternalConsistencyError):
        row_product_sign(x1, z1, False, x2, z2, False)


def test_empty_rows_multiply_to_identity():
    empty = np.zeros(0, dtype=bool)
    assert row_product_sign(empty, empty, True, empty, empty, False) is True


def test_pauli_string_rendering():
    x = np.array([False, True, True, False])
    z = np.array([False, False, True, True])
    assert pauli_string(x, z, False) == "+.XYZ"
    assert pauli_string(x, z, True) == "-.XYZ"


def test_commutes():
    assert commutes([1, 0], [0, 0], [0, 1], [0, 0])       # X. vs .X
    assert not commutes([1], [0], [0], [1])              # X vs Z
    assert commutes([1, 1], [0, 0], [0, 0], [1, 1])      # XX vs ZZ
