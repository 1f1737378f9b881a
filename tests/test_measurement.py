"""Tests for Z-basis measurement."""

import numpy as np
import pytest

from chp_sim import (
    InternalConsistencyError,
    InvalidArgumentError,
    MeasureResult,
    Tableau,
    measure,
    measure_all,
)
from random_circuits import random_ops

DET0 = MeasureResult(False, determined=True)
DET1 = MeasureResult(True, determined=True)


def _x_flip(tab, q):
    tab.hadamard(q)
    tab.phase(q)
    tab.phase(q)
    tab.hadamard(q)


@pytest.mark.parametrize("n", [1, 2, 5])
def test_fresh_tableau_measures_zero(storage, n):
    tab = Tableau.zero_state(n, storage=storage)
    for q in range(n):
        assert measure(tab, q) == DET0


def test_bit_flip(storage):
    tab = Tableau.zero_state(2, storage=storage)
    _x_flip(tab, 0)
    assert tab.measure(0) == DET1
    assert tab.measure(1) == DET0


def test_bit_flip_propagates_through_cnot(storage):
    tab = Tableau.zero_state(2, storage=storage)
    _x_flip(tab, 0)
    tab.cnot(0, 1)
    assert tab.measure(0) == DET1
    assert tab.measure(1) == DET1


def test_epr_pair_is_correlated(storage):
    for seed in range(20):
        rng = np.random.default_rng(seed)
        tab = Tableau.zero_state(2, storage=storage)
        tab.hadamard(0)
        tab.cnot(0, 1)
        v1 = tab.measure(0, rng)
        v2 = tab.measure(1, rng)
        assert not v1.determined
        assert v2.determined
        assert v1.value == v2.value


def test_both_outcomes_occur():
    values = set()
    for seed in range(32):
        tab = Tableau.zero_state(1)
        tab.hadamard(0)
        values.add(tab.measure(0, seed=seed).value)
    assert values == {False, True}


def test_bias_forces_random_outcome(storage):
    for bias, expected in [(0.0, False), (1.0, True)]:
        tab = Tableau.zero_state(1, storage=storage)
        tab.hadamard(0)
        result = tab.measure(0, np.random.default_rng(3), bias=bias)
        assert result == MeasureResult(expected, determined=False)


def test_repeated_measurement_is_stable(storage):
    for seed in range(10):
        rng = np.random.default_rng(seed)
        tab = Tableau.zero_state(5, storage=storage).apply_circuit(random_ops(5, 60, seed))
        for q in range(5):
            first = tab.measure(q, rng)
            second = tab.measure(q, rng)
            assert second.determined
            assert second.value == first.value
        assert tab.is_symplectic()


def test_determined_measurement_does_not_mutate(storage):
    tab = Tableau.zero_state(3, storage=storage)
    _x_flip(tab, 1)
    tab.cnot(1, 2)
    before = tab.copy()
    assert tab.measure(2) == DET1
    assert tab == before


def test_same_seed_replays_bit_for_bit(storage):
    ops = random_ops(6, 100, seed=5)
    a = Tableau.zero_state(6, storage=storage).apply_circuit(ops)
    b = Tableau.zero_state(6, storage=storage).apply_circuit(ops)
    results_a = measure_all(a, np.random.default_rng(99))
    results_b = measure_all(b, np.random.default_rng(99))
    assert results_a == results_b
    assert a == b


def test_storages_agree_under_shared_stream():
    ops = random_ops(6, 100, seed=6)
    dense = Tableau.zero_state(6, storage="dense").apply_circuit(ops)
    packed = Tableau.zero_state(6, storage="bitpacked").apply_circuit(ops)
    assert dense.measure_all(seed=4) == packed.measure_all(seed=4)
    assert str(dense) == str(packed)


def test_phase_kickback_consume_s_state(storage):
    for seed in range(10):
        rng = np.random.default_rng(seed)
        tab = Tableau.zero_state(2, storage=storage)
        tab.hadamard(1)
        tab.phase(1)
        tab.hadamard(0)
        tab.cnot(0, 1)
        v1 = tab.measure(1, rng)
        assert not v1.determined
        if v1.value:
            tab.phase(0)
            tab.phase(0)
        tab.phase(0)
        tab.hadamard(0)
        assert tab.measure(0, rng) == DET1


def test_phase_kickback_preserve_s_state(storage):
    tab = Tableau.zero_state(2, storage=storage)
    tab.hadamard(1)
    tab.phase(1)
    tab.hadamard(0)
    tab.cnot(0, 1)
    tab.hadamard(1)
    tab.cnot(0, 1)
    tab.hadamard(1)

    tab.phase(0)
    tab.hadamard(0)
    assert tab.measure(0) == DET1
    tab.phase(1)
    tab.hadamard(1)
    assert tab.measure(1) == DET1


def test_kickback_vs_stabilizer_row_layout(storage):
    tab = Tableau.zero_state(3, storage=storage)
    tab.hadamard(2)
    tab.cnot(2, 0)
    tab.cnot(2, 1)
    tab.phase(0)
    tab.phase(1)
    tab.hadamard(0)
    tab.hadamard(1)
    tab.hadamard(2)
    assert str(tab) == "\n".join([
        "-Y..",
        "-.Y.",
        "+..X",
        "----",
        "+X.X",
        "+.XX",
        "+YYZ",
    ])

    v1 = tab.measure(0, bias=0)
    assert str(tab) == "\n".join([
        "+X.X",
        "-.Y.",
        "+..X",
        "----",
        "+Z..",
        "+.XX",
        "+ZYY",
    ])

    v2 = tab.measure(1, bias=0)
    assert str(tab) == "\n".join([
        "+X.X",
        "+.XX",
        "+..X",
        "----",
        "+Z..",
        "+.Z.",
        "-ZZZ",
    ])

    v3 = tab.measure(2, bias=0)
    assert str(tab) == "\n".join([
        "+X.X",
        "+.XX",
        "+..X",
        "----",
        "+Z..",
        "+.Z.",
        "-ZZZ",
    ])
    assert v1 == MeasureResult(False, determined=False)
    assert v2 == MeasureResult(False, determined=False)
    assert v3 == DET1


def test_low_space_distillation_scenario(storage):
    phasors = [(0,), (1,), (2,), (0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3)]
    for seed in range(20):
        rng = np.random.default_rng(seed)
        tab = Tableau.zero_state(5, storage=storage)
        anc = 4
        for phasor in phasors:
            tab.hadamard(anc)
            for k in phasor:
                tab.cnot(anc, k)
            tab.hadamard(anc)
            tab.phase(anc)
            tab.hadamard(anc)
            v = tab.measure(anc, rng)
            assert not v.determined
            if v.value:
                for k in (*phasor, anc):
                    _x_flip(tab, k)

        for k in range(3):
            assert tab.measure(k, rng) == DET0
        tab.phase(3)
        tab.hadamard(3)
        assert tab.measure(3, rng) == DET1


def test_out_of_range_qubit(storage):
    tab = Tableau.zero_state(2, storage=storage)
    with pytest.raises(InvalidArgumentError):
        tab.measure(2)
    with pytest.raises(TypeError):
        tab.measure("0")


def test_broken_tableau_raises_internal_error():
    x = np.array([[1, 0], [1, 0], [0, 1], [0, 0]], dtype=bool)
    z = np.array([[0, 0], [0, 0], [0, 0], [0, 1]], dtype=bool)
    r = np.zeros(4, dtype=bool)
    tab = Tableau.from_rows(2, x, z, r)
    with pytest.raises(InternalConsistencyError):
        tab.measure(0)


def test_measure_all_on_zero_state():
    assert Tableau.zero_state(3).measure_all() == [DET0, DET0, DET0]


def test_measure_result_conversions():
    one = MeasureResult(True, determined=False)
    zero = MeasureResult(False, determined=True)
    assert bool(one) and not bool(zero)
    assert int(one) == 1 and int(zero) == 0
    assert str(one) == "1 (random)"
    assert str(zero) == "0 (determined)"
    with pytest.raises(AttributeError):
        one.value = False
