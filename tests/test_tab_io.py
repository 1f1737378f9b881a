"""Tests for tableau persistence."""

import numpy as np
import pytest

from chp_sim import Tableau, load_tableau, save_tableau
from random_circuits import random_ops


def test_save_load_round_trip(tmp_path, storage):
    tab = Tableau.zero_state(4, storage=storage).apply_circuit(random_ops(4, 40, seed=8))
    tab.measure(1, seed=1)
    path = save_tableau(tab, str(tmp_path / "state"))
    assert path.endswith(".npz")

    loaded = load_tableau(path)
    assert loaded == tab
    assert loaded.storage == storage


def test_load_with_storage_override(tmp_path):
    tab = Tableau.zero_state(3).apply_circuit(random_ops(3, 20, seed=9))
    save_tableau(tab, str(tmp_path / "state.npz"))
    loaded = load_tableau(str(tmp_path / "state"), storage="bitpacked")
    assert loaded.storage == "bitpacked"
    assert str(loaded) == str(tab)


def test_unknown_schema(tmp_path):
    x, z, r = Tableau.zero_state(1).to_dense()
    path = tmp_path / "future.npz"
    np.savez_compressed(path, schema=np.int64(99), n=np.int64(1),
                        storage=np.array("dense"), x=x, z=z, r=r)
    with pytest.raises(ValueError):
        load_tableau(str(path))
