from typing import Optional

import numpy as np

from .tableau import Tableau

SCHEMA = 1


def save_tableau(tab: Tableau, path: str) -> str:
    """Save a Tableau in .npz format.

    Parameters
    ----------
    tab : Tableau
        The tableau object to save. Bits are stored dense regardless of the
        tableau's storage strategy; the strategy name is kept alongside.
    path : str
        File path (extension '.npz' is added automatically if missing).

    Returns
    -------
    str
        The path actually written.
    """
    path = str(path)
    if not path.endswith(".npz"):
        path += ".npz"
    x, z, r = tab.to_dense()
    np.savez_compressed(
        path,
        schema=np.int64(SCHEMA),
        n=np.int64(tab.n),
        storage=np.array(tab.storage),
        x=x,
        z=z,
        r=r,
    )
    return path


def load_tableau(path: str, storage: Optional[str] = None) -> Tableau:
    """Load a Tableau from a .npz file.

    Parameters
    ----------
    path : str
        File path (extension '.npz' is added automatically if missing).
    storage : str, optional
        Storage strategy for the loaded tableau; defaults to the saved one.

    Returns
    -------
    Tableau
        Reconstructed tableau object.
    """
    path = str(path)
    if not path.endswith(".npz"):
        path += ".npz"
    with np.load(path, allow_pickle=False) as f:
        schema = int(f["schema"])
        if schema != SCHEMA:
            raise ValueError(f"Unsupported tableau schema {schema}, expected {SCHEMA}")
        n = int(f["n"])
        saved_storage = str(f["storage"])
        x, z, r = f["x"], f["z"], f["r"]
    return Tableau.from_rows(n, x, z, r, storage=storage or saved_storage)
