"""
chp_sim: stabilizer circuit simulation with the CHP tableau method.

This package provides:
- A binary symplectic tableau over dense or bit-packed storage
- The Clifford gate set (CNOT, Hadamard, Phase) in O(n) per gate
- Z-basis measurement with an injected random number generator
- Tableau persistence and S-state distillation protocols
- Configuration management and logging utilities
"""

__version__ = "0.1.0"
__author__ = "CHP Sim Team"

from .errors import ChpSimError, InvalidArgumentError, InternalConsistencyError
from .storage import STORAGE_STRATEGIES, get_storage
from .pauli import pauli_product_phase, row_product_sign, row_mult
from .gates import cnot, hadamard, phase, apply_gate
from .measurement import MeasureResult, measure, measure_all
from .tableau import Tableau
from .tab_io import save_tableau, load_tableau
from .protocols import (
    DistillationCategory,
    DistillationExperiment,
    classify_error_subsets,
    distill_s_state,
    distill_s_state_low_depth,
)
from .utils import ConfigManager, Logger, setup_logging

__all__ = [
    # Core
    'Tableau',
    'MeasureResult',
    'cnot',
    'hadamard',
    'phase',
    'apply_gate',
    'measure',
    'measure_all',

    # Row algebra
    'pauli_product_phase',
    'row_product_sign',
    'row_mult',

    # Storage and persistence
    'STORAGE_STRATEGIES',
    'get_storage',
    'save_tableau',
    'load_tableau',

    # Protocols
    'DistillationCategory',
    'DistillationExperiment',
    'classify_error_subsets',
    'distill_s_state',
    'distill_s_state_low_depth',

    # Errors
    'ChpSimError',
    'InvalidArgumentError',
    'InternalConsistencyError',

    # Utils
    'ConfigManager',
    'Logger',
    'setup_logging',

    # Package info
    '__version__',
    '__author__'
]
