"""S-state distillation protocols built on the stabilizer tableau."""

import itertools
import time
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

import numpy as np
from tqdm import tqdm

from .measurement import MeasureResult, coerce_rng
from .tableau import Tableau
from .utils.config import ConfigManager
from .utils.logging import Logger


class DistillationCategory(Enum):
    GOOD = "good"        # checks passed, output correct
    VICTIM = "victim"    # checks failed, output was correct anyway
    CAUGHT = "caught"    # checks failed, output wrong
    ERROR = "error"      # checks passed, output wrong


def categorize(good_output: bool, checks_passed: bool) -> DistillationCategory:
    if checks_passed:
        return DistillationCategory.GOOD if good_output else DistillationCategory.ERROR
    return DistillationCategory.VICTIM if good_output else DistillationCategory.CAUGHT


# 5-qubit low-space protocol: ancilla 4, output qubit 3
LOW_SPACE_PHASORS = (
    (0,),
    (1,),
    (2,),
    (0, 1, 2),
    (0, 1, 3),
    (0, 2, 3),
    (1, 2, 3),
)

# 9-qubit low-depth protocol: ancilla 8, output qubit 7
LOW_DEPTH_STABILIZERS = (
    (0, 1, 2, 3),
    (0, 1, 4, 5),
    (0, 2, 4, 6),
    (1, 2, 4, 7),
)
LOW_DEPTH_CHECKS = (
    ((0,), LOW_DEPTH_STABILIZERS[0]),
    ((1,), LOW_DEPTH_STABILIZERS[1]),
    ((2,), LOW_DEPTH_STABILIZERS[2]),
)


@dataclass(frozen=True)
class DistillationResult:
    category: DistillationCategory
    output: MeasureResult
    checks: Tuple[MeasureResult, ...]
    ancilla_results: Tuple[MeasureResult, ...]


@dataclass(frozen=True)
class LowDepthDistillationResult:
    category: DistillationCategory
    output: MeasureResult
    stabilizer_results: Tuple[MeasureResult, ...]
    qubit_results: Tuple[MeasureResult, ...]
    check_parities: Tuple[bool, ...]


def _apply_x(tab: Tableau, qubit: int) -> None:
    # X = H S S H
    tab.hadamard(qubit)
    tab.phase(qubit)
    tab.phase(qubit)
    tab.hadamard(qubit)


def distill_s_state(errors: Iterable[int] = (), rng=None, storage: str = "dense",
                    bias: float = 0.5) -> DistillationResult:
    """
    Run the 5-qubit low-space S-state distillation once.

    Each of the seven rounds kicks a phasor onto the data qubits through the
    ancilla and measures it, undoing the kickback when the ancilla reads 1.
    Rounds listed in *errors* get an extra Z on the ancilla before it is
    measured. Qubit 3 carries the output; qubits 0..2 are the checks.
    """
    errors = set(errors)
    rng = coerce_rng(rng)
    tab = Tableau.zero_state(5, storage=storage)
    anc = 4

    ancilla_results = []
    for round_index, phasor in enumerate(LOW_SPACE_PHASORS):
        tab.hadamard(anc)
        for k in phasor:
            tab.cnot(anc, k)
        tab.hadamard(anc)
        tab.phase(anc)

        if round_index in errors:
            tab.phase(anc)
            tab.phase(anc)

        tab.hadamard(anc)
        v = tab.measure(anc, rng, bias)
        ancilla_results.append(v)
        if v.value:
            _apply_x(tab, anc)
            for k in phasor:
                _apply_x(tab, k)

    tab.phase(3)
    tab.phase(3)
    tab.phase(3)
    tab.hadamard(3)
    output = tab.measure(3, rng, bias)
    tab.hadamard(3)
    tab.phase(3)

    checks = tuple(tab.measure(k, rng, bias) for k in range(3))
    category = categorize(good_output=not output.value,
                          checks_passed=not any(c.value for c in checks))
    return DistillationResult(category, output, checks, tuple(ancilla_results))


def distill_s_state_low_depth(rng=None, storage: str = "dense",
                              bias: float = 0.5) -> LowDepthDistillationResult:
    """
    Run the 9-qubit low-depth S-state distillation once.

    Four stabilizers are measured through ancilla 8, the seven data qubits
    are measured in the Y basis, and qubit 7 is corrected by the overall
    parity before it is read out.
    """
    rng = coerce_rng(rng)
    tab = Tableau.zero_state(9, storage=storage)
    anc = 8

    stabilizer_results = []
    for stab in LOW_DEPTH_STABILIZERS:
        tab.hadamard(anc)
        for k in stab:
            tab.cnot(anc, k)
        tab.hadamard(anc)
        v = tab.measure(anc, rng, bias)
        if v.value:
            _apply_x(tab, anc)
        stabilizer_results.append(v)

    qubit_results = []
    for k in range(7):
        tab.phase(k)
        tab.hadamard(k)
        qubit_results.append(tab.measure(k, rng, bias))

    parity = sum(v.value for v in stabilizer_results) + sum(v.value for v in qubit_results)
    if parity & 1:
        tab.phase(7)
        tab.phase(7)

    tab.phase(7)
    tab.hadamard(7)
    output = tab.measure(7, rng, bias)

    check_parities = tuple(
        bool((sum(stabilizer_results[s].value for s in s_idx)
              + sum(qubit_results[q].value for q in q_idx)) & 1)
        for s_idx, q_idx in LOW_DEPTH_CHECKS
    )
    category = categorize(good_output=not output.value,
                          checks_passed=not any(check_parities))
    return LowDepthDistillationResult(category, output, tuple(stabilizer_results),
                                      tuple(qubit_results), check_parities)


def classify_error_subsets(size: int, num_rounds: int = len(LOW_SPACE_PHASORS), rng=None,
                           storage: str = "dense") -> Counter:
    """
    Run :func:`distill_s_state` for every set of *size* faulty rounds and
    count the resulting categories.
    """
    rng = coerce_rng(rng)
    counts = Counter()
    for errors in itertools.combinations(range(num_rounds), size):
        counts[distill_s_state(errors, rng=rng, storage=storage).category] += 1
    return counts


class DistillationExperiment:
    """Repeated distillation trials driven by a configuration dictionary."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, preset: str = "standard"):
        """Initialize the experiment.

        Args:
            config: Overrides merged on top of the preset
            preset: Name of the preset in ``PRESET_EXPERIMENT_CONFIGS``
        """
        self.config_manager = ConfigManager()
        self.logger = Logger(__name__)
        self.config = self.config_manager.create_experiment_config(preset, config or {})

        if not self.config_manager.validate_config(self.config):
            raise ValueError(f"Incomplete experiment configuration: {self.config}")

    def run(self, show_progress: bool = True) -> Dict[str, Any]:
        """Run the low-depth trials and the error-subset sweep.

        Returns:
            Summary with category counts per protocol and timing
        """
        cfg = self.config
        storage = cfg["storage"]
        bias = cfg.get("bias", 0.5)
        rng = np.random.default_rng(cfg["seed"])

        self.logger.log_experiment_start("s_state_distillation", cfg)
        start = time.time()

        low_depth = Counter()
        trials = tqdm(range(cfg["num_trials"]), desc="low-depth trials", disable=not show_progress)
        for _ in trials:
            result = distill_s_state_low_depth(rng=rng, storage=storage, bias=bias)
            low_depth[result.category] += 1
        low_depth_counts = {cat.value: count for cat, count in low_depth.items()}
        self.logger.log_distribution("Low-depth distillation", low_depth_counts)

        error_subsets = {}
        for size in range(cfg["max_errors"] + 1):
            counts = classify_error_subsets(size, rng=rng, storage=storage)
            error_subsets[size] = {cat.value: count for cat, count in counts.items()}
            self.logger.log_distribution(f"{size} injected error(s)", error_subsets[size])

        duration = time.time() - start
        self.logger.log_experiment_end("s_state_distillation", duration)

        return {
            "config": cfg,
            "low_depth": low_depth_counts,
            "error_subsets": error_subsets,
            "duration": duration,
        }
