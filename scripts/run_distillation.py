#!/usr/bin/env python3
"""Script for running S-state distillation experiments on the CHP simulator."""

import sys
from pathlib import Path

import hydra
from omegaconf import OmegaConf

# Add the src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from chp_sim.protocols import DistillationExperiment
from chp_sim.utils import ExperimentLogger, setup_logging


@hydra.main(config_path="../conf", config_name="config", version_base=None)
def main(cfg):
    log_cfg = cfg["logging"]
    setup_logging(log_level=log_cfg["level"], log_dir=log_cfg["log_dir"], console_output=True)

    exp_cfg = OmegaConf.to_container(cfg["experiment"], resolve=True)
    preset = exp_cfg.pop("preset", "standard")

    tracker = ExperimentLogger("s_state_distillation", log_dir=log_cfg["log_dir"])
    tracker.start_experiment(exp_cfg)

    experiment = DistillationExperiment(exp_cfg, preset=preset)
    tracker.log_step("run", f"preset={preset}, storage={experiment.config['storage']}")
    summary = experiment.run()

    total = sum(summary["low_depth"].values())
    good = summary["low_depth"].get("good", 0)
    tracker.log_metric("low_depth_good_fraction", good / total if total else 0.0)
    for size, counts in summary["error_subsets"].items():
        tracker.log_metric(f"undetected_errors_{size}", counts.get("error", 0), step=size)
    tracker.end_experiment(success=True)

    print("\n" + "=" * 50)
    print("S-STATE DISTILLATION SUMMARY")
    print("=" * 50)
    print(f"Storage: {summary['config']['storage']}")
    print(f"Low-depth trials: {total}")
    for category, count in sorted(summary["low_depth"].items()):
        print(f"  {category}: {count}")
    print("Injected error subsets (low-space protocol):")
    for size, counts in summary["error_subsets"].items():
        formatted = ", ".join(f"{k}={v}" for k, v in sorted(counts.items()))
        print(f"  {size} error(s): {formatted}")
    print(f"Duration: {summary['duration']:.2f}s")
    print("=" * 50)


if __name__ == "__main__":
    main()
