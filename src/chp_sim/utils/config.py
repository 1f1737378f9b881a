"""Configuration management utilities."""

import copy
import yaml
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedSeq
from pathlib import Path
from typing import Dict, Any, Optional, Union
from omegaconf import OmegaConf


PRESET_EXPERIMENT_CONFIGS = {
    "quick": {
        "storage": "dense",
        "seed": 0,
        "num_trials": 10,
        "max_errors": 1,
        "bias": 0.5,
    },
    "standard": {
        "storage": "dense",
        "seed": 0,
        "num_trials": 100,
        "max_errors": 3,
        "bias": 0.5,
    },
    "bitpacked": {
        "storage": "bitpacked",
        "seed": 0,
        "num_trials": 100,
        "max_errors": 3,
        "bias": 0.5,
    },
}

REQUIRED_EXPERIMENT_KEYS = ("storage", "seed", "num_trials", "max_errors")


class ConfigManager:
    """Manage configuration files and settings."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Directory containing configuration files
        """
        self.config_dir = Path(config_dir) if config_dir else Path("conf")
        self.yaml_saver = YAML()

    def load_config(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from a YAML file.

        Args:
            config_path: Path to configuration file

        Returns:
            Configuration dictionary
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() not in ('.yaml', '.yml'):
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)

        return config or {}

    def save_config(self, config: Dict[str, Any], config_path: Union[str, Path]) -> None:
        """Save configuration to file.

        Args:
            config: Configuration dictionary
            config_path: Path where to save configuration
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config = copy.deepcopy(config)
        with open(config_path, 'w') as f:
            force_flow_style_lists(config)
            self.yaml_saver.dump(config, f)

    def merge_configs(self, base_config: Dict, override_config: Dict) -> Dict:
        """Merge two configurations with override taking precedence."""
        base_cfg = OmegaConf.create(base_config)
        override_cfg = OmegaConf.create(override_config)

        merged = OmegaConf.merge(base_cfg, override_cfg)
        return OmegaConf.to_container(merged, resolve=True)

    def get_preset_config(self, preset_name: str) -> Dict[str, Any]:
        """Get a copy of a preset experiment configuration.

        Args:
            preset_name: Name of the preset

        Returns:
            Preset configuration dictionary
        """
        if preset_name not in PRESET_EXPERIMENT_CONFIGS:
            raise ValueError(f"Unknown preset '{preset_name}'")

        return copy.deepcopy(PRESET_EXPERIMENT_CONFIGS[preset_name])

    def list_presets(self) -> list:
        """List available experiment presets."""
        return sorted(PRESET_EXPERIMENT_CONFIGS)

    def validate_config(self, config: Dict[str, Any]) -> bool:
        """Check that an experiment configuration has every required key.

        Args:
            config: Configuration to validate

        Returns:
            True if valid, False otherwise
        """
        return all(key in config for key in REQUIRED_EXPERIMENT_KEYS)

    def create_experiment_config(self, preset_name: str, experiment_params: Dict) -> Dict:
        """Create an experiment configuration by overriding a preset."""
        return self.merge_configs(self.get_preset_config(preset_name), experiment_params)

    def setup_config_directory(self, config_dir: Optional[str] = None) -> Path:
        """Setup configuration directory with one YAML file per preset.

        Args:
            config_dir: Directory to setup (uses default if None)

        Returns:
            Path to config directory
        """
        if config_dir:
            self.config_dir = Path(config_dir)

        experiments_dir = self.config_dir / "experiments"
        experiments_dir.mkdir(parents=True, exist_ok=True)

        for name, preset in PRESET_EXPERIMENT_CONFIGS.items():
            preset_path = experiments_dir / f"{name}.yaml"
            if not preset_path.exists():
                self.save_config(preset, preset_path)

        return self.config_dir


def force_flow_style_lists(d):
    for key, value in d.items():
        if isinstance(value, list):
            d[key] = CommentedSeq(value)
            d[key].fa.set_flow_style()  # sets flow style / inline list
        elif isinstance(value, dict):
            force_flow_style_lists(value)
