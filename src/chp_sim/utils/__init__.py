"""Utilities module for configuration and logging."""

from .config import ConfigManager, PRESET_EXPERIMENT_CONFIGS
from .logging import Logger, ExperimentLogger, setup_logging, get_logger

__all__ = ['ConfigManager', 'PRESET_EXPERIMENT_CONFIGS', 'Logger', 'ExperimentLogger',
           'setup_logging', 'get_logger']
