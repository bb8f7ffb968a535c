# utils.py
"""
Utility functions for the garden framework.

This module provides helper functions, such as logging setup and config
loading, that are used across different parts of the application but do
not belong to a specific domain like physics or rendering.
"""
import copy
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

# Built-in defaults. Any key missing from config.json falls back to these.
DEFAULT_CONFIG: Dict[str, Any] = {
    "simulation_parameters": {
        "seed": None,
        "vase_capacity": 5000,
        "fill_amount": 30,
        "stem_min_spacing": 5.0,
        "flower_radius_min": 20.0,
        "flower_radius_max": 45.0,
        "flower_life_min": 600,
        "flower_life_max": 1200,
    },
    "run_control": {
        "log_throttle_steps": 600,
        "max_steps": 0,
        "profile": False,
    },
    "visualization": {
        "fullscreen": False,
        "window_width": 1200,
        "window_height": 800,
        "fps": 60,
        "start_at_night": False,
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(levelname)s - %(message)s",
        "log_file": "logs/garden.log",
    },
}

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#   - Invariants: After this function runs, the logging system is
#     initialized and ready for use throughout the application.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: the parsed file merged section by section over DEFAULT_CONFIG.
#   - Raises: FileNotFoundError, json.JSONDecodeError (logged first);
#     ValueError if run_control holds a log_throttle_steps below 1 or a
#     negative max_steps.

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/garden.log')

    # Ensure the log directory exists
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates when the log reaches 1MB, keeps 5 backup logs.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")

def merge_config(overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Returns DEFAULT_CONFIG with each section updated from overrides."""
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in overrides.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged

def _validate_run_control(run_params: Dict[str, Any]) -> None:
    """Rejects loop settings the main loop cannot honour."""
    problems = []
    if run_params.get('log_throttle_steps', 1) < 1:
        problems.append(f"log_throttle_steps must be at least 1, got {run_params['log_throttle_steps']}")
    if run_params.get('max_steps', 0) < 0:
        problems.append(f"max_steps must not be negative, got {run_params['max_steps']}")
    if problems:
        msg = "Configuration error: " + "; ".join(problems) + "."
        logging.critical(msg)
        raise ValueError(msg)

def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file and fills in defaults."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
        config = merge_config(config)
        _validate_run_control(config["run_control"])
        return config
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

def clamp01(value: float) -> float:
    """Clamps an opacity or life value into [0, 1] before it becomes alpha."""
    return 0.0 if value < 0.0 else 1.0 if value > 1.0 else float(value)

def to_alpha(value: float, scale: float = 1.0) -> int:
    """Converts a [0, 1] opacity (times scale) into a 0-255 alpha byte."""
    return int(round(255 * clamp01(value) * scale))
