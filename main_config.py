"""
Main configuration module.

This module defines the configuration settings for the WikiGuess server:
scoring rules, Wikipedia client settings, catalog location and server binding.
"""

import copy
import json
import logging
import os
from typing import Dict, Any, Optional

logger = logging.getLogger('main_config')

CONFIG_FILE = "config.json"
CONFIG_ENV_VAR = "WIKIGUESS_CONFIG"

DEFAULT_CONFIG = {
    "scoring": {
        "base_points": 7,
        "hint_penalty": 1,
        "initials_penalty": 2,
        "max_hints": 3,
        "streak_milestone": 5
    },
    "wikipedia": {
        "rest_url": "https://en.wikipedia.org/api/rest_v1",
        "action_url": "https://en.wikipedia.org/w/api.php",
        "user_agent": "WikiGuess/1.0 (trivia game; https://github.com/wikiguess)",
        "timeout": 10,
        "rate_limit_delay": 1.0,
        "enabled": True
    },
    "catalog": {
        "path": os.path.join(os.path.dirname(os.path.abspath(__file__)), "famous_people.json")
    },
    "server": {
        "host": "0.0.0.0",
        "port": 5000
    }
}

def deep_merge(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        update: Dictionary to merge on top of base

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result

def resolve_config_path(config_path: Optional[str] = None) -> str:
    """Explicit path first, then the WIKIGUESS_CONFIG environment variable, then config.json."""
    if config_path:
        return config_path
    return os.environ.get(CONFIG_ENV_VAR, CONFIG_FILE)

def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Dictionary containing the configuration.
    """
    path = resolve_config_path(config_path)
    try:
        with open(path, 'r') as f:
            config = json.load(f)
            return deep_merge(DEFAULT_CONFIG, config)
    except FileNotFoundError:
        logger.warning("Config file not found, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)
    except Exception as e:
        logger.error(f"Error loading config file {path}: {str(e)}")
        return copy.deepcopy(DEFAULT_CONFIG)

def save_config(config: Dict[str, Any], config_path: str = CONFIG_FILE):
    """
    Save configuration to file.

    Args:
        config: Configuration dictionary to save.
        config_path: Path to save the configuration to.
    """
    try:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)
        logger.info(f"Saved settings to {config_path}")
    except Exception as e:
        logger.error(f"Error saving config to {config_path}: {str(e)}")

def _get_section(name: str, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    if config is None:
        config = load_config()
    section = dict(DEFAULT_CONFIG[name])
    section.update(config.get(name, {}))
    logger.debug(f"Retrieved {name} config: {section}")
    return section

def get_scoring_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Scoring section with every key filled from the defaults."""
    return _get_section("scoring", config)

def get_wikipedia_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Wikipedia client section with every key filled from the defaults."""
    return _get_section("wikipedia", config)

def get_catalog_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return _get_section("catalog", config)

def get_server_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return _get_section("server", config)
