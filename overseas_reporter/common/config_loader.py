"""
Configuration Loader

Loads YAML configuration files for reporter settings, known locations,
shop categories and the strict-tier structural selectors.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

COLLECTOR_URL_ENV = "OVERSEAS_COLLECTOR_URL"

# Defaults for every tunable; settings.yaml only needs to list overrides
DEFAULT_SETTINGS: Dict[str, Dict[str, Any]] = {
    "extraction": {
        "min_loose_yield": 5,
    },
    "probe": {
        "poll_attempts": 12,
        "poll_interval": 0.1,
        "settle_delay": 0.15,
        "pace_every": 3,
        "pace_pause": 0.25,
        "overlay_min_chars": 10,
        "overlay_max_chars": 2000,
    },
    "scheduler": {
        "debounce_delay": 0.5,
        "ready_attempts": 20,
        "ready_interval": 0.3,
    },
    "collector": {
        "url": "https://droqsdb.com/api/report-stock",
        "timeout": 20,
        "max_items": 300,
        "client_header": "overseas-reporter",
    },
    "cooldown": {
        "interval": 60,
        "state_file": "output/cooldown_state.json",
    },
}


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'shops.yaml')

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def merge_settings(
    overrides: Optional[Dict[str, Any]],
    defaults: Optional[Dict[str, Dict[str, Any]]] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Merge per-section overrides over the default settings.

    Unknown sections are kept so callers can carry extra settings.
    """
    merged = copy.deepcopy(DEFAULT_SETTINGS if defaults is None else defaults)
    for section, values in (overrides or {}).items():
        if isinstance(values, dict):
            merged.setdefault(section, {}).update(values)
        else:
            merged[section] = values
    return merged


def load_settings() -> Dict[str, Dict[str, Any]]:
    """
    Load reporter settings from settings.yaml merged over the defaults.

    The collector URL can be overridden with the OVERSEAS_COLLECTOR_URL
    environment variable.

    Returns:
        Dictionary of settings sections (extraction, probe, scheduler,
        collector, cooldown)
    """
    settings = merge_settings(load_config('settings.yaml'))

    env_url = os.environ.get(COLLECTOR_URL_ENV, "").strip()
    if env_url:
        settings["collector"]["url"] = env_url

    return settings


def load_locations() -> List[str]:
    """
    Load the canonical location names.

    Returns:
        List of location names in canonical capitalization

    Example:
        ['Mexico', 'Cayman Islands', 'Canada', ...]
    """
    config = load_config('locations.yaml')
    return list(config.get('locations', []))


def load_location_aliases() -> Dict[str, str]:
    """
    Load location aliases.

    Returns:
        Dictionary mapping lowercase alias to canonical location

    Example:
        {'uk': 'United Kingdom', 'united arab emirates': 'UAE', ...}
    """
    config = load_config('locations.yaml')
    aliases = config.get('aliases', {}) or {}
    return {str(alias).lower(): name for alias, name in aliases.items()}


def load_shop_config() -> Dict[str, Any]:
    """
    Load shop category configuration.

    Returns:
        Dictionary with 'shops' (labels in display order), 'header_keywords'
        (lowercase keyword -> label) and 'label_vocabulary' (lowercase words)
    """
    config = load_config('shops.yaml')
    return {
        'shops': list(config.get('shops', [])),
        'header_keywords': {
            str(k).lower(): v for k, v in (config.get('header_keywords') or {}).items()
        },
        'label_vocabulary': [str(w).lower() for w in config.get('label_vocabulary', [])],
    }


def load_selectors() -> Dict[str, Any]:
    """
    Load strict-tier structural selectors.

    Returns:
        Dictionary with 'strict' (CSS selectors keyed by role) and
        'table_columns' (positional fallback for table rows)
    """
    return load_config('selectors.yaml')
