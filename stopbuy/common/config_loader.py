"""
Configuration Loader

Loads YAML configuration files for the storefront table and watcher settings.
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml


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
        filename: Name of the config file (e.g., 'storefronts.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_storefronts() -> List[Dict[str, Any]]:
    """
    Load the storefront table.

    Returns:
        List of raw storefront records, in declaration order

    Example:
        [
            {
                'name': 'steam',
                'platform': 'steam',
                'domains': ['store.steampowered.com'],
                'title_selectors': ['.apphub_AppName', ...],
                ...
            },
            ...
        ]
    """
    config = load_config('storefronts.yaml')
    return config.get('storefronts', [])


def load_watcher_settings() -> Dict[str, Any]:
    """
    Load page watcher settings.

    Returns:
        Dictionary with watcher settings (e.g. settle_delay in seconds)
    """
    config = load_config('settings.yaml')
    return config.get('watcher', {})
