"""Configuration management for aeonsim."""

from typing import Dict, Any, Optional
from pathlib import Path
import copy
import logging
import yaml

from aeonsim.core.params import SimulationParams, DEFAULT_PARAMS, params_from_mapping

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = Path.home() / ".aeonsim" / "config.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    # Named preset used as the base; explicit parameters below override it
    "preset": None,
    "parameters": DEFAULT_PARAMS.to_dict(),
    "projection": {
        "workers": 1,
        "show_progress": True,
    },
    "outputs": {
        "formats": ["csv", "netcdf"],
        "base_dir": "./outputs",
    },
    "logging": {
        "level": "INFO",
        "log_dir": "./logs",
        "format_style": "detailed",
    },
    "report": {
        "key_year_offsets": [100, 500, 2000, 10000, 100000, 500000, 1000000],
        "max_tipping_points": 12,
    },
}


def load_config(
    config_path: Optional[str | Path] = None,
    create_default: bool = True,
) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Parameters
    ----------
    config_path : str or Path, optional
        Path to config file. Defaults to ~/.aeonsim/config.yaml
    create_default : bool, optional
        Create default config if not found. Default is True.

    Returns
    -------
    dict
        Configuration dictionary merged over the defaults.

    Raises
    ------
    ValueError
        If the file does not contain a YAML mapping.
    """
    config_path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)

    if config_path.exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            user_config = yaml.safe_load(f)

        if user_config is None:
            user_config = {}
        if not isinstance(user_config, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

        return _deep_merge(copy.deepcopy(DEFAULT_CONFIG), user_config)

    if create_default:
        save_config(DEFAULT_CONFIG, config_path)

    return copy.deepcopy(DEFAULT_CONFIG)


def save_config(
    config: Dict[str, Any],
    config_path: Optional[str | Path] = None,
) -> None:
    """
    Save configuration to YAML file.

    Parameters
    ----------
    config : dict
        Configuration dictionary.
    config_path : str or Path, optional
        Path to config file. Defaults to ~/.aeonsim/config.yaml
    """
    config_path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    logger.info(f"Config saved to: {config_path}")


def params_from_config(config: Dict[str, Any]) -> SimulationParams:
    """
    Resolve the configured preset and parameter overrides.

    Only parameters that differ from the defaults override the preset, so a
    config that names a preset and leaves ``parameters`` untouched runs the
    preset as-is.

    Raises
    ------
    KeyError
        If the configured preset is unknown.
    ValueError
        If ``parameters`` names an unknown parameter.
    """
    from aeonsim.scenarios import get_preset

    preset = config.get("preset")
    base = get_preset(preset)["params"] if preset else DEFAULT_PARAMS

    defaults = DEFAULT_PARAMS.to_dict()
    overrides = {
        key: value
        for key, value in (config.get("parameters") or {}).items()
        if defaults.get(key) != value
    }
    return params_from_mapping(overrides, base=base)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
