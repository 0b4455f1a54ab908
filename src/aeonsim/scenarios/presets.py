"""
Named parameter presets.

Each preset is a complete :class:`SimulationParams` plus display metadata,
covering the corners of the parameter space people usually want to compare:

- baseline: present-day policy mix
- green-transition: rapid decarbonisation
- fossil-boom: growth at any cost
- fractured-world: conflict and stagnation
- spacefaring: multi-planetary expansion
"""

from typing import Dict, Any, List

from aeonsim.core.params import SimulationParams, DEFAULT_PARAMS


PRESETS: Dict[str, Dict[str, Any]] = {
    "baseline": {
        "name": "Baseline",
        "subtitle": "Present-day policy mix",
        "params": DEFAULT_PARAMS,
        "description": "Current emission, adoption and conflict levels carried forward",
    },
    "green-transition": {
        "name": "Green Transition",
        "subtitle": "Rapid decarbonisation",
        "params": SimulationParams(
            co2_emission_rate=15,
            renewable_adoption=90,
            population_growth_rate=40,
            ai_regulation=50,
            conflict_probability=15,
            economic_expansion=55,
            geo_engineering_level=30,
            space_colonization=20,
        ),
        "description": "Renewables displace fossil fuels within decades; warming stays near 1.5 °C",
    },
    "fossil-boom": {
        "name": "Fossil Boom",
        "subtitle": "Growth at any cost",
        "params": SimulationParams(
            co2_emission_rate=95,
            renewable_adoption=5,
            population_growth_rate=70,
            ai_regulation=5,
            conflict_probability=40,
            economic_expansion=90,
            geo_engineering_level=0,
            space_colonization=10,
        ),
        "description": "Unchecked emissions push warming past 4 °C and risk civilizational collapse",
    },
    "fractured-world": {
        "name": "Fractured World",
        "subtitle": "Conflict and stagnation",
        "params": SimulationParams(
            co2_emission_rate=70,
            renewable_adoption=20,
            population_growth_rate=60,
            ai_regulation=20,
            conflict_probability=85,
            economic_expansion=20,
            geo_engineering_level=10,
            space_colonization=0,
        ),
        "description": "High conflict and recession drive repeated collapse and slow recovery",
    },
    "spacefaring": {
        "name": "Spacefaring",
        "subtitle": "Multi-planetary expansion",
        "params": SimulationParams(
            co2_emission_rate=35,
            renewable_adoption=70,
            population_growth_rate=50,
            ai_regulation=40,
            conflict_probability=20,
            economic_expansion=75,
            geo_engineering_level=40,
            space_colonization=95,
        ),
        "description": "Off-world colonies carry population and GDP far beyond Earth's limits",
    },
}


_ALIASES = {
    "default": "baseline",
    "green": "green-transition",
    "renewable": "green-transition",
    "fossil": "fossil-boom",
    "boom": "fossil-boom",
    "fractured": "fractured-world",
    "conflict": "fractured-world",
    "war": "fractured-world",
    "space": "spacefaring",
}


def _normalize(key: str) -> str:
    return key.lower().replace("-", "").replace("_", "").replace(" ", "")


def get_preset(key: str) -> Dict[str, Any]:
    """
    Get preset configuration by key.

    Parameters
    ----------
    key : str
        Preset key (e.g. "green-transition", "green_transition", "green").

    Returns
    -------
    dict
        Preset configuration with ``params`` as a SimulationParams.

    Raises
    ------
    KeyError
        If preset not found.
    """
    wanted = _normalize(key)

    for preset_key, preset in PRESETS.items():
        if _normalize(preset_key) == wanted:
            return preset

    for alias, preset_key in _ALIASES.items():
        if _normalize(alias) == wanted:
            return PRESETS[preset_key]

    available = list(PRESETS.keys())
    raise KeyError(f"Unknown preset '{key}'. Available: {available}")


def list_presets() -> List[str]:
    """
    List available preset keys.

    Returns
    -------
    List[str]
        List of preset identifiers.
    """
    return list(PRESETS.keys())
