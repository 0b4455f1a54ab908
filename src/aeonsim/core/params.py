"""
Policy parameters for a projection.
"""

from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, List, Mapping, Tuple
import logging
import math

from aeonsim.utils.numeric import round_half_up

logger = logging.getLogger(__name__)


PARAM_MIN = 0
PARAM_MAX = 100


@dataclass(frozen=True)
class SimulationParams:
    """
    Eight independent policy knobs, each an integer percentage in [0, 100].

    The projection core does not validate these; use :meth:`clamped` (or
    :func:`params_from_mapping`) at the boundary where user input arrives.

    Attributes
    ----------
    co2_emission_rate : int
        Low (0) to extreme (100) emissions.
    renewable_adoption : int
        Share of renewable energy.
    population_growth_rate : int
        Declining (0) to rapid (100) growth.
    ai_regulation : int
        None (0) to heavy (100) AI regulation.
    conflict_probability : int
        Low (0) to high (100) conflict risk.
    economic_expansion : int
        Recession (0) to boom (100).
    geo_engineering_level : int
        No (0) to heavy (100) climate intervention.
    space_colonization : int
        None (0) to multi-planetary (100).
    """

    co2_emission_rate: int = 50
    renewable_adoption: int = 30
    population_growth_rate: int = 50
    ai_regulation: int = 30
    conflict_probability: int = 30
    economic_expansion: int = 50
    geo_engineering_level: int = 20
    space_colonization: int = 10

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def out_of_range(self) -> List[str]:
        """Names of fields outside [PARAM_MIN, PARAM_MAX] or not whole numbers."""
        bad = []
        for f in fields(self):
            value = getattr(self, f.name)
            if not PARAM_MIN <= value <= PARAM_MAX or value != int(value):
                bad.append(f.name)
        return bad

    def clamped(self) -> Tuple["SimulationParams", List[str]]:
        """
        Clamp every field to [0, 100] and round it to an integer.

        Returns
        -------
        Tuple[SimulationParams, List[str]]
            (adjusted params, names of the fields that changed).

        Raises
        ------
        ValueError
            If a field is NaN or infinite.
        """
        values = {}
        changed = []
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise ValueError(f"Parameter '{f.name}' must be numeric and finite, got {value!r}")
            fixed = int(max(PARAM_MIN, min(PARAM_MAX, round_half_up(value))))
            if fixed != value:
                changed.append(f.name)
            values[f.name] = fixed
        if changed:
            logger.warning(
                "Clamped out-of-range parameters: "
                + ", ".join(f"{n}={getattr(self, n)}->{values[n]}" for n in changed)
            )
        return SimulationParams(**values), changed


DEFAULT_PARAMS = SimulationParams()

# camelCase names used by browser front ends and exported session payloads
_CAMEL_CASE_ALIASES = {
    "co2EmissionRate": "co2_emission_rate",
    "renewableAdoption": "renewable_adoption",
    "populationGrowthRate": "population_growth_rate",
    "aiRegulation": "ai_regulation",
    "conflictProbability": "conflict_probability",
    "economicExpansion": "economic_expansion",
    "geoEngineeringLevel": "geo_engineering_level",
    "spaceColonization": "space_colonization",
}

PARAM_NAMES = tuple(f.name for f in fields(SimulationParams))


def params_from_mapping(
    values: Mapping[str, Any],
    base: SimulationParams = DEFAULT_PARAMS,
) -> SimulationParams:
    """
    Build parameters from a (possibly partial) mapping and clamp them.

    Keys may be snake_case field names or the camelCase names used by
    browser front ends. Missing keys keep the value from ``base``.

    Raises
    ------
    ValueError
        If a key is not a known parameter or a value is not a finite number.
    """
    updates = {}
    for key, value in values.items():
        name = _CAMEL_CASE_ALIASES.get(key, key)
        if name not in PARAM_NAMES:
            raise ValueError(
                f"Unknown parameter '{key}'. Available: {list(PARAM_NAMES)}"
            )
        try:
            updates[name] = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Parameter '{key}' must be numeric, got {value!r}")
        if not math.isfinite(updates[name]):
            raise ValueError(f"Parameter '{key}' must be numeric and finite, got {value!r}")
    params, _ = replace(base, **updates).clamped()
    return params


# Descriptive metadata for each knob, grouped the way control panels show them
PARAMETER_CONTROLS: Dict[str, Dict[str, str]] = {
    "co2_emission_rate": {
        "label": "CO₂ Emissions", "section": "climate",
        "low": "Net-Zero", "high": "Extreme",
    },
    "renewable_adoption": {
        "label": "Renewable Energy", "section": "climate",
        "low": "0%", "high": "100%",
    },
    "geo_engineering_level": {
        "label": "Geo-Engineering", "section": "climate",
        "low": "None", "high": "Heavy",
    },
    "population_growth_rate": {
        "label": "Population Growth", "section": "society",
        "low": "Decline", "high": "Rapid",
    },
    "conflict_probability": {
        "label": "Conflict Risk", "section": "society",
        "low": "Peace", "high": "High",
    },
    "economic_expansion": {
        "label": "Economic Growth", "section": "society",
        "low": "Recession", "high": "Boom",
    },
    "ai_regulation": {
        "label": "AI Regulation", "section": "society",
        "low": "None", "high": "Heavy",
    },
    "space_colonization": {
        "label": "Space Colonization", "section": "deep",
        "low": "None", "high": "Multi-Planet",
    },
}
