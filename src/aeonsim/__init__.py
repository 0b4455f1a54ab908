"""
aeonsim - Million-Year Planetary Projection Model

A deterministic scenario model that projects climate, economy, population,
biodiversity and civilization indicators from 2025 out to one million years
under eight policy and technology parameters.
"""

__version__ = "0.1.0"

from aeonsim.core.model import ProjectionModel
from aeonsim.core.results import ProjectionResults, YearData
from aeonsim.core.params import SimulationParams, DEFAULT_PARAMS
from aeonsim.core.projector import project, project_year
from aeonsim.core.timeline import Era, classify_era, generate_time_points
from aeonsim.core.forcing import milankovitch_phase, volcanic_cooling, extinction_pulse
from aeonsim.scenarios import PRESETS, get_preset, list_presets

__all__ = [
    "__version__",
    "ProjectionModel",
    "ProjectionResults",
    "YearData",
    "SimulationParams",
    "DEFAULT_PARAMS",
    "project",
    "project_year",
    "Era",
    "classify_era",
    "generate_time_points",
    "milankovitch_phase",
    "volcanic_cooling",
    "extinction_pulse",
    "PRESETS",
    "get_preset",
    "list_presets",
]
