"""Core projection components."""

from aeonsim.core.params import SimulationParams, DEFAULT_PARAMS, params_from_mapping
from aeonsim.core.timeline import Era, classify_era, generate_time_points
from aeonsim.core.results import YearData, ProjectionResults
from aeonsim.core.projector import project, project_year
from aeonsim.core.model import ProjectionModel

__all__ = [
    "SimulationParams",
    "DEFAULT_PARAMS",
    "params_from_mapping",
    "Era",
    "classify_era",
    "generate_time_points",
    "YearData",
    "ProjectionResults",
    "project",
    "project_year",
    "ProjectionModel",
]
