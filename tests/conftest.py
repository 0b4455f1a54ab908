"""Pytest configuration."""
import logging

import pytest

from aeonsim import ProjectionModel, SimulationParams, DEFAULT_PARAMS, PRESETS


@pytest.fixture
def default_params():
    return DEFAULT_PARAMS


@pytest.fixture(scope="session")
def default_results():
    """One full default projection, shared because the run is deterministic."""
    return ProjectionModel().run()


@pytest.fixture(scope="session")
def preset_results():
    model = ProjectionModel()
    return {key: model.run(preset=key) for key in PRESETS}


@pytest.fixture
def extreme_params():
    return SimulationParams(
        co2_emission_rate=100,
        renewable_adoption=0,
        population_growth_rate=100,
        ai_regulation=0,
        conflict_probability=100,
        economic_expansion=0,
        geo_engineering_level=0,
        space_colonization=0,
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Keep handlers installed by setup_logging from leaking between tests."""
    yield
    logger = logging.getLogger("aeonsim")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
