"""Tests for the per-point projector and the full projection."""

from dataclasses import replace

import pytest
from aeonsim import project, project_year, SimulationParams, PRESETS, Era
from aeonsim.core.coefficients import EPOCH_YEAR, HORIZON_YEARS
from aeonsim.core.forcing import milankovitch_phase
from aeonsim.core.projector import (
    net_emission,
    build_context,
    collapse_probability,
    temperature,
    population,
    gdp,
    biodiversity,
    conflict_index,
    civilization_level,
    earth_health,
    sea_level,
    ice_coverage,
    atmospheric_co2,
)


BOUNDED_FIELDS = {
    "biodiversity": (0, 100),
    "conflict_index": (0, 100),
    "ice_coverage_percent": (0, 100),
    "civilization_level": (0, 100),
    "earth_health_score": (0, 100),
}


def assert_within_bounds(records):
    for r in records:
        for name, (lower, upper) in BOUNDED_FIELDS.items():
            assert lower <= getattr(r, name) <= upper, (r.year, name)
        assert r.temperature >= -2
        assert r.atmospheric_co2_ppm >= 250
        assert r.population >= 0.01
        assert r.gdp >= 0


class TestProject:
    def test_span(self, default_params):
        records = project(default_params)
        assert records[0].year == EPOCH_YEAR
        assert records[-1].year == EPOCH_YEAR + HORIZON_YEARS
        assert all(b.year > a.year for a, b in zip(records, records[1:]))

    def test_deterministic(self, default_params):
        assert project(default_params) == project(default_params)

    def test_workers_preserve_order(self, default_params):
        assert project(default_params, workers=4) == project(default_params)

    @pytest.mark.parametrize("key", list(PRESETS))
    def test_presets_within_bounds(self, key):
        assert_within_bounds(project(PRESETS[key]["params"]))

    def test_extremes_within_bounds(self, extreme_params):
        assert_within_bounds(project(extreme_params))

    def test_all_zero_within_bounds(self):
        params = SimulationParams(*([0] * 8))
        assert_within_bounds(project(params))

    def test_all_max_within_bounds(self):
        params = SimulationParams(*([100] * 8))
        assert_within_bounds(project(params))


class TestBaselines:
    def test_present_day(self, default_params):
        d = project_year(default_params, EPOCH_YEAR)
        assert d.temperature == pytest.approx(1.2, abs=0.1)
        assert d.population == pytest.approx(8.1)
        assert d.gdp == pytest.approx(105.0)
        assert d.atmospheric_co2_ppm == 421
        assert d.ice_coverage_percent == 12
        assert d.biodiversity == 72
        assert d.era is Era.ANTHROPOCENE
        assert d.major_event is None

    def test_rounding(self, default_params):
        d = project_year(default_params, EPOCH_YEAR + 137)
        assert d.temperature == round(d.temperature, 2)
        assert d.gdp == round(d.gdp, 1)
        assert isinstance(d.biodiversity, int)
        assert isinstance(d.civilization_level, int)


class TestEvents:
    def test_yellowstone_only_near_target(self, default_params):
        labelled = [
            r.year for r in project(default_params)
            if r.major_event == "Yellowstone Supervolcano Eruption"
        ]
        assert labelled == [EPOCH_YEAR + 75_000]

    def test_volcanic_label_takes_precedence(self, default_params):
        d = project_year(default_params, EPOCH_YEAR + 570_000)
        assert d.major_event == "Toba-Class Mega-Eruption"

    def test_extinction_label(self, default_params):
        d = project_year(default_params, EPOCH_YEAR + 800_000)
        assert d.major_event == "Oceanic Anoxic Event"

    def test_volcanic_cooling_lowers_temperature(self, default_params):
        ctx = build_context(default_params, 75_000)
        quiet = replace(ctx, volcanic_cooling=0.0, volcanic_event=None)
        assert ctx.volcanic_cooling == pytest.approx(4.5)
        cooled = temperature(default_params, ctx)
        unforced = temperature(default_params, quiet)
        assert cooled < unforced
        assert unforced - cooled <= 4.5 + 0.01


class TestCarbon:
    def test_full_renewables_zero_emissions(self):
        params = SimulationParams(co2_emission_rate=0, renewable_adoption=100)
        assert net_emission(params) == 0
        records = project(params)
        assert all(r.atmospheric_co2_ppm <= 421 for r in records)
        assert records[-1].atmospheric_co2_ppm < 421

    def test_net_emission_never_negative(self):
        assert net_emission(SimulationParams(co2_emission_rate=10, renewable_adoption=90)) == 0
        assert net_emission(SimulationParams(co2_emission_rate=50, renewable_adoption=0)) == pytest.approx(0.5)


class TestCollapse:
    def test_conflict_drives_collapse(self):
        calm = collapse_probability(SimulationParams(conflict_probability=0), 1.2)
        hostile = collapse_probability(SimulationParams(conflict_probability=100), 1.2)
        assert calm == 0
        assert hostile == pytest.approx(0.4)

    def test_runaway_warming_adds_to_collapse(self):
        params = SimulationParams(conflict_probability=0)
        assert collapse_probability(params, 4.5) == pytest.approx(0.4)


FOSSIL_BOOM = PRESETS["fossil-boom"]["params"]
EXTREME = SimulationParams(
    co2_emission_rate=100,
    renewable_adoption=0,
    population_growth_rate=100,
    ai_regulation=0,
    conflict_probability=100,
    economic_expansion=0,
    geo_engineering_level=0,
    space_colonization=0,
)


def indicators_at(params, offset, milankovitch=0.0):
    """Every indicator at one offset with the astronomical phase pinned."""
    ctx = replace(build_context(params, offset), milankovitch=milankovitch)
    temp = temperature(params, ctx)
    pop = population(params, temp, ctx)
    bio = biodiversity(params, temp, ctx)
    conflict = conflict_index(params, temp)
    civ = civilization_level(params, temp, conflict, ctx)
    return {
        "temperature": temp,
        "population": pop,
        "gdp": gdp(params, temp, pop, ctx),
        "biodiversity": bio,
        "conflict_index": conflict,
        "civilization_level": civ,
        "earth_health_score": earth_health(temp, bio, conflict, civ),
        "sea_level": sea_level(temp, ctx),
        "ice_coverage_percent": ice_coverage(temp, ctx),
        "atmospheric_co2_ppm": atmospheric_co2(params, ctx),
    }


class TestGoldenValues:
    """Hand-evaluated indicator values for fixed scenarios."""

    # Offsets below the astronomical onset, so project_year is checked end to end
    @pytest.mark.parametrize("params, offset, expected", [
        (SimulationParams(), 150, {
            "temperature": 3.3, "population": 14.86, "gdp": 49.9, "biodiversity": 60,
            "conflict_index": 23, "civilization_level": 50, "earth_health_score": 62,
            "atmospheric_co2_ppm": 613, "sea_level": 1.05, "ice_coverage_percent": 4,
        }),
        (SimulationParams(), 250, {
            "temperature": 3.3, "population": 13.99, "gdp": 31.5, "biodiversity": 60,
            "conflict_index": 23, "civilization_level": 43, "earth_health_score": 61,
            "atmospheric_co2_ppm": 613,
        }),
        (SimulationParams(), 1500, {
            "temperature": 3.28, "population": 8.53, "gdp": 514.0, "biodiversity": 60,
            "conflict_index": 23, "civilization_level": 43, "earth_health_score": 61,
            "atmospheric_co2_ppm": 613, "sea_level": 1.04, "ice_coverage_percent": 4,
        }),
        (FOSSIL_BOOM, 150, {
            "temperature": 8.32, "population": 14.73, "gdp": 21.0, "biodiversity": 28,
            "conflict_index": 69, "civilization_level": 57, "earth_health_score": 26,
            "atmospheric_co2_ppm": 1060,
        }),
        (FOSSIL_BOOM, 250, {
            "temperature": 8.32, "population": 11.44, "gdp": 21.0, "biodiversity": 27,
            "conflict_index": 69, "civilization_level": 8, "earth_health_score": 16,
            "atmospheric_co2_ppm": 1060,
        }),
        (FOSSIL_BOOM, 1500, {
            "temperature": 8.3, "population": 5.34, "gdp": 213.6, "biodiversity": 27,
            "conflict_index": 68, "civilization_level": 8, "earth_health_score": 16,
            "atmospheric_co2_ppm": 1060,
        }),
        (EXTREME, 150, {
            "temperature": 8.94, "population": 17.58, "gdp": 21.0, "biodiversity": 18,
            "conflict_index": 100, "civilization_level": 29, "earth_health_score": 11,
            "atmospheric_co2_ppm": 1121, "sea_level": 3.87, "ice_coverage_percent": 0,
        }),
        (EXTREME, 250, {
            "temperature": 8.94, "population": 12.23, "gdp": 21.0, "biodiversity": 15,
            "conflict_index": 100, "civilization_level": 0, "earth_health_score": 5,
            "atmospheric_co2_ppm": 1121,
        }),
        (EXTREME, 1500, {
            "temperature": 8.88, "population": 4.21, "gdp": 120.1, "biodiversity": 16,
            "conflict_index": 100, "civilization_level": 0, "earth_health_score": 5,
            "atmospheric_co2_ppm": 1121,
        }),
    ])
    def test_near_term(self, params, offset, expected):
        d = project_year(params, EPOCH_YEAR + offset)
        assert {name: getattr(d, name) for name in expected} == pytest.approx(expected, abs=1e-9)

    # Deep offsets with the astronomical phase pinned at zero
    @pytest.mark.parametrize("params, offset, expected", [
        (SimulationParams(), 30000, {
            "temperature": 2.86, "population": 8.7, "gdp": 671.5, "biodiversity": 64,
            "conflict_index": 19, "earth_health_score": 67,
            "sea_level": 0.83, "ice_coverage_percent": 5,
        }),
        (SimulationParams(), 250000, {
            "temperature": 1.88, "population": 9.44, "gdp": 1961.6, "biodiversity": 47,
            "conflict_index": 17, "civilization_level": 61, "earth_health_score": 69,
        }),
        (SimulationParams(), 1000000, {
            "temperature": 2.11, "population": 10.87, "gdp": 7098.9, "biodiversity": 88,
            "conflict_index": 17, "civilization_level": 61, "earth_health_score": 80,
        }),
        (FOSSIL_BOOM, 30000, {
            "temperature": 8.01, "population": 5.41, "gdp": 277.2, "biodiversity": 29,
            "conflict_index": 66, "civilization_level": 17, "earth_health_score": 19,
            "atmospheric_co2_ppm": 1057,
        }),
        (FOSSIL_BOOM, 250000, {
            "temperature": 7.53, "population": 5.87, "gdp": 809.6, "biodiversity": 9,
            "conflict_index": 62, "civilization_level": 30, "earth_health_score": 16,
            "atmospheric_co2_ppm": 1035,
        }),
        (FOSSIL_BOOM, 1000000, {
            "temperature": 6.88, "population": 7.41, "gdp": 3212.1, "biodiversity": 55,
            "conflict_index": 57, "atmospheric_co2_ppm": 760,
        }),
        (EXTREME, 30000, {
            "temperature": 7.75, "population": 4.66, "gdp": 132.9, "biodiversity": 23,
            "conflict_index": 100, "civilization_level": 7, "earth_health_score": 8,
            "atmospheric_co2_ppm": 1121,
        }),
        (EXTREME, 250000, {
            "temperature": 7.81, "population": 5.0, "gdp": 142.6, "biodiversity": 5,
            "conflict_index": 100, "civilization_level": 13, "earth_health_score": 4,
        }),
        (EXTREME, 1000000, {
            "temperature": 8.04, "population": 5.0, "gdp": 142.6, "biodiversity": 41,
            "conflict_index": 100, "civilization_level": 12, "earth_health_score": 15,
        }),
    ])
    def test_deep_time(self, params, offset, expected):
        values = indicators_at(params, offset)
        assert {name: values[name] for name in expected} == pytest.approx(expected, abs=1e-9)

    def test_ice_age_phase_lowers_sea_and_grows_ice(self):
        values = indicators_at(SimulationParams(), 30000, milankovitch=-0.4)
        assert values["temperature"] == pytest.approx(1.86)
        assert values["sea_level"] == pytest.approx(24.33)
        assert values["ice_coverage_percent"] == 17

    @pytest.mark.parametrize("params", [SimulationParams(), FOSSIL_BOOM, EXTREME])
    @pytest.mark.parametrize("offset", [30000, 250000, 1000000])
    def test_project_year_uses_astronomical_phase(self, params, offset):
        d = project_year(params, EPOCH_YEAR + offset)
        values = indicators_at(params, offset, milankovitch=milankovitch_phase(offset))
        assert {name: getattr(d, name) for name in values} == values
