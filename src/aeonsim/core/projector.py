"""
Per-point projector and the engine entry point.

For one (parameters, year) pair the projector computes ten coupled
indicators. Quantities that several indicators depend on (net emission,
anthropogenic warming, collapse probability, natural forcing) are computed
once per point in a :class:`PointContext` and threaded through each field.

Coupling order:

    context -> temperature -> CO₂, sea level, ice, population
            -> GDP (needs population) -> biodiversity -> conflict index
            -> civilization level (needs conflict index)
            -> earth health (needs biodiversity, conflict, civilization)

``project`` is a pure function of the parameters: no randomness, no I/O,
no state shared between calls.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Tuple
import math

from aeonsim.core.coefficients import (
    EPOCH_YEAR,
    HORIZON_YEARS,
    MILANKOVITCH_ONSET_OFFSET,
    BASELINES,
    EMISSION,
    TEMPERATURE,
    COLLAPSE,
    CARBON,
    SEA_LEVEL,
    ICE,
    POPULATION,
    GDP,
    BIODIVERSITY,
    CONFLICT,
    CIVILIZATION,
    HEALTH,
)
from aeonsim.core.forcing import milankovitch_phase, volcanic_cooling, extinction_pulse
from aeonsim.core.params import SimulationParams
from aeonsim.core.results import YearData
from aeonsim.core.timeline import classify_era, generate_time_points
from aeonsim.utils.numeric import clamp, ramp, round_half_up


@dataclass(frozen=True)
class PointContext:
    """Intermediates shared by several indicator formulas at one time point."""

    offset: int
    net_emission: float
    anthropogenic_warming: float
    collapse_probability: float
    milankovitch: float
    volcanic_cooling: float
    volcanic_event: Optional[str]
    extinction_drop: float
    extinction_event: Optional[str]

    @property
    def t100(self) -> float:
        return ramp(self.offset, EMISSION.ramp_years)


def net_emission(params: SimulationParams) -> float:
    """Emission left after the renewable offset, never negative."""
    return max(
        0.0,
        params.co2_emission_rate / 100
        - (params.renewable_adoption / 100) * EMISSION.renewable_offset,
    )


def anthropogenic_warming(params: SimulationParams, net: float, offset: int) -> float:
    """Warming before geo-engineering and natural forcing are applied."""
    t100 = ramp(offset, EMISSION.ramp_years)
    co2 = params.co2_emission_rate / 100
    c = TEMPERATURE
    if net > 0:
        return (
            BASELINES.temperature
            + net * c.emission_log_gain * math.log(1 + t100 * c.emission_log_curvature)
            + co2 * c.emission_linear_gain * t100
        )
    return BASELINES.temperature + co2 * c.residual_linear_gain * t100


def collapse_probability(params: SimulationParams, warming: float) -> float:
    """Likelihood of civilizational breakdown, from conflict and runaway warming."""
    runaway = (
        COLLAPSE.runaway_warming_weight
        if warming > COLLAPSE.runaway_warming_threshold
        else 0.0
    )
    return (params.conflict_probability / 100) * COLLAPSE.conflict_weight + runaway


def build_context(params: SimulationParams, offset: int) -> PointContext:
    net = net_emission(params)
    warming = anthropogenic_warming(params, net, offset)
    cooling, volcanic_event = volcanic_cooling(offset)
    drop, extinction_event = extinction_pulse(offset)
    return PointContext(
        offset=offset,
        net_emission=net,
        anthropogenic_warming=warming,
        collapse_probability=collapse_probability(params, warming),
        milankovitch=(
            milankovitch_phase(offset) if offset > MILANKOVITCH_ONSET_OFFSET else 0.0
        ),
        volcanic_cooling=cooling,
        volcanic_event=volcanic_event,
        extinction_drop=drop,
        extinction_event=extinction_event,
    )


# =============================================================================
# PHYSICAL INDICATORS
# =============================================================================

def temperature(params: SimulationParams, ctx: PointContext) -> float:
    c = TEMPERATURE
    offset = ctx.offset
    geo_cooling = (
        (params.geo_engineering_level / 100) * ramp(offset, c.geo_ramp_years) * c.geo_cooling_max
    )
    drawdown = min(
        c.drawdown_cap,
        (offset / c.drawdown_window_years) * c.drawdown_rate_per_10k
        * (params.renewable_adoption / 100),
    )
    solar = (offset / HORIZON_YEARS) * c.solar_brightening

    value = (
        ctx.anthropogenic_warming
        - geo_cooling
        - drawdown
        + ctx.milankovitch * c.milankovitch_amplitude
        - ctx.volcanic_cooling
        + solar
    )

    # Post-collapse emissions halt lets the planet cool
    if offset > c.collapse_onset_offset and ctx.collapse_probability > c.collapse_threshold:
        recovery = (
            ramp(offset - c.collapse_onset_offset, c.collapse_ramp_years)
            * (ctx.collapse_probability - c.collapse_threshold) * 2
        )
        value -= recovery * c.collapse_cooling

    return round_half_up(max(c.floor, value), 2)


def atmospheric_co2(params: SimulationParams, ctx: PointContext) -> int:
    c = CARBON
    peak = BASELINES.co2_ppm + ctx.net_emission * c.peak_gain * ctx.t100
    drawdown = min(
        c.drawdown_cap,
        (ctx.offset / c.drawdown_window_years) * c.drawdown_gain
        * (params.renewable_adoption / 100),
    )
    return round_half_up(max(c.floor_ppm, peak - drawdown))


def sea_level(temp: float, ctx: PointContext) -> float:
    thermal = (temp - BASELINES.temperature) * SEA_LEVEL.thermal_m_per_degree
    # Ice ages lock water away and lower the sea
    astronomical = -ctx.milankovitch * SEA_LEVEL.milankovitch_m
    return round_half_up(thermal + astronomical, 2)


def ice_coverage(temp: float, ctx: PointContext) -> int:
    value = (
        BASELINES.ice_coverage
        - (temp - BASELINES.temperature) * ICE.percent_per_degree
        - ctx.milankovitch * ICE.milankovitch_percent
    )
    return round_half_up(clamp(value, 0, 100))


# =============================================================================
# SOCIOECONOMIC INDICATORS
# =============================================================================

def _temperature_stress(temp: float) -> float:
    c = POPULATION
    return max(c.stress_floor, 1 - (temp - c.stress_threshold) * c.stress_per_degree)


def population(params: SimulationParams, temp: float, ctx: PointContext) -> float:
    c = POPULATION
    offset = ctx.offset
    growth_rate = (params.population_growth_rate / 100) * c.growth_rate

    if offset <= c.near_term_limit:
        value = BASELINES.population * (1 + growth_rate * offset * _temperature_stress(temp))
    else:
        peak = BASELINES.population * (
            1 + growth_rate * c.near_term_limit * _temperature_stress(temp)
        )
        capacity = max(
            c.capacity_floor,
            c.capacity_renewable_gain * (params.renewable_adoption / 100)
            * (1 - temp / c.capacity_lethal_temperature)
            + c.capacity_base,
        )
        value = (capacity * peak) / (
            peak + (capacity - peak) * math.exp(-c.logistic_rate * (offset - c.near_term_limit))
        )

        # Crash, then recover towards the pre-collapse trajectory
        if ctx.collapse_probability > c.collapse_threshold and offset > c.collapse_onset_offset:
            crash = 1 - (ctx.collapse_probability - c.collapse_threshold) * c.crash_severity
            recovery = ramp(offset - c.collapse_onset_offset, c.recovery_years)
            value *= crash + recovery * (1 - crash)

        off_world = (params.space_colonization / 100) * (offset / HORIZON_YEARS) * c.off_world_gain
        value += off_world

    return round_half_up(max(c.floor, value), 2)


def gdp(params: SimulationParams, temp: float, pop: float, ctx: PointContext) -> float:
    c = GDP
    offset = ctx.offset

    if offset < c.near_term_limit:
        growth = (params.economic_expansion / 100) * c.growth_rate
        ai_boost = (1 - params.ai_regulation / 100) * c.ai_boost * ramp(offset, c.ai_ramp_years)
        climate_penalty = max(0.0, (temp - c.climate_penalty_threshold) * c.climate_penalty_rate)
        conflict_penalty = (
            (params.conflict_probability / 100) * c.conflict_penalty_rate
            * ramp(offset, c.conflict_ramp_years)
        )
        multiplier = max(
            c.multiplier_floor,
            1 + (growth + ai_boost - climate_penalty - conflict_penalty)
            * min(offset, c.compounding_years_cap),
        )
        value = BASELINES.gdp * multiplier
    else:
        # Multi-planetary economy scaled by population and civilizational health
        norm_offset = min(1.0, offset / HORIZON_YEARS)
        tech = 1 + (params.space_colonization / 100) * c.space_tech_gain * norm_offset
        civ_factor = max(0.0, 1 - ctx.collapse_probability * c.collapse_drag)
        value = BASELINES.gdp * c.long_run_scale * tech * civ_factor * pop / BASELINES.population

    return round_half_up(max(0.0, value), 1)


def biodiversity(params: SimulationParams, temp: float, ctx: PointContext) -> int:
    c = BIODIVERSITY
    offset = ctx.offset
    temp_stress = max(0.0, (temp - c.stress_threshold) * c.stress_per_degree)
    conflict_stress = (
        (params.conflict_probability / 100) * c.conflict_stress * ramp(offset, c.conflict_ramp_years)
    )
    renewable_boost = (
        (params.renewable_adoption / 100) * c.renewable_boost * ramp(offset, c.renewable_ramp_years)
    )
    geo_boost = (params.geo_engineering_level / 100) * c.geo_boost * ramp(offset, c.geo_ramp_years)
    evolution = (
        min(c.evolution_cap, (offset - c.evolution_onset_offset) / c.evolution_ramp_years)
        if offset > c.evolution_onset_offset
        else 0.0
    )
    value = (
        BASELINES.biodiversity
        - temp_stress
        - conflict_stress
        + renewable_boost
        + geo_boost
        - ctx.extinction_drop
        + evolution
    )
    return round_half_up(clamp(value, c.floor, c.ceiling))


def conflict_index(params: SimulationParams, temp: float) -> int:
    c = CONFLICT
    economic_stress = max(0.0, (c.economic_reference - params.economic_expansion) / c.economic_reference)
    climate_rage = max(0.0, (temp - c.rage_threshold) * c.rage_per_degree)
    value = (
        params.conflict_probability * c.probability_weight
        + economic_stress * c.economic_stress_weight
        + climate_rage
    )
    return round_half_up(clamp(value, 0, 100))


def civilization_level(
    params: SimulationParams,
    temp: float,
    conflict: int,
    ctx: PointContext,
) -> int:
    c = CIVILIZATION
    offset = ctx.offset
    if offset < c.near_term_limit:
        value = (
            c.base_level
            + (params.economic_expansion - c.economic_reference) * c.economic_weight
            + (params.renewable_adoption - c.renewable_reference) * c.renewable_weight
        )
    else:
        tech = min(c.tech_cap, (offset / c.tech_window_years) * c.tech_gain) * (
            params.space_colonization / 100 + c.tech_space_baseline
        )
        decline = conflict * c.conflict_decline + max(0.0, temp - c.overheat_threshold) * c.overheat_decline
        value = c.base_level + tech - decline
    return round_half_up(clamp(value, 0, 100))


def earth_health(temp: float, bio: int, conflict: int, civ: int) -> int:
    c = HEALTH
    temp_score = max(0.0, 100 - (temp - c.temperature_reference) * c.temperature_penalty)
    value = (
        temp_score * c.temperature_weight
        + bio * c.biodiversity_weight
        + (100 - conflict) * c.peace_weight
        + civ * c.civilization_weight
    )
    return round_half_up(clamp(value, 0, 100))


# =============================================================================
# ENTRY POINTS
# =============================================================================

def project_year(params: SimulationParams, year: int) -> YearData:
    """
    Compute every indicator for one year.

    Parameters
    ----------
    params : SimulationParams
        Policy parameters, assumed already within [0, 100].
    year : int
        Absolute year, at or after the epoch.

    Returns
    -------
    YearData
        Immutable snapshot for ``year``.
    """
    ctx = build_context(params, year - EPOCH_YEAR)
    era, era_label = classify_era(year)

    temp = temperature(params, ctx)
    pop = population(params, temp, ctx)
    bio = biodiversity(params, temp, ctx)
    conflict = conflict_index(params, temp)
    civ = civilization_level(params, temp, conflict, ctx)

    return YearData(
        year=year,
        temperature=temp,
        gdp=gdp(params, temp, pop, ctx),
        population=pop,
        biodiversity=bio,
        earth_health_score=earth_health(temp, bio, conflict, civ),
        sea_level=sea_level(temp, ctx),
        conflict_index=conflict,
        ice_coverage_percent=ice_coverage(temp, ctx),
        atmospheric_co2_ppm=atmospheric_co2(params, ctx),
        civilization_level=civ,
        era=era,
        era_label=era_label,
        # Volcanic names take precedence over extinction names
        major_event=ctx.volcanic_event or ctx.extinction_event,
    )


def project(params: SimulationParams, workers: int = 1) -> Tuple[YearData, ...]:
    """
    Project the full million-year trajectory.

    Points are independent, so with ``workers > 1`` they are evaluated on a
    thread pool; the output is ordered by year either way.

    Parameters
    ----------
    params : SimulationParams
        Policy parameters, assumed already within [0, 100].
    workers : int, optional
        Number of worker threads. Default is 1 (evaluate inline).

    Returns
    -------
    Tuple[YearData, ...]
        One snapshot per generated time point, strictly increasing by year.
    """
    years = generate_time_points()
    if workers <= 1:
        return tuple(project_year(params, year) for year in years)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return tuple(executor.map(lambda year: project_year(params, year), years))
