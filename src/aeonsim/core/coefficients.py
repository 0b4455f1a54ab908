"""
Named coefficients for the per-point projector.

Every threshold, decay constant, ramp window and weight used by
:mod:`aeonsim.core.projector` lives here, grouped by the field it drives.
The projector reads these tables instead of inline literals.

Units
-----
Offsets and windows are in years since the epoch, temperatures in °C above
pre-industrial, GDP in trillion USD (constant 2025 dollars), population in
billions, CO₂ in ppm, sea level in metres relative to 2025.
"""

from dataclasses import dataclass


# =============================================================================
# EPOCH AND HORIZON
# =============================================================================

EPOCH_YEAR = 2025
HORIZON_YEARS = 1_000_000


# =============================================================================
# PRESENT-DAY BASELINES
# =============================================================================

@dataclass(frozen=True)
class Baselines:
    temperature: float = 1.2
    gdp: float = 105.0
    population: float = 8.1
    biodiversity: float = 72.0
    co2_ppm: float = 421.0
    ice_coverage: float = 12.0


# =============================================================================
# PER-FIELD COEFFICIENT TABLES
# =============================================================================

@dataclass(frozen=True)
class EmissionCoefficients:
    """Net emission = max(0, co2 - renewable_offset * renewable)."""
    renewable_offset: float = 0.75
    ramp_years: float = 100.0


@dataclass(frozen=True)
class TemperatureCoefficients:
    emission_log_gain: float = 4.5
    emission_log_curvature: float = 3.0
    emission_linear_gain: float = 1.5
    # Used when net emission is zero
    residual_linear_gain: float = 0.5
    geo_cooling_max: float = 1.8
    geo_ramp_years: float = 50.0
    drawdown_rate_per_10k: float = 0.5
    drawdown_window_years: float = 10_000.0
    drawdown_cap: float = 1.5
    milankovitch_amplitude: float = 2.5
    solar_brightening: float = 0.3
    collapse_onset_offset: float = 500.0
    collapse_threshold: float = 0.5
    collapse_ramp_years: float = 20_000.0
    collapse_cooling: float = 2.0
    floor: float = -2.0


@dataclass(frozen=True)
class CollapseCoefficients:
    conflict_weight: float = 0.4
    runaway_warming_threshold: float = 4.0
    runaway_warming_weight: float = 0.4


@dataclass(frozen=True)
class CarbonCoefficients:
    peak_gain: float = 700.0
    drawdown_window_years: float = 100_000.0
    drawdown_gain: float = 200.0
    drawdown_cap: float = 300.0
    floor_ppm: float = 250.0


@dataclass(frozen=True)
class SeaLevelCoefficients:
    thermal_m_per_degree: float = 0.5
    milankovitch_m: float = 60.0


@dataclass(frozen=True)
class IceCoefficients:
    percent_per_degree: float = 4.0
    milankovitch_percent: float = 20.0


@dataclass(frozen=True)
class PopulationCoefficients:
    near_term_limit: float = 200.0
    growth_rate: float = 0.013
    stress_threshold: float = 1.5
    stress_per_degree: float = 0.08
    stress_floor: float = 0.6
    capacity_renewable_gain: float = 15.0
    capacity_lethal_temperature: float = 15.0
    capacity_base: float = 5.0
    capacity_floor: float = 1.0
    logistic_rate: float = 0.005
    collapse_threshold: float = 0.6
    collapse_onset_offset: float = 1_000.0
    crash_severity: float = 0.8
    recovery_years: float = 50_000.0
    off_world_gain: float = 20.0
    floor: float = 0.01


@dataclass(frozen=True)
class GDPCoefficients:
    near_term_limit: float = 1_000.0
    compounding_years_cap: float = 200.0
    growth_rate: float = 0.035
    ai_boost: float = 0.025
    ai_ramp_years: float = 100.0
    climate_penalty_threshold: float = 2.0
    climate_penalty_rate: float = 0.025
    conflict_penalty_rate: float = 0.02
    conflict_ramp_years: float = 100.0
    multiplier_floor: float = 0.2
    long_run_scale: float = 5.0
    space_tech_gain: float = 100.0
    collapse_drag: float = 0.7


@dataclass(frozen=True)
class BiodiversityCoefficients:
    stress_threshold: float = 1.5
    stress_per_degree: float = 6.0
    conflict_stress: float = 12.0
    conflict_ramp_years: float = 200.0
    renewable_boost: float = 8.0
    renewable_ramp_years: float = 200.0
    geo_boost: float = 5.0
    geo_ramp_years: float = 5_000.0
    evolution_onset_offset: float = 100_000.0
    evolution_ramp_years: float = 20_000.0
    evolution_cap: float = 20.0
    floor: float = 5.0
    ceiling: float = 100.0


@dataclass(frozen=True)
class ConflictCoefficients:
    probability_weight: float = 0.55
    economic_reference: float = 50.0
    economic_stress_weight: float = 25.0
    rage_threshold: float = 2.5
    rage_per_degree: float = 8.0


@dataclass(frozen=True)
class CivilizationCoefficients:
    near_term_limit: float = 200.0
    base_level: float = 50.0
    economic_reference: float = 50.0
    economic_weight: float = 0.3
    renewable_reference: float = 30.0
    renewable_weight: float = 0.2
    tech_window_years: float = 50_000.0
    tech_gain: float = 30.0
    tech_cap: float = 40.0
    tech_space_baseline: float = 0.3
    conflict_decline: float = 0.3
    overheat_threshold: float = 4.0
    overheat_decline: float = 5.0


@dataclass(frozen=True)
class HealthCoefficients:
    temperature_reference: float = 1.2
    temperature_penalty: float = 18.0
    temperature_weight: float = 0.3
    biodiversity_weight: float = 0.3
    peace_weight: float = 0.2
    civilization_weight: float = 0.2


BASELINES = Baselines()
EMISSION = EmissionCoefficients()
TEMPERATURE = TemperatureCoefficients()
COLLAPSE = CollapseCoefficients()
CARBON = CarbonCoefficients()
SEA_LEVEL = SeaLevelCoefficients()
ICE = IceCoefficients()
POPULATION = PopulationCoefficients()
GDP = GDPCoefficients()
BIODIVERSITY = BiodiversityCoefficients()
CONFLICT = ConflictCoefficients()
CIVILIZATION = CivilizationCoefficients()
HEALTH = HealthCoefficients()

# Astronomical forcing only matters beyond this offset
MILANKOVITCH_ONSET_OFFSET = 10_000
