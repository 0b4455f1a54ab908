"""
Projection model class for running scenarios with logging and diagnostics.
"""

from typing import Optional, Dict, Any, Union, Mapping, Sequence, List, Tuple
import logging
import numpy as np
from tqdm import tqdm

from aeonsim.core.params import SimulationParams, DEFAULT_PARAMS, PARAM_NAMES, params_from_mapping
from aeonsim.core.projector import project, project_year
from aeonsim.core.results import ProjectionResults, YearData
from aeonsim.core.timeline import generate_time_points
from aeonsim.utils.logging import start_step, end_step, log_error, log_calculation_issue


logger = logging.getLogger(__name__)


# Documented output ranges, checked after every run
OUTPUT_BOUNDS: Dict[str, Tuple[float, float]] = {
    "biodiversity": (0, 100),
    "conflict_index": (0, 100),
    "ice_coverage_percent": (0, 100),
    "civilization_level": (0, 100),
    "earth_health_score": (0, 100),
    "temperature": (-2, np.inf),
    "atmospheric_co2_ppm": (250, np.inf),
    "population": (0.01, np.inf),
    "gdp": (0, np.inf),
}


class ProjectionModel:
    """
    Million-year planetary projection with boundary validation.

    The model is the boundary layer around the pure projection core: it
    resolves presets and raw mappings into :class:`SimulationParams`, clamps
    out-of-range input to [0, 100] (logging every adjustment), runs the
    projection and attaches diagnostics.

    Parameters
    ----------
    workers : int, optional
        Worker threads used to evaluate time points. Default is 1.
    show_progress : bool, optional
        Show a progress bar while projecting. Default is False.
    """

    def __init__(self, workers: int = 1, show_progress: bool = False):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers
        self.show_progress = show_progress
        logger.info(f"Initialized ProjectionModel with workers={workers}")

    def resolve_params(
        self,
        params: Optional[Union[SimulationParams, Mapping[str, Any]]] = None,
        preset: Optional[str] = None,
    ) -> SimulationParams:
        """
        Turn a preset and/or a parameter mapping into clamped parameters.

        Explicit ``params`` override the preset's values field by field.

        Raises
        ------
        KeyError
            If ``preset`` is unknown.
        ValueError
            If ``params`` names an unknown parameter or holds a non-finite value.
        """
        from aeonsim.scenarios import get_preset

        base = get_preset(preset)["params"] if preset else DEFAULT_PARAMS

        if params is None:
            resolved = base
        elif isinstance(params, SimulationParams):
            resolved, changed = params.clamped()
            if changed:
                log_calculation_issue(
                    "Parameter clamping",
                    f"{len(changed)} parameter(s) outside [0, 100]",
                    {name: getattr(params, name) for name in changed},
                )
        else:
            resolved = params_from_mapping(params, base=base)

        return resolved

    def run(
        self,
        params: Optional[Union[SimulationParams, Mapping[str, Any]]] = None,
        preset: Optional[str] = None,
        show_progress: Optional[bool] = None,
    ) -> ProjectionResults:
        """
        Run the projection with step timing and validation.

        Parameters
        ----------
        params : SimulationParams or mapping, optional
            Parameters (or a partial mapping of them). Defaults apply to
            anything not given.
        preset : str, optional
            Named preset used as the base before ``params`` is applied.
        show_progress : bool, optional
            Override the model's progress-bar setting for this run.

        Returns
        -------
        ProjectionResults
            Snapshots plus the parameters and diagnostics of the run.
        """
        show_progress = self.show_progress if show_progress is None else show_progress

        # =====================================================================
        # STEP 1: Parameter Resolution
        # =====================================================================
        start_step("Parameter resolution")
        try:
            resolved = self.resolve_params(params, preset)
            logger.info(f"Using parameters: {resolved.to_dict()}")
            if preset:
                logger.info(f"Base preset: {preset}")
            end_step(success=True)
        except Exception as e:
            log_error(e, "Parameter resolution")
            end_step(success=False)
            raise

        # =====================================================================
        # STEP 2: Projection
        # =====================================================================
        start_step("Projection")
        try:
            years = generate_time_points()
            logger.debug(f"Evaluating {len(years)} time points, "
                         f"{years[0]} to {years[-1]}")

            if self.workers > 1:
                records = project(resolved, workers=self.workers)
            else:
                records = tuple(
                    project_year(resolved, year)
                    for year in tqdm(years, desc="Projecting", unit="pt",
                                     disable=not show_progress)
                )

            logger.info(f"Projection complete: {len(records)} snapshots")
            end_step(success=True)
        except Exception as e:
            log_error(e, "Projection")
            end_step(success=False)
            raise

        # =====================================================================
        # STEP 3: Validation and Diagnostics
        # =====================================================================
        start_step("Validation and diagnostics")
        try:
            self._validate_records(records)
            diagnostics = self._compute_diagnostics(records)

            logger.info(f"Peak temperature: {diagnostics['peak_temperature']:.2f} °C "
                        f"(year {diagnostics['peak_temperature_year']})")
            if diagnostics["first_2c_year"]:
                logger.info(f"2 °C first crossed: year {diagnostics['first_2c_year']}")
            logger.info(f"Labelled events: {diagnostics['n_events']}")
            end_step(success=True)
        except Exception as e:
            log_error(e, "Validation and diagnostics")
            end_step(success=False)
            raise

        return ProjectionResults(
            records=records,
            params=resolved,
            preset_key=preset,
            diagnostics=diagnostics,
        )

    def _validate_records(self, records: Sequence[YearData]) -> None:
        """Check ordering and documented output ranges; log any violation."""
        issues = []

        years = np.array([r.year for r in records])
        if len(years) > 1 and not np.all(np.diff(years) > 0):
            issues.append("years not strictly increasing")

        for name, (lower, upper) in OUTPUT_BOUNDS.items():
            values = np.array([getattr(r, name) for r in records], dtype=float)
            n_bad = int(np.sum((values < lower) | (values > upper)))
            if n_bad:
                issues.append(f"{name}: {n_bad} value(s) outside [{lower}, {upper}]")

        if issues:
            log_calculation_issue(
                "Projection validation",
                "; ".join(issues),
                {"n_records": len(records)},
            )

    def _compute_diagnostics(self, records: Sequence[YearData]) -> Dict[str, Any]:
        temperature = np.array([r.temperature for r in records])
        years = np.array([r.year for r in records])
        peak_idx = int(np.argmax(temperature))

        above_2c = np.where(temperature >= 2.0)[0]
        first_2c_year = int(years[above_2c[0]]) if len(above_2c) else None

        return {
            "peak_temperature": float(temperature[peak_idx]),
            "peak_temperature_year": int(years[peak_idx]),
            "first_2c_year": first_2c_year,
            "n_events": sum(1 for r in records if r.major_event),
            "final_civilization_level": records[-1].civilization_level,
        }

    def sensitivity_analysis(
        self,
        parameter: str,
        values: Optional[Sequence[float]] = None,
        base: Optional[Union[SimulationParams, Mapping[str, Any]]] = None,
        preset: Optional[str] = None,
    ) -> List[Tuple[int, Optional[ProjectionResults]]]:
        """
        Sweep one parameter while holding the others fixed.

        Parameters
        ----------
        parameter : str
            Parameter name to sweep.
        values : sequence of float, optional
            Values to test. Default is 0, 10, ..., 100.
        base : SimulationParams or mapping, optional
            Values for the other parameters.
        preset : str, optional
            Preset used as the base.

        Returns
        -------
        list
            List of (value, ProjectionResults) tuples; the results entry is
            None for a sample that failed.

        Raises
        ------
        ValueError
            If ``parameter`` is not a known parameter name.
        """
        if parameter not in PARAM_NAMES:
            raise ValueError(f"Unknown parameter '{parameter}'. Available: {list(PARAM_NAMES)}")
        if values is None:
            values = range(0, 101, 10)

        start_step(f"Sensitivity analysis: {parameter}")
        try:
            base_params = self.resolve_params(base, preset)
            results_list = []
            for value in tqdm(values, desc=f"Sweeping {parameter}", disable=not self.show_progress):
                logger.debug(f"Running sensitivity sample {parameter}={value}")
                try:
                    sample = params_from_mapping({parameter: value}, base=base_params)
                    results_list.append(
                        (getattr(sample, parameter), self.run(sample, preset=preset, show_progress=False))
                    )
                except Exception as e:
                    log_error(e, f"Sensitivity sample {parameter}={value}")
                    results_list.append((value, None))
            end_step(success=True)
            return results_list
        except Exception as e:
            log_error(e, "Sensitivity analysis")
            end_step(success=False)
            raise

    def __repr__(self) -> str:
        return f"ProjectionModel(workers={self.workers}, show_progress={self.show_progress})"
