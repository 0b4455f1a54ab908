"""
Projection snapshots and the results container with export functionality.
"""

from typing import Optional, Dict, Any, List, Tuple, Iterator
from dataclasses import dataclass, field, asdict
from pathlib import Path
import logging
import math
import numpy as np
from numpy.typing import NDArray

from aeonsim.core.coefficients import EPOCH_YEAR
from aeonsim.core.params import SimulationParams
from aeonsim.core.timeline import Era, classify_era

logger = logging.getLogger(__name__)


# Numeric indicator fields of a snapshot, in export order
INDICATOR_FIELDS: Tuple[str, ...] = (
    "temperature",
    "gdp",
    "population",
    "biodiversity",
    "earth_health_score",
    "sea_level",
    "conflict_index",
    "ice_coverage_percent",
    "atmospheric_co2_ppm",
    "civilization_level",
)


@dataclass(frozen=True)
class YearData:
    """
    One immutable snapshot of the projected world.

    Attributes
    ----------
    year : int
        Absolute calendar year (>= 2025).
    temperature : float
        °C above pre-industrial, 2 decimals.
    gdp : float
        Trillion USD (constant 2025 dollars), 1 decimal.
    population : float
        Billions, 2 decimals.
    biodiversity : int
        0-100 survival index.
    earth_health_score : int
        0-100 composite.
    sea_level : float
        Metres relative to 2025, 2 decimals.
    conflict_index : int
        0-100.
    ice_coverage_percent : int
        Percent of surface covered in ice.
    atmospheric_co2_ppm : int
        Atmospheric CO₂ concentration.
    civilization_level : int
        0 (extinct) to 100 (peak).
    era : Era
        Classified era.
    era_label : str
        Human-readable era name.
    major_event : str, optional
        Dominant discrete event active at this point.
    """

    year: int
    temperature: float
    gdp: float
    population: float
    biodiversity: int
    earth_health_score: int
    sea_level: float
    conflict_index: int
    ice_coverage_percent: int
    atmospheric_co2_ppm: int
    civilization_level: int
    era: Era
    era_label: str
    major_event: Optional[str] = None

    @property
    def offset(self) -> int:
        """Years since the epoch."""
        return self.year - EPOCH_YEAR

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["era"] = self.era.value
        return data


@dataclass(frozen=True)
class ProjectionResults:
    """
    Container for one projection run together with the parameters that
    produced it.

    This is the explicit handoff object between a live view and a report
    view: whoever holds it holds both the last projection and its inputs.

    Attributes
    ----------
    records : Tuple[YearData, ...]
        Snapshots ordered by year.
    params : SimulationParams
        Parameters the projection was run with.
    preset_key : str, optional
        Preset the parameters came from, if any.
    diagnostics : dict
        Pre-computed diagnostic quantities.
    """

    records: Tuple[YearData, ...]
    params: SimulationParams
    preset_key: Optional[str] = None
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[YearData]:
        return iter(self.records)

    @property
    def years(self) -> NDArray[np.int64]:
        """Calendar years of all snapshots."""
        return np.array([r.year for r in self.records], dtype=np.int64)

    @property
    def offsets(self) -> NDArray[np.int64]:
        """Years since the epoch of all snapshots."""
        return self.years - EPOCH_YEAR

    @property
    def first(self) -> YearData:
        return self.records[0]

    @property
    def final(self) -> YearData:
        return self.records[-1]

    def series(self, name: str) -> NDArray[np.float64]:
        """
        Values of one indicator across the run.

        Raises
        ------
        KeyError
            If ``name`` is not an indicator field.
        """
        if name not in INDICATOR_FIELDS:
            raise KeyError(f"Unknown indicator '{name}'. Available: {list(INDICATOR_FIELDS)}")
        return np.array([getattr(r, name) for r in self.records], dtype=np.float64)

    @property
    def events(self) -> List[Tuple[int, str]]:
        """(year, name) of every labelled point, in order."""
        return [(r.year, r.major_event) for r in self.records if r.major_event]

    def nearest(self, year: float) -> YearData:
        """
        Snapshot closest to an arbitrary year.

        Ties resolve to the earlier snapshot.
        """
        years = self.years
        idx = int(np.searchsorted(years, year))
        if idx <= 0:
            return self.records[0]
        if idx >= len(years):
            return self.records[-1]
        before, after = years[idx - 1], years[idx]
        if abs(year - before) <= abs(after - year):
            return self.records[idx - 1]
        return self.records[idx]

    def thin(
        self,
        max_points: int = 300,
        up_to_year: Optional[float] = None,
    ) -> Tuple[YearData, ...]:
        """
        Subsample the run to at most ``max_points`` snapshots for charting.

        Parameters
        ----------
        max_points : int, optional
            Upper bound on the number of returned snapshots. Default is 300.
        up_to_year : float, optional
            Only consider snapshots at or before this year.

        Returns
        -------
        Tuple[YearData, ...]
            Every ``ceil(n / max_points)``-th visible snapshot, starting with
            the first.
        """
        if max_points < 1:
            raise ValueError(f"max_points must be positive, got {max_points}")
        visible = self.records
        if up_to_year is not None:
            visible = tuple(r for r in visible if r.year <= up_to_year)
        if len(visible) <= max_points:
            return visible
        step = math.ceil(len(visible) / max_points)
        return visible[::step]

    def resample(self, n_points: int = 200):
        """
        Interpolate indicators onto a log-spaced grid of offsets.

        The native grid is already dense near the present; this gives an
        evenly weighted view across every order of magnitude of the horizon.

        Parameters
        ----------
        n_points : int, optional
            Number of grid points. Default is 200.

        Returns
        -------
        pandas.DataFrame
            One row per grid point with ``year``, ``era`` and every indicator.
        """
        import pandas as pd
        from scipy.interpolate import interp1d

        if n_points < 2:
            raise ValueError(f"n_points must be at least 2, got {n_points}")

        offsets = self.offsets.astype(np.float64)
        grid = np.expm1(np.linspace(0.0, np.log1p(offsets[-1]), n_points))
        grid = np.clip(grid, offsets[0], offsets[-1])

        data: Dict[str, Any] = {"year": EPOCH_YEAR + grid}
        data["era"] = [classify_era(int(EPOCH_YEAR + g))[0].value for g in grid]
        for name in INDICATOR_FIELDS:
            interpolator = interp1d(offsets, self.series(name), kind="linear")
            data[name] = interpolator(grid)

        logger.debug(f"Resampled {len(self)} snapshots onto {n_points} log-spaced points")
        return pd.DataFrame(data)

    def summary(self) -> Dict[str, Any]:
        """Generate summary statistics."""
        temperature = self.series("temperature")
        biodiversity = self.series("biodiversity")
        population = self.series("population")
        years = self.years
        peak_idx = int(np.argmax(temperature))
        low_bio_idx = int(np.argmin(biodiversity))
        return {
            "preset": self.preset_key,
            "params": self.params.to_dict(),
            "n_points": len(self),
            "year_start": int(years[0]),
            "year_end": int(years[-1]),
            "peak_temperature": float(temperature[peak_idx]),
            "peak_temperature_year": int(years[peak_idx]),
            "min_biodiversity": int(biodiversity[low_bio_idx]),
            "min_biodiversity_year": int(years[low_bio_idx]),
            "max_population": float(np.max(population)),
            "final": self.final.to_dict(),
            "events": [name for _, name in self.events],
        }

    def to_dataframe(self):
        """Convert results to pandas DataFrame, one row per snapshot."""
        import pandas as pd

        return pd.DataFrame([r.to_dict() for r in self.records])

    def to_csv(
        self,
        filepath: str | Path,
        include_header: bool = True,
    ) -> None:
        """
        Export results to CSV file.

        Parameters
        ----------
        filepath : str or Path
            Output file path.
        include_header : bool, optional
            Include column header. Default is True.
        """
        from aeonsim.io.csv_writer import write_csv
        write_csv(self, filepath, include_header)

    def to_netcdf(
        self,
        filepath: str | Path,
        compression: bool = True,
        compression_level: int = 4,
    ) -> None:
        """
        Export results to NetCDF file.

        Parameters
        ----------
        filepath : str or Path
            Output file path.
        compression : bool, optional
            Enable compression. Default is True.
        compression_level : int, optional
            Compression level (1-9). Default is 4.
        """
        from aeonsim.io.netcdf_writer import write_netcdf
        write_netcdf(self, filepath, compression, compression_level)

    def __repr__(self) -> str:
        if not self.records:
            return f"ProjectionResults(empty, preset={self.preset_key!r})"
        return (
            f"ProjectionResults(preset={self.preset_key!r}, "
            f"years={self.first.year}-{self.final.year}, "
            f"n_points={len(self)}, "
            f"final_temperature={self.final.temperature:.2f}, "
            f"final_health={self.final.earth_health_score})"
        )
