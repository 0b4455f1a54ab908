"""NetCDF output writer (CF-style metadata)."""

from typing import TYPE_CHECKING, Dict, Tuple
from pathlib import Path
from datetime import datetime
import logging
import numpy as np

from aeonsim.core.coefficients import EPOCH_YEAR

if TYPE_CHECKING:
    from aeonsim.core.results import ProjectionResults

logger = logging.getLogger(__name__)


# name -> (dtype, units, long_name)
_INDICATOR_VARIABLES: Dict[str, Tuple[str, str, str]] = {
    "temperature": ("f8", "K", "Global mean temperature anomaly above pre-industrial"),
    "gdp": ("f8", "1e12 USD", "World GDP in constant 2025 dollars"),
    "population": ("f8", "1e9", "World population"),
    "biodiversity": ("i2", "percent", "Biodiversity survival index"),
    "earth_health_score": ("i2", "1", "Composite earth health score (0-100)"),
    "sea_level": ("f8", "m", "Sea level change relative to 2025"),
    "conflict_index": ("i2", "1", "Global conflict index (0-100)"),
    "ice_coverage_percent": ("i2", "percent", "Surface ice coverage"),
    "atmospheric_co2_ppm": ("i4", "ppm", "Atmospheric CO2 concentration"),
    "civilization_level": ("i2", "1", "Civilization level (0 extinct, 100 peak)"),
}


def write_netcdf(
    results: "ProjectionResults",
    filepath: str | Path,
    compression: bool = True,
    compression_level: int = 4,
) -> None:
    """
    Write projection results to NetCDF file.

    Creates a NetCDF4 file with one ``time`` dimension over the snapshot
    grid. The projection parameters and diagnostics are stored as global
    attributes, era and event labels as string variables.

    Parameters
    ----------
    results : ProjectionResults
        Projection results to export.
    filepath : str or Path
        Output file path.
    compression : bool, optional
        Enable zlib compression. Default is True.
    compression_level : int, optional
        Compression level (1-9). Default is 4.
    """
    import netCDF4 as nc

    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Writing NetCDF to: {filepath}")

    comp_kwargs = {}
    if compression:
        comp_kwargs = {"zlib": True, "complevel": compression_level}

    years = results.years
    n_time = len(years)

    with nc.Dataset(filepath, "w", format="NETCDF4") as ds:
        # Global attributes
        ds.title = "Million-Year Planetary Projection"
        ds.institution = "aeonsim"
        ds.source = "aeonsim deterministic projection model"
        ds.history = f"Created {datetime.now().isoformat()} by aeonsim"
        ds.Conventions = "CF-1.8"
        ds.epoch_year = EPOCH_YEAR
        ds.preset = results.preset_key or "custom"

        for name, value in results.params.to_dict().items():
            setattr(ds, f"param_{name}", int(value))

        for key, value in results.diagnostics.items():
            if value is not None:
                setattr(ds, f"diag_{key}", value)

        ds.createDimension("time", n_time)

        year_var = ds.createVariable("year", "i4", ("time",), **comp_kwargs)
        year_var.units = "year"
        year_var.long_name = "Calendar year"
        year_var[:] = years.astype(np.int32)

        offset_var = ds.createVariable("offset", "i4", ("time",), **comp_kwargs)
        offset_var.units = f"years since {EPOCH_YEAR}"
        offset_var.long_name = "Years since epoch"
        offset_var[:] = results.offsets.astype(np.int32)

        for name, (dtype, units, long_name) in _INDICATOR_VARIABLES.items():
            var = ds.createVariable(name, dtype, ("time",), **comp_kwargs)
            var.units = units
            var.long_name = long_name
            var[:] = results.series(name).astype(np.dtype(dtype))

        # Variable-length strings cannot be compressed
        era_var = ds.createVariable("era", str, ("time",))
        era_var.long_name = "Era classification"
        era_var.flag_meanings = "anthropocene post-human deep-civilization geological"
        era_var[:] = np.array([r.era.value for r in results.records], dtype=object)

        event_var = ds.createVariable("major_event", str, ("time",))
        event_var.long_name = "Dominant discrete event (empty when none)"
        event_var[:] = np.array([r.major_event or "" for r in results.records], dtype=object)

    logger.info(f"NetCDF written: {n_time} time steps, years {years[0]}-{years[-1]}")
