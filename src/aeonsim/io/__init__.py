"""Input/Output operations for aeonsim."""

from aeonsim.io.csv_writer import write_csv
from aeonsim.io.netcdf_writer import write_netcdf

__all__ = [
    "write_csv",
    "write_netcdf",
]
