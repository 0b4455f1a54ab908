"""CSV output writer."""

from typing import TYPE_CHECKING
from pathlib import Path
import logging

if TYPE_CHECKING:
    from aeonsim.core.results import ProjectionResults

logger = logging.getLogger(__name__)


def write_csv(
    results: "ProjectionResults",
    filepath: str | Path,
    include_header: bool = True,
) -> None:
    """
    Write projection results to CSV file.

    One row per snapshot. Values are written exactly as projected, so the
    rounding of every indicator survives the round trip.

    Parameters
    ----------
    results : ProjectionResults
        Projection results to export.
    filepath : str or Path
        Output file path.
    include_header : bool, optional
        Include column header. Default is True.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Writing CSV to: {filepath}")

    df = results.to_dataframe()
    df.insert(1, "offset", results.offsets)
    df["major_event"] = df["major_event"].fillna("")

    # Parameters as constant columns so a file is self-describing
    for name, value in results.params.to_dict().items():
        df[f"param_{name}"] = value

    df.to_csv(filepath, index=False, header=include_header)

    logger.info(f"CSV written: {len(df)} rows, years {df['year'].iloc[0]}-{df['year'].iloc[-1]}")
