"""
Logarithmic slider <-> year mapping.

A slider position s in [0, 1000] maps to ``EPOCH_YEAR + round(1e6 ** (s / 1000))``,
so each third of the slider covers one more order of magnitude of the
horizon. Both directions are clamped at the domain edges.
"""

import math

from aeonsim.core.coefficients import EPOCH_YEAR, HORIZON_YEARS
from aeonsim.utils.numeric import round_half_up

SLIDER_MAX = 1000


def slider_to_year(value: float) -> int:
    """
    Convert a slider position to an absolute year.

    ``slider_to_year(0) == EPOCH_YEAR`` and
    ``slider_to_year(SLIDER_MAX) == EPOCH_YEAR + HORIZON_YEARS`` exactly.
    """
    if value <= 0:
        return EPOCH_YEAR
    if value >= SLIDER_MAX:
        return EPOCH_YEAR + HORIZON_YEARS
    offset = round_half_up(HORIZON_YEARS ** (value / SLIDER_MAX))
    return EPOCH_YEAR + min(offset, HORIZON_YEARS)


def year_to_slider(year: float) -> int:
    """Inverse of :func:`slider_to_year`, rounded to the nearest position."""
    offset = year - EPOCH_YEAR
    if offset <= 0:
        return 0
    if offset >= HORIZON_YEARS:
        return SLIDER_MAX
    return round_half_up(math.log(offset) / math.log(HORIZON_YEARS) * SLIDER_MAX)
