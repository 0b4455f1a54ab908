"""Year formatting at two granularities."""

from aeonsim.core.coefficients import EPOCH_YEAR
from aeonsim.utils.numeric import round_half_up


def format_year(year: int) -> str:
    """
    Compact year label.

    Examples
    --------
    >>> format_year(2025)
    '2025'
    >>> format_year(2525)
    '2,525'
    >>> format_year(77025)
    '2025+75K'
    >>> format_year(1002025)
    '2025+1M'
    """
    offset = year - EPOCH_YEAR
    if offset == 0:
        return str(EPOCH_YEAR)
    if offset < 1000:
        return f"{year:,}"
    if offset < 1_000_000:
        return f"{EPOCH_YEAR}+{round_half_up(offset / 1000)}K"
    return f"{EPOCH_YEAR}+1M"


def format_year_full(year: int) -> str:
    """
    Full year label.

    Examples
    --------
    >>> format_year_full(12025)
    'Year 12,025'
    >>> format_year_full(1002025)
    'Year 1.00M'
    """
    if year < 1_000_000:
        return f"Year {year:,}"
    return f"Year {year / 1_000_000:.2f}M"
