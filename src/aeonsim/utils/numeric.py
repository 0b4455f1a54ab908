"""Small numeric helpers shared by the projector and the presentation layer."""

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round with ties going towards positive infinity.

    Python's ``round`` uses banker's rounding, which would make a stored
    value disagree with what an interactive front end displays for the same
    entry (``2.5`` -> ``3`` there, ``2`` here).

    Parameters
    ----------
    value : float
        Value to round.
    ndigits : int, optional
        Decimal places to keep. Default is 0.

    Returns
    -------
    float or int
        ``int`` when ``ndigits`` is 0, otherwise ``float``.
    """
    if ndigits == 0:
        return int(math.floor(value + 0.5))
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value to the closed interval [lower, upper]."""
    return max(lower, min(upper, value))


def ramp(elapsed: float, window: float) -> float:
    """Linear 0 -> 1 ramp over ``window`` years, saturating at 1."""
    return min(1.0, elapsed / window)
