"""
Display colour ramps.

These carry no numeric meaning beyond visualisation. The temperature ramp
is a piecewise-linear blend between HSL stops (cool blue -> amber -> hot
red), continuous at every stop; the health ramp is a three-step traffic light.
"""

from typing import NamedTuple, Tuple
import numpy as np

from aeonsim.core.coefficients import BASELINES


class HSLColor(NamedTuple):
    hue: float
    saturation: float
    lightness: float

    @property
    def css(self) -> str:
        return (
            f"hsl({_css_number(self.hue)}, {_css_number(self.saturation)}%, "
            f"{_css_number(self.lightness)}%)"
        )


def _css_number(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


# Warming span (°C above the present-day baseline) covered by the ramp
TEMPERATURE_SPAN = 6.0

# (normalised warming, colour); above RED_SEGMENT_START the ramp is
# hsl(0, 60 + 30n%, 50 + 10n%), reached by a short blend out of amber
RED_SEGMENT_START = 0.70

TEMPERATURE_STOPS: Tuple[Tuple[float, HSLColor], ...] = (
    (0.00, HSLColor(199, 89, 48)),
    (0.33, HSLColor(199, 89, 41.4)),
    (0.66, HSLColor(39.6, 89, 48)),
    (RED_SEGMENT_START, HSLColor(0, 81, 57)),
    (1.00, HSLColor(0, 90, 60)),
)

HEALTH_GOOD = HSLColor(142, 71, 45)
HEALTH_FAIR = HSLColor(38, 92, 50)
HEALTH_POOR = HSLColor(0, 84, 60)

HEALTH_GOOD_MIN = 70
HEALTH_FAIR_MIN = 40


def normalized_warming(temp: float) -> float:
    """Warming above the present-day baseline as a fraction of the ramp span."""
    return min(1.0, max(0.0, (temp - BASELINES.temperature) / TEMPERATURE_SPAN))


def temperature_color(temp: float) -> HSLColor:
    """Colour for a temperature in °C above pre-industrial."""
    n = normalized_warming(temp)
    xs = [x for x, _ in TEMPERATURE_STOPS]
    channels = zip(*(color for _, color in TEMPERATURE_STOPS))
    return HSLColor(*(float(np.interp(n, xs, channel)) for channel in channels))


def health_color(score: float) -> HSLColor:
    """Traffic-light colour for an earth-health score."""
    if score >= HEALTH_GOOD_MIN:
        return HEALTH_GOOD
    if score >= HEALTH_FAIR_MIN:
        return HEALTH_FAIR
    return HEALTH_POOR


def temperature_severity(temp: float) -> str:
    """Severity class used to style a temperature readout."""
    if temp < 2.0:
        return "nominal"
    if temp < 3.5:
        return "warning"
    return "critical"
