"""Display helpers shared with user interfaces."""

from aeonsim.presentation.slider import SLIDER_MAX, slider_to_year, year_to_slider
from aeonsim.presentation.formatting import format_year, format_year_full
from aeonsim.presentation.colors import (
    HSLColor,
    temperature_color,
    health_color,
    temperature_severity,
)
from aeonsim.presentation.playback import PlaybackState, PLAY_SPEEDS

__all__ = [
    "SLIDER_MAX",
    "slider_to_year",
    "year_to_slider",
    "format_year",
    "format_year_full",
    "HSLColor",
    "temperature_color",
    "health_color",
    "temperature_severity",
    "PlaybackState",
    "PLAY_SPEEDS",
]
