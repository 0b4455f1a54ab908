"""
Playback state for stepping through a projection.

The state is an immutable value: every operation returns a new state and
the caller decides where to keep it.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from aeonsim.presentation.slider import SLIDER_MAX, slider_to_year

PLAY_SPEEDS: Tuple[int, ...] = (1, 5, 20)


@dataclass(frozen=True)
class PlaybackState:
    slider: int = 0
    playing: bool = False
    speed: int = PLAY_SPEEDS[0]

    @property
    def year(self) -> int:
        return slider_to_year(self.slider)

    @property
    def speed_label(self) -> str:
        return f"{self.speed}×"

    def play(self) -> "PlaybackState":
        return replace(self, playing=True)

    def pause(self) -> "PlaybackState":
        return replace(self, playing=False)

    def seek(self, slider: int) -> "PlaybackState":
        return replace(self, slider=max(0, min(SLIDER_MAX, slider)))

    def tick(self) -> "PlaybackState":
        """Advance one tick; playback stops when the end of the slider is reached."""
        if not self.playing:
            return self
        position = self.slider + self.speed
        if position >= SLIDER_MAX:
            return replace(self, slider=SLIDER_MAX, playing=False)
        return replace(self, slider=position)

    def cycle_speed(self) -> "PlaybackState":
        """1× -> 5× -> 20× -> 1×."""
        try:
            idx = PLAY_SPEEDS.index(self.speed)
        except ValueError:
            idx = -1
        return replace(self, speed=PLAY_SPEEDS[(idx + 1) % len(PLAY_SPEEDS)])

    def reset(self) -> "PlaybackState":
        return PlaybackState(speed=self.speed)
