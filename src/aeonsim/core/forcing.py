"""
Natural forcing that the policy parameters cannot influence.

Three independent generators, each a function of the offset (years since
the epoch) only:

    milankovitch_phase(o) = 0.5 cos(2πo/100k) + 0.3 cos(2πo/41k) + 0.2 cos(2πo/23k)
    volcanic_cooling(o)   = first event within 5 kyr: peak · exp(-|o - o_e| / 2 kyr)
    extinction_pulse(o)   = Σ events within 20 kyr:  drop · exp(-|o - o_e| / 5 kyr)

Volcanic cooling and extinction pulses are deliberately different policies:
the first event in range wins for volcanism, while extinction pulses from
every event in range are summed.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union
import math
import numpy as np
from numpy.typing import NDArray


# Orbital cycles: (period in years, weight). Positive = warming phase,
# negative = ice-age phase.
MILANKOVITCH_CYCLES: Tuple[Tuple[float, float], ...] = (
    (100_000.0, 0.5),  # eccentricity
    (41_000.0, 0.3),   # obliquity
    (23_000.0, 0.2),   # precession
)

VOLCANIC_WINDOW_YEARS = 5_000
VOLCANIC_DECAY_YEARS = 2_000
VOLCANIC_LABEL_YEARS = 500

EXTINCTION_WINDOW_YEARS = 20_000
EXTINCTION_DECAY_YEARS = 5_000
EXTINCTION_LABEL_YEARS = 1_000


@dataclass(frozen=True)
class VolcanicEvent:
    offset: int
    name: str
    cooling: float  # peak cooling in °C


@dataclass(frozen=True)
class ExtinctionEvent:
    offset: int
    name: str
    biodiversity_drop: float


SUPERVOLCANO_EVENTS: Tuple[VolcanicEvent, ...] = (
    VolcanicEvent(75_000, "Yellowstone Supervolcano Eruption", 4.5),
    VolcanicEvent(290_000, "Long Valley Caldera Reactivation", 3.0),
    VolcanicEvent(570_000, "Toba-Class Mega-Eruption", 6.0),
    VolcanicEvent(820_000, "East African Rift Mega-Volcanic Event", 3.5),
)

EXTINCTION_EVENTS: Tuple[ExtinctionEvent, ...] = (
    ExtinctionEvent(250_000, "Anthropogenic Mass Extinction Peaks", 30.0),
    ExtinctionEvent(570_000, "Mega-Volcanic Mass Extinction", 25.0),
    ExtinctionEvent(800_000, "Oceanic Anoxic Event", 20.0),
)


def check_volcanic_windows(
    events: Sequence[VolcanicEvent],
    window: float = VOLCANIC_WINDOW_YEARS,
) -> None:
    """
    Reject volcanic tables whose influence windows overlap.

    Volcanic cooling uses a first-match lookup, so an earlier event in the
    table would silently mask a later one if their windows overlapped.

    Raises
    ------
    ValueError
        If two event targets are closer than ``2 * window`` years.
    """
    targets = sorted(events, key=lambda e: e.offset)
    for earlier, later in zip(targets, targets[1:]):
        if later.offset - earlier.offset < 2 * window:
            raise ValueError(
                f"Volcanic events '{earlier.name}' ({earlier.offset}) and "
                f"'{later.name}' ({later.offset}) have overlapping "
                f"{window}-year windows"
            )


check_volcanic_windows(SUPERVOLCANO_EVENTS)


def milankovitch_phase(
    offset: Union[float, NDArray[np.float64]],
) -> Union[float, NDArray[np.float64]]:
    """
    Blend of the three orbital cosines.

    Parameters
    ----------
    offset : float or NDArray
        Years since the epoch.

    Returns
    -------
    float or NDArray
        Signed oscillation in [-1, 1]; positive is a warming phase.
    """
    phase = sum(
        weight * np.cos(2 * np.pi * np.asarray(offset, dtype=float) / period)
        for period, weight in MILANKOVITCH_CYCLES
    )
    if np.ndim(phase) == 0:
        return float(phase)
    return phase


def volcanic_cooling(
    offset: float,
    events: Sequence[VolcanicEvent] = SUPERVOLCANO_EVENTS,
) -> Tuple[float, Optional[str]]:
    """
    Cooling from the first volcanic event whose window contains ``offset``.

    Returns
    -------
    Tuple[float, Optional[str]]
        (cooling in °C, event name). The name is only attached within
        ``VOLCANIC_LABEL_YEARS`` of the event target.
    """
    for event in events:
        dist = abs(offset - event.offset)
        if dist < VOLCANIC_WINDOW_YEARS:
            cooling = event.cooling * math.exp(-dist / VOLCANIC_DECAY_YEARS)
            name = event.name if dist < VOLCANIC_LABEL_YEARS else None
            return cooling, name
    return 0.0, None


def extinction_pulse(
    offset: float,
    events: Sequence[ExtinctionEvent] = EXTINCTION_EVENTS,
) -> Tuple[float, Optional[str]]:
    """
    Summed biodiversity penalty from every extinction event in range.

    Returns
    -------
    Tuple[float, Optional[str]]
        (biodiversity drop, event name). When several events are within
        ``EXTINCTION_LABEL_YEARS``, the last one in table order names the point.
    """
    drop = 0.0
    name = None
    for event in events:
        dist = abs(offset - event.offset)
        if dist < EXTINCTION_WINDOW_YEARS:
            drop += event.biodiversity_drop * math.exp(-dist / EXTINCTION_DECAY_YEARS)
            if dist < EXTINCTION_LABEL_YEARS:
                name = event.name
    return drop, name
