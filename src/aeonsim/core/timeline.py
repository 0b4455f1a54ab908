"""
Time-point generation and era classification.

The projection is evaluated on a fixed, non-uniform grid of years: dense
near the present, exponentially sparser into deep time.
"""

from enum import Enum
from functools import lru_cache
from typing import Tuple

from aeonsim.core.coefficients import EPOCH_YEAR, HORIZON_YEARS


# (segment end offset, step in years); each segment starts where the
# previous one ended
TIME_SEGMENTS: Tuple[Tuple[int, int], ...] = (
    (100, 1),
    (500, 10),
    (10_000, 100),
    (100_000, 500),
    (HORIZON_YEARS, 5_000),
)


class Era(str, Enum):
    """Multi-millennial epochs used to label a time point."""

    ANTHROPOCENE = "anthropocene"
    POST_HUMAN = "post-human"
    DEEP_CIVILIZATION = "deep-civilization"
    GEOLOGICAL = "geological"

    @property
    def label(self) -> str:
        return ERA_LABELS[self]


ERA_LABELS = {
    Era.ANTHROPOCENE: "Anthropocene",
    Era.POST_HUMAN: "Post-Human Era",
    Era.DEEP_CIVILIZATION: "Deep Civilization",
    Era.GEOLOGICAL: "Geological Future",
}

# Upper offset bound (exclusive) of each era, checked in order
ERA_THRESHOLDS: Tuple[Tuple[int, Era], ...] = (
    (500, Era.ANTHROPOCENE),
    (10_000, Era.POST_HUMAN),
    (100_000, Era.DEEP_CIVILIZATION),
)


@lru_cache(maxsize=1)
def generate_time_points() -> Tuple[int, ...]:
    """
    Generate the sorted, de-duplicated years at which the model is evaluated.

    Returns
    -------
    Tuple[int, ...]
        Strictly increasing years from ``EPOCH_YEAR`` to
        ``EPOCH_YEAR + HORIZON_YEARS`` inclusive. The grid does not depend
        on any parameter, so it is built once and shared.
    """
    points = set()
    start = 0
    for end, step in TIME_SEGMENTS:
        points.update(range(EPOCH_YEAR + start, EPOCH_YEAR + end + 1, step))
        start = end
    return tuple(sorted(points))


def classify_era(year: int) -> Tuple[Era, str]:
    """
    Map an absolute year to its era and human-readable label.

    Boundaries are inclusive on the lower side: ``EPOCH_YEAR + 500`` is
    already ``post-human``.
    """
    offset = year - EPOCH_YEAR
    for upper, era in ERA_THRESHOLDS:
        if offset < upper:
            return era, era.label
    return Era.GEOLOGICAL, Era.GEOLOGICAL.label
