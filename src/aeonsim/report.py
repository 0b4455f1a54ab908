"""
Million-year scenario report.

Builds the follow-up report for a finished projection: snapshots at key
years, the tipping points crossed, a headline per key year and a closing
narrative. The report is derived entirely from a :class:`ProjectionResults`
handed in by the caller.
"""

from dataclasses import dataclass
from typing import Optional, List, Sequence, Tuple
import logging

from aeonsim.core.coefficients import EPOCH_YEAR
from aeonsim.core.params import SimulationParams
from aeonsim.core.results import ProjectionResults, YearData
from aeonsim.errors import MissingProjectionError
from aeonsim.presentation.formatting import format_year_full

logger = logging.getLogger(__name__)


KEY_YEAR_OFFSETS: Tuple[int, ...] = (100, 500, 2000, 10000, 100000, 500000, 1000000)
MAX_TIPPING_POINTS = 12


@dataclass(frozen=True)
class TippingPoint:
    year: int
    event: str
    severity: str  # "warning" or "danger"
    kind: str      # "temperature", "biodiversity", "sea", "ice" or "event"


@dataclass(frozen=True)
class Headline:
    year: int
    text: str
    tone: str  # "positive", "neutral" or "negative"


@dataclass(frozen=True)
class Report:
    params: SimulationParams
    final: YearData
    peak_temperature: float
    key_years: Tuple[YearData, ...]
    tipping_points: Tuple[TippingPoint, ...]
    headlines: Tuple[Headline, ...]
    narrative: str

    def to_text(self) -> str:
        """Render the report as plain text."""
        f = self.final
        lines = [
            "═" * 70,
            "  SCENARIO REPORT · 1,000,000 YEAR ANALYSIS",
            f"  From {EPOCH_YEAR} to {format_year_full(f.year)}",
            "═" * 70,
            "",
            "Million-Year Summary",
            "─" * 70,
            f"  Peak temperature:  +{self.peak_temperature}°C",
            f"  Final temperature: +{f.temperature}°C",
            f"  Final GDP:         ${f.gdp}T",
            f"  Population:        {f.population}B",
            f"  Health score:      {f.earth_health_score}/100",
            f"  Ice coverage:      {f.ice_coverage_percent}%",
            f"  CO₂:               {f.atmospheric_co2_ppm} ppm",
            f"  Biodiversity:      {f.biodiversity}%",
            f"  Civilization:      {f.civilization_level}/100",
            "",
            "Future Headlines",
            "─" * 70,
        ]
        for h in self.headlines:
            lines.append(f"  {format_year_full(h.year):<18} [{h.tone}] {h.text}")

        if self.tipping_points:
            lines.extend(["", "Tipping Points & Milestones", "─" * 70])
            for tp in self.tipping_points:
                marker = "!!" if tp.severity == "danger" else "! "
                lines.append(f"  {marker} {format_year_full(tp.year):<18} {tp.event}")

        lines.extend(["", "Scenario Narrative", "─" * 70, f"  {self.narrative}", ""])
        return "\n".join(lines)


def find_tipping_points(
    records: Sequence[YearData],
    limit: int = MAX_TIPPING_POINTS,
) -> List[TippingPoint]:
    """
    Scan the series chronologically and record the first crossing of each
    threshold, plus the first appearance of each named event.
    """
    points: List[TippingPoint] = []
    seen = set()

    def add(key: str, year: int, event: str, severity: str, kind: str) -> None:
        if key not in seen:
            seen.add(key)
            points.append(TippingPoint(year, event, severity, kind))

    for d in records:
        if d.temperature >= 2.0:
            add("temp-2", d.year, "Global temperatures exceed 2°C threshold", "warning", "temperature")
        if d.temperature >= 3.0:
            add("temp-3", d.year, "Catastrophic 3°C warming reached", "danger", "temperature")
        if d.biodiversity <= 50:
            add("bio-50", d.year, "Biodiversity drops below 50% survival", "danger", "biodiversity")
        if d.sea_level >= 0.5:
            add("sea-0.5", d.year, "Sea level rise exceeds 0.5 m", "warning", "sea")
        if d.ice_coverage_percent >= 30:
            add("ice-age", d.year, "Milankovitch ice age phase begins", "warning", "ice")
        if d.major_event:
            add(f"event:{d.major_event}", d.year, d.major_event, "danger", "event")

    return points[:limit]


def headline_for(d: YearData) -> Headline:
    """Pick the headline for one snapshot; the first matching rule wins."""
    if d.temperature < 2 and d.biodiversity > 60:
        return Headline(d.year, f"Temperature held below 2°C, renewable leadership keeps biodiversity at {d.biodiversity}%", "positive")
    if d.ice_coverage_percent >= 25:
        return Headline(d.year, f"Milankovitch ice age grips Earth: ice covers {d.ice_coverage_percent}% of the surface, sea levels drop {abs(d.sea_level)}m", "neutral")
    if d.biodiversity < 40:
        return Headline(d.year, f"Mass extinction accelerates, biodiversity index plummets to {d.biodiversity}%", "negative")
    if d.civilization_level < 20:
        return Headline(d.year, f"Civilizational collapse detected, civilization index at {d.civilization_level}/100", "negative")
    if d.civilization_level > 80 and d.year > 100000:
        return Headline(d.year, f"Advanced civilization thrives as a multi-planetary society at {d.civilization_level}/100", "positive")
    return Headline(d.year, f"World at +{d.temperature}°C: {d.population}B people, ${d.gdp}T GDP, {d.atmospheric_co2_ppm}ppm CO₂", "neutral")


def build_narrative(params: SimulationParams, final: YearData, tipping_count: int) -> str:
    parts = []

    if final.temperature > 3:
        parts.append(
            f"Over the course of one million years, this scenario paints a turbulent picture. "
            f"Early anthropogenic emissions drove temperatures to +{final.temperature}°C, "
            f"triggering cascading ecological collapse."
        )
    elif final.temperature > 2:
        parts.append(
            f"One million years of simulation reveal a world that narrowly avoids worst-case "
            f"scenarios. Temperatures settled at +{final.temperature}°C after carbon cycle "
            f"feedbacks and policy action began a slow recovery."
        )
    else:
        parts.append(
            f"Across one million years, decisive early action limited warming to just "
            f"+{final.temperature}°C, a testament to coordinated planetary stewardship."
        )

    if params.renewable_adoption > 70:
        parts.append(
            f"The aggressive transition to renewable energy ({params.renewable_adoption}% adoption) "
            f"formed the backbone of climate mitigation, enabling rapid CO₂ drawdown."
        )

    parts.append(
        "On geological timescales, Milankovitch cycles reshaped the planet repeatedly: ice ages "
        "locked water in ice sheets and lowered the seas by tens of metres, only for "
        "interglacial warmings to reverse the process."
    )

    if params.space_colonization > 50:
        parts.append(
            "Multi-planetary expansion became humanity's defining achievement. Off-world colonies "
            "reduced pressure on Earth's biosphere and provided long-term resilience."
        )

    if final.biodiversity < 40:
        parts.append(
            f"Biodiversity collapsed to {final.biodiversity}%, one of the great mass extinctions "
            f"in Earth's history."
        )
    elif final.biodiversity > 70:
        parts.append(
            f"Life proved resilient. By the million-year mark biodiversity had stabilised at "
            f"{final.biodiversity}%, with new lineages filling emptied niches."
        )

    if tipping_count > 3:
        parts.append(
            f"The crossing of {tipping_count} critical tipping points, from supervolcanic winters "
            f"to oceanic anoxic events, left effects that outlast the simulation."
        )

    if final.civilization_level > 70:
        parts.append(
            f"A civilization-level score of {final.civilization_level}/100 suggests that "
            f"intelligence and technology endured."
        )
    elif final.civilization_level < 20:
        parts.append(
            f"Civilisation as we know it did not survive the deep future. With a civilization "
            f"index of only {final.civilization_level}/100, nature reclaimed the cities."
        )

    return " ".join(parts)


def build_report(
    results: Optional[ProjectionResults],
    key_year_offsets: Sequence[int] = KEY_YEAR_OFFSETS,
    max_tipping_points: int = MAX_TIPPING_POINTS,
) -> Report:
    """
    Build the report for a finished projection.

    Parameters
    ----------
    results : ProjectionResults or None
        The last projection together with its parameters.
    key_year_offsets : sequence of int, optional
        Offsets (years since the epoch) to headline.
    max_tipping_points : int, optional
        Cap on the number of tipping points listed. Default is 12.

    Returns
    -------
    Report

    Raises
    ------
    MissingProjectionError
        If no projection (or an empty one) is given.
    """
    if results is None or len(results) == 0:
        raise MissingProjectionError("No projection data found. Run a projection first.")

    key_years = tuple(results.nearest(EPOCH_YEAR + offset) for offset in key_year_offsets)
    tipping_points = tuple(find_tipping_points(results.records, max_tipping_points))
    peak_temperature = max(r.temperature for r in results.records)

    logger.info(f"Report: {len(key_years)} key years, {len(tipping_points)} tipping points")

    return Report(
        params=results.params,
        final=results.final,
        peak_temperature=peak_temperature,
        key_years=key_years,
        tipping_points=tipping_points,
        headlines=tuple(headline_for(d) for d in key_years),
        narrative=build_narrative(results.params, results.final, len(tipping_points)),
    )
