"""Tests for slider mapping, formatting, colours and playback."""

import pytest
from aeonsim.core.coefficients import EPOCH_YEAR, HORIZON_YEARS
from aeonsim.presentation import (
    SLIDER_MAX,
    slider_to_year,
    year_to_slider,
    format_year,
    format_year_full,
    HSLColor,
    temperature_color,
    health_color,
    temperature_severity,
    PlaybackState,
)
from aeonsim.presentation.colors import TEMPERATURE_STOPS, TEMPERATURE_SPAN, RED_SEGMENT_START


class TestSlider:
    def test_endpoints(self):
        assert slider_to_year(0) == EPOCH_YEAR
        assert slider_to_year(SLIDER_MAX) == EPOCH_YEAR + HORIZON_YEARS
        assert year_to_slider(EPOCH_YEAR) == 0
        assert year_to_slider(EPOCH_YEAR + HORIZON_YEARS) == SLIDER_MAX

    def test_clamped(self):
        assert slider_to_year(-10) == EPOCH_YEAR
        assert slider_to_year(5000) == EPOCH_YEAR + HORIZON_YEARS
        assert year_to_slider(1900) == 0
        assert year_to_slider(10 ** 8) == SLIDER_MAX

    def test_monotonic(self):
        years = [slider_to_year(s) for s in range(SLIDER_MAX + 1)]
        assert all(b >= a for a, b in zip(years, years[1:]))

    def test_round_trip(self):
        # Below ~310 several slider positions share one integer year
        for s in range(310, SLIDER_MAX + 1):
            assert abs(year_to_slider(slider_to_year(s)) - s) <= 1, s

    def test_thirds_are_decades(self):
        assert slider_to_year(500) == EPOCH_YEAR + 1000


class TestFormatting:
    @pytest.mark.parametrize("year, expected", [
        (2025, "2025"),
        (2125, "2,125"),
        (3024, "3,024"),
        (3025, "2025+1K"),
        (77025, "2025+75K"),
        (502525, "2025+501K"),
        (1002025, "2025+1M"),
    ])
    def test_format_year(self, year, expected):
        assert format_year(year) == expected

    @pytest.mark.parametrize("year, expected", [
        (2025, "Year 2,025"),
        (12025, "Year 12,025"),
        (999999, "Year 999,999"),
        (1002025, "Year 1.00M"),
    ])
    def test_format_year_full(self, year, expected):
        assert format_year_full(year) == expected


class TestColors:
    def test_ramp_endpoints(self):
        assert temperature_color(1.2) == pytest.approx(TEMPERATURE_STOPS[0][1])
        assert temperature_color(1.2 + TEMPERATURE_SPAN) == pytest.approx(TEMPERATURE_STOPS[-1][1])

    def test_ramp_saturates(self):
        assert temperature_color(-2.0) == temperature_color(1.2)
        assert temperature_color(20.0) == pytest.approx(temperature_color(1.2 + TEMPERATURE_SPAN))

    def test_ramp_continuous_at_stops(self):
        for position, _ in TEMPERATURE_STOPS[1:-1]:
            temp = 1.2 + position * TEMPERATURE_SPAN
            below = temperature_color(temp - 1e-6)
            above = temperature_color(temp + 1e-6)
            for a, b in zip(below, above):
                assert a == pytest.approx(b, abs=1e-3)

    @pytest.mark.parametrize("n", [RED_SEGMENT_START, 0.8, 0.85, 0.95, 1.0])
    def test_hot_end_follows_red_segment(self, n):
        color = temperature_color(1.2 + n * TEMPERATURE_SPAN)
        assert color.hue == pytest.approx(0.0, abs=1e-6)
        assert color.saturation == pytest.approx(60 + 30 * n, abs=1e-6)
        assert color.lightness == pytest.approx(50 + 10 * n, abs=1e-6)

    def test_amber_blends_into_red(self):
        color = temperature_color(1.2 + 0.68 * TEMPERATURE_SPAN)
        assert 0 < color.hue < 39.6
        assert 81 < color.saturation < 89

    def test_css(self):
        assert HSLColor(199, 89, 41.4).css == "hsl(199, 89%, 41.4%)"

    @pytest.mark.parametrize("score, expected", [
        (100, HSLColor(142, 71, 45)),
        (70, HSLColor(142, 71, 45)),
        (69, HSLColor(38, 92, 50)),
        (40, HSLColor(38, 92, 50)),
        (39, HSLColor(0, 84, 60)),
    ])
    def test_health(self, score, expected):
        assert health_color(score) == expected

    def test_severity(self):
        assert temperature_severity(1.9) == "nominal"
        assert temperature_severity(2.0) == "warning"
        assert temperature_severity(3.5) == "critical"


class TestPlayback:
    def test_initial(self):
        state = PlaybackState()
        assert state.year == EPOCH_YEAR
        assert not state.playing
        assert state.speed_label == "1×"

    def test_tick_only_while_playing(self):
        state = PlaybackState()
        assert state.tick() == state
        assert state.play().tick().slider == 1

    def test_stops_at_end(self):
        state = PlaybackState(slider=998, playing=True, speed=5).tick()
        assert state.slider == SLIDER_MAX
        assert not state.playing
        assert state.year == EPOCH_YEAR + HORIZON_YEARS

    def test_cycle_speed(self):
        state = PlaybackState()
        speeds = []
        for _ in range(3):
            state = state.cycle_speed()
            speeds.append(state.speed)
        assert speeds == [5, 20, 1]

    def test_seek_and_reset(self):
        state = PlaybackState(speed=20).play().seek(2000)
        assert state.slider == SLIDER_MAX
        reset = state.reset()
        assert reset == PlaybackState(speed=20)

    def test_immutable(self):
        state = PlaybackState()
        state.play()
        assert not state.playing
