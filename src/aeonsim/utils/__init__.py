"""Utility functions for aeonsim."""

from aeonsim.utils.logging import (
    setup_logging,
    start_step,
    end_step,
    log_error,
    log_calculation_issue,
    get_timing_logger,
    TimingLogger,
)
from aeonsim.utils.numeric import round_half_up, clamp

__all__ = [
    "setup_logging",
    "start_step",
    "end_step",
    "log_error",
    "log_calculation_issue",
    "get_timing_logger",
    "TimingLogger",
    "round_half_up",
    "clamp",
]
