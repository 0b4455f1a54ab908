"""
Built-in parameter presets.
"""

from aeonsim.scenarios.presets import (
    PRESETS,
    get_preset,
    list_presets,
)

__all__ = [
    "PRESETS",
    "get_preset",
    "list_presets",
]
