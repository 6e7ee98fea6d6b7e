#!/usr/bin/env python3
"""
Frame-rate diagnostics for the viewport overlay.
"""
from typing import Optional, Tuple

from .constants import FPS_BAD_COLOR, FPS_GOOD_COLOR, FPS_GOOD_THRESHOLD, FPS_NEUTRAL_COLOR


class FpsMeter:
    """
    Exponentially smoothed frames-per-second estimate.

    `smoothing` is the weight kept from the previous estimate on every sample.
    """

    def __init__(self, smoothing: float = 0.9):
        if not 0.0 <= smoothing < 1.0:
            raise ValueError(f"smoothing must be in [0, 1), got {smoothing}")
        self.smoothing = smoothing
        self._value: Optional[float] = None

    def tick(self, frame_seconds: float) -> None:
        if frame_seconds <= 0:
            return
        sample = 1.0 / frame_seconds
        if self._value is None:
            self._value = sample
        else:
            self._value = self.smoothing * self._value + (1.0 - self.smoothing) * sample

    def smoothed(self) -> Optional[float]:
        return self._value

    def reset(self) -> None:
        self._value = None


def fps_readout(value: Optional[float]) -> Tuple[str, Tuple[int, int, int]]:
    """Text and color for the FPS overlay value."""
    if value is None:
        return "N/A", FPS_NEUTRAL_COLOR
    color = FPS_GOOD_COLOR if value >= FPS_GOOD_THRESHOLD else FPS_BAD_COLOR
    return f"{value:>4.0f}", color
