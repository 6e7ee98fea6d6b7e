#!/usr/bin/env python3
"""
Camera view and pointer-driven camera controller.

The view is an orthographic 2D camera over screen-space units: `pan` is the point
shown at the window centre and `zoom` is how many screen-space units one pixel spans
(larger zoom shows more of the system). Screen space is y-up; pygame windows are y-down.

Input arrives as a batch of events per tick, handled in arrival order:
- Pan: motion while the pan button is held moves the view by (-dx, +dy) * sensitivity.
  Motion is ignored while the pan button was only just pressed in the current batch.
- Zoom: a scroll of exactly -1 multiplies zoom by the factor (zoom out), +1 divides
  (zoom in). Line wheels use the sensitivity, pixel-precision wheels use a fixed 1.25.
  Other deltas are ignored. Zoom stays within [MIN_ZOOM, MAX_ZOOM]; a step that would
  leave the range stops at the bound.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Set, Tuple, Union

from .constants import (
    DEFAULT_ZOOM,
    MAX_ZOOM,
    MIN_ZOOM,
    PIXEL_SCROLL_FACTOR,
    SENSITIVITY,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)


def _bounded_zoom(zoom: float) -> float:
    return max(MIN_ZOOM, min(MAX_ZOOM, zoom))


class PointerButton(Enum):
    LEFT = 1
    MIDDLE = 2
    RIGHT = 3


class ScrollUnit(Enum):
    LINE = "line"
    PIXEL = "pixel"


@dataclass(frozen=True)
class PointerMotion:
    dx: float
    dy: float


@dataclass(frozen=True)
class ButtonEvent:
    button: PointerButton
    pressed: bool


@dataclass(frozen=True)
class ScrollEvent:
    dy: float
    unit: ScrollUnit = ScrollUnit.LINE


InputEvent = Union[PointerMotion, ButtonEvent, ScrollEvent]


class CameraView:
    """Pan offset and zoom scale, read by the renderer."""

    def __init__(self, pan=(0.0, 0.0), zoom: float = DEFAULT_ZOOM):
        if zoom <= 0:
            raise ValueError(f"zoom must be positive, got {zoom}")
        self.pan = [float(pan[0]), float(pan[1])]
        self.zoom = float(zoom)
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def pixel_scale(self) -> float:
        """Pixels per screen-space unit."""
        return 1.0 / self.zoom

    def world_to_screen(self, point: Tuple[float, float]) -> Tuple[float, float]:
        """Map a screen-space point to window pixel coordinates."""
        w, h = self.viewport_size
        px = (float(point[0]) - self.pan[0]) / self.zoom + w / 2
        py = h / 2 - (float(point[1]) - self.pan[1]) / self.zoom
        return (px, py)

    def screen_to_world(self, screen: Tuple[float, float]) -> Tuple[float, float]:
        w, h = self.viewport_size
        wx = (screen[0] - w / 2) * self.zoom + self.pan[0]
        wy = (h / 2 - screen[1]) * self.zoom + self.pan[1]
        return (wx, wy)


class CameraController:
    """Applies pointer events to a CameraView."""

    def __init__(self, view: CameraView, sensitivity: float = SENSITIVITY,
                 pixel_factor: float = PIXEL_SCROLL_FACTOR,
                 pan_button: PointerButton = PointerButton.RIGHT):
        self.view = view
        self.sensitivity = sensitivity
        self.pixel_factor = pixel_factor
        self.pan_button = pan_button
        self._held: Set[PointerButton] = set()
        self._just_pressed: Set[PointerButton] = set()

    def begin_frame(self) -> None:
        """Start a new event batch; presses from earlier batches are no longer 'just pressed'."""
        self._just_pressed.clear()

    def process(self, events: Iterable[InputEvent]) -> None:
        self.begin_frame()
        for event in events:
            self.handle(event)

    def handle(self, event: InputEvent) -> None:
        if isinstance(event, ButtonEvent):
            self._on_button(event)
        elif isinstance(event, PointerMotion):
            self._on_motion(event)
        elif isinstance(event, ScrollEvent):
            self._on_scroll(event)
        else:
            raise TypeError(f"unsupported input event: {event!r}")

    def is_panning(self) -> bool:
        return self.pan_button in self._held and self.pan_button not in self._just_pressed

    def _on_button(self, event: ButtonEvent) -> None:
        if event.pressed:
            if event.button not in self._held:
                self._just_pressed.add(event.button)
            self._held.add(event.button)
        else:
            self._held.discard(event.button)

    def _on_motion(self, event: PointerMotion) -> None:
        if not self.is_panning():
            return
        self.view.pan[0] -= event.dx * self.sensitivity
        self.view.pan[1] += event.dy * self.sensitivity

    def _on_scroll(self, event: ScrollEvent) -> None:
        factor = self._zoom_factor(event.unit)
        if event.dy == -1:
            self.view.zoom = _bounded_zoom(self.view.zoom * factor)
        elif event.dy == 1:
            self.view.zoom = _bounded_zoom(self.view.zoom / factor)

    def _zoom_factor(self, unit: Optional[ScrollUnit]) -> float:
        if unit is ScrollUnit.PIXEL:
            return self.pixel_factor
        return self.sensitivity
