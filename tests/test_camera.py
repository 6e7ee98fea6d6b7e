import pytest

from orrery.camera import (
    ButtonEvent,
    CameraController,
    CameraView,
    PointerButton,
    PointerMotion,
    ScrollEvent,
    ScrollUnit,
)
from orrery.constants import DEFAULT_ZOOM, MAX_ZOOM, MIN_ZOOM, SENSITIVITY

PRESS = ButtonEvent(PointerButton.RIGHT, True)
RELEASE = ButtonEvent(PointerButton.RIGHT, False)


def make_controller():
    view = CameraView()
    return view, CameraController(view)


def test_default_view():
    view = CameraView()
    assert view.pan == [0.0, 0.0]
    assert view.zoom == DEFAULT_ZOOM


def test_pan_accumulates_while_button_held():
    view, controller = make_controller()
    controller.process([PRESS])
    n, dx, dy = 7, 3.0, -2.0
    controller.process([PointerMotion(dx, dy)] * n)
    assert view.pan[0] == pytest.approx(n * -dx * SENSITIVITY)
    assert view.pan[1] == pytest.approx(n * dy * SENSITIVITY)


def test_motion_ignored_in_the_batch_that_registers_the_press():
    view, controller = make_controller()
    controller.process([PRESS, PointerMotion(10.0, 10.0)])
    assert view.pan == [0.0, 0.0]

    # Next batch the button is held, not just pressed
    controller.process([PointerMotion(1.0, 1.0)])
    assert view.pan == [pytest.approx(-SENSITIVITY), pytest.approx(SENSITIVITY)]


def test_motion_without_pan_button_does_nothing():
    view, controller = make_controller()
    controller.process([ButtonEvent(PointerButton.LEFT, True)])
    controller.process([PointerMotion(5.0, 5.0)])
    assert view.pan == [0.0, 0.0]


def test_release_stops_panning():
    view, controller = make_controller()
    controller.process([PRESS])
    controller.process([PointerMotion(1.0, 0.0), RELEASE, PointerMotion(1.0, 0.0)])
    assert view.pan[0] == pytest.approx(-SENSITIVITY)


def test_line_scroll_zoom():
    view, controller = make_controller()
    controller.process([ScrollEvent(-1, ScrollUnit.LINE)])
    assert view.zoom == pytest.approx(DEFAULT_ZOOM * SENSITIVITY)
    controller.process([ScrollEvent(1, ScrollUnit.LINE)])
    controller.process([ScrollEvent(1, ScrollUnit.LINE)])
    assert view.zoom == pytest.approx(DEFAULT_ZOOM / SENSITIVITY)


def test_pixel_scroll_uses_fixed_factor():
    view, controller = make_controller()
    controller.process([ScrollEvent(-1, ScrollUnit.PIXEL)])
    assert view.zoom == pytest.approx(DEFAULT_ZOOM * 1.25)


@pytest.mark.parametrize("unit", [ScrollUnit.LINE, ScrollUnit.PIXEL])
def test_zoom_round_trip(unit):
    view, controller = make_controller()
    before = view.zoom
    controller.process([ScrollEvent(1, unit), ScrollEvent(-1, unit)])
    assert view.zoom == pytest.approx(before, rel=1e-15)


@pytest.mark.parametrize("dy", [0.0, 0.5, -2.0, 3.0])
def test_non_unit_scroll_is_ignored(dy):
    view, controller = make_controller()
    controller.process([ScrollEvent(dy, ScrollUnit.LINE)])
    assert view.zoom == DEFAULT_ZOOM


def test_zoom_stops_at_the_bounds():
    view = CameraView(zoom=MAX_ZOOM)
    controller = CameraController(view)
    controller.process([ScrollEvent(-1)])
    assert view.zoom == MAX_ZOOM
    # The clamped step is lost, so zooming back in lands below the bound
    controller.process([ScrollEvent(1)])
    assert view.zoom == pytest.approx(MAX_ZOOM / SENSITIVITY)

    view = CameraView(zoom=MIN_ZOOM)
    controller = CameraController(view)
    controller.process([ScrollEvent(1, ScrollUnit.PIXEL)])
    assert view.zoom == MIN_ZOOM
    controller.process([ScrollEvent(-1, ScrollUnit.PIXEL)])
    assert view.zoom == pytest.approx(MIN_ZOOM * 1.25)


def test_zoom_step_near_the_bound_is_clamped():
    view = CameraView(zoom=MAX_ZOOM / 1.2)
    CameraController(view).process([ScrollEvent(-1)])
    assert view.zoom == MAX_ZOOM


def test_unknown_event_type_raises():
    _, controller = make_controller()
    with pytest.raises(TypeError):
        controller.handle("click")


def test_world_to_screen_round_trip():
    view = CameraView(pan=(100.0, -50.0), zoom=2.0)
    view.set_viewport_size(800, 600)
    assert view.world_to_screen((100.0, -50.0)) == (400.0, 300.0)
    # Screen space is y-up, pixels are y-down
    assert view.world_to_screen((102.0, -48.0)) == (401.0, 299.0)
    assert view.screen_to_world((401.0, 299.0)) == pytest.approx((102.0, -48.0))
    assert view.pixel_scale() == 0.5


def test_zoom_must_be_positive():
    with pytest.raises(ValueError):
        CameraView(zoom=0.0)
