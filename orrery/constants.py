#!/usr/bin/env python3
"""
Shared constants for Orrery (SI units unless stated otherwise).

Physics runs in meters and seconds. Rendering runs in "screen-space units":
meters multiplied by SCALE, so that 1 AU spans 250 units. The camera then maps
screen-space units to window pixels through its zoom scale.
"""

# Physical constants
G = 6.67428e-11  # m^3 kg^-1 s^-2
AU = 149.6e6 * 1000.0  # m

# Physics controls
TIMESTEP = 3600.0 * 24.0  # seconds of simulated time per tick (one day)
MIN_DISTANCE = 1000.0  # m; force distances are clamped to this
TICK_RATE_HZ = 30.0  # fixed physics ticks per real second
MAX_TICKS_PER_FRAME = 8  # cap per rendered frame; surplus time is dropped

# Screen space
SCALE = 250.0 / AU  # screen-space units per meter
MAX_TRAIL_SIZE = 1500  # points kept per body trail
SUN_DIAMETER = 75.0  # screen-space units

# Camera
SENSITIVITY = 1.5  # pan multiplier and line-scroll zoom factor
PIXEL_SCROLL_FACTOR = 1.25  # zoom factor for pixel-precision wheels
DEFAULT_ZOOM = 2.0  # screen-space units per pixel at startup
MIN_ZOOM = 1e-3
MAX_ZOOM = 1e4

# Rendering (viewport)
VIEW_WIDTH = 1280
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
HUD_TEXT_COLOR = (200, 200, 200)
MIN_BODY_PIXELS = 2
MAX_BODY_PIXELS = 400

# Frame-rate readout
FPS_GOOD_THRESHOLD = 60.0
FPS_GOOD_COLOR = (0, 255, 0)
FPS_BAD_COLOR = (255, 0, 0)
FPS_NEUTRAL_COLOR = (255, 255, 255)
FPS_FONT_SIZE = 16
FPS_BOX_COLOR = (0, 0, 0, 128)

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
