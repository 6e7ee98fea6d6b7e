#!/usr/bin/env python3
"""
Scene template JSON loading utilities.

Templates let a user replace the built-in solar system with their own body table.
Every *.json file in the templates/ directory next to the package is listed.

Schema
======
Template JSON (templates/*.json):
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "units": "au",                      # optional: "m" (default) or "au" for positions
  "bodies": [
    {
      "name": "Sun",
      "mass": 1.98892e30,
      "position": [0.0, 0.0],
      "velocity": [0.0, 0.0],
      "size": 75.0,                   # rendered diameter in screen-space units
      "color": [255, 255, 0]
    }
  ]
}

Velocities are always in m/s.
"""
import json
import logging
import os
from typing import List, Optional, Tuple

from .constants import AU
from .data_models import BodySpec

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

_UNIT_FACTORS = {"m": 1.0, "au": AU}


class PresetError(Exception):
  """Raised when a template file cannot be read or has no usable bodies."""


def _read_json(path: str) -> dict:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as exc:
    raise PresetError(f"cannot read template {path}: {exc}") from exc
  if not isinstance(data, dict):
    raise PresetError(f"template {path} must contain a JSON object")
  return data


def _coerce_color(c) -> Tuple[int, int, int]:
  try:
    r, g, b = int(c[0]), int(c[1]), int(c[2])
  except (TypeError, ValueError, IndexError):
    return (200, 200, 255)
  r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
  return (r, g, b)


def list_templates(directory: Optional[str] = None) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available templates."""
  directory = directory or TEMPLATES_DIR
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(directory):
    return items
  for fn in sorted(os.listdir(directory)):
    if not fn.lower().endswith(".json"):
      continue
    try:
      data = _read_json(os.path.join(directory, fn))
    except PresetError as exc:
      logger.warning("Skipping template: %s", exc)
      continue
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def parse_template(data: dict, source: str = "<template>") -> List[BodySpec]:
  """Build body specs from template data; malformed bodies are skipped with a warning."""
  if not isinstance(data, dict):
    raise PresetError(f"{source}: template must be a JSON object")
  units = str(data.get("units", "m")).lower()
  if units not in _UNIT_FACTORS:
    raise PresetError(f"{source}: unknown units {units!r}")
  factor = _UNIT_FACTORS[units]

  bodies = data.get("bodies", [])
  if not isinstance(bodies, list):
    raise PresetError(f"{source}: 'bodies' must be a list")

  specs: List[BodySpec] = []
  for index, b in enumerate(bodies):
    try:
      specs.append(BodySpec(
        name=str(b.get("name", f"Body {index + 1}")),
        mass=float(b["mass"]),
        position=(float(b["position"][0]) * factor, float(b["position"][1]) * factor),
        velocity=(float(b["velocity"][0]), float(b["velocity"][1])),
        size=float(b.get("size", 5.0)),
        color=_coerce_color(b.get("color", [200, 200, 255])),
      ))
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
      logger.warning("%s: skipping body #%d: %s", source, index, exc)
  if not specs:
    raise PresetError(f"{source}: no usable bodies")
  return specs


def load_template(file_name: str, directory: Optional[str] = None) -> Tuple[List[BodySpec], str]:
  """
  Load a template JSON by file name (or path).
  Returns (specs, display_name)
  """
  path = file_name
  if not os.path.isabs(path) and not os.path.exists(path):
    path = os.path.join(directory or TEMPLATES_DIR, file_name)
  data = _read_json(path)
  display_name = data.get("name") or os.path.splitext(os.path.basename(path))[0]
  specs = parse_template(data, source=path)
  logger.info("Loaded template %r with %d bodies", display_name, len(specs))
  return specs, display_name
