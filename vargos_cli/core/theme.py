"""Console color palette with config overrides and NO_COLOR support."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace


@dataclass(frozen=True)
class ColorPalette:
    """Color palette for console output."""

    primary: str
    dim: str
    user: str
    agent: str
    tool: str
    error: str


DEFAULT_PALETTE = ColorPalette(
    primary="#06b6d4",
    dim="#6b7280",
    user="#ffffff",
    agent="#10b981",
    tool="#fbbf24",
    error="#ef4444",
)

PALETTE_KEYS = frozenset(f.name for f in fields(ColorPalette))


def colors_disabled() -> bool:
    """Check if NO_COLOR environment variable is set."""
    return os.environ.get("NO_COLOR", "") != ""


def build_palette(overrides: Mapping[str, str] | None = None) -> ColorPalette:
    """Return the default palette with known keys replaced by ``overrides``.

    Unknown keys are ignored so that config files written for newer versions
    keep loading.
    """
    if not overrides:
        return DEFAULT_PALETTE
    known = {key: str(value) for key, value in overrides.items() if key in PALETTE_KEYS}
    return replace(DEFAULT_PALETTE, **known)


def palette_to_dict(palette: ColorPalette) -> dict[str, str]:
    return asdict(palette)
