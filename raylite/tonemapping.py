"""
Conversion from averaged linear radiance to 8-bit display values.

Gamma 2 is approximated with a square root, and channels are scaled by
256 and truncated after clamping to [0, 0.999]. This reproduces the
reference images bit for bit, at the cost of slightly undercounting 255.
"""

from __future__ import annotations
import math
from typing import Tuple

from .interval import Interval
from .vec3 import Color

INTENSITY = Interval(0.0, 0.999)


def linear_to_gamma(linear: float) -> float:
    """Gamma-2 encode a linear channel value."""
    if linear > 0:
        return math.sqrt(linear)
    return 0.0


def channel_to_byte(linear: float) -> int:
    """Encode one linear channel as an integer in [0, 255]."""
    return int(INTENSITY.clamp(linear_to_gamma(linear)) * 256)


def color_to_rgb8(color: Color) -> Tuple[int, int, int]:
    """Encode a linear color as an 8-bit RGB triple."""
    return (
        channel_to_byte(color.r),
        channel_to_byte(color.g),
        channel_to_byte(color.b),
    )
