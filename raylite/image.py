"""
Hands finished pixel buffers to Pillow for encoding.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image as PILImage


def save_image(pixels: np.ndarray, filename: Union[str, Path]) -> Path:
    """Save an 8-bit RGB buffer to disk.

    Args:
        pixels: Array of shape (height, width, 3), dtype uint8
        filename: Output filename (extension determines format)

    Returns:
        The path written
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) buffer, got shape {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 buffer, got {pixels.dtype}")

    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    PILImage.fromarray(pixels).save(path)
    return path
