"""Frame-to-image conversion for host renderers."""

from typing import Dict, Tuple

import numpy as np

Color = Tuple[int, int, int]


def display_to_rgb(
    pixels: np.ndarray,
    scale: int = 1,
    on_color: Color = (255, 255, 255),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Convert a CHIP-8 display snapshot to an RGB array with optional upscaling.

    Args:
        pixels: Boolean array of shape (32, 64), row-major
        scale: Integer upscaling factor
        on_color: RGB color for "on" pixels (default: white)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    if scale < 1:
        raise ValueError(f"scale must be positive, got {scale}")
    pixels = np.asarray(pixels, dtype=np.bool_)
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)

    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbor upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


# Preset (on, off) palettes named after the machines and tools that used them
COLOR_SCHEMES: Dict[str, Tuple[Color, Color]] = {
    "white": ((255, 255, 255), (0, 0, 0)),
    "cosmac-vip": ((255, 255, 255), (0, 0, 0)),
    "octo": ((255, 204, 0), (153, 102, 0)),
    "hp48": ((16, 32, 16), (136, 152, 120)),
    "phosphor": ((51, 255, 102), (0, 20, 0)),
}


def create_color_scheme(scheme: str = "white") -> Tuple[Color, Color]:
    """Look up a preset ``(on_color, off_color)`` pair from ``COLOR_SCHEMES``."""
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )
    return COLOR_SCHEMES[scheme]
