"""Fixed 16-colour cartridge palette and colour helpers.

Index 0 and any value outside 0..15 map to black. Lookups are table driven;
colourise() goes through a 256-entry table so every uint8 index is defined.
"""

import numpy as np
from PIL import Image

BLACK = (0, 0, 0)

PALETTE_HEX: list[str] = [
    '#000000',
    '#1d2b53',
    '#7e2553',
    '#008751',
    '#ab5236',
    '#5f574f',
    '#c2c3c7',
    '#fff1e8',
    '#ff004d',
    '#ffa300',
    '#ffec27',
    '#00e436',
    '#29adff',
    '#83769c',
    '#ff77a8',
    '#ffccaa',
]


def hex_to_rgb(hex_colour: str) -> tuple[int, int, int]:
    """'#rrggbb' or 'rrggbb' (either case) to an (r, g, b) tuple."""
    h = hex_colour.lstrip('#')
    if len(h) != 6:
        raise ValueError(f'Not a 6-digit hex colour: {hex_colour!r}')
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    r, g, b = rgb
    return f'#{r:02x}{g:02x}{b:02x}'


PALETTE: list[tuple[int, int, int]] = [hex_to_rgb(h) for h in PALETTE_HEX]

_LOOKUP = np.zeros((256, 3), dtype=np.uint8)
_LOOKUP[: len(PALETTE)] = PALETTE


def palette_colour(index: int) -> tuple[int, int, int]:
    """RGB colour for a palette index. Black for 0 and for undefined indices."""
    if 0 <= index < len(PALETTE):
        return PALETTE[index]
    return BLACK


def colourise(indices: np.ndarray) -> np.ndarray:
    """Map an array of palette indices to an (..., 3) uint8 RGB raster.

    Values outside 0..255 are sent to entry 0 so they come out black too.
    """
    idx = np.asarray(indices)
    if idx.dtype != np.uint8:
        idx = np.where((idx >= 0) & (idx < len(_LOOKUP)), idx, 0).astype(np.uint8)
    return _LOOKUP[idx]


def to_image(raster: np.ndarray) -> Image.Image:
    """Opaque RGB image from a (height, width, 3) raster."""
    return Image.fromarray(np.ascontiguousarray(raster, dtype=np.uint8))
