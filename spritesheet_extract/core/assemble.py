"""Unpack a GfxBuffer into a 128x128 grid of palette indices.

Byte k holds two horizontally adjacent pixels: the low nibble is the pixel
at the even x, the high nibble the pixel at the following odd x. Rows are
stored top to bottom, 64 bytes per row.
"""

import numpy as np

from spritesheet_extract.core.types import SHEET_SIZE, GfxBuffer


def pixel_index(buffer: GfxBuffer, x: int, y: int) -> int:
    """Palette index at (x, y)."""
    if x % 2 == 0:
        return buffer.data[(y * SHEET_SIZE + x) // 2] & 0xF
    return (buffer.data[(y * SHEET_SIZE + x - 1) // 2] >> 4) & 0xF


def unpack_indices(buffer: GfxBuffer) -> np.ndarray:
    """All palette indices as a (128, 128) uint8 array indexed [y, x]."""
    packed = np.frombuffer(buffer.data, dtype=np.uint8)
    indices = np.empty(packed.size * 2, dtype=np.uint8)
    indices[0::2] = packed & 0x0F
    indices[1::2] = packed >> 4
    return indices.reshape(SHEET_SIZE, SHEET_SIZE)
