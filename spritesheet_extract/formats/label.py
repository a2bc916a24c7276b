"""Label-image cartridges (.cartridge.png): data hidden in pixel low bits.

The label is a 160x205 PNG. Every pixel carries one payload byte in the two
least significant bits of its four channels, taken in A, R, G, B order:

    byte = (a & 3) << 6 | (r & 3) << 4 | (g & 3) << 2 | (b & 3)

Pixels are read row by row, giving 32800 bytes for the whole cartridge.
The sprite sheet is the first 8192 of them; the rest holds other sections
and is ignored.

Example:
    spritesheet-tool mygame.cartridge.png
"""

import numpy as np
from PIL import Image

from spritesheet_extract.core.types import (
    GFX_SIZE,
    CartridgeFormat,
    DecodeError,
    DecodeResult,
    ErrorKind,
    GfxBuffer,
    SourceKind,
)

cartridge_format = CartridgeFormat(
    SourceKind.PNG,
    name='png',
    suffix='.cartridge.png',
    help='160x205 label image with cartridge data in the low bits of each channel.',
)

LABEL_WIDTH = 160
LABEL_HEIGHT = 205


def argb_pixels(image: Image.Image) -> np.ndarray:
    """(height, width, 4) uint8 array with channels in A, R, G, B order."""
    rgba = np.array(image.convert('RGBA'), dtype=np.uint8)
    return rgba[..., [3, 0, 1, 2]]


def payload_bytes(pixels: np.ndarray) -> bytes:
    """One byte per pixel from the low two bits of channels c0..c3."""
    low = (pixels.reshape(-1, 4) & 0b11).astype(np.uint8)
    packed = (low[:, 0] << 6) | (low[:, 1] << 4) | (low[:, 2] << 2) | low[:, 3]
    return packed.astype(np.uint8).tobytes()


def check_label_size(width: int, height: int) -> DecodeError | None:
    """DIMENSION_MISMATCH error unless the label is exactly 160x205."""
    if (width, height) == (LABEL_WIDTH, LABEL_HEIGHT):
        return None
    return DecodeError(
        kind=ErrorKind.DIMENSION_MISMATCH,
        message=f'A label image should be {LABEL_WIDTH} x {LABEL_HEIGHT}, got {width} x {height}',
        expected=(LABEL_WIDTH, LABEL_HEIGHT),
        actual=(width, height),
    )


def decode_label_pixels(pixels: np.ndarray) -> DecodeResult:
    """Decode an ARGB pixel array of a label image to a GfxBuffer."""
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f'Expected a (height, width, 4) array, got shape {pixels.shape}')

    height, width = pixels.shape[:2]
    error = check_label_size(width, height)
    if error is not None:
        return error
    return GfxBuffer(payload_bytes(pixels)[:GFX_SIZE])


@cartridge_format.reader
def read_label_cartridge(path: str) -> DecodeResult:
    # Image.open only parses the header; the size is known before any pixel data is decoded
    try:
        image = Image.open(path)
    except Image.DecompressionBombError as e:
        return DecodeError(
            kind=ErrorKind.DIMENSION_MISMATCH,
            message=f'A label image should be {LABEL_WIDTH} x {LABEL_HEIGHT}: {e}',
            expected=(LABEL_WIDTH, LABEL_HEIGHT),
        )

    with image:
        error = check_label_size(*image.size)
        if error is not None:
            return error
        pixels = argb_pixels(image)
    return decode_label_pixels(pixels)
