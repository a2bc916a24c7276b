"""Shared fixtures: synthetic text and label-image cartridges."""

import struct
import zlib
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

MARKER = '__gfx__'


def gfx_text(rows: list[str], before: str = 'pico-8 cartridge\nversion 41\n__lua__\nprint("hi")\n') -> str:
    """Cartridge text with the given gfx rows after the marker line."""
    return before + MARKER + '\n' + '\n'.join(rows) + '\n__map__\n'


def label_rgba(payload: bytes, size: tuple[int, int] = (160, 205)) -> np.ndarray:
    """RGBA (height, width, 4) array hiding payload in the low bits, ARGB order."""
    width, height = size
    data = np.frombuffer(payload.ljust(width * height, b'\0'), dtype=np.uint8)
    rgba = np.full((height * width, 4), 0xA8, dtype=np.uint8)  # upper bits are picture, not payload
    rgba[:, 3] |= (data >> 6) & 3  # alpha carries the top two bits
    rgba[:, 0] |= (data >> 4) & 3
    rgba[:, 1] |= (data >> 2) & 3
    rgba[:, 2] |= data & 3
    return rgba.reshape(height, width, 4)


def png_header_only(width: int, height: int) -> bytes:
    """A PNG whose header declares width x height but carries almost no pixel data."""

    def chunk(kind: bytes, data: bytes) -> bytes:
        return struct.pack('>I', len(data)) + kind + data + struct.pack('>I', zlib.crc32(kind + data))

    ihdr = struct.pack('>IIBBBBB', width, height, 8, 6, 0, 0, 0)  # 8-bit RGBA
    return b'\x89PNG\r\n\x1a\n' + chunk(b'IHDR', ihdr) + chunk(b'IDAT', zlib.compress(b'')) + chunk(b'IEND', b'')


@pytest.fixture
def zero_rows() -> list[str]:
    return ['00' * 64] * 128


@pytest.fixture
def text_cartridge(tmp_path: Path, zero_rows: list[str]) -> Path:
    path = tmp_path / 'zeros.cartridge'
    path.write_text(gfx_text(zero_rows))
    return path


@pytest.fixture
def label_cartridge(tmp_path: Path) -> Path:
    payload = bytes(range(256)) * 32 + b'\xff' * 100
    path = tmp_path / 'ramp.cartridge.png'
    Image.fromarray(label_rgba(payload)).save(path)
    return path
