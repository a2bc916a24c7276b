"""Decode pipeline: file name → format → GfxBuffer → indices → raster.

Each stage returns either its product or a DecodeError. The first error
ends the run and is returned with the offending path filled in; nothing
is retried and no partial raster is produced.
"""

import dataclasses

import numpy as np

from spritesheet_extract import registry
from spritesheet_extract.core.assemble import unpack_indices
from spritesheet_extract.core.detect import detect_format
from spritesheet_extract.core.palette import colourise
from spritesheet_extract.core.types import CartridgeSource, DecodeError, DecodeResult, ErrorKind


def _with_path(error: DecodeError, path: str) -> DecodeError:
    return error if error.path else dataclasses.replace(error, path=path)


def decode_source(source: CartridgeSource) -> DecodeResult:
    """Read an already detected cartridge and return its packed sprite sheet."""
    path = source.path
    fmt = registry.get(source.kind)
    try:
        result = fmt.read(path)
    except OSError as e:
        # Missing/unreadable files, and PNGs Pillow cannot identify
        return DecodeError(
            kind=ErrorKind.IO_FAILURE,
            message=f'Could not read {fmt.name} cartridge: {e.strerror or e}',
            path=path,
        )

    if isinstance(result, DecodeError):
        return _with_path(result, path)
    return result


def decode_cartridge(path: str) -> DecodeResult:
    """Read a cartridge file and return its packed sprite sheet."""
    source = detect_format(path)
    if isinstance(source, DecodeError):
        return source
    return decode_source(source)


def extract_indices(path: str) -> np.ndarray | DecodeError:
    """Decode a cartridge to its (128, 128) grid of palette indices."""
    buffer = decode_cartridge(path)
    if isinstance(buffer, DecodeError):
        return buffer
    return unpack_indices(buffer)


def extract_spritesheet(path: str) -> np.ndarray | DecodeError:
    """Decode a cartridge to a (128, 128, 3) RGB raster."""
    indices = extract_indices(path)
    if isinstance(indices, DecodeError):
        return indices
    return colourise(indices)
