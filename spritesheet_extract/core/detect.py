"""Cartridge format detection from the file name alone.

  foo.cartridge      -> SourceKind.TEXT
  foo.cartridge.png  -> SourceKind.PNG
  anything else      -> DecodeError(UNSUPPORTED_FORMAT)

The file is never opened here. Matching is done on the whole final path
component with one suffix test per format, never by peeling extensions off
one at a time.
"""

import os

from spritesheet_extract.core.types import CartridgeSource, DecodeError, ErrorKind, SourceKind

TEXT_SUFFIX = '.cartridge'
PNG_SUFFIX = '.cartridge.png'

# Checked in order; a name can only end in one of these
SUFFIXES: list[tuple[SourceKind, str]] = [
    (SourceKind.TEXT, TEXT_SUFFIX),
    (SourceKind.PNG, PNG_SUFFIX),
]


def has_suffix(name: str, suffix: str) -> bool:
    """True if the final path component of name ends with suffix."""
    return os.path.basename(name).endswith(suffix)


def _observed_extension(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[1]


def detect_format(path: str) -> CartridgeSource | DecodeError:
    for kind, suffix in SUFFIXES:
        if has_suffix(path, suffix):
            return CartridgeSource(kind=kind, path=path)

    ext = _observed_extension(path)
    return DecodeError(
        kind=ErrorKind.UNSUPPORTED_FORMAT,
        message=f'Unsupported filename extension ({ext or "none"}). Is it a valid cartridge file?',
        path=path,
        expected=[suffix for _kind, suffix in SUFFIXES],
        actual=ext,
    )


def output_name(path: str) -> str:
    """Output PNG file name: recognised suffix stripped, '.png' appended.

    Raises ValueError for names detect_format() would reject.
    """
    base = os.path.basename(path)
    for _kind, suffix in SUFFIXES:
        if has_suffix(base, suffix):
            return base[: -len(suffix)] + '.png'
    raise ValueError(f'Not a cartridge file name: {path}')
