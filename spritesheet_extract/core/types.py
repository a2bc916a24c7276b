"""Shared types: GfxBuffer, CartridgeSource, DecodeError, CartridgeFormat, Report."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

SHEET_SIZE = 128  # sprite sheet is SHEET_SIZE x SHEET_SIZE pixels
GFX_SIZE = SHEET_SIZE * SHEET_SIZE // 2  # two 4-bit pixels per byte


class SourceKind(enum.Enum):
    TEXT = 'text'
    PNG = 'png'


class ErrorKind(enum.Enum):
    UNSUPPORTED_FORMAT = 'UnsupportedFormat'
    SECTION_NOT_FOUND = 'SectionNotFound'
    LENGTH_MISMATCH = 'LengthMismatch'
    DIMENSION_MISMATCH = 'DimensionMismatch'
    IO_FAILURE = 'IOFailure'


@dataclass(frozen=True)
class GfxBuffer:
    """Packed sprite sheet: 8192 bytes, two palette indices per byte, low nibble first."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != GFX_SIZE:
            raise ValueError(f'GfxBuffer must be {GFX_SIZE} bytes, got {len(self.data)}')

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class CartridgeSource:
    """A cartridge file path tagged with the encoding it was detected as."""

    kind: SourceKind
    path: str


@dataclass(frozen=True)
class DecodeError:
    """A terminal failure of one pipeline stage, returned as a value."""

    kind: ErrorKind
    message: str
    path: str | None = None
    expected: Any = None
    actual: Any = None

    def __str__(self) -> str:
        where = f'{self.path}: ' if self.path else ''
        return f'{where}{self.kind.value}: {self.message}'


DecodeResult = GfxBuffer | DecodeError


class CartridgeFormat:
    """A self-registering cartridge encoding.

    Usage in a format module:

        cartridge_format = CartridgeFormat(SourceKind.TEXT, name='text', suffix='.cartridge')

        @cartridge_format.reader
        def read(path):
            ...
    """

    def __init__(self, kind: SourceKind, name: str, suffix: str, help: str = ''):
        self.kind = kind
        self.name = name
        self.suffix = suffix
        self.help = help
        self._read_fn: Callable[[str], DecodeResult] | None = None

    def reader(self, fn: Callable[[str], DecodeResult]) -> Callable[[str], DecodeResult]:
        """Decorator to register the function that reads and decodes a file."""
        self._read_fn = fn
        return fn

    def read(self, path: str) -> DecodeResult:
        if self._read_fn is None:
            raise RuntimeError(f'Cartridge format {self.name} has no reader')
        return self._read_fn(path)


@dataclass
class Report:
    """Accumulates per-file decode results for text/JSON output."""

    entries: list[dict[str, Any]] = field(default_factory=list)
    ok_count: int = 0
    fail_count: int = 0

    def add_decoded(self, path: str, fmt: str, output: str, census: list[dict[str, Any]]) -> None:
        self.entries.append(
            {
                'input': path,
                'format': fmt,
                'output': output,
                'width': SHEET_SIZE,
                'height': SHEET_SIZE,
                'census': census,
            }
        )
        self.ok_count += 1

    def add_failure(self, error: DecodeError) -> None:
        self.entries.append(
            {
                'input': error.path,
                'error': error.kind.value,
                'message': error.message,
                'expected': error.expected,
                'actual': error.actual,
            }
        )
        self.fail_count += 1
