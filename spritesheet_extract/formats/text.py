"""Text cartridges (.cartridge): sprite sheet stored as a hex section.

The section starts after a line that is exactly `__gfx__`. Up to 128 lines
follow, each 128 hex digits (one digit per pixel, left to right). Lines
are concatenated and must total exactly 16384 digits.

Digit pairs become bytes with the first digit in the low nibble, so the
packed buffer keeps the left pixel of each pair in the low nibble.

Digits outside 0-9/A-F/a-f decode as 0 rather than failing.

A short section (fewer than 128 lines) is only rejected by the total
length check, not by a line count check.

Example:
    spritesheet-tool mygame.cartridge
"""

from collections.abc import Sequence

from spritesheet_extract.core.types import (
    GFX_SIZE,
    SHEET_SIZE,
    CartridgeFormat,
    DecodeError,
    DecodeResult,
    ErrorKind,
    GfxBuffer,
    SourceKind,
)

cartridge_format = CartridgeFormat(
    SourceKind.TEXT,
    name='text',
    suffix='.cartridge',
    help='Plain-text cartridge with a hex __gfx__ section.',
)

SECTION_MARKER = '__gfx__'
SECTION_LINES = SHEET_SIZE
SECTION_CHARS = SHEET_SIZE * SHEET_SIZE


def hex_value(c: str) -> int:
    """Value of one hex digit; 0 for anything that is not a hex digit."""
    if '0' <= c <= '9':
        return ord(c) - ord('0')
    if 'A' <= c <= 'F':
        return ord(c) - ord('A') + 10
    if 'a' <= c <= 'f':
        return ord(c) - ord('a') + 10
    return 0


def gfx_section(lines: Sequence[str]) -> list[str] | DecodeError:
    """The (up to) 128 lines following the marker line."""
    lines = list(lines)
    try:
        start = lines.index(SECTION_MARKER)
    except ValueError:
        return DecodeError(
            kind=ErrorKind.SECTION_NOT_FOUND,
            message=f"Couldn't find {SECTION_MARKER} section. Is the supplied file valid?",
            expected=SECTION_MARKER,
        )
    return lines[start + 1 : start + 1 + SECTION_LINES]


def decode_hex_section(section: Sequence[str]) -> DecodeResult:
    digits = ''.join(section)
    if len(digits) != SECTION_CHARS:
        return DecodeError(
            kind=ErrorKind.LENGTH_MISMATCH,
            message=f'Incorrect amount of gfx data: {len(digits)} hex digits, expected {SECTION_CHARS}',
            expected=SECTION_CHARS,
            actual=len(digits),
        )

    values = [hex_value(c) for c in digits]
    data = bytes(values[i * 2] | (values[i * 2 + 1] << 4) for i in range(GFX_SIZE))
    return GfxBuffer(data)


def decode_text_lines(lines: Sequence[str]) -> DecodeResult:
    """Decode cartridge text (already split into lines) to a GfxBuffer."""
    section = gfx_section(lines)
    if isinstance(section, DecodeError):
        return section
    return decode_hex_section(section)


def split_lines(text: str) -> list[str]:
    """Split on CRLF, CR or LF only. A trailing newline does not start another line."""
    lines = text.replace('\r\n', '\n').replace('\r', '\n').split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return lines


@cartridge_format.reader
def read_text_cartridge(path: str) -> DecodeResult:
    # Undecodable bytes become U+FFFD and then decode as 0 like any other stray character
    with open(path, encoding='utf-8-sig', errors='replace', newline='') as f:
        text = f.read()
    return decode_text_lines(split_lines(text))
