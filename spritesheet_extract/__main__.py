"""spritesheet-tool — Extract the sprite sheet from cartridge files as PNG.

Usage: spritesheet-tool [options] <file> ...

Supported inputs (detected from the file name):
  <name>.cartridge       text cartridge with a hex __gfx__ section
  <name>.cartridge.png   160x205 label image with data in the pixel low bits

Each input is written as <out_dir>/<name>.png, a 128x128 RGB image.
Files are processed in order; a failing file does not stop the others but
makes the exit status 1.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, spritesheet-tool looks for a .env file starting
  from the current directory and walking up, stopping at the nearest .git
  boundary. Use --env-file to override the .env location explicitly.

  SPRITESHEET_OUT_DIR   default for --out-dir
  SPRITESHEET_REPORT    'json' to make --json the default
"""

import argparse
import os
import sys

from spritesheet_extract import registry
from spritesheet_extract.core.assemble import unpack_indices
from spritesheet_extract.core.detect import detect_format, output_name
from spritesheet_extract.core.env import load_env, resolve_settings
from spritesheet_extract.core.palette import colourise, to_image
from spritesheet_extract.core.report import format_json, format_text, palette_census
from spritesheet_extract.core.types import DecodeError, ErrorKind, Report
from spritesheet_extract.pipeline import decode_source

PROG = 'spritesheet-tool'


def _build_parser() -> argparse.ArgumentParser:
    epilog = (
        'Examples:\n'
        f'  {PROG} mygame.cartridge\n'
        f'  {PROG} mygame.cartridge.png -o ./sheets\n'
        f'  {PROG} *.cartridge --json\n'
        f'  {PROG} --formats\n'
    )
    parser = argparse.ArgumentParser(
        prog=PROG,
        description='Extract the 128x128 sprite sheet from cartridge files as PNG.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('files', nargs='*', metavar='file', help='.cartridge or .cartridge.png files')
    parser.add_argument('-o', '--out-dir', default=None, help='Directory for PNG output (default: cwd)')
    parser.add_argument('-j', '--json', action='store_true', default=None, help='Output JSON report instead of text')
    parser.add_argument('--formats', action='store_true', help='List supported cartridge formats and exit')
    return parser


def _print_formats() -> None:
    print('Supported cartridge formats:\n')
    for fmt in sorted(registry.all_formats().values(), key=lambda f: f.name):
        print(f'  {fmt.name:<6} *{fmt.suffix:<16} {fmt.help}')


def _fail(error: DecodeError, report: Report) -> bool:
    print(f'{PROG}: {error}', file=sys.stderr)
    report.add_failure(error)
    return False


def _extract_one(path: str, out_dir: str, report: Report, written: set[str]) -> bool:
    """Decode one cartridge and write its PNG. Returns True on success."""
    source = detect_format(path)
    if isinstance(source, DecodeError):
        return _fail(source, report)

    buffer = decode_source(source)
    if isinstance(buffer, DecodeError):
        return _fail(buffer, report)
    indices = unpack_indices(buffer)

    out_path = os.path.join(out_dir, output_name(path))
    if out_path in written:
        print(f'{PROG}: warning: {out_path} written earlier in this run, overwriting with {path}', file=sys.stderr)
    try:
        to_image(colourise(indices)).save(out_path, format='PNG')
    except OSError as e:
        return _fail(
            DecodeError(
                kind=ErrorKind.IO_FAILURE,
                message=f'Could not write {out_path}: {e.strerror or e}',
                path=path,
            ),
            report,
        )

    written.add(out_path)
    report.add_decoded(path, registry.get(source.kind).name, out_path, palette_census(indices))
    return True


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else — OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'{PROG}: loaded {env_path}', file=sys.stderr)
    settings = resolve_settings()

    if args.formats:
        _print_formats()
        return 0

    if not args.files:
        parser.error('no cartridge files given')

    out_dir = args.out_dir or settings.out_dir
    try:
        os.makedirs(out_dir, exist_ok=True)
    except OSError as e:
        error = DecodeError(
            kind=ErrorKind.IO_FAILURE,
            message=f'Cannot create output directory: {e.strerror or e}',
            path=out_dir,
        )
        print(f'{PROG}: {error}', file=sys.stderr)
        return 1
    as_json = args.json if args.json is not None else settings.report_format == 'json'

    report = Report()
    written: set[str] = set()
    for path in args.files:
        _extract_one(path, out_dir, report, written)

    print(format_json(report) if as_json else format_text(report))
    return 1 if report.fail_count else 0


if __name__ == '__main__':
    sys.exit(main())
