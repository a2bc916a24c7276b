"""Configuration for spritesheet-tool: environment variables and .env files.

Precedence (first wins):
  1. Command line flags (applied by the CLI on top of Settings).
  2. Variables already in the OS environment.
  3. An explicit --env-file, or else the nearest .env found walking up from
     the working directory. The walk stops at a .git file or directory so a
     .env outside the repository is never picked up.

Variables:
  SPRITESHEET_OUT_DIR   directory PNGs are written to (default: cwd)
  SPRITESHEET_REPORT    'text' or 'json' (default: text)
"""

import os
from dataclasses import dataclass
from pathlib import Path

OUT_DIR_VAR = 'SPRITESHEET_OUT_DIR'
REPORT_VAR = 'SPRITESHEET_REPORT'
REPORT_FORMATS = ('text', 'json')


@dataclass
class Settings:
    out_dir: str = '.'
    report_format: str = 'text'


def find_dotenv(start: Path) -> Path | None:
    """Nearest .env at or above start, without crossing a .git boundary."""
    for directory in [start.resolve(), *start.resolve().parents]:
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        if (directory / '.git').exists():
            return None
    return None


def parse_dotenv(path: Path) -> dict[str, str]:
    """KEY=value lines; quotes around values are dropped, '#' lines skipped."""
    values: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, value = line.partition('=')
        key = key.strip()
        if key:
            values[key] = value.strip().strip('"').strip("'")
    return values


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env values into os.environ without overwriting existing ones.

    Returns the file that was loaded, or None.
    """
    if env_file:
        path: Path | None = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def resolve_settings() -> Settings:
    """Settings from the current environment. Unknown report formats fall back to text."""
    settings = Settings()
    out_dir = os.environ.get(OUT_DIR_VAR)
    if out_dir:
        settings.out_dir = out_dir
    report_format = os.environ.get(REPORT_VAR, '').strip().lower()
    if report_format in REPORT_FORMATS:
        settings.report_format = report_format
    return settings
