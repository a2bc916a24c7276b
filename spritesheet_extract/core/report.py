"""Report builder: text and JSON output for decoded sprite sheets."""

import json
from collections.abc import Iterable
from typing import Any

import numpy as np

from spritesheet_extract.core.palette import PALETTE_HEX
from spritesheet_extract.core.types import Report


def palette_census(indices: np.ndarray) -> list[dict[str, Any]]:
    """Count of each palette index in use, most frequent first."""
    counts = np.bincount(np.asarray(indices, dtype=np.intp).ravel(), minlength=len(PALETTE_HEX))
    total = int(counts.sum())
    census = [
        {
            'index': i,
            'hex': PALETTE_HEX[i] if i < len(PALETTE_HEX) else '#000000',
            'count': int(c),
            'pct': round(int(c) / total * 100, 1) if total else 0.0,
        }
        for i, c in enumerate(counts)
        if c
    ]
    census.sort(key=lambda x: (-x['count'], x['index']))
    return census


def _census_line(census: Iterable[dict[str, Any]], limit: int = 5) -> str:
    parts = [f'{c["index"]}({c["hex"]}):{c["pct"]:.1f}%' for c in list(census)[:limit]]
    return ', '.join(parts)


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    for entry in report.entries:
        if 'error' in entry:
            lines.append(f'✗ {entry["input"]}')
            lines.append(f'  {entry["error"]}: {entry["message"]}')
            if entry.get('expected') is not None:
                lines.append(f'  expected {entry["expected"]}  got {entry["actual"]}')
        else:
            lines.append(f'✓ {entry["input"]} ({entry["format"]}) → {entry["output"]}')
            lines.append(f'  sheet: {entry["width"]}×{entry["height"]}')
            lines.append(f'  palette: {_census_line(entry["census"])}')
        lines.append('')

    total = report.ok_count + report.fail_count
    if total > 0:
        lines.append(f'OK {report.ok_count}/{total} files  FAIL {report.fail_count}/{total} files')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'files': report.entries,
        'summary': {
            'total': report.ok_count + report.fail_count,
            'ok': report.ok_count,
            'fail': report.fail_count,
        },
    }
    return json.dumps(obj, indent=2)
