"""Tests for spritesheet_extract.core.report — census and text/JSON output."""

import json

import numpy as np
from spritesheet_extract.core.report import format_json, format_text, palette_census
from spritesheet_extract.core.types import DecodeError, ErrorKind, Report


class TestPaletteCensus:
    def test_single_colour(self):
        census = palette_census(np.zeros((128, 128), dtype=np.uint8))
        assert census == [{'index': 0, 'hex': '#000000', 'count': 16384, 'pct': 100.0}]

    def test_sorted_by_count(self):
        indices = np.zeros((4, 4), dtype=np.uint8)
        indices[0, :3] = 8
        indices[1, 0] = 12
        census = palette_census(indices)
        assert [c['index'] for c in census] == [0, 8, 12]
        assert census[1]['hex'] == '#ff004d'
        assert census[1]['count'] == 3

    def test_unused_indices_omitted(self):
        census = palette_census(np.full((2, 2), 7, dtype=np.uint8))
        assert len(census) == 1


def _report() -> Report:
    report = Report()
    census = palette_census(np.zeros((128, 128), dtype=np.uint8))
    report.add_decoded('a.cartridge', 'text', 'out/a.png', census)
    report.add_failure(
        DecodeError(
            kind=ErrorKind.LENGTH_MISMATCH,
            message='Incorrect amount of gfx data',
            path='b.cartridge',
            expected=16384,
            actual=1280,
        )
    )
    return report


class TestFormatText:
    def test_lists_both_files(self):
        text = format_text(_report())
        assert 'a.cartridge' in text
        assert 'out/a.png' in text
        assert 'b.cartridge' in text
        assert 'LengthMismatch' in text
        assert 'expected 16384  got 1280' in text

    def test_summary(self):
        assert 'OK 1/2 files  FAIL 1/2 files' in format_text(_report())

    def test_empty_report(self):
        assert format_text(Report()) == ''


class TestFormatJson:
    def test_structure(self):
        parsed = json.loads(format_json(_report()))
        assert parsed['summary'] == {'total': 2, 'ok': 1, 'fail': 1}
        ok, failed = parsed['files']
        assert ok['format'] == 'text'
        assert ok['width'] == 128
        assert ok['census'][0]['pct'] == 100.0
        assert failed['error'] == 'LengthMismatch'
        assert failed['actual'] == 1280

    def test_tuple_values_serialise(self):
        report = Report()
        report.add_failure(
            DecodeError(ErrorKind.DIMENSION_MISMATCH, 'bad size', 'x.cartridge.png', (160, 205), (1, 1))
        )
        parsed = json.loads(format_json(report))
        assert parsed['files'][0]['expected'] == [160, 205]
