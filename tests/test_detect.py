"""Tests for spritesheet_extract.core.detect — format detection and output naming."""

import pytest
from spritesheet_extract.core.detect import detect_format, has_suffix, output_name
from spritesheet_extract.core.types import CartridgeSource, DecodeError, ErrorKind, SourceKind


class TestHasSuffix:
    def test_plain(self):
        assert has_suffix('game.cartridge', '.cartridge')

    def test_uses_final_component_only(self):
        assert not has_suffix('dir.cartridge/game.txt', '.cartridge')

    def test_compound(self):
        assert has_suffix('a/b/game.cartridge.png', '.cartridge.png')
        assert not has_suffix('game.png', '.cartridge.png')


class TestDetectFormat:
    def test_text(self):
        assert detect_format('carts/game.cartridge') == CartridgeSource(SourceKind.TEXT, 'carts/game.cartridge')

    def test_png(self):
        assert detect_format('game.cartridge.png') == CartridgeSource(SourceKind.PNG, 'game.cartridge.png')

    def test_dotted_stem(self):
        assert detect_format('my.game.v2.cartridge').kind == SourceKind.TEXT

    def test_plain_png_rejected(self):
        result = detect_format('game.png')
        assert isinstance(result, DecodeError)
        assert result.kind == ErrorKind.UNSUPPORTED_FORMAT
        assert result.actual == '.png'
        assert '.png' in result.message

    def test_png_then_cartridge_rejected(self):
        result = detect_format('game.png.cartridge.txt')
        assert result.kind == ErrorKind.UNSUPPORTED_FORMAT
        assert result.actual == '.txt'

    def test_no_extension(self):
        result = detect_format('README')
        assert result.kind == ErrorKind.UNSUPPORTED_FORMAT
        assert result.actual == ''
        assert result.path == 'README'

    def test_case_sensitive(self):
        assert isinstance(detect_format('GAME.CARTRIDGE'), DecodeError)

    def test_does_not_touch_filesystem(self, tmp_path):
        missing = tmp_path / 'nowhere' / 'game.cartridge'
        assert detect_format(str(missing)).kind == SourceKind.TEXT


class TestOutputName:
    def test_text(self):
        assert output_name('carts/game.cartridge') == 'game.png'

    def test_png(self):
        assert output_name('/abs/game.cartridge.png') == 'game.png'

    def test_dotted_stem(self):
        assert output_name('my.game.cartridge.png') == 'my.game.png'

    def test_unrecognised_raises(self):
        with pytest.raises(ValueError):
            output_name('game.png')
