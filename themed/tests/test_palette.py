# ThemeD Project
# Copyright (C) 2026 ThemeD Team
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging

import pytest

from themed.errors import ConfigurationError, DataError
from themed.palette import Palette, load_palettes, natural_key, partition_keys


class TestLoadPalettes:
    def test_numeric_order(self, write_palettes):
        folder = write_palettes({"2.json": {"a": "#000002"},
                                 "10.json": {"a": "#000010"},
                                 "1.json": {"a": "#000001"}})

        assert [p.name for p in load_palettes(folder)] == ["1", "2", "10"]

    def test_order_ignores_case(self):
        assert sorted(["b.json", "A.json", "c2.json", "C10.json"], key=natural_key) == \
            ["A.json", "b.json", "c2.json", "C10.json"]

    def test_order_with_non_decimal_digits(self):
        assert sorted(["1²2.json", "10.json", "1.json"], key=natural_key) == ["1.json", "1²2.json", "10.json"]

    def test_unreadable_folder(self, write_palettes, monkeypatch):
        folder = write_palettes({"1.json": {"a": "#000000"}})

        def denied(path):
            raise PermissionError(13, "Permission denied", path)

        monkeypatch.setattr("themed.palette.os.listdir", denied)

        with pytest.raises(ConfigurationError, match="can't be read"):
            load_palettes(folder)

    def test_corrupt_file_skipped(self, write_palettes, caplog):
        folder = write_palettes({"good.json": {"a": "#123456"}, "bad.json": "{not json"})

        with caplog.at_level(logging.WARNING, logger="themed.palette"):
            palettes = load_palettes(folder)

        assert len(palettes) == 1
        assert palettes[0].name == "good"
        assert "bad.json" in caplog.text

    def test_non_object_document_skipped(self, write_palettes):
        folder = write_palettes({"list.json": ["#000000"], "ok.json": {"a": "#000000"}})

        assert [p.name for p in load_palettes(folder)] == ["ok"]

    def test_nested_colors(self, write_palettes):
        folder = write_palettes({"dark.json": {"name": "Dark", "colors": {"editor.background": "#1e1e1e"}}})

        assert dict(load_palettes(folder)[0].colors) == {"editor.background": "#1e1e1e"}

    def test_flat_document_keeps_strings_only(self, write_palettes):
        folder = write_palettes({"flat.json": {"a": "#000000", "b": 3, "c": None, "d": {"x": 1}, "e": "weird"}})

        assert dict(load_palettes(folder)[0].colors) == {"a": "#000000", "e": "weird"}

    def test_colors_not_a_mapping_uses_document(self, write_palettes):
        folder = write_palettes({"p.json": {"colors": "#ffffff", "a": "#000000"}})

        assert dict(load_palettes(folder)[0].colors) == {"colors": "#ffffff", "a": "#000000"}

    def test_whitelist(self, write_palettes):
        folder = write_palettes({"p.json": {"a": "#000000", "b": "#111111", "c": "#222222"}})

        assert dict(load_palettes(folder, ["a", "c"])[0].colors) == {"a": "#000000", "c": "#222222"}

    def test_other_extensions_ignored(self, write_palettes):
        folder = write_palettes({"p.JSON": {"a": "#000000"}, "notes.txt": "hello", "p.json.bak": "{}"})

        assert [p.name for p in load_palettes(folder)] == ["p"]

    def test_unset_folder(self):
        with pytest.raises(ConfigurationError):
            load_palettes("")

    def test_missing_folder(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_palettes(str(tmp_path / "nope"))

    def test_no_files(self, write_palettes):
        with pytest.raises(DataError):
            load_palettes(write_palettes({"readme.md": "# themes"}))

    def test_no_usable_files(self, write_palettes):
        with pytest.raises(DataError):
            load_palettes(write_palettes({"a.json": "[", "b.json": "42"}))


class TestPalette:
    def test_colors_read_only(self):
        p = Palette("x", {"a": "#000000"})

        with pytest.raises(TypeError):
            p.colors["a"] = "#ffffff"

    def test_copies_input(self):
        colors = {"a": "#000000"}
        p = Palette("x", colors)
        colors["a"] = "#ffffff"

        assert p.colors["a"] == "#000000"


class TestPartitionKeys:
    def test_partition(self):
        palettes = [Palette("1", {"foo.bg": "#000000"}), Palette("2", {"foo.bg": "#ffffff"})]

        baseline, animated = partition_keys(palettes, {"foo.bg": "#111", "other.fg": "#222"})

        assert baseline == {"other.fg": "#222"}
        assert animated == {"foo.bg"}

    def test_union_of_all_palettes(self):
        palettes = [Palette("1", {"a": "#000000"}), Palette("2", {"b": "#000000"})]

        baseline, animated = partition_keys(palettes, {"a": "1", "b": "2", "c": "3"})

        assert baseline == {"c": "3"}
        assert animated == {"a", "b"}

    def test_empty_static(self):
        assert partition_keys([Palette("1", {"a": "#000000"})], None) == ({}, frozenset({"a"}))
