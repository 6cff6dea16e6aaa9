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

import json

import pytest

from themed.settings import RotationSettings
from themed.store import MemoryConfigStore


@pytest.fixture
def write_palettes(tmp_path):
    """
    Writes {filename: document} into a fresh theme folder and returns its path.
    """

    def write(files):
        for name, doc in files.items():
            content = doc if isinstance(doc, str) else json.dumps(doc)
            (tmp_path / name).write_text(content, encoding='utf-8')
        return str(tmp_path)

    return write


@pytest.fixture
def sink():
    return MemoryConfigStore({"foo.bg": "#111111", "other.fg": "#222222"})


@pytest.fixture
def fast_settings():
    def make(folder, **kwargs):
        kwargs.setdefault('duration_ms', 100)
        kwargs.setdefault('steps', 2)
        kwargs.setdefault('dwell_ms', 0)
        return RotationSettings(theme_folder=folder, **kwargs)

    return make
