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
import logging
import os
import re
from collections.abc import Mapping
from types import MappingProxyType

from themed.errors import ConfigurationError, DataError

log = logging.getLogger(__name__)

PALETTE_EXTENSIONS = ('.json',)
_digits = re.compile(r"(\d+)")


class Palette(object):
    """
    A named set of color customizations, one per palette file.
    """

    def __init__(self, name, colors):
        self._name = name
        self._colors = MappingProxyType(dict(colors))

    @property
    def name(self):
        return self._name

    @property
    def colors(self):
        return self._colors

    def __eq__(self, other):
        if not isinstance(other, Palette):
            return NotImplemented
        return self.name == other.name and dict(self.colors) == dict(other.colors)

    def __hash__(self):
        return hash((self.name, frozenset(self.colors.items())))

    def __repr__(self):
        return "<Palette name={} colors={}>".format(self.name, len(self.colors))

    def to_json(self):
        return {
            'name': self.name,
            'colors': dict(self.colors)
        }


def natural_key(filename):
    """
    Sort key comparing digit runs by value and everything else case-insensitively,
    so '2.json' sorts before '10.json'.
    """
    return [(0, int(part), "") if part.isdecimal() else (1, 0, part.casefold())
            for part in _digits.split(filename) if part]


def read_palette(path, whitelist=()):
    """
    Reads one palette file.
    :raises OSError: file can't be read
    :raises ValueError: file is not a JSON mapping
    :rtype: Palette
    """
    with open(path, encoding='utf-8') as f:
        doc = json.load(f)

    colors = doc.get('colors') if isinstance(doc, Mapping) else None
    if not isinstance(colors, Mapping):
        colors = doc
    if not isinstance(colors, Mapping):
        raise ValueError("expected a JSON object, got {}".format(type(colors).__name__))

    name = os.path.splitext(os.path.basename(path))[0]
    return Palette(name, {k: v for k, v in colors.items()
                          if isinstance(v, str) and (not whitelist or k in whitelist)})


def load_palettes(folder, whitelist=()):
    """
    Loads every palette file in folder in rotation order.

    :param folder: directory holding the palette files
    :param whitelist: keys to keep, empty keeps everything
    :raises ConfigurationError: folder unset, missing or unreadable
    :raises DataError: no palette files or none of them is usable
    :rtype: list[Palette]
    """
    if not folder or not os.path.isdir(folder):
        raise ConfigurationError('Theme folder not set or does not exist. '
                                 'Set "theme_folder" in the [rotation] section.')

    try:
        names = os.listdir(folder)
    except OSError as e:
        raise ConfigurationError("Theme folder can't be read: {}".format(e)) from e

    files = sorted((f for f in names if f.lower().endswith(PALETTE_EXTENSIONS)), key=natural_key)
    if not files:
        raise DataError("No .json files found in the theme folder.")

    whitelist = frozenset(whitelist)
    palettes = []
    for file in files:
        try:
            palettes.append(read_palette(os.path.join(folder, file), whitelist))
        except (OSError, ValueError) as e:
            log.warning("Skipping invalid palette file: %s (%s)", file, e)

    if not palettes:
        raise DataError("No usable palettes found.")

    log.info("Loaded %s palettes from %s", len(palettes), folder)
    return palettes


def partition_keys(palettes, current_static):
    """
    Splits the host's static color configuration into the part left untouched
    by the rotation and the set of keys the rotation animates.

    :rtype: (dict, frozenset)
    """
    animated = frozenset(k for p in palettes for k in p.colors)
    baseline = {k: v for k, v in (current_static or {}).items() if k not in animated}
    return baseline, animated
