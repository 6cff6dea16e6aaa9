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

import math
import re
from collections import namedtuple

import spectra

HEX_COLOR = re.compile(r"^#?([0-9a-f]{6})$", re.IGNORECASE)

RGB = namedtuple("RGB", ["r", "g", "b"])


def hex_to_rgb(text):
    """
    Parses '#rrggbb' (the '#' is optional, case doesn't matter).
    :return: the color or None if text is not a 6 digit hex color
    :rtype: RGB
    """
    if not isinstance(text, str):
        return None

    m = HEX_COLOR.match(text.strip())
    if not m:
        return None

    i = int(m.group(1), 16)
    return RGB((i >> 16) & 255, (i >> 8) & 255, i & 255)


def to_byte(v):
    return max(0, min(255, int(math.floor(v + 0.5))))


def rgb_to_hex(rgb):
    return "#{:02x}{:02x}{:02x}".format(*(to_byte(v) for v in rgb))


def srgb_to_linear(c):
    c = c / 255
    return c / 12.92 if c <= 0.04045 else math.pow((c + 0.055) / 1.055, 2.4)


def linear_to_srgb(v):
    """
    Inverse of srgb_to_linear; returns an unclamped, unrounded byte value.
    """
    if v <= 0.0031308:
        return v * 12.92 * 255
    return (1.055 * math.pow(v, 1 / 2.4) - 0.055) * 255


def interpolate(hex_a, hex_b, t):
    """
    Blends two hex colors in linear light.

    Byte space blending darkens the midpoint (black to white gives #808080
    instead of #bcbcbc), so both colors are decoded to linear RGB first.
    Invalid input never raises: the other color is returned instead.

    :param hex_a: color at t=0
    :param hex_b: color at t=1
    :param t: blend position in [0, 1]
    :rtype: str
    """
    a, b = hex_to_rgb(hex_a), hex_to_rgb(hex_b)
    if a is None and b is not None:
        return hex_b
    if b is None and a is not None:
        return hex_a
    if a is None:
        return hex_b or hex_a or "#000000"

    linear_a = spectra.rgb(*(srgb_to_linear(c) for c in a))
    linear_b = spectra.rgb(*(srgb_to_linear(c) for c in b))
    blended = linear_a.blend(linear_b, ratio=t)

    return rgb_to_hex(RGB(*(linear_to_srgb(max(0.0, v)) for v in blended.values)))
