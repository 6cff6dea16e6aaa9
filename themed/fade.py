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

import asyncio
import logging

from themed.color import hex_to_rgb, interpolate

log = logging.getLogger(__name__)

MIN_STEP_MS = 5


class CancelToken(object):
    """
    Cooperative stop flag shared between the controller and a running rotation.
    Polled at step boundaries only.
    """

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self):
        return self._event.is_set()

    def is_cancelled(self):
        return self._event.is_set()

    async def sleep(self, seconds):
        """
        Suspends for seconds, waking early on cancel.
        :return: whether the token is cancelled
        :rtype: bool
        """
        if seconds > 0 and not self.cancelled:
            try:
                await asyncio.wait_for(self._event.wait(), seconds)
            except asyncio.TimeoutError:
                pass
        return self.cancelled


def apply_step(sink, step, baseline):
    """
    Writes baseline overlaid with one step mapping as the whole configuration.
    """
    colors = dict(baseline)
    colors.update(step)
    sink.update(colors)


def step_colors(from_palette, to_palette, t):
    a_colors, b_colors = from_palette.colors, to_palette.colors
    step = {}

    for key in list(a_colors) + [k for k in b_colors if k not in a_colors]:
        a, b = a_colors.get(key), b_colors.get(key)
        if hex_to_rgb(a) and hex_to_rgb(b):
            step[key] = interpolate(a, b, t)
        elif isinstance(b, str):
            # new keys show up at once
            step[key] = b
        elif isinstance(a, str):
            step[key] = a

    return step


def step_delay(duration_ms, steps):
    """
    :return: pause between two steps in seconds
    """
    return max(MIN_STEP_MS, int(duration_ms) // steps) / 1000


async def fade(from_palette, to_palette, duration_ms, steps, baseline, token, sink):
    """
    Fades the configuration from one palette to the next in steps + 1 writes.

    :type from_palette: themed.palette.Palette
    :type to_palette: themed.palette.Palette
    :type token: CancelToken
    :type sink: themed.store.ConfigSink
    :return: False if cancelled before the last step was written
    """
    steps = max(1, int(steps))
    delay = step_delay(duration_ms, steps)
    log.debug("Fading %s -> %s; steps=%s delay=%ss", from_palette.name, to_palette.name, steps, delay)

    for i in range(steps + 1):
        if token.cancelled:
            return False

        apply_step(sink, step_colors(from_palette, to_palette, i / steps), baseline)

        if i < steps:
            await token.sleep(delay)

    return True
