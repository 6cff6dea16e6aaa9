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

from themed.errors import ThemeDError
from themed.fade import CancelToken, apply_step, fade
from themed.palette import load_palettes, partition_keys
from themed.settings import RotationSettings

log = logging.getLogger(__name__)

STOP_GRACE_DELAY = 0.05


class Notifier(object):
    """
    Collects messages meant for the user until the command surface picks them up.
    """

    def __init__(self):
        self.messages = []

    def info(self, text):
        log.info(text)
        self.messages.append({'level': 'info', 'message': text})

    def error(self, text):
        log.error(text)
        self.messages.append({'level': 'error', 'message': text})

    def drain(self):
        messages, self.messages = self.messages, []
        return messages


class RotationSession(object):
    """
    State of one rotation, from start() until the next start() replaces it.
    """

    def __init__(self, palettes, baseline, animated_keys, settings):
        self.palettes = palettes
        self.index = 0
        self.baseline = baseline
        self.animated_keys = animated_keys
        self.settings = settings
        self.token = CancelToken()
        self.task = None
        """ :type : asyncio.Task """

    @property
    def running(self):
        return self.task is not None and not self.task.done()

    @property
    def current(self):
        return self.palettes[self.index]

    def advance(self):
        self.index = (self.index + 1) % len(self.palettes)
        return self.current

    def __repr__(self):
        return "<RotationSession palettes={} index={} running={}>".format(len(self.palettes), self.index,
                                                                           self.running)


class RotationController(object):
    """
    Starts, stops and skips the theme rotation.

    All methods are meant to be called from inside the running event loop and
    return without waiting for the rotation. Problems are reported through the
    notifier, never raised.
    """

    def __init__(self, sink, settings=None, notifier=None, grace_delay=STOP_GRACE_DELAY):
        """
        :type sink: themed.store.ConfigSink
        :param settings: RotationSettings or a callable returning them, called on every start
        :type notifier: Notifier
        """
        self.sink = sink
        self.settings = settings if settings is not None else RotationSettings()
        self.notifier = notifier if notifier is not None else Notifier()
        self.grace_delay = grace_delay
        self.session = None
        """ :type : RotationSession """
        self._restore_task = None

    @property
    def running(self):
        return self.session is not None and self.session.running

    def _read_settings(self):
        return self.settings() if callable(self.settings) else self.settings

    def start(self):
        if self.running:
            self.notifier.info("Rotating Theme: already running.")
            return

        try:
            settings = self._read_settings()
            palettes = load_palettes(settings.theme_folder, settings.whitelist)
        except ThemeDError as e:
            self.notifier.error("Rotating Theme: {}".format(e))
            return

        baseline, animated_keys = partition_keys(palettes, self.sink.get())
        session = RotationSession(palettes, baseline, animated_keys, settings)
        self.session = session

        apply_step(self.sink, session.current.colors, baseline)
        session.task = asyncio.ensure_future(self._rotate(session))
        log.info("Rotation started; palettes=%s settings=%s", [p.name for p in palettes], settings)

    async def _rotate(self, session):
        settings = session.settings
        token = session.token
        try:
            while not token.cancelled:
                source = session.index
                target = (source + 1) % len(session.palettes)
                completed = await fade(session.palettes[source], session.palettes[target], settings.duration_ms,
                                       settings.steps, session.baseline, token, self.sink)
                if not completed or token.cancelled:
                    break

                # advance() may have moved the cursor during the fade; keep its choice
                if session.index == source:
                    session.index = target

                if settings.dwell_ms > 0 and await token.sleep(settings.dwell_ms / 1000):
                    break
        except Exception:
            log.exception("Rotation stopped by an unexpected error")
        finally:
            log.debug("Rotation loop finished; index=%s", session.index)

    def stop(self):
        """
        Cancels the rotation and puts the static colors back.

        :return: the pending restore, awaitable by callers that need it done, or None
        :rtype: asyncio.Task
        """
        session = self.session
        if session is None:
            return None

        if not session.running:
            if session.baseline:
                self.sink.update(session.baseline)
                log.info("Restored %s static color keys", len(session.baseline))
            return None

        if session.token.cancelled:
            return self._restore_task

        session.token.cancel()
        self._restore_task = asyncio.ensure_future(self._restore_after_stop(session))
        return self._restore_task

    async def _restore_after_stop(self, session):
        done, pending = await asyncio.wait([session.task], timeout=self.grace_delay)
        if pending:
            log.warning("Rotation loop still busy after %ss, restoring anyway", self.grace_delay)

        if self.session is not session:
            log.debug("Session replaced before restore, skipping")
            return

        self.sink.update(session.baseline)
        log.info("Rotation stopped; restored %s static color keys", len(session.baseline))

    def advance(self):
        """
        Jumps to the next palette without fading. The running loop keeps its timing.
        """
        session = self.session
        if session is None or not session.running or session.token.cancelled or len(session.palettes) < 2:
            return

        palette = session.advance()
        apply_step(self.sink, palette.colors, session.baseline)
        log.info("Skipped to palette %s", palette.name)

    def shutdown(self):
        if self.running:
            log.info("Shutting down running rotation")
            self.session.token.cancel()

    def status(self):
        session = self.session
        if session is None:
            return {'running': False, 'palettes': [], 'index': None, 'palette': None}

        return {
            'running': session.running,
            'palettes': [p.name for p in session.palettes],
            'index': session.index,
            'palette': session.current.name
        }
