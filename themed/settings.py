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

import configparser
import logging
import re

from themed.errors import ConfigurationError

log = logging.getLogger(__name__)

daemonSection = 'daemon'
databaseSection = 'db'
rotationSection = 'rotation'

CONFIG_FILE = 'themed.config'


def read_config(path=CONFIG_FILE):
    config = configparser.ConfigParser()
    if not config.read(path, encoding='utf-8'):
        log.info("No config file found: %s", path)
    return config


def get_int(config, option, fallback):
    try:
        return config.getint(rotationSection, option, fallback=fallback)
    except ValueError:
        raise ConfigurationError('"{}" in the [{}] section must be a whole number, got "{}"'.format(
            option, rotationSection, config.get(rotationSection, option))) from None


class RotationSettings(object):
    """
    Settings read on every rotation start.
    """

    def __init__(self, theme_folder='', duration_ms=1500, steps=30, dwell_ms=4000, whitelist=()):
        self.theme_folder = theme_folder
        self.duration_ms = duration_ms
        self.steps = steps
        self.dwell_ms = dwell_ms
        self.whitelist = tuple(whitelist)

    @classmethod
    def from_config(cls, config):
        """
        :type config: configparser.ConfigParser
        :raises ConfigurationError: a number option holds something else
        """
        keys = config.get(rotationSection, 'keys_whitelist', fallback='')
        return cls(theme_folder=config.get(rotationSection, 'theme_folder', fallback=''),
                   duration_ms=get_int(config, 'transition_duration_ms', 1500),
                   steps=get_int(config, 'transition_steps', 30),
                   dwell_ms=get_int(config, 'dwell_ms', 4000),
                   whitelist=[k for k in re.split(r"[\s,]+", keys) if k])

    def __repr__(self):
        return "<RotationSettings folder={} duration={}ms steps={} dwell={}ms>".format(
            self.theme_folder, self.duration_ms, self.steps, self.dwell_ms)
