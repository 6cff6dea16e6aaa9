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

from themed.models import Setting

log = logging.getLogger(__name__)

COLOR_CUSTOMIZATIONS = "workbench.colorCustomizations"


class ConfigSink(object):
    """
    The host's color customization setting.
    update() always replaces the whole mapping.
    """

    def get(self):
        raise NotImplementedError

    def update(self, colors):
        raise NotImplementedError


class MemoryConfigStore(ConfigSink):
    def __init__(self, colors=None):
        self.colors = dict(colors or {})
        self.writes = []

    def get(self):
        return dict(self.colors)

    def update(self, colors):
        self.colors = dict(colors)
        self.writes.append(dict(colors))


class DatabaseConfigStore(ConfigSink):
    """
    Keeps the mapping as JSON in the setting table.
    """

    def __init__(self, session, option=COLOR_CUSTOMIZATIONS):
        """
        :type session: sqlalchemy.orm.scoping.scoped_session
        """
        self.session = session
        self.option = option

    def _row(self):
        return self.session.query(Setting).filter_by(option=self.option).first()

    def get(self):
        row = self._row()
        if row is None or not row.value:
            return {}
        try:
            colors = json.loads(row.value)
        except ValueError:
            log.warning("Stored %s is not valid JSON, ignoring", self.option)
            return {}
        return colors if isinstance(colors, dict) else {}

    def update(self, colors):
        row = self._row()
        if row is None:
            row = Setting(option=self.option)
            self.session.add(row)
        row.value = json.dumps(dict(colors), sort_keys=True)
        self.session.commit()
        log.debug("Wrote %s keys to %s", len(colors), self.option)
