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

from sqlalchemy import Column, Integer, String, Text

from . import Base


class Meta(Base):
    __tablename__ = "meta"

    id = Column(Integer, primary_key=True)
    option = Column(String, unique=True)
    value = Column(String)

    @classmethod
    def get_version(cls):
        m = cls.query.filter_by(option="db_version").first()
        if m is not None:
            return int(m.value)

    def __repr__(self):
        return "<Meta {}={}>".format(self.option, self.value)


class Setting(Base):
    """
    One host configuration entry, value stored as JSON text.
    """
    __tablename__ = "setting"

    id = Column(Integer, primary_key=True)
    option = Column(String, unique=True, nullable=False)
    value = Column(Text)

    def __repr__(self):
        return "<Setting option={}>".format(self.option)
