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


class ThemeDError(Exception):
    """
    Base class for errors reported to the user when a rotation can't start.
    """


class ConfigurationError(ThemeDError):
    """
    The theme folder is not set or does not exist.
    """


class DataError(ThemeDError):
    """
    The theme folder holds no palette files, or none of them is usable.
    """
