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

from setuptools import setup

setup(name='ThemeD',
      version='0.1',
      description='Cross-fades an editor color theme through a folder of palettes.',
      author='ThemeD Team',
      license='GPLv3',
      packages=['themed', 'themed.tests'],
      python_requires='>=3.8',
      install_requires=[
            'spectra', 'docopt', 'json-rpc', 'sqlalchemy>=1.4',
      ],
      extras_require={
            'test': ['pytest', 'pytest-asyncio'],
      },
      entry_points={
            'console_scripts': ['themed=themed.cli:main'],
      },
      zip_safe=False)
