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

"""ThemeD Daemon

Usage:
  themed [--daemon] [--config=FILE] [-d | --debug] [-v | --verbose]
  themed -h | --help
  themed --version

Options:
  -h --help                 Show this screen.
  --version                 Show version.
  -c FILE --config=FILE     Config file to read [default: themed.config].
  -d --debug                Show debug output. (not recommended for daily use)
  -v --verbose              Be verbose.
  --daemon                  Run in daemon mode.
"""

import logging
import os
import sys

from docopt import docopt

import themed
import themed.daemon

log = logging.getLogger(__name__)


def pid_exists(processid):
    if processid < 0:
        return False
    try:
        os.kill(processid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    else:
        return True


def check_pid_file(path=themed.daemon.PID_FILE):
    """
    :return: False if another instance is running
    """
    try:
        with open(path, 'r') as f:
            spid = f.read().strip()
    except FileNotFoundError:
        return True

    if spid and spid.isdigit():
        if pid_exists(int(spid)):
            return False
        log.warning("Found stale pid file, assuming unclean shutdown.")
    return True


def log_level(arguments):
    lvl = logging.WARNING

    if arguments['--verbose']:
        lvl = logging.INFO

    if arguments['--debug']:
        lvl = logging.DEBUG

    return lvl


def main(argv=None):
    arguments = docopt(__doc__, argv=argv, version='ThemeD Daemon ' + themed.VERSION)

    logging.basicConfig(level=log_level(arguments),
                        format="[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
                        datefmt="%H:%M:%S")

    if not check_pid_file():
        log.fatal("A instance of the program is already running, exiting...")
        sys.exit(5)

    config_path = os.path.abspath(arguments['--config'])

    if arguments['--daemon']:
        wdir = os.path.dirname(config_path)
        try:
            pid = os.fork()
            if pid == 0:
                os.setsid()
                pid2 = os.fork()
                if pid2 == 0:
                    os.umask(0)
                    os.chdir(wdir)
                    with open(themed.daemon.PID_FILE, 'w') as pidf:
                        pidf.write(str(os.getpid()) + '\n')
                    themed.daemon.run(config_path)
                else:
                    sys.exit()
            else:
                sys.exit()
        except OSError as e:
            log.fatal("Start failed: %s", e)
            sys.exit(1)
    else:
        themed.daemon.run(config_path)


if __name__ == "__main__":
    main()
