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
import os
import signal
import sys

from jsonrpc import JSONRPCResponseManager, dispatcher
from jsonrpc.exceptions import JSONRPCDispatchException
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError

from themed import VERSION
from themed.models import Meta
from themed.rotation import RotationController
from themed.settings import CONFIG_FILE, RotationSettings, daemonSection, databaseSection, read_config
from themed.store import DatabaseConfigStore
from . import Base, session

log = logging.getLogger(__name__)

PID_FILE = "themed.pid"

engine = None
loop = None
""" :type : asyncio.AbstractEventLoop """
server = None
rotation = None
""" :type : themed.rotation.RotationController """


def run(config_path=CONFIG_FILE):
    global engine, loop, server, rotation
    try:
        config = read_config(config_path)

        # SQL init
        engine = create_engine("sqlite:///" + config.get(databaseSection, 'name', fallback='themed.sqlite'),
                               echo=log.getEffectiveLevel() == logging.DEBUG)
        session.configure(bind=engine)
        if not check_db():
            init_db()

        logging.getLogger("asyncio").setLevel(log.getEffectiveLevel())

        # re-read on every start
        rotation = RotationController(DatabaseConfigStore(session),
                                      settings=lambda: RotationSettings.from_config(read_config(config_path)))

        # sigterm handler
        def sigterm_handler(signum, frame):
            raise SystemExit

        signal.signal(signal.SIGTERM, sigterm_handler)

        # main loop
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        coro = loop.create_server(ThemeDProtocol,
                                  config.get(daemonSection, 'host', fallback='127.0.0.1'),
                                  config.getint(daemonSection, 'port', fallback=1425))
        server = loop.run_until_complete(coro)
        log.info("Start phase finished; starting main loop")
        loop.run_forever()
    except (KeyboardInterrupt, SystemExit):
        log.info("Exiting")
    finally:
        shutdown()
    sys.exit(0)


def shutdown():
    if rotation is not None:
        rotation.shutdown()

    try:
        os.remove(PID_FILE)
    except FileNotFoundError:
        pass

    session.commit()
    session.close()
    if server is not None:
        server.close()
    if loop is not None:
        if server is not None:
            loop.run_until_complete(server.wait_closed())
        loop.close()


def check_db():
    """
    Checks database version
    :return: database validity
    :rtype: bool
    """
    try:
        db_version = Meta.get_version()

        if db_version is not None:
            log.info("DB connection established; db_version=%s", db_version)
            return True
    except OperationalError:
        session.rollback()
        return False
    return False


def init_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session.add(Meta(option="db_version", value="1"))
    session.commit()
    check_db()


def command_result():
    return {
        'running': rotation.running,
        'messages': rotation.notifier.drain()
    }


@dispatcher.add_method
def start_rotation(**kwargs):
    """
    Part of the Theme API. Starts cycling through the palettes in the theme folder.
    Required parameters: -
    """

    rotation.start()
    return command_result()


@dispatcher.add_method
def stop_rotation(**kwargs):
    """
    Part of the Theme API. Stops the rotation and restores the static colors.
    Required parameters: -
    """

    rotation.stop()
    return command_result()


@dispatcher.add_method
def next_now(**kwargs):
    """
    Part of the Theme API. Skips to the next palette without fading.
    Required parameters: -
    """

    rotation.advance()
    return command_result()


@dispatcher.add_method
def get_status(**kwargs):
    """
    Part of the Theme API. Shows whether a rotation runs and which palette is current.
    Required parameters: -
    """

    return rotation.status()


@dispatcher.add_method
def get_colors(**kwargs):
    """
    Part of the Theme API. Returns the color customizations currently applied.
    Required parameters: -
    """

    try:
        return {'colors': rotation.sink.get()}
    except OperationalError as e:
        log.error("Can't read color customizations: %s", e)
        raise JSONRPCDispatchException(code=-1009, message="Internal Error")


@dispatcher.add_method
def discover(**kwargs):
    """
    Part of the Theme API. Used by clients to find the daemon.
    Required parameters: -
    """

    return {'version': VERSION}


class ThemeDProtocol(asyncio.Protocol):
    """
    Line based JSON-RPC; a request may arrive split over several segments.
    """
    transport = None

    def __init__(self):
        self.pending = b""

    def connection_made(self, transport):
        log.debug("New connection from %s", transport.get_extra_info("peername"))
        self.transport = transport

    def data_received(self, data):
        *lines, self.pending = (self.pending + data).split(b"\n")
        for line in lines:
            self.handle_line(line)

    def handle_line(self, raw):
        try:
            line = raw.decode().strip()
        except UnicodeDecodeError:
            log.warning("Received undecodable line, ignoring")
            return
        if not line:
            return

        response = JSONRPCResponseManager.handle(line, dispatcher)
        if response is not None:
            self.transport.write(response.json.encode() + b"\n")

    def connection_lost(self, exc):
        if self.pending.strip():
            log.debug("Dropping %s bytes of unterminated request", len(self.pending))
        log.info("Lost connection to %s", self.transport.get_extra_info("peername"))
