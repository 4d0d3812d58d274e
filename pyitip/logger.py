# -*- coding: utf-8 -*-
# Copyright 2010-2013 Kolab Systems AG (http://www.kolabsys.com)
#
# Jeroen van Meeuwen (Kolab Systems) <vanmeeuwen a kolabsys.com>
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

import logging
import sys


def scan_argv(argv):
    """
        Find the debug level (-d) and log level (-l) on a command line,
        before the configuration is parsed.

        Returns a tuple (debuglevel, loglevel). A debug level implies the
        DEBUG log level.
    """
    debuglevel = 0
    loglevel = logging.CRITICAL

    args = list(argv)

    while len(args) > 0:
        arg = args.pop(0)

        if arg == '-d' and len(args) > 0:
            try:
                debuglevel = int(args.pop(0))
            except ValueError:
                continue

            loglevel = logging.DEBUG

        elif arg == '-l' and len(args) > 0:
            loglevel = getattr(logging, args.pop(0).upper(), logging.DEBUG)

    return (debuglevel, loglevel)


class Logger(logging.Logger):
    """
        The pyitip version of a logger.

        Next to the log level, loggers have a debug level (0-9): log.debug()
        takes the level of detail of a message, and only emits it when
        that level does not exceed the debug level.
    """
    (debuglevel, loglevel) = scan_argv(getattr(sys, 'argv', []))

    logfile = '/var/log/pyitip/pyitip.log'

    logformat = "%(asctime)s %(name)s %(levelname)s [%(process)d] %(message)s"

    def __init__(self, *args, **kw):
        if 'name' in kw:
            name = kw['name']
        elif len(args) == 1:
            name = args[0]
        else:
            name = 'pyitip'

        logging.Logger.__init__(self, name)

        formatter = logging.Formatter(self.logformat)

        self.console_stdout = logging.StreamHandler(sys.stdout)
        self.console_stdout.setFormatter(formatter)
        self.addHandler(self.console_stdout)

        logfile = kw.get('logfile', self.logfile)

        # Without a writable log file, log to stdout only
        try:
            file_handler = logging.FileHandler(filename=logfile)
        except (IOError, OSError):
            return

        file_handler.setFormatter(formatter)
        self.addHandler(file_handler)

    def remove_stdout_handler(self):
        self.console_stdout.close()
        self.removeHandler(self.console_stdout)

    def debug(self, msg, level=1, *args, **kw):
        self.setLevel(self.loglevel)

        # Leave the debug output of other applications' loggers alone
        if not self.name.startswith(('pyitip', 'itipscheduling')) and self.debuglevel != 9:
            return

        if level <= self.debuglevel:
            self.log(logging.DEBUG, msg)

    def warning(self, msg, *args, **kw):
        self.setLevel(self.loglevel)
        logging.Logger.warning(self, msg, *args, **kw)


logging.setLoggerClass(Logger)
