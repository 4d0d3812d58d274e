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
"""
    Configuration of pyitip.

    Settings come from the built-in defaults (pyitip.conf.defaults), the
    command line, and the [itip] section of the configuration file, the
    later overriding the earlier.
"""

import logging
import os
import pytz

from configparser import ConfigParser
from optparse import OptionParser

import pyitip

from pyitip.conf.defaults import Defaults
from pyitip.constants import epilog
from pyitip.logger import Logger
from pyitip.translate import _

log = pyitip.getLogger('pyitip.conf')


class Conf(object):
    def __init__(self):
        self.defaults = Defaults()

        self.config_file = self.defaults.config_file

        self.cli_parser = None
        self.cli_keywords = None
        self.cli_args = None

        self.cfg_parser = None

        # Typed settings from the configuration file, by (section, key)
        self.settings = {}

        self.create_options()

    def create_options(self):
        self.cli_parser = OptionParser(epilog=epilog)

        runtime_group = self.cli_parser.add_option_group(_("Runtime Options"))

        runtime_group.add_option(
                "-c", "--config",
                dest="config_file",
                action="store",
                default=self.defaults.config_file,
                help=_("Configuration file to use")
            )

        runtime_group.add_option(
                "-d", "--debug",
                dest="debuglevel",
                type='int',
                default=0,
                help=_("Set the debugging verbosity. Maximum is 9, tracing collaborator payloads.")
            )

        runtime_group.add_option(
                "-l",
                dest="loglevel",
                type='str',
                default="CRITICAL",
                help=_("Set the logging level. One of info, warn, error, critical or debug")
            )

        runtime_group.add_option(
                "--logfile",
                dest="logfile",
                action="store",
                default=self.defaults.logfile,
                help=_("Log file to use")
            )

    def finalize_conf(self, args=None):
        """
            Settle the configuration for the arguments given (or those on
            the command line): defaults first, command line options next,
            then the configuration file the options point to.
        """
        (self.cli_keywords, self.cli_args) = self.cli_parser.parse_args(args)

        for (option, value) in self.defaults.__dict__.items():
            if isinstance(value, dict):
                continue

            setattr(self, option, value)

        for (option, value) in self.cli_parser.defaults.items():
            setattr(self, option, value)

        for (option, value) in vars(self.cli_keywords).items():
            check = getattr(self, "check_setting_%s" % (option), None)

            if check is not None and not check(value):
                continue

            log.debug(_("Setting %s to %r (from CLI)") % (option, value), level=8)
            setattr(self, option, value)

        self.read_config(self.config_file)
        self.configure_logging()

    def configure_logging(self):
        """
            Hand the debug level, log level and log file over to the loggers
            created from here on.
        """
        Logger.debuglevel = self.debuglevel
        Logger.logfile = self.logfile

        if self.debuglevel > 0:
            Logger.loglevel = logging.DEBUG
        else:
            Logger.loglevel = getattr(logging, str(self.loglevel).upper(), logging.CRITICAL)

    def read_config(self, value=None):
        if not value:
            value = self.config_file

        self.cfg_parser = ConfigParser(interpolation=None)

        if os.path.isfile(value) and not os.access(value, os.R_OK):
            log.error(_("Configuration file %s not readable") % (value))
        else:
            log.debug(_("Reading configuration file %s") % (value), level=8)
            self.cfg_parser.read(value)

        self.config_file = value
        self.load_settings()

    def load_settings(self):
        """
            Convert the options of the configuration file that have a
            default to the type of that default, and validate them.
        """
        self.settings = {}

        for (section, defaults) in self.defaults.__dict__.items():
            if not isinstance(defaults, dict) or not self.cfg_parser.has_section(section):
                continue

            for (key, default) in defaults.items():
                if not self.cfg_parser.has_option(section, key):
                    continue

                try:
                    value = self._convert(section, key, default)
                except ValueError as errmsg:
                    log.error(_("Invalid value for %s/%s: %s") % (section, key, errmsg))
                    value = default

                check = getattr(self, "check_setting_%s_%s" % (section, key), None)
                if check is not None and not check(value):
                    value = default

                log.debug(_("Setting %s/%s to %r (from %s)") % (section, key, value, self.config_file), level=8)

                self.settings[(section, key)] = value

    def _convert(self, section, key, default):
        if isinstance(default, bool):
            return self.cfg_parser.getboolean(section, key)

        if isinstance(default, int):
            return self.cfg_parser.getint(section, key)

        if isinstance(default, list):
            return _split_list(self.cfg_parser.get(section, key, raw=True))

        return self.cfg_parser.get(section, key)

    def has_section(self, section):
        if self.cfg_parser is None:
            self.read_config()

        return self.cfg_parser.has_section(section)

    def has_option(self, section, key):
        if self.cfg_parser is None:
            self.read_config()

        return self.cfg_parser.has_option(section, key)

    def get(self, section, key, default=None, quiet=False):
        """
            A setting from the configuration file, or the default for it.
        """
        if self.cfg_parser is None:
            self.read_config()

        if (section, key) in self.settings:
            return self.settings[(section, key)]

        if self.cfg_parser.has_option(section, key):
            return self.cfg_parser.get(section, key)

        if not quiet:
            log.warning(
                    _("Option %s/%s does not exist in config file %s, pulling from defaults") % (
                            section,
                            key,
                            self.config_file
                        )
                )

        return self._get_default(section, key, default)

    def get_list(self, section, key, default=None):
        """
            A comma and/or space separated list of (lower case) values.
        """
        value = self.get(section, key, quiet=True)

        if value is None:
            return default if default else []

        if isinstance(value, list):
            return value

        return _split_list(value)

    def get_bool(self, section, key, default=None):
        if self.cfg_parser is None:
            self.read_config()

        if (section, key) in self.settings:
            return self.settings[(section, key)]

        if self.cfg_parser.has_option(section, key):
            return self.cfg_parser.getboolean(section, key)

        return self._get_default(section, key, default)

    def _get_default(self, section, key, default=None):
        defaults = getattr(self.defaults, section, None)

        if isinstance(defaults, dict) and key in defaults:
            return defaults[key]

        log.debug(_("Option %s/%s does not exist in defaults.") % (section, key), level=8)

        return default

    def check_setting_config_file(self, value):
        if not os.path.isfile(value):
            log.error(_("Configuration file %s does not exist.") % (value))
            return False

        if not os.access(value, os.R_OK):
            log.error(_("Configuration file %s not readable.") % (value))
            return False

        return True

    def check_setting_debuglevel(self, value):
        if value < 0:
            log.warning(_("Ignoring the negative debug level %d") % (value))
            return False

        if value > 9:
            log.warning(_("This program has 9 levels of verbosity. Using the maximum of 9."))

        return True

    def check_setting_itip_default_timezone(self, value):
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError:
            log.error(_("Unknown default timezone %s") % (value))
            return False

        return True


def _split_list(value):
    values = []

    for item in value.replace(',', ' ').split(' '):
        if not item.strip() == "":
            values.append(item.strip().lower())

    return values
