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

    pyitip, the interpretation of incoming iTIP scheduling messages in Python.

"""

import logging
import threading

from pyitip.logger import Logger
logging.setLoggerClass(Logger)

def getLogger(name):
    """
        Return the correct logger class.
    """
    logging.setLoggerClass(Logger)
    log = logging.getLogger(name=name)
    return log

from pyitip.conf import Conf

conf = Conf()

_data = threading.local()

def getConf():
    if hasattr(_data, 'conf'):
        return _data.conf

    return conf

def setConf(thread_conf):
    """
        Use a separate configuration for the current thread.
    """
    _data.conf = thread_conf
