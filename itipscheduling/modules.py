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

import importlib
import os

import pyitip
from pyitip.translate import _

log = pyitip.getLogger('itipscheduling.modules')
conf = pyitip.getConf()

modules = {}

def __init__():
    # We only want the base path
    modules_base_path = os.path.dirname(__file__)

    for filename in sorted(os.listdir(modules_base_path)):
        if filename.startswith('module_') and filename.endswith('.py'):
            module_name = filename.replace('.py', '')
            module = importlib.import_module("itipscheduling.%s" % (module_name))
            module.__init__()

def list_modules(*args, **kw):
    """
        List modules
    """
    _modules = sorted(modules.keys())

    listing = []

    for _module in _modules:
        if modules[_module]['description'] is not None:
            listing.append("%-25s - %s" % (_module, modules[_module]['description']))
        else:
            listing.append("%-25s" % (_module))

    return listing

def register(name, analyzer, description=None):
    name = name.upper()

    if name in modules:
        log.debug(_("Module '%s' already registered") % (name), level=8)
        return

    modules[name] = {
            'analyzer': analyzer,
            'description': description
        }

def get_analyzer(method):
    if len(modules) == 0:
        __init__()

    method = method.upper()

    if method not in modules:
        raise UnsupportedMethodError(_("No analyzer for iTIP method %r") % (method))

    return modules[method]['analyzer']


class UnsupportedMethodError(Exception):
    def __init__(self, message):
        Exception.__init__(self, message)
