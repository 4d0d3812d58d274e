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

class Defaults(object):
    def __init__(self):
        self.loglevel = logging.CRITICAL

        self.config_file = '/etc/pyitip/pyitip.conf'
        self.logfile = '/var/log/pyitip/pyitip.log'

        self.itip = {
                'default_locale': 'en_US',
                'default_timezone': 'UTC',
                # Vendor specific event properties to disregard when
                # classifying a counter proposal
                'counter_ignored_properties': [],
                'icloud_domains': ['icloud.com', 'me.com', 'mac.com'],
                'windows_timezones': True,
            }
