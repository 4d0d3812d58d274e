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
    PUBLISH: an event published without scheduling. Not supported.
"""

import pyitip

from itipscheduling import analysis
from itipscheduling import modules
from itipscheduling.analyzer import SchedulingAnalyzer

log = pyitip.getLogger('itipscheduling.publish')

def __init__():
    modules.register('PUBLISH', PublishAnalyzer(), description=description())

def description():
    return """Analyze published events."""


class PublishAnalyzer(SchedulingAnalyzer):
    method = 'PUBLISH'

    def analyze(self, session, provider, originator, target_user):
        helper = self.get_annotation_helper(session, target_user)

        event = provider.get_incoming_events()[0]

        change = self.new_change()
        change.add_annotation(helper.get_published_introduction(event, originator))
        change.add_annotations(self.get_comment_hints(helper, event))
        change.add_annotation(helper.get_publish_unsupported_hint())
        change.set_change(self.get_change(session, analysis.CREATE, event))
        change.add_actions(analysis.IGNORE)

        return [change.build()]
