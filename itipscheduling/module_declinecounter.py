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
    DECLINECOUNTER: the organizer declines a counter proposal of the
    recipient.
"""

import pyitip
from pyitip.translate import _

from pyitip.itip import itip_sequence

from itipscheduling import analysis
from itipscheduling import modules
from itipscheduling.analyzer import SchedulingAnalyzer
from itipscheduling.analyzer import find_calendar_user_attendee

log = pyitip.getLogger('itipscheduling.declinecounter')

def __init__():
    modules.register('DECLINECOUNTER', DeclineCounterAnalyzer(), description=description())

def description():
    return """Analyze declined counter proposals."""


class DeclineCounterAnalyzer(SchedulingAnalyzer):
    method = 'DECLINECOUNTER'

    def analyze(self, session, provider, originator, target_user):
        changes = []

        helper = self.get_annotation_helper(session, target_user)

        for event in provider.get_incoming_events():
            change = self.new_change()
            change.add_annotation(helper.get_counter_declined_introduction(event, originator))
            change.add_annotations(self.get_comment_hints(helper, event))

            stored_event = provider.opt_matching_event(event)

            if stored_event is None:
                change.add_annotation(helper.get_not_found_hint())
                change.set_change(self.get_change(session, analysis.UPDATE, event))
                change.add_actions(analysis.REQUEST_REFRESH, analysis.IGNORE)

            elif itip_sequence(stored_event).after(itip_sequence(event)):
                change.add_annotation(helper.get_outdated_hint())
                change.set_change(self.get_change(session, analysis.UPDATE, event, stored_event))
                change.add_actions(analysis.IGNORE)

            elif itip_sequence(event).after(itip_sequence(stored_event)):
                log.debug(_("Declined counter for %s refers to a newer revision") % (event.get_uid()), level=8)

                change.add_annotation(helper.get_counter_declined_for_updated_hint())
                change.add_annotation(helper.get_request_refresh_manually_hint())
                change.set_change(self.get_change(session, analysis.UPDATE, event, stored_event))
                change.add_actions(analysis.REQUEST_REFRESH)

            else:
                if not self.organizer_matches(stored_event, event):
                    change.add_annotation(helper.get_organizer_changed_hint())
                    change.add_actions(analysis.IGNORE)

                _change = self.get_user_change(session, analysis.UPDATE, stored_event, stored_event, target_user)
                change.set_change(_change)
                change.set_targeted_attendee(find_calendar_user_attendee(stored_event, target_user))

                self.add_partstat_hint_and_actions(helper, change, stored_event, target_user, _change.get_conflicts())

            changes.append(change.build())

        return changes
