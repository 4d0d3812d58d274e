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
    REFRESH: an attendee asks for the latest version of an event
    organized by the recipient.
"""

import pyitip
from pyitip.translate import _

from pyitip.itip import select_attendee

from itipscheduling import analysis
from itipscheduling import modules
from itipscheduling.analyzer import SchedulingAnalyzer
from itipscheduling.analyzer import SchedulingMessageWarning

log = pyitip.getLogger('itipscheduling.refresh')

def __init__():
    modules.register('REFRESH', RefreshAnalyzer(), description=description())

def description():
    return """Analyze requests for the latest version of events."""


class RefreshAnalyzer(SchedulingAnalyzer):
    method = 'REFRESH'

    def analyze(self, session, provider, originator, target_user):
        changes = []

        helper = self.get_annotation_helper(session, target_user)

        for event in provider.get_incoming_events():
            attendee = select_attendee(event, originator)

            if attendee is None:
                warning = SchedulingMessageWarning(
                        _("No requesting attendee for %s in refresh from %s, skipping") % (
                                event.get_uid(),
                                originator.get_uri()
                            )
                    )

                log.warning(warning)
                session.add_warning(warning)

                continue

            change = self.new_change()
            change.add_annotation(helper.get_refresh_introduction(event, originator))
            change.add_annotations(self.get_comment_hints(helper, event))

            stored_event = provider.opt_matching_event(event)

            change.set_change(self.get_change(session, analysis.UPDATE, event, stored_event))

            if stored_event is None:
                change.add_annotation(helper.get_not_found_hint())
                change.add_actions(analysis.IGNORE)

            elif stored_event.find_attendee(attendee) is None:
                log.debug(_("Refresh for %s from uninvited %r") % (event.get_uid(), attendee), level=8)

                change.add_annotation(helper.get_refresh_from_uninvited_hint(attendee))
                change.add_actions(analysis.IGNORE)

            else:
                change.set_targeted_attendee(attendee)
                change.add_annotation(helper.get_send_manually_hint())
                change.add_actions(analysis.SEND_REFRESH, analysis.IGNORE)

            changes.append(change.build())

        return changes
