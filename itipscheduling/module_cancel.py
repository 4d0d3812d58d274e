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
    CANCEL: the organizer cancels an event, or some of its occurrences.
"""

import pyitip
from pyitip.translate import _

from pyitip.itip import itip_sequence
from pyitip.itip import matches_itip_revision
from pyitip.itip import opt_resource_sent_by

from itipscheduling import analysis
from itipscheduling import modules
from itipscheduling.analyzer import SchedulingAnalyzer
from itipscheduling.analyzer import SchedulingMessageWarning
from itipscheduling.analyzer import find_calendar_user_attendee

log = pyitip.getLogger('itipscheduling.cancel')

def __init__():
    modules.register('CANCEL', CancelAnalyzer(), description=description())

def description():
    return """Analyze cancellations of events."""


class CancelAnalyzer(SchedulingAnalyzer):
    method = 'CANCEL'

    def analyze(self, session, provider, originator, target_user):
        changes = []

        organizer_copy = provider.uses_organizer_copy()
        helper = self.get_annotation_helper(session, target_user)

        for event in provider.get_incoming_events():
            change = self.new_change()

            resource = opt_resource_sent_by(event, originator)

            if resource is not None:
                change.add_annotation(helper.get_resource_canceled_introduction(event, originator, resource))
            else:
                change.add_annotation(helper.get_canceled_introduction(event, originator))

            change.add_annotations(self.get_comment_hints(helper, event))

            stored_event = provider.opt_matching_event(event)

            if resource is not None and not self.has_delegate_privilege(session, resource):
                change.add_annotation(helper.get_resource_not_delegate_hint(resource))
                change.set_change(self.get_change(session, analysis.DELETE, event, stored_event))
                change.set_targeted_attendee(resource)
                change.add_actions(analysis.IGNORE)

            elif stored_event is None:
                self.analyze_unknown_event(session, helper, change, event, provider, organizer_copy)

            else:
                self.analyze_known_event(session, helper, change, event, stored_event, resource, target_user)

            changes.append(change.build())

        return changes

    def analyze_unknown_event(self, session, helper, change, event, provider, organizer_copy):
        tombstone = provider.opt_matching_tombstone(event)

        change.set_change(self.get_change(session, analysis.DELETE, event, tombstone))

        if tombstone is None:
            log.debug(_("No stored event or tombstone for %s") % (event.get_uid()), level=8)

            change.add_annotation(helper.get_not_found_hint())
            change.add_actions(analysis.IGNORE)

            return

        if not organizer_copy:
            change.add_annotation(helper.get_cancel_applied_hint())

        if not matches_itip_revision(event, tombstone):
            warning = SchedulingMessageWarning(
                    _("Cancellation of %s with sequence %d does not match deleted sequence %d") % (
                            event.get_uid(),
                            event.get_sequence(),
                            tombstone.get_sequence()
                        )
                )

            log.warning(warning)
            session.add_warning(warning)

    def analyze_known_event(self, session, helper, change, event, stored_event, resource, target_user):
        change.set_change(self.get_change(session, analysis.DELETE, event, stored_event))

        if itip_sequence(stored_event).after(itip_sequence(event)):
            change.add_annotation(helper.get_outdated_hint())
            change.add_actions(analysis.IGNORE)

        elif not self.organizer_matches(stored_event, event):
            change.add_annotation(helper.get_organizer_changed_hint())
            change.add_actions(analysis.IGNORE)

        else:
            change.add_annotation(helper.get_apply_cancel_manually_hint())
            change.add_actions(analysis.APPLY_REMOVE)

            if resource is not None:
                change.set_targeted_attendee(resource)
            else:
                change.set_targeted_attendee(find_calendar_user_attendee(stored_event, target_user))
