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
    COUNTER: an attendee proposes changes to an event organized by the
    recipient.
"""

import pyitip
from pyitip.translate import _

from pyitip.itip import as_attendee
from pyitip.itip import consider_as_time_change_only
from pyitip.itip import select_attendee
from pyitip.model import Event
from pyitip.model.utils import to_dt

from itipscheduling import analysis
from itipscheduling import modules
from itipscheduling.analyzer import SchedulingAnalyzer

log = pyitip.getLogger('itipscheduling.counter')
conf = pyitip.getConf()

def __init__():
    modules.register('COUNTER', CounterAnalyzer(), description=description())

def description():
    return """Analyze counter proposals of attendees."""


class CounterAnalyzer(SchedulingAnalyzer):
    method = 'COUNTER'

    def get_fields_to_load(self):
        # Proposals are compared against the complete stored event
        return [field for field, _default in Event.fields]

    def analyze(self, session, provider, originator, target_user):
        changes = []

        prodid = provider.get_message().get_prodid()
        helper = self.get_annotation_helper(session, target_user)

        for event in provider.get_incoming_events():
            stored_event = provider.opt_matching_event(event)

            attendee = select_attendee(event, originator, must_match=True)

            if attendee is None:
                log.debug(
                        _("Countering attendee %s not found in %s") % (originator.get_uri(), event.get_uid()),
                        level=8
                    )

                attendee = as_attendee(originator)

            if stored_event is None:
                tombstone = provider.opt_matching_tombstone(event)
                change = self.analyze_unknown_event(helper, event, tombstone, attendee, prodid)
            else:
                change = self.analyze_known_event(helper, event, stored_event, attendee, prodid)

            changes.append(change)

        return changes

    def analyze_known_event(self, helper, event, stored_event, attendee, prodid):
        time_change_only = self.is_time_change_only(event, stored_event, prodid)

        change = self.new_change()
        change.add_annotations(self.get_introductions(helper, event, stored_event, attendee, time_change_only))
        change.set_change(analysis.Change(analysis.UPDATE, new_event=event, current_event=stored_event))

        if stored_event.get_sequence() > event.get_sequence():
            change.add_annotation(helper.get_outdated_counter_hint())
            change.add_actions(analysis.DECLINECOUNTER)

            return change.build()

        if stored_event.find_attendee(attendee) is None:
            change.add_annotation(helper.get_counter_from_uninvited_hint(attendee))
            change.add_actions(analysis.DECLINECOUNTER)

        elif event.get_sequence() == stored_event.get_sequence() and time_change_only:
            change.add_annotation(helper.get_apply_counter_manually_hint())
            change.add_actions(analysis.APPLY_PROPOSAL, analysis.DECLINECOUNTER)

        else:
            change.add_annotation(helper.get_counter_unsupported_hint())
            change.add_actions(analysis.DECLINECOUNTER)

        return change.build()

    def analyze_unknown_event(self, helper, event, tombstone, attendee, prodid):
        time_change_only = self.is_time_change_only(event, tombstone, prodid)

        change = self.new_change()
        change.add_annotations(self.get_introductions(helper, event, tombstone, attendee, time_change_only))
        change.set_change(analysis.Change(analysis.UPDATE, new_event=event))
        change.add_actions(analysis.IGNORE)

        if tombstone is not None and tombstone.get_sequence() >= event.get_sequence() and _newer(tombstone, event):
            change.add_annotation(helper.get_deleted_hint())
        else:
            change.add_annotation(helper.get_not_found_hint())

        return change.build()

    def is_time_change_only(self, event, stored_event, prodid):
        return consider_as_time_change_only(
                event,
                stored_event,
                prodid=prodid,
                ignored_fields=conf.get_list('itip', 'counter_ignored_properties')
            )

    def get_introductions(self, helper, event, stored_event, attendee, time_change_only):
        annotations = [helper.get_counter_introduction(event, attendee, time_change_only)]

        if time_change_only and stored_event is not None:
            if event.get_start() is not None and event.get_end() is not None:
                annotations.append(helper.get_proposed_times_hint(event))

        if stored_event is not None:
            stored_attendee = stored_event.find_attendee(attendee)

            if stored_attendee is not None:
                if not stored_attendee.get_participant_status() == attendee.get_participant_status():
                    annotations.append(helper.get_replied_introduction(event, attendee))

        annotations.extend(self.get_comment_hints(helper, event))

        return annotations


def _newer(event, other):
    if event.get_dtstamp() is None:
        return False

    if other.get_dtstamp() is None:
        return True

    return to_dt(event.get_dtstamp()) > to_dt(other.get_dtstamp())
