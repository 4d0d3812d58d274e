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
    REQUEST: an invitation to an event, or an update of an event the
    recipient is invited to.
"""

import pyitip
from pyitip.translate import _

from pyitip.itip import IllegalSequenceError
from pyitip.itip import is_internal
from pyitip.itip import itip_sequence
from pyitip.itip import matches_itip_revision
from pyitip.itip import opt_resource_sent_by
from pyitip.model import CalendarUser
from pyitip.model import find_attendee

from itipscheduling import analysis
from itipscheduling import modules
from itipscheduling.analyzer import SchedulingAnalyzer
from itipscheduling.analyzer import find_calendar_user_attendee

log = pyitip.getLogger('itipscheduling.request')

def __init__():
    modules.register('REQUEST', RequestAnalyzer(), description=description())

def description():
    return """Analyze invitations and updates of events."""


class RequestAnalyzer(SchedulingAnalyzer):
    method = 'REQUEST'

    def analyze(self, session, provider, originator, target_user):
        changes = []

        itip_data = provider.get_itip_data()
        action = itip_data.get_action() if itip_data is not None else None

        organizer_copy = provider.uses_organizer_copy()
        helper = self.get_annotation_helper(session, target_user)

        for event in provider.get_incoming_events():
            stored_event = provider.opt_matching_event(event)

            if stored_event is None:
                tombstone = provider.opt_matching_tombstone(event)
                change = self.analyze_unknown_event(
                        session,
                        helper,
                        event,
                        tombstone,
                        originator,
                        target_user,
                        action,
                        organizer_copy
                    )

            else:
                change = self.analyze_known_event(
                        session,
                        helper,
                        event,
                        stored_event,
                        originator,
                        target_user,
                        action,
                        organizer_copy
                    )

            changes.append(change)

        return changes

    def analyze_unknown_event(self, session, helper, event, tombstone, originator, target_user, action, organizer_copy):
        change = self.new_change()

        if organizer_copy or tombstone is not None and itip_sequence(tombstone).after(itip_sequence(event)):
            log.debug(_("Event %s was deleted in the meantime") % (event.get_uid()), level=8)

            change.add_annotations(self.get_introductions(helper, event, tombstone, originator, target_user, action))
            change.add_annotation(helper.get_deleted_hint())
            change.set_change(self.get_change(session, analysis.CREATE, event))
            change.add_actions(analysis.IGNORE)

            return change.build()

        resource = opt_resource_sent_by(event, originator)

        if resource is not None:
            change.add_annotations(self.get_introductions(helper, event, None, originator, target_user, action))
            change.add_annotation(helper.get_resource_not_delegate_hint(resource))
            change.set_change(self.get_change(session, analysis.CREATE, event))
            change.set_targeted_attendee(resource)
            change.add_actions(analysis.IGNORE)

            return change.build()

        change.add_annotations(self.get_introductions(helper, event, None, originator, target_user, action))
        change.add_annotation(helper.get_save_manually_hint())
        change.add_actions(analysis.APPLY_CREATE)

        _change = self.get_user_change(session, analysis.CREATE, event, None, target_user)
        change.set_change(_change)
        change.set_targeted_attendee(find_calendar_user_attendee(event, target_user))

        self.add_partstat_hint_and_actions(helper, change, event, target_user, _change.get_conflicts())

        return change.build()

    def analyze_known_event(self, session, helper, event, stored_event, originator, target_user, action, organizer_copy):
        change = self.new_change()

        change.add_annotations(self.get_introductions(helper, event, stored_event, originator, target_user, action))

        if matches_itip_revision(event, stored_event):
            log.debug(_("Event %s matches the stored revision") % (event.get_uid()), level=8)

            change_type = self.get_change_type(event, action)
            resource = opt_resource_sent_by(event, originator)

            if resource is not None:
                _change = self.get_change(session, change_type, event, stored_event, attendee=resource)
                change.set_change(_change)
                change.set_targeted_attendee(resource)

                if not organizer_copy:
                    if change_type == analysis.CREATE:
                        change.add_annotation(helper.get_resource_saved_hint(resource))
                    else:
                        change.add_annotation(helper.get_resource_updated_hint(resource))

                if is_internal(resource) and self.has_delegate_privilege(session, resource):
                    self.add_resource_partstat_hint_and_actions(
                            helper,
                            change,
                            stored_event,
                            resource,
                            _change.get_conflicts()
                        )

                else:
                    change.add_annotation(helper.get_resource_not_delegate_hint(resource))
                    change.add_actions(analysis.IGNORE)

            else:
                _change = self.get_user_change(session, change_type, event, stored_event, target_user)
                change.set_change(_change)
                change.set_targeted_attendee(find_calendar_user_attendee(event, target_user))

                if not organizer_copy:
                    if change_type == analysis.CREATE:
                        change.add_annotation(helper.get_saved_hint())
                    else:
                        change.add_annotation(helper.get_updated_hint())

                self.add_partstat_hint_and_actions(helper, change, stored_event, target_user, _change.get_conflicts())

        elif itip_sequence(stored_event).after(itip_sequence(event)):
            log.debug(_("Event %s was updated in the meantime") % (event.get_uid()), level=8)

            change.add_annotation(helper.get_outdated_hint())
            change.set_change(self.get_change(session, analysis.UPDATE, event, stored_event))
            change.add_actions(analysis.IGNORE)

        elif itip_sequence(stored_event).before(itip_sequence(event)):
            if not self.organizer_matches(stored_event, event):
                log.info(
                        _("Organizer of %s changed from %r to %r") % (
                                event.get_uid(),
                                stored_event.get_organizer(),
                                event.get_organizer()
                            )
                    )

                change.add_annotation(helper.get_organizer_changed_hint())
                change.add_actions(analysis.IGNORE)

            change.add_annotation(helper.get_update_manually_hint())

            _change = self.get_user_change(session, analysis.UPDATE, event, stored_event, target_user)
            change.set_change(_change)
            change.set_targeted_attendee(find_calendar_user_attendee(event, target_user))
            change.add_actions(analysis.APPLY_CHANGE)

            self.add_partstat_hint_and_actions(helper, change, event, target_user, _change.get_conflicts())

        else:
            raise IllegalSequenceError(
                    _("Illegal sequence/dtstamp in events %r and %r") % (event, stored_event)
                )

        return change.build()

    def get_change_type(self, event, action):
        if action in [analysis.CREATE, analysis.UPDATE]:
            return action

        return analysis.CREATE if event.get_sequence() == 0 else analysis.UPDATE

    def get_introductions(self, helper, event, stored_event, originator, target_user, action):
        annotations = []

        if action is None:
            if stored_event is None or event.get_sequence() == 0:
                action = analysis.CREATE
            else:
                action = analysis.UPDATE

        resource = opt_resource_sent_by(event, originator)

        if action == analysis.CREATE:
            delegator = opt_delegator(event, target_user)

            if delegator is not None:
                annotations.append(helper.get_delegated_introduction(event, delegator))
            elif resource is not None:
                annotations.append(helper.get_resource_invited_introduction(event, originator, resource))
            elif find_calendar_user_attendee(event, target_user) is None:
                annotations.append(helper.get_forwarded_introduction(event, originator))
            else:
                annotations.append(helper.get_invited_introduction(event, originator))

        elif resource is not None:
            annotations.append(helper.get_resource_changed_introduction(event, originator, resource))

        else:
            annotations.append(helper.get_changed_introduction(event, originator))

        annotations.extend(self.get_comment_hints(helper, event))

        return annotations


def opt_delegator(event, target_user):
    """
        The attendee the target user was delegated the event from.
    """
    attendee = find_calendar_user_attendee(event, target_user)

    if attendee is None:
        return None

    for delegated_from in attendee.get_delegated_from():
        delegator = find_attendee(event.get_attendees(), CalendarUser(uri=delegated_from))

        if delegator is not None:
            return delegator

    return None
