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
    The base for the analyzers of the individual iTIP methods.
"""

import pyitip
from pyitip.translate import _

from pyitip.itip import is_internal
from pyitip.itip import organizer_matches
from pyitip.services import CalendarServiceError

from itipscheduling import analysis
from itipscheduling.analysis import AnalyzedChangeBuilder
from itipscheduling.analysis import Change
from itipscheduling.annotations import AnnotationHelper

log = pyitip.getLogger('itipscheduling.analyzer')
conf = pyitip.getConf()


class SchedulingAnalyzer(object):
    """
        Analyzes the events of an incoming scheduling message of one iTIP
        method, one AnalyzedChange per incoming event.
    """

    method = None

    def get_method(self):
        return self.method

    def get_fields_to_load(self):
        """
            The event fields to look up stored events with, or None for the
            default set of fields.
        """
        return None

    def analyze(self, session, provider, originator, target_user):
        raise NotImplementedError

    def get_annotation_helper(self, session, target_user):
        return AnnotationHelper(session, target_user)

    def new_change(self):
        return AnalyzedChangeBuilder()

    def get_comment_hints(self, helper, event):
        comment = event.get_comment()

        if comment is None:
            return []

        return [helper.get_comment_hint(comment)]

    def get_change(self, session, change_type, event, stored_event=None, attendee=None):
        """
            A change for the incoming event, with the conflicts of the
            attendee if one is given.
        """
        conflicts = []

        if attendee is not None:
            conflicts = self.check_conflicts(session, event, attendee)

        return Change(change_type, new_event=event, current_event=stored_event, conflicts=conflicts)

    def get_user_change(self, session, change_type, event, stored_event, target_user):
        """
            A change for the incoming event, with the conflicts of the
            target user.
        """
        attendee = None

        try:
            attendee = session.get_entity_resolver().prepare_user_attendee(session, target_user)
        except CalendarServiceError as errmsg:
            log.warning(_("Unexpected error getting attendee for user %d: %s") % (target_user, errmsg))
            session.add_warning(errmsg)

        return self.get_change(session, change_type, event, stored_event, attendee=attendee)

    def check_conflicts(self, session, event, attendee):
        try:
            conflicts = session.get_freebusy_service().check_for_conflicts(session, event, [attendee])
        except CalendarServiceError as errmsg:
            log.warning(_("Unexpected error checking for conflicts of %r: %s") % (event, errmsg))
            session.add_warning(errmsg)
            return []

        log.debug(_("Found %d conflict(s) for %r") % (len(conflicts), event), level=8)

        return conflicts

    def add_partstat_hint_and_actions(self, helper, change, event, calendar_user_id, conflicts):
        """
            Add the participation status of the calendar user in the event,
            and the actions to change it.
        """
        attendee = find_calendar_user_attendee(event, calendar_user_id)

        if attendee is not None and attendee.get_role() == "OPT-PARTICIPANT":
            change.add_annotation(helper.get_participation_optional_hint())

        change.add_annotation(helper.get_partstat_hint(attendee))

        if len(conflicts) > 0:
            change.add_annotation(helper.get_conflicts_hint())

        self.add_participation_actions(change, conflicts)

    def add_resource_partstat_hint_and_actions(self, helper, change, event, resource, conflicts):
        """
            Add the booking state of the resource in the event, and the
            actions to change it.
        """
        attendee = find_calendar_user_attendee(event, resource.get_entity())

        if attendee is not None and attendee.get_role() == "OPT-PARTICIPANT":
            change.add_annotation(helper.get_participation_optional_hint())

        change.add_annotation(helper.get_resource_partstat_hint(attendee, resource))

        if len(conflicts) > 0:
            change.add_annotation(helper.get_resource_conflicts_hint(resource))

        self.add_participation_actions(change, conflicts)

    def add_participation_actions(self, change, conflicts):
        if len(conflicts) > 0:
            change.add_actions(analysis.DECLINE, analysis.TENTATIVE, analysis.ACCEPT_AND_IGNORE_CONFLICTS)
        else:
            change.add_actions(analysis.DECLINE, analysis.TENTATIVE, analysis.ACCEPT)

    def has_delegate_privilege(self, session, resource):
        """
            Whether the session user may act on behalf of the resource.
        """
        if not is_internal(resource):
            return False

        try:
            return session.get_entity_resolver().has_delegate_privilege(
                    session,
                    resource.get_entity(),
                    session.get_user_id()
                )

        except CalendarServiceError as errmsg:
            log.warning(_("Unexpected error checking the privileges for %r: %s") % (resource, errmsg))
            session.add_warning(errmsg)
            return False

    def organizer_matches(self, stored_event, event):
        return organizer_matches(
                stored_event.get_organizer(),
                event.get_organizer(),
                conf.get_list('itip', 'icloud_domains')
            )


def find_calendar_user_attendee(event, calendar_user_id):
    if event is None or not calendar_user_id > 0:
        return None

    for attendee in event.get_attendees():
        if attendee.get_entity() == calendar_user_id:
            return attendee

    return None


class SchedulingMessageWarning(Exception):
    """
        Something unexpected about an incoming scheduling message that does
        not stop its analysis.
    """
    def __init__(self, message):
        Exception.__init__(self, message)
