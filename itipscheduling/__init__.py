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
    Analysis of incoming iTIP scheduling messages.

    The analyzer service checks whether the session user may act on
    behalf of the message's target user, looks up the stored state of the
    scheduling object resource, and has the analyzer registered for the
    message's method describe the changes and the actions the recipient
    may take.
"""

import pyitip
from pyitip.translate import _

from itipscheduling import analysis
from itipscheduling import modules
from itipscheduling.permissions import has_access
from itipscheduling.provider import ObjectResourceProvider

log = pyitip.getLogger('itipscheduling')
conf = pyitip.getConf()


class ITipAnalyzerService(object):
    def __init__(self):
        if len(modules.modules) == 0:
            modules.__init__()

    def analyze(self, message, session):
        """
            Analyze an incoming scheduling message in the session.
        """
        method = message.get_method()
        uid = message.get_resource().get_uid()

        analyzer = modules.get_analyzer(method)

        log.debug(
                _("Analyzing %s for %s, targeted at user %d") % (method, uid, message.get_target_user()),
                level=8
            )

        provider = ObjectResourceProvider(session, message, fields=analyzer.get_fields_to_load())

        stored_resource = provider.get_stored_resource()

        if not has_access(session, message.get_target_user(), stored_resource):
            return analysis.get_insufficient_permissions_analysis(method, uid)

        changes = analyzer.analyze(session, provider, message.get_originator(), message.get_target_user())

        log.debug(_("Analyzed %d change(s) for %s %s") % (len(changes), method, uid), level=8)

        return analysis.get_analysis(
                method,
                uid,
                changes,
                original_resource=stored_resource,
                related_resource=provider.get_stored_related_resource()
            )

    def analyze_all(self, messages, session):
        return [self.analyze(message, session) for message in messages]


def is_applicable(itip_analysis):
    """
        Whether any change of the analysis offers to apply it to the
        calendar.
    """
    for change in itip_analysis.get_analyzed_changes():
        for action in change.get_actions():
            if action in analysis.APPLY_ACTIONS:
                return True

    return False

def is_contained_in(resource, user_id):
    """
        Whether the user is organizer or attendee of any of the events of
        the resource.
    """
    if resource is None:
        return False

    for event in resource.get_events():
        organizer = event.get_organizer()
        if organizer is not None and organizer.get_entity() == user_id:
            return True

        for attendee in event.get_attendees():
            if attendee.get_entity() == user_id:
                return True

    return False

errors = [
        "InsufficientPermissionsError",
        "InvalidSchedulingMessageError",
        "SchedulingMessageWarning",
        "UnsupportedMethodError",
    ]

from itipscheduling.analyzer import SchedulingMessageWarning
from itipscheduling.message import InvalidSchedulingMessageError
from itipscheduling.modules import UnsupportedMethodError
from itipscheduling.permissions import InsufficientPermissionsError
