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

import icalendar

import pyitip
from pyitip import constants
from pyitip.translate import _

from pyitip.itip import convert_itip_payload
from pyitip.model import CalendarObjectResource
from pyitip.model import EventIntegrityError
from pyitip.model import InvalidAttendeeCutypeError
from pyitip.model import InvalidAttendeeParticipantStatusError
from pyitip.model import InvalidAttendeeRoleError
from pyitip.model import InvalidCalendarUserError
from pyitip.model import InvalidResourceError
from pyitip.model import event_from_ical

log = pyitip.getLogger('itipscheduling.message')
conf = pyitip.getConf()

invalid_event_errors = (
        ValueError,
        EventIntegrityError,
        InvalidAttendeeCutypeError,
        InvalidAttendeeParticipantStatusError,
        InvalidAttendeeRoleError,
        InvalidCalendarUserError,
    )


class ITipData(object):
    """
        The correlation token the calendaring service attaches to the
        scheduling messages it sends: the server and context the message
        originates from, the resource the message was sent on behalf of
        (if any), and the scheduling action that caused the message.
    """

    def __init__(self, server_uid, context_id, sent_by_resource=-1, action=None):
        self.server_uid = server_uid
        self.context_id = context_id
        self.sent_by_resource = sent_by_resource
        self.action = action

    def __repr__(self):
        return "<ITipData %s/%s>" % (self.server_uid, self.context_id)

    def get_server_uid(self):
        return self.server_uid

    def get_context_id(self):
        return self.context_id

    def get_sent_by_resource(self):
        return self.sent_by_resource

    def get_action(self):
        return self.action

    def matches(self, session):
        """
            Whether the message originates from the server and context of
            the session.
        """
        if self.server_uid is None or session.get_server_uid() is None:
            return False

        return self.server_uid == session.get_server_uid() and self.context_id == session.get_context_id()


class IncomingSchedulingMessage(object):
    """
        An iTIP message received by (or on behalf of) the target user.
    """

    def __init__(self, method, resource, originator, target_user, prodid=None, itip_data=None):
        method = method.upper()

        if method not in constants.ITIP_METHODS:
            raise InvalidSchedulingMessageError(_("Invalid iTIP method %r") % (method))

        self.method = method
        self.resource = resource
        self.originator = originator
        self.target_user = target_user
        self.prodid = prodid
        self.itip_data = itip_data

    def __repr__(self):
        return "<IncomingSchedulingMessage %s %s>" % (self.method, self.resource.get_uid())

    def get_method(self):
        return self.method

    def get_resource(self):
        return self.resource

    def get_originator(self):
        return self.originator

    def get_target_user(self):
        return self.target_user

    def get_prodid(self):
        return self.prodid

    def get_itip_data(self):
        return self.itip_data


def message_from_ical(ical, originator, target_user, itip_data=None):
    """
        Create an incoming scheduling message from an iCalendar object
        with a METHOD, as received from the originator.
    """
    if isinstance(ical, bytes):
        try:
            ical = ical.decode('utf-8')
        except UnicodeDecodeError as errmsg:
            raise InvalidSchedulingMessageError(_("iCalendar data is not UTF-8 encoded: %s") % (errmsg))

    if conf.get_bool('itip', 'windows_timezones'):
        ical = convert_itip_payload(ical)

    try:
        cal = icalendar.Calendar.from_ical(ical)
    except ValueError as errmsg:
        raise InvalidSchedulingMessageError(_("Could not parse iCalendar data: %s") % (errmsg))

    if 'METHOD' not in cal:
        raise InvalidSchedulingMessageError(_("iCalendar data without METHOD"))

    try:
        events = [event_from_ical(x) for x in cal.walk('VEVENT')]
    except invalid_event_errors as errmsg:
        raise InvalidSchedulingMessageError(_("Invalid event in iCalendar data: %s") % (errmsg))

    if len(events) == 0:
        raise InvalidSchedulingMessageError(_("iCalendar data without events"))

    try:
        resource = CalendarObjectResource(events)
    except InvalidResourceError as errmsg:
        raise InvalidSchedulingMessageError(errmsg)

    prodid = str(cal['PRODID']) if 'PRODID' in cal else None

    log.debug(
            _("Parsed %s message with %d event(s) from %s") % (
                    cal['METHOD'],
                    len(events),
                    originator.get_uri()
                ),
            level=8
        )

    return IncomingSchedulingMessage(
            str(cal['METHOD']),
            resource,
            originator,
            target_user,
            prodid=prodid,
            itip_data=itip_data
        )


class InvalidSchedulingMessageError(Exception):
    def __init__(self, message):
        Exception.__init__(self, message)
