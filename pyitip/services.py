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
    The collaborators the analysis of scheduling messages depends on.

    Storage, recurrence expansion, free/busy, entity resolution and the
    folder permission store are provided by the calendaring service the
    analyzer is embedded in; the classes in here describe the contract,
    and provide defaults where a generic implementation is possible.
"""

import datetime

from dateutil import rrule

import pyitip
from pyitip.translate import _

from pyitip.itip import check_date_conflict
from pyitip.model.utils import to_dt

log = pyitip.getLogger('pyitip.services')

# Folder permission levels
NO_PERMISSIONS = 0
READ_FOLDER = 2
CREATE_OBJECTS_IN_FOLDER = 4
CREATE_SUB_FOLDERS = 8

# Object permission levels, for read, write and delete permissions
READ_OWN_OBJECTS = 2
READ_ALL_OBJECTS = 4
WRITE_OWN_OBJECTS = 2
WRITE_ALL_OBJECTS = 4
DELETE_OWN_OBJECTS = 2
DELETE_ALL_OBJECTS = 4

MAX_PERMISSION = 128


class Permission(object):
    """
        The effective permissions of a user in a folder.
    """
    def __init__(self, folder=NO_PERMISSIONS, read=NO_PERMISSIONS, write=NO_PERMISSIONS, delete=NO_PERMISSIONS, admin=False):
        self.folder = folder
        self.read = read
        self.write = write
        self.delete = delete
        self.admin = admin

    def __repr__(self):
        return "<Permission folder=%d read=%d write=%d delete=%d>" % (
                self.folder,
                self.read,
                self.write,
                self.delete
            )

    def get_folder_permission(self):
        return self.folder

    def get_read_permission(self):
        return self.read

    def get_write_permission(self):
        return self.write

    def get_delete_permission(self):
        return self.delete

    def is_admin(self):
        return self.admin


class Conflict(object):
    """
        An event of an attendee overlapping with the event being scheduled.
    """
    def __init__(self, event, attendee, hard_conflict=False):
        self.event = event
        self.attendee = attendee
        self.hard_conflict = hard_conflict

    def __repr__(self):
        return "<Conflict %r with %r>" % (self.attendee, self.event)

    def get_event(self):
        return self.event

    def get_attendee(self):
        return self.attendee

    def is_hard_conflict(self):
        return self.hard_conflict


class CalendarStorage(object):
    def lookup_by_field(self, session, field, value, calendar_user_id, tombstones=False, fields=None):
        """
            Look up the events of a calendar user whose field equals the
            value, from the personal and public folders of that calendar
            user, as seen by that calendar user.

            With tombstones=True, the records of deleted events are looked
            up instead.

            Raises CalendarServiceError.
        """
        raise NotImplementedError

    def search_events(self, session, calendar_user_id, start, end):
        """
            The (expanded) events of a calendar user between start and end.

            Raises CalendarServiceError.
        """
        raise NotImplementedError


class RecurrenceService(object):
    def get_occurrence(self, series_master, recurrence_id):
        """
            The occurrence of the series at the recurrence id.

            Raises CalendarServiceError.
        """
        raise NotImplementedError


class RRuleRecurrenceService(RecurrenceService):
    """
        Synthesizes occurrences from the RRULE, RDATE and EXDATE of a
        series master.
    """

    def get_occurrence(self, series_master, recurrence_id):
        start = series_master.get_start()

        if start is None:
            raise CalendarServiceError(_("Series master %s has no start date") % (series_master.get_uid()))

        if not isinstance(start, datetime.datetime):
            start = datetime.datetime(start.year, start.month, start.day)

        if not isinstance(recurrence_id, datetime.datetime):
            recurrence_id = datetime.datetime(recurrence_id.year, recurrence_id.month, recurrence_id.day)

        if start.tzinfo is not None:
            recurrence_id = to_dt(recurrence_id)
        else:
            recurrence_id = recurrence_id.replace(tzinfo=None)

        rset = rrule.rruleset()

        try:
            if series_master.get_recurrence_rule() is not None:
                rset.rrule(
                        rrule.rrulestr(
                                series_master.get_recurrence_rule(),
                                dtstart=start,
                                ignoretz=start.tzinfo is None
                            )
                    )

        except (ValueError, TypeError) as errmsg:
            raise CalendarServiceError(
                    _("Invalid recurrence rule %r: %s") % (series_master.get_recurrence_rule(), errmsg)
                )

        for rdate in series_master.get_recurrence_dates():
            rset.rdate(self._align(rdate, start))

        for exdate in series_master.get_delete_exception_dates():
            rset.exdate(self._align(exdate, start))

        try:
            occurrence_start = rset.after(recurrence_id - datetime.timedelta(seconds=1))
        except (TypeError, ValueError) as errmsg:
            raise CalendarServiceError(_("Cannot expand series %s: %s") % (series_master.get_uid(), errmsg))

        if occurrence_start is None or not occurrence_start == recurrence_id:
            raise CalendarServiceError(
                    _("No occurrence of series %s at %s") % (series_master.get_uid(), recurrence_id)
                )

        log.debug(_("Synthesized occurrence %s of series %s") % (recurrence_id, series_master.get_uid()), level=9)

        end = series_master.get_end()
        if end is not None:
            if not isinstance(end, datetime.datetime):
                end = datetime.datetime(end.year, end.month, end.day)

            end = occurrence_start + (end - start)

        return series_master.copy(
                series_id=series_master.get_id(),
                recurrence_id=occurrence_start,
                start_date=occurrence_start,
                end_date=end,
                recurrence_rule=None,
                recurrence_dates=[],
                delete_exception_dates=[],
                change_exception_dates=[]
            )

    def _align(self, dt, start):
        if not isinstance(dt, datetime.datetime):
            dt = datetime.datetime(dt.year, dt.month, dt.day, start.hour, start.minute, start.second)

        if start.tzinfo is None:
            return dt.replace(tzinfo=None)

        return to_dt(dt)


class FreeBusyService(object):
    def check_for_conflicts(self, session, event, attendees):
        """
            The conflicts of the event with the calendars of the attendees.

            Raises CalendarServiceError.
        """
        raise NotImplementedError


class StorageFreeBusyService(FreeBusyService):
    """
        Finds conflicts among the events the storage holds for the
        internal attendees.
    """

    def __init__(self, storage):
        self.storage = storage

    def check_for_conflicts(self, session, event, attendees):
        conflicts = []

        if _is_transparent(event) or event.get_start() is None:
            return conflicts

        _is = to_dt(event.get_start())
        _ie = to_dt(event.get_end()) if event.get_end() is not None else _is

        for attendee in attendees:
            if not attendee.is_internal():
                continue

            for other in self.storage.search_events(session, attendee.get_entity(), _is, _ie):
                # don't consider conflict with myself
                if other.get_uid() == event.get_uid():
                    continue

                if _is_transparent(other) or other.get_start() is None:
                    continue

                _attendee = other.find_attendee(attendee)
                if _attendee is not None and _attendee.get_participant_status() == "DECLINED":
                    continue

                _es = to_dt(other.get_start())
                _ee = to_dt(other.get_end()) if other.get_end() is not None else _es

                if check_date_conflict(_es, _ee, _is, _ie):
                    log.debug(
                            _("Event %s conflicts with %s of attendee %s") % (
                                    event.get_uid(),
                                    other.get_uid(),
                                    attendee.get_uri()
                                ),
                            level=8
                        )

                    conflicts.append(Conflict(other, attendee, hard_conflict=attendee.is_resource()))

        return conflicts


def _is_transparent(event):
    return event.get_transparency() == "TRANSPARENT" or event.get_status() == "CANCELLED"


class EntityResolver(object):
    """
        Maps calendar users to the users, groups and resources of the
        calendaring service.
    """

    def get_default_folder_id(self, session, user_id):
        raise NotImplementedError

    def has_delegate_privilege(self, session, resource_id, user_id):
        """
            Whether the user holds the DELEGATE scheduling privilege for the
            resource, i.e. may act on behalf of the resource.
        """
        raise NotImplementedError

    def prepare_user_attendee(self, session, user_id):
        """
            An attendee representing the internal user.
        """
        raise NotImplementedError

    def get_locale(self, session, user_id):
        raise NotImplementedError

    def get_timezone(self, session, user_id):
        raise NotImplementedError

    def get_display_name(self, session, user_id):
        raise NotImplementedError

    def prepare_organizer(self, session, organizer, resolvable=None):
        """
            Resolve the organizer to an internal entity where possible.

            With a list of resolvable entities, only those are resolved.
        """
        raise NotImplementedError

    def prepare_attendees(self, session, attendees, resolvable=None):
        """
            Resolve the attendees to internal entities where possible.

            With a list of resolvable entities, only those are resolved.
        """
        raise NotImplementedError


class FolderService(object):
    def get_permission(self, session, folder_id, user_id):
        """
            The effective permissions of the user in the folder.
        """
        raise NotImplementedError


class CalendarServiceError(Exception):
    def __init__(self, message):
        Exception.__init__(self, message)
