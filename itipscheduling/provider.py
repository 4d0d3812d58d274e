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
    Access to the stored counterparts of the events of an incoming
    scheduling message.
"""

import pyitip
from pyitip import constants
from pyitip.translate import _

from pyitip.itip import get_flags
from pyitip.itip import is_internal
from pyitip.itip import transfer_entities
from pyitip.model import CalendarObjectResource
from pyitip.model.utils import normalize_timezone
from pyitip.model.utils import olson_timezone
from pyitip.model.utils import same_instant
from pyitip.services import CalendarServiceError

log = pyitip.getLogger('itipscheduling.provider')
conf = pyitip.getConf()

_missing = object()


class ResourceCache(object):
    """
        Holds what was looked up during the analysis of one scheduling
        message. Lookups yielding None are cached, too.
    """

    def __init__(self):
        self.values = {}

    def get_or_load(self, key, loader):
        value = self.values.get(key, _missing)

        if value is _missing:
            value = loader()
            self.values[key] = value

        return value

    def has(self, key):
        return key in self.values


class ObjectResourceProvider(object):
    """
        Looks up, and caches, the stored resource, tombstones and related
        resource for an incoming scheduling message, in the calendar of
        the calendar user the message is analyzed for.

        One provider serves the analysis of a single message.
    """

    def __init__(self, session, message, fields=None):
        self.session = session
        self.message = message
        self.uid = message.get_resource().get_uid()

        if fields is None:
            fields = list(constants.DEFAULT_FIELDS)

        self.fields = fields

        sent_by_resource = self.get_sent_by_resource()
        if sent_by_resource > 0:
            self.calendar_user_id = sent_by_resource
        else:
            self.calendar_user_id = message.get_target_user()

        self.cache = ResourceCache()

    def __repr__(self):
        return "<ObjectResourceProvider %s for %d>" % (self.uid, self.calendar_user_id)

    def get_itip_data(self):
        """
            The correlation token of the message, if it originates from the
            server and context of the session.
        """
        itip_data = self.message.get_itip_data()

        if itip_data is not None and itip_data.matches(self.session):
            return itip_data

        return None

    def get_sent_by_resource(self):
        itip_data = self.get_itip_data()

        if itip_data is None:
            return -1

        return itip_data.get_sent_by_resource()

    def is_internal_scheduling_resource(self):
        return self.get_itip_data() is not None

    def get_calendar_user_id(self):
        return self.calendar_user_id

    def get_message(self):
        return self.message

    def get_incoming_resource(self):
        return self.message.get_resource()

    def get_stored_resource(self):
        return self.cache.get_or_load('stored', lambda: self._load_resource(constants.FIELD_UID, self.uid))

    def get_tombstone_resource(self):
        return self.cache.get_or_load(
                'tombstone',
                lambda: self._load_resource(constants.FIELD_UID, self.uid, tombstones=True)
            )

    def get_stored_related_resource(self):
        return self.cache.get_or_load('related', self._load_related_resource)

    def uses_organizer_copy(self):
        return self.cache.get_or_load('organizer_copy', self._check_organizer_copy)

    def get_incoming_events(self):
        return self.cache.get_or_load('incoming', self._patch_incoming_events)

    def opt_matching_event(self, event):
        return self._opt_matching_event(event, self.get_stored_resource())

    def opt_matching_tombstone(self, event):
        """
            The tombstone of the incoming event, or, for an occurrence that
            was deleted from a still existing series, a virtual tombstone
            derived from the series master.
        """
        tombstone = self._opt_matching_event(event, self.get_tombstone_resource())

        if tombstone is not None:
            return tombstone

        if event.get_recurrence_id() is None:
            return None

        stored_resource = self.get_stored_resource()
        if stored_resource is None or stored_resource.get_series_master() is None:
            return None

        series_master = stored_resource.get_series_master()

        if not _contains_date(series_master.get_delete_exception_dates(), event.get_recurrence_id()):
            return None

        log.debug(
                _("Occurrence %s of %s was deleted from the series") % (event.get_recurrence_id(), self.uid),
                level=8
            )

        return self._opt_event_occurrence(
                series_master.copy(delete_exception_dates=[]),
                event.get_recurrence_id()
            )

    def _opt_matching_event(self, event, resource):
        if resource is None:
            return None

        if event.get_recurrence_id() is not None:
            change_exception = resource.get_change_exception(event.get_recurrence_id())

            if change_exception is not None:
                return change_exception

            if resource.get_series_master() is not None:
                return self._opt_event_occurrence(resource.get_series_master(), event.get_recurrence_id())

            return None

        first_event = resource.get_first_event()

        if first_event is not None and first_event.get_recurrence_id() is None:
            return first_event

        return None

    def _opt_event_occurrence(self, series_master, recurrence_id):
        try:
            return self.session.get_recurrence_service().get_occurrence(series_master, recurrence_id)

        except CalendarServiceError as errmsg:
            log.warning(
                    _("Unexpected error preparing occurrence %s of %r: %s") % (recurrence_id, series_master, errmsg)
                )

            self.session.add_warning(errmsg)
            return None

    def _load_events(self, field, value, calendar_user_id=None, tombstones=False, fields=None):
        if calendar_user_id is None:
            calendar_user_id = self.calendar_user_id

        if fields is None:
            fields = self.fields

        events = self.session.get_storage().lookup_by_field(
                self.session,
                field,
                value,
                calendar_user_id,
                tombstones=tombstones,
                fields=fields
            )

        log.debug(
                _("Found %d %s for %s %r of calendar user %d") % (
                        len(events),
                        "tombstone(s)" if tombstones else "event(s)",
                        field,
                        value,
                        calendar_user_id
                    ),
                level=9
            )

        return events

    def _load_resource(self, field, value, tombstones=False):
        events = self._load_events(field, value, tombstones=tombstones)

        if len(events) == 0:
            return None

        return CalendarObjectResource(events)

    def _load_related_resource(self):
        series_master = self.get_incoming_resource().get_series_master()

        if series_master is None:
            return None

        # The series the incoming one was split off from
        related_uid = series_master.get_extended_property(constants.PROPERTY_SPLIT_FROM)

        if related_uid:
            events = _events_by_uid(self._load_events(constants.FIELD_UID, related_uid))

            if len(events) > 0:
                return CalendarObjectResource(events[0])

        related_to = series_master.get_related_to()

        if related_to is not None and related_to[0] == constants.RELTYPE_RECURRENCE_SET:
            events = self._load_events(constants.FIELD_RELATED_TO, related_to)
            events = _events_by_uid([x for x in events if not x.get_uid() == self.uid])

            if len(events) > 0:
                return CalendarObjectResource(events[0])

        return None

    def _check_organizer_copy(self):
        """
            Whether the message is analyzed from the organizer's own copy of
            the event, within the same server and context.
        """
        if not self.is_internal_scheduling_resource():
            return False

        organizer = self.get_incoming_resource().get_organizer()

        if organizer is None:
            return False

        try:
            organizer = self.session.get_entity_resolver().prepare_organizer(self.session, organizer)

        except CalendarServiceError as errmsg:
            log.warning(_("Unexpected error resolving %r, assuming to be external: %s") % (organizer, errmsg))
            self.session.add_warning(errmsg)
            return False

        if not is_internal(organizer):
            return False

        if organizer.get_entity() == self.calendar_user_id:
            return True

        try:
            events = self._load_events(
                    constants.FIELD_UID,
                    self.uid,
                    calendar_user_id=organizer.get_entity(),
                    fields=[constants.FIELD_ATTENDEES, constants.FIELD_ORGANIZER]
                )

        except CalendarServiceError as errmsg:
            log.warning(_("Unexpected error looking up the organizer copy of %s: %s") % (self.uid, errmsg))
            self.session.add_warning(errmsg)
            return False

        return len(events) > 0 and _is_attendee_resource(CalendarObjectResource(events), self.calendar_user_id)

    def _patch_incoming_events(self):
        resource = self.get_stored_resource()

        if resource is None:
            resource = self.get_tombstone_resource()

        original_event = resource.get_first_event() if resource is not None else None

        return [self._patch_event(x, original_event) for x in self.get_incoming_resource().get_events()]

    def _patch_event(self, event, original_event):
        """
            Resolve the calendar users of an incoming event, and set its
            flags as seen by the calendar user.
        """
        resolver = self.session.get_entity_resolver()

        try:
            if self.uses_organizer_copy():
                patched = transfer_entities(original_event, event)
                resolvable = None

            else:
                timezone = self._get_timezone()
                patched = event.copy(
                        start_date=normalize_timezone(event.get_start(), timezone),
                        end_date=normalize_timezone(event.get_end(), timezone)
                    )

                resolvable = [self.calendar_user_id, self.session.get_user_id()]

            attendees = resolver.prepare_attendees(self.session, patched.get_attendees(), resolvable=resolvable)

            organizer = patched.get_organizer()
            if organizer is not None:
                organizer = resolver.prepare_organizer(self.session, organizer, resolvable=resolvable)

            patched = patched.copy(attendees=attendees, organizer=organizer)

            return patched.copy(
                    calendar_user=self.calendar_user_id,
                    flags=get_flags(patched, self.calendar_user_id, self.session.get_user_id())
                )

        except CalendarServiceError as errmsg:
            log.warning(_("Unexpected error patching %r, using it as is: %s") % (event, errmsg))
            self.session.add_warning(errmsg)
            return event

    def _get_timezone(self):
        try:
            timezone = self.session.get_entity_resolver().get_timezone(self.session, self.calendar_user_id)
        except CalendarServiceError as errmsg:
            log.warning(_("Unexpected error getting the timezone of user %d: %s") % (self.calendar_user_id, errmsg))
            self.session.add_warning(errmsg)
            timezone = None

        timezone = olson_timezone(timezone)

        if timezone is None:
            timezone = olson_timezone(conf.get('itip', 'default_timezone', quiet=True))

        return timezone


def _contains_date(dates, recurrence_id):
    for date in dates:
        if same_instant(date, recurrence_id):
            return True

    return False

def _events_by_uid(events):
    by_uid = {}
    uids = []

    for event in events:
        if event.get_uid() not in by_uid:
            by_uid[event.get_uid()] = []
            uids.append(event.get_uid())

        by_uid[event.get_uid()].append(event)

    return [by_uid[x] for x in uids]

def _is_attendee_resource(resource, calendar_user_id):
    for event in resource.get_events():
        organizer = event.get_organizer()
        if organizer is not None and organizer.get_entity() == calendar_user_id:
            continue

        for attendee in event.get_attendees():
            if attendee.get_entity() == calendar_user_id:
                return True

    return False
