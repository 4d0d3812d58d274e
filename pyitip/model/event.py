import datetime
import icalendar

from pyitip import constants
from pyitip.translate import _

from pyitip.model.attendee import Attendee
from pyitip.model.attendee import find_attendee
from pyitip.model.calendar_user import CalendarUser
from pyitip.model.calendar_user import Organizer
from pyitip.model.utils import to_dt


def event_from_ical(ical):
    return Event(from_ical=ical)


class Event(object):
    """
        A snapshot of a calendar event.

        Events are not modified while a scheduling message is being
        analyzed; use copy() to derive an event with some of its fields
        replaced.
    """

    # Field name, default value
    fields = [
            (constants.FIELD_ID, None),
            (constants.FIELD_SERIES_ID, None),
            (constants.FIELD_FOLDER_ID, None),
            (constants.FIELD_UID, None),
            (constants.FIELD_FILENAME, None),
            (constants.FIELD_RECURRENCE_ID, None),
            (constants.FIELD_RECURRENCE_RULE, None),
            (constants.FIELD_RECURRENCE_DATES, []),
            (constants.FIELD_DELETE_EXCEPTION_DATES, []),
            (constants.FIELD_CHANGE_EXCEPTION_DATES, []),
            (constants.FIELD_START_DATE, None),
            (constants.FIELD_END_DATE, None),
            (constants.FIELD_SEQUENCE, 0),
            (constants.FIELD_DTSTAMP, None),
            (constants.FIELD_ORGANIZER, None),
            (constants.FIELD_ATTENDEES, []),
            (constants.FIELD_SUMMARY, None),
            (constants.FIELD_LOCATION, None),
            (constants.FIELD_DESCRIPTION, None),
            (constants.FIELD_STATUS, None),
            (constants.FIELD_TRANSP, None),
            (constants.FIELD_CLASSIFICATION, None),
            (constants.FIELD_CALENDAR_USER, 0),
            (constants.FIELD_FLAGS, []),
            (constants.FIELD_TIMESTAMP, None),
            (constants.FIELD_CREATED, None),
            (constants.FIELD_CREATED_BY, 0),
            (constants.FIELD_LAST_MODIFIED, None),
            (constants.FIELD_MODIFIED_BY, 0),
            (constants.FIELD_ATTENDEE_PRIVILEGES, None),
            (constants.FIELD_RELATED_TO, None),
            (constants.FIELD_EXTENDED_PROPERTIES, {}),
        ]

    # iCalendar properties that are not set through set_ical_<name>()
    ical_property_map = {
            'UID': constants.FIELD_UID,
            'SUMMARY': constants.FIELD_SUMMARY,
            'LOCATION': constants.FIELD_LOCATION,
            'DESCRIPTION': constants.FIELD_DESCRIPTION,
            'STATUS': constants.FIELD_STATUS,
            'TRANSP': constants.FIELD_TRANSP,
            'CLASS': constants.FIELD_CLASSIFICATION,
        }

    def __init__(self, from_ical=None, **kw):
        for field, default in self.fields:
            if isinstance(default, list):
                default = []
            elif isinstance(default, dict):
                default = {}

            setattr(self, field, default)

        if from_ical is not None:
            self.from_ical(from_ical)

        for field, value in kw.items():
            if not hasattr(self, field) or field not in dict(self.fields):
                raise EventIntegrityError(_("Unknown event field %r") % (field))

            setattr(self, field, value)

        if self.sequence is None:
            self.sequence = 0

        if self.sequence < 0:
            raise EventIntegrityError(_("Negative sequence %r") % (self.sequence))

    def __repr__(self):
        return "<Event %s%s (%d)>" % (
                self.uid,
                "" if self.recurrence_id is None else " %s" % (self.recurrence_id),
                self.sequence
            )

    def copy(self, **kw):
        """
            Return a copy of this event, with the keyword arguments replacing
            the respective fields.
        """
        attributes = dict()

        for field, _default in self.fields:
            value = getattr(self, field)
            if isinstance(value, list):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)

            attributes[field] = value

        attributes.update(kw)

        return Event(**attributes)

    def from_ical(self, ical):
        if isinstance(ical, icalendar.Event) or isinstance(ical, icalendar.Calendar):
            ical_event = ical
        else:
            ical_event = icalendar.Calendar.from_ical(ical)

        # VCALENDAR block was given, find the first VEVENT item
        if isinstance(ical_event, icalendar.Calendar):
            for c in ical_event.walk():
                if c.name == 'VEVENT':
                    ical_event = c
                    break

        if not ical_event.name == 'VEVENT':
            raise EventIntegrityError(_("No VEVENT component found"))

        for attr in ical_event.keys():
            self.set_from_ical(attr, ical_event[attr])

    def set_from_ical(self, attr, value):
        attr = attr.upper()
        ical_setter = 'set_ical_' + attr.lower().replace('-', '')

        if isinstance(value, icalendar.prop.vDDDTypes) and hasattr(value, 'dt'):
            value = value.dt

        if attr in self.ical_property_map:
            setattr(self, self.ical_property_map[attr], str(value))
        elif hasattr(self, ical_setter):
            getattr(self, ical_setter)(value)
        elif attr == constants.PROPERTY_COMMENT or attr.startswith('X-'):
            if isinstance(value, list):
                value = value[0]

            self.extended_properties[attr] = str(value)

    def set_ical_attendee(self, _attendee):
        if not isinstance(_attendee, list):
            _attendee = [_attendee]

        for attendee in _attendee:
            params = attendee.params if hasattr(attendee, 'params') else {}

            self.attendees.append(
                    Attendee(
                            uri=str(attendee),
                            cn=_param(params, 'CN'),
                            email=_param(params, 'EMAIL'),
                            sent_by=_calendar_user(_param(params, 'SENT-BY')),
                            cutype=_param(params, 'CUTYPE', "INDIVIDUAL").upper(),
                            partstat=_param(params, 'PARTSTAT', "NEEDS-ACTION").upper(),
                            role=_param(params, 'ROLE', "REQ-PARTICIPANT").upper(),
                            rsvp=_param(params, 'RSVP', "FALSE").upper() == "TRUE",
                            delegated_from=_param_list(params, 'DELEGATED-FROM'),
                            delegated_to=_param_list(params, 'DELEGATED-TO')
                        )
                )

    def set_ical_organizer(self, organizer):
        params = organizer.params if hasattr(organizer, 'params') else {}

        self.organizer = Organizer(
                uri=str(organizer),
                cn=_param(params, 'CN'),
                email=_param(params, 'EMAIL'),
                sent_by=_calendar_user(_param(params, 'SENT-BY'))
            )

    def set_ical_recurrenceid(self, value):
        self.recurrence_id = value

    def set_ical_rrule(self, value):
        self.recurrence_rule = value.to_ical().decode('utf-8')

    def set_ical_rdate(self, value):
        self.recurrence_dates.extend(_dates(value))

    def set_ical_exdate(self, value):
        self.delete_exception_dates.extend(_dates(value))

    def set_ical_dtstart(self, value):
        self.start_date = value

    def set_ical_dtend(self, value):
        self.end_date = value

    def set_ical_duration(self, value):
        if hasattr(value, 'dt'):
            value = value.dt

        if self.start_date is not None:
            self.end_date = self.start_date + value

    def set_ical_dtstamp(self, value):
        self.dtstamp = to_dt(value)

    def set_ical_sequence(self, value):
        self.sequence = int(value)

    def set_ical_created(self, value):
        self.created = to_dt(value)

    def set_ical_lastmodified(self, value):
        self.last_modified = to_dt(value)

    def set_ical_relatedto(self, value):
        if isinstance(value, list):
            value = value[0]

        params = value.params if hasattr(value, 'params') else {}

        self.related_to = (_param(params, 'RELTYPE', "PARENT").upper(), str(value))

    def find_attendee(self, calendar_user):
        return find_attendee(self.attendees, calendar_user)

    def get_attendee_by_email(self, email):
        for attendee in self.attendees:
            if attendee.get_email() and attendee.get_email().lower() == email.lower():
                return attendee

        raise ValueError(_("No attendee with email %r") % (email))

    def get_attendees(self):
        return self.attendees

    def get_change_exception_dates(self):
        return self.change_exception_dates

    def get_classification(self):
        return self.classification

    def get_comment(self):
        comment = self.get_extended_property(constants.PROPERTY_COMMENT)

        if comment is None or comment.strip() == "":
            return None

        return comment.strip()

    def get_created_by(self):
        return self.created_by

    def get_delete_exception_dates(self):
        return self.delete_exception_dates

    def get_description(self):
        return self.description

    def get_dtstamp(self):
        return self.dtstamp

    def get_end(self):
        return self.end_date

    def get_extended_properties(self):
        return self.extended_properties

    def get_extended_property(self, name):
        return self.extended_properties.get(name)

    def get_flags(self):
        return self.flags

    def get_folder_id(self):
        return self.folder_id

    def get_id(self):
        return self.id

    def get_location(self):
        return self.location

    def get_organizer(self):
        return self.organizer

    def get_recurrence_dates(self):
        return self.recurrence_dates

    def get_recurrence_id(self):
        return self.recurrence_id

    def get_recurrence_rule(self):
        return self.recurrence_rule

    def get_related_to(self):
        return self.related_to

    def get_sequence(self):
        return self.sequence

    def get_series_id(self):
        return self.series_id

    def get_start(self):
        return self.start_date

    def get_status(self):
        return self.status

    def get_summary(self):
        return self.summary

    def get_transparency(self):
        return self.transp

    def get_uid(self):
        return self.uid

    def is_recurring(self):
        return self.recurrence_rule is not None or len(self.recurrence_dates) > 0

    def is_series_master(self):
        """
            Whether this event looks like the master of a recurring series.
        """
        return self.recurrence_rule is not None and self.recurrence_id is None

    def to_dict(self, fields=None):
        data = dict()

        for field, _default in self.fields:
            if fields is not None and field not in fields:
                continue

            value = getattr(self, field)

            if isinstance(value, CalendarUser):
                value = value.to_dict()
            elif isinstance(value, list):
                value = [x.to_dict() if isinstance(x, CalendarUser) else x for x in value]
            elif isinstance(value, dict):
                value = dict(value)

            data[field] = value

        return data


def _param(params, name, default=None):
    if name in params:
        return str(params[name])

    return default

def _param_list(params, name):
    if name not in params:
        return []

    value = params[name]
    if isinstance(value, list):
        return [str(x) for x in value]

    return [x.strip('"') for x in str(value).split(',')]

def _calendar_user(uri):
    if uri is None:
        return None

    return CalendarUser(uri=uri.strip('"'))

def _dates(value):
    if not isinstance(value, list):
        value = [value]

    dates = []

    for _value in value:
        if hasattr(_value, 'dts'):
            dates.extend([x.dt for x in _value.dts])
        elif isinstance(_value, (datetime.date, datetime.datetime)):
            dates.append(_value)

    return dates


class EventIntegrityError(Exception):
    def __init__(self, message):
        Exception.__init__(self, message)
