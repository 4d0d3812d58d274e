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

domain = 'pyitip'

version = '0.1.0'

epilog = """
    pyitip is the receiving side of iTIP (RFC 5546) scheduling for
    calendaring services.
"""

# Methods defined by RFC 5546
ITIP_METHODS = [
        'PUBLISH',
        'REQUEST',
        'REPLY',
        'ADD',
        'CANCEL',
        'REFRESH',
        'COUNTER',
        'DECLINECOUNTER',
    ]

# Event fields as known to the storage collaborator
FIELD_ID = 'id'
FIELD_SERIES_ID = 'series_id'
FIELD_FOLDER_ID = 'folder_id'
FIELD_UID = 'uid'
FIELD_FILENAME = 'filename'
FIELD_RECURRENCE_ID = 'recurrence_id'
FIELD_RECURRENCE_RULE = 'recurrence_rule'
FIELD_RECURRENCE_DATES = 'recurrence_dates'
FIELD_DELETE_EXCEPTION_DATES = 'delete_exception_dates'
FIELD_CHANGE_EXCEPTION_DATES = 'change_exception_dates'
FIELD_START_DATE = 'start_date'
FIELD_END_DATE = 'end_date'
FIELD_SEQUENCE = 'sequence'
FIELD_DTSTAMP = 'dtstamp'
FIELD_ORGANIZER = 'organizer'
FIELD_ATTENDEES = 'attendees'
FIELD_SUMMARY = 'summary'
FIELD_LOCATION = 'location'
FIELD_DESCRIPTION = 'description'
FIELD_STATUS = 'status'
FIELD_TRANSP = 'transp'
FIELD_CLASSIFICATION = 'classification'
FIELD_CALENDAR_USER = 'calendar_user'
FIELD_FLAGS = 'flags'
FIELD_TIMESTAMP = 'timestamp'
FIELD_CREATED = 'created'
FIELD_CREATED_BY = 'created_by'
FIELD_LAST_MODIFIED = 'last_modified'
FIELD_MODIFIED_BY = 'modified_by'
FIELD_ATTENDEE_PRIVILEGES = 'attendee_privileges'
FIELD_RELATED_TO = 'related_to'
FIELD_EXTENDED_PROPERTIES = 'extended_properties'

# Fields loaded from storage unless an analyzer asks for more
DEFAULT_FIELDS = [
        FIELD_ID,
        FIELD_SERIES_ID,
        FIELD_FOLDER_ID,
        FIELD_UID,
        FIELD_RECURRENCE_ID,
        FIELD_RECURRENCE_RULE,
        FIELD_RECURRENCE_DATES,
        FIELD_DELETE_EXCEPTION_DATES,
        FIELD_CHANGE_EXCEPTION_DATES,
        FIELD_START_DATE,
        FIELD_SEQUENCE,
        FIELD_DTSTAMP,
        FIELD_ORGANIZER,
        FIELD_ATTENDEES,
        FIELD_SUMMARY,
    ]

# Fields never considered when classifying a counter proposal
COUNTER_IGNORED_FIELDS = [
        FIELD_ID,
        FIELD_FOLDER_ID,
        FIELD_SERIES_ID,
        FIELD_UID,
        FIELD_FILENAME,
        FIELD_RECURRENCE_ID,
        FIELD_CALENDAR_USER,
        FIELD_FLAGS,
        FIELD_SEQUENCE,
        FIELD_DTSTAMP,
        FIELD_TIMESTAMP,
        FIELD_CREATED,
        FIELD_CREATED_BY,
        FIELD_LAST_MODIFIED,
        FIELD_MODIFIED_BY,
        FIELD_CHANGE_EXCEPTION_DATES,
        FIELD_ATTENDEE_PRIVILEGES,
    ]

# Extended properties carrying vendor hints
PROPERTY_COMMENT = 'COMMENT'
PROPERTY_MS_ORIGINAL_START = 'X-MS-OLK-ORIGINALSTART'
PROPERTY_MS_ORIGINAL_END = 'X-MS-OLK-ORIGINALEND'
PROPERTY_SPLIT_FROM = 'X-OX-SPLIT-FROM'

RELTYPE_RECURRENCE_SET = 'X-CALENDARSERVER-RECURRENCE-SET'

GOOGLE_CALENDAR_PRODID = 'Google Calendar'

ICLOUD_IMIP_DOMAIN = 'imip.me.com'

# Client-facing flags of patched events
FLAG_SCHEDULED = 'SCHEDULED'
FLAG_ORGANIZER = 'ORGANIZER'
FLAG_ORGANIZER_ON_BEHALF = 'ORGANIZER_ON_BEHALF'
FLAG_ATTENDEE = 'ATTENDEE'
FLAG_ATTENDEE_ON_BEHALF = 'ATTENDEE_ON_BEHALF'
FLAG_SERIES = 'SERIES'
FLAG_OVERRIDDEN = 'OVERRIDDEN'
FLAG_TRANSPARENT = 'TRANSPARENT'
FLAG_PRIVATE = 'PRIVATE'
FLAG_CONFIDENTIAL = 'CONFIDENTIAL'
FLAG_EVENT_TENTATIVE = 'EVENT_TENTATIVE'
FLAG_EVENT_CONFIRMED = 'EVENT_CONFIRMED'
FLAG_EVENT_CANCELLED = 'EVENT_CANCELLED'

event_status_flags = {
        'TENTATIVE': FLAG_EVENT_TENTATIVE,
        'CONFIRMED': FLAG_EVENT_CONFIRMED,
        'CANCELLED': FLAG_EVENT_CANCELLED,
    }

# Participant status of the calendar user, as flags
partstat_flags = {
        'NEEDS-ACTION': 'NEEDS_ACTION',
        'ACCEPTED': 'ACCEPTED',
        'DECLINED': 'DECLINED',
        'TENTATIVE': 'TENTATIVE',
        'DELEGATED': 'DELEGATED',
    }
