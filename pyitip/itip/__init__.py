import re

from tzlocal import windows_tz

import pyitip
from pyitip import constants
from pyitip.translate import _

from pyitip.model import Attendee
from pyitip.model import find_attendee
from pyitip.model import matches
from pyitip.model.utils import compute_diff
from pyitip.model.utils import to_dt

log = pyitip.getLogger('pyitip.itip')


class ITipSequence(object):
    """
        The iTIP revision of an event: its SEQUENCE, and the DTSTAMP as a
        tie-breaker. A missing DTSTAMP sorts before any other.
    """

    def __init__(self, sequence, dtstamp=None):
        self.sequence = sequence if sequence else 0
        self.dtstamp = to_dt(dtstamp) if dtstamp is not None else None

    def __repr__(self):
        return "<ITipSequence %d %s>" % (self.sequence, self.dtstamp)

    def compare(self, other):
        if self.sequence != other.sequence:
            return -1 if self.sequence < other.sequence else 1

        if self.dtstamp == other.dtstamp:
            return 0

        if self.dtstamp is None:
            return -1

        if other.dtstamp is None:
            return 1

        return -1 if self.dtstamp < other.dtstamp else 1

    def before(self, other):
        return self.compare(other) < 0

    def after(self, other):
        return self.compare(other) > 0

    def equals(self, other):
        return self.compare(other) == 0

    def before_or_equals(self, other):
        return self.compare(other) <= 0

    def after_or_equals(self, other):
        return self.compare(other) >= 0


def itip_sequence(event):
    return ITipSequence(event.get_sequence(), event.get_dtstamp())


def is_internal(calendar_user):
    return calendar_user is not None and calendar_user.get_entity() > 0


def matches_itip_revision(event, stored_event):
    """
        Whether an incoming event describes the same revision as the stored
        one.

        For internally organized events, the SEQUENCE alone decides, since
        the DTSTAMP is bumped on inconsequential changes, too. For events
        of external organizers, both SEQUENCE and DTSTAMP need to match.
    """
    if is_internal(event.get_organizer()) and event.get_sequence() == stored_event.get_sequence():
        return True

    return itip_sequence(event).equals(itip_sequence(stored_event))


def select_attendee(event, originator, must_match=False):
    """
        Select the attendee of the event that sent the message.

        Unless must_match is set, the first attendee is selected when the
        originator is not found, since some clients omit the details
        needed to identify the (single) attendee they reply for.
    """
    attendees = event.get_attendees()

    if must_match:
        return find_attendee(attendees, originator)

    if len(attendees) > 1:
        attendee = find_attendee(attendees, originator)
        if attendee is not None:
            return attendee

    if len(attendees) > 0:
        return attendees[0]

    return None


def as_attendee(calendar_user, cutype="INDIVIDUAL"):
    """
        Make up an attendee for a calendar user.
    """
    return Attendee(
            uri=calendar_user.get_uri(),
            cn=calendar_user.get_cn(),
            email=calendar_user.get_email(),
            entity=calendar_user.get_entity(),
            sent_by=calendar_user.get_sent_by(),
            cutype=cutype
        )


def opt_resource_sent_by(event, originator):
    """
        The resource or room attendee of the event that is managed by the
        originator, i.e. whose SENT-BY is the originator.
    """
    for attendee in event.get_attendees():
        if not attendee.is_resource():
            continue

        if attendee.get_sent_by() is not None and matches(attendee.get_sent_by(), originator):
            return attendee

    return None


def is_similar_icloud_organizer(organizer1, organizer2, icloud_domains):
    """
        Whether two organizer addresses are aliases of one another at
        iCloud, which sends its scheduling messages from varying domains,
        and sometimes from its iMIP relay.
    """
    if organizer1 is None or organizer2 is None:
        return False

    address1 = organizer1.get_email()
    address2 = organizer2.get_email()

    if not address1 or not address2 or '@' not in address1 or '@' not in address2:
        return False

    (local1, domain1) = address1.lower().rsplit('@', 1)
    (local2, domain2) = address2.lower().rsplit('@', 1)

    if constants.ICLOUD_IMIP_DOMAIN in [domain1, domain2]:
        other = domain2 if domain1 == constants.ICLOUD_IMIP_DOMAIN else domain1
        return other in icloud_domains or other == constants.ICLOUD_IMIP_DOMAIN

    if domain1 not in icloud_domains or domain2 not in icloud_domains:
        return False

    return local1 == local2


def organizer_matches(stored_organizer, organizer, icloud_domains):
    if stored_organizer is None and organizer is None:
        return True

    if matches(stored_organizer, organizer):
        return True

    return is_similar_icloud_organizer(stored_organizer, organizer, icloud_domains)


def consider_as_time_change_only(event, stored_event, prodid=None, ignored_fields=None):
    """
        Whether a counter proposal is considered to propose a new time only.

        Outlook tags its time proposals with the original start and end,
        Google Calendar only ever proposes new times. Anything else has to
        differ from the stored event in start and/or end only.
    """
    properties = event.get_extended_properties()

    if constants.PROPERTY_MS_ORIGINAL_START in properties and constants.PROPERTY_MS_ORIGINAL_END in properties:
        log.debug(_("Counter for %s carries the original start and end") % (event.get_uid()), level=8)
        return True

    if prodid is not None and constants.GOOGLE_CALENDAR_PRODID in prodid:
        log.debug(_("Counter for %s sent by %s") % (event.get_uid(), prodid), level=8)
        return True

    if stored_event is None:
        return False

    ignored_fields = [x.lower() for x in ignored_fields] if ignored_fields else []

    fields = [x for x, _default in event.fields if x not in constants.COUNTER_IGNORED_FIELDS]

    stored = _without_properties(stored_event.to_dict(fields), ignored_fields)
    countered = _without_properties(event.to_dict(fields), ignored_fields)

    changed = set([x['property'] for x in compute_diff(stored, countered)]) - set(ignored_fields)

    log.debug(_("Counter for %s changes %r") % (event.get_uid(), sorted(changed)), level=8)

    return len(changed) > 0 and changed.issubset(set([constants.FIELD_START_DATE, constants.FIELD_END_DATE]))


def _without_properties(values, names):
    """
        Drop the extended properties with the given (lower case) names.
    """
    properties = values.get(constants.FIELD_EXTENDED_PROPERTIES)

    if properties:
        values[constants.FIELD_EXTENDED_PROPERTIES] = dict(
                [(k, v) for (k, v) in properties.items() if k.lower() not in names]
            )

    return values


def get_flags(event, calendar_user_id, user_id):
    """
        The flags of an event as seen by the calendar user, when accessed
        by the (session) user.
    """
    flags = []

    organizer = event.get_organizer()
    attendees = event.get_attendees()

    if organizer is not None or len(attendees) > 0:
        flags.append(constants.FLAG_SCHEDULED)

    if organizer is not None and organizer.get_entity() == calendar_user_id:
        if calendar_user_id == user_id:
            flags.append(constants.FLAG_ORGANIZER)
        else:
            flags.append(constants.FLAG_ORGANIZER_ON_BEHALF)

    attendee = None
    for _attendee in attendees:
        if _attendee.get_entity() == calendar_user_id and calendar_user_id > 0:
            attendee = _attendee
            break

    if attendee is not None:
        if calendar_user_id == user_id:
            flags.append(constants.FLAG_ATTENDEE)
        else:
            flags.append(constants.FLAG_ATTENDEE_ON_BEHALF)

        partstat = attendee.get_participant_status()
        if partstat in constants.partstat_flags:
            flags.append(constants.partstat_flags[partstat])

    if event.get_series_id() is not None or event.is_recurring():
        flags.append(constants.FLAG_SERIES)

    if event.get_recurrence_id() is not None:
        flags.append(constants.FLAG_OVERRIDDEN)

    if event.get_transparency() == "TRANSPARENT":
        flags.append(constants.FLAG_TRANSPARENT)

    if event.get_classification() == "PRIVATE":
        flags.append(constants.FLAG_PRIVATE)
    elif event.get_classification() == "CONFIDENTIAL":
        flags.append(constants.FLAG_CONFIDENTIAL)

    if event.get_status() in constants.event_status_flags:
        flags.append(constants.event_status_flags[event.get_status()])

    return flags


def transfer_entities(original_event, event):
    """
        Take over the internal entities of the organizer and attendees of
        the original event onto the matching, not (yet) internal calendar
        users of the event.
    """
    if original_event is None:
        return event

    organizer = event.get_organizer()
    original_organizer = original_event.get_organizer()

    if organizer is not None and not is_internal(organizer) and is_internal(original_organizer):
        if matches(organizer, original_organizer):
            organizer = organizer.copy(entity=original_organizer.get_entity())

    attendees = []
    for attendee in event.get_attendees():
        original_attendee = find_attendee(original_event.get_attendees(), attendee)

        if is_internal(original_attendee) and not is_internal(attendee):
            attendee = attendee.copy(entity=original_attendee.get_entity())

        attendees.append(attendee)

    return event.copy(organizer=organizer, attendees=attendees)


def convert_itip_payload(itip):
    """
        Replace the Windows timezone identifiers in an iCalendar payload
        with their Olson counterparts.
    """
    matchlist = re.findall("^((DTSTART|DTEND|DUE|EXDATE|RECURRENCE-ID)[:;][^\n]+)$", itip, re.MULTILINE)

    for match in matchlist:
        match = match[0]
        search = re.search(";TZID=([^:;]+)", match)

        if search:
            tzorig = tzdest = search.group(1).replace('"', '')

            # timezone in Olson-database format, nothing to convert
            if re.match("[a-zA-Z]+/[a-zA-Z0-9_+-]+", tzorig):
                continue

            # convert timezone from windows format to Olson
            if tzorig in windows_tz.win_tz:
                tzdest = windows_tz.win_tz[tzorig]

            # replace old with new timezone name
            if tzorig != tzdest:
                replace = match.replace(search.group(0), ";TZID=" + tzdest)
                itip = itip.replace("\n" + match, "\n" + replace)

    return itip


def check_date_conflict(_es, _ee, _is, _ie):
    """
        Check the given event start/end dates for conflicts
    """
    conflict = False

    if _es < _is:
        if _es <= _ie:
            if _ee <= _is:
                conflict = False
            else:
                conflict = True
        else:
            conflict = True
    elif _es == _is:
        conflict = True
    else:  # _es > _is
        if _es < _ie:
            conflict = True
        else:
            conflict = False

    return conflict


class IllegalSequenceError(Exception):
    def __init__(self, message):
        Exception.__init__(self, message)
