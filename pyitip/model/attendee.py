from pyitip.translate import _
from pyitip.translate import N_

from pyitip.model.calendar_user import CalendarUser
from pyitip.model.calendar_user import matches

participant_status_labels = {
        "NEEDS-ACTION": N_("Needs Action"),
        "ACCEPTED": N_("Accepted"),
        "DECLINED": N_("Declined"),
        "TENTATIVE": N_("Tentatively Accepted"),
        "DELEGATED": N_("Delegated"),
    }

def participant_status_label(status):
    return _(participant_status_labels[status]) if status in participant_status_labels else _(status)


class Attendee(CalendarUser):
    cutypes = [
            "INDIVIDUAL",
            "GROUP",
            "RESOURCE",
            "ROOM",
            "UNKNOWN",
        ]

    participant_statuses = [
            "NEEDS-ACTION",
            "ACCEPTED",
            "DECLINED",
            "TENTATIVE",
            "DELEGATED",
        ]

    # See RFC 2445, 5445
    roles = [
            "CHAIR",
            "REQ-PARTICIPANT",
            "OPT-PARTICIPANT",
            "NON-PARTICIPANT",
        ]

    properties_map = dict(CalendarUser.properties_map)
    properties_map.update({
            'role': 'get_role',
            'rsvp': 'get_rsvp',
            'partstat': 'get_participant_status',
            'cutype': 'get_cutype',
            'delegated-to': 'get_delegated_to',
            'delegated-from': 'get_delegated_from',
            'comment': 'get_comment',
        })

    def __init__(
            self,
            uri=None,
            cn=None,
            email=None,
            entity=0,
            sent_by=None,
            cutype="INDIVIDUAL",
            partstat="NEEDS-ACTION",
            role="REQ-PARTICIPANT",
            rsvp=False,
            delegated_from=None,
            delegated_to=None,
            comment=None,
            timestamp=None
        ):

        CalendarUser.__init__(self, uri=uri, cn=cn, email=email, entity=entity, sent_by=sent_by)

        if cutype not in self.cutypes:
            raise InvalidAttendeeCutypeError(_("Invalid cutype %r") % (cutype))

        if partstat not in self.participant_statuses:
            raise InvalidAttendeeParticipantStatusError(_("Invalid participant status %r") % (partstat))

        if role not in self.roles:
            raise InvalidAttendeeRoleError(_("Invalid role %r") % (role))

        self.cutype = cutype
        self.partstat = partstat
        self.role = role
        self.rsvp = rsvp

        # URIs of the delegators and delegatees
        self.delegated_from = list(delegated_from) if delegated_from else []
        self.delegated_to = list(delegated_to) if delegated_to else []

        self.comment = comment

        # The DTSTAMP of the last reply applied for this attendee
        self.timestamp = timestamp

    def get_cutype(self):
        return self.cutype

    def get_participant_status(self, translated=False):
        if translated:
            return participant_status_label(self.partstat)

        return self.partstat

    def get_role(self):
        return self.role

    def get_rsvp(self):
        return self.rsvp

    def get_delegated_from(self):
        return self.delegated_from

    def get_delegated_to(self):
        return self.delegated_to

    def get_comment(self):
        return self.comment

    def get_timestamp(self):
        return self.timestamp

    def is_resource(self):
        return self.cutype in ["RESOURCE", "ROOM"]


def find_attendee(attendees, calendar_user):
    """
        Find the attendee matching the calendar user in a list of attendees.
    """
    if not attendees or calendar_user is None:
        return None

    for attendee in attendees:
        if matches(attendee, calendar_user):
            return attendee

    return None


class InvalidAttendeeCutypeError(Exception):
    def __init__(self, message):
        Exception.__init__(self, message)

class InvalidAttendeeParticipantStatusError(Exception):
    def __init__(self, message):
        Exception.__init__(self, message)

class InvalidAttendeeRoleError(Exception):
    def __init__(self, message):
        Exception.__init__(self, message)
