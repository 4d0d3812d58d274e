from pyitip.model.attendee import Attendee
from pyitip.model.attendee import InvalidAttendeeCutypeError
from pyitip.model.attendee import InvalidAttendeeParticipantStatusError
from pyitip.model.attendee import InvalidAttendeeRoleError
from pyitip.model.attendee import find_attendee
from pyitip.model.attendee import participant_status_label

from pyitip.model.calendar_user import CalendarUser
from pyitip.model.calendar_user import InvalidCalendarUserError
from pyitip.model.calendar_user import Organizer
from pyitip.model.calendar_user import matches

from pyitip.model.event import Event
from pyitip.model.event import EventIntegrityError
from pyitip.model.event import event_from_ical

from pyitip.model.resource import CalendarObjectResource
from pyitip.model.resource import InvalidResourceError

__all__ = [
        "Attendee",
        "CalendarObjectResource",
        "CalendarUser",
        "Event",
        "Organizer",
        "event_from_ical",
        "find_attendee",
        "matches",
        "participant_status_label",
    ]

errors = [
        "EventIntegrityError",
        "InvalidAttendeeCutypeError",
        "InvalidAttendeeParticipantStatusError",
        "InvalidAttendeeRoleError",
        "InvalidCalendarUserError",
        "InvalidResourceError",
    ]

__all__.extend(errors)
