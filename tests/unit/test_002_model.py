# -*- coding: utf-8 -*-

import datetime
import pytz

from pyitip import constants
from pyitip.itip import as_attendee
from pyitip.itip import consider_as_time_change_only
from pyitip.itip import get_flags
from pyitip.itip import is_similar_icloud_organizer
from pyitip.itip import opt_resource_sent_by
from pyitip.itip import select_attendee
from pyitip.model import Attendee
from pyitip.model import CalendarObjectResource
from pyitip.model import CalendarUser
from pyitip.model import EventIntegrityError
from pyitip.model import InvalidAttendeeParticipantStatusError
from pyitip.model import InvalidResourceError
from pyitip.model import matches
from twisted.trial import unittest

from tests.unit.calendar_func import EXTERNAL_EMAIL
from tests.unit.calendar_func import USER_ALICE
from tests.unit.calendar_func import USER_BOB
from tests.unit.calendar_func import USER_CAROL
from tests.unit.calendar_func import get_attendee
from tests.unit.calendar_func import get_event
from tests.unit.calendar_func import get_organizer

icloud_domains = ['icloud.com', 'me.com', 'mac.com']


class TestModel(unittest.TestCase):
    def test_001_negative_sequence(self):
        self.assertRaises(EventIntegrityError, get_event, sequence=-1)

    def test_002_unknown_field(self):
        self.assertRaises(EventIntegrityError, get_event, colour="red")

    def test_003_copy(self):
        event = get_event(attendees=[get_attendee(USER_BOB)])
        copy = event.copy(sequence=4)

        self.assertEqual(copy.get_sequence(), 4)
        self.assertEqual(event.get_sequence(), 0)

        copy.get_attendees().append(get_attendee(USER_CAROL))
        self.assertEqual(len(event.get_attendees()), 1, "Copies do not share their attendees")

    def test_004_invalid_partstat(self):
        self.assertRaises(InvalidAttendeeParticipantStatusError, Attendee, email="bob@example.org", partstat="MAYBE")

    def test_005_calendar_user_matches(self):
        self.assertTrue(matches(CalendarUser(uri="mailto:Bob@Example.org"), CalendarUser(email="bob@example.org")))
        self.assertTrue(matches(CalendarUser(email="x@example.org", entity=4), CalendarUser(email="y@example.org", entity=4)))
        self.assertFalse(matches(CalendarUser(email="x@example.org"), CalendarUser(email="y@example.org")))
        self.assertFalse(matches(None, CalendarUser(email="y@example.org")))

    def test_006_resource_series_master_first(self):
        rid = datetime.datetime(2024, 6, 4, 10, 0, 0, tzinfo=pytz.utc)

        exception = get_event(recurrence_id=rid, start=rid)
        master = get_event(recurrence_rule="FREQ=DAILY;COUNT=5")

        resource = CalendarObjectResource([exception, master])

        self.assertEqual(resource.get_first_event(), master)
        self.assertEqual(resource.get_series_master(), master)
        self.assertEqual(resource.get_change_exception(rid), exception)
        self.assertEqual(resource.get_change_exceptions(), [exception])

    def test_007_resource_single_uid(self):
        self.assertRaises(InvalidResourceError, CalendarObjectResource, [get_event(uid="a"), get_event(uid="b")])
        self.assertRaises(InvalidResourceError, CalendarObjectResource, [])

    def test_008_resources_compare_by_uid(self):
        self.assertEqual(CalendarObjectResource([get_event(sequence=1)]), CalendarObjectResource([get_event(sequence=2)]))

    def test_009_comment(self):
        self.assertEqual(get_event(extended_properties={'COMMENT': "  See you there "}).get_comment(), "See you there")
        self.assertEqual(get_event(extended_properties={'COMMENT': "   "}).get_comment(), None)
        self.assertEqual(get_event().get_comment(), None)


class TestMatching(unittest.TestCase):
    def test_001_select_attendee(self):
        bob = get_attendee(USER_BOB)
        carol = get_attendee(USER_CAROL)

        originator = CalendarUser(email="carol@example.org")

        self.assertEqual(select_attendee(get_event(attendees=[bob, carol]), originator), carol)
        self.assertEqual(select_attendee(get_event(attendees=[bob]), originator), bob, "Falls back to the only attendee")
        self.assertEqual(select_attendee(get_event(attendees=[bob]), originator, must_match=True), None)
        self.assertEqual(select_attendee(get_event(), originator), None)

    def test_002_as_attendee(self):
        attendee = as_attendee(CalendarUser(email=EXTERNAL_EMAIL, cn="Dave"))

        self.assertEqual(attendee.get_email(), EXTERNAL_EMAIL)
        self.assertEqual(attendee.get_cutype(), "INDIVIDUAL")

    def test_003_resource_sent_by(self):
        originator = CalendarUser(email="carol@example.org")

        room = get_attendee(email="room@example.org", cutype="ROOM", sent_by=CalendarUser(uri="mailto:carol@example.org"))
        event = get_event(attendees=[get_attendee(USER_BOB), room])

        self.assertEqual(opt_resource_sent_by(event, originator), room)
        self.assertEqual(opt_resource_sent_by(event, CalendarUser(email="bob@example.org")), None)

    def test_004_icloud_aliases(self):
        def organizer(email):
            return CalendarUser(email=email)

        self.assertTrue(is_similar_icloud_organizer(organizer("jane@icloud.com"), organizer("jane@me.com"), icloud_domains))
        self.assertFalse(is_similar_icloud_organizer(organizer("jane@icloud.com"), organizer("joe@me.com"), icloud_domains))
        self.assertTrue(is_similar_icloud_organizer(organizer("2_abc@imip.me.com"), organizer("jane@icloud.com"), icloud_domains))
        self.assertFalse(is_similar_icloud_organizer(organizer("jane@example.org"), organizer("jane@me.com"), icloud_domains))

    def test_005_time_change_only_outlook(self):
        event = get_event(extended_properties={
                constants.PROPERTY_MS_ORIGINAL_START: "20240603T100000Z",
                constants.PROPERTY_MS_ORIGINAL_END: "20240603T110000Z",
            })

        self.assertTrue(consider_as_time_change_only(event, None))

    def test_006_time_change_only_google(self):
        self.assertTrue(consider_as_time_change_only(get_event(), None, prodid="-//Google Inc//Google Calendar 70.9054//EN"))

    def test_007_time_change_only_diff(self):
        stored = get_event(
                sequence=1,
                folder_id="folder-alice",
                created_by=USER_ALICE,
                organizer=get_organizer(USER_ALICE, entity=USER_ALICE),
                attendees=[get_attendee(USER_BOB, entity=USER_BOB)]
            )

        start = datetime.datetime(2024, 6, 3, 14, 0, 0, tzinfo=pytz.utc)

        proposal = get_event(
                sequence=1,
                start=start,
                organizer=get_organizer(USER_ALICE),
                attendees=[get_attendee(USER_BOB)]
            )

        self.assertTrue(consider_as_time_change_only(proposal, stored))

        proposal = proposal.copy(location="Room 101")
        self.assertFalse(consider_as_time_change_only(proposal, stored))
        self.assertTrue(consider_as_time_change_only(proposal, stored, ignored_fields=['location']))

        self.assertFalse(consider_as_time_change_only(stored, stored), "Nothing changed at all")

    def test_008_flags(self):
        event = get_event(
                organizer=get_organizer(USER_ALICE, entity=USER_ALICE),
                attendees=[get_attendee(USER_BOB, entity=USER_BOB, partstat="ACCEPTED")],
                transp="TRANSPARENT",
                status="CONFIRMED"
            )

        flags = get_flags(event, USER_BOB, USER_BOB)

        self.assertTrue(constants.FLAG_SCHEDULED in flags)
        self.assertTrue(constants.FLAG_ATTENDEE in flags)
        self.assertTrue('ACCEPTED' in flags)
        self.assertTrue(constants.FLAG_TRANSPARENT in flags)
        self.assertTrue(constants.FLAG_EVENT_CONFIRMED in flags)
        self.assertFalse(constants.FLAG_ORGANIZER in flags)

        flags = get_flags(event, USER_ALICE, USER_CAROL)
        self.assertTrue(constants.FLAG_ORGANIZER_ON_BEHALF in flags)
