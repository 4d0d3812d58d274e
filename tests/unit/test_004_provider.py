# -*- coding: utf-8 -*-

import datetime
import pytz

from pyitip import constants
from pyitip.services import CalendarServiceError
from twisted.trial import unittest

from itipscheduling.message import ITipData
from itipscheduling.provider import ObjectResourceProvider
from itipscheduling.provider import ResourceCache

from tests.unit.calendar_func import MemoryStorage
from tests.unit.calendar_func import RESOURCE_ROOM
from tests.unit.calendar_func import SERVER_UID
from tests.unit.calendar_func import USER_ALICE
from tests.unit.calendar_func import USER_BOB
from tests.unit.calendar_func import get_attendee
from tests.unit.calendar_func import get_event
from tests.unit.calendar_func import get_message
from tests.unit.calendar_func import get_organizer
from tests.unit.calendar_func import get_session

rrule_daily = "FREQ=DAILY;COUNT=5"


class TestResourceCache(unittest.TestCase):
    def test_001_get_or_load(self):
        loaded = []

        def loader():
            loaded.append(True)
            return None

        cache = ResourceCache()

        self.assertEqual(cache.get_or_load('stored', loader), None)
        self.assertEqual(cache.get_or_load('stored', loader), None)
        self.assertEqual(len(loaded), 1, "Absent values are cached, too")
        self.assertTrue(cache.has('stored'))


class TestObjectResourceProvider(unittest.TestCase):
    def setUp(self):
        self.storage = MemoryStorage()
        self.session = get_session(USER_BOB, storage=self.storage)
        self.originator = get_organizer(USER_ALICE)

    def get_provider(self, events, itip_data=None):
        message = get_message('REQUEST', events, self.originator, itip_data=itip_data)
        return ObjectResourceProvider(self.session, message)

    def test_001_stored_resource_cached(self):
        self.storage.add_event(USER_BOB, get_event(sequence=1))

        provider = self.get_provider([get_event(sequence=1)])

        self.assertEqual(provider.get_stored_resource().get_first_event().get_sequence(), 1)
        provider.get_stored_resource()

        self.assertEqual(
                [x for x in self.storage.lookups if x[3] is False],
                [(constants.FIELD_UID, get_event().get_uid(), USER_BOB, False)],
                "Stored resource is looked up once"
            )

    def test_002_nothing_stored(self):
        provider = self.get_provider([get_event()])

        self.assertEqual(provider.get_stored_resource(), None)
        self.assertEqual(provider.get_tombstone_resource(), None)
        self.assertEqual(provider.opt_matching_event(get_event()), None)
        self.assertEqual(provider.opt_matching_tombstone(get_event()), None)

    def test_003_storage_failure_propagates(self):
        self.storage.fail = True

        provider = self.get_provider([get_event()])

        self.assertRaises(CalendarServiceError, provider.get_stored_resource)

    def test_004_effective_calendar_user(self):
        itip_data = ITipData(SERVER_UID, 1, sent_by_resource=RESOURCE_ROOM)
        provider = self.get_provider([get_event()], itip_data=itip_data)

        self.assertTrue(provider.is_internal_scheduling_resource())
        self.assertEqual(provider.get_calendar_user_id(), RESOURCE_ROOM)

        itip_data = ITipData('another-server', 1, sent_by_resource=RESOURCE_ROOM)
        provider = self.get_provider([get_event()], itip_data=itip_data)

        self.assertFalse(provider.is_internal_scheduling_resource())
        self.assertEqual(provider.get_calendar_user_id(), USER_BOB)

    def test_005_matching_occurrence(self):
        self.storage.add_event(USER_BOB, get_event(sequence=1, recurrence_rule=rrule_daily))

        rid = datetime.datetime(2024, 6, 5, 10, 0, 0, tzinfo=pytz.utc)
        incoming = get_event(sequence=1, recurrence_id=rid, start=rid)

        provider = self.get_provider([incoming])
        occurrence = provider.opt_matching_event(incoming)

        self.assertEqual(occurrence.get_recurrence_id(), rid)
        self.assertEqual(occurrence.get_start(), rid)
        self.assertEqual(occurrence.get_recurrence_rule(), None)

    def test_006_matching_change_exception(self):
        rid = datetime.datetime(2024, 6, 5, 10, 0, 0, tzinfo=pytz.utc)

        self.storage.add_event(USER_BOB, get_event(sequence=1, recurrence_rule=rrule_daily))
        self.storage.add_event(USER_BOB, get_event(sequence=2, recurrence_id=rid, start=rid, summary="Moved"))

        incoming = get_event(sequence=2, recurrence_id=rid, start=rid)
        provider = self.get_provider([incoming])

        self.assertEqual(provider.opt_matching_event(incoming).get_summary(), "Moved")

    def test_007_no_such_occurrence(self):
        self.storage.add_event(USER_BOB, get_event(sequence=1, recurrence_rule=rrule_daily))

        rid = datetime.datetime(2024, 7, 5, 10, 0, 0, tzinfo=pytz.utc)
        incoming = get_event(sequence=1, recurrence_id=rid, start=rid)

        provider = self.get_provider([incoming])

        self.assertEqual(provider.opt_matching_event(incoming), None)
        self.assertEqual(len(self.session.get_warnings()), 1, "Failed occurrence lookup is recorded")

    def test_008_virtual_tombstone(self):
        rid = datetime.datetime(2024, 6, 5, 10, 0, 0, tzinfo=pytz.utc)

        self.storage.add_event(
                USER_BOB,
                get_event(sequence=1, recurrence_rule=rrule_daily, delete_exception_dates=[rid])
            )

        incoming = get_event(sequence=1, recurrence_id=rid, start=rid)
        provider = self.get_provider([incoming])

        self.assertEqual(provider.opt_matching_event(incoming), None, "Deleted occurrence is not stored")

        tombstone = provider.opt_matching_tombstone(incoming)

        self.assertNotEqual(tombstone, None)
        self.assertEqual(tombstone.get_recurrence_id(), rid)

    def test_009_tombstone(self):
        self.storage.add_tombstone(USER_BOB, get_event(sequence=2))

        provider = self.get_provider([get_event(sequence=2)])

        self.assertEqual(provider.opt_matching_event(get_event()), None)
        self.assertEqual(provider.opt_matching_tombstone(get_event()).get_sequence(), 2)

    def test_010_related_resource_split(self):
        self.storage.add_event(USER_BOB, get_event(uid="original-series", recurrence_rule=rrule_daily))

        incoming = get_event(
                recurrence_rule=rrule_daily,
                extended_properties={constants.PROPERTY_SPLIT_FROM: "original-series"}
            )

        provider = self.get_provider([incoming])

        self.assertEqual(provider.get_stored_related_resource().get_uid(), "original-series")

    def test_011_related_resource_recurrence_set(self):
        related_to = (constants.RELTYPE_RECURRENCE_SET, "set-1")

        self.storage.add_event(USER_BOB, get_event(uid="first-part", recurrence_rule=rrule_daily, related_to=related_to))

        incoming = get_event(recurrence_rule=rrule_daily, related_to=related_to)
        provider = self.get_provider([incoming])

        self.assertEqual(provider.get_stored_related_resource().get_uid(), "first-part")

        provider = self.get_provider([get_event()])
        self.assertEqual(provider.get_stored_related_resource(), None, "No series, no related resource")

    def test_012_patched_events(self):
        incoming = get_event(
                organizer=get_organizer(USER_ALICE),
                attendees=[get_attendee(USER_BOB), get_attendee(USER_ALICE)],
                start=datetime.datetime(2024, 6, 3, 10, 0, 0)
            )

        provider = self.get_provider([incoming])
        event = provider.get_incoming_events()[0]

        self.assertEqual(event.get_attendees()[0].get_entity(), USER_BOB)
        self.assertEqual(event.get_attendees()[1].get_entity(), 0, "Only calendar and session user are resolved")
        self.assertEqual(event.get_organizer().get_entity(), 0)
        self.assertEqual(event.get_start().tzinfo.zone, 'Europe/Berlin', "Floating start in the user's timezone")
        self.assertTrue(constants.FLAG_ATTENDEE in event.get_flags())
        self.assertEqual(event.calendar_user, USER_BOB)

        self.assertEqual(incoming.get_attendees()[0].get_entity(), 0, "Incoming event is left untouched")

    def test_013_patch_failure(self):
        def prepare_attendees(session, attendees, resolvable=None):
            raise CalendarServiceError("Resolver unavailable")

        self.patch(self.session.get_entity_resolver(), 'prepare_attendees', prepare_attendees)

        incoming = get_event(attendees=[get_attendee(USER_BOB)])
        provider = self.get_provider([incoming])

        self.assertIdentical(provider.get_incoming_events()[0], incoming)
        self.assertEqual(len(self.session.get_warnings()), 1)

    def test_014_organizer_copy(self):
        itip_data = ITipData(SERVER_UID, 1)

        self.storage.add_event(
                USER_ALICE,
                get_event(
                        organizer=get_organizer(USER_ALICE, entity=USER_ALICE),
                        attendees=[get_attendee(USER_BOB, entity=USER_BOB)]
                    )
            )

        incoming = get_event(organizer=get_organizer(USER_ALICE), attendees=[get_attendee(USER_BOB)])

        self.assertTrue(self.get_provider([incoming], itip_data=itip_data).uses_organizer_copy())
        self.assertFalse(self.get_provider([incoming]).uses_organizer_copy(), "Not an internal scheduling resource")

        incoming = get_event(organizer=get_organizer(email='dave@external.example.com'))
        self.assertFalse(self.get_provider([incoming], itip_data=itip_data).uses_organizer_copy())

    def test_015_organizer_copy_transfers_entities(self):
        itip_data = ITipData(SERVER_UID, 1)

        self.storage.add_event(
                USER_ALICE,
                get_event(
                        organizer=get_organizer(USER_ALICE, entity=USER_ALICE),
                        attendees=[get_attendee(USER_BOB, entity=USER_BOB)]
                    )
            )

        self.storage.add_event(
                USER_BOB,
                get_event(
                        organizer=get_organizer(USER_ALICE, entity=USER_ALICE),
                        attendees=[get_attendee(USER_BOB, entity=USER_BOB)]
                    )
            )

        incoming = get_event(organizer=get_organizer(USER_ALICE), attendees=[get_attendee(USER_BOB)])
        event = self.get_provider([incoming], itip_data=itip_data).get_incoming_events()[0]

        self.assertEqual(event.get_organizer().get_entity(), USER_ALICE)
        self.assertEqual(event.get_attendees()[0].get_entity(), USER_BOB)
