# -*- coding: utf-8 -*-

import datetime
import pytz

from pyitip.itip import ITipSequence
from pyitip.itip import itip_sequence
from pyitip.itip import matches_itip_revision
from twisted.trial import unittest

from tests.unit.calendar_func import USER_ALICE
from tests.unit.calendar_func import get_event
from tests.unit.calendar_func import get_organizer


class TestITipSequence(unittest.TestCase):
    def setUp(self):
        dtstamp = datetime.datetime(2024, 5, 27, 8, 0, 0, tzinfo=pytz.utc)

        self.revisions = [
                ITipSequence(0, None),
                ITipSequence(0, dtstamp),
                ITipSequence(0, dtstamp + datetime.timedelta(minutes=5)),
                ITipSequence(1, None),
                ITipSequence(1, dtstamp),
                ITipSequence(2, dtstamp - datetime.timedelta(days=1)),
            ]

    def test_001_total_order(self):
        for a in self.revisions:
            for b in self.revisions:
                outcomes = [a.before(b), a.equals(b), a.after(b)]
                self.assertEqual(outcomes.count(True), 1, "Exactly one ordering for %r and %r" % (a, b))

                self.assertEqual(a.before_or_equals(b), a.before(b) or a.equals(b))
                self.assertEqual(a.after_or_equals(b), a.after(b) or a.equals(b))

    def test_002_order_is_antisymmetric(self):
        for a in self.revisions:
            for b in self.revisions:
                self.assertEqual(a.before(b), b.after(a))

    def test_003_sequence_first(self):
        self.assertTrue(self.revisions[5].after(self.revisions[4]), "Higher sequence wins over older dtstamp")
        self.assertTrue(self.revisions[3].after(self.revisions[2]))

    def test_004_missing_dtstamp_sorts_first(self):
        self.assertTrue(self.revisions[0].before(self.revisions[1]))
        self.assertTrue(ITipSequence(1, None).equals(ITipSequence(1, None)))

    def test_005_none_sequence(self):
        self.assertTrue(ITipSequence(None).equals(ITipSequence(0)))

    def test_006_matches_itip_revision_reflexive(self):
        event = get_event(sequence=3, organizer=get_organizer(USER_ALICE, entity=USER_ALICE))
        self.assertTrue(matches_itip_revision(event, event))

        event = get_event(sequence=3, organizer=get_organizer(email='dave@external.example.com'))
        self.assertTrue(matches_itip_revision(event, event))

    def test_007_matches_itip_revision_internal(self):
        stored = get_event(sequence=2, organizer=get_organizer(USER_ALICE, entity=USER_ALICE))
        incoming = get_event(
                sequence=2,
                dtstamp=datetime.datetime(2024, 5, 28, 8, 0, 0, tzinfo=pytz.utc),
                organizer=get_organizer(USER_ALICE, entity=USER_ALICE)
            )

        self.assertTrue(matches_itip_revision(incoming, stored), "DTSTAMP ignored for internal organizers")

    def test_008_matches_itip_revision_external(self):
        stored = get_event(sequence=2, organizer=get_organizer(email='dave@external.example.com'))
        incoming = get_event(
                sequence=2,
                dtstamp=datetime.datetime(2024, 5, 28, 8, 0, 0, tzinfo=pytz.utc),
                organizer=get_organizer(email='dave@external.example.com')
            )

        self.assertFalse(matches_itip_revision(incoming, stored), "DTSTAMP decides for external organizers")
        self.assertTrue(itip_sequence(incoming).after(itip_sequence(stored)))

    def test_009_matches_itip_revision_unresolved_organizer(self):
        stored = get_event(sequence=1, organizer=get_organizer(USER_ALICE, entity=USER_ALICE))
        incoming = get_event(
                sequence=1,
                dtstamp=datetime.datetime(2024, 5, 28, 8, 0, 0, tzinfo=pytz.utc),
                organizer=get_organizer(USER_ALICE)
            )

        self.assertFalse(matches_itip_revision(incoming, stored), "Incoming organizer decides")
        self.assertTrue(itip_sequence(incoming).after(itip_sequence(stored)))
