import datetime
import pytz

from twisted.trial import unittest

from itipscheduling import ITipAnalyzerService
from itipscheduling import analysis
from itipscheduling import SchedulingMessageWarning
from itipscheduling import messages

from tests.unit.calendar_func import MemoryStorage
from tests.unit.calendar_func import USER_ALICE
from tests.unit.calendar_func import USER_BOB
from tests.unit.calendar_func import USER_CAROL
from tests.unit.calendar_func import get_attendee
from tests.unit.calendar_func import get_event
from tests.unit.calendar_func import get_message
from tests.unit.calendar_func import get_messages
from tests.unit.calendar_func import get_organizer
from tests.unit.calendar_func import get_session


class TestReply(unittest.TestCase):
    def setUp(self):
        self.storage = MemoryStorage()

        # Alice organizes, and receives the replies
        self.session = get_session(USER_ALICE, storage=self.storage)
        self.service = ITipAnalyzerService()

    def store(self, sequence=1, partstat="NEEDS-ACTION", timestamp=None):
        event = get_event(
                sequence=sequence,
                organizer=get_organizer(USER_ALICE, entity=USER_ALICE),
                attendees=[
                        get_attendee(USER_ALICE, entity=USER_ALICE, partstat="ACCEPTED"),
                        get_attendee(USER_BOB, entity=USER_BOB, partstat=partstat, timestamp=timestamp),
                    ],
                folder_id='folder-alice'
            )

        self.storage.add_event(USER_ALICE, event)

        return event

    def analyze(self, attendee, sequence=1, **kw):
        event = get_event(
                sequence=sequence,
                organizer=get_organizer(USER_ALICE),
                attendees=[attendee] if attendee is not None else [],
                **kw
            )

        originator = attendee if attendee is not None else get_organizer(USER_BOB)
        message = get_message('REPLY', [event], originator, target_user=USER_ALICE)

        return self.service.analyze(message, self.session)

    def test_001_apply_response(self):
        self.store()

        change = self.analyze(get_attendee(USER_BOB, partstat="ACCEPTED")).get_main_change()

        self.assertEqual(change.get_change().get_type(), analysis.UPDATE)
        self.assertEqual(get_messages(change), [messages.REPLIED_ACCEPTED, messages.REPLY_APPLY_MANUALLY])
        self.assertEqual(change.get_actions(), set([analysis.APPLY_RESPONSE]))
        self.assertEqual(change.get_targeted_attendee().get_email(), 'bob@example.org')
        self.assertEqual(change.get_annotations()[0].get_additional('partStat'), "ACCEPTED")

    def test_002_declined(self):
        self.store()

        change = self.analyze(get_attendee(USER_BOB, partstat="DECLINED")).get_main_change()

        self.assertEqual(get_messages(change)[0], messages.REPLIED_DECLINED)

    def test_003_already_applied(self):
        self.store(partstat="ACCEPTED")

        change = self.analyze(get_attendee(USER_BOB, partstat="ACCEPTED")).get_main_change()

        self.assertEqual(get_messages(change), [messages.REPLIED_ACCEPTED, messages.REPLY_APPLIED])
        self.assertEqual(change.get_actions(), set([analysis.IGNORE]))

    def test_004_newer_reply_applied(self):
        self.store(partstat="DECLINED", timestamp=datetime.datetime(2024, 5, 28, 8, 0, 0, tzinfo=pytz.utc))

        change = self.analyze(get_attendee(USER_BOB, partstat="ACCEPTED")).get_main_change()

        self.assertEqual(change.get_actions(), set([analysis.IGNORE]))

    def test_005_party_crasher(self):
        self.store()

        change = self.analyze(get_attendee(USER_CAROL, partstat="ACCEPTED")).get_main_change()

        self.assertEqual(get_messages(change), [messages.REPLIED_ACCEPTED, messages.REPLY_UNINVITED])
        self.assertEqual(change.get_actions(), set([analysis.IGNORE, analysis.ACCEPT_PARTY_CRASHER]))
        self.assertEqual(change.get_targeted_attendee().get_email(), 'carol@example.org')

    def test_006_reply_from_delegate(self):
        self.store()

        attendee = get_attendee(USER_CAROL, partstat="ACCEPTED", delegated_from=['mailto:bob@example.org'])
        change = self.analyze(attendee).get_main_change()

        self.assertTrue(messages.REPLY_DELEGATED in get_messages(change))
        self.assertTrue(analysis.ACCEPT_PARTY_CRASHER in change.get_actions())

    def test_007_outdated(self):
        self.store(sequence=2)

        change = self.analyze(get_attendee(USER_BOB, partstat="ACCEPTED"), sequence=1).get_main_change()

        self.assertEqual(get_messages(change), [messages.REPLIED_ACCEPTED, messages.REPLY_OUTDATED])
        self.assertEqual(change.get_actions(), set([analysis.IGNORE]))

    def test_008_newer_sequence(self):
        self.store(sequence=1)

        change = self.analyze(get_attendee(USER_BOB, partstat="ACCEPTED"), sequence=2).get_main_change()

        self.assertEqual(change.get_actions(), set([analysis.APPLY_RESPONSE]))

    def test_009_not_found(self):
        change = self.analyze(get_attendee(USER_BOB, partstat="ACCEPTED")).get_main_change()

        self.assertEqual(get_messages(change), [messages.REPLIED_ACCEPTED, messages.NOT_FOUND])
        self.assertEqual(change.get_actions(), set([analysis.IGNORE]))

    def test_010_deleted(self):
        self.storage.add_tombstone(USER_ALICE, get_event(sequence=1, organizer=get_organizer(USER_ALICE)))

        change = self.analyze(get_attendee(USER_BOB, partstat="ACCEPTED")).get_main_change()

        self.assertEqual(get_messages(change), [messages.REPLIED_ACCEPTED, messages.DELETED_MEANTIME])

    def test_011_no_attendee(self):
        self.store()

        result = self.analyze(None)

        self.assertEqual(len(result.get_analyzed_changes()), 0)
        self.assertEqual(result.get_main_change(), None)
        self.assertEqual(len(self.session.get_warnings()), 1)
        self.assertTrue(isinstance(self.session.get_warnings()[0], SchedulingMessageWarning))

    def test_012_comment(self):
        self.store()

        attendee = get_attendee(USER_BOB, partstat="TENTATIVE")
        change = self.analyze(attendee, extended_properties={'COMMENT': "Might be late"}).get_main_change()

        self.assertEqual(
                get_messages(change),
                [messages.REPLIED_TENTATIVE, messages.COMMENT_LEFT, messages.REPLY_APPLY_MANUALLY]
            )
