from twisted.trial import unittest

from itipscheduling import ITipAnalyzerService
from itipscheduling import analysis
from itipscheduling import is_applicable
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


class TestRefresh(unittest.TestCase):
    def setUp(self):
        self.storage = MemoryStorage()
        self.session = get_session(USER_ALICE, storage=self.storage)
        self.service = ITipAnalyzerService()

    def store(self):
        self.storage.add_event(
                USER_ALICE,
                get_event(
                        sequence=1,
                        organizer=get_organizer(USER_ALICE, entity=USER_ALICE),
                        attendees=[get_attendee(USER_BOB, entity=USER_BOB)],
                        folder_id='folder-alice'
                    )
            )

    def analyze(self, attendees):
        originator = attendees[0] if len(attendees) > 0 else get_organizer(USER_BOB)

        event = get_event(sequence=1, organizer=get_organizer(USER_ALICE), attendees=attendees)
        message = get_message('REFRESH', [event], originator, target_user=USER_ALICE)

        return self.service.analyze(message, self.session)

    def test_001_send_refresh(self):
        self.store()

        change = self.analyze([get_attendee(USER_BOB)]).get_main_change()

        self.assertEqual(get_messages(change), [messages.REFRESH, messages.SEND_MANUALLY])
        self.assertEqual(change.get_actions(), set([analysis.SEND_REFRESH, analysis.IGNORE]))
        self.assertEqual(change.get_targeted_attendee().get_email(), 'bob@example.org')

    def test_002_uninvited(self):
        self.store()

        change = self.analyze([get_attendee(USER_CAROL)]).get_main_change()

        self.assertEqual(get_messages(change), [messages.REFRESH, messages.REFRESH_UNINVITED])
        self.assertEqual(change.get_actions(), set([analysis.IGNORE]))
        self.assertEqual(change.get_targeted_attendee(), None)

    def test_003_not_found(self):
        change = self.analyze([get_attendee(USER_BOB)]).get_main_change()

        self.assertEqual(get_messages(change), [messages.REFRESH, messages.NOT_FOUND])
        self.assertEqual(change.get_actions(), set([analysis.IGNORE]))

    def test_004_no_attendee(self):
        self.store()

        result = self.analyze([])

        self.assertEqual(result.get_analyzed_changes(), [])
        self.assertEqual(len(self.session.get_warnings()), 1)
        self.assertTrue(isinstance(self.session.get_warnings()[0], SchedulingMessageWarning))


class TestAdd(unittest.TestCase):
    def test_001_add(self):
        session = get_session(USER_BOB)

        event = get_event(sequence=1, organizer=get_organizer(USER_ALICE), attendees=[get_attendee(USER_BOB)])
        message = get_message('ADD', [event], get_organizer(USER_ALICE))

        result = ITipAnalyzerService().analyze(message, session)
        change = result.get_main_change()

        self.assertEqual(
                get_messages(change),
                [messages.ADDED_OCCURRENCE, messages.ADD_UNSUPPORTED, messages.REQUEST_REFRESH_MANUALLY]
            )

        self.assertEqual(change.get_change().get_type(), analysis.CREATE)
        self.assertEqual(change.get_actions(), set([analysis.IGNORE, analysis.REQUEST_REFRESH]))
        self.assertFalse(is_applicable(result))


class TestPublish(unittest.TestCase):
    def test_001_publish(self):
        session = get_session(USER_BOB)

        events = [
                get_event(uid="published", summary="Open house", extended_properties={'COMMENT': "Welcome"}),
            ]

        message = get_message('PUBLISH', events, get_organizer(USER_ALICE))

        result = ITipAnalyzerService().analyze(message, session)

        self.assertEqual(len(result.get_analyzed_changes()), 1)

        change = result.get_main_change()

        self.assertEqual(
                get_messages(change),
                [messages.PUBLISHED, messages.COMMENT_LEFT, messages.PUBLISH_UNSUPPORTED]
            )

        self.assertEqual(change.get_actions(), set([analysis.IGNORE]))
        self.assertFalse(is_applicable(result))
