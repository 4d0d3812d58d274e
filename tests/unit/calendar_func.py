import datetime
import pytz

from pyitip.model import Attendee
from pyitip.model import CalendarObjectResource
from pyitip.model import Event
from pyitip.model import Organizer
from pyitip.services import CalendarServiceError
from pyitip.services import CalendarStorage
from pyitip.services import EntityResolver
from pyitip.services import FolderService
from pyitip.services import Permission
from pyitip.session import CalendarSession

from itipscheduling.message import IncomingSchedulingMessage

SERVER_UID = 'b0ba8f1c-0c6f-4a2e-9c15-2bf1f1f3d0a1'

USER_ALICE = 3
USER_BOB = 4
USER_CAROL = 5
RESOURCE_ROOM = 10

users = {
        USER_ALICE: {
                'email': 'alice@example.org',
                'cn': 'Alice Adams',
                'locale': 'en_US',
                'timezone': 'Europe/Berlin',
                'folder': 'folder-alice',
            },
        USER_BOB: {
                'email': 'bob@example.org',
                'cn': 'Bob Brown',
                'locale': 'en_US',
                'timezone': 'Europe/Berlin',
                'folder': 'folder-bob',
            },
        USER_CAROL: {
                'email': 'carol@example.org',
                'cn': 'Carol Clark',
                'locale': 'en_US',
                'timezone': 'Europe/London',
                'folder': 'folder-carol',
            },
        RESOURCE_ROOM: {
                'email': 'room@example.org',
                'cn': 'Meeting Room',
                'locale': None,
                'timezone': None,
                'folder': 'folder-room',
            },
    }

EXTERNAL_EMAIL = 'dave@external.example.com'


class MemoryStorage(CalendarStorage):
    """
        Keeps the events and tombstones of calendar users in memory.
    """

    def __init__(self):
        self.events = {}
        self.tombstones = {}
        self.lookups = []
        self.fail = False

    def add_event(self, calendar_user_id, event):
        self.events.setdefault(calendar_user_id, []).append(event)

    def add_tombstone(self, calendar_user_id, event):
        self.tombstones.setdefault(calendar_user_id, []).append(event)

    def lookup_by_field(self, session, field, value, calendar_user_id, tombstones=False, fields=None):
        self.lookups.append((field, value, calendar_user_id, tombstones))

        if self.fail:
            raise CalendarServiceError("Storage unavailable")

        if tombstones:
            events = self.tombstones.get(calendar_user_id, [])
        else:
            events = self.events.get(calendar_user_id, [])

        return [x for x in events if getattr(x, field) == value]

    def search_events(self, session, calendar_user_id, start, end):
        return list(self.events.get(calendar_user_id, []))


class FakeEntityResolver(EntityResolver):
    def __init__(self):
        self.delegates = []

    def _find_user(self, calendar_user):
        email = calendar_user.get_email()

        if email is None:
            return 0

        for user_id, details in users.items():
            if details['email'] == email.lower():
                return user_id

        return 0

    def _resolve(self, calendar_user, resolvable):
        if calendar_user.is_internal():
            return calendar_user

        user_id = self._find_user(calendar_user)

        if user_id == 0:
            return calendar_user

        if resolvable is not None and user_id not in resolvable:
            return calendar_user

        return calendar_user.copy(entity=user_id)

    def get_default_folder_id(self, session, user_id):
        return users[user_id]['folder']

    def has_delegate_privilege(self, session, resource_id, user_id):
        return (resource_id, user_id) in self.delegates

    def prepare_user_attendee(self, session, user_id):
        return Attendee(
                email=users[user_id]['email'],
                cn=users[user_id]['cn'],
                entity=user_id
            )

    def get_locale(self, session, user_id):
        return users[user_id]['locale']

    def get_timezone(self, session, user_id):
        return users[user_id]['timezone']

    def get_display_name(self, session, user_id):
        return users[user_id]['cn']

    def prepare_organizer(self, session, organizer, resolvable=None):
        return self._resolve(organizer, resolvable)

    def prepare_attendees(self, session, attendees, resolvable=None):
        return [self._resolve(x, resolvable) for x in attendees]


class FakeFolderService(FolderService):
    def __init__(self):
        self.permissions = {}

    def grant(self, folder_id, user_id, permission):
        self.permissions[(folder_id, user_id)] = permission

    def get_permission(self, session, folder_id, user_id):
        return self.permissions.get((folder_id, user_id), Permission())


def get_session(user_id=USER_BOB, storage=None):
    if storage is None:
        storage = MemoryStorage()

    return CalendarSession(
            user_id,
            context_id=1,
            server_uid=SERVER_UID,
            storage=storage,
            entity_resolver=FakeEntityResolver(),
            folder_service=FakeFolderService()
        )

def get_organizer(user_id=None, email=None, entity=0):
    if user_id is not None:
        email = users[user_id]['email']

    return Organizer(uri="mailto:%s" % (email), entity=entity)

def get_attendee(user_id=None, email=None, entity=0, partstat="NEEDS-ACTION", **kw):
    if user_id is not None:
        email = users[user_id]['email']

    return Attendee(uri="mailto:%s" % (email), entity=entity, partstat=partstat, **kw)

def get_event(uid='3f6b2f8e-0a1d-4c39-b3f4-7e1a0c5d9e21', sequence=0, dtstamp=None, start=None, **kw):
    if dtstamp is None:
        dtstamp = datetime.datetime(2024, 5, 27, 8, 0, 0, tzinfo=pytz.utc)

    if start is None:
        start = datetime.datetime(2024, 6, 3, 10, 0, 0, tzinfo=pytz.utc)

    attributes = {
            'uid': uid,
            'sequence': sequence,
            'dtstamp': dtstamp,
            'start_date': start,
            'end_date': start + datetime.timedelta(hours=1),
            'summary': "Quarterly planning",
        }

    attributes.update(kw)

    return Event(**attributes)

def get_message(method, events, originator, target_user=USER_BOB, prodid=None, itip_data=None):
    return IncomingSchedulingMessage(
            method,
            CalendarObjectResource(events),
            originator,
            target_user,
            prodid=prodid,
            itip_data=itip_data
        )

def get_messages(analyzed_change):
    return [x.get_message() for x in analyzed_change.get_annotations()]
