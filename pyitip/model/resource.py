from pyitip.translate import _

from pyitip.model.utils import same_instant


class CalendarObjectResource(object):
    """
        The events sharing one UID: a single event, or the master of a
        recurring series along with its change exceptions.
    """

    def __init__(self, events):
        events = list(events)

        if len(events) == 0:
            raise InvalidResourceError(_("A calendar object resource needs at least one event"))

        uids = set([event.get_uid() for event in events])
        if len(uids) > 1:
            raise InvalidResourceError(_("Events with different UIDs %r in one resource") % (sorted(uids)))

        # Series master first, change exceptions ordered by recurrence id
        masters = [x for x in events if x.get_recurrence_id() is None]
        exceptions = [x for x in events if x.get_recurrence_id() is not None]

        self.events = masters + exceptions

    def __repr__(self):
        return "<CalendarObjectResource %s (%d events)>" % (self.get_uid(), len(self.events))

    def __eq__(self, other):
        if not isinstance(other, CalendarObjectResource):
            return False

        return self.get_uid() == other.get_uid()

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.get_uid())

    def get_uid(self):
        return self.events[0].get_uid()

    def get_events(self):
        return list(self.events)

    def get_first_event(self):
        return self.events[0]

    def get_organizer(self):
        return self.events[0].get_organizer()

    def get_series_master(self):
        """
            The series master, if this resource describes a recurring event.
        """
        event = self.events[0]

        if event.get_recurrence_id() is None and event.is_recurring():
            return event

        return None

    def get_change_exceptions(self):
        return [x for x in self.events if x.get_recurrence_id() is not None]

    def get_change_exception(self, recurrence_id):
        for event in self.get_change_exceptions():
            if same_instant(event.get_recurrence_id(), recurrence_id):
                return event

        return None


class InvalidResourceError(Exception):
    def __init__(self, message):
        Exception.__init__(self, message)
