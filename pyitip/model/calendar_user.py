from pyitip.translate import _


class CalendarUser(object):
    """
        A calendar user as it appears in the ORGANIZER or ATTENDEE
        properties of an event.

        The entity is the numerical identifier of an internal user, group
        or resource, or 0 when the calendar user is not known internally.
    """

    properties_map = {
            'uri': 'get_uri',
            'cn': 'get_cn',
            'email': 'get_email',
            'entity': 'get_entity',
            'sent-by': 'get_sent_by',
        }

    def __init__(self, uri=None, cn=None, email=None, entity=0, sent_by=None):
        if uri is None and email is None:
            raise InvalidCalendarUserError(_("A calendar user requires an URI or an email address"))

        if uri is None:
            uri = "mailto:%s" % (email)

        if email is None:
            email = extract_email(uri)

        self.uri = uri
        self.cn = cn
        self.email = email
        self.entity = entity if entity else 0
        self.sent_by = sent_by

    def __repr__(self):
        return "<%s %s (%d)>" % (self.__class__.__name__, self.uri, self.entity)

    def copy(self, **kw):
        """
            Return a copy of this calendar user, with the keyword arguments
            replacing the respective attributes.
        """
        attributes = dict(self.__dict__)
        attributes.update(kw)
        return self.__class__(**attributes)

    def get_uri(self):
        return self.uri

    def get_cn(self):
        return self.cn

    def get_email(self):
        return self.email

    def get_entity(self):
        return self.entity

    def get_sent_by(self):
        return self.sent_by

    def get_name(self):
        return self.cn

    def get_displayname(self):
        """
            The common name, else the email address, else the address
            taken from the URI.
        """
        if self.cn:
            return self.cn

        if self.email:
            return self.email

        return extract_email(self.uri) or self.uri

    def is_internal(self):
        return self.entity > 0

    def to_dict(self):
        data = dict()

        for p, getter in self.properties_map.items():
            val = getattr(self, getter)()
            if isinstance(val, CalendarUser):
                val = val.to_dict()
            if val is not None:
                data[p] = val

        return data


class Organizer(CalendarUser):
    pass


def extract_email(uri):
    """
        Get the email address from a mailto: URI, if it is one.
    """
    if uri is None:
        return None

    if uri.lower().startswith('mailto:'):
        return uri[7:]

    if '@' in uri and ':' not in uri:
        return uri

    return None


def matches(user1, user2):
    """
        Whether two calendar users denote the same calendar user; internal
        entities are compared by identifier, anything else by URI or email
        address, case insensitive.
    """
    if user1 is None or user2 is None:
        return False

    if user1.get_entity() > 0 and user1.get_entity() == user2.get_entity():
        return True

    if user1.get_uri() and user2.get_uri():
        if user1.get_uri().lower() == user2.get_uri().lower():
            return True

    if user1.get_email() and user2.get_email():
        if user1.get_email().lower() == user2.get_email().lower():
            return True

    return False


class InvalidCalendarUserError(Exception):
    def __init__(self, message):
        Exception.__init__(self, message)
