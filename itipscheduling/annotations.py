# -*- coding: utf-8 -*-
# Copyright 2010-2013 Kolab Systems AG (http://www.kolabsys.com)
#
# Jeroen van Meeuwen (Kolab Systems) <vanmeeuwen a kolabsys.com>
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

import datetime

import pyitip
from pyitip.translate import _
from pyitip.translate import getTranslation

from pyitip.model.utils import olson_timezone
from pyitip.services import CalendarServiceError

from itipscheduling import messages
from itipscheduling.analysis import Annotation

log = pyitip.getLogger('itipscheduling.annotations')
conf = pyitip.getConf()

partstat_hints = {
        'ACCEPTED': (messages.REPLIED_WITH_ACCEPTED, messages.REPLIED_WITH_ACCEPTED_IN, messages.RESOURCE_REPLIED_WITH_ACCEPTED),
        'TENTATIVE': (messages.REPLIED_WITH_TENTATIVE, messages.REPLIED_WITH_TENTATIVE_IN, messages.RESOURCE_REPLIED_WITH_TENTATIVE),
        'DECLINED': (messages.REPLIED_WITH_DECLINED, messages.REPLIED_WITH_DECLINED_IN, messages.RESOURCE_REPLIED_WITH_DECLINED),
    }

replied_introductions = {
        'ACCEPTED': (messages.REPLIED_ACCEPTED, messages.REPLIED_ACCEPTED_SERIES, messages.REPLIED_ACCEPTED_OCCURRENCE),
        'TENTATIVE': (messages.REPLIED_TENTATIVE, messages.REPLIED_TENTATIVE_SERIES, messages.REPLIED_TENTATIVE_OCCURRENCE),
        'DECLINED': (messages.REPLIED_DECLINED, messages.REPLIED_DECLINED_SERIES, messages.REPLIED_DECLINED_OCCURRENCE),
    }


class AnnotationHelper(object):
    """
        Creates the annotations for the analysis of a scheduling message,
        in the language of the calendar user the message is analyzed for.
    """

    def __init__(self, session, calendar_user_id):
        self.session = session
        self.calendar_user_id = calendar_user_id

        self.locale = self._get_locale()
        self.translation = getTranslation(self.locale)

        self.timezone = None
        self.display_name = None

    def _get_locale(self):
        try:
            locale = self.session.get_entity_resolver().get_locale(self.session, self.calendar_user_id)
        except CalendarServiceError as errmsg:
            log.warning(_("Unexpected error getting the locale of user %d: %s") % (self.calendar_user_id, errmsg))
            self.session.add_warning(errmsg)
            locale = None

        if not locale:
            locale = conf.get('itip', 'default_locale', quiet=True)
            log.debug(_("Using default locale %s for calendar user %d") % (locale, self.calendar_user_id), level=8)

        return locale

    def _get_timezone(self):
        if self.timezone is not None:
            return self.timezone

        try:
            timezone = self.session.get_entity_resolver().get_timezone(self.session, self.calendar_user_id)
        except CalendarServiceError as errmsg:
            log.warning(_("Unexpected error getting the timezone of user %d: %s") % (self.calendar_user_id, errmsg))
            self.session.add_warning(errmsg)
            timezone = None

        self.timezone = olson_timezone(timezone)

        if self.timezone is None:
            self.timezone = olson_timezone(conf.get('itip', 'default_timezone', quiet=True))

        return self.timezone

    def _get_display_name(self):
        if self.display_name is not None:
            return self.display_name

        try:
            self.display_name = self.session.get_entity_resolver().get_display_name(
                    self.session,
                    self.calendar_user_id
                )

        except CalendarServiceError as errmsg:
            self.session.add_warning(errmsg)

        if not self.display_name:
            self.display_name = str(self.calendar_user_id)

        return self.display_name

    def _annotation(self, message, *args, **kw):
        return Annotation(message, args, locale=self.locale, additionals=kw.get('additionals'))

    def _in(self, message, message_in, *args, **kw):
        """
            The annotation, or its _IN variant if the calendar user is not
            the session user.
        """
        if self.calendar_user_id == self.session.get_user_id():
            return self._annotation(message, *args, **kw)

        args = args + (self._get_display_name(),)

        return self._annotation(message_in, *args, **kw)

    def _variant(self, event, messages_by_variant):
        (plain, series, occurrence) = messages_by_variant

        if event.get_recurrence_id() is not None:
            return occurrence

        if event.get_recurrence_rule() is not None:
            return series

        return plain

    def _summary(self, event):
        return event.get_summary() if event.get_summary() else ""

    def _name(self, calendar_user):
        return calendar_user.get_displayname()

    def format_date(self, dt):
        date_format = self.translation.gettext("%Y-%m-%d")
        time_format = self.translation.gettext("%H:%M (%Z)")

        if isinstance(dt, datetime.datetime):
            if dt.tzinfo is not None and self._get_timezone() is not None:
                dt = dt.astimezone(self._get_timezone())

            return dt.strftime(date_format + " " + time_format).strip()

        return dt.strftime(date_format)

    #
    # Introductions
    #
    def get_introduction(self, event, originator, messages_by_variant, on_behalf=None):
        if on_behalf is not None and originator.get_sent_by() is not None:
            return self._annotation(
                    on_behalf,
                    self._name(originator.get_sent_by()),
                    self._name(originator),
                    self._summary(event)
                )

        return self._annotation(
                self._variant(event, messages_by_variant),
                self._name(originator),
                self._summary(event)
            )

    def get_invited_introduction(self, event, originator):
        return self.get_introduction(
                event,
                originator,
                (messages.INVITED, messages.INVITED_SERIES, messages.INVITED_OCCURRENCE),
                on_behalf=messages.INVITED_ON_BEHALF
            )

    def get_delegated_introduction(self, event, delegator):
        return self.get_introduction(
                event,
                delegator,
                (messages.DELEGATED, messages.DELEGATED_SERIES, messages.DELEGATED_OCCURRENCE)
            )

    def get_forwarded_introduction(self, event, originator):
        return self.get_introduction(
                event,
                originator,
                (messages.FORWARDED, messages.FORWARDED_SERIES, messages.FORWARDED_OCCURRENCE)
            )

    def get_changed_introduction(self, event, originator):
        if originator.get_sent_by() is not None:
            return self._annotation(
                    messages.CHANGED_ON_BEHALF,
                    self._name(originator.get_sent_by()),
                    self._summary(event),
                    self._name(originator)
                )

        return self.get_introduction(
                event,
                originator,
                (messages.CHANGED, messages.CHANGED_SERIES, messages.CHANGED_OCCURRENCE)
            )

    def get_canceled_introduction(self, event, originator):
        if originator.get_sent_by() is not None:
            return self._annotation(
                    messages.CANCELED_ON_BEHALF,
                    self._name(originator.get_sent_by()),
                    self._summary(event),
                    self._name(originator)
                )

        return self.get_introduction(
                event,
                originator,
                (messages.CANCELED, messages.CANCELED_SERIES, messages.CANCELED_OCCURRENCE)
            )

    def _get_resource_introduction(self, event, originator, resource, messages_by_variant):
        return self._annotation(
                self._variant(event, messages_by_variant),
                self._name(originator),
                self._name(resource),
                self._summary(event)
            )

    def get_resource_invited_introduction(self, event, originator, resource):
        return self._get_resource_introduction(
                event,
                originator,
                resource,
                (messages.RESOURCE_INVITED, messages.RESOURCE_INVITED_SERIES, messages.RESOURCE_INVITED_OCCURRENCE)
            )

    def get_resource_changed_introduction(self, event, originator, resource):
        return self._get_resource_introduction(
                event,
                originator,
                resource,
                (messages.RESOURCE_CHANGED, messages.RESOURCE_CHANGED_SERIES, messages.RESOURCE_CHANGED_OCCURRENCE)
            )

    def get_resource_canceled_introduction(self, event, originator, resource):
        return self._get_resource_introduction(
                event,
                originator,
                resource,
                (messages.RESOURCE_CANCELED, messages.RESOURCE_CANCELED_SERIES, messages.RESOURCE_CANCELED_OCCURRENCE)
            )

    def get_replied_introduction(self, event, attendee):
        partstat = attendee.get_participant_status()

        if attendee.get_sent_by() is not None:
            return self._annotation(
                    messages.REPLIED_ON_BEHALF,
                    self._name(attendee.get_sent_by()),
                    self._name(attendee),
                    self._summary(event),
                    additionals={'partStat': partstat}
                )

        messages_by_variant = replied_introductions.get(
                partstat,
                (messages.REPLIED_NONE, messages.REPLIED_NONE_SERIES, messages.REPLIED_NONE_OCCURRENCE)
            )

        return self._annotation(
                self._variant(event, messages_by_variant),
                self._name(attendee),
                self._summary(event),
                additionals={'partStat': partstat}
            )

    def get_added_occurrence_introduction(self, event, originator):
        return self._annotation(messages.ADDED_OCCURRENCE, self._name(originator), self._summary(event))

    def get_refresh_introduction(self, event, originator):
        if originator.get_sent_by() is not None:
            return self._annotation(
                    messages.REFRESH_ON_BEHALF,
                    self._name(originator.get_sent_by()),
                    self._name(originator),
                    self._summary(event)
                )

        return self._annotation(messages.REFRESH, self._name(originator), self._summary(event))

    def get_counter_introduction(self, event, originator, time_change_only):
        if time_change_only:
            return self.get_introduction(
                    event,
                    originator,
                    (messages.TIME_PROPOSED, messages.TIME_PROPOSED_SERIES, messages.TIME_PROPOSED_OCCURRENCE)
                )

        return self.get_introduction(
                event,
                originator,
                (messages.CHANGES_PROPOSED, messages.CHANGES_PROPOSED_SERIES, messages.CHANGES_PROPOSED_OCCURRENCE)
            )

    def get_counter_declined_introduction(self, event, originator):
        return self.get_introduction(
                event,
                originator,
                (messages.COUNTER_DECLINED, messages.COUNTER_DECLINED_SERIES, messages.COUNTER_DECLINED_OCCURRENCE)
            )

    def get_published_introduction(self, event, originator):
        return self.get_introduction(
                event,
                originator,
                (messages.PUBLISHED, messages.PUBLISHED_SERIES, messages.PUBLISHED_OCCURRENCE)
            )

    def get_comment_hint(self, comment):
        return self._annotation(messages.COMMENT_LEFT, comment)

    #
    # Participation
    #
    def get_partstat_hint(self, attendee):
        if attendee is None:
            return self._in(messages.NOT_ATTENDING, messages.NOT_ATTENDING_IN)

        partstat = attendee.get_participant_status()
        additionals = {'partStat': partstat}

        if attendee.is_resource():
            return self.get_resource_partstat_hint(attendee, attendee)

        if partstat in partstat_hints:
            (message, message_in, _resource) = partstat_hints[partstat]
        else:
            (message, message_in) = (messages.NOT_REPLIED, messages.NOT_REPLIED_IN)

        return self._in(message, message_in, additionals=additionals)

    def get_participation_optional_hint(self):
        return self._annotation(messages.PARTICIPATION_OPTIONAL)

    def get_conflicts_hint(self):
        return self._in(messages.CONFLICTS, messages.CONFLICTS_IN)

    def get_resource_partstat_hint(self, attendee, resource):
        """
            The booking state of the resource, given its attendee in the
            event, if any.
        """
        if attendee is None:
            return self._annotation(messages.NOT_ATTENDING_IN, self._name(resource))

        partstat = attendee.get_participant_status()

        if partstat in partstat_hints:
            message = partstat_hints[partstat][2]
        else:
            message = messages.RESOURCE_NOT_REPLIED

        return self._annotation(message, self._name(resource), additionals={'partStat': partstat})

    def get_resource_conflicts_hint(self, resource):
        return self._annotation(messages.CONFLICTS_IN, self._name(resource))

    #
    # State of the calendar
    #
    def get_save_manually_hint(self):
        return self._in(messages.SAVE_MANUALLY, messages.SAVE_MANUALLY_IN)

    def get_update_manually_hint(self):
        return self._in(messages.UPDATE_MANUALLY, messages.UPDATE_MANUALLY_IN)

    def get_saved_hint(self):
        return self._in(messages.SAVED, messages.SAVED_IN)

    def get_updated_hint(self):
        return self._in(messages.UPDATED, messages.UPDATED_IN)

    def get_resource_saved_hint(self, resource):
        return self._annotation(messages.RESOURCE_SAVED, self._name(resource))

    def get_resource_updated_hint(self, resource):
        return self._annotation(messages.RESOURCE_UPDATED, self._name(resource))

    def get_resource_not_delegate_hint(self, resource):
        return self._annotation(messages.RESOURCE_NOT_DELEGATE, self._name(resource))

    def get_organizer_changed_hint(self):
        return self._annotation(messages.UNALLOWED_ORGANIZER_CHANGE)

    def get_outdated_hint(self):
        return self._annotation(messages.UPDATED_MEANTIME)

    def get_deleted_hint(self):
        return self._annotation(messages.DELETED_MEANTIME)

    def get_not_found_hint(self):
        return self._in(messages.NOT_FOUND, messages.NOT_FOUND_IN)

    #
    # Replies
    #
    def get_outdated_reply_hint(self):
        return self._annotation(messages.REPLY_OUTDATED)

    def get_reply_from_uninvited_hint(self, attendee):
        return self._annotation(messages.REPLY_UNINVITED, self._name(attendee), self._name(attendee))

    def get_reply_from_delegate_hint(self, attendee, delegator):
        return self._annotation(
                messages.REPLY_DELEGATED,
                self._name(attendee),
                delegator,
                self._name(attendee)
            )

    def get_reply_applied_hint(self):
        return self._in(messages.REPLY_APPLIED, messages.REPLY_APPLIED_IN)

    def get_apply_reply_manually_hint(self):
        return self._in(messages.REPLY_APPLY_MANUALLY, messages.REPLY_APPLY_MANUALLY_IN)

    #
    # Cancellations
    #
    def get_cancel_applied_hint(self):
        return self._in(messages.CANCEL_APPLIED, messages.CANCEL_APPLIED_IN)

    def get_apply_cancel_manually_hint(self):
        return self._in(messages.CANCEL_APPLY_MANUALLY, messages.CANCEL_APPLY_MANUALLY_IN)

    #
    # Additions and refreshs
    #
    def get_add_unsupported_hint(self):
        return self._in(messages.ADD_UNSUPPORTED, messages.ADD_UNSUPPORTED_IN)

    def get_request_refresh_manually_hint(self):
        return self._annotation(messages.REQUEST_REFRESH_MANUALLY)

    def get_refresh_from_uninvited_hint(self, attendee):
        return self._annotation(messages.REFRESH_UNINVITED, self._name(attendee))

    def get_send_manually_hint(self):
        return self._annotation(messages.SEND_MANUALLY)

    #
    # Counter proposals
    #
    def get_proposed_times_hint(self, event):
        start = self.format_date(event.get_start()) if event.get_start() is not None else ""
        end = self.format_date(event.get_end()) if event.get_end() is not None else ""

        return self._annotation(messages.TIME_PROPOSED_TIMES, start, end)

    def get_counter_from_uninvited_hint(self, attendee):
        return self._annotation(messages.COUNTER_UNINVITED, self._name(attendee))

    def get_outdated_counter_hint(self):
        return self._annotation(messages.COUNTER_OUTDATED)

    def get_apply_counter_manually_hint(self):
        return self._in(messages.COUNTER_APPLY_MANUALLY, messages.COUNTER_APPLY_MANUALLY_IN)

    def get_counter_unsupported_hint(self):
        return self._in(messages.COUNTER_UNSUPPORTED, messages.COUNTER_UNSUPPORTED_IN)

    def get_counter_declined_for_updated_hint(self):
        return self._annotation(messages.COUNTER_DECLINED_FOR_UPDATED)

    def get_publish_unsupported_hint(self):
        return self._annotation(messages.PUBLISH_UNSUPPORTED)
