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
"""
    REPLY: an attendee responds to an event organized by the recipient.
"""

import pyitip
from pyitip.translate import _

from pyitip.itip import select_attendee
from pyitip.model.utils import to_dt

from itipscheduling import analysis
from itipscheduling import modules
from itipscheduling.analyzer import SchedulingAnalyzer
from itipscheduling.analyzer import SchedulingMessageWarning

log = pyitip.getLogger('itipscheduling.reply')

def __init__():
    modules.register('REPLY', ReplyAnalyzer(), description=description())

def description():
    return """Analyze replies of attendees."""


class ReplyAnalyzer(SchedulingAnalyzer):
    method = 'REPLY'

    def analyze(self, session, provider, originator, target_user):
        changes = []

        organizer_copy = provider.uses_organizer_copy()
        helper = self.get_annotation_helper(session, target_user)

        for event in provider.get_incoming_events():
            attendee = select_attendee(event, originator)

            if attendee is None:
                warning = SchedulingMessageWarning(
                        _("No replying attendee for %s in reply from %s, skipping") % (
                                event.get_uid(),
                                originator.get_uri()
                            )
                    )

                log.warning(warning)
                session.add_warning(warning)

                continue

            change = self.new_change()
            change.add_annotation(helper.get_replied_introduction(event, attendee))
            change.add_annotations(self.get_comment_hints(helper, event))

            stored_event = provider.opt_matching_event(event)

            if stored_event is None:
                tombstone = provider.opt_matching_tombstone(event)

                if tombstone is not None and tombstone.get_sequence() >= event.get_sequence():
                    change.add_annotation(helper.get_deleted_hint())
                else:
                    change.add_annotation(helper.get_not_found_hint())

                change.set_change(self.get_change(session, analysis.UPDATE, event))
                change.add_actions(analysis.IGNORE)

                changes.append(change.build())
                continue

            change.set_change(self.get_change(session, analysis.UPDATE, event, stored_event))
            change.set_targeted_attendee(attendee)

            if stored_event.get_sequence() > event.get_sequence():
                log.debug(_("Reply for %s refers to an outdated sequence") % (event.get_uid()), level=8)

                change.add_annotation(helper.get_outdated_reply_hint())
                change.add_actions(analysis.IGNORE)

                changes.append(change.build())
                continue

            stored_attendee = stored_event.find_attendee(attendee)

            if stored_attendee is None:
                log.debug(_("Reply for %s from uninvited %r") % (event.get_uid(), attendee), level=8)

                delegators = attendee.get_delegated_from()

                if len(delegators) > 0:
                    change.add_annotation(helper.get_reply_from_delegate_hint(attendee, ", ".join(delegators)))
                else:
                    change.add_annotation(helper.get_reply_from_uninvited_hint(attendee))

                change.add_actions(analysis.IGNORE, analysis.ACCEPT_PARTY_CRASHER)

            elif is_reply_applied(stored_attendee, attendee, event):
                if not organizer_copy:
                    change.add_annotation(helper.get_reply_applied_hint())

                change.add_actions(analysis.IGNORE)

            else:
                change.add_annotation(helper.get_apply_reply_manually_hint())
                change.add_actions(analysis.APPLY_RESPONSE)

            changes.append(change.build())

        return changes


def is_reply_applied(stored_attendee, attendee, event):
    """
        Whether the reply, or a newer one, was already applied for the
        attendee.
    """
    timestamp = stored_attendee.get_timestamp()

    if timestamp is not None and event.get_dtstamp() is not None:
        return to_dt(timestamp) >= to_dt(event.get_dtstamp())

    return stored_attendee.get_participant_status() == attendee.get_participant_status()
