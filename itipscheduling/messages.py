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
    The statements the analysis of a scheduling message is annotated with.

    Introductions come in a plain, a series and an occurrence variant,
    hints about the calendar of another user than the session user in an
    _IN variant, which takes the name of that user as the last argument.
"""

from pyitip.translate import N_

#
# Introductions
#
INVITED = N_("%s has invited you to the appointment \"%s\".")
INVITED_SERIES = N_("%s has invited you to the appointment series \"%s\".")
INVITED_OCCURRENCE = N_("%s has invited you to an occurrence of the appointment series \"%s\".")
INVITED_ON_BEHALF = N_("%s has invited you on behalf of %s to the appointment \"%s\".")

DELEGATED = N_("%s has delegated the participation in the appointment \"%s\" to you.")
DELEGATED_SERIES = N_("%s has delegated the participation in the appointment series \"%s\" to you.")
DELEGATED_OCCURRENCE = N_("%s has delegated the participation in an occurrence of the appointment series \"%s\" to you.")

RESOURCE_INVITED = N_("%s has booked the resource %s for the appointment \"%s\".")
RESOURCE_INVITED_SERIES = N_("%s has booked the resource %s for the appointment series \"%s\".")
RESOURCE_INVITED_OCCURRENCE = N_("%s has booked the resource %s for an occurrence of the appointment series \"%s\".")

FORWARDED = N_("%s has forwarded the invitation to the appointment \"%s\" to you.")
FORWARDED_SERIES = N_("%s has forwarded the invitation to the appointment series \"%s\" to you.")
FORWARDED_OCCURRENCE = N_("%s has forwarded the invitation to an occurrence of the appointment series \"%s\" to you.")

CHANGED = N_("%s has changed the appointment \"%s\".")
CHANGED_SERIES = N_("%s has changed the appointment series \"%s\".")
CHANGED_OCCURRENCE = N_("%s has changed an occurrence of the appointment series \"%s\".")
CHANGED_ON_BEHALF = N_("%s has changed the appointment \"%s\" on behalf of %s.")

RESOURCE_CHANGED = N_("%s has changed the booking of the resource %s for the appointment \"%s\".")
RESOURCE_CHANGED_SERIES = N_("%s has changed the booking of the resource %s for the appointment series \"%s\".")
RESOURCE_CHANGED_OCCURRENCE = N_("%s has changed the booking of the resource %s for an occurrence of the appointment series \"%s\".")

REPLIED_ACCEPTED = N_("%s has accepted the invitation to the appointment \"%s\".")
REPLIED_ACCEPTED_SERIES = N_("%s has accepted the invitation to the appointment series \"%s\".")
REPLIED_ACCEPTED_OCCURRENCE = N_("%s has accepted the invitation to an occurrence of the appointment series \"%s\".")
REPLIED_TENTATIVE = N_("%s has tentatively accepted the invitation to the appointment \"%s\".")
REPLIED_TENTATIVE_SERIES = N_("%s has tentatively accepted the invitation to the appointment series \"%s\".")
REPLIED_TENTATIVE_OCCURRENCE = N_("%s has tentatively accepted the invitation to an occurrence of the appointment series \"%s\".")
REPLIED_DECLINED = N_("%s has declined the invitation to the appointment \"%s\".")
REPLIED_DECLINED_SERIES = N_("%s has declined the invitation to the appointment series \"%s\".")
REPLIED_DECLINED_OCCURRENCE = N_("%s has declined the invitation to an occurrence of the appointment series \"%s\".")
REPLIED_NONE = N_("%s has replied to the invitation to the appointment \"%s\".")
REPLIED_NONE_SERIES = N_("%s has replied to the invitation to the appointment series \"%s\".")
REPLIED_NONE_OCCURRENCE = N_("%s has replied to the invitation to an occurrence of the appointment series \"%s\".")
REPLIED_ON_BEHALF = N_("%s has replied on behalf of %s to the invitation to the appointment \"%s\".")

CANCELED = N_("%s has canceled the appointment \"%s\".")
CANCELED_SERIES = N_("%s has canceled the appointment series \"%s\".")
CANCELED_OCCURRENCE = N_("%s has canceled an occurrence of the appointment series \"%s\".")
CANCELED_ON_BEHALF = N_("%s has canceled the appointment \"%s\" on behalf of %s.")

RESOURCE_CANCELED = N_("%s has canceled the booking of the resource %s for the appointment \"%s\".")
RESOURCE_CANCELED_SERIES = N_("%s has canceled the booking of the resource %s for the appointment series \"%s\".")
RESOURCE_CANCELED_OCCURRENCE = N_("%s has canceled the booking of the resource %s for an occurrence of the appointment series \"%s\".")

ADDED_OCCURRENCE = N_("%s has added an occurrence to the appointment series \"%s\".")

REFRESH = N_("%s asks for the latest version of the appointment \"%s\".")
REFRESH_ON_BEHALF = N_("%s asks on behalf of %s for the latest version of the appointment \"%s\".")

TIME_PROPOSED = N_("%s proposes a new time for the appointment \"%s\".")
TIME_PROPOSED_SERIES = N_("%s proposes a new time for the appointment series \"%s\".")
TIME_PROPOSED_OCCURRENCE = N_("%s proposes a new time for an occurrence of the appointment series \"%s\".")

CHANGES_PROPOSED = N_("%s proposes changes to the appointment \"%s\".")
CHANGES_PROPOSED_SERIES = N_("%s proposes changes to the appointment series \"%s\".")
CHANGES_PROPOSED_OCCURRENCE = N_("%s proposes changes to an occurrence of the appointment series \"%s\".")

COUNTER_DECLINED = N_("%s has declined your proposal for the appointment \"%s\".")
COUNTER_DECLINED_SERIES = N_("%s has declined your proposal for the appointment series \"%s\".")
COUNTER_DECLINED_OCCURRENCE = N_("%s has declined your proposal for an occurrence of the appointment series \"%s\".")

PUBLISHED = N_("%s has published the appointment \"%s\".")
PUBLISHED_SERIES = N_("%s has published the appointment series \"%s\".")
PUBLISHED_OCCURRENCE = N_("%s has published an occurrence of the appointment series \"%s\".")

COMMENT_LEFT = N_("The following comment was left: \"%s\"")

#
# Hints
#
UNALLOWED_ORGANIZER_CHANGE = N_("The organizer of the appointment is not the same as before. The changes cannot be applied.")

NOT_ATTENDING = N_("You are not attending this appointment.")
NOT_ATTENDING_IN = N_("%s is not attending this appointment.")

PARTICIPATION_OPTIONAL = N_("Participation is optional.")

REPLIED_WITH_ACCEPTED = N_("You have accepted this appointment.")
REPLIED_WITH_ACCEPTED_IN = N_("%s has accepted this appointment.")
REPLIED_WITH_TENTATIVE = N_("You have tentatively accepted this appointment.")
REPLIED_WITH_TENTATIVE_IN = N_("%s has tentatively accepted this appointment.")
REPLIED_WITH_DECLINED = N_("You have declined this appointment.")
REPLIED_WITH_DECLINED_IN = N_("%s has declined this appointment.")
NOT_REPLIED = N_("You have not replied to this appointment yet.")
NOT_REPLIED_IN = N_("%s has not replied to this appointment yet.")

RESOURCE_REPLIED_WITH_ACCEPTED = N_("The booking of the resource %s is accepted.")
RESOURCE_REPLIED_WITH_TENTATIVE = N_("The booking of the resource %s is tentatively accepted.")
RESOURCE_REPLIED_WITH_DECLINED = N_("The booking of the resource %s is declined.")
RESOURCE_NOT_REPLIED = N_("The booking of the resource %s is not confirmed yet.")

CONFLICTS = N_("The appointment conflicts with other appointments in your calendar.")
CONFLICTS_IN = N_("The appointment conflicts with other appointments in the calendar of %s.")

SAVE_MANUALLY = N_("The appointment is not in your calendar yet. You can add it, and reply to the organizer.")
SAVE_MANUALLY_IN = N_("The appointment is not in the calendar of %s yet. You can add it, and reply to the organizer.")
UPDATE_MANUALLY = N_("The changes are not applied to your calendar yet. You can apply them, and reply to the organizer.")
UPDATE_MANUALLY_IN = N_("The changes are not applied to the calendar of %s yet. You can apply them, and reply to the organizer.")
SAVED = N_("The appointment is in your calendar.")
SAVED_IN = N_("The appointment is in the calendar of %s.")
UPDATED = N_("The changes are applied to your calendar.")
UPDATED_IN = N_("The changes are applied to the calendar of %s.")

RESOURCE_SAVED = N_("The appointment is in the calendar of the resource %s.")
RESOURCE_UPDATED = N_("The changes are applied to the calendar of the resource %s.")
RESOURCE_NOT_DELEGATE = N_("You are not allowed to act on behalf of the resource %s.")

UPDATED_MEANTIME = N_("The appointment has been updated in the meantime. This message is outdated.")
DELETED_MEANTIME = N_("The appointment has been deleted in the meantime. This message is outdated.")

REPLY_OUTDATED = N_("The reply refers to an outdated version of the appointment.")
REPLY_UNINVITED = N_("%s has not been invited to the appointment. You can add %s as attendee.")
REPLY_DELEGATED = N_("%s has been delegated the participation in the appointment by %s. You can add %s as attendee.")
REPLY_APPLIED = N_("The reply is applied to your calendar.")
REPLY_APPLIED_IN = N_("The reply is applied to the calendar of %s.")
REPLY_APPLY_MANUALLY = N_("The reply is not applied to your calendar yet. You can apply it.")
REPLY_APPLY_MANUALLY_IN = N_("The reply is not applied to the calendar of %s yet. You can apply it.")

NOT_FOUND = N_("The appointment could not be found in your calendar.")
NOT_FOUND_IN = N_("The appointment could not be found in the calendar of %s.")

CANCEL_APPLIED = N_("The appointment has been removed from your calendar.")
CANCEL_APPLIED_IN = N_("The appointment has been removed from the calendar of %s.")
CANCEL_APPLY_MANUALLY = N_("The appointment is still in your calendar. You can remove it.")
CANCEL_APPLY_MANUALLY_IN = N_("The appointment is still in the calendar of %s. You can remove it.")

ADD_UNSUPPORTED = N_("Adding occurrences to the appointment in your calendar is not supported.")
ADD_UNSUPPORTED_IN = N_("Adding occurrences to the appointment in the calendar of %s is not supported.")
REQUEST_REFRESH_MANUALLY = N_("You can ask the organizer for the latest version of the appointment.")
REFRESH_UNINVITED = N_("%s has not been invited to the appointment.")
SEND_MANUALLY = N_("You can send the latest version of the appointment.")

TIME_PROPOSED_TIMES = N_("Proposed start: %s, proposed end: %s")
COUNTER_UNINVITED = N_("%s has not been invited to the appointment and cannot propose changes.")
COUNTER_OUTDATED = N_("The proposal refers to an outdated version of the appointment.")
COUNTER_APPLY_MANUALLY = N_("You can apply the proposal to your calendar.")
COUNTER_APPLY_MANUALLY_IN = N_("You can apply the proposal to the calendar of %s.")
COUNTER_UNSUPPORTED = N_("The proposed changes cannot be applied to your calendar.")
COUNTER_UNSUPPORTED_IN = N_("The proposed changes cannot be applied to the calendar of %s.")
COUNTER_DECLINED_FOR_UPDATED = N_("The declined proposal refers to a newer version of the appointment than the one in your calendar.")

PUBLISH_UNSUPPORTED = N_("Published appointments are not supported.")
