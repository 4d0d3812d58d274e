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
    The result of the analysis of an incoming scheduling message.
"""

from pyitip.translate import getTranslation

# Actions the recipient of a scheduling message may take
IGNORE = 'IGNORE'
REQUEST_REFRESH = 'REQUEST_REFRESH'
SEND_REFRESH = 'SEND_REFRESH'
APPLY_CREATE = 'APPLY_CREATE'
APPLY_CHANGE = 'APPLY_CHANGE'
APPLY_RESPONSE = 'APPLY_RESPONSE'
APPLY_REMOVE = 'APPLY_REMOVE'
APPLY_PROPOSAL = 'APPLY_PROPOSAL'
ACCEPT = 'ACCEPT'
DECLINE = 'DECLINE'
TENTATIVE = 'TENTATIVE'
ACCEPT_AND_IGNORE_CONFLICTS = 'ACCEPT_AND_IGNORE_CONFLICTS'
ACCEPT_PARTY_CRASHER = 'ACCEPT_PARTY_CRASHER'
DECLINECOUNTER = 'DECLINECOUNTER'

APPLY_ACTIONS = [
        APPLY_CREATE,
        APPLY_CHANGE,
        APPLY_REMOVE,
        APPLY_RESPONSE,
        APPLY_PROPOSAL,
    ]

# Types of changes
CREATE = 'CREATE'
UPDATE = 'UPDATE'
DELETE = 'DELETE'


class Annotation(object):
    """
        A statement about an incoming scheduling message, rendered in the
        language of the locale it was created for.
    """

    def __init__(self, message, args=(), locale=None, additionals=None):
        self.message = message
        self.args = tuple(args)
        self.locale = locale
        self.additionals = dict(additionals) if additionals else {}

    def __repr__(self):
        return "<Annotation %r>" % (self.message)

    def get_message(self):
        return self.message

    def get_args(self):
        return self.args

    def get_locale(self):
        return self.locale

    def get_additionals(self):
        return dict(self.additionals)

    def get_additional(self, key):
        return self.additionals.get(key)

    def get_text(self):
        text = getTranslation(self.locale).gettext(self.message)

        if len(self.args) > 0:
            text = text % self.args

        return text


class Change(object):
    def __init__(self, change_type, new_event=None, current_event=None, conflicts=None):
        self.type = change_type
        self.new_event = new_event
        self.current_event = current_event
        self.conflicts = list(conflicts) if conflicts else []

    def __repr__(self):
        return "<Change %s %r>" % (self.type, self.new_event)

    def get_type(self):
        return self.type

    def get_new_event(self):
        return self.new_event

    def get_current_event(self):
        return self.current_event

    def get_conflicts(self):
        return list(self.conflicts)


class AnalyzedChange(object):
    """
        The analysis of one of the events of an incoming scheduling message.
    """

    def __init__(self, change, annotations=None, actions=None, targeted_attendee=None):
        self.change = change
        self.annotations = tuple(annotations) if annotations else ()
        self.actions = frozenset(actions) if actions else frozenset()
        self.targeted_attendee = targeted_attendee

    def __repr__(self):
        return "<AnalyzedChange %r %s>" % (self.change, sorted(self.actions))

    def get_change(self):
        return self.change

    def get_annotations(self):
        return list(self.annotations)

    def get_actions(self):
        return set(self.actions)

    def get_targeted_attendee(self):
        return self.targeted_attendee


class AnalyzedChangeBuilder(object):
    """
        Collects what the analysis of a single event yields, until it is
        frozen into an AnalyzedChange.
    """

    def __init__(self):
        self.change = None
        self.annotations = []
        self.actions = []
        self.targeted_attendee = None

    def set_change(self, change):
        self.change = change

    def add_annotation(self, annotation):
        if annotation is not None:
            self.annotations.append(annotation)

    def add_annotations(self, annotations):
        for annotation in annotations:
            self.add_annotation(annotation)

    def add_actions(self, *actions):
        for action in actions:
            if action not in self.actions:
                self.actions.append(action)

    def set_targeted_attendee(self, attendee):
        self.targeted_attendee = attendee

    def build(self):
        return AnalyzedChange(
                self.change,
                annotations=self.annotations,
                actions=self.actions,
                targeted_attendee=self.targeted_attendee
            )


class ITipAnalysis(object):
    def __init__(self, method, uid, changes=None, main_change=None, original_resource=None, related_resource=None):
        self.method = method
        self.uid = uid
        self.changes = tuple(changes) if changes else ()
        self.main_change = main_change
        self.original_resource = original_resource
        self.related_resource = related_resource

    def __repr__(self):
        return "<ITipAnalysis %s %s (%d changes)>" % (self.method, self.uid, len(self.changes))

    def get_method(self):
        return self.method

    def get_uid(self):
        return self.uid

    def get_analyzed_changes(self):
        return list(self.changes)

    def get_main_change(self):
        return self.main_change

    def get_original_resource(self):
        return self.original_resource

    def get_related_resource(self):
        return self.related_resource

    def get_actions(self):
        actions = set()

        for change in self.changes:
            actions.update(change.get_actions())

        return actions


def find_main_change(changes):
    """
        The change representing the analysis as a whole: the only change,
        else the change of the series master, else the first change.
    """
    if not changes:
        return None

    if len(changes) == 1:
        return changes[0]

    for change in changes:
        if not change.get_change().get_type() in [CREATE, UPDATE]:
            continue

        new_event = change.get_change().get_new_event()
        if new_event is not None and new_event.is_series_master():
            return change

    return changes[0]


def get_analysis(method, uid, changes, original_resource=None, related_resource=None):
    return ITipAnalysis(
            method,
            uid,
            changes=changes,
            main_change=find_main_change(changes),
            original_resource=original_resource,
            related_resource=related_resource
        )


def get_insufficient_permissions_analysis(method, uid):
    return ITipAnalysis(method, uid)
