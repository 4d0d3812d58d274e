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

import pyitip
from pyitip.translate import _

from pyitip.services import RRuleRecurrenceService
from pyitip.services import StorageFreeBusyService

log = pyitip.getLogger('pyitip.session')


class CalendarSession(object):
    """
        The context an incoming scheduling message is analyzed in: the
        user on whose behalf the analysis runs, the server and context
        the user belongs to, the collaborators to consult, and a list of
        warnings collected along the way.

        A session is used for a single thread of work at a time.
    """

    def __init__(
            self,
            user_id,
            context_id=1,
            server_uid=None,
            storage=None,
            entity_resolver=None,
            folder_service=None,
            freebusy_service=None,
            recurrence_service=None
        ):

        self.user_id = user_id
        self.context_id = context_id
        self.server_uid = server_uid

        self.storage = storage
        self.entity_resolver = entity_resolver
        self.folder_service = folder_service

        if freebusy_service is None and storage is not None:
            freebusy_service = StorageFreeBusyService(storage)

        self.freebusy_service = freebusy_service

        if recurrence_service is None:
            recurrence_service = RRuleRecurrenceService()

        self.recurrence_service = recurrence_service

        self.warnings = []

    def __repr__(self):
        return "<CalendarSession user=%d context=%d>" % (self.user_id, self.context_id)

    def add_warning(self, warning):
        log.warning(_("Warning in session of user %d: %s") % (self.user_id, warning))
        self.warnings.append(warning)

    def get_warnings(self):
        return list(self.warnings)

    def get_user_id(self):
        return self.user_id

    def get_context_id(self):
        return self.context_id

    def get_server_uid(self):
        return self.server_uid

    def get_storage(self):
        return self.storage

    def get_entity_resolver(self):
        return self.entity_resolver

    def get_folder_service(self):
        return self.folder_service

    def get_freebusy_service(self):
        return self.freebusy_service

    def get_recurrence_service(self):
        return self.recurrence_service
