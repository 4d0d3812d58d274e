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
    Whether the session user may act on behalf of the calendar user a
    scheduling message is analyzed for.
"""

import pyitip
from pyitip.translate import _

from pyitip import services

log = pyitip.getLogger('itipscheduling.permissions')


def check_access(session, target_user, original_resource):
    """
        Check the permissions of the session user in the calendar of the
        target user.

        Returns None if access is granted, or an InsufficientPermissionsError
        describing what is missing.
    """
    if target_user == session.get_user_id():
        return None

    if original_resource is None:
        folder_id = session.get_entity_resolver().get_default_folder_id(session, target_user)
    else:
        folder_id = original_resource.get_first_event().get_folder_id()

    permission = session.get_folder_service().get_permission(session, folder_id, session.get_user_id())

    log.debug(
            _("Permissions of user %d in folder %s of user %d: %r") % (
                    session.get_user_id(),
                    folder_id,
                    target_user,
                    permission
                ),
            level=8
        )

    if permission.get_folder_permission() < services.READ_FOLDER:
        return InsufficientPermissionsError(_("No permission to read folder %s") % (folder_id))

    if original_resource is None:
        if permission.get_folder_permission() < services.CREATE_OBJECTS_IN_FOLDER \
                or permission.get_write_permission() < services.WRITE_ALL_OBJECTS \
                or permission.get_delete_permission() < services.DELETE_ALL_OBJECTS:

            return InsufficientPermissionsError(
                    _("No permission to create, write and delete objects in folder %s") % (folder_id)
                )

        return None

    if permission.get_folder_permission() < services.CREATE_OBJECTS_IN_FOLDER \
            or permission.get_write_permission() < services.WRITE_OWN_OBJECTS \
            or permission.get_delete_permission() < services.DELETE_OWN_OBJECTS:

        return InsufficientPermissionsError(
                _("No permission to create, write and delete objects in folder %s") % (folder_id)
            )

    if permission.get_write_permission() < services.WRITE_ALL_OBJECTS \
            or permission.get_delete_permission() < services.DELETE_ALL_OBJECTS:

        if not is_created_by(original_resource, session.get_user_id()):
            return InsufficientPermissionsError(
                    _("No permission to write and delete objects of others in folder %s") % (folder_id)
                )

    return None


def has_access(session, target_user, original_resource):
    try:
        error = check_access(session, target_user, original_resource)

    except services.CalendarServiceError as errmsg:
        log.warning(
                _("Unexpected error checking the permissions of user %d for user %d: %s") % (
                        session.get_user_id(),
                        target_user,
                        errmsg
                    )
            )

        session.add_warning(errmsg)
        return False

    if error is not None:
        log.info(
                _("User %d may not act on behalf of user %d: %s") % (
                        session.get_user_id(),
                        target_user,
                        error
                    )
            )

        return False

    return True


def is_created_by(resource, user_id):
    """
        Whether the resource was created by the user: the single event, or
        the series master, or else any of its events.
    """
    events = resource.get_events()

    if len(events) == 1:
        return events[0].get_created_by() == user_id

    series_master = resource.get_series_master()
    if series_master is not None:
        return series_master.get_created_by() == user_id

    for event in events:
        if event.get_created_by() == user_id:
            return True

    return False


class InsufficientPermissionsError(Exception):
    def __init__(self, message):
        Exception.__init__(self, message)
