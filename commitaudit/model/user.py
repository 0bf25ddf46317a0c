# -*- coding: utf-8 -*-
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
"""
commitaudit.model.user
~~~~~~~~~~~~~~~~~~~~~~

users and user groups model for Commitaudit

:created_on: Oct 17, 2026
:license: GPLv3
"""

import logging

from commitaudit.model import BaseModel
from commitaudit.model.db import User, UserGroup, UserGroupMember

log = logging.getLogger(__name__)


class UserModel(BaseModel):

    cls = User

    def get_by_username(self, username, case_insensitive=False):
        return User.get_by_username(username, case_insensitive)

    def create_or_update(self, username, email=None, firstname=None,
                         lastname=None, active=True, admin=False):
        user = User.get_by_username(username)
        if user is None:
            log.debug('creating new user %s', username)
            user = User()
            user.username = username
        user.email = email
        user.firstname = firstname
        user.lastname = lastname
        user.active = active
        user.admin = admin
        self.sa.add(user)
        return user

    def create_default_user(self):
        return self.create_or_update(username=User.DEFAULT_USER,
                                     firstname='Anonymous', lastname='User')

    def fill_data(self, auth_user, user_id=None, username=None):
        """
        Fetches auth_user by user_id or username, and populates its
        attributes if found

        :param auth_user: instance of user to set attributes
        :param user_id: user id to fetch by
        :param username: username to fetch by
        """
        if user_id is None and username is None:
            raise Exception('You need to pass user_id or username')

        if user_id is not None:
            dbuser = User.get(user_id)
        else:
            dbuser = User.get_by_username(username)

        if dbuser is None or not dbuser.active:
            return False

        auth_user.user_id = dbuser.user_id
        auth_user.username = dbuser.username
        auth_user.name = dbuser.firstname or ''
        auth_user.lastname = dbuser.lastname or ''
        auth_user.email = dbuser.email or ''
        auth_user.admin = dbuser.admin
        return True


class UserGroupModel(BaseModel):

    cls = UserGroup

    def create(self, name, description='', active=True):
        user_group = UserGroup()
        user_group.users_group_name = name
        user_group.users_group_description = description
        user_group.users_group_active = active
        self.sa.add(user_group)
        return user_group

    def add_user_to_group(self, user_group, user):
        user_group = self._get_instance(UserGroup, user_group,
                                        callback=UserGroup.get_by_group_name)
        user = self._get_user(user)

        for m in user_group.members:
            u = m.user
            if u.user_id == user.user_id:
                # user already in the group, skip
                return True

        user_group_member = UserGroupMember()
        user_group_member.user = user
        user_group_member.users_group = user_group

        self.sa.add(user_group_member)
        return user_group_member
