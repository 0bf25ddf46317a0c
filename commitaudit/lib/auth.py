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
commitaudit.lib.auth
~~~~~~~~~~~~~~~~~~~~

authentication and authorization utilities for Commitaudit

Users are authenticated by the container (web server) in front of the
application, requests that carry no known user act as the anonymous
default user.

:created_on: Oct 17, 2026
:license: GPLv3
"""

import hashlib
import logging
import random

from decorator import decorator
from paste.deploy.converters import asbool
from webob.exc import HTTPForbidden, HTTPUnauthorized

from commitaudit.lib.i18n import _
from commitaudit.model.db import User
from commitaudit.model.user import UserModel

log = logging.getLogger(__name__)

# session key and form field name of the CSRF token
TOKEN_KEY = '_authentication_token'


def _clean_username(username):
    # Removing realm and domain from username
    username = username.partition('@')[0]
    username = username.rpartition('\\')[2]
    return username


def get_container_username(environ, config):
    """
    Extracts the username the container authenticated the request with,
    from the configured header or the fallback header

    :param environ: WSGI environment
    :param config: application config
    """
    username = None
    header = config.get('container_auth.header', 'REMOTE_USER')
    if header:
        username = environ.get(header)
        log.debug('extracted %s:%s', header, username)

    # fallback mode
    fallback_header = config.get('container_auth.fallback_header')
    if not username and fallback_header:
        username = environ.get(fallback_header)
        log.debug('extracted %s:%s', fallback_header, username)

    if username and asbool(config.get('container_auth.clean_username', False)):
        log.debug('Received username %s from container', username)
        username = _clean_username(username)
        log.debug('New cleanup user is: %s', username)
    return username


class AuthUser(object):
    """
    A simple object that handles all attributes of user in Commitaudit

    It does lookup based on given user id or username, if that fails the
    anonymous default user is used when it is active
    """

    def __init__(self, user_id=None, username=None, ip_addr=None):

        self.user_id = user_id
        self.username = username
        self.ip_addr = ip_addr
        self.name = ''
        self.lastname = ''
        self.email = ''
        self.is_authenticated = False
        self.admin = False

        self.propagate_data()

    def propagate_data(self):
        user_model = UserModel()
        self.anonymous_user = User.get_default_user()
        is_user_loaded = False

        if self.user_id is not None:
            log.debug('Auth User lookup by USER ID %s', self.user_id)
            is_user_loaded = user_model.fill_data(self, user_id=self.user_id)
        elif self.username and self.username != User.DEFAULT_USER:
            log.debug('Auth User lookup by USER NAME %s', self.username)
            is_user_loaded = user_model.fill_data(self, username=self.username)
        else:
            log.debug('No data in %s that could been used to log in', self)

        if is_user_loaded:
            self.is_authenticated = True
        elif self.anonymous_user is not None and self.anonymous_user.active:
            # if we cannot authenticate user try anonymous
            user_model.fill_data(self, user_id=self.anonymous_user.user_id)
            # then we set this user is logged in
            self.is_authenticated = True
        else:
            self.user_id = None
            self.username = None
            self.is_authenticated = False

        if not self.username:
            self.username = 'None'

        log.debug('Auth User is now %s', self)

    @property
    def is_admin(self):
        return self.admin

    @property
    def is_default(self):
        return self.username == User.DEFAULT_USER

    @property
    def identity(self):
        if self.user_id is None:
            return None
        return '%s:%s' % (User.IDENTITY_PREFIX, self.username)

    @property
    def full_name(self):
        if self.name or self.lastname:
            return ('%s %s' % (self.name, self.lastname)).strip()
        return self.username

    def __repr__(self):
        return "<AuthUser('id:%s[%s] ip:%s auth:%s')>"\
            % (self.user_id, self.username, self.ip_addr, self.is_authenticated)


def authentication_token(session):
    """
    Returns the CSRF token of the session, creating one when missing
    """
    if TOKEN_KEY not in session:
        token = hashlib.sha1(str(random.getrandbits(128)).encode('ascii'))
        session[TOKEN_KEY] = token.hexdigest()
        session.save()
    return session[TOKEN_KEY]


def check_authentication_token(session, token):
    return bool(token) and session.get(TOKEN_KEY) == token


class LoginRequired(object):
    """
    Must be logged in to execute this function, the anonymous user counts
    as logged in while it is active
    """

    def __call__(self, func):
        return decorator(self.__wrapper, func)

    def __wrapper(self, func, *fargs, **fkwargs):
        cls = fargs[0]
        user = cls.authuser
        loc = "%s:%s" % (cls.__class__.__name__, func.__name__)

        log.debug('Checking if %s is authenticated @ %s', user.username, loc)
        if user.is_authenticated:
            log.info('user %s IS authenticated on func %s', user, loc)
            return func(*fargs, **fkwargs)

        log.warning('user %s NOT authenticated on func: %s', user, loc)
        raise HTTPUnauthorized()


class NotAnonymous(object):
    """
    Must be a registered user to execute this function
    """

    def __call__(self, func):
        return decorator(self.__wrapper, func)

    def __wrapper(self, func, *fargs, **fkwargs):
        cls = fargs[0]
        self.user = cls.authuser

        log.debug('Checking if user is not anonymous @%s', cls)

        anonymous = self.user.username == User.DEFAULT_USER

        if anonymous:
            import commitaudit.lib.helpers as h
            h.flash(cls.session, _('You need to be a registered user to '
                                   'perform this action'),
                    category='warning')
            raise HTTPForbidden()
        else:
            return func(*fargs, **fkwargs)
