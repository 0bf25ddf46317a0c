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
commitaudit.lib.base
~~~~~~~~~~~~~~~~~~~~

The base Controller API
Provides the BaseController class for subclassing, and the WSGI
application dispatching routed requests to controllers

:created_on: Oct 17, 2026
:license: GPLv3
"""

import inspect
import logging
import importlib

import webob
import webob.exc

from commitaudit.lib.i18n import _
from commitaudit import __version__
from commitaudit.lib import helpers as h
from commitaudit.lib.auth import AuthUser, get_container_username, \
    check_authentication_token, TOKEN_KEY
from commitaudit.model import meta

log = logging.getLogger(__name__)


def _filter_proxy(ip):
    """
    HEADERS can have multiple ips inside the left-most being the original
    client, and each successive proxy that passed the request adding the IP
    address where it received the request from.

    :param ip:
    """
    if ',' in ip:
        _ips = ip.split(',')
        _first_ip = _ips[0].strip()
        log.debug('Got multiple IPs %s, using %s', ','.join(_ips), _first_ip)
        return _first_ip
    return ip


def _get_ip_addr(environ):
    proxy_key = 'HTTP_X_REAL_IP'
    proxy_key2 = 'HTTP_X_FORWARDED_FOR'
    def_key = 'REMOTE_ADDR'

    ip = environ.get(proxy_key)
    if ip:
        return _filter_proxy(ip)

    ip = environ.get(proxy_key2)
    if ip:
        return _filter_proxy(ip)

    ip = environ.get(def_key, '0.0.0.0')
    return _filter_proxy(ip)


def _get_access_path(environ):
    return environ.get('PATH_INFO')


class ContextObj(object):
    """
    Template context, attributes not set read as empty string
    """

    def __getattr__(self, name):
        if name.startswith('__'):
            raise AttributeError(name)
        return ''

    def __repr__(self):
        return '<ContextObj %s>' % (sorted(self.__dict__),)


def redirect(location):
    raise webob.exc.HTTPFound(location=location)


class BaseController(object):

    def __init__(self, config):
        self.config = config
        self.sa = meta.Session

    def __before__(self):
        """
        __before__ is called before controller methods and after __call__
        """
        self.c.commitaudit_version = __version__
        self.c.authuser = self.authuser
        self.c.flash_messages = []

    def render(self, template_name):
        lookup = self.config['commitaudit.templates']
        template = lookup.get_template(template_name)
        self.c.flash_messages = h.flash.pop_messages(self.session)
        return template.render_unicode(
            c=self.c, h=h, url=self.url, request=self.request,
            session=self.session, config=self.config, _=_,
        )

    def _check_csrf(self):
        if self.request.method in ('GET', 'HEAD'):
            return
        token = self.request.POST.get(TOKEN_KEY)
        if not check_authentication_token(self.session, token):
            log.warning('Invalid authentication token for %s %s',
                        self.request.method, self.request.path)
            raise webob.exc.HTTPForbidden(_('Invalid security token'))

    def _dispatch(self, action, routes_dict):
        func = getattr(self, action, None)
        if action.startswith('_') or not callable(func):
            raise webob.exc.HTTPNotFound()
        params = inspect.signature(func).parameters
        kwargs = dict((k, v) for k, v in routes_dict.items() if k in params)
        return func(**kwargs)

    def __call__(self, environ, start_response):
        """Invoke the Controller"""
        try:
            self.request = webob.Request(environ)
            self.response = webob.Response(content_type='text/html',
                                           charset='utf-8')
            self.session = environ['beaker.session']
            self.url = environ['routes.url']
            self.c = ContextObj()
            self.ip_addr = _get_ip_addr(environ)

            username = get_container_username(environ, self.config)
            self.authuser = AuthUser(username=username, ip_addr=self.ip_addr)
            log.info('IP: %s User: %s accessed %s',
                     self.ip_addr, self.authuser, _get_access_path(environ))

            routes_dict = environ['wsgiorg.routing_args'][1]
            try:
                self._check_csrf()
                self.__before__()
                result = self._dispatch(routes_dict['action'], routes_dict)
            except webob.exc.HTTPException as e:
                log.debug('controller raised %s', e.status)
                return e(environ, start_response)

            if isinstance(result, webob.Response):
                response = result
            else:
                response = self.response
                if result is not None:
                    response.text = result
            return response(environ, start_response)
        finally:
            meta.Session.remove()


class CommitauditApp(object):
    """
    Dispatches requests routed by RoutesMiddleware to the controller class
    named by the route
    """

    def __init__(self, config):
        self.config = config
        self.controllers = {}

    def find_controller(self, name):
        if name not in self.controllers:
            module = importlib.import_module('commitaudit.controllers.%s' % name)
            class_name = '%sController' % name.title().replace('_', '')
            self.controllers[name] = getattr(module, class_name)
        return self.controllers[name]

    def __call__(self, environ, start_response):
        match = environ['wsgiorg.routing_args'][1]
        if not match or not match.get('controller'):
            log.debug('No route matched %s', _get_access_path(environ))
            return webob.exc.HTTPNotFound()(environ, start_response)

        controller_cls = self.find_controller(match['controller'])
        return controller_cls(self.config)(environ, start_response)
