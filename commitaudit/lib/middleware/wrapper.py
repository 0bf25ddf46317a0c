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
commitaudit.lib.middleware.wrapper
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

request time measuring app, and the handler turning unexpected errors
into 500 responses

:created_on: Oct 17, 2026
:license: GPLv3
"""

import time
import logging
import traceback

import webob.exc

from commitaudit.lib.base import _get_ip_addr, _get_access_path


class RequestWrapper(object):

    def __init__(self, app, config):
        self.application = app
        self.config = config

    def __call__(self, environ, start_response):
        start = time.time()
        try:
            return self.application(environ, start_response)
        finally:
            log = logging.getLogger('commitaudit.' + self.__class__.__name__)
            log.info('IP: %s Request to %s time: %.3fs',
                     _get_ip_addr(environ),
                     _get_access_path(environ), time.time() - start)


class ErrorHandler(object):
    """
    Logs exceptions escaping the application and answers with a 500,
    showing the traceback when debug is on
    """

    def __init__(self, app, config, debug=False):
        self.application = app
        self.config = config
        self.debug = debug

    def __call__(self, environ, start_response):
        try:
            return self.application(environ, start_response)
        except Exception:
            log = logging.getLogger('commitaudit.' + self.__class__.__name__)
            tb = traceback.format_exc()
            log.error('Error processing %s\n%s', _get_access_path(environ), tb)
            detail = tb if self.debug else None
            return webob.exc.HTTPInternalServerError(detail=detail)(
                environ, start_response)
