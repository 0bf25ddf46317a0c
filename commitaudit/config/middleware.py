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
    Commitaudit middleware initialization
"""

from beaker.middleware import SessionMiddleware
from routes.middleware import RoutesMiddleware
from paste.cascade import Cascade
from paste.urlparser import StaticURLParser
from paste.deploy.converters import asbool
from paste.gzipper import make_gzip_middleware

from commitaudit.config.environment import load_environment
from commitaudit.lib.base import CommitauditApp
from commitaudit.lib.middleware.wrapper import RequestWrapper, ErrorHandler


def make_app(global_conf, full_stack=True, static_files=True, **app_conf):
    """
    Builds the Commitaudit WSGI stack from the `[app:main]` settings of a
    PasteDeploy ini file

    :param global_conf: the [DEFAULT] section of the ini file
    :param full_stack: wrap the app in error handling and request logging,
        turn off when another middleware handles errors
    :param static_files: serve `public/` through the stack as well
    """
    config = load_environment(global_conf, app_conf)

    app = CommitauditApp(config=config)

    # Routing/Session Middleware
    app = RoutesMiddleware(app, config['routes.map'], singleton=False)
    app = SessionMiddleware(app, config)

    if asbool(full_stack):
        # Handle Python exceptions
        app = ErrorHandler(app, config, debug=config['debug'])
        app = RequestWrapper(app, config)

    if asbool(static_files):
        # Serve static files
        static_app = StaticURLParser(config['commitaudit.paths']['static_files'])
        app = Cascade([static_app, app])
        app = make_gzip_middleware(app, global_conf, compress_level=1)

    app.config = config

    return app
