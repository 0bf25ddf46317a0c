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
Routes configuration

The more specific and detailed routes should be defined first so they
may take precedent over the more generic routes. For more information
refer to the routes manual at http://routes.groovie.org/docs/
"""

from routes import Mapper


def make_map(config):
    """Create, configure and return the routes Mapper"""
    rmap = Mapper(directory=config['commitaudit.paths']['controllers'],
                  always_scan=False)
    rmap.minimization = False
    rmap.explicit = False

    rmap.connect('commit_home', '/diffusion/{callsign}/commit/{commit}',
                 controller='commit', action='index',
                 requirements=dict(callsign='[A-Z]+', commit='[a-z0-9]+'),
                 conditions=dict(method=['GET', 'HEAD']))

    rmap.connect('audit_addcomment', '/audit/addcomment/',
                 controller='audit', action='addcomment',
                 conditions=dict(method=['POST']))

    rmap.connect('audit_preview', '/audit/preview/{commit_id}/',
                 controller='audit', action='preview',
                 requirements=dict(commit_id='[0-9]+'),
                 conditions=dict(method=['POST']))

    rmap.connect('file_data', '/file/data/{file_id}/{name}',
                 controller='files', action='data',
                 requirements=dict(file_id='[0-9]+'),
                 conditions=dict(method=['GET', 'HEAD']))

    return rmap
