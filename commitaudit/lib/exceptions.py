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
commitaudit.lib.exceptions
~~~~~~~~~~~~~~~~~~~~~~~~~~

Set of custom exceptions used in Commitaudit

:created_on: Oct 17, 2026
:license: GPLv3
"""

from webob.exc import HTTPClientError


class UnknownRepositoryTypeError(Exception):

    def __init__(self, repo_type):
        self.repo_type = repo_type
        super(UnknownRepositoryTypeError, self).__init__(
            'Unknown VCS type %r' % (repo_type,))


class CommitNotParsedError(HTTPClientError):
    """
    A commit that is known but has no imported data yet
    """
    code = 404
    title = 'Not Found'
    explanation = 'This commit has not parsed yet.'
