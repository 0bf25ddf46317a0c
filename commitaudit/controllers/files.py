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
commitaudit.controllers.files
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

serves stored files, like downloaded raw diffs

:created_on: Oct 17, 2026
:license: GPLv3
"""

import logging

from webob.exc import HTTPNotFound

from commitaudit.lib.auth import LoginRequired
from commitaudit.lib.base import BaseController
from commitaudit.model.db import StoredFile

log = logging.getLogger(__name__)


class FilesController(BaseController):

    @LoginRequired()
    def data(self, file_id, name):
        stored = StoredFile.get(int(file_id))
        if stored is None or stored.name != name:
            raise HTTPNotFound()

        response = self.response
        response.content_type = stored.mime_type
        response.content_disposition = 'attachment; filename=%s' % stored.name
        response.body = stored.data
        return response
