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
commitaudit.model.repo
~~~~~~~~~~~~~~~~~~~~~~

Repository model for commitaudit

:created_on: Oct 17, 2026
:license: GPLv3
"""

import logging

from commitaudit.model import BaseModel
from commitaudit.model.db import Repository

log = logging.getLogger(__name__)


class RepoModel(BaseModel):

    cls = Repository

    def get_by_callsign(self, callsign):
        return Repository.get_by_callsign(callsign)

    def create(self, callsign, repo_name, repo_type=Repository.TYPE_GIT,
               description=None):
        if repo_type not in (Repository.TYPE_GIT, Repository.TYPE_HG,
                             Repository.TYPE_SVN):
            log.warning('creating repository %s with unknown type %s',
                        callsign, repo_type)
        repo = Repository()
        repo.callsign = callsign
        repo.repo_name = repo_name
        repo.repo_type = repo_type
        repo.description = description
        self.sa.add(repo)
        return repo
