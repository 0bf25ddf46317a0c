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
commitaudit.model.commit
~~~~~~~~~~~~~~~~~~~~~~~~

commit model for Commitaudit, access to imported commit data

:created_on: Oct 17, 2026
:license: GPLv3
"""

import hashlib
import logging

from commitaudit.model import BaseModel
from commitaudit.model.db import Commit, CommitData, CommitMerge, \
    CommitParent, PathChange, BadCommit, Flag, StoredFile

log = logging.getLogger(__name__)


class CommitModel(BaseModel):

    cls = Commit

    def get_commit(self, repo, identifier):
        repo = self._get_repo(repo)
        if repo is None:
            return None
        return Commit.get_by_identifier(repo, identifier)

    def create(self, repo, identifier, author=None, audit_status=None,
               committed_on=None, author_name=None, message=None,
               details=None, raw_diff=None, parsed=True):
        """
        Records a commit; `parsed=False` leaves out the commit data the
        same way a commit that was discovered but not yet imported looks
        """
        repo = self._get_repo(repo)
        commit = Commit()
        commit.repository = repo
        commit.identifier = identifier
        commit.author = self._get_user(author) if author else None
        commit.audit_status = audit_status or Commit.DEFAULT
        if committed_on is not None:
            commit.committed_on = committed_on
        if parsed:
            data = CommitData()
            data.author_name = author_name or (
                commit.author.full_contact if commit.author else '')
            data.message = message or ''
            data.details = details or {}
            data.raw_diff = raw_diff
            commit.data = data
        self.sa.add(commit)
        return commit

    def add_parent(self, commit, parent):
        link = CommitParent()
        link.commit_id = self._get_commit(commit).commit_id
        link.parent_commit_id = self._get_commit(parent).commit_id
        self.sa.add(link)
        return link

    def add_merged_commit(self, commit, merged, merge_order=0):
        link = CommitMerge()
        link.commit_id = self._get_commit(commit).commit_id
        link.merged_commit_id = self._get_commit(merged).commit_id
        link.merge_order = merge_order
        self.sa.add(link)
        return link

    def add_path_change(self, commit, path, change_type=PathChange.CHANGE_CHANGE,
                        file_type=PathChange.FILE_TEXT, target_path=None):
        change = PathChange()
        change.commit_id = self._get_commit(commit).commit_id
        change.path = path
        change.change_type = change_type
        change.file_type = file_type
        change.target_path = target_path
        self.sa.add(change)
        return change

    def get_path_changes(self, commit):
        commit = self._get_commit(commit)
        return PathChange.query()\
            .filter(PathChange.commit_id == commit.commit_id)\
            .order_by(PathChange.path, PathChange.path_change_id)\
            .all()

    def get_merged_commits(self, commit, limit=None):
        """
        Returns commits merged by `commit`, at most `limit` of them

        :param commit:
        :param limit: maximum number of commits to return
        """
        commit = self._get_commit(commit)
        q = CommitMerge.query()\
            .filter(CommitMerge.commit_id == commit.commit_id)\
            .order_by(CommitMerge.merge_order, CommitMerge.commit_merge_id)
        if limit is not None:
            q = q.limit(limit)
        return [link.merged_commit for link in q.all()]

    def get_bad_commit(self, commit):
        commit = self._get_commit(commit)
        return BadCommit.get_by_name(commit.full_name)

    def get_flag(self, commit, user):
        commit = self._get_commit(commit)
        user = self._get_user(user)
        if user is None:
            return None
        return Flag.get_for_user(user.user_id, commit.commit_id)

    def get_reviewer(self, commit):
        """
        Returns (user, name) of the reviewer recorded in the commit message,
        user is None when the reviewer is not a known user
        """
        commit = self._get_commit(commit)
        if commit.data is None:
            return None, None
        name = commit.data.get_detail(CommitData.DETAIL_REVIEWER_NAME)
        reviewer_id = commit.data.get_detail(CommitData.DETAIL_REVIEWER_ID)
        user = self._get_user(reviewer_id) if reviewer_id else None
        return user, name

    def get_raw_diff(self, commit):
        commit = self._get_commit(commit)
        if commit.data is None or commit.data.raw_diff is None:
            return ''
        return commit.data.raw_diff

    def get_raw_diff_file(self, commit):
        """
        Returns a stored file holding the raw diff of the commit. Files are
        keyed by content hash, so a diff that was stored before is reused

        :param commit:
        """
        commit = self._get_commit(commit)
        raw_diff = self.get_raw_diff(commit).encode('utf-8')
        content_hash = hashlib.sha1(raw_diff).hexdigest()

        stored = StoredFile.get_by_content_hash(content_hash)
        if stored is None:
            stored = StoredFile()
            stored.name = '%s.diff' % (commit.identifier,)
            stored.content_hash = content_hash
            stored.mime_type = 'text/plain'
            stored.data = raw_diff
            self.sa.add(stored)
            self.sa.flush()
            log.debug('stored raw diff of %s as file %s',
                      commit.full_name, stored.file_id)
        return stored
