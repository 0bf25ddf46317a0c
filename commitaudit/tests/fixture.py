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
Helpers for fixture generation
"""
import datetime

from commitaudit.tests import *
from commitaudit.model.audit import AuditModel
from commitaudit.model.comment import AuditCommentsModel
from commitaudit.model.commit import CommitModel
from commitaudit.model.db import AuditRequest, BadCommit, Flag, PathChange, \
    Repository
from commitaudit.model.meta import Base, Session
from commitaudit.model.repo import RepoModel
from commitaudit.model.user import UserModel, UserGroupModel

COMMITTED_ON = datetime.datetime(2026, 3, 14, 15, 9, 26)


class Fixture(object):

    def __init__(self):
        pass

    def create_test_env(self):
        """
        Empties the database and creates the default user and the test
        users every test starts with
        """
        Session.remove()
        for table in reversed(Base.metadata.sorted_tables):
            Session().execute(table.delete())
        user_model = UserModel()
        user_model.create_default_user()
        user_model.create_or_update(TEST_USER_ADMIN_LOGIN,
                                    email=TEST_USER_ADMIN_EMAIL,
                                    firstname='Admin', lastname='Tester',
                                    admin=True)
        user_model.create_or_update(TEST_USER_REGULAR_LOGIN,
                                    email=TEST_USER_REGULAR_EMAIL,
                                    firstname='Regular', lastname='Tester')
        user_model.create_or_update(TEST_USER_REGULAR2_LOGIN,
                                    email=TEST_USER_REGULAR2_EMAIL,
                                    firstname='Second', lastname='Tester')
        Session().commit()

    def create_user_group(self, name, members=(), **kwargs):
        user_group = UserGroupModel().create(name, **kwargs)
        Session().flush()
        for member in members:
            UserGroupModel().add_user_to_group(user_group, member)
        Session().commit()
        return user_group

    def create_repo(self, callsign, repo_type=Repository.TYPE_GIT, **kwargs):
        repo_name = kwargs.pop('repo_name', 'repo-%s' % callsign.lower())
        repo = RepoModel().create(callsign, repo_name, repo_type, **kwargs)
        Session().commit()
        return repo

    def create_commit(self, repo, identifier, **kwargs):
        """
        Creates a commit, keyword arguments go to CommitModel.create
        """
        kwargs.setdefault('committed_on', COMMITTED_ON)
        kwargs.setdefault('message', 'Commit message of %s' % identifier)
        commit = CommitModel().create(repo, identifier, **kwargs)
        Session().commit()
        return commit

    def add_audit(self, commit, auditor, status=AuditRequest.STATUS_AUDIT_REQUIRED):
        audit_request = AuditModel().add_request(commit, auditor, status)
        Session().commit()
        return audit_request

    def add_changes(self, commit, paths, change_type=PathChange.CHANGE_CHANGE,
                    file_type=PathChange.FILE_TEXT):
        commit_model = CommitModel()
        changes = [commit_model.add_path_change(commit, path, change_type,
                                                file_type)
                   for path in paths]
        Session().commit()
        return changes

    def add_merges(self, commit, merged_commits):
        commit_model = CommitModel()
        for order, merged in enumerate(merged_commits):
            commit_model.add_merged_commit(commit, merged, merge_order=order)
        Session().commit()

    def create_bad_commit(self, full_commit_name, description):
        bad = BadCommit()
        bad.full_commit_name = full_commit_name
        bad.description = description
        Session().add(bad)
        Session().commit()
        return bad

    def create_flag(self, commit, user, color=Flag.COLOR_BLUE, note=None):
        flag = Flag()
        flag.commit_id = CommitModel()._get_commit(commit).commit_id
        flag.user_id = UserModel()._get_user(user).user_id
        flag.color = color
        flag.note = note
        Session().add(flag)
        Session().commit()
        return flag

    def save_draft(self, commit, user, text):
        draft = AuditCommentsModel().save_draft(commit, user, text)
        Session().commit()
        return draft
