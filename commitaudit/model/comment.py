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
commitaudit.model.comment
~~~~~~~~~~~~~~~~~~~~~~~~~

audit comments model for Commitaudit

:created_on: Oct 17, 2026
:license: GPLv3
"""

import logging
from collections import defaultdict

from commitaudit.model import BaseModel
from commitaudit.model.db import AuditComment, AuditInlineComment, Draft
from commitaudit.model.meta import Session

log = logging.getLogger(__name__)


def draft_key(commit):
    return 'diffusion-audit-%s' % (commit.commit_id,)


class AuditCommentsModel(BaseModel):

    cls = AuditComment

    def create(self, commit, user, action, content, auditors=None, ccs=None):
        """
        Creates new audit comment for a commit. Draft inline comments the
        user left on the commit are published with it, and the user's
        draft of the main comment is dropped

        :param commit:
        :param user:
        :param action: one of AuditComment.ACTIONS keys
        :param content:
        :param auditors: identities the user asked to add as auditors
        :param ccs: identities the user asked to CC
        """
        commit = self._get_commit(commit)
        user = self._get_user(user)

        comment = AuditComment()
        comment.commit_id = commit.commit_id
        comment.user_id = user.user_id
        comment.action = action
        comment.content = content or ''
        metadata = {}
        if auditors:
            metadata['auditors'] = list(auditors)
        if ccs:
            metadata['ccs'] = list(ccs)
        comment.comment_metadata = metadata

        Session().add(comment)
        Session().flush()

        drafts = AuditInlineComment.query()\
            .filter(AuditInlineComment.commit_id == commit.commit_id)\
            .filter(AuditInlineComment.user_id == user.user_id)\
            .filter(AuditInlineComment.audit_comment_id == None)\
            .all()
        for inline in drafts:
            inline.audit_comment_id = comment.comment_id
            Session().add(inline)
        if drafts:
            log.debug('published %s inline comments with %s',
                      len(drafts), comment.comment_id)

        self.delete_draft(commit, user)
        return comment

    def get_comments(self, commit):
        """
        Gets audit comments of a commit in creation order

        :param commit:
        """
        commit = self._get_commit(commit)
        return AuditComment.query()\
            .filter(AuditComment.commit_id == commit.commit_id)\
            .order_by(AuditComment.created_on, AuditComment.comment_id)\
            .all()

    def get_inline_comments(self, commit):
        """
        Gets published inline comments grouped by path and line

        :returns: list of (f_path, {line_no: [comments]}) sorted by path
        """
        commit = self._get_commit(commit)
        q = AuditInlineComment.query()\
            .filter(AuditInlineComment.commit_id == commit.commit_id)\
            .filter(AuditInlineComment.audit_comment_id != None)\
            .order_by(AuditInlineComment.inline_comment_id.asc())

        paths = defaultdict(lambda: defaultdict(list))
        for co in q.all():
            paths[co.f_path][co.line_no].append(co)
        return sorted(paths.items())

    def add_inline_draft(self, commit, user, f_path, line_no, content):
        commit = self._get_commit(commit)
        user = self._get_user(user)
        inline = AuditInlineComment()
        inline.commit_id = commit.commit_id
        inline.user_id = user.user_id
        inline.f_path = f_path
        inline.line_no = line_no
        inline.content = content
        Session().add(inline)
        return inline

    def get_draft(self, commit, user):
        commit = self._get_commit(commit)
        user = self._get_user(user)
        if user is None:
            return None
        draft = Draft.get_for_user(user.user_id, draft_key(commit))
        if draft is None:
            return None
        return draft.draft

    def save_draft(self, commit, user, text):
        commit = self._get_commit(commit)
        user = self._get_user(user)
        draft = Draft.get_for_user(user.user_id, draft_key(commit))
        if draft is None:
            draft = Draft()
            draft.user_id = user.user_id
            draft.draft_key = draft_key(commit)
        draft.draft = text
        Session().add(draft)
        return draft

    def delete_draft(self, commit, user):
        draft = Draft.get_for_user(user.user_id, draft_key(commit))
        if draft is not None:
            Session().delete(draft)
        return draft
