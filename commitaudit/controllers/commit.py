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
commitaudit.controllers.commit
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

commit controller showing a single commit with its audit state

:created_on: Oct 17, 2026
:license: GPLv3
"""

import logging

from paste.deploy.converters import asbool
from webob.exc import HTTPNotFound

from commitaudit.lib.i18n import _
import commitaudit.lib.helpers as h
from commitaudit.lib.auth import LoginRequired
from commitaudit.lib.base import BaseController, redirect
from commitaudit.lib.exceptions import CommitNotParsedError
from commitaudit.model.audit import AuditModel, audit_action_options
from commitaudit.model.comment import AuditCommentsModel
from commitaudit.model.commit import CommitModel
from commitaudit.model.db import Commit, CommitData, Repository
from commitaudit.model.meta import Session

log = logging.getLogger(__name__)

USERS_TYPEAHEAD = '/typeahead/common/users/'
MAILABLE_TYPEAHEAD = '/typeahead/common/mailable/'
FORMATTING_REFERENCE = 'https://daringfireball.net/projects/markdown/syntax'


class CommitController(BaseController):

    CHANGES_LIMIT = 100
    MERGES_LIMIT = 50

    def __before__(self):
        super(CommitController, self).__before__()
        self.commit_model = CommitModel()
        self.audit_model = AuditModel()
        self.comments_model = AuditCommentsModel()

    def _get_commit_or_error(self, callsign, commit):
        repo = Repository.get_by_callsign(callsign)
        if repo is None:
            raise HTTPNotFound()
        db_commit = self.commit_model.get_commit(repo, commit)
        if db_commit is None or not db_commit.is_parsed:
            log.debug('commit r%s%s has not been parsed', callsign, commit)
            raise CommitNotParsedError()
        return repo, db_commit

    def _raw_diff(self, db_commit):
        stored = self.commit_model.get_raw_diff_file(db_commit)
        Session().commit()
        return redirect(stored.best_uri)

    def _headsup_actions(self, db_commit):
        actions = []
        flag = self.commit_model.get_flag(db_commit, self.authuser.user_id)
        if flag is not None:
            actions.append(dict(
                name=_('Remove %s Flag') % flag.color_name,
                href='/flag/delete/%s/' % flag.flag_id,
                css='flag-delete', workflow=True))
        else:
            actions.append(dict(
                name=_('Flag Commit'),
                href='/flag/edit/%s/' % db_commit.commit_id,
                css='flag-add', workflow=True))

        if self.authuser.is_admin:
            actions.append(dict(
                name=_('MetaMTA Transcripts'),
                href='/mail/?phid=%s' % db_commit.commit_id,
                css='transcript', workflow=False))

        actions.append(dict(
            name=_('Herald Transcripts'),
            href='/herald/transcript/?phid=%s' % db_commit.commit_id,
            css='transcript', workflow=False))

        actions.append(dict(
            name=_('Download Raw Diff'),
            href=h.url_with_params(self.request.path_qs, diff=1),
            css='diff', workflow=False))
        return actions

    def _properties(self, db_commit):
        """
        Returns ordered (label, value) pairs of commit properties, pairs
        without a value are left out
        """
        props = []
        if db_commit.audit_status != Commit.STATUS_NONE:
            props.append((_('Status'),
                          Commit.get_status_lbl(db_commit.audit_status)))

        props.append((_('Committed'), h.fmt_date(db_commit.committed_on)))

        if db_commit.author is not None:
            props.append((_('Author'), h.user_link(db_commit.author)))
        else:
            props.append((_('Author'), db_commit.data.author_name))

        reviewer, reviewer_name = self.commit_model.get_reviewer(db_commit)
        if reviewer is not None:
            props.append((_('Reviewer'), h.user_link(reviewer)))
        else:
            props.append((_('Reviewer'), reviewer_name))

        parents = db_commit.parents
        if parents:
            props.append((_('Parents'), h.literal(' &middot; ').join(
                h.commit_link(parent) for parent in parents)))

        return [(label, value) for label, value in props if value]

    def _changes(self, repo, db_commit):
        c = self.c
        changes = self.commit_model.get_path_changes(db_commit)
        c.changes_total = len(changes)
        show_all = self.request.GET.get('show_all') == 'true'
        if not show_all and c.changes_total > self.CHANGES_LIMIT:
            changes = changes[:self.CHANGES_LIMIT]
        c.changes = changes
        c.changes_truncated = len(changes) != c.changes_total
        c.show_all_url = '?show_all=true'

        c.bad_commit = None
        if not changes:
            c.bad_commit = self.commit_model.get_bad_commit(db_commit)
            return

        keep_directories = repo.supports_directory_changes
        c.changesets = []
        for change in changes:
            if change.is_directory and not keep_directories:
                continue
            ref = '%s;%s' % (change.path, db_commit.identifier)
            c.changesets.append((change, ref))
        c.render_uri = '/diffusion/%s/diff/' % repo.callsign

    def _add_comment_form(self, db_commit, audit_requests, authority):
        c = self.c
        c.serious_business = asbool(self.config.get('serious_business', True))
        actions = self.audit_model.get_available_actions(
            db_commit, self.authuser.user_id,
            audit_requests=audit_requests, authority=authority)
        c.action_options = audit_action_options(actions)
        c.draft = self.comments_model.get_draft(db_commit,
                                                self.authuser.user_id) or ''
        c.formatting_reference = FORMATTING_REFERENCE

        ondemand = asbool(self.config.get('tokenizer.ondemand', False))
        c.behaviors = [
            ('differential-keyboard-navigation', {'haunt': None}),
            ('differential-add-reviewers-and-ccs', {
                'dynamic': {
                    'add-auditors-tokenizer': {
                        'actions': {'add_auditors': 1},
                        'src': USERS_TYPEAHEAD,
                        'row': 'add-auditors',
                        'ondemand': ondemand,
                        'placeholder': _('Type a user name...'),
                    },
                    'add-ccs-tokenizer': {
                        'actions': {'add_ccs': 1},
                        'src': MAILABLE_TYPEAHEAD,
                        'row': 'add-ccs',
                        'ondemand': ondemand,
                        'placeholder': _('Type a user or mailing list...'),
                    },
                },
                'select': 'audit-action',
            }),
            ('differential-feedback-preview', {
                'uri': self.url('audit_preview', commit_id=db_commit.commit_id),
                'preview': 'audit-preview',
                'content': 'audit-content',
                'action': 'audit-action',
                'previewTokenizers': {
                    'auditors': 'add-auditors-tokenizer',
                    'ccs': 'add-ccs-tokenizer',
                },
            }),
        ]

    @LoginRequired()
    def index(self, callsign, commit):
        c = self.c
        repo, db_commit = self._get_commit_or_error(callsign, commit)

        if asbool(self.request.GET.get('diff', False)):
            return self._raw_diff(db_commit)

        c.db_repo = repo
        c.commit = db_commit
        c.commit_data = db_commit.data
        c.is_foreign = bool(
            db_commit.data.get_detail(CommitData.DETAIL_FOREIGN_SVN_STUB))
        if c.is_foreign:
            c.svn_subpath = db_commit.data.get_detail(
                CommitData.DETAIL_SVN_SUBPATH, '')
        else:
            c.headsup_actions = self._headsup_actions(db_commit)
            c.properties = self._properties(db_commit)
            c.message = h.render_markup(db_commit.data.message)

        audit_requests = self.audit_model.get_requests(db_commit)
        authority = self.audit_model.get_authority_identities(
            self.authuser.user_id)
        c.audit_requests = audit_requests
        c.auditor_names = self.audit_model.get_auditor_names(audit_requests)
        c.authority = authority

        c.comments = self.comments_model.get_comments(db_commit)
        c.inline_comments = self.comments_model.get_inline_comments(db_commit)

        merges = self.commit_model.get_merged_commits(
            db_commit, limit=self.MERGES_LIMIT + 1)
        c.merges_truncated = len(merges) > self.MERGES_LIMIT
        c.merges = merges[:self.MERGES_LIMIT]
        c.merges_limit = self.MERGES_LIMIT

        self._changes(repo, db_commit)
        c.changes_limit = self.CHANGES_LIMIT

        c.show_add_comment = not self.authuser.is_default
        if c.show_add_comment:
            self._add_comment_form(db_commit, audit_requests, authority)

        c.title = db_commit.full_name
        return self.render('commit/commit.html')
