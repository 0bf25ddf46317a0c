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
commitaudit.controllers.audit
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

audit comment submission and preview

:created_on: Oct 17, 2026
:license: GPLv3
"""

import logging

import formencode
from webob.exc import HTTPBadRequest, HTTPNotFound

from commitaudit.lib.i18n import _
import commitaudit.lib.helpers as h
from commitaudit.lib.auth import LoginRequired, NotAnonymous
from commitaudit.lib.base import BaseController, redirect
from commitaudit.model.audit import AuditModel
from commitaudit.model.comment import AuditCommentsModel
from commitaudit.model.db import AuditComment, Commit
from commitaudit.model.forms import AuditCommentForm
from commitaudit.model.meta import Session

log = logging.getLogger(__name__)


class AuditController(BaseController):

    def _commit_url(self, db_commit):
        return self.url('commit_home', callsign=db_commit.repository.callsign,
                        commit=db_commit.identifier)

    def _get_posted_commit(self):
        try:
            commit_id = int(self.request.POST.get('commit'))
        except (TypeError, ValueError):
            raise HTTPBadRequest()
        db_commit = Commit.get(commit_id)
        if db_commit is None:
            raise HTTPBadRequest()
        return db_commit

    @LoginRequired()
    @NotAnonymous()
    def addcomment(self):
        _form = AuditCommentForm()()
        try:
            form_result = _form.to_python(dict(self.request.POST))
        except formencode.Invalid as errors:
            log.debug('invalid audit comment: %s', errors)
            db_commit = self._get_posted_commit()
            for msg in (errors.error_dict or {}).values():
                h.flash(self.session, msg, category='error')
            if not errors.error_dict:
                h.flash(self.session, errors.msg, category='error')
            return redirect(self._commit_url(db_commit))

        db_commit = Commit.get(form_result['commit'])
        action = form_result['action']
        available = AuditModel().get_available_actions(
            db_commit, self.authuser.user_id)
        if action not in available:
            log.warning('user %s tried unavailable audit action %s on %s',
                        self.authuser, action, db_commit)
            h.flash(self.session,
                    _('Action "%s" is not available for this commit')
                    % AuditComment.get_action_lbl(action),
                    category='warning')
            return redirect(self._commit_url(db_commit))

        AuditCommentsModel().create(
            commit=db_commit,
            user=self.authuser.user_id,
            action=action,
            content=form_result['content'],
            auditors=form_result['auditors'],
            ccs=form_result['ccs'],
        )
        Session().commit()
        h.flash(self.session, _('Audit comment added'), category='success')
        return redirect(self._commit_url(db_commit))

    @LoginRequired()
    @NotAnonymous()
    def preview(self, commit_id):
        if not (self.request.is_xhr or
                self.request.environ.get('HTTP_X_PARTIAL_XHR')):
            raise HTTPBadRequest()
        db_commit = Commit.get(int(commit_id))
        if db_commit is None:
            raise HTTPNotFound()

        self.c.preview_action = AuditComment.get_action_lbl(
            self.request.POST.get('action', AuditComment.ACTION_COMMENT))
        self.c.preview_content = h.render_markup(
            self.request.POST.get('content', ''))
        self.c.preview_author = self.authuser
        return self.render('audit/preview.html')
