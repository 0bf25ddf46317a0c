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
commitaudit.model.audit
~~~~~~~~~~~~~~~~~~~~~~~

Audit requests, audit authority and the audit actions offered to a user

:created_on: Oct 17, 2026
:license: GPLv3
"""

import logging

from commitaudit.model import BaseModel
from commitaudit.model.db import AuditRequest, AuditComment, Commit, \
    User, UserGroup, UserGroupMember

log = logging.getLogger(__name__)

ALWAYS_AVAILABLE = frozenset([
    AuditComment.ACTION_COMMENT,
    AuditComment.ACTION_ADD_AUDITORS,
    AuditComment.ACTION_ADD_CCS,
    # accepting your own commit is allowed: an author may raise a concern
    # on their own change and accept it once fixed
    AuditComment.ACTION_ACCEPT,
    AuditComment.ACTION_CONCERN,
])


def _has_authority_on_any(audit_requests, authority):
    for audit_request in audit_requests:
        if audit_request.auditor in authority:
            return True
    return False


def _own_request(audit_requests, user_identity):
    for audit_request in audit_requests:
        if audit_request.auditor == user_identity:
            return audit_request
    return None


def resolve_audit_actions(commit, audit_requests, user_identity, authority):
    """
    Returns the audit actions a user may take on a commit, in catalog
    order. Nonsense actions are left out, like closing a commit without
    an outstanding concern or resigning from a commit you have no
    association with.

    :param commit: object with `author_identity` and `audit_status`
    :param audit_requests: objects with `auditor` and `audit_status`
    :param user_identity: identity of the current user
    :param authority: identities the current user may act for, including
        their own
    """
    user_is_author = (user_identity is not None
                      and commit.author_identity == user_identity)

    actions = set(ALWAYS_AVAILABLE)

    # to resign a user must have authority on some request and not be
    # the author; authority may come through a group while the resigned
    # check only looks at the user's own request
    if not user_is_author:
        may_resign = _has_authority_on_any(audit_requests, authority)

        user_request = _own_request(audit_requests, user_identity)
        if (user_request is not None and
                user_request.audit_status == AuditRequest.STATUS_RESIGNED):
            may_resign = False

        if may_resign:
            actions.add(AuditComment.ACTION_RESIGN)

    concern_raised = commit.audit_status == Commit.STATUS_CONCERN_RAISED
    if user_is_author and concern_raised:
        actions.add(AuditComment.ACTION_CLOSE)

    return [key for key, _lbl in AuditComment.ACTIONS if key in actions]


def audit_action_options(actions):
    """
    Pairs action keys with their labels for a <select>
    """
    return [(action, str(AuditComment.get_action_lbl(action)))
            for action in actions]


class AuditModel(BaseModel):

    cls = AuditRequest

    def get_requests(self, commit):
        commit = self._get_commit(commit)
        return AuditRequest.query()\
            .filter(AuditRequest.commit_id == commit.commit_id)\
            .order_by(AuditRequest.audit_request_id)\
            .all()

    def add_request(self, commit, auditor, status=AuditRequest.STATUS_AUDIT_REQUIRED,
                    reason=None):
        commit = self._get_commit(commit)
        audit_request = AuditRequest()
        audit_request.commit_id = commit.commit_id
        audit_request.auditor = auditor
        audit_request.audit_status = status
        audit_request.audit_reason = reason
        self.sa.add(audit_request)
        return audit_request

    def get_authority_identities(self, user):
        """
        Returns identities the given user may exercise audit authority
        through, their own identity and that of each active group they
        are a member of

        :param user: UserID, username, or User instance
        """
        user = self._get_user(user)
        if user is None:
            return frozenset()

        q = UserGroup.query()\
            .join(UserGroupMember, UserGroupMember.users_group_id ==
                  UserGroup.users_group_id)\
            .filter(UserGroupMember.user_id == user.user_id)\
            .filter(UserGroup.users_group_active == True)
        identities = set([user.identity])
        identities.update(group.identity for group in q.all())
        log.debug('audit authority for %s: %s', user, sorted(identities))
        return frozenset(identities)

    def get_auditor_names(self, audit_requests):
        """
        Maps each auditor identity to a display name, unknown identities
        are shown as they are
        """
        names = {}
        for audit_request in audit_requests:
            identity = audit_request.auditor
            if identity in names:
                continue
            obj = User.get_by_identity(identity)
            if obj is not None:
                names[identity] = obj.full_name
                continue
            obj = UserGroup.get_by_identity(identity)
            if obj is not None:
                names[identity] = obj.users_group_name
                continue
            names[identity] = identity
        return names

    def get_available_actions(self, commit, user, audit_requests=None,
                              authority=None):
        """
        Loads what the resolver needs from the database and returns the
        actions `user` is offered on `commit`
        """
        commit = self._get_commit(commit)
        user = self._get_user(user)
        if audit_requests is None:
            audit_requests = self.get_requests(commit)
        if authority is None:
            authority = self.get_authority_identities(user)
        user_identity = user.identity if user is not None else None
        return resolve_audit_actions(commit, audit_requests, user_identity,
                                     authority)
