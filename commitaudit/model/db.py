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
commitaudit.model.db
~~~~~~~~~~~~~~~~~~~~

Database Models for Commitaudit

:created_on: Oct 17, 2026
:license: GPLv3
"""

import json
import logging
import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, \
    UnicodeText, LargeBinary, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from commitaudit.lib.i18n import lazy_ugettext as _
from commitaudit.model.meta import Base, Session

log = logging.getLogger(__name__)

#==============================================================================
# BASE CLASSES
#==============================================================================


class BaseDbModel(object):
    """
    Base Model for all classes
    """

    @classmethod
    def query(cls):
        return Session().query(cls)

    @classmethod
    def get(cls, id_):
        if id_:
            return Session().get(cls, id_)

    def __repr__(self):
        if hasattr(self, '__unicode__'):
            return self.__unicode__()
        return '<DB:%s>' % (self.__class__.__name__)


#==============================================================================
# USERS AND GROUPS
#==============================================================================

class User(Base, BaseDbModel):
    __tablename__ = 'users'
    __table_args__ = (
        UniqueConstraint('username'),
        Index('u_username_idx', 'username'),
    )

    DEFAULT_USER = 'default'
    IDENTITY_PREFIX = 'user'

    user_id = Column(Integer, nullable=False, unique=True, primary_key=True)
    username = Column(String(255), nullable=False)
    firstname = Column("firstname", String(255), nullable=True, default=None)
    lastname = Column("lastname", String(255), nullable=True, default=None)
    email = Column(String(255), nullable=True, default=None)
    active = Column(Boolean, nullable=False, default=True)
    admin = Column(Boolean, nullable=False, default=False)

    group_member = relationship('UserGroupMember', cascade='all',
                                back_populates='user')

    @property
    def identity(self):
        return '%s:%s' % (self.IDENTITY_PREFIX, self.username)

    @property
    def full_name(self):
        if self.firstname or self.lastname:
            return ('%s %s' % (self.firstname or '', self.lastname or '')).strip()
        return self.username

    @property
    def full_contact(self):
        return '%s <%s>' % (self.full_name, self.email)

    @property
    def is_admin(self):
        return self.admin

    def __unicode__(self):
        return "<%s('id:%s:%s')>" % (self.__class__.__name__,
                                     self.user_id, self.username)

    @classmethod
    def get_by_username(cls, username, case_insensitive=False):
        if case_insensitive:
            q = cls.query().filter(cls.username.ilike(username))
        else:
            q = cls.query().filter(cls.username == username)
        return q.scalar()

    @classmethod
    def get_by_identity(cls, identity):
        prefix, _sep, username = (identity or '').partition(':')
        if prefix != cls.IDENTITY_PREFIX or not username:
            return None
        return cls.get_by_username(username)

    @classmethod
    def get_default_user(cls):
        return cls.get_by_username(User.DEFAULT_USER)


class UserGroup(Base, BaseDbModel):
    __tablename__ = 'users_groups'
    __table_args__ = (
        UniqueConstraint('users_group_name'),
    )

    IDENTITY_PREFIX = 'group'

    users_group_id = Column(Integer, nullable=False, unique=True, primary_key=True)
    users_group_name = Column(String(255), nullable=False)
    users_group_description = Column(UnicodeText, nullable=True)
    users_group_active = Column(Boolean, nullable=False, default=True)

    members = relationship('UserGroupMember', cascade="all, delete-orphan",
                           back_populates='users_group')

    @property
    def identity(self):
        return '%s:%s' % (self.IDENTITY_PREFIX, self.users_group_name)

    def __unicode__(self):
        return "<%s('id:%s:%s')>" % (self.__class__.__name__,
                                     self.users_group_id,
                                     self.users_group_name)

    @classmethod
    def get_by_group_name(cls, group_name):
        return cls.query().filter(cls.users_group_name == group_name).scalar()

    @classmethod
    def get_by_identity(cls, identity):
        prefix, _sep, name = (identity or '').partition(':')
        if prefix != cls.IDENTITY_PREFIX or not name:
            return None
        return cls.get_by_group_name(name)


class UserGroupMember(Base, BaseDbModel):
    __tablename__ = 'users_groups_members'

    users_group_member_id = Column(Integer, nullable=False, unique=True, primary_key=True)
    users_group_id = Column(Integer, ForeignKey('users_groups.users_group_id'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.user_id'), nullable=False)

    user = relationship('User', back_populates='group_member')
    users_group = relationship('UserGroup', back_populates='members')

    def __init__(self, gr_id='', u_id=''):
        self.users_group_id = gr_id
        self.user_id = u_id


#==============================================================================
# REPOSITORIES AND COMMITS
#==============================================================================

class Repository(Base, BaseDbModel):
    __tablename__ = 'repositories'
    __table_args__ = (
        UniqueConstraint('callsign'),
    )

    TYPE_GIT = 'git'
    TYPE_HG = 'hg'
    TYPE_SVN = 'svn'

    repo_id = Column(Integer, nullable=False, unique=True, primary_key=True)
    callsign = Column(String(32), nullable=False)
    repo_name = Column(String(255), nullable=False)
    repo_type = Column(String(16), nullable=False, default=TYPE_GIT)
    description = Column(UnicodeText, nullable=True)

    commits = relationship('Commit', back_populates='repository',
                           cascade='all, delete-orphan')

    def __unicode__(self):
        return "<%s('%s:%s')>" % (self.__class__.__name__, self.repo_id,
                                  self.callsign)

    @property
    def supports_directory_changes(self):
        """
        Subversion records changes on directories, Git and Mercurial only
        track files
        """
        if self.repo_type == self.TYPE_SVN:
            return True
        if self.repo_type in (self.TYPE_GIT, self.TYPE_HG):
            return False
        from commitaudit.lib.exceptions import UnknownRepositoryTypeError
        raise UnknownRepositoryTypeError(self.repo_type)

    @classmethod
    def get_by_callsign(cls, callsign):
        return cls.query().filter(cls.callsign == callsign).scalar()


class CommitParent(Base, BaseDbModel):
    __tablename__ = 'commit_parents'
    __table_args__ = (
        UniqueConstraint('commit_id', 'parent_commit_id'),
    )

    commit_parent_id = Column(Integer, primary_key=True)
    commit_id = Column(Integer, ForeignKey('commits.commit_id'), nullable=False)
    parent_commit_id = Column(Integer, ForeignKey('commits.commit_id'), nullable=False)

    parent = relationship('Commit', foreign_keys=[parent_commit_id])


class CommitMerge(Base, BaseDbModel):
    """
    Commits brought in by a merge commit, in history order
    """
    __tablename__ = 'commit_merges'
    __table_args__ = (
        UniqueConstraint('commit_id', 'merged_commit_id'),
    )

    commit_merge_id = Column(Integer, primary_key=True)
    commit_id = Column(Integer, ForeignKey('commits.commit_id'), nullable=False)
    merged_commit_id = Column(Integer, ForeignKey('commits.commit_id'), nullable=False)
    merge_order = Column(Integer, nullable=False, default=0)

    merged_commit = relationship('Commit', foreign_keys=[merged_commit_id])


class Commit(Base, BaseDbModel):
    __tablename__ = 'commits'
    __table_args__ = (
        UniqueConstraint('repo_id', 'identifier'),
        Index('c_identifier_idx', 'identifier'),
    )

    STATUS_NONE = 'none'
    STATUS_NEEDS_AUDIT = 'needs_audit'
    STATUS_CONCERN_RAISED = 'concern_raised'
    STATUS_PARTIALLY_AUDITED = 'partially_audited'
    STATUS_AUDITED = 'audited'
    STATUS_CLOSED = 'closed'

    STATUSES = [
        (STATUS_NONE, _("None")),
        (STATUS_NEEDS_AUDIT, _("Audit Required")),
        (STATUS_CONCERN_RAISED, _("Concern Raised")),
        (STATUS_PARTIALLY_AUDITED, _("Partially Audited")),
        (STATUS_AUDITED, _("Audited")),
        (STATUS_CLOSED, _("Closed")),
    ]
    DEFAULT = STATUS_NONE

    commit_id = Column(Integer, nullable=False, unique=True, primary_key=True)
    repo_id = Column(Integer, ForeignKey('repositories.repo_id'), nullable=False)
    identifier = Column(String(40), nullable=False)
    author_id = Column(Integer, ForeignKey('users.user_id'), nullable=True)
    audit_status = Column(String(32), nullable=False, default=DEFAULT)
    committed_on = Column(DateTime(timezone=False), nullable=False,
                          default=datetime.datetime.now)

    repository = relationship('Repository', back_populates='commits')
    author = relationship('User')
    data = relationship('CommitData', uselist=False, back_populates='commit',
                        cascade='all, delete-orphan')
    parent_links = relationship('CommitParent', cascade='all, delete-orphan',
                                foreign_keys=[CommitParent.commit_id],
                                order_by=CommitParent.commit_parent_id)
    merge_links = relationship('CommitMerge', cascade='all, delete-orphan',
                               foreign_keys=[CommitMerge.commit_id],
                               order_by=CommitMerge.merge_order)
    path_changes = relationship('PathChange', cascade='all, delete-orphan',
                                back_populates='commit',
                                order_by='PathChange.path')
    audit_requests = relationship('AuditRequest', cascade='all, delete-orphan',
                                  back_populates='commit',
                                  order_by='AuditRequest.audit_request_id')

    def __unicode__(self):
        return "<%s('%s:%s')>" % (self.__class__.__name__, self.commit_id,
                                  self.full_name)

    @property
    def full_name(self):
        """
        Canonical short name of a commit, `r<CALLSIGN><identifier>`
        """
        return 'r%s%s' % (self.repository.callsign, self.identifier)

    @property
    def author_identity(self):
        if self.author is None:
            return None
        return self.author.identity

    @property
    def parents(self):
        return [link.parent for link in self.parent_links]

    @property
    def is_parsed(self):
        return self.data is not None

    @classmethod
    def get_status_lbl(cls, value):
        return dict(cls.STATUSES).get(value)

    @classmethod
    def get_by_identifier(cls, repo, identifier):
        return cls.query()\
            .filter(cls.repository == repo)\
            .filter(cls.identifier == identifier).scalar()


class CommitData(Base, BaseDbModel):
    """
    Imported data of a commit; a commit without this row was never parsed
    """
    __tablename__ = 'commit_data'
    __table_args__ = (
        UniqueConstraint('commit_id'),
    )

    DETAIL_FOREIGN_SVN_STUB = 'foreign-svn-stub'
    DETAIL_SVN_SUBPATH = 'svn-subpath'
    DETAIL_REVIEWER_NAME = 'reviewerName'
    DETAIL_REVIEWER_ID = 'reviewerID'

    commit_data_id = Column(Integer, primary_key=True)
    commit_id = Column(Integer, ForeignKey('commits.commit_id'), nullable=False)
    author_name = Column(String(255), nullable=False, default='')
    message = Column(UnicodeText, nullable=False, default='')
    _details = Column('details', UnicodeText, nullable=True)
    raw_diff = Column(UnicodeText, nullable=True)

    commit = relationship('Commit', back_populates='data')

    @property
    def details(self):
        if not self._details:
            return {}
        return json.loads(self._details)

    @details.setter
    def details(self, val):
        self._details = json.dumps(val or {})

    def get_detail(self, key, default=None):
        return self.details.get(key, default)


class PathChange(Base, BaseDbModel):
    __tablename__ = 'path_changes'

    CHANGE_ADD = 'add'
    CHANGE_CHANGE = 'change'
    CHANGE_DELETE = 'delete'
    CHANGE_MOVE_AWAY = 'move_away'
    CHANGE_COPY_AWAY = 'copy_away'
    CHANGE_MOVE_HERE = 'move_here'
    CHANGE_COPY_HERE = 'copy_here'
    CHANGE_CHILD = 'child'

    CHANGE_TYPES = [
        (CHANGE_ADD, _('Added')),
        (CHANGE_CHANGE, _('Modified')),
        (CHANGE_DELETE, _('Deleted')),
        (CHANGE_MOVE_AWAY, _('Moved Away')),
        (CHANGE_COPY_AWAY, _('Copied Away')),
        (CHANGE_MOVE_HERE, _('Moved Here')),
        (CHANGE_COPY_HERE, _('Copied Here')),
        (CHANGE_CHILD, _('Contents Modified')),
    ]

    FILE_TEXT = 'text'
    FILE_IMAGE = 'image'
    FILE_BINARY = 'binary'
    FILE_DIRECTORY = 'directory'
    FILE_SYMLINK = 'symlink'
    FILE_SUBMODULE = 'submodule'

    path_change_id = Column(Integer, primary_key=True)
    commit_id = Column(Integer, ForeignKey('commits.commit_id'), nullable=False)
    path = Column(UnicodeText, nullable=False)
    change_type = Column(String(16), nullable=False, default=CHANGE_CHANGE)
    file_type = Column(String(16), nullable=False, default=FILE_TEXT)
    target_path = Column(UnicodeText, nullable=True)

    commit = relationship('Commit', back_populates='path_changes')

    @property
    def is_directory(self):
        return self.file_type == self.FILE_DIRECTORY

    @property
    def change_lbl(self):
        return dict(self.CHANGE_TYPES).get(self.change_type, self.change_type)


class BadCommit(Base, BaseDbModel):
    """
    Commits the importer could not process, keyed by full commit name
    """
    __tablename__ = 'bad_commits'

    full_commit_name = Column(String(255), primary_key=True)
    description = Column(UnicodeText, nullable=False, default='')

    @classmethod
    def get_by_name(cls, full_commit_name):
        return cls.query()\
            .filter(cls.full_commit_name == full_commit_name).scalar()


#==============================================================================
# AUDITS
#==============================================================================

class AuditRequest(Base, BaseDbModel):
    __tablename__ = 'audit_requests'
    __table_args__ = (
        UniqueConstraint('commit_id', 'auditor'),
        Index('ar_auditor_idx', 'auditor'),
    )

    STATUS_NONE = 'none'
    STATUS_AUDIT_NOT_REQUIRED = 'audit_not_required'
    STATUS_AUDIT_REQUIRED = 'audit_required'
    STATUS_CONCERNED = 'concerned'
    STATUS_ACCEPTED = 'accepted'
    STATUS_AUDIT_REQUESTED = 'requested'
    STATUS_RESIGNED = 'resigned'
    STATUS_CLOSED = 'closed'
    STATUS_CC = 'cc'

    STATUSES = [
        (STATUS_NONE, _("Not Applicable")),
        (STATUS_AUDIT_NOT_REQUIRED, _("Audit Not Required")),
        (STATUS_AUDIT_REQUIRED, _("Audit Required")),
        (STATUS_CONCERNED, _("Concern Raised")),
        (STATUS_ACCEPTED, _("Accepted")),
        (STATUS_AUDIT_REQUESTED, _("Audit Requested")),
        (STATUS_RESIGNED, _("Resigned")),
        (STATUS_CLOSED, _("Closed")),
        (STATUS_CC, _("Was CC'd")),
    ]

    audit_request_id = Column(Integer, primary_key=True)
    commit_id = Column(Integer, ForeignKey('commits.commit_id'), nullable=False)
    # identity string of a user or a group, see User.identity
    auditor = Column(String(255), nullable=False)
    audit_status = Column(String(32), nullable=False, default=STATUS_AUDIT_REQUIRED)
    audit_reason = Column(UnicodeText, nullable=True)

    commit = relationship('Commit', back_populates='audit_requests')

    def __unicode__(self):
        return "<%s('%s:%s:%s')>" % (self.__class__.__name__,
                                     self.commit_id, self.auditor,
                                     self.audit_status)

    @property
    def status_lbl(self):
        return self.get_status_lbl(self.audit_status)

    @classmethod
    def get_status_lbl(cls, value):
        return dict(cls.STATUSES).get(value)


class AuditComment(Base, BaseDbModel):
    __tablename__ = 'audit_comments'

    ACTION_COMMENT = 'comment'
    ACTION_ADD_AUDITORS = 'add_auditors'
    ACTION_ADD_CCS = 'add_ccs'
    ACTION_ACCEPT = 'accept'
    ACTION_CONCERN = 'concern'
    ACTION_RESIGN = 'resign'
    ACTION_CLOSE = 'close'

    # catalog order is the order actions are offered in
    ACTIONS = [
        (ACTION_COMMENT, _("Comment")),
        (ACTION_ADD_AUDITORS, _("Add Auditors")),
        (ACTION_ADD_CCS, _("Add CCs")),
        (ACTION_ACCEPT, _("Accept Commit")),
        (ACTION_CONCERN, _("Raise Concern")),
        (ACTION_RESIGN, _("Resign from Audit")),
        (ACTION_CLOSE, _("Close Audit")),
    ]

    comment_id = Column(Integer, primary_key=True)
    commit_id = Column(Integer, ForeignKey('commits.commit_id'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.user_id'), nullable=False)
    action = Column(String(32), nullable=False, default=ACTION_COMMENT)
    content = Column(UnicodeText, nullable=False, default='')
    _metadata = Column('comment_metadata', UnicodeText, nullable=True)
    created_on = Column(DateTime(timezone=False), nullable=False,
                        default=datetime.datetime.now)

    author = relationship('User')
    commit = relationship('Commit')
    inline_comments = relationship('AuditInlineComment',
                                   back_populates='audit_comment')

    @property
    def comment_metadata(self):
        if not self._metadata:
            return {}
        return json.loads(self._metadata)

    @comment_metadata.setter
    def comment_metadata(self, val):
        self._metadata = json.dumps(val or {})

    @property
    def action_lbl(self):
        return self.get_action_lbl(self.action)

    @classmethod
    def get_action_lbl(cls, value):
        return dict(cls.ACTIONS).get(value)


class AuditInlineComment(Base, BaseDbModel):
    """
    Comment on a line of a changed path; drafts have no audit_comment_id
    until they are published with an audit comment
    """
    __tablename__ = 'audit_inline_comments'

    inline_comment_id = Column(Integer, primary_key=True)
    commit_id = Column(Integer, ForeignKey('commits.commit_id'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.user_id'), nullable=False)
    audit_comment_id = Column(Integer, ForeignKey('audit_comments.comment_id'), nullable=True)
    f_path = Column(UnicodeText, nullable=False)
    line_no = Column(Integer, nullable=False)
    content = Column(UnicodeText, nullable=False, default='')
    created_on = Column(DateTime(timezone=False), nullable=False,
                        default=datetime.datetime.now)

    author = relationship('User')
    audit_comment = relationship('AuditComment', back_populates='inline_comments')


class Draft(Base, BaseDbModel):
    __tablename__ = 'drafts'
    __table_args__ = (
        UniqueConstraint('user_id', 'draft_key'),
    )

    draft_id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.user_id'), nullable=False)
    draft_key = Column(String(64), nullable=False)
    draft = Column(UnicodeText, nullable=False, default='')

    @classmethod
    def get_for_user(cls, user_id, draft_key):
        return cls.query()\
            .filter(cls.user_id == user_id)\
            .filter(cls.draft_key == draft_key).scalar()


class Flag(Base, BaseDbModel):
    __tablename__ = 'flags'
    __table_args__ = (
        UniqueConstraint('user_id', 'commit_id'),
    )

    COLOR_RED = 0
    COLOR_ORANGE = 1
    COLOR_YELLOW = 2
    COLOR_GREEN = 3
    COLOR_BLUE = 4
    COLOR_PINK = 5
    COLOR_PURPLE = 6
    COLOR_CHECKERED = 7

    COLORS = [
        (COLOR_RED, _('Red')),
        (COLOR_ORANGE, _('Orange')),
        (COLOR_YELLOW, _('Yellow')),
        (COLOR_GREEN, _('Green')),
        (COLOR_BLUE, _('Blue')),
        (COLOR_PINK, _('Pink')),
        (COLOR_PURPLE, _('Purple')),
        (COLOR_CHECKERED, _('Checkered')),
    ]

    flag_id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.user_id'), nullable=False)
    commit_id = Column(Integer, ForeignKey('commits.commit_id'), nullable=False)
    color = Column(Integer, nullable=False, default=COLOR_BLUE)
    note = Column(UnicodeText, nullable=True)

    @property
    def color_name(self):
        return dict(self.COLORS).get(self.color, _('Unknown'))

    @classmethod
    def get_for_user(cls, user_id, commit_id):
        return cls.query()\
            .filter(cls.user_id == user_id)\
            .filter(cls.commit_id == commit_id).scalar()


#==============================================================================
# FILES
#==============================================================================

class StoredFile(Base, BaseDbModel):
    __tablename__ = 'stored_files'
    __table_args__ = (
        Index('sf_content_hash_idx', 'content_hash'),
    )

    file_id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    content_hash = Column(String(40), nullable=False)
    mime_type = Column(String(255), nullable=False, default='text/plain')
    data = Column(LargeBinary, nullable=False)
    created_on = Column(DateTime(timezone=False), nullable=False,
                        default=datetime.datetime.now)

    @property
    def best_uri(self):
        return '/file/data/%s/%s' % (self.file_id, self.name)

    @classmethod
    def get_by_content_hash(cls, content_hash):
        return cls.query()\
            .filter(cls.content_hash == content_hash)\
            .order_by(cls.file_id).first()
