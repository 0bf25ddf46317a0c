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
Set of generic validators
"""
import re
import logging

import formencode
from formencode.validators import (
    UnicodeString, OneOf, Int, Number, Regex, Email, Bool, StringBoolean, Set,
    NotEmpty, String, FancyValidator
)

from commitaudit.lib.i18n import _
from commitaudit.model.db import AuditComment, Commit, User, UserGroup

# silence warnings and pylint
UnicodeString, OneOf, Int, Number, Regex, Email, Bool, StringBoolean, Set, \
    NotEmpty, String, FancyValidator

log = logging.getLogger(__name__)


class StateObj(object):
    """
    this is needed to translate the messages using _() in validators
    """
    _ = staticmethod(_)


def M(self, key, state=None, **kwargs):
    """
    returns string from self.message based on given key,
    passed kw params are used to substitute %(named)s params inside
    translated strings

    :param msg:
    :param state:
    """
    if state is None:
        state = StateObj()
    else:
        state._ = staticmethod(_)
    #inject validator into state object
    return self.message(key, state, **kwargs)


def _split_unique(value):
    if isinstance(value, (list, tuple)):
        value = ','.join(value)
    value = [x for x in re.split(r'[\s,]+', value or '') if x]
    seen = set()
    return [c for c in value if not (c in seen or seen.add(c))]


def ValidIdentities():
    class _validator(formencode.validators.FancyValidator):
        """
        Splits a list of usernames or `user:`/`group:` identities and
        resolves them to identities of existing users and groups
        """
        messages = {
            'invalid_identity': _('"%(identity)s" is not a known user or group'),
        }

        def _convert_to_python(self, value, state):
            identities = []
            for item in _split_unique(value):
                if ':' not in item:
                    item = '%s:%s' % (User.IDENTITY_PREFIX, item)
                if item not in identities:
                    identities.append(item)
            return identities

        def _validate_python(self, value, state):
            for identity in value:
                if User.get_by_identity(identity) is not None:
                    continue
                if UserGroup.get_by_identity(identity) is not None:
                    continue
                msg = M(self, 'invalid_identity', state, identity=identity)
                raise formencode.Invalid(msg, value, state)

        def empty_value(self, value):
            return []

    return _validator


def ValidCommit():
    class _validator(formencode.validators.FancyValidator):
        messages = {
            'integer': _('Please enter an integer value'),
            'invalid_commit': _('Commit %(commit)s does not exist'),
        }

        def _convert_to_python(self, value, state):
            try:
                return int(value)
            except (TypeError, ValueError):
                raise formencode.Invalid(M(self, 'integer', state),
                                         value, state)

        def _validate_python(self, value, state):
            if Commit.get(value) is None:
                msg = M(self, 'invalid_commit', state, commit=value)
                raise formencode.Invalid(msg, value, state)

    return _validator


def ValidAuditAction():
    class _validator(formencode.validators.OneOf):
        messages = {
            'invalid': _('Invalid audit action'),
            'notIn': _('Invalid audit action'),
        }
    return _validator([action for action, _lbl in AuditComment.ACTIONS])


def ValidActionArguments():
    class _validator(formencode.validators.FancyValidator):
        """
        Adding auditors or CCs needs someone to add
        """
        messages = {
            'no_auditors': _('Add at least one auditor'),
            'no_ccs': _('Add at least one CC'),
        }

        def _validate_python(self, value, state):
            action = value.get('action')
            if action == AuditComment.ACTION_ADD_AUDITORS and not value.get('auditors'):
                msg = M(self, 'no_auditors', state)
                raise formencode.Invalid(msg, value, state,
                    error_dict=dict(auditors=msg)
                )
            if action == AuditComment.ACTION_ADD_CCS and not value.get('ccs'):
                msg = M(self, 'no_ccs', state)
                raise formencode.Invalid(msg, value, state,
                    error_dict=dict(ccs=msg)
                )

    return _validator
