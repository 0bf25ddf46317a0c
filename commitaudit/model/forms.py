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
this is forms validation classes
http://formencode.org/module-formencode.validators.html
for list off all availible validators

<name> = formencode.validators.<name of validator>
<name> must equal form name
"""
import logging

import formencode

from commitaudit.model import validators as v

log = logging.getLogger(__name__)


def AuditCommentForm():
    class _AuditCommentForm(formencode.Schema):
        allow_extra_fields = True
        filter_extra_fields = True

        commit = v.ValidCommit()(not_empty=True)
        action = v.ValidAuditAction()
        content = v.UnicodeString(strip=True, if_missing='')
        auditors = v.ValidIdentities()(if_missing=[])
        ccs = v.ValidIdentities()(if_missing=[])

        chained_validators = [v.ValidActionArguments()]
    return _AuditCommentForm
