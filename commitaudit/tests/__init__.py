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
Commitaudit test package

The application is loaded from test.ini by conftest.py before any test
module is collected; the database lives in memory and is emptied before
every test by BaseTestCase.setUp.

py.test -x - fail on first error
py.test commitaudit/tests/functional/test_commit.py -k test_index
py.test --pdb
"""
import os
import re
import time
import logging

from routes.util import URLGenerator
from webtest import TestApp
from webhelpers2.html import escape

import unittest

log = logging.getLogger(__name__)

os.environ['TZ'] = 'UTC'
time.tzset()

__all__ = [
    'url', 'TestController', 'BaseTestCase', 'init_stack',
    'TEST_USER_ADMIN_LOGIN', 'TEST_USER_ADMIN_EMAIL',
    'TEST_USER_REGULAR_LOGIN', 'TEST_USER_REGULAR_EMAIL',
    'TEST_USER_REGULAR2_LOGIN', 'TEST_USER_REGULAR2_EMAIL',
    'TEST_USER_GROUP', 'GIT_REPO', 'HG_REPO', 'SVN_REPO',
]

# set by conftest.pytest_configure
wsgiapp = None

environ = {}

#SOME GLOBALS FOR TESTS

TEST_USER_ADMIN_LOGIN = 'test_admin'
TEST_USER_ADMIN_EMAIL = 'test_admin@mail.com'

TEST_USER_REGULAR_LOGIN = 'test_regular'
TEST_USER_REGULAR_EMAIL = 'test_regular@mail.com'

TEST_USER_REGULAR2_LOGIN = 'test_regular2'
TEST_USER_REGULAR2_EMAIL = 'test_regular2@mail.com'

TEST_USER_GROUP = 'test_auditors'

## repository callsigns
GIT_REPO = 'GIT'
HG_REPO = 'HG'
SVN_REPO = 'SVN'

_url_generator = None


def init_stack(config=None):
    global _url_generator
    if not config:
        config = wsgiapp.config
    _url_generator = URLGenerator(config['routes.map'], environ)


def url(*args, **kwargs):
    return _url_generator(*args, **kwargs)


class BaseTestCase(unittest.TestCase):
    def __init__(self, *args, **kwargs):
        self.wsgiapp = wsgiapp
        init_stack(self.wsgiapp.config)
        unittest.TestCase.__init__(self, *args, **kwargs)

    def setUp(self):
        from commitaudit.tests.fixture import Fixture
        Fixture().create_test_env()


class TestController(BaseTestCase):

    def __init__(self, *args, **kwargs):
        BaseTestCase.__init__(self, *args, **kwargs)
        self.app = TestApp(self.wsgiapp)
        self.maxDiff = None

    def log_user(self, username=TEST_USER_ADMIN_LOGIN):
        """
        Authenticates following requests as `username` the way a web server
        doing container authentication would
        """
        self._logged_username = username
        self.app.extra_environ = {'REMOTE_USER': username}

    def log_out(self):
        self._logged_username = None
        self.app.extra_environ = {}

    def get_token(self, form):
        """
        Returns the CSRF token rendered in `form`
        """
        return form['_authentication_token'].value

    def checkSessionFlash(self, response, msg):
        """
        Follows the redirect in `response` and checks `msg` got flashed
        """
        msg = str(escape(msg))
        self.assertEqual(response.status_int, 302)
        response = response.follow()
        flashed = re.findall(r'<div class="alert alert-\w+">(.*?)</div>',
                             response.text, re.DOTALL)
        self.assertTrue(any(msg in m for m in flashed),
                        'msg `%s` not found in flash messages %s'
                        % (msg, flashed))
        return response
