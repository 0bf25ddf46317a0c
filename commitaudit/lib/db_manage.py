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
commitaudit.lib.db_manage
~~~~~~~~~~~~~~~~~~~~~~~~~

Database creation, and setup module for Commitaudit. Used for creation
of database as well as for the default user.

:created_on: Oct 17, 2026
:license: GPLv3
"""

import sys
import logging

from sqlalchemy.engine import create_engine

from commitaudit import __dbversion__
from commitaudit.model import init_model
from commitaudit.model.meta import Session, Base
from commitaudit.model.user import UserModel

log = logging.getLogger(__name__)


def ask_ok(prompt, retries=4, complaint='[y]es or [n]o please!'):
    while True:
        ok = input(prompt)
        if ok.lower() in ('y', 'ye', 'yes'):
            return True
        if ok.lower() in ('n', 'no', 'nop', 'nope'):
            return False
        retries = retries - 1
        if retries < 0:
            raise IOError
        print(complaint)


class DbManage(object):
    def __init__(self, log_sql, dbconf, tests=False, SESSION=None, cli_args=None):
        self.dbname = dbconf.split('/')[-1]
        self.tests = tests
        self.dburi = dbconf
        self.log_sql = log_sql
        self.cli_args = cli_args or {}
        self.init_db(SESSION=SESSION)

    def init_db(self, SESSION=None):
        if SESSION:
            self.sa = SESSION
        else:
            #init new sessions
            engine = create_engine(self.dburi, echo=self.log_sql)
            init_model(engine)
            self.sa = Session()

    def create_tables(self, override=False):
        """
        Create the database tables, dropping existing ones first
        """
        log.info("Any existing database is going to be destroyed")
        if self.tests or self.cli_args.get('force_ask'):
            destroy = True
        else:
            destroy = ask_ok('Are you sure to destroy old database ? [y/n]')
        if not destroy:
            print('Nothing done.')
            sys.exit(0)

        bind = self.sa.get_bind()
        Base.metadata.drop_all(bind=bind)
        checkfirst = not override
        Base.metadata.create_all(bind=bind, checkfirst=checkfirst)
        log.info('Created tables for %s (schema version %s)',
                 self.dbname, __dbversion__)

    def create_default_user(self):
        log.info('creating default user')
        user = UserModel(self.sa).create_default_user()
        self.sa.commit()
        return user
