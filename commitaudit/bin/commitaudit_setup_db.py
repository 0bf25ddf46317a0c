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
commitaudit.bin.commitaudit_setup_db
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Database setup CLI for Commitaudit, creates the tables and the default
user for the database configured in a .ini file

:created_on: Oct 17, 2026
:license: GPLv3
"""

import os
import sys
import argparse
import logging.config

from paste.deploy import appconfig

from commitaudit.lib.db_manage import DbManage
from commitaudit.model.meta import Session


def argparser(argv):
    usage = (
      "commitaudit-setup-db [-h] [--force-yes] [--log-sql] CONFIG_FILE"
    )

    parser = argparse.ArgumentParser(description='Commitaudit database setup',
                                     usage=usage)
    parser.add_argument('config_file', metavar='CONFIG_FILE',
            help='.ini file with the application configuration')
    parser.add_argument('--force-yes', action='store_true', dest='force_ask',
            help='answer yes to any question, destroying an existing database')
    parser.add_argument('--log-sql', action='store_true',
            help='log executed sql statements')
    return parser.parse_args(argv[1:])


def main(argv=None):
    """
    Main execution function for cli

    :param argv:
    """
    if argv is None:
        argv = sys.argv

    args = argparser(argv)
    config_file = os.path.abspath(args.config_file)
    logging.config.fileConfig(config_file,
                              {'here': os.path.dirname(config_file)})
    conf = appconfig('config:%s' % config_file)

    dbmanage = DbManage(log_sql=args.log_sql,
                        dbconf=conf['sqlalchemy.db1.url'],
                        tests=False, cli_args=vars(args))
    dbmanage.create_tables(override=True)
    dbmanage.create_default_user()
    Session().commit()
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
