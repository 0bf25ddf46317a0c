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
    Commitaudit environment configuration
"""

import os
import logging

from mako.lookup import TemplateLookup
from paste.deploy.converters import asbool
from sqlalchemy import engine_from_config
from sqlalchemy.pool import StaticPool

import commitaudit
from commitaudit.config.routing import make_map
from commitaudit.lib.db_manage import DbManage
from commitaudit.lib.i18n import set_lang
from commitaudit.model import init_model
from commitaudit.model.meta import Session

log = logging.getLogger(__name__)


def _make_engine(config):
    url = config['sqlalchemy.db1.url']
    kwargs = {}
    if url in ('sqlite://', 'sqlite:///:memory:'):
        # one connection shared by all threads, or every connection would
        # see its own empty database
        kwargs = dict(poolclass=StaticPool,
                      connect_args={'check_same_thread': False})
    return engine_from_config(config, 'sqlalchemy.db1.', **kwargs)


def load_environment(global_conf, app_conf):
    """
    Configure the Commitaudit environment, returns the config dict
    """
    config = dict(global_conf)
    config.update(app_conf)

    root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    paths = dict(
        root=root,
        controllers=os.path.join(root, 'controllers'),
        static_files=os.path.join(root, 'public'),
        templates=[os.path.join(root, 'templates')]
    )
    config['commitaudit.paths'] = paths
    config['debug'] = asbool(config.get('debug', False))

    config['routes.map'] = make_map(config)

    # translator for messages, templates and form errors
    set_lang(config.get('lang'))

    # Create the Mako TemplateLookup, with the default auto-escaping
    module_directory = None
    if config.get('cache_dir'):
        module_directory = os.path.join(config['cache_dir'], 'templates')
    config['commitaudit.templates'] = TemplateLookup(
        directories=paths['templates'],
        module_directory=module_directory,
        input_encoding='utf-8', default_filters=['escape'],
        imports=['from webhelpers2.html import escape'])

    # Setup the SQLAlchemy database engine
    sa_engine_db1 = _make_engine(config)
    init_model(sa_engine_db1)

    test = os.path.split(config.get('__file__', ''))[-1] == 'test.ini'
    if test:
        if os.environ.get('TEST_DB'):
            # swap config if we pass enviroment variable
            config['sqlalchemy.db1.url'] = os.environ.get('TEST_DB')
            sa_engine_db1 = _make_engine(config)
            init_model(sa_engine_db1)
        log.info('creating test database %s', config['sqlalchemy.db1.url'])
        dbmanage = DbManage(log_sql=False, dbconf=config['sqlalchemy.db1.url'],
                            tests=True, SESSION=Session())
        dbmanage.create_tables(override=True)
        dbmanage.create_default_user()

    # store config reference into our module
    commitaudit.CONFIG.update(config)
    return config
