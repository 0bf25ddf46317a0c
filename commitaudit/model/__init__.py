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
commitaudit.model
~~~~~~~~~~~~~~~~~

The application's model objects

:created_on: Oct 17, 2026
:license: GPLv3

:example:

    .. code-block:: python

       from paste.deploy import appconfig
       from commitaudit.model import init_model
       from sqlalchemy import engine_from_config

       conf = appconfig('config:development.ini', relative_to='./../../')
       engine = engine_from_config(conf, 'sqlalchemy.db1.')
       init_model(engine)
       # RUN YOUR CODE HERE
"""

import logging

from commitaudit.model import meta

log = logging.getLogger(__name__)


def init_model(engine):
    """
    Initializes db session, bind the engine with the metadata,
    Call this before using any of the tables or classes in the model,
    preferably once in application start

    :param engine: engine to bind to
    """
    engine_str = str(engine.url)
    log.info("initializing db for %s", engine_str)
    meta.Session.remove()
    meta.Session.configure(bind=engine)


class BaseModel(object):
    """
    Base Model for all Commitaudit models, it adds sql alchemy session
    into instance of model

    :param sa: If passed it reuses this session instead of creating a new one
    """

    cls = None  # override in child class

    def __init__(self, sa=None):
        if sa is not None:
            self.sa = sa
        else:
            self.sa = meta.Session()

    def _get_instance(self, cls, instance, callback=None):
        """
        Gets instance of given cls using some simple lookup mechanism.

        :param cls: class to fetch
        :param instance: int or Instance
        :param callback: callback to call if all lookups failed
        """

        if isinstance(instance, cls):
            return instance
        elif isinstance(instance, int) or (isinstance(instance, str)
                                           and instance.isdigit()):
            return cls.get(int(instance))
        else:
            if instance:
                if callback is None:
                    raise Exception(
                        'given object must be int, str or Instance'
                        ' of %s got %s, no callback provided' % (cls, type(instance))
                    )
                else:
                    return callback(instance)

    def _get_user(self, user):
        """
        Helper method to get user by ID, or username fallback

        :param user: UserID, username, or User instance
        """
        from commitaudit.model.db import User
        return self._get_instance(User, user,
                                  callback=User.get_by_username)

    def _get_repo(self, repository):
        """
        Helper method to get repository by ID, or callsign fallback

        :param repository: RepoID, callsign or Repository instance
        """
        from commitaudit.model.db import Repository
        return self._get_instance(Repository, repository,
                                  callback=Repository.get_by_callsign)

    def _get_commit(self, commit):
        from commitaudit.model.db import Commit
        return self._get_instance(Commit, commit)
