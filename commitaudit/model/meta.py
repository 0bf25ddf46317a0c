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
SQLAlchemy Metadata and Session object
"""
from sqlalchemy.orm import declarative_base, scoped_session, sessionmaker

__all__ = ['Base', 'Session']

# one session per thread, removed by BaseController at the end of a request
session_factory = sessionmaker(expire_on_commit=True)
Session = scoped_session(session_factory)

# declarative base of the tables in db.py, the engine is bound by
# model.init_model()
Base = declarative_base()
