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
commitaudit.__init__
~~~~~~~~~~~~~~~~~~~~

Commitaudit, a web based commit audit viewer

:created_on: Oct 17, 2026
:license: GPLv3
"""

import sys
import platform

VERSION = (0, 1, 0)

# link to config, filled by config.environment.load_environment
CONFIG = {}

__version__ = ('.'.join((str(each) for each in VERSION[:3])))
__dbversion__ = 1
__platform__ = platform.system()
__license__ = 'GPLv3'
__py_version__ = sys.version_info
__author__ = "Various Authors"
__url__ = 'https://commitaudit.example.org/'
