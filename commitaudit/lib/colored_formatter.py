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
commitaudit.lib.colored_formatter
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

logging formatters for console output, referenced from the logging
sections of the .ini files

:created_on: Oct 17, 2026
:license: GPLv3
"""

import logging

BLACK, RED, GREEN, YELLOW, BLUE, MAGENTA, CYAN, WHITE = range(30, 38)

# Sequences
RESET_SEQ = "\033[0m"
COLOR_SEQ = "\033[0;%dm"
BOLD_SEQ = "\033[1m"

COLORS = {
    'CRITICAL': MAGENTA,
    'ERROR': RED,
    'WARNING': CYAN,
    'INFO': GREEN,
    'DEBUG': BLUE,
    'SQL': YELLOW
}

SQL_KEYWORDS = ['SELECT', 'UPDATE', 'DELETE', 'FROM', 'ORDER BY', 'LIMIT',
                'WHERE', 'AND', 'LEFT', 'INNER', 'INSERT']


def one_space_trim(s):
    while '  ' in s:
        s = s.replace('  ', ' ')
    return s


def format_sql(sql):
    sql = one_space_trim(sql.replace('\n', ''))
    sql = sql.replace(',', ',\n\t')
    for keyword in SQL_KEYWORDS:
        sql = sql.replace(keyword, '\n\t%s' % keyword)
    return sql


class ColorFormatter(logging.Formatter):

    def format(self, record):
        """
        Changes record's levelname to use with COLORS enum
        """
        start = COLOR_SEQ % (COLORS.get(record.levelname, WHITE))
        def_record = super(ColorFormatter, self).format(record)
        return ''.join([start, def_record, RESET_SEQ])


class ColorFormatterSql(logging.Formatter):

    def format(self, record):
        start = COLOR_SEQ % (COLORS['SQL'])
        def_record = format_sql(super(ColorFormatterSql, self).format(record))
        return ''.join([start, def_record, RESET_SEQ])
