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
Helper functions

Consists of functions to typically be used within templates, but also
available to Controllers. This module is available to both as 'h'.
"""
import json
import logging
from urllib.parse import urlencode, parse_qsl

import markdown
from babel.dates import format_datetime
from babel.numbers import format_decimal

from webhelpers2.html import literal, HTML, escape
from webhelpers2.html.tags import link_to, form, end_form, hidden, \
    select, submit, text, textarea, stylesheet_link, javascript_link, \
    Option, Options
from webhelpers2.text import truncate

from commitaudit.lib.auth import authentication_token, TOKEN_KEY

# silence warnings and pylint
literal, HTML, escape, link_to, form, end_form, hidden, select, submit, \
    text, textarea, stylesheet_link, javascript_link, Option, Options, \
    truncate

log = logging.getLogger(__name__)

DEFAULT_LOCALE = 'en'


class _Message(object):
    """A message returned by ``Flash.pop_messages()``.

    Converting the message to a string returns the message text. Instances
    also have the following attributes:

    * ``message``: the message text.
    * ``category``: the category specified when the message was created.
    """

    def __init__(self, category, message):
        self.category = category
        self.message = message

    def __str__(self):
        return self.message

    def __html__(self):
        return escape(self.message)


class Flash(object):
    """
    Queues messages in the session to show them on the next rendered page
    """
    categories = ['warning', 'notice', 'error', 'success']
    default_category = 'notice'
    session_key = 'flash'

    def __call__(self, session, message, category=None):
        if not category:
            category = self.default_category
        elif category not in self.categories:
            raise ValueError("unrecognized category %r" % (category,))
        messages = session.setdefault(self.session_key, [])
        messages.append((category, str(message)))
        session.save()

    def pop_messages(self, session):
        messages = session.pop(self.session_key, [])
        if messages:
            session.save()
        return [_Message(*m) for m in messages]

flash = Flash()


def secure_form_token(session):
    return hidden(TOKEN_KEY, authentication_token(session))


def render_markup(text):
    """
    Renders user text with markdown, raw html in the text is escaped
    before rendering so it shows up as text
    """
    if not text:
        return literal('')
    return literal(markdown.markdown(str(escape(text))))


def fmt_date(date, locale=DEFAULT_LOCALE):
    if date is None:
        return ''
    return format_datetime(date, format='medium', locale=locale)


def fmt_number(number, locale=DEFAULT_LOCALE):
    return format_decimal(number, locale=locale)


def url_with_params(url, **params):
    """
    Sets query parameters on url, keeping the others it has
    """
    path, _sep, query = url.partition('?')
    args = [(k, v) for k, v in parse_qsl(query) if k not in params]
    args.extend((k, str(v)) for k, v in params.items() if v is not None)
    if not args:
        return path
    return '%s?%s' % (path, urlencode(args))


def behavior_json(behaviors):
    """
    Serializes client behavior config for inlining into a <script> block
    """
    return literal(json.dumps(behaviors, sort_keys=True).replace('</', '<\\/'))


def user_link(user):
    if user is None:
        return ''
    return link_to(user.full_name, '/p/%s/' % (user.username,))


def commit_link(commit):
    return link_to(commit.full_name, '/diffusion/%s/commit/%s'
                   % (commit.repository.callsign, commit.identifier))


def select_options(pairs):
    """
    Turns (value, label) pairs into options for :func:`select`
    """
    return Options([Option(label, value) for value, label in pairs])
