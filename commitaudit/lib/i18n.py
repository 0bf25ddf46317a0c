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
commitaudit.lib.i18n
~~~~~~~~~~~~~~~~~~~~

translation of user visible messages, catalogs are compiled by babel
into commitaudit/i18n/<lang>/LC_MESSAGES/commitaudit.mo

:created_on: Oct 17, 2026
:license: GPLv3
"""

import os
import logging

from babel.support import LazyProxy, NullTranslations, Translations

log = logging.getLogger(__name__)

DOMAIN = 'commitaudit'
I18N_DIR = os.path.join(os.path.dirname(os.path.dirname(
    os.path.abspath(__file__))), 'i18n')

_translator = NullTranslations()


def set_lang(lang, localedir=I18N_DIR):
    """
    Switches the translator of the process to `lang`, messages stay
    untranslated when there is no catalog for it
    """
    global _translator
    if not lang:
        _translator = NullTranslations()
        return _translator
    _translator = Translations.load(localedir, [lang], DOMAIN)
    if not isinstance(_translator, Translations):
        log.debug('no %s catalog for language %s in %s', DOMAIN, lang,
                  localedir)
    return _translator


def get_lang():
    return _translator


def _(message):
    return _translator.gettext(message)


def ungettext(singular, plural, n):
    return _translator.ngettext(singular, plural, n)


def lazy_ugettext(message):
    """
    Translates `message` when it is used, not when it is declared, for
    labels defined at import time
    """
    return LazyProxy(_, message, enable_cache=False)
