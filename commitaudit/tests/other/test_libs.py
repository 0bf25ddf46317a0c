import os
import re

import pytest
from babel.messages.catalog import Catalog
from babel.messages.mofile import write_mo

from commitaudit.lib import helpers as h
from commitaudit.lib.auth import get_container_username
from commitaudit.lib.base import _filter_proxy, _get_ip_addr
from commitaudit.lib.i18n import DOMAIN, _, set_lang
from commitaudit.model.audit import audit_action_options
from commitaudit.model.db import AuditComment
from commitaudit.model.validators import _split_unique


@pytest.mark.parametrize('url,params,expected', [
    ('/diffusion/CA/commit/3f1e2d', dict(diff=1),
     '/diffusion/CA/commit/3f1e2d?diff=1'),
    ('/diffusion/CA/commit/3f1e2d?show_all=true', dict(diff=1),
     '/diffusion/CA/commit/3f1e2d?show_all=true&diff=1'),
    ('/diffusion/CA/commit/3f1e2d?diff=0', dict(diff=1),
     '/diffusion/CA/commit/3f1e2d?diff=1'),
    ('/diffusion/CA/diff/', dict(ref='src/a b.py;3f1e2d'),
     '/diffusion/CA/diff/?ref=src%2Fa+b.py%3B3f1e2d'),
    ('/x?a=1', dict(a=None), '/x'),
])
def test_url_with_params(url, params, expected):
    assert h.url_with_params(url, **params) == expected


@pytest.mark.parametrize('text,expected', [
    ('', ''),
    (None, ''),
    ('**bold**', '<p><strong>bold</strong></p>'),
    ('<i>raw</i>', '<p>&lt;i&gt;raw&lt;/i&gt;</p>'),
])
def test_render_markup(text, expected):
    assert h.render_markup(text) == expected


@pytest.mark.parametrize('value,expected', [
    ('', []),
    ('a, b  c,,a', ['a', 'b', 'c']),
    (['a', 'b,a'], ['a', 'b']),
])
def test_split_unique(value, expected):
    assert _split_unique(value) == expected


@pytest.mark.parametrize('environ,config,expected', [
    ({}, {}, None),
    ({'REMOTE_USER': 'marcink'}, {}, 'marcink'),
    ({'HTTP_X_FORWARDED_USER': 'proxied'},
     {'container_auth.fallback_header': 'HTTP_X_FORWARDED_USER'}, 'proxied'),
    ({'REMOTE_USER': 'DOMAIN\\user@realm'},
     {'container_auth.clean_username': 'true'}, 'user'),
    ({'REMOTE_USER': 'DOMAIN\\user@realm'}, {}, 'DOMAIN\\user@realm'),
    ({'HTTP_X_AUTH': 'other'}, {'container_auth.header': 'HTTP_X_AUTH'},
     'other'),
])
def test_get_container_username(environ, config, expected):
    assert get_container_username(environ, config) == expected


@pytest.mark.parametrize('environ,expected', [
    ({'REMOTE_ADDR': '10.0.0.1'}, '10.0.0.1'),
    ({'HTTP_X_REAL_IP': '192.168.0.3', 'REMOTE_ADDR': '10.0.0.1'},
     '192.168.0.3'),
    ({'HTTP_X_FORWARDED_FOR': '1.2.3.4, 10.0.0.2', 'REMOTE_ADDR': '10.0.0.1'},
     '1.2.3.4'),
    ({}, '0.0.0.0'),
])
def test_get_ip_addr(environ, expected):
    assert _get_ip_addr(environ) == expected


def test_filter_proxy():
    assert _filter_proxy('1.1.1.1') == '1.1.1.1'


def test_select_options_keep_order_and_labels():
    html = str(h.select('action', None, h.select_options(
        audit_action_options(['comment', 'accept', 'resign'])),
        id='audit-action'))
    assert re.findall(r'<option value="([^"]*)">([^<]*)</option>', html) == [
        ('comment', 'Comment'),
        ('accept', 'Accept Commit'),
        ('resign', 'Resign from Audit'),
    ]


def test_set_lang_without_catalog(tmp_path):
    try:
        set_lang('de', localedir=str(tmp_path))
        assert _('Comment') == 'Comment'
    finally:
        set_lang('en')


def test_set_lang_translates_messages_and_labels(tmp_path):
    catalog = Catalog(locale='de', domain=DOMAIN)
    catalog.add('Comment', 'Kommentar')
    catalog.add('Invalid security token', 'Ungültiges Sicherheitstoken')
    mo_dir = tmp_path / 'de' / 'LC_MESSAGES'
    os.makedirs(str(mo_dir))
    with open(str(mo_dir / ('%s.mo' % DOMAIN)), 'wb') as mo:
        write_mo(mo, catalog)

    try:
        set_lang('de', localedir=str(tmp_path))
        assert _('Invalid security token') == 'Ungültiges Sicherheitstoken'
        # labels declared at import time follow the current language
        assert str(AuditComment.get_action_lbl('comment')) == 'Kommentar'
        assert audit_action_options(['comment']) == [('comment', 'Kommentar')]
    finally:
        set_lang('en')
    assert str(AuditComment.get_action_lbl('comment')) == 'Comment'
