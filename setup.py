#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import os
import sys
import platform

if sys.version_info < (3, 8):
    raise Exception('Commitaudit requires python 3.8 or later')


here = os.path.abspath(os.path.dirname(__file__))


def _get_meta_var(name, data, callback_handler=None):
    import re
    matches = re.compile(r'(?:%s)\s*=\s*(.*)' % name).search(data)
    if matches:
        if not callable(callback_handler):
            callback_handler = lambda v: v

        return callback_handler(eval(matches.groups()[0]))

with open(os.path.join(here, 'commitaudit', '__init__.py')) as _meta:
    _metadata = _meta.read()

callback = lambda V: ('.'.join(map(str, V[:3])) + '.'.join(V[3:]))
__version__ = _get_meta_var('VERSION', _metadata, callback)
__license__ = _get_meta_var('__license__', _metadata)
__author__ = _get_meta_var('__author__', _metadata)
__url__ = _get_meta_var('__url__', _metadata)
# defines current platform
__platform__ = platform.system()

requirements = [
    "WebOb>=1.8",
    "Routes>=2.5",
    "Beaker>=1.12",
    "WebHelpers2>=2.0",
    "FormEncode>=2.0",
    "SQLAlchemy>=2.0",
    "Mako>=1.2",
    "Paste>=3.5",
    "PasteDeploy>=3.0",
    "babel>=2.9",
    "markdown>=3.3",
    "decorator>=5.0",
]

test_requirements = [
    "pytest>=7.0",
    "WebTest>=3.0",
]

dependency_links = [
]

classifiers = [
    'Development Status :: 4 - Beta',
    'Environment :: Web Environment',
    'Intended Audience :: Developers',
    'License :: OSI Approved :: GNU General Public License (GPL)',
    'Operating System :: OS Independent',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Topic :: Software Development :: Version Control',
]


# additional files from project that goes somewhere in the filesystem
# relative to sys.prefix
data_files = []

# additional files that goes into package itself
package_data = {'commitaudit': ['i18n/*/LC_MESSAGES/*.mo',
                                'templates/*/*.html', 'public/css/*',
                                'public/js/*', ], }

description = ('Commitaudit shows source control commits together with '
               'their post-commit audit state and lets users audit them.')

keywords = ' '.join([
    'commitaudit', 'mercurial', 'git', 'subversion', 'code review',
    'audit', 'post-commit review',
])

# long description
README_FILE = 'README.rst'
try:
    with open(README_FILE) as f:
        long_description = f.read()
except IOError:
    sys.stderr.write(
        "[WARNING] Cannot find file specified as long_description (%s)\n "
        "skipping that file" % (README_FILE,)
    )
    long_description = description

from setuptools import setup, find_packages
# packages
packages = find_packages(exclude=['ez_setup'])

setup(
    name='Commitaudit',
    version=__version__,
    description=description,
    long_description=long_description,
    keywords=keywords,
    license=__license__,
    author=__author__,
    dependency_links=dependency_links,
    url=__url__,
    install_requires=requirements,
    extras_require={'test': test_requirements},
    classifiers=classifiers,
    data_files=data_files,
    packages=packages,
    include_package_data=True,
    package_data=package_data,
    message_extractors={'commitaudit': [
            ('**.py', 'python', None),
            ('templates/**.html', 'mako', {'input_encoding': 'utf-8'}),
            ('public/**', 'ignore', None)]},
    zip_safe=False,
    entry_points="""
    [console_scripts]
    commitaudit-setup-db = commitaudit.bin.commitaudit_setup_db:main

    [paste.app_factory]
    main = commitaudit.config.middleware:make_app
    """,
)
