import os

from paste.deploy import loadapp

import commitaudit.tests


def pytest_configure():
    path = os.path.dirname(os.path.dirname(os.path.dirname(
        os.path.abspath(__file__))))
    commitaudit.tests.wsgiapp = loadapp('config:test.ini', relative_to=path)
    return commitaudit.tests.wsgiapp
