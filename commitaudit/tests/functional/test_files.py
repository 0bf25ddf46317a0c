from commitaudit.model.commit import CommitModel
from commitaudit.model.meta import Session
from commitaudit.tests import *
from commitaudit.tests.fixture import Fixture

fixture = Fixture()


class TestFilesController(TestController):

    def setUp(self):
        super(TestFilesController, self).setUp()
        repo = fixture.create_repo(GIT_REPO)
        commit = fixture.create_commit(repo, 'abc123', raw_diff='+ünïcode\n')
        stored = CommitModel().get_raw_diff_file(commit)
        Session().commit()
        self.file_id = stored.file_id

    def test_data(self):
        self.log_user()
        response = self.app.get(url('file_data', file_id=self.file_id,
                                    name='abc123.diff'))
        self.assertEqual(response.content_type, 'text/plain')
        self.assertEqual(response.headers['Content-Disposition'],
                         'attachment; filename=abc123.diff')
        self.assertEqual(response.body, '+ünïcode\n'.encode('utf-8'))

    def test_data_wrong_name(self):
        self.log_user()
        self.app.get(url('file_data', file_id=self.file_id, name='other.diff'),
                     status=404)

    def test_data_missing_file(self):
        self.log_user()
        self.app.get(url('file_data', file_id=self.file_id + 1,
                         name='abc123.diff'), status=404)
