import hashlib

from commitaudit.lib.exceptions import UnknownRepositoryTypeError
from commitaudit.model.commit import CommitModel
from commitaudit.model.db import CommitData, PathChange, Repository, \
    StoredFile
from commitaudit.model.meta import Session
from commitaudit.tests import *
from commitaudit.tests.fixture import Fixture

fixture = Fixture()

DIFF = '''diff --git a/setup.py b/setup.py
--- a/setup.py
+++ b/setup.py
@@ -1 +1 @@
-version = 1
+version = 2
'''


class TestCommitModel(BaseTestCase):

    def setUp(self):
        super(TestCommitModel, self).setUp()
        self.repo = fixture.create_repo(GIT_REPO)

    def test_full_name(self):
        commit = fixture.create_commit(self.repo, '3f1e2d')
        self.assertEqual(commit.full_name, 'r%s3f1e2d' % GIT_REPO)

    def test_get_commit(self):
        fixture.create_commit(self.repo, '3f1e2d')
        self.assertEqual(CommitModel().get_commit(GIT_REPO, '3f1e2d').identifier,
                         '3f1e2d')
        self.assertEqual(CommitModel().get_commit(GIT_REPO, 'ffffff'), None)
        self.assertEqual(CommitModel().get_commit('NOPE', '3f1e2d'), None)

    def test_unparsed_commit(self):
        commit = fixture.create_commit(self.repo, '3f1e2d', parsed=False)
        self.assertFalse(commit.is_parsed)
        self.assertEqual(CommitModel().get_reviewer(commit), (None, None))
        self.assertEqual(CommitModel().get_raw_diff(commit), '')

    def test_author_identity(self):
        commit = fixture.create_commit(self.repo, '3f1e2d',
                                       author=TEST_USER_REGULAR_LOGIN)
        self.assertEqual(commit.author_identity,
                         'user:%s' % TEST_USER_REGULAR_LOGIN)
        commit = fixture.create_commit(self.repo, '3f1e2e',
                                       author_name='Someone <x@example.com>')
        self.assertEqual(commit.author_identity, None)
        self.assertEqual(commit.data.author_name, 'Someone <x@example.com>')

    def test_raw_diff_file_is_reused(self):
        commit = fixture.create_commit(self.repo, '3f1e2d', raw_diff=DIFF)
        other = fixture.create_commit(self.repo, '4a5b6c', raw_diff=DIFF)
        stored = CommitModel().get_raw_diff_file(commit)
        Session().commit()

        self.assertEqual(stored.name, '3f1e2d.diff')
        self.assertEqual(stored.mime_type, 'text/plain')
        self.assertEqual(stored.data, DIFF.encode('utf-8'))
        self.assertEqual(stored.content_hash,
                         hashlib.sha1(DIFF.encode('utf-8')).hexdigest())
        self.assertEqual(stored.best_uri,
                         '/file/data/%s/3f1e2d.diff' % stored.file_id)

        again = CommitModel().get_raw_diff_file(other)
        Session().commit()
        self.assertEqual(again.file_id, stored.file_id)
        self.assertEqual(StoredFile.query().count(), 1)

    def test_merged_commits_limit(self):
        merge = fixture.create_commit(self.repo, 'aaaa00')
        merged = [fixture.create_commit(self.repo, 'bbbb%02d' % i)
                  for i in range(5)]
        fixture.add_merges(merge, merged)

        result = CommitModel().get_merged_commits(merge, limit=3)
        self.assertEqual([c.identifier for c in result],
                         ['bbbb00', 'bbbb01', 'bbbb02'])
        self.assertEqual(len(CommitModel().get_merged_commits(merge)), 5)

    def test_parents(self):
        parent = fixture.create_commit(self.repo, 'aaaa00')
        child = fixture.create_commit(self.repo, 'aaaa01')
        CommitModel().add_parent(child, parent)
        Session().commit()
        self.assertEqual([p.identifier for p in child.parents], ['aaaa00'])

    def test_reviewer(self):
        details = {CommitData.DETAIL_REVIEWER_NAME: 'Admin Tester',
                   CommitData.DETAIL_REVIEWER_ID: TEST_USER_ADMIN_LOGIN}
        commit = fixture.create_commit(self.repo, '3f1e2d', details=details)
        user, name = CommitModel().get_reviewer(commit)
        self.assertEqual(user.username, TEST_USER_ADMIN_LOGIN)
        self.assertEqual(name, 'Admin Tester')

        details = {CommitData.DETAIL_REVIEWER_NAME: 'outsider'}
        commit = fixture.create_commit(self.repo, '3f1e2e', details=details)
        self.assertEqual(CommitModel().get_reviewer(commit), (None, 'outsider'))

    def test_bad_commit(self):
        commit = fixture.create_commit(self.repo, '3f1e2d')
        self.assertEqual(CommitModel().get_bad_commit(commit), None)
        fixture.create_bad_commit('r%s3f1e2d' % GIT_REPO, 'corrupt object')
        self.assertEqual(CommitModel().get_bad_commit(commit).description,
                         'corrupt object')

    def test_flag(self):
        commit = fixture.create_commit(self.repo, '3f1e2d')
        self.assertEqual(CommitModel().get_flag(commit, TEST_USER_ADMIN_LOGIN),
                         None)
        fixture.create_flag(commit, TEST_USER_ADMIN_LOGIN)
        flag = CommitModel().get_flag(commit, TEST_USER_ADMIN_LOGIN)
        self.assertEqual(flag.color_name, 'Blue')
        self.assertEqual(CommitModel().get_flag(commit, None), None)

    def test_path_changes_sorted_by_path(self):
        commit = fixture.create_commit(self.repo, '3f1e2d')
        fixture.add_changes(commit, ['b.txt', 'a.txt', 'c/'],
                            change_type=PathChange.CHANGE_ADD)
        changes = CommitModel().get_path_changes(commit)
        self.assertEqual([ch.path for ch in changes], ['a.txt', 'b.txt', 'c/'])
        self.assertEqual(changes[0].change_lbl, 'Added')

    def test_directory_changes_by_repo_type(self):
        self.assertFalse(self.repo.supports_directory_changes)
        self.assertFalse(
            fixture.create_repo(HG_REPO, Repository.TYPE_HG)
            .supports_directory_changes)
        self.assertTrue(
            fixture.create_repo(SVN_REPO, Repository.TYPE_SVN)
            .supports_directory_changes)
        bzr = fixture.create_repo('BZR', 'bzr')
        self.assertRaises(UnknownRepositoryTypeError,
                          lambda: bzr.supports_directory_changes)
