from commitaudit.model.comment import AuditCommentsModel, draft_key
from commitaudit.model.db import AuditComment, AuditInlineComment, Draft, User
from commitaudit.model.meta import Session
from commitaudit.tests import *
from commitaudit.tests.fixture import Fixture

fixture = Fixture()


class TestAuditComments(BaseTestCase):

    def setUp(self):
        super(TestAuditComments, self).setUp()
        repo = fixture.create_repo(GIT_REPO)
        self.commit = fixture.create_commit(repo, 'deadbeef',
                                            author=TEST_USER_REGULAR_LOGIN)
        self.user = User.get_by_username(TEST_USER_REGULAR2_LOGIN)

    def test_draft_key(self):
        self.assertEqual(draft_key(self.commit),
                         'diffusion-audit-%s' % self.commit.commit_id)

    def test_draft_round_trip(self):
        model = AuditCommentsModel()
        self.assertEqual(model.get_draft(self.commit, self.user), None)
        fixture.save_draft(self.commit, self.user, 'half written')
        fixture.save_draft(self.commit, self.user, 'fully written')
        self.assertEqual(model.get_draft(self.commit, self.user),
                         'fully written')
        self.assertEqual(Draft.query().count(), 1)

    def test_create_stores_metadata_and_drops_draft(self):
        fixture.save_draft(self.commit, self.user, 'draft text')
        comment = AuditCommentsModel().create(
            commit=self.commit, user=self.user,
            action=AuditComment.ACTION_ADD_AUDITORS,
            content='please look',
            auditors=['user:%s' % TEST_USER_ADMIN_LOGIN],
            ccs=[])
        Session().commit()

        self.assertEqual(comment.action_lbl, 'Add Auditors')
        self.assertEqual(comment.comment_metadata,
                         {'auditors': ['user:%s' % TEST_USER_ADMIN_LOGIN]})
        self.assertEqual(
            AuditCommentsModel().get_draft(self.commit, self.user), None)

    def test_comments_in_creation_order(self):
        model = AuditCommentsModel()
        for action in (AuditComment.ACTION_COMMENT,
                       AuditComment.ACTION_CONCERN,
                       AuditComment.ACTION_ACCEPT):
            model.create(self.commit, self.user, action, action)
            Session().commit()
        self.assertEqual([c.action for c in model.get_comments(self.commit)],
                         ['comment', 'concern', 'accept'])

    def test_inline_drafts_are_published_with_comment(self):
        model = AuditCommentsModel()
        model.add_inline_draft(self.commit, self.user, 'setup.py', 12, 'typo')
        model.add_inline_draft(self.commit, self.user, 'setup.py', 12, 'again')
        model.add_inline_draft(self.commit, self.user, 'README', 1, 'title')
        Session().commit()
        self.assertEqual(model.get_inline_comments(self.commit), [])

        comment = model.create(self.commit, self.user,
                               AuditComment.ACTION_COMMENT, 'see inline')
        Session().commit()

        inline = model.get_inline_comments(self.commit)
        self.assertEqual([f_path for f_path, _lines in inline],
                         ['README', 'setup.py'])
        lines = dict(inline)['setup.py']
        self.assertEqual([co.content for co in lines[12]], ['typo', 'again'])
        self.assertTrue(all(
            co.audit_comment_id == comment.comment_id
            for co in AuditInlineComment.query().all()))

    def test_other_users_inline_drafts_stay_drafts(self):
        model = AuditCommentsModel()
        model.add_inline_draft(self.commit, TEST_USER_ADMIN_LOGIN,
                               'setup.py', 3, 'mine')
        Session().commit()
        model.create(self.commit, self.user, AuditComment.ACTION_COMMENT, '')
        Session().commit()
        self.assertEqual(model.get_inline_comments(self.commit), [])
