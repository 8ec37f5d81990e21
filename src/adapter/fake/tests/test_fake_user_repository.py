"""Unit tests for FakeUserRepository: verifies Port contract compliance."""

import unittest

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import ConflictError
from utils.object_id import is_object_id


class TestFakeUserRepository(unittest.TestCase):
    """Tests that FakeUserRepository behaves like the Mongo adapter."""

    def setUp(self):
        self.repo = FakeUserRepository()

    # ── create + lookups ──────────────────────────────────────

    def test_create_assigns_object_id(self):
        user = self.repo.create(email='a@x.com', password_hash='h')

        self.assertTrue(is_object_id(user.id))
        self.assertEqual(self.repo.get_by_id(user.id).email, 'a@x.com')
        self.assertEqual(self.repo.get_by_email('a@x.com').id, user.id)

    def test_lookup_misses_return_none(self):
        self.assertIsNone(self.repo.get_by_id('nonexistent'))
        self.assertIsNone(self.repo.get_by_email('nobody@x.com'))
        self.assertIsNone(self.repo.get_by_provider_identity('google', 'g-1'))

    def test_returned_users_are_copies(self):
        user = self.repo.create(email='a@x.com', password_hash='h')
        user.email = 'mutated@x.com'

        self.assertEqual(self.repo.get_by_id(user.id).email, 'a@x.com')

    def test_provider_identity_lookup(self):
        user = self.repo.create(email='g@x.com', provider='google', provider_id='g-1')

        self.assertEqual(self.repo.get_by_provider_identity('google', 'g-1').id, user.id)
        self.assertIsNone(self.repo.get_by_provider_identity('github', 'g-1'))

    # ── uniqueness ────────────────────────────────────────────

    def test_duplicate_password_email_conflicts(self):
        self.repo.create(email='a@x.com', password_hash='h')

        with self.assertRaises(ConflictError):
            self.repo.create(email='a@x.com', password_hash='h2')

    def test_duplicate_provider_identity_conflicts(self):
        self.repo.create(email='g@x.com', provider='google', provider_id='g-1')

        with self.assertRaises(ConflictError):
            self.repo.create(email='g@x.com', provider='google', provider_id='g-1')

    def test_oauth_record_may_share_password_email(self):
        password_user = self.repo.create(email='a@x.com', password_hash='h')
        self.repo.create(email='a@x.com', provider='google', provider_id='g-1')

        self.assertEqual(self.repo.get_by_email('a@x.com').id, password_user.id)

    def test_unenforced_mode_allows_race_duplicates(self):
        repo = FakeUserRepository(enforce_unique=False)
        repo.create(email='a@x.com', password_hash='h')
        repo.create(email='a@x.com', password_hash='h')

        self.assertEqual(len(repo.store), 2)

    # ── updates ───────────────────────────────────────────────

    def test_update_email_and_hash(self):
        user = self.repo.create(email='a@x.com', password_hash='h')

        self.assertTrue(self.repo.update_email(user.id, 'b@x.com'))
        self.assertTrue(self.repo.update_password_hash(user.id, 'h2'))

        stored = self.repo.get_by_id(user.id)
        self.assertEqual(stored.email, 'b@x.com')
        self.assertEqual(stored.password_hash, 'h2')

    def test_update_missing_returns_false(self):
        self.assertFalse(self.repo.update_email('nonexistent', 'b@x.com'))
        self.assertFalse(self.repo.update_password_hash('nonexistent', 'h'))

    def test_delete(self):
        user = self.repo.create(email='a@x.com', password_hash='h')

        self.assertTrue(self.repo.delete(user.id))
        self.assertFalse(self.repo.delete(user.id))


if __name__ == '__main__':
    unittest.main()
