"""Unit tests for oauth_service module."""

import unittest
from unittest.mock import MagicMock

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import ConflictError, IdentityError
from domain.model.identity import OAuthProfile
from services import oauth_service
from services.token_service import TokenService


class TestLinkOrCreate(unittest.TestCase):
    """Test link_or_create function."""

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_first_sight_creates_user(self):
        user = oauth_service.link_or_create(self.repo, 'google', 'g-1', 'g@x.com', 'Gee')

        self.assertEqual(user.provider, 'google')
        self.assertEqual(user.provider_id, 'g-1')
        self.assertEqual(user.email, 'g@x.com')
        self.assertEqual(user.display_name, 'Gee')
        self.assertIsNone(user.password_hash)
        self.assertIsNotNone(user.created_at)
        self.assertEqual(len(self.repo.store), 1)

    def test_second_login_returns_same_subject(self):
        first = oauth_service.link_or_create(self.repo, 'google', 'g-1', 'g@x.com', 'Gee')
        second = oauth_service.link_or_create(self.repo, 'google', 'g-1', 'g@x.com', 'Gee')

        self.assertEqual(first.id, second.id)
        self.assertEqual(len(self.repo.store), 1)

    def test_existing_record_returned_unchanged(self):
        first = oauth_service.link_or_create(self.repo, 'google', 'g-1', 'g@x.com', 'Gee')

        again = oauth_service.link_or_create(self.repo, 'google', 'g-1', 'changed@x.com', 'New Name')

        self.assertEqual(again.id, first.id)
        self.assertEqual(again.email, 'g@x.com')
        self.assertEqual(again.display_name, 'Gee')

    def test_missing_email_rejected(self):
        for email in (None, ''):
            with self.subTest(email=email):
                with self.assertRaises(IdentityError):
                    oauth_service.link_or_create(self.repo, 'google', 'g-1', email)
        self.assertEqual(len(self.repo.store), 0)

    def test_missing_provider_id_rejected(self):
        with self.assertRaises(IdentityError):
            oauth_service.link_or_create(self.repo, 'google', '', 'g@x.com')

    def test_password_account_with_same_email_stays_separate(self):
        password_user = self.repo.create(email='a@x.com', password_hash='$2b$10$hash')

        oauth_user = oauth_service.link_or_create(self.repo, 'google', 'g-1', 'a@x.com')

        self.assertNotEqual(oauth_user.id, password_user.id)
        self.assertEqual(self.repo.get_by_id(password_user.id).password_hash, '$2b$10$hash')
        self.assertIsNone(self.repo.get_by_id(password_user.id).provider)
        self.assertEqual(len(self.repo.store), 2)

    def test_lost_creation_race_returns_winner(self):
        winner = self.repo.create(email='g@x.com', provider='google', provider_id='g-1')
        repo = MagicMock(wraps=self.repo)
        repo.get_by_provider_identity.side_effect = [None, winner]
        repo.create.side_effect = ConflictError("User already exists")

        user = oauth_service.link_or_create(repo, 'google', 'g-1', 'g@x.com')

        self.assertEqual(user.id, winner.id)


class TestLoginWithProfile(unittest.TestCase):

    def test_issues_token_for_linked_user(self):
        repo = FakeUserRepository()
        tokens = TokenService('test-secret')
        profile = OAuthProfile(provider='google', provider_id='g-1', email='g@x.com', display_name='Gee')

        user, token = oauth_service.login_with_profile(repo, tokens, profile)

        identity = tokens.verify(token)
        self.assertEqual(identity.subject_id, user.id)
        self.assertEqual(identity.email, 'g@x.com')


if __name__ == '__main__':
    unittest.main()
