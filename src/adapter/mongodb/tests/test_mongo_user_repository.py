"""Tests for MongoUserRepository against a mocked collection."""

import unittest
from unittest.mock import MagicMock
from datetime import datetime, timezone

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError, OperationFailure, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import ConflictError

USER_ID = '691024ceae194892f0154ea1'


def _make_repo():
    mock_collection = MagicMock()
    mock_db = MagicMock()
    mock_db.__getitem__.return_value = mock_collection
    return MongoUserRepository(mock_db), mock_db, mock_collection


class TestMongoUserRepositoryReads(unittest.TestCase):

    def setUp(self):
        self.repo, self.mock_db, self.collection = _make_repo()
        self.doc = {
            '_id': ObjectId(USER_ID),
            'email': 'a@x.com',
            'password_hash': '$2b$10$hash',
            'created_at': datetime(2026, 1, 1, tzinfo=timezone.utc),
            'updated_at': datetime(2026, 1, 1, tzinfo=timezone.utc),
        }

    def test_uses_users_collection(self):
        self.mock_db.__getitem__.assert_called_with(USERS_COLLECTION_NAME)

    def test_get_by_email_prefers_password_account(self):
        self.collection.find_one.return_value = self.doc

        user = self.repo.get_by_email('a@x.com')

        self.assertEqual(user.id, USER_ID)
        self.assertEqual(user.password_hash, '$2b$10$hash')
        self.assertIsNone(user.provider)
        self.collection.find_one.assert_called_once_with(
            {'email': 'a@x.com'}, sort=[('password_hash', DESCENDING)]
        )

    def test_get_by_id_converts_to_object_id(self):
        self.collection.find_one.return_value = self.doc

        user = self.repo.get_by_id(USER_ID)

        self.assertEqual(user.email, 'a@x.com')
        self.collection.find_one.assert_called_once_with({'_id': ObjectId(USER_ID)}, sort=None)

    def test_get_by_id_malformed_skips_query(self):
        self.assertIsNone(self.repo.get_by_id('not-an-id'))
        self.collection.find_one.assert_not_called()

    def test_get_by_provider_identity(self):
        self.collection.find_one.return_value = {
            '_id': ObjectId(USER_ID),
            'email': 'g@x.com',
            'provider': 'google',
            'provider_id': 'g-1',
            'display_name': 'Gee',
            'created_at': datetime(2026, 1, 1, tzinfo=timezone.utc),
        }

        user = self.repo.get_by_provider_identity('google', 'g-1')

        self.assertEqual(user.provider_id, 'g-1')
        self.assertEqual(user.display_name, 'Gee')
        self.assertIsNone(user.password_hash)

    def test_not_found(self):
        self.collection.find_one.return_value = None
        self.assertIsNone(self.repo.get_by_email('nobody@x.com'))

    def test_store_errors_propagate(self):
        self.collection.find_one.side_effect = PyMongoError("connection reset")

        with self.assertRaises(PyMongoError):
            self.repo.get_by_email('a@x.com')


class TestMongoUserRepositoryWrites(unittest.TestCase):

    def setUp(self):
        self.repo, _, self.collection = _make_repo()

    def test_create_password_user_omits_oauth_fields(self):
        self.collection.insert_one.return_value.inserted_id = ObjectId(USER_ID)

        user = self.repo.create(email='a@x.com', password_hash='$2b$10$hash')

        self.assertEqual(user.id, USER_ID)
        doc = self.collection.insert_one.call_args[0][0]
        self.assertEqual(doc['email'], 'a@x.com')
        self.assertEqual(doc['password_hash'], '$2b$10$hash')
        self.assertNotIn('provider', doc)
        self.assertNotIn('provider_id', doc)
        self.assertIn('created_at', doc)

    def test_create_oauth_user_omits_password_hash(self):
        self.collection.insert_one.return_value.inserted_id = ObjectId(USER_ID)

        self.repo.create(email='g@x.com', provider='google', provider_id='g-1', display_name='Gee')

        doc = self.collection.insert_one.call_args[0][0]
        self.assertNotIn('password_hash', doc)
        self.assertEqual(doc['provider'], 'google')

    def test_create_duplicate_key_raises_conflict(self):
        self.collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key error")

        with self.assertRaises(ConflictError):
            self.repo.create(email='a@x.com', password_hash='h')

    def test_update_email(self):
        self.collection.update_one.return_value.matched_count = 1

        self.assertTrue(self.repo.update_email(USER_ID, 'b@x.com'))

        query, update = self.collection.update_one.call_args[0]
        self.assertEqual(query, {'_id': ObjectId(USER_ID)})
        self.assertEqual(update['$set']['email'], 'b@x.com')
        self.assertIn('updated_at', update['$set'])

    def test_update_email_duplicate_key_raises_conflict(self):
        self.collection.update_one.side_effect = DuplicateKeyError("E11000 duplicate key error")

        with self.assertRaises(ConflictError):
            self.repo.update_email(USER_ID, 'b@x.com')

    def test_update_password_hash_missing_user(self):
        self.collection.update_one.return_value.matched_count = 0

        self.assertFalse(self.repo.update_password_hash(USER_ID, 'h2'))

    def test_delete(self):
        self.collection.delete_one.return_value.deleted_count = 1
        self.assertTrue(self.repo.delete(USER_ID))

        self.collection.delete_one.return_value.deleted_count = 0
        self.assertFalse(self.repo.delete(USER_ID))

    def test_delete_malformed_id(self):
        self.assertFalse(self.repo.delete('bad'))
        self.collection.delete_one.assert_not_called()


class TestEnsureIndexes(unittest.TestCase):

    def test_creates_partial_unique_indexes(self):
        repo, _, collection = _make_repo()

        self.assertTrue(repo.ensure_indexes())

        calls = {c.kwargs['name']: c for c in collection.create_index.call_args_list}
        email_idx = calls['idx_users_email']
        self.assertTrue(email_idx.kwargs['unique'])
        self.assertEqual(email_idx.kwargs['partialFilterExpression'], {'password_hash': {'$exists': True}})
        provider_idx = calls['idx_users_provider_identity']
        self.assertEqual(provider_idx.args[0], [('provider', 1), ('provider_id', 1)])

    def test_conflicting_index_is_recreated(self):
        repo, _, collection = _make_repo()
        collection.create_index.side_effect = [
            OperationFailure("Index already exists with different options"),
            None,
            None,
        ]
        collection.index_information.return_value = {
            '_id_': {'key': [('_id', 1)]},
            'idx_users_email': {'key': [('email', 1)]},
        }

        self.assertTrue(repo.ensure_indexes())
        collection.drop_index.assert_called_once_with('idx_users_email')

    def test_failure_returns_false(self):
        repo, _, collection = _make_repo()
        collection.create_index.side_effect = PyMongoError("not authorized")

        self.assertFalse(repo.ensure_indexes())


if __name__ == '__main__':
    unittest.main()
