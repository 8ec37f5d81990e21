"""Tests for the health check endpoint."""

import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from api.main import app


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    @patch('api.routes.health.get_mongodb_client')
    def test_healthy_when_ping_succeeds(self, mock_get_client):
        mock_client = MagicMock()
        mock_get_client.return_value = mock_client

        response = self.client.get('/health')

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['status'], 'healthy')
        self.assertEqual(body['services']['mongodb']['status'], 'healthy')
        mock_client.admin.command.assert_called_once_with('ping')

    @patch('api.routes.health.get_mongodb_client', return_value=None)
    def test_degraded_without_client(self, mock_get_client):
        response = self.client.get('/health')

        self.assertEqual(response.status_code, 503)
        body = response.json()
        self.assertEqual(body['status'], 'degraded')
        self.assertEqual(body['services']['mongodb']['status'], 'unhealthy')

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_when_ping_fails(self, mock_get_client):
        mock_client = MagicMock()
        mock_client.admin.command.side_effect = ServerSelectionTimeoutError('no servers')
        mock_get_client.return_value = mock_client

        response = self.client.get('/health')

        self.assertEqual(response.status_code, 503)
        self.assertIn('no servers', response.json()['services']['mongodb']['message'])

    @patch('api.routes.health.get_mongodb_client', side_effect=PyMongoError('connect failed'))
    def test_degraded_when_client_raises(self, mock_get_client):
        response = self.client.get('/health')

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['status'], 'degraded')


if __name__ == '__main__':
    unittest.main()
