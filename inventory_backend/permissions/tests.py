from __future__ import annotations

from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient


@override_settings(API_KEY="test-key")
class APIKeyAuthenticationTests(TestCase):
    """
    GUARANTEES:
    - Protected endpoints answer 401 INVALID_API_KEY without the right key
    - The right key is accepted
    - Health check stays public
    """

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("dashboard")

    def test_missing_key_is_rejected(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["code"], "INVALID_API_KEY")
        self.assertEqual(res.data["message"], "Invalid or missing API key")

    def test_wrong_key_is_rejected(self):
        res = self.client.get(self.url, HTTP_X_API_KEY="nope")
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["code"], "INVALID_API_KEY")

    def test_correct_key_is_accepted(self):
        res = self.client.get(self.url, HTTP_X_API_KEY="test-key")
        self.assertEqual(res.status_code, 200)

    @override_settings(API_KEY="")
    def test_unset_server_key_rejects_everything(self):
        res = self.client.get(self.url, HTTP_X_API_KEY="")
        self.assertEqual(res.status_code, 401)

    def test_health_check_needs_no_key(self):
        res = self.client.get(reverse("health-check"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "ok")
