# backend/tests.py

"""
PRODUCTION SETTINGS TESTS

Run with:
    python manage.py test backend -v 2
"""

import importlib
import os
import sys
from unittest import mock

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase

PROD_MODULE = "backend.settings.prod"

PROD_ENV = {
    "SECRET_KEY": "prod-secret",
    "API_KEY": "prod-key",
    "ALLOWED_HOSTS": "stock.example.com",
    "DATABASE_URL": "postgres://stock:pw@db:5432/stock",
    "CORS_ALLOWED_ORIGINS": "https://app.example.com",
    "CSRF_TRUSTED_ORIGINS": "https://app.example.com",
}


def load_prod_settings(**overrides):
    sys.modules.pop(PROD_MODULE, None)
    try:
        with mock.patch.dict(os.environ, {**PROD_ENV, **overrides}):
            return importlib.import_module(PROD_MODULE)
    finally:
        sys.modules.pop(PROD_MODULE, None)


class ProductionSettingsTests(SimpleTestCase):
    def test_complete_environment_loads(self):
        prod = load_prod_settings()

        self.assertFalse(prod.DEBUG)
        self.assertEqual(prod.API_KEY, "prod-key")
        self.assertEqual(prod.MIDDLEWARE[1], "whitenoise.middleware.WhiteNoiseMiddleware")

    def test_loading_does_not_touch_base_middleware(self):
        from backend.settings import base

        load_prod_settings()

        self.assertNotIn("whitenoise.middleware.WhiteNoiseMiddleware", base.MIDDLEWARE)

    def test_missing_required_values_fail_closed(self):
        for name in ("SECRET_KEY", "API_KEY", "ALLOWED_HOSTS", "DATABASE_URL", "CORS_ALLOWED_ORIGINS"):
            with self.subTest(name=name):
                with self.assertRaises(ImproperlyConfigured):
                    load_prod_settings(**{name: ""})

    def test_sqlite_database_is_refused(self):
        with self.assertRaises(ImproperlyConfigured):
            load_prod_settings(DATABASE_URL="sqlite:///db.sqlite3")

    def test_plain_http_origin_is_refused(self):
        with self.assertRaises(ImproperlyConfigured):
            load_prod_settings(CSRF_TRUSTED_ORIGINS="http://app.example.com")
