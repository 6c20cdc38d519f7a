# permissions/api_key.py

"""
SHARED-SECRET API KEY

Every protected endpoint requires the X-API-Key header to equal settings.API_KEY.

Rules:
- Missing header, wrong key, or an unset server key -> 401 INVALID_API_KEY
- Comparison is constant-time
- There is no user model: a valid key authenticates as AnonymousUser with
  request.auth set to the key
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.utils.crypto import constant_time_compare
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import BasePermission

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"
INVALID_API_KEY = {
    "code": "INVALID_API_KEY",
    "message": "Invalid or missing API key",
}


class APIKeyAuthentication(BaseAuthentication):
    def authenticate(self, request):
        provided = (request.headers.get(API_KEY_HEADER) or "").strip()
        expected = (getattr(settings, "API_KEY", "") or "").strip()

        # Unset server key must never match an empty header.
        if not expected or not provided or not constant_time_compare(provided, expected):
            logger.warning(
                "Rejected API request",
                extra={"path": request.path, "has_key": bool(provided)},
            )
            raise AuthenticationFailed(INVALID_API_KEY)

        return AnonymousUser(), provided

    def authenticate_header(self, request):
        # Non-empty value makes DRF answer 401 instead of 403.
        return API_KEY_HEADER


class HasAPIKey(BasePermission):
    """
    Deny-by-default guard: passes only when APIKeyAuthentication accepted the request.
    """

    def has_permission(self, request, view):
        return request.auth is not None
