"""API - login service and HTTP endpoints.

Endpoints:
    POST /login
    GET  /admin/login-attempts
    GET  /admin/users
    GET  /admin/user-details/{user_id}
    GET  /admin/daily-summary
    POST /admin/test-notification
    GET  /admin/notification-settings

A refused login never returns a session id.
"""

from geo_guard.api.gateway import app
from geo_guard.api.schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
)
from geo_guard.api.service import LoginResult, LoginService

__all__ = [
    "app",
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginResult",
    "LoginService",
]
