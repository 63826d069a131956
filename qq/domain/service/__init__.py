"""Domain services."""

from .auth_service import AuthService
from .base import Service
from .jwt_service import JWTService
from .mailer import Mailer, SendEmailParams, render_otp_template
from .user_service import UserService

__all__ = [
    "AuthService",
    "JWTService",
    "Mailer",
    "SendEmailParams",
    "Service",
    "UserService",
    "render_otp_template",
]
