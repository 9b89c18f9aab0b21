"""
Authentication Use Cases

Login and the password reset flow.
"""

from .login_use_case import LoginUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .validate_reset_token_use_case import ValidateResetTokenUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase, confirm_match
from .dtos import RequestPasswordResetResponse

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    "confirm_match",
    # DTOs
    "RequestPasswordResetResponse",
]
