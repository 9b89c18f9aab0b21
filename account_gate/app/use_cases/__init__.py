"""
Use Cases

Organized by domain folder; auth/ holds login and password reset.
"""

from .auth import (
    LoginUseCase,
    RequestPasswordResetUseCase,
    ValidateResetTokenUseCase,
    ConfirmPasswordResetUseCase,
    confirm_match,
)

__all__ = [
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    "confirm_match",
]
