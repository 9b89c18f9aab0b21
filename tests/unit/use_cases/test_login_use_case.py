"""
Unit tests for LoginUseCase
"""
from uuid import uuid4

import pytest

from account_gate.app.use_cases.auth.login_use_case import LoginUseCase
from account_gate.domain.entities import User


@pytest.mark.asyncio
async def test_successful_login(mock_uow, mock_authenticator):
    # Arrange
    user = User(id=uuid4(), email="user@example.com", password_hash="hash")
    mock_uow.users.get_by_email.return_value = user
    mock_authenticator.verify_credential.return_value = True
    use_case = LoginUseCase(mock_uow, mock_authenticator)

    # Act
    result = await use_case.execute("user@example.com", "SecurePass123!")

    # Assert
    assert result.is_ok()
    assert result.value is user
    mock_authenticator.verify_credential.assert_called_once_with(user, "SecurePass123!")


@pytest.mark.asyncio
async def test_login_wrong_password(mock_uow, mock_authenticator):
    user = User(id=uuid4(), email="user@example.com", password_hash="hash")
    mock_uow.users.get_by_email.return_value = user
    mock_authenticator.verify_credential.return_value = False
    use_case = LoginUseCase(mock_uow, mock_authenticator)

    result = await use_case.execute("user@example.com", "WrongPassword!")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Failed to login."


@pytest.mark.asyncio
async def test_login_nonexistent_user_still_checks_password(mock_uow, mock_authenticator):
    """Unknown email goes through the same hash check (constant time)"""
    mock_uow.users.get_by_email.return_value = None
    use_case = LoginUseCase(mock_uow, mock_authenticator)

    result = await use_case.execute("nobody@example.com", "whatever")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_authenticator.verify_credential.assert_called_once_with(None, "whatever")


@pytest.mark.asyncio
async def test_login_does_not_write(mock_uow, mock_authenticator):
    user = User(id=uuid4(), email="user@example.com", password_hash="hash")
    mock_uow.users.get_by_email.return_value = user
    mock_authenticator.verify_credential.return_value = True

    await LoginUseCase(mock_uow, mock_authenticator).execute("user@example.com", "pw")

    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()
