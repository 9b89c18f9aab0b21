from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field, field_validator

from config import ApplicationConfig
from account_gate.api.error import ServerError
from account_gate.api.utils.flash import flash
from account_gate.api.utils.responses import redirect, redirect_back
from account_gate.api.utils.templating import templates
from account_gate.app.services.notifier import INotifier
from account_gate.app.services.session_authenticator import ISessionAuthenticator
from account_gate.app.services.unit_of_work import UnitOfWork
from account_gate.app.use_cases.auth import (
    ConfirmPasswordResetUseCase,
    LoginUseCase,
    RequestPasswordResetUseCase,
    ValidateResetTokenUseCase,
    confirm_match,
)
from account_gate.depends import get_authenticator, get_notifier, get_unit_of_work

router = APIRouter()


class LoginForm(BaseModel):
    """
    Login form payload

    Email is not validated as an address here so malformed input gets the
    same "Failed to login." outcome as a wrong password.
    """

    email: str = Field(..., min_length=1, description="Account email address")
    password: str = Field(..., min_length=1, description="Account password")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class ForgotPasswordForm(BaseModel):
    """
    Forgot password form payload

    Any non-empty string is accepted so malformed or unknown addresses get
    the same "emailed" outcome as real ones.
    """

    email: str = Field(..., min_length=1, description="Account email address")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class ResetPasswordForm(BaseModel):
    """Reset password form payload"""

    password: str = Field(..., min_length=1, description="New password")
    password_confirm: str = Field(..., description="New password, repeated")


@router.get("/login", response_class=HTMLResponse, name="login_form")
async def login_form(request: Request):
    """Login page; also carries the forgot-password form."""
    return templates.TemplateResponse(request, "login.html", {"title": "Login"})


@router.post("/login")
async def login(
    request: Request,
    form: Annotated[LoginForm, Form()],
    uow: UnitOfWork = Depends(get_unit_of_work),
    authenticator: ISessionAuthenticator = Depends(get_authenticator),
):
    """
    Password Login

    Success establishes the session and redirects home; any credential
    failure redirects back to /login with a single generic message.
    """
    use_case = LoginUseCase(uow, authenticator)
    result = await use_case.execute(form.email, form.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            flash(request, "error", error.message)
            return redirect("/login")
        raise ServerError(error)

    authenticator.login(request, result.value)
    flash(request, "success", "You are now logged in.")
    return redirect("/")


@router.get("/logout")
async def logout(
    request: Request,
    authenticator: ISessionAuthenticator = Depends(get_authenticator),
):
    authenticator.logout(request)
    flash(request, "success", "You are now logged out.")
    return redirect("/")


@router.post("/account/forgot")
async def forgot(
    request: Request,
    form: Annotated[ForgotPasswordForm, Form()],
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotifier = Depends(get_notifier),
):
    """
    Request Password Reset

    Emails a reset link when the address belongs to an account.

    Security:
        - No email enumeration (same flash and redirect for every address)
        - Store or mail failures surface as the generic error page
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        notifier,
        ttl=timedelta(seconds=ApplicationConfig.RESET_TOKEN_TTL_SECONDS),
    )
    result = await use_case.execute(
        form.email,
        lambda token: str(request.url_for("reset_form", token=token)),
    )

    if result.is_err():
        raise ServerError(result.error)

    flash(request, "success", result.value.message)
    return redirect("/login")


@router.get("/account/reset/{token}", response_class=HTMLResponse, name="reset_form")
async def reset_form(
    request: Request,
    token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ValidateResetTokenUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_TOKEN":
            flash(request, "error", error.message)
            return redirect("/login")
        raise ServerError(error)

    return templates.TemplateResponse(
        request, "reset.html", {"title": "Reset your password", "token": token}
    )


@router.post("/account/reset/{token}")
async def update_password(
    request: Request,
    token: str,
    form: Annotated[ResetPasswordForm, Form()],
    uow: UnitOfWork = Depends(get_unit_of_work),
    authenticator: ISessionAuthenticator = Depends(get_authenticator),
):
    """
    Confirm Password Reset

    Flow:
    1. Passwords must match, otherwise redirect back to the form
    2. Password must fit the credential hash, otherwise redirect back
    3. Token must still be valid, otherwise redirect to /login
    4. Password is updated, token cleared and the user logged in
    """
    if not confirm_match(form.password, form.password_confirm):
        flash(request, "error", "Passwords do not match.")
        return redirect_back(request, fallback=f"/account/reset/{token}")

    use_case = ConfirmPasswordResetUseCase(uow, authenticator)
    result = await use_case.execute(token, form.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_PASSWORD":
            flash(request, "error", error.message)
            return redirect_back(request, fallback=f"/account/reset/{token}")
        if error.code == "INVALID_TOKEN":
            flash(request, "error", error.message)
            return redirect("/login")
        raise ServerError(error)

    authenticator.login(request, result.value)
    flash(request, "success", "Password has been reset. You are now logged in.")
    return redirect("/")
