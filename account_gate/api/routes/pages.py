from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from account_gate.depends import get_current_user, get_optional_user_id
from account_gate.domain.entities import User
from account_gate.api.utils.templating import templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse, name="home")
async def home(request: Request, user_id: Optional[UUID] = Depends(get_optional_user_id)):
    return templates.TemplateResponse(
        request, "index.html", {"title": "Home", "logged_in": user_id is not None}
    )


@router.get("/account", response_class=HTMLResponse, name="account")
async def account(request: Request, user: User = Depends(get_current_user)):
    """
    Account page - only reachable with a logged-in session.

    Anonymous requests are redirected to /login by require_authenticated.
    """
    return templates.TemplateResponse(
        request, "account.html", {"title": "Your account", "user": user, "logged_in": True}
    )
