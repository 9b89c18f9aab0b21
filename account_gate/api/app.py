from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from .error import LoginRequired, ServerError
from .utils.flash import flash
from .utils.responses import redirect, redirect_back
from .utils.templating import templates
import logging

logger = logging.getLogger(__name__)

FORM_INVALID_MESSAGE = "Please check the form and try again."


async def handle_login_required(request: Request, exc: LoginRequired):
    flash(request, "error", exc.message)
    return redirect("/login")


async def handle_validation_error(request: Request, exc: RequestValidationError):
    fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    logger.warning(f"Form validation failed on {request.url.path}: {fields}")
    flash(request, "error", FORM_INVALID_MESSAGE)
    return redirect_back(request, fallback="/")


def render_error_page(request: Request):
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": "Something went wrong"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code}")
    return render_error_page(request)


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return render_error_page(request)


def create_app(ApplicationConfig, lifespan=None) -> FastAPI:
    if lifespan is None:
        from account_gate.depends import init_db

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            await init_db()
            yield

    app = FastAPI(title="Account Gate", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        SessionMiddleware,
        secret_key=ApplicationConfig.SESSION_SECRET,
        session_cookie=ApplicationConfig.SESSION_COOKIE,
        https_only=ApplicationConfig.SESSION_HTTPS_ONLY,
        same_site="lax",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from account_gate.api.routes import auth, health_check, pages

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(pages.router, tags=["Pages"])
    app.include_router(auth.router, tags=["Authentication"])

    app.add_exception_handler(LoginRequired, handle_login_required)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
