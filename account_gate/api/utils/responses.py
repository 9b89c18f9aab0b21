from urllib.parse import urlsplit

from fastapi import Request, status
from fastapi.responses import RedirectResponse


def redirect(url: str) -> RedirectResponse:
    # 303 so browsers follow a POST with a GET
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def redirect_back(request: Request, fallback: str) -> RedirectResponse:
    """Redirect to the Referer when it points at this site, else to fallback."""
    referer = request.headers.get("referer")
    if referer:
        target = urlsplit(referer)
        if target.netloc == request.url.netloc:
            path = target.path or "/"
            return redirect(f"{path}?{target.query}" if target.query else path)
    return redirect(fallback)
