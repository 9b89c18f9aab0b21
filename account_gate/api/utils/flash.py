"""
Flash messages stored in the signed session cookie.

Messages survive exactly one redirect: they are queued here and popped
by the next template that calls get_flashed_messages.
"""

from typing import List, Tuple

from starlette.requests import HTTPConnection

FLASH_SESSION_KEY = "_flashes"


def flash(request: HTTPConnection, category: str, message: str) -> None:
    flashes = request.session.get(FLASH_SESSION_KEY, [])
    flashes.append([category, message])
    request.session[FLASH_SESSION_KEY] = flashes


def get_flashed_messages(request: HTTPConnection) -> List[Tuple[str, str]]:
    if "session" not in request.scope:
        return []
    return [tuple(item) for item in request.session.pop(FLASH_SESSION_KEY, [])]
