"""One-shot status messages carried across a redirect in a cookie."""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote, unquote

from fastapi import Request
from starlette.responses import Response

from tasklist.app.config import get_settings
from tasklist.app.schemas import FlashMessage


def _cookie_name() -> str:
    return get_settings().flash_cookie_name


def set_flash(response: Response, name: str, msg: str) -> None:
    value = quote(f"{name}:{msg}", safe="")
    response.set_cookie(key=_cookie_name(), value=value, httponly=True, samesite="lax")


def read_flash(request: Request) -> Optional[FlashMessage]:
    raw = request.cookies.get(_cookie_name())
    if not raw:
        return None
    name, sep, msg = unquote(raw).partition(":")
    if not sep:
        return None
    return FlashMessage(name=name, msg=msg)


def clear_flash(response: Response) -> None:
    response.delete_cookie(_cookie_name(), httponly=True, samesite="lax")
