"""
Jinja2 templates and form-post helpers shared by the page handlers.
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from cammcomedy.core.config import get_settings
from cammcomedy.schemas.lineup import Role

templates = Jinja2Templates(directory=get_settings().TEMPLATES_DIR)
templates.env.globals["roles"] = [role.value for role in Role]


def see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def redirect_back(request: Request) -> RedirectResponse:
    """Redirect to the page that was just posted to, query string included."""
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return see_other(url)


def require_id(value) -> int:
    """Parse an id from a query string or form field; 404 when missing or malformed."""
    try:
        return int(value)
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")


def blank_to_none(value: str) -> str | None:
    value = value.strip()
    return value or None
