from __future__ import annotations

from functools import lru_cache

from fastapi.templating import Jinja2Templates

from tasklist.app.config import get_settings


@lru_cache()
def get_templates() -> Jinja2Templates:
    settings = get_settings()
    templates = Jinja2Templates(directory=settings.templates_dir)
    templates.env.globals["app_title"] = "Todo"
    return templates
