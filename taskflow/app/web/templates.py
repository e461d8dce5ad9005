from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi.templating import Jinja2Templates

from taskflow.app.config import get_settings
from taskflow.app.web.template_helpers import date_input_value, format_date, get_template_globals

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


@lru_cache()
def get_templates() -> Jinja2Templates:
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    settings = get_settings()
    templates.env.globals.update(get_template_globals())
    templates.env.globals["app_title"] = settings.app_title
    templates.env.globals["ui_lang"] = settings.ui_lang
    templates.env.filters["format_date"] = format_date
    templates.env.filters["date_input_value"] = date_input_value
    return templates
