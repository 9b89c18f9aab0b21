from pathlib import Path

from fastapi.templating import Jinja2Templates

from .flash import get_flashed_messages

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.globals["get_flashed_messages"] = get_flashed_messages
