from pathlib import Path

from fastapi.templating import Jinja2Templates

from cuentas.core.auth_utils import get_csrf_token, get_user_safe


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


# --- Globales disponibles en todas las vistas
templates.env.globals["get_user"] = get_user_safe
templates.env.globals["csrf_token"] = get_csrf_token
