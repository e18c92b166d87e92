import azure.functions as func
import logging
from functools import lru_cache
from pathlib import Path
from utils.cors import cors_response

logger = logging.getLogger(__name__)
bp = func.Blueprint()

INDEX_HTML = Path(__file__).resolve().parent.parent / "static" / "index.html"


@lru_cache(maxsize=1)
def _index_page() -> str:
    return INDEX_HTML.read_text(encoding="utf-8")


@bp.function_name(name="Index")
@bp.route(route="app", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def index(req: func.HttpRequest) -> func.HttpResponse:
    try:
        return cors_response(_index_page(), 200, "text/html")
    except OSError:
        logger.exception("Could not read %s", INDEX_HTML)
        return cors_response("Page unavailable", 500)
