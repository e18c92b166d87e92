from typing import Any

import azure.functions as func

from services.errors import BadRequest

def parse_json_body(req: func.HttpRequest) -> dict:
    """Decode a JSON object body or raise BadRequest."""
    try:
        body: Any = req.get_json()
    except ValueError:
        raise BadRequest("Invalid JSON body")
    if not isinstance(body, dict):
        raise BadRequest("Invalid JSON body")
    return body
