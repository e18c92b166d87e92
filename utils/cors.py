import json
from typing import Any, Union
import azure.functions as func

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

def cors_response(
    body: Union[str, bytes, int] = b"",
    status: int = 200,
    mime: str = "text/plain"
) -> func.HttpResponse:
    if isinstance(body, int):
        # cors_response(204) shorthand for empty preflight replies
        body, status = b"", body
    return func.HttpResponse(
        body=body,
        status_code=status,
        mimetype=mime,
        headers=dict(CORS_HEADERS),
    )

def json_response(payload: Any, status: int = 200) -> func.HttpResponse:
    return cors_response(json.dumps(payload, ensure_ascii=False), status, "application/json")

def error_response(exc) -> func.HttpResponse:
    """Render a services.errors.ServiceError as its JSON body and status."""
    return json_response(exc.to_dict(), exc.status_code)
