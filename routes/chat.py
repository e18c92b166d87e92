import azure.functions as func
import logging
from utils.cors import cors_response, json_response, error_response
from services.parser_service import parse_json_body
from services.chat_service import relay_chat
from services.errors import ServiceError, ProcessingError

logger = logging.getLogger(__name__)
bp = func.Blueprint()

# ────────────────────────────────────────────────────────────
#  /chat  – one exchange with the completion provider
# ────────────────────────────────────────────────────────────
@bp.function_name(name="Chat")
@bp.route(route="chat", methods=["POST", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
def chat(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_response(204)

    try:
        body = parse_json_body(req)
        answer = relay_chat(body.get("messages"))
        return json_response({"message": answer})
    except ServiceError as e:
        return error_response(e)
    except Exception as e:
        logger.exception("Chat API error")
        return error_response(ProcessingError(str(e) or None))
