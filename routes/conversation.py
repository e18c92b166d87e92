import azure.functions as func
import logging
from utils.cors import cors_response, json_response, error_response
from services.parser_service import parse_json_body
from services import conversation_service as conv_svc
from services.errors import ServiceError

logger = logging.getLogger(__name__)
bp = func.Blueprint()


def _get(req: func.HttpRequest) -> func.HttpResponse:
    user_id = req.params.get("userId")
    conversation_id = req.params.get("conversationId")

    if conversation_id:
        data = conv_svc.fetch_conversation(user_id, conversation_id)
        return json_response({"conversation": data})

    result = conv_svc.list_conversations(user_id)
    if not result.ok:
        logger.warning("Conversation list degraded to empty: %s", result.error)
    return json_response({"conversations": result.conversations})


def _post(req: func.HttpRequest) -> func.HttpResponse:
    body = parse_json_body(req)
    data = conv_svc.create_conversation(
        body.get("userId"),
        body.get("messages"),
        title=body.get("title"),
        summary=body.get("summary"),
    )
    return json_response({"conversation": data})


def _put(req: func.HttpRequest) -> func.HttpResponse:
    body = parse_json_body(req)
    data = conv_svc.rename_conversation(body.get("conversationId"), body.get("title"))
    return json_response({"conversation": data})


def _delete(req: func.HttpRequest) -> func.HttpResponse:
    conversation_id = req.params.get("conversationId")
    removed = conv_svc.delete_conversation(conversation_id)
    if not removed:
        logger.info("Delete of %s was a no-op", conversation_id)
    return json_response({"success": True})


HANDLERS = {"GET": _get, "POST": _post, "PUT": _put, "DELETE": _delete}

FAILURE_MESSAGES = {
    "GET": "Failed to fetch conversation",
    "POST": "Failed to save conversation",
    "PUT": "Failed to update conversation",
    "DELETE": "Failed to delete conversation",
}

# ────────────────────────────────────────────────────────────
#  /conversations  (list, fetch, create, rename, delete)
# ────────────────────────────────────────────────────────────
@bp.function_name(name="Conversations")
@bp.route(route="conversations",
          methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
          auth_level=func.AuthLevel.ANONYMOUS)
def conversations(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_response(204)

    handler = HANDLERS.get(req.method)
    if handler is None:
        return json_response({"error": "Method not allowed"}, 405)

    try:
        return handler(req)
    except ServiceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Failed to process %s /conversations", req.method)
        return json_response({"error": FAILURE_MESSAGES[req.method]}, 500)
