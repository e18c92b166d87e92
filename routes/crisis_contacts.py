import azure.functions as func
import logging
from utils.cors import cors_response, json_response, error_response
from services.parser_service import parse_json_body
from services.crisis_contact_service import get_crisis_contact, create_crisis_contact
from services.errors import ServiceError

logger = logging.getLogger(__name__)
bp = func.Blueprint()


@bp.function_name(name="CrisisContacts")
@bp.route(route="crisis-contacts", methods=["GET", "POST", "OPTIONS"], auth_level=func.AuthLevel.ANONYMOUS)
def crisis_contacts(req: func.HttpRequest) -> func.HttpResponse:
    if req.method == "OPTIONS":
        return cors_response(204)

    # Lookup never fails: the service falls back to a built-in record
    if req.method == "GET":
        contact = get_crisis_contact(req.params.get("country"))
        return json_response({"contact": contact})

    try:
        body = parse_json_body(req)
        contact = create_crisis_contact(
            body.get("countryCode"),
            body.get("countryName"),
            phone_number=body.get("phoneNumber"),
            sms_number=body.get("smsNumber"),
            description=body.get("description"),
        )
        return json_response({"contact": contact})
    except ServiceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error creating crisis contact")
        return json_response({"error": "Failed to create crisis contact"}, 500)
