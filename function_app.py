import os, json, logging, traceback, datetime as _dt
import azure.functions as func

# Only try dotenv locally (Azure often doesn't set WEBSITE_INSTANCE_ID; use a broader check)
IS_AZURE = bool(os.getenv("WEBSITE_SITE_NAME")) or os.getenv("FUNCTIONS_WORKER_RUNTIME") == "python"
if not IS_AZURE:
    from dotenv import load_dotenv
    load_dotenv()

import config
from db import init_db

logging.basicConfig(level=config.log_level())
logger = logging.getLogger(__name__)

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

REGISTERED: list[str] = []
FAILURES: dict[str, dict] = {}

def _try(modpath: str, name: str):
    try:
        mod = __import__(modpath, fromlist=["bp"])
        app.register_functions(getattr(mod, "bp"))
        REGISTERED.append(name)
    except Exception as e:
        logger.exception("Failed to register %s", name)
        FAILURES[name] = {"error": repr(e), "trace": traceback.format_exc()}

def _bootstrap_schema():
    # Create tables once per worker; store operations still re-check lazily
    try:
        init_db()
    except Exception as e:
        logger.warning("Schema bootstrap skipped: %s", e)
        FAILURES["schema"] = {"error": repr(e)}

# 🔹 Register AT STARTUP so the Functions host discovers HTTP triggers
_try("routes.chat", "chat")
_try("routes.conversation", "conversation")
_try("routes.crisis_contacts", "crisis_contacts")
_try("routes.ui", "ui")
_bootstrap_schema()

@app.function_name(name="Ping")
@app.route(route="ping", methods=["GET"])
def ping(req: func.HttpRequest) -> func.HttpResponse:
    return func.HttpResponse("ok", mimetype="text/plain")

# Connection probe used by the page's status indicator; never echoes the key
@app.function_name(name="Status")
@app.route(route="test", methods=["GET"])
def status(req: func.HttpRequest) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps({
            "status": "API working",
            "timestamp": _dt.datetime.now(_dt.timezone.utc).isoformat(),
            "groqKey": "Present" if config.groq_api_key() else "Missing",
        }),
        mimetype="application/json",
    )

# Diagnostics (read-only)
@app.function_name(name="Diag")
@app.route(route="_diag", methods=["GET"])
def diag(req: func.HttpRequest) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps({"registered": REGISTERED, "failures": FAILURES}),
        mimetype="application/json"
    )
