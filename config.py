import os

DEFAULT_COUNTRY = "US"

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
CHAT_MODEL = "llama3-70b-8192"
CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 400

SYSTEM_PROMPT = """You are a supportive AI companion designed to provide empathetic responses and emotional support.

Your role:
- Listen actively and respond with empathy and understanding
- Help users explore their feelings in a non-judgmental way
- Provide general emotional support and coping strategies
- Maintain a warm, professional, and supportive tone

IMPORTANT: You are NOT a licensed psychologist. Always remind users to seek professional help for serious concerns.

Respond in the same language as the user. Keep responses concise, supportive, and helpful."""


# Read at call time so a restarted worker (or a test) picks up env changes.
def database_url() -> str | None:
    return os.getenv("DATABASE_URL") or None


def groq_api_key() -> str | None:
    return os.getenv("GROQ_API_KEY") or None


def groq_base_url() -> str:
    return os.getenv("GROQ_BASE_URL", GROQ_BASE_URL)


def chat_settings() -> dict:
    return {
        "model": os.getenv("CHAT_MODEL", CHAT_MODEL),
        "temperature": float(os.getenv("CHAT_TEMPERATURE", CHAT_TEMPERATURE)),
        "max_tokens": int(os.getenv("CHAT_MAX_TOKENS", CHAT_MAX_TOKENS)),
    }


def system_prompt() -> str:
    return os.getenv("CHAT_SYSTEM_PROMPT") or SYSTEM_PROMPT


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def db_pool_size() -> int:
    return int(os.getenv("DB_POOL_SIZE", "5"))


def db_max_overflow() -> int:
    return int(os.getenv("DB_MAX_OVERFLOW", "2"))
