# modules/llm_client.py
from functools import lru_cache
from openai import OpenAI

import config

@lru_cache(maxsize=4)
def client(api_key: str, base_url: str | None = None) -> OpenAI:
    # Groq speaks the OpenAI wire format; retries stay off so failures surface once
    return OpenAI(api_key=api_key, base_url=base_url or config.groq_base_url(), max_retries=0)
