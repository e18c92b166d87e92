# services/chat_service.py
from __future__ import annotations
import logging
from typing import Any, List

import openai

import config
from modules import llm_client
from services.errors import (
    BadRequest,
    ConfigurationError,
    ProcessingError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

EMPTY_REPLY = "I’m sorry, I couldn’t generate a response."


def _validate_turns(messages: Any) -> List[dict]:
    if not isinstance(messages, list):
        raise BadRequest("Invalid messages format")
    turns: List[dict] = []
    for m in messages:
        if not isinstance(m, dict) or "role" not in m or "content" not in m:
            raise BadRequest("Invalid messages format")
        turns.append({"role": m["role"], "content": m["content"]})
    return turns


def build_prompt(turns: List[dict]) -> List[dict]:
    """Fixed system instruction first, then the caller's turns untouched."""
    return [{"role": "system", "content": config.system_prompt()}, *turns]


def _response_body(exc: openai.APIStatusError) -> str:
    try:
        return exc.response.text
    except Exception:
        return "<no body>"


def relay_chat(messages: Any) -> str:
    turns = _validate_turns(messages)

    api_key = config.groq_api_key()
    if not api_key:
        raise ConfigurationError("GROQ_API_KEY is missing")

    try:
        rsp = llm_client.client(api_key).chat.completions.create(
            messages=build_prompt(turns),
            stream=False,
            **config.chat_settings(),
        )
    except openai.APIStatusError as e:
        body = _response_body(e)
        logger.error("Groq API error: %s %s", e.status_code, body)
        raise UpstreamError(e.status_code, body) from e
    except Exception as e:
        logger.exception("Chat API error")
        raise ProcessingError(str(e) or None) from e

    try:
        content = rsp.choices[0].message.content if rsp.choices else None
    except (AttributeError, IndexError, TypeError) as e:
        logger.exception("Malformed completion payload")
        raise ProcessingError(str(e) or None) from e
    return content or EMPTY_REPLY
