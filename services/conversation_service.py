# services/conversation_service.py
from __future__ import annotations
import datetime as _dt, logging, math, time, uuid
from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy import func as sa_func

from db import SessionLocal, init_db
from models import Conversation, Message, DEFAULT_TITLE, ROLES
from services.errors import BadRequest, NotFound

logger = logging.getLogger(__name__)

LIST_LIMIT = 50

# messages.timestamp is a signed 64-bit column
TIMESTAMP_MIN, TIMESTAMP_MAX = -(2 ** 63), 2 ** 63 - 1


@dataclass
class ListResult:
    """Outcome of a listing: an empty list can mean "no data" or "store down"."""
    ok: bool
    conversations: List[dict] = field(default_factory=list)
    error: Optional[str] = None


def _now_ms() -> int:
    return int(time.time() * 1000)


def _iso(ts: Optional[_dt.datetime]) -> Optional[str]:
    return ts.isoformat() if ts else None


def _parse_uuid(val: Any) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(val)) if val else None
    except (ValueError, TypeError):
        return None


def _serialize_conversation(c: Conversation) -> dict:
    return {
        "id": str(c.id),
        "user_id": c.user_id,
        "title": c.title,
        "summary": c.summary or "",
        "created_at": _iso(c.created_at),
        "updated_at": _iso(c.updated_at),
    }


def _serialize_message(m: Message) -> dict:
    return {
        "id": str(m.id),
        "role": m.role,
        "content": m.content,
        "timestamp": m.timestamp,
    }


def _valid_timestamp(ts: Any) -> bool:
    if isinstance(ts, bool) or not isinstance(ts, (int, float)):
        return False
    if isinstance(ts, float) and not math.isfinite(ts):
        return False
    return TIMESTAMP_MIN <= ts <= TIMESTAMP_MAX


def _clean_messages(messages: Any) -> List[dict]:
    if not isinstance(messages, list):
        raise BadRequest("Missing required fields")
    cleaned: List[dict] = []
    for msg in messages:
        if not isinstance(msg, dict):
            raise BadRequest("Invalid message format")
        role, content = msg.get("role"), msg.get("content")
        if role not in ROLES:
            raise BadRequest(f"Invalid message role: {role!r}")
        if not isinstance(content, str):
            raise BadRequest("Message content must be a string")
        ts = msg.get("timestamp")
        if ts is not None and not _valid_timestamp(ts):
            raise BadRequest("Message timestamp must be a number")
        cleaned.append({"role": role, "content": content, "timestamp": int(ts) if ts else None})
    return cleaned


# ───────────── LIST ────────────────────────────────────────────────────────────
def list_conversations(user_id: Optional[str], limit: int = LIST_LIMIT) -> ListResult:
    if not user_id:
        raise BadRequest("User ID is required")

    try:
        with SessionLocal() as db:
            init_db(db.get_bind())
            msg_count = sa_func.count(Message.id).label("message_count")
            rows = (
                db.query(Conversation, msg_count)
                .outerjoin(Message, Message.conversation_id == Conversation.id)
                .filter(Conversation.user_id == user_id)
                .group_by(Conversation.id)
                .order_by(Conversation.updated_at.desc())
                .limit(limit)
                .all()
            )
            items = []
            for conv, count in rows:
                data = _serialize_conversation(conv)
                data["message_count"] = int(count or 0)
                items.append(data)
            return ListResult(ok=True, conversations=items)
    except Exception as e:
        logger.exception("Error fetching conversations for %s", user_id)
        return ListResult(ok=False, error=str(e) or e.__class__.__name__)


# ───────────── FETCH ONE ───────────────────────────────────────────────────────
def fetch_conversation(user_id: Optional[str], conversation_id: Any) -> dict:
    if not user_id:
        raise BadRequest("User ID is required")

    cid = _parse_uuid(conversation_id)
    with SessionLocal() as db:
        init_db(db.get_bind())
        conv = None
        if cid is not None:
            conv = (
                db.query(Conversation)
                .filter(Conversation.id == cid, Conversation.user_id == user_id)
                .first()
            )
        if conv is None:
            raise NotFound("Conversation not found")

        messages = (
            db.query(Message)
            .filter(Message.conversation_id == conv.id)
            .order_by(Message.timestamp.asc(), Message.created_at.asc())
            .all()
        )
        data = _serialize_conversation(conv)
        data["messages"] = [_serialize_message(m) for m in messages]
        return data


# ───────────── CREATE ──────────────────────────────────────────────────────────
def create_conversation(
    user_id: Optional[str],
    messages: Any,
    title: Optional[str] = None,
    summary: Optional[str] = None,
) -> dict:
    if not user_id or messages is None:
        raise BadRequest("Missing required fields")
    cleaned = _clean_messages(messages)

    with SessionLocal() as db:
        init_db(db.get_bind())
        conv = Conversation(
            user_id=user_id,
            title=title or DEFAULT_TITLE,
            summary=summary or "",
        )
        db.add(conv)
        db.flush()
        db.add_all([
            Message(
                conversation_id=conv.id,
                role=m["role"],
                content=m["content"],
                timestamp=m["timestamp"] or _now_ms(),
            )
            for m in cleaned
        ])
        # one commit: the conversation and its messages land together or not at all
        db.commit()
        db.refresh(conv)
        logger.info("Saved conversation %s with %d messages", conv.id, len(cleaned))
        return _serialize_conversation(conv)


# ───────────── RENAME ──────────────────────────────────────────────────────────
def rename_conversation(conversation_id: Any, title: Optional[str]) -> dict:
    if not conversation_id or not title:
        raise BadRequest("Missing required fields")

    cid = _parse_uuid(conversation_id)
    with SessionLocal() as db:
        init_db(db.get_bind())
        conv = db.get(Conversation, cid) if cid else None
        if conv is None:
            raise NotFound("Conversation not found")
        conv.title = title
        conv.updated_at = sa_func.now()
        db.commit()
        db.refresh(conv)
        return _serialize_conversation(conv)


# ───────────── DELETE ──────────────────────────────────────────────────────────
def delete_conversation(conversation_id: Any) -> bool:
    """Remove a conversation and its messages. Returns whether a row existed."""
    if not conversation_id:
        raise BadRequest("Conversation ID is required")

    cid = _parse_uuid(conversation_id)
    if cid is None:
        return False
    with SessionLocal() as db:
        init_db(db.get_bind())
        conv = db.get(Conversation, cid)
        if conv is None:
            return False
        db.delete(conv)
        db.commit()
        return True
