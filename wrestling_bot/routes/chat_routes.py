# /wrestling_bot/routes/chat_routes.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..completion import CompletionGateway
from ..config import Settings
from ..context import build_context
from ..db import get_db
from ..errors import UpstreamError, ValidationError
from ..memory import update_memory
from ..store import append_turn
from ..utils import get_app_settings, get_gateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

MISSING_FIELDS_ERROR = "Missing user_id or message."


# ===== Pydantic models =====
class ChatReq(BaseModel):
    # Optional so that missing fields reach the handler and get a 400, not a 422
    user_id: Optional[str] = None
    message: Optional[str] = None
    system_p: Optional[str] = None


class ChatResp(BaseModel):
    response: str


# ===== Endpoint =====
@router.post("/wrestling_bot", response_model=ChatResp)
def wrestling_bot(
    req: Optional[ChatReq] = None,
    db: Session = Depends(get_db),
    gateway: CompletionGateway = Depends(get_gateway),
    settings: Settings = Depends(get_app_settings),
):
    """
    One chat round:
      store user turn -> build context -> completion -> store reply -> update memory.
    If the completion fails the user turn stays stored and nothing else is written.
    """
    if req is None or not req.user_id or not req.message:
        raise ValidationError(MISSING_FIELDS_ERROR)

    user_id = req.user_id
    message = req.message
    logger.info("Incoming chat: user_id=%s message_len=%s", user_id, len(message))

    append_turn(db, user_id, message, "user")

    ctx = build_context(
        db,
        user_id,
        message,
        system_prompt=req.system_p,
        history_limit=settings.history_limit,
    )

    try:
        reply = gateway.complete(ctx.messages)
    except UpstreamError as e:
        logger.exception("Completion failed for user_id=%s: %s", user_id, e)
        raise

    append_turn(db, user_id, reply, "assistant")

    if update_memory(db, user_id, ctx.facts, message):
        logger.info("Memory updated for user_id=%s", user_id)

    return ChatResp(response=reply)
