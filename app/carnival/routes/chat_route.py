import logging

from fastapi import APIRouter

from carnival.controller.chat_assistant import generate_chat_response
from carnival.response_model import PlainResponseModel, InternalErrorResponse
from carnival.schema.concierge_schema import ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter()


# ----------------------- Chat -----------------------
@router.post("", response_description="Stateless concierge reply")
async def chat(payload: ChatRequest):
    try:
        messages = [turn.model_dump() for turn in payload.messages]
        reply = await generate_chat_response(messages)
        return PlainResponseModel({"message": reply})
    except Exception:
        logger.exception("Chat error")
        return InternalErrorResponse()


__all__ = ["router"]
