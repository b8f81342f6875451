"""
Chat Routes

POST /chat/message - Scripted career assistant reply
"""

from fastapi import APIRouter, HTTPException, Depends

from career_portal.core.auth import get_current_user
from career_portal.models.documents import User
from career_portal.services.chat_service import generate_reply
from career_portal.schemas.schemas import ChatRequest, ChatResponse, ChatAction

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.post("/message", response_model=ChatResponse)
async def chat_message(request: ChatRequest, user: User = Depends(get_current_user)):
    if not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    reply = generate_reply(request.message, user)
    return ChatResponse(
        response=reply.text,
        suggestions=reply.suggestions,
        actions=[ChatAction(**a) for a in reply.actions]
    )
