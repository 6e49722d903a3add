"""Chat API routes for follow-up questions on a scan."""

from fastapi import APIRouter

from nutriscan_api.api.dependencies import ChatServiceDep, CurrentUserDep
from nutriscan_api.models.chat import ChatReply, ChatRequest

router = APIRouter()


@router.post("/{session_id}/messages", response_model=ChatReply)
async def send_message(
    session_id: str,
    request: ChatRequest,
    user_id: CurrentUserDep,
    service: ChatServiceDep,
):
    """
    Ask a follow-up question about a scanned product.

    The answer is grounded in the scan's analysis and the caller's health
    profile. If the AI provider fails, the reply is an apology carrying the
    reason and `is_error` is true; nothing is stored for it.

    - **message**: The user's question
    """
    context = await service.load(session_id, user_id)
    exchange = await service.send_message(context, request.message)

    return ChatReply(
        session_id=session_id,
        message=exchange.turn.text,
        message_id=exchange.message_id,
        is_error=exchange.is_error,
    )
