"""Chat API controller: sending messages and the sending flag."""

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Path, status

from slate.core.dependencies import get_chat_service, get_client_state
from slate.core.state import ClientState
from slate.domains.chat.service import ChatService
from slate.exceptions.chat import TurnInProgressError
from slate.schemas.chat import ChatStatusResponse, SendMessageRequest, TurnResponse


router = APIRouter(prefix="/api", tags=["chat"])


@router.post(
    "/conversations/{conversation_id}/messages",
    response_model=TurnResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def send_chat_message(
    background_tasks: BackgroundTasks,
    conversation_id: UUID = Path(..., description="Conversation ID"),
    chat_request: SendMessageRequest = Body(...),
    state: ClientState = Depends(get_client_state),
    service: ChatService = Depends(get_chat_service),
):
    """Send a user message to the selected model.

    Both the user message and the assistant placeholder are stored before
    this returns; the remote call completes in the background and the UI
    polls the conversation's messages for the reply.
    """
    if state.is_sending:
        raise TurnInProgressError()

    turn = await service.begin_turn(conversation_id, chat_request.message)
    background_tasks.add_task(service.complete_turn, turn)

    return TurnResponse(
        conversation_id=turn.conversation_id,
        user_message=turn.user_message,
        assistant_message=turn.assistant_message,
    )


@router.get("/chat/status", response_model=ChatStatusResponse)
async def get_chat_status(state: ClientState = Depends(get_client_state)):
    """Report whether a turn is in flight so the UI can disable input."""
    return ChatStatusResponse(is_sending=state.is_sending)
