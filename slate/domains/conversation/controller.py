"""Conversation API controller with FastAPI endpoints."""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Query, status

from slate.core.dependencies import get_conversation_service
from slate.domains.conversation.service import ConversationService
from slate.schemas.base import ResponseSchema
from slate.schemas.chat import (
    ConversationCreate,
    ConversationDetailResponse,
    ConversationResponse,
    ConversationUpdate,
    MessageResponse,
)


router = APIRouter(prefix="/api/conversations", tags=["conversations"])


@router.get("", response_model=list[ConversationResponse])
async def list_conversations(
    search: str | None = Query(None, description="Filter by title or message content"),
    service: ConversationService = Depends(get_conversation_service),
):
    """List conversations, most recently active first."""
    conversations = await service.list_conversations(search=search)
    return [ConversationResponse.model_validate(c) for c in conversations]


@router.post("", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
async def create_conversation(
    payload: ConversationCreate | None = Body(None),
    service: ConversationService = Depends(get_conversation_service),
):
    """Create a new, empty conversation."""
    payload = payload or ConversationCreate()
    conversation = await service.create_conversation(
        title=payload.title, selected_model=payload.selected_model
    )
    return ConversationResponse.model_validate(conversation)


@router.get("/{conversation_id}", response_model=ConversationDetailResponse)
async def get_conversation(
    conversation_id: UUID = Path(..., description="Conversation ID"),
    service: ConversationService = Depends(get_conversation_service),
):
    """Get a conversation with its messages in display order."""
    conversation = await service.get_conversation(conversation_id)
    messages = await service.list_messages(conversation_id)

    return ConversationDetailResponse(
        **ConversationResponse.model_validate(conversation).model_dump(),
        messages=[MessageResponse.model_validate(m) for m in messages],
    )


@router.patch("/{conversation_id}", response_model=ConversationResponse)
async def update_conversation(
    update_data: ConversationUpdate,
    conversation_id: UUID = Path(..., description="Conversation ID"),
    service: ConversationService = Depends(get_conversation_service),
):
    """Rename a conversation, pick its model or toggle reasoning mode.

    Only provided fields will be updated; others remain unchanged.
    """
    conversation = await service.update_conversation(
        conversation_id,
        title=update_data.title,
        selected_model=update_data.selected_model,
        think_harder_enabled=update_data.think_harder_enabled,
    )
    return ConversationResponse.model_validate(conversation)


@router.delete("/{conversation_id}", response_model=ResponseSchema)
async def delete_conversation(
    conversation_id: UUID = Path(..., description="Conversation ID"),
    service: ConversationService = Depends(get_conversation_service),
):
    """Delete a conversation and all of its messages.

    A UI holding this conversation as its selection must clear it.
    """
    await service.delete_conversation(conversation_id)
    return ResponseSchema(
        status="success",
        message="Conversation deleted successfully",
        data={"conversation_id": str(conversation_id)},
    )


@router.get("/{conversation_id}/messages", response_model=list[MessageResponse])
async def list_messages(
    conversation_id: UUID = Path(..., description="Conversation ID"),
    search: str | None = Query(None, description="Filter by message content"),
    service: ConversationService = Depends(get_conversation_service),
):
    """List a conversation's messages, oldest first."""
    await service.get_conversation(conversation_id)
    messages = await service.list_messages(conversation_id, search=search)
    return [MessageResponse.model_validate(m) for m in messages]
