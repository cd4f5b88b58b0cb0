# src/pairchat/api/endpoints/messages.py
"""Message endpoints for the Pairchat API."""

from __future__ import annotations

from fastapi import APIRouter, status

from pairchat.api.dependencies import MessageServiceDep
from pairchat.schemas.common import ErrorResponse
from pairchat.schemas.message import MessageCreate, MessageResponse, MessageStatusUpdate

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def send_message(
    message_data: MessageCreate,
    message_service: MessageServiceDep,
) -> MessageResponse:
    """Send a message, opening a chat between the two users if needed."""
    message = message_service.send_message(
        message_data.sender,
        message_data.recipient,
        message_data.content,
    )
    return MessageResponse.from_domain(message)


@router.get(
    "/user/{user_id}",
    response_model=list[MessageResponse],
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def get_user_messages(
    user_id: str,
    message_service: MessageServiceDep,
) -> list[MessageResponse]:
    """Get every message the user sent or received, in send order."""
    messages = message_service.get_messages_for_user(user_id)
    return [MessageResponse.from_domain(message) for message in messages]


@router.get(
    "/chat/{chat_id}",
    response_model=list[MessageResponse],
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_chat_messages(
    chat_id: str,
    message_service: MessageServiceDep,
) -> list[MessageResponse]:
    """Get a chat's messages in chronological order."""
    messages = message_service.get_messages_for_chat(chat_id)
    return [MessageResponse.from_domain(message) for message in messages]


@router.patch(
    "/{message_id}/status",
    response_model=MessageResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
async def update_message_status(
    message_id: str,
    status_data: MessageStatusUpdate,
    message_service: MessageServiceDep,
) -> MessageResponse:
    """Set a message's status to delivered, read or failed."""
    message = message_service.update_message_status(message_id, status_data.status)
    return MessageResponse.from_domain(message)
