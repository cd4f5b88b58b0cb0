# src/pairchat/api/endpoints/chats.py
"""Chat listing and metadata endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from pairchat.api.dependencies import ChatQueryServiceDep
from pairchat.schemas.chat import ChatMetadataResponse, ChatSummaryResponse
from pairchat.schemas.common import ErrorResponse

router = APIRouter(prefix="/chats", tags=["chats"])


@router.get(
    "/user/{user_id}",
    response_model=list[ChatSummaryResponse],
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def list_user_chats(
    user_id: str,
    chat_service: ChatQueryServiceDep,
) -> list[ChatSummaryResponse]:
    """List the user's chats with a preview of the latest message."""
    summaries = chat_service.list_chats_for_user(user_id)
    return [ChatSummaryResponse.from_domain(summary) for summary in summaries]


@router.get(
    "/{chat_id}",
    response_model=ChatMetadataResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_chat_metadata(
    chat_id: str,
    chat_service: ChatQueryServiceDep,
) -> ChatMetadataResponse:
    """Get timestamps, unread count and per-participant stats for a chat."""
    return ChatMetadataResponse.from_domain(chat_service.get_chat_metadata(chat_id))
