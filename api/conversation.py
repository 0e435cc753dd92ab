"""
Conversation history API routes
"""
from fastapi import APIRouter, HTTPException
from typing import Optional

from models.conversation import ChatMessage, ConversationSummary, RoomMessage, RoomMessageResult
from models.request import CreateConversationRequest, UpdateTitleRequest
from models.response import ConversationListResponse, ConversationResponse, SuccessResponse
from services.conversation_service import conversation_service
from utils.logger import get_logger
from utils.validators import validate_chat_message

logger = get_logger(__name__)
router = APIRouter()

def _conversation_response(conversation) -> ConversationResponse:
    return ConversationResponse(
        conversation=conversation,
        streaming_messages=conversation_service.get_streaming_messages(conversation.id),
        transcript=conversation_service.get_transcript(conversation.id)
    )

@router.get("/conversations", response_model=ConversationListResponse)
async def list_conversations() -> ConversationListResponse:
    """List conversations, most recently updated first"""
    conversations = await conversation_service.list_conversations()
    return ConversationListResponse(
        conversations=[ConversationSummary.from_conversation(c) for c in conversations],
        total=len(conversations)
    )

@router.post("/conversations", response_model=ConversationResponse)
async def create_or_get_conversation(request: Optional[CreateConversationRequest] = None) -> ConversationResponse:
    """Return the conversation with the given id, creating it if needed"""
    conversation_id = request.conversation_id if request else None
    conversation = await conversation_service.create_or_get_conversation(conversation_id)
    return _conversation_response(conversation)

@router.delete("/conversations", response_model=SuccessResponse)
async def clear_conversations() -> SuccessResponse:
    """Delete all conversations"""
    count = await conversation_service.clear_all()
    logger.info("Conversations cleared", count=count)
    return SuccessResponse(success=True)

@router.get("/conversations/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(conversation_id: str) -> ConversationResponse:
    """Get a conversation with its messages"""
    conversation = await conversation_service.get_conversation(conversation_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return _conversation_response(conversation)

@router.delete("/conversations/{conversation_id}", response_model=SuccessResponse)
async def delete_conversation(conversation_id: str) -> SuccessResponse:
    """Delete a conversation"""
    if not await conversation_service.delete_conversation(conversation_id):
        raise HTTPException(status_code=404, detail="Conversation not found")
    return SuccessResponse(success=True)

@router.put("/conversations/{conversation_id}/title", response_model=ConversationResponse)
async def update_conversation_title(conversation_id: str, request: UpdateTitleRequest) -> ConversationResponse:
    """Rename a conversation"""
    conversation = await conversation_service.update_title(conversation_id, request.title)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return _conversation_response(conversation)

@router.post("/conversations/{conversation_id}/messages", response_model=ConversationResponse)
async def add_message(conversation_id: str, message: ChatMessage) -> ConversationResponse:
    """Append a message; a message with an existing id replaces it"""
    validate_chat_message(message.content)
    conversation = await conversation_service.add_message(conversation_id, message)
    return _conversation_response(conversation)

@router.post("/conversations/{conversation_id}/events", response_model=RoomMessageResult)
async def apply_room_message(conversation_id: str, room_message: RoomMessage) -> RoomMessageResult:
    """Apply a ZEGO room channel message (ASR or LLM result)"""
    return await conversation_service.apply_room_message(conversation_id, room_message)
