"""
Conversation History Models
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from enum import Enum

from utils.id_generator import generate_message_id
from utils.time_utils import now_ms

DEFAULT_TITLE = "New Conversation"

class MessageSender(str, Enum):
    """Who wrote a message"""
    USER = "user"
    AI = "ai"

class MessageType(str, Enum):
    """How a message was produced"""
    TEXT = "text"
    VOICE = "voice"

class RoomCommand(int, Enum):
    """Cmd values of ZEGO room channel messages"""
    ASR_RESULT = 3
    LLM_RESULT = 4

class ChatMessage(BaseModel):
    """A single chat message"""
    id: str = Field(default_factory=generate_message_id, description="Message ID")
    content: str = Field(..., description="Message content")
    sender: MessageSender = Field(..., description="user or ai")
    timestamp: int = Field(default_factory=now_ms, description="Epoch milliseconds")
    type: MessageType = Field(default=MessageType.TEXT, description="text or voice")
    is_streaming: Optional[bool] = Field(None, description="True while an ai reply is still arriving")

    model_config = {
        "use_enum_values": True,
        "json_schema_extra": {
            "example": {
                "id": "5c1a5c2e-8c61-4a8e-9a57-0d0f0c6f4c11",
                "content": "Hello!",
                "sender": "user",
                "timestamp": 1718000000000,
                "type": "text"
            }
        }
    }

class ConversationMetadata(BaseModel):
    total_messages: int = 0
    last_ai_response: Optional[str] = None

class ConversationMemory(BaseModel):
    """A conversation and its ordered messages"""
    id: str = Field(..., description="Conversation ID")
    title: str = Field(default=DEFAULT_TITLE, description="Conversation title")
    messages: List[ChatMessage] = Field(default_factory=list, description="Messages, oldest first")
    created_at: int = Field(default_factory=now_ms, description="Epoch milliseconds")
    updated_at: int = Field(default_factory=now_ms, description="Epoch milliseconds")
    metadata: ConversationMetadata = Field(default_factory=ConversationMetadata)

class ConversationSummary(BaseModel):
    """Conversation without its messages"""
    id: str
    title: str
    created_at: int
    updated_at: int
    message_count: int
    last_message: Optional[str] = None

    @classmethod
    def from_conversation(cls, conversation: ConversationMemory) -> "ConversationSummary":
        last = conversation.messages[-1].content if conversation.messages else None
        return cls(
            id=conversation.id,
            title=conversation.title,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
            message_count=len(conversation.messages),
            last_message=last
        )

class RoomMessage(BaseModel):
    """Room channel message ZEGO pushes to the room (Cmd + Data)"""
    cmd: int = Field(..., alias="Cmd")
    data: Dict[str, Any] = Field(default_factory=dict, alias="Data")

    model_config = {
        "populate_by_name": True,
        "extra": "allow"
    }

class RoomMessageResult(BaseModel):
    """Effect of applying a room message to a conversation"""
    cmd: int
    transcript: str = ""
    message: Optional[ChatMessage] = None
    persisted: bool = False
