"""
Business model package
"""
from .zego import (
    ZegoResponse,
    AgentConfig,
    InstanceConfig,
    to_wire
)
from .request import (
    StartSessionRequest,
    SendMessageRequest,
    StopSessionRequest,
    TTSRequest,
    ChatCompletionRequest,
    UpdateTitleRequest,
    CreateConversationRequest
)

from .conversation import (
    MessageSender,
    MessageType,
    RoomCommand,
    ChatMessage,
    ConversationMemory,
    ConversationSummary,
    RoomMessage,
    RoomMessageResult
)

from .response import (
    SuccessResponse,
    StartSessionResponse,
    TokenResponse,
    ConversationResponse,
    ConversationListResponse,
    ErrorResponse,
    HealthResponse
)

__all__ = [
    # ZEGO server API models
    "ZegoResponse",
    "AgentConfig",
    "InstanceConfig",
    "to_wire",

    # Request models
    "StartSessionRequest",
    "SendMessageRequest",
    "StopSessionRequest",
    "TTSRequest",
    "ChatCompletionRequest",
    "UpdateTitleRequest",
    "CreateConversationRequest",

    # Conversation models
    "MessageSender",
    "MessageType",
    "RoomCommand",
    "ChatMessage",
    "ConversationMemory",
    "ConversationSummary",
    "RoomMessage",
    "RoomMessageResult",

    # Response models
    "SuccessResponse",
    "StartSessionResponse",
    "TokenResponse",
    "ConversationResponse",
    "ConversationListResponse",
    "ErrorResponse",
    "HealthResponse"
]
