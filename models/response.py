"""
API Response Models

Field aliases keep the camelCase keys the browser client reads.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from models.conversation import ChatMessage, ConversationMemory, ConversationSummary


class SuccessResponse(BaseModel):
    """Plain acknowledgement"""
    success: bool = Field(True, description="Operation succeeded")


class StartSessionResponse(BaseModel):
    """Start Session Response Model"""
    success: bool = Field(True)
    agent_instance_id: Optional[str] = Field(None, alias="agentInstanceId", description="ZEGO agent instance id")
    agent_id: str = Field(..., alias="agentId", description="Registered agent id")
    
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "success": True,
                "agentInstanceId": "1912124734317838336",
                "agentId": "agent_1718000000000"
            }
        }
    }


class TokenResponse(BaseModel):
    """RTC login token"""
    token: str = Field(..., description="Version 04 room login token")


class HealthConfig(BaseModel):
    has_dash_scope: bool = Field(..., alias="hasDashScope")
    has_zego: bool = Field(..., alias="hasZego")

    model_config = {"populate_by_name": True}


class HealthResponse(BaseModel):
    """Health Check Response Model"""
    status: str = Field(..., description="Service status")
    timestamp: str = Field(..., description="Check time")
    registered_agent: bool = Field(..., alias="registeredAgent", description="Agent registered with ZEGO")
    config: HealthConfig
    
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "status": "healthy",
                "timestamp": "2024-01-15T10:30:00.000Z",
                "registeredAgent": True,
                "config": {"hasDashScope": True, "hasZego": True}
            }
        }
    }


class ConversationListResponse(BaseModel):
    """Conversation List Response Model"""
    conversations: List[ConversationSummary] = Field(..., description="Conversation list")
    total: int = Field(..., description="Total conversations")


class ConversationResponse(BaseModel):
    """Conversation with messages, plus replies still streaming"""
    conversation: ConversationMemory
    streaming_messages: List[ChatMessage] = Field(default_factory=list)
    transcript: str = Field("", description="Live ASR transcript")


class ErrorResponse(BaseModel):
    """Error Response Model"""
    success: bool = False
    error: str = Field(..., description="Error message")
    error_type: str = Field(default="general_error", description="Error type")
    timestamp: int = Field(..., description="Epoch milliseconds")
    details: Optional[Dict[str, Any]] = Field(None, description="Error details")
