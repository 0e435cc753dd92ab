"""
API Request Models

Required fields are validated in the route handlers so that a missing field
answers 400 with the message the browser client expects.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class StartSessionRequest(BaseModel):
    """Start an agent session in a room"""
    room_id: Optional[str] = Field(None, description="RTC room the agent joins", max_length=128)
    user_id: Optional[str] = Field(None, description="User the agent talks to", max_length=128)

    model_config = {
        "json_schema_extra": {
            "example": {
                "room_id": "room_k3j9x8d2a",
                "user_id": "user_p0q7w1e4z"
            }
        }
    }


class SendMessageRequest(BaseModel):
    """Send a text message to a running agent instance"""
    agent_instance_id: Optional[str] = Field(None, description="Agent instance id")
    message: Optional[str] = Field(None, description="Text to send", max_length=5000)
    conversation_id: Optional[str] = Field(
        None,
        description="When set, the message is also appended to this conversation's history",
        max_length=100
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "agent_instance_id": "1912124734317838336",
                "message": "What's the weather like today?",
                "conversation_id": "conv_1718000000000_ab12cd34e"
            }
        }
    }


class StopSessionRequest(BaseModel):
    """Stop a running agent instance"""
    agent_instance_id: Optional[str] = Field(None, description="Agent instance id")


class TTSRequest(BaseModel):
    text: Optional[str] = None
    voice: Optional[str] = None


class ChatCompletionRequest(BaseModel):
    """OpenAI compatible chat completion request relayed to the LLM provider"""
    messages: List[Dict[str, Any]] = Field(..., min_length=1)
    model: Optional[str] = None
    stream: bool = False
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None

    model_config = {
        # tools, stop, user and other provider options pass through untouched
        "extra": "allow"
    }


class UpdateTitleRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)


class CreateConversationRequest(BaseModel):
    conversation_id: Optional[str] = Field(None, max_length=100)
