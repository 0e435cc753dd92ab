"""
Utils Package
"""
from .logger import get_logger
from .id_generator import generate_conversation_id, generate_message_id, generate_agent_id, generate_nonce
from .time_utils import now, now_ms, now_seconds, now_iso
from .validators import require_fields, validate_chat_message
from .exceptions import (
    BusinessError,
    ValidationError,
    AuthenticationError,
    ConfigurationError,
    ZegoAPIError,
    LLMServiceError,
    TokenGenerationError
)

__all__ = [
    # Logging
    "get_logger",
    
    # ID Generation
    "generate_conversation_id",
    "generate_message_id", 
    "generate_agent_id",
    "generate_nonce",
    
    # Time
    "now",
    "now_ms",
    "now_seconds",
    "now_iso",
    
    # Validation
    "require_fields",
    "validate_chat_message",
    
    # Exceptions
    "BusinessError",
    "ValidationError",
    "AuthenticationError",
    "ConfigurationError",
    "ZegoAPIError",
    "LLMServiceError",
    "TokenGenerationError"
]
