"""
Service Layer Package
"""
from .llm_service import llm_service, LLMService
from .zego_client import zego_client, ZegoClient
from .agent_service import agent_service, AgentService
from .conversation_service import conversation_service, ConversationService

__all__ = [
    # LLM Service
    "llm_service",
    "LLMService",
    
    # ZEGO server API
    "zego_client",
    "ZegoClient",
    "agent_service",
    "AgentService",
    
    # Conversation Service
    "conversation_service",
    "ConversationService"
]
