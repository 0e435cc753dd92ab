"""
Data Repository Layer - Unified Export
"""

from .conversation_repository import ConversationRepository, conversation_repo


__all__ = [
    "ConversationRepository",
    "conversation_repo"
]
