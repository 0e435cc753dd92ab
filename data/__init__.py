"""
Data access layer package
"""
from .storage import StorageManager, storage_manager
from .repositories.conversation_repository import ConversationRepository, conversation_repo

from utils.logger import get_logger

logger = get_logger(__name__)

__all__ = [
    "StorageManager",
    "storage_manager",
    "ConversationRepository",
    "conversation_repo",
    "initialize_data_layer",
    "cleanup_data_layer",
]

async def initialize_data_layer() -> bool:
    """Initialize data access layer"""
    try:
        await storage_manager.initialize()
        return True
        
    except OSError as e:
        logger.error("Failed to initialize data layer", error=str(e))
        return False

async def cleanup_data_layer() -> bool:
    """Cleanup data access layer resources"""
    try:
        await storage_manager.close()
        return True
        
    except Exception as e:
        logger.error("Failed to cleanup data layer", error=str(e))
        return False
