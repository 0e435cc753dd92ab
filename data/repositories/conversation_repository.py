"""
Conversation Data Access Layer
"""
import re
from pathlib import Path
from typing import List, Optional

from data.storage import StorageManager, storage_manager
from models.conversation import ConversationMemory
from utils.exceptions import ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")

def validate_conversation_id(conversation_id: str):
    """Ids become file names, so only plain characters are allowed"""
    if not conversation_id or not _ID_PATTERN.match(conversation_id):
        raise ValidationError(
            "Conversation ID can only contain letters, numbers, underscores and hyphens"
        )

class ConversationRepository:
    """Conversation Data Access Class - one JSON document per conversation"""

    def __init__(self, storage: Optional[StorageManager] = None):
        self.storage = storage or storage_manager

    async def _directory(self) -> Path:
        return await self.storage.collection("conversations")

    async def _path(self, conversation_id: str) -> Path:
        validate_conversation_id(conversation_id)
        return await self._directory() / f"{conversation_id}.json"

    async def get_by_id(self, conversation_id: str) -> Optional[ConversationMemory]:
        """Get conversation by ID"""
        data = await self.storage.read_json(await self._path(conversation_id))
        if data is None:
            return None
        return ConversationMemory.model_validate(data)

    async def save(self, conversation: ConversationMemory) -> ConversationMemory:
        """Create or replace a conversation"""
        path = await self._path(conversation.id)
        try:
            await self.storage.write_json(path, conversation.model_dump(mode="json"))
            logger.debug("Conversation saved", conversation_id=conversation.id,
                         message_count=len(conversation.messages))
            return conversation
        except OSError as e:
            logger.error("Failed to save conversation", conversation_id=conversation.id, error=str(e))
            raise

    async def list_all(self) -> List[ConversationMemory]:
        """All conversations, most recently updated first"""
        conversations = []
        for data in await self.storage.read_all_json(await self._directory()):
            try:
                conversations.append(ConversationMemory.model_validate(data))
            except ValueError as e:
                logger.warning("Skipping invalid conversation document", error=str(e))
        conversations.sort(key=lambda c: c.updated_at, reverse=True)
        return conversations

    async def delete(self, conversation_id: str) -> bool:
        """Delete conversation, False when it does not exist"""
        if not await self.storage.delete(await self._path(conversation_id)):
            return False
        logger.info("Conversation deleted", conversation_id=conversation_id)
        return True

    async def delete_all(self) -> int:
        """Delete every conversation, returning how many were removed"""
        count = 0
        for path in await self.storage.list_documents(await self._directory()):
            if await self.storage.delete(path):
                count += 1
        logger.info("All conversations deleted", count=count)
        return count

conversation_repo = ConversationRepository()
