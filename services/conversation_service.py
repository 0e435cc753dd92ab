"""
Conversation Service - conversation history backed by JSON documents
"""
import structlog
from typing import Any, Dict, List, Optional

from configs.settings import settings
from data.repositories.conversation_repository import ConversationRepository, conversation_repo
from models.conversation import (
    DEFAULT_TITLE,
    ChatMessage,
    ConversationMemory,
    MessageSender,
    RoomCommand,
    RoomMessage,
    RoomMessageResult,
)
from utils.id_generator import generate_conversation_id
from utils.time_utils import now_ms

logger = structlog.get_logger()

TITLE_MAX_LENGTH = 50

def title_from_message(content: str) -> str:
    """Conversation title derived from its first user message"""
    text = content.strip()
    if len(text) > TITLE_MAX_LENGTH:
        return text[:TITLE_MAX_LENGTH] + "..."
    return text

class ConversationService:
    """Conversation Service"""
    
    def __init__(self, repository: Optional[ConversationRepository] = None,
                 max_conversations: Optional[int] = None):
        self.repository = repository or conversation_repo
        self.max_conversations = max_conversations or settings.max_conversations
        # conversation id -> message id -> partial ai message
        self._streaming: Dict[str, Dict[str, ChatMessage]] = {}
        # conversation id -> live ASR transcript
        self._transcripts: Dict[str, str] = {}
    
    @property
    def _lock(self):
        return self.repository.storage.lock
    
    async def create_or_get_conversation(self, conversation_id: Optional[str] = None) -> ConversationMemory:
        """Return the stored conversation or start a new one"""
        async with self._lock:
            return await self._create_or_get(conversation_id)
    
    async def _create_or_get(self, conversation_id: Optional[str]) -> ConversationMemory:
        if conversation_id:
            existing = await self.repository.get_by_id(conversation_id)
            if existing:
                return existing
        
        conversation = ConversationMemory(id=conversation_id or generate_conversation_id())
        await self.repository.save(conversation)
        await self._enforce_retention(keep_id=conversation.id)
        logger.info("Conversation created", conversation_id=conversation.id)
        return conversation
    
    async def get_conversation(self, conversation_id: str) -> Optional[ConversationMemory]:
        """Get conversation, None when missing"""
        return await self.repository.get_by_id(conversation_id)
    
    async def list_conversations(self) -> List[ConversationMemory]:
        """All conversations, most recently updated first"""
        return await self.repository.list_all()
    
    async def add_message(self, conversation_id: str, message: ChatMessage) -> ConversationMemory:
        """Append message, replacing an earlier message with the same id"""
        async with self._lock:
            conversation = await self._create_or_get(conversation_id)
            stored = message.model_copy(update={"is_streaming": None})
            
            for index, existing in enumerate(conversation.messages):
                if existing.id == stored.id:
                    conversation.messages[index] = stored
                    break
            else:
                conversation.messages.append(stored)
            
            if stored.sender == MessageSender.USER.value and conversation.title == DEFAULT_TITLE:
                conversation.title = title_from_message(stored.content)
            if stored.sender == MessageSender.AI.value:
                conversation.metadata.last_ai_response = stored.content
            conversation.metadata.total_messages = len(conversation.messages)
            conversation.updated_at = now_ms()
            
            await self.repository.save(conversation)
            await self._enforce_retention(keep_id=conversation.id)
            
            logger.debug("Message added", conversation_id=conversation_id,
                         message_id=stored.id, sender=stored.sender)
            return conversation
    
    async def update_title(self, conversation_id: str, title: str) -> Optional[ConversationMemory]:
        """Rename conversation, None when missing"""
        async with self._lock:
            conversation = await self.repository.get_by_id(conversation_id)
            if not conversation:
                return None
            conversation.title = title
            conversation.updated_at = now_ms()
            return await self.repository.save(conversation)
    
    async def delete_conversation(self, conversation_id: str) -> bool:
        """Delete conversation, False when missing"""
        async with self._lock:
            self._streaming.pop(conversation_id, None)
            self._transcripts.pop(conversation_id, None)
            return await self.repository.delete(conversation_id)
    
    async def clear_all(self) -> int:
        """Delete all conversations"""
        async with self._lock:
            self._streaming.clear()
            self._transcripts.clear()
            return await self.repository.delete_all()
    
    async def _enforce_retention(self, keep_id: Optional[str] = None):
        """Prune the least recently updated conversations beyond the limit"""
        conversations = await self.repository.list_all()
        if len(conversations) <= self.max_conversations:
            return
        
        overflow = [c for c in conversations[self.max_conversations:] if c.id != keep_id]
        for conversation in overflow:
            await self.repository.delete(conversation.id)
            self._streaming.pop(conversation.id, None)
            self._transcripts.pop(conversation.id, None)
        logger.info("Pruned old conversations", count=len(overflow))
    
    def get_transcript(self, conversation_id: str) -> str:
        """Live ASR transcript of the user's current utterance"""
        return self._transcripts.get(conversation_id, "")
    
    def get_streaming_messages(self, conversation_id: str) -> List[ChatMessage]:
        """AI replies still being streamed"""
        return list(self._streaming.get(conversation_id, {}).values())
    
    async def apply_room_message(self, conversation_id: str, room_message: RoomMessage) -> RoomMessageResult:
        """Fold a ZEGO room channel message into the conversation.

        ASR results (Cmd 3) only drive the live transcript. LLM results (Cmd 4)
        arrive as repeated snapshots of the same MessageId; each snapshot
        replaces the partial reply and the final one (EndFlag) is persisted.
        Both create the conversation when it does not exist yet.
        """
        cmd = room_message.cmd
        data: Dict[str, Any] = room_message.data or {}
        
        if cmd in (RoomCommand.ASR_RESULT, RoomCommand.LLM_RESULT):
            # buffered state is only kept for stored conversations
            await self.create_or_get_conversation(conversation_id)
        
        if cmd == RoomCommand.ASR_RESULT:
            text = data.get("Text") or ""
            if text and data.get("EndFlag"):
                self._transcripts.pop(conversation_id, None)
            elif text:
                self._transcripts[conversation_id] = text
            return RoomMessageResult(cmd=cmd, transcript=self.get_transcript(conversation_id))
        
        if cmd == RoomCommand.LLM_RESULT:
            content = data.get("Text") or ""
            message_id = data.get("MessageId")
            if not content or not message_id:
                return RoomMessageResult(cmd=cmd, transcript=self.get_transcript(conversation_id))
            
            end = bool(data.get("EndFlag"))
            pending = self._streaming.setdefault(conversation_id, {})
            previous = pending.get(message_id)
            message = ChatMessage(
                id=message_id,
                content=content,
                sender=MessageSender.AI,
                timestamp=previous.timestamp if previous and not end else now_ms(),
                is_streaming=not end
            )
            
            if not end:
                pending[message_id] = message
                return RoomMessageResult(cmd=cmd, message=message,
                                         transcript=self.get_transcript(conversation_id))
            
            pending.pop(message_id, None)
            if not pending:
                self._streaming.pop(conversation_id, None)
            await self.add_message(conversation_id, message)
            return RoomMessageResult(cmd=cmd, message=message, persisted=True,
                                     transcript=self.get_transcript(conversation_id))
        
        logger.debug("Ignoring room message", conversation_id=conversation_id, cmd=cmd)
        return RoomMessageResult(cmd=cmd, transcript=self.get_transcript(conversation_id))
    
    async def get_statistics(self) -> Dict[str, Any]:
        """Get statistics"""
        conversations = await self.repository.list_all()
        return {
            "total_conversations": len(conversations),
            "total_messages": sum(len(c.messages) for c in conversations),
            "streaming_messages": sum(len(m) for m in self._streaming.values()),
        }

conversation_service = ConversationService()
