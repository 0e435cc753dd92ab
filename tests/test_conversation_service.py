"""
Tests for conversation history
"""
import importlib
import itertools

import pytest

from data.repositories.conversation_repository import ConversationRepository
from models.conversation import DEFAULT_TITLE, ChatMessage, RoomMessage
from services.conversation_service import ConversationService, title_from_message
from utils.exceptions import ValidationError
from utils.time_utils import now_ms


@pytest.fixture(autouse=True)
def clock(monkeypatch):
    """Strictly increasing millisecond clock so update ordering is deterministic"""
    ticks = itertools.count(now_ms() + 1_000_000)

    def tick():
        return next(ticks)

    # the services package re-exports the singleton under the module name
    module = importlib.import_module("services.conversation_service")
    monkeypatch.setattr(module, "now_ms", tick)
    return tick


def user_message(content: str, message_id: str = None) -> ChatMessage:
    if message_id:
        return ChatMessage(id=message_id, content=content, sender="user")
    return ChatMessage(content=content, sender="user")


def llm_result(message_id: str, text: str, end: bool = False) -> RoomMessage:
    return RoomMessage(Cmd=4, Data={"MessageId": message_id, "Text": text, "EndFlag": end})


class TestConversationStore:

    @pytest.mark.asyncio
    async def test_create_or_get_returns_same_conversation(self, conversations):
        created = await conversations.create_or_get_conversation()
        again = await conversations.create_or_get_conversation(created.id)

        assert created.id.startswith("conv_")
        assert again.id == created.id
        assert again.title == DEFAULT_TITLE
        assert again.messages == []

    @pytest.mark.asyncio
    async def test_create_with_explicit_id(self, conversations):
        conversation = await conversations.create_or_get_conversation("my-conv_1")
        assert conversation.id == "my-conv_1"
        assert await conversations.get_conversation("my-conv_1") is not None

    @pytest.mark.asyncio
    async def test_invalid_id_is_rejected(self, conversations):
        """Ids are used as file names and must be plain"""
        with pytest.raises(ValidationError):
            await conversations.create_or_get_conversation("../etc/passwd")

    @pytest.mark.asyncio
    async def test_messages_keep_order_and_set_title(self, conversations):
        await conversations.add_message("c1", user_message("What is the weather like in Shanghai today?"))
        await conversations.add_message("c1", ChatMessage(content="Sunny.", sender="ai"))
        await conversations.add_message("c1", user_message("And tomorrow?"))

        conversation = await conversations.get_conversation("c1")
        assert [m.content for m in conversation.messages] == [
            "What is the weather like in Shanghai today?", "Sunny.", "And tomorrow?"
        ]
        assert conversation.title == "What is the weather like in Shanghai today?"
        assert conversation.metadata.total_messages == 3
        assert conversation.metadata.last_ai_response == "Sunny."

    @pytest.mark.asyncio
    async def test_same_message_id_replaces_in_place(self, conversations):
        await conversations.add_message("c1", user_message("first", "m1"))
        await conversations.add_message("c1", user_message("second", "m2"))
        await conversations.add_message("c1", user_message("first edited", "m1"))

        conversation = await conversations.get_conversation("c1")
        assert [(m.id, m.content) for m in conversation.messages] == [("m1", "first edited"), ("m2", "second")]

    @pytest.mark.asyncio
    async def test_list_is_most_recent_first(self, conversations):
        await conversations.add_message("older", user_message("a"))
        await conversations.add_message("newer", user_message("b"))
        await conversations.add_message("older", user_message("c"))

        listed = await conversations.list_conversations()
        assert [c.id for c in listed] == ["older", "newer"]

    @pytest.mark.asyncio
    async def test_update_title_and_delete(self, conversations):
        await conversations.create_or_get_conversation("c1")

        renamed = await conversations.update_title("c1", "Trip planning")
        assert renamed.title == "Trip planning"
        assert await conversations.update_title("missing", "x") is None

        assert await conversations.delete_conversation("c1") is True
        assert await conversations.delete_conversation("c1") is False
        assert await conversations.get_conversation("c1") is None

    @pytest.mark.asyncio
    async def test_clear_all(self, conversations):
        await conversations.create_or_get_conversation("a")
        await conversations.create_or_get_conversation("b")

        assert await conversations.clear_all() == 2
        assert await conversations.list_conversations() == []

    @pytest.mark.asyncio
    async def test_retention_prunes_least_recently_updated(self, storage):
        service = ConversationService(ConversationRepository(storage), max_conversations=2)
        await service.add_message("first", user_message("1"))
        await service.add_message("second", user_message("2"))
        await service.add_message("third", user_message("3"))

        remaining = {c.id for c in await service.list_conversations()}
        assert "third" in remaining
        assert len(remaining) == 2


def test_title_from_message_truncates():
    assert title_from_message("short") == "short"
    long_text = "x" * 80
    assert title_from_message(long_text) == "x" * 50 + "..."


def test_title_keeps_inner_whitespace():
    assert title_from_message("  line one\nline   two  ") == "line one\nline   two"


class TestRoomMessages:

    @pytest.mark.asyncio
    async def test_asr_result_tracks_transcript_until_end(self, conversations):
        result = await conversations.apply_room_message("c1", RoomMessage(Cmd=3, Data={"Text": "hel"}))
        assert result.transcript == "hel"
        assert conversations.get_transcript("c1") == "hel"

        result = await conversations.apply_room_message(
            "c1", RoomMessage(Cmd=3, Data={"Text": "hello", "EndFlag": True})
        )
        assert result.transcript == ""
        assert not result.persisted
        conversation = await conversations.get_conversation("c1")
        assert conversation.messages == []

    @pytest.mark.asyncio
    async def test_llm_result_streams_then_persists_once(self, conversations):
        partial = await conversations.apply_room_message("c1", llm_result("msg-1", "Hel"))
        assert partial.message.is_streaming is True
        assert not partial.persisted
        assert [m.content for m in conversations.get_streaming_messages("c1")] == ["Hel"]

        during = await conversations.get_conversation("c1")
        assert during is not None
        assert during.messages == []

        await conversations.apply_room_message("c1", llm_result("msg-1", "Hello the"))
        assert [m.content for m in conversations.get_streaming_messages("c1")] == ["Hello the"]

        final = await conversations.apply_room_message("c1", llm_result("msg-1", "Hello there", end=True))
        assert final.persisted
        assert final.message.is_streaming is False
        assert conversations.get_streaming_messages("c1") == []

        conversation = await conversations.get_conversation("c1")
        assert len(conversation.messages) == 1
        stored = conversation.messages[0]
        assert (stored.id, stored.content, stored.sender) == ("msg-1", "Hello there", "ai")
        assert stored.is_streaming is None

    @pytest.mark.asyncio
    async def test_llm_result_single_final_chunk(self, conversations):
        result = await conversations.apply_room_message("c1", llm_result("msg-2", "Done.", end=True))

        assert result.persisted
        conversation = await conversations.get_conversation("c1")
        assert conversation.metadata.last_ai_response == "Done."

    @pytest.mark.asyncio
    async def test_empty_llm_text_and_unknown_commands_are_ignored(self, conversations):
        empty = await conversations.apply_room_message("c1", llm_result("msg-3", ""))
        other = await conversations.apply_room_message("c2", RoomMessage(Cmd=1, Data={"Text": "x"}))

        assert empty.message is None
        assert other.message is None
        assert conversations.get_streaming_messages("c1") == []
        assert (await conversations.get_conversation("c1")).messages == []
        assert await conversations.get_conversation("c2") is None

    @pytest.mark.asyncio
    async def test_invalid_id_buffers_nothing(self, conversations):
        with pytest.raises(ValidationError):
            await conversations.apply_room_message("bad id!", llm_result("msg-4", "Hi"))
        with pytest.raises(ValidationError):
            await conversations.apply_room_message("bad id!", RoomMessage(Cmd=3, Data={"Text": "hi"}))

        assert conversations.get_streaming_messages("bad id!") == []
        assert conversations.get_transcript("bad id!") == ""

    @pytest.mark.asyncio
    async def test_buffered_state_belongs_to_stored_conversations(self, conversations):
        for index in range(5):
            await conversations.apply_room_message(f"room-{index}", llm_result("m", "partial"))
            await conversations.apply_room_message(f"room-{index}", RoomMessage(Cmd=3, Data={"Text": "hi"}))

        stored = {c.id for c in await conversations.list_conversations()}
        assert stored == {f"room-{index}" for index in range(5)}

        await conversations.delete_conversation("room-0")
        assert conversations.get_streaming_messages("room-0") == []
        assert conversations.get_transcript("room-0") == ""
