"""
Shared pytest fixtures

Environment is fixed before the application modules are imported so the
settings singletons pick up test values.
"""
import os
import tempfile

os.environ.update({
    "ZEGO_APP_ID": "1234567890",
    "ZEGO_SERVER_SECRET": "0123456789abcdef0123456789abcdef",
    "ZEGO_API_BASE_URL": "https://ai-agent-api.zegocloud.com/v2",
    "DASHSCOPE_API_KEY": "test-dashscope-key",
    "PROXY_AUTH_TOKEN": "test-proxy-token",
    "LLM_USE_PROXY": "false",
    "LOG_FILE": "",
    "LOG_LEVEL": "INFO",
    "STORAGE_DIR": tempfile.mkdtemp(prefix="voice-agent-proxy-"),
})

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from data.repositories.conversation_repository import ConversationRepository
from data.storage import StorageManager
from services.conversation_service import ConversationService

from tests.fakes import zego_ok


@pytest.fixture
def storage(tmp_path):
    """Storage rooted in a temporary directory"""
    return StorageManager(str(tmp_path / "storage"))


@pytest.fixture
def conversations(storage):
    """ConversationService over temporary storage"""
    return ConversationService(ConversationRepository(storage), max_conversations=50)


@pytest.fixture
def zego_request(monkeypatch):
    """Replace the ZEGO client's request with an AsyncMock and reset agent registration"""
    from services.agent_service import agent_service

    mock = AsyncMock(return_value=zego_ok())
    monkeypatch.setattr(agent_service.client, "request", mock)
    monkeypatch.setattr(agent_service, "_registered_agent_id", None)
    return mock


@pytest.fixture
def client(monkeypatch, conversations):
    """TestClient with conversation history isolated per test"""
    import api.agent
    import api.conversation
    import api.health
    from main import app

    for module in (api.agent, api.conversation, api.health):
        monkeypatch.setattr(module, "conversation_service", conversations)

    return TestClient(app)
