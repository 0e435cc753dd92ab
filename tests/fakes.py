"""
Test doubles for aiohttp and ZEGO responses
"""
import json
from typing import Any, Dict, List, Optional

from models.zego import ZegoResponse


class FakeStreamContent:
    """Stands in for aiohttp's StreamReader"""

    def __init__(self, chunks: List[bytes]):
        self._chunks = chunks

    async def iter_any(self):
        for chunk in self._chunks:
            yield chunk


class FakeResponse:
    """Minimal aiohttp ClientResponse usable as an async context manager"""

    def __init__(self, status: int = 200, json_data: Any = None, text: str = "",
                 chunks: Optional[List[bytes]] = None):
        self.status = status
        self._json = json_data
        self._text = text if text else (json.dumps(json_data) if json_data is not None else "")
        self.content = FakeStreamContent(chunks or [])

    async def json(self, content_type: Optional[str] = "application/json"):
        return self._json

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records posts and answers with a queued response"""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response or FakeResponse(json_data={"Code": 0, "Message": "success"})
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def post(self, url, json=None, headers=None):
        self.calls.append({"url": url, "json": json, "headers": headers})
        if self.error:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


def zego_ok(data: Optional[Dict[str, Any]] = None) -> ZegoResponse:
    return ZegoResponse(Code=0, Message="success", RequestId="req-1", Data=data)


def zego_fail(code: int = 410001008, message: str = "agent instance not exist") -> ZegoResponse:
    return ZegoResponse(Code=code, Message=message, RequestId="req-2")
