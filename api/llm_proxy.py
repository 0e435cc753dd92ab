"""
LLM relay API routes

The ZEGO agent can be pointed at this endpoint instead of the provider so the
provider key never leaves the server. Requests authenticate with the proxy
bearer token.
"""
import hmac
from fastapi import APIRouter, Depends, Header
from fastapi.responses import StreamingResponse
from typing import AsyncIterator, Optional

from configs.settings import settings
from models.request import ChatCompletionRequest
from services.llm_service import llm_service
from utils.exceptions import AuthenticationError
from utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()

async def verify_proxy_token(authorization: Optional[str] = Header(None)):
    """Require Authorization: Bearer <PROXY_AUTH_TOKEN>"""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not hmac.compare_digest(token.strip(), settings.proxy_auth_token):
        logger.warning("Rejected LLM proxy request", has_authorization=bool(authorization))
        raise AuthenticationError("Invalid or missing proxy token")

async def _relay(first_chunk: bytes, stream: AsyncIterator[bytes]) -> AsyncIterator[bytes]:
    if first_chunk:
        yield first_chunk
    async for chunk in stream:
        yield chunk

@router.post("/api/llm/chat/completions", dependencies=[Depends(verify_proxy_token)])
async def chat_completions(request: ChatCompletionRequest):
    """Relay an OpenAI compatible chat completion, streaming when requested"""
    payload = llm_service.build_payload(request.model_dump(exclude={"stream"}))
    logger.info("LLM proxy request",
                model=payload.get("model"),
                stream=request.stream,
                messages_count=len(request.messages))
    
    if not request.stream:
        return await llm_service.create_chat_completion(payload)
    
    stream = llm_service.stream_chat_completion(payload)
    # pull the first chunk so upstream errors still map to an HTTP status
    try:
        first_chunk = await stream.__anext__()
    except StopAsyncIteration:
        first_chunk = b""
    
    return StreamingResponse(
        _relay(first_chunk, stream),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no"
        }
    )
