"""
Large Language Model Service - OpenAI compatible relay (DashScope by default)
"""
import asyncio
import json
import structlog
import aiohttp
from typing import Any, AsyncIterator, Dict, Optional

from configs.llm_config import LLMConfig, llm_config
from utils.exceptions import ConfigurationError, LLMServiceError

logger = structlog.get_logger()

class LLMService:
    """Large Language Model Service"""
    
    def __init__(self, config: Optional[LLMConfig] = None):
        self.config = config or llm_config
        self.session: Optional[aiohttp.ClientSession] = None
    
    def _validate_config(self):
        """Validate configuration"""
        try:
            self.config.validate_config()
        except ValueError as e:
            logger.error("LLM configuration validation failed", error=str(e))
            raise ConfigurationError(str(e))
    
    async def _get_session(self) -> aiohttp.ClientSession:
        """Get HTTP session"""
        if self.session is None or self.session.closed:
            # no total timeout: streamed completions may outlive it
            timeout = aiohttp.ClientTimeout(total=None, sock_connect=self.config.timeout,
                                            sock_read=self.config.timeout)
            self.session = aiohttp.ClientSession(timeout=timeout)
        return self.session
    
    def _headers(self) -> Dict[str, str]:
        return {
            "accept": "application/json",
            "content-type": "application/json",
            "authorization": f"Bearer {self.config.api_key}"
        }
    
    def build_payload(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Fill model defaults the caller left out"""
        payload = {k: v for k, v in request.items() if v is not None}
        payload.setdefault("model", self.config.model)
        payload.setdefault("temperature", self.config.temperature)
        payload.setdefault("top_p", self.config.top_p)
        payload.setdefault("max_tokens", self.config.max_tokens)
        return payload
    
    async def stream_chat_completion(self, payload: Dict[str, Any]) -> AsyncIterator[bytes]:
        """Yield the provider's SSE bytes as they arrive.

        Upstream errors are raised before the first chunk is yielded so callers
        can still answer with a proper status code.
        """
        self._validate_config()
        body = {**payload, "stream": True}
        
        logger.debug("Streaming LLM completion",
                     model=body.get("model"),
                     messages_count=len(body.get("messages", [])))
        
        try:
            session = await self._get_session()
            async with session.post(self.config.base_url, json=body, headers=self._headers()) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error("LLM API error", status=response.status, error=error_text)
                    raise LLMServiceError(f"LLM API error {response.status}: {error_text}",
                                          status_code=response.status)
                
                total_bytes = 0
                async for chunk in response.content.iter_any():
                    total_bytes += len(chunk)
                    yield chunk
                
                logger.info("LLM stream completed", model=body.get("model"), bytes=total_bytes)
        
        except aiohttp.ClientError as e:
            logger.error("HTTP client error", error=str(e))
            raise LLMServiceError(f"Network error: {str(e)}")
        except asyncio.TimeoutError:
            logger.error("LLM request timed out", timeout=self.config.timeout)
            raise LLMServiceError("LLM request timed out", status_code=504)
    
    async def create_chat_completion(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Non-streaming completion, returned as the provider's JSON"""
        self._validate_config()
        body = {**payload, "stream": False}
        
        try:
            session = await self._get_session()
            async with session.post(self.config.base_url, json=body, headers=self._headers()) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error("LLM API error", status=response.status, error=error_text)
                    raise LLMServiceError(f"LLM API error {response.status}: {error_text}",
                                          status_code=response.status)
                
                result = await response.json(content_type=None)
                usage = result.get("usage", {})
                logger.info(
                    "LLM response generated successfully",
                    model=body.get("model"),
                    prompt_tokens=usage.get("prompt_tokens"),
                    completion_tokens=usage.get("completion_tokens"),
                    total_tokens=usage.get("total_tokens")
                )
                return result
                
        except aiohttp.ClientError as e:
            logger.error("HTTP client error", error=str(e))
            raise LLMServiceError(f"Network error: {str(e)}")
        except asyncio.TimeoutError:
            logger.error("LLM request timed out", timeout=self.config.timeout)
            raise LLMServiceError("LLM request timed out", status_code=504)
        except json.JSONDecodeError as e:
            logger.error("JSON decode error", error=str(e))
            raise LLMServiceError(f"Invalid JSON response: {str(e)}")
    
    async def cleanup(self):
        """Clean up resources"""
        if self.session and not self.session.closed:
            await self.session.close()
            logger.info("LLM service HTTP session closed")


llm_service = LLMService()
