"""
ZEGO AI Agent server API client
"""
import asyncio
import json
import aiohttp
import structlog
from typing import Any, Dict, Optional

from configs.zego_config import ZegoConfig, zego_config
from models.zego import ZegoResponse
from services.signature import build_signed_url
from utils.exceptions import ConfigurationError, ZegoAPIError

logger = structlog.get_logger()

class ZegoClient:
    """Signs and POSTs ZEGO server API actions"""
    
    def __init__(self, config: Optional[ZegoConfig] = None):
        self.config = config or zego_config
        self.session: Optional[aiohttp.ClientSession] = None
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.cleanup()
    
    def _validate_config(self):
        try:
            self.config.validate_config()
        except ValueError as e:
            logger.error("ZEGO configuration validation failed", error=str(e))
            raise ConfigurationError(str(e))
    
    async def _get_session(self) -> aiohttp.ClientSession:
        """Get HTTP session"""
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
            self.session = aiohttp.ClientSession(timeout=timeout)
        return self.session
    
    def signed_url(self, action: str) -> str:
        return build_signed_url(
            self.config.api_base_url,
            action,
            self.config.app_id,
            self.config.server_secret
        )
    
    async def request(self, action: str, body: Optional[Dict[str, Any]] = None) -> ZegoResponse:
        """POST body to action and return ZEGO's response envelope.

        A non-zero Code is returned, not raised; callers decide what it means.
        """
        self._validate_config()
        url = self.signed_url(action)
        payload = body if body is not None else {}
        
        logger.debug("Sending ZEGO request", action=action)
        
        try:
            session = await self._get_session()
            async with session.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"}
            ) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    logger.error("ZEGO API HTTP error",
                                 action=action,
                                 status=response.status,
                                 error=error_text)
                    raise ZegoAPIError(
                        f"ZEGO {action} HTTP {response.status}: {error_text}",
                        status_code=500,
                        action=action
                    )
                
                data = await response.json(content_type=None)
                
        except aiohttp.ClientError as e:
            logger.error("ZEGO API network error", action=action, error=str(e))
            raise ZegoAPIError(f"Network error: {str(e)}", status_code=500, action=action)
        except asyncio.TimeoutError:
            logger.error("ZEGO API timeout", action=action, timeout=self.config.request_timeout)
            raise ZegoAPIError(f"ZEGO {action} timed out", status_code=500, action=action)
        except json.JSONDecodeError as e:
            logger.error("ZEGO API returned invalid JSON", action=action, error=str(e))
            raise ZegoAPIError(f"Invalid JSON response: {str(e)}", status_code=500, action=action)
        
        result = ZegoResponse.model_validate(data)
        logger.info("ZEGO request completed",
                    action=action,
                    code=result.code,
                    request_id=result.request_id)
        return result
    
    async def cleanup(self):
        """Clean up resources"""
        if self.session and not self.session.closed:
            await self.session.close()
            logger.info("ZEGO client HTTP session closed")

zego_client = ZegoClient()
