"""
RTC token API routes
"""
from fastapi import APIRouter, HTTPException, Query
from typing import Optional

from configs.zego_config import zego_config
from models.response import TokenResponse
from services.token_service import generate_token04, room_privilege_payload
from utils.logger import get_logger
from utils.validators import require_fields

logger = get_logger(__name__)
router = APIRouter()

@router.get("/api/token", response_model=TokenResponse)
async def get_token(user_id: Optional[str] = Query(None, description="User logging into the room")) -> TokenResponse:
    """Mint a room login token for user_id"""
    require_fields("user_id is required", user_id)
    try:
        token = generate_token04(
            zego_config.numeric_app_id,
            user_id,
            zego_config.server_secret,
            zego_config.token_ttl,
            room_privilege_payload()
        )
        logger.info("Token generated", user_id=user_id, ttl=zego_config.token_ttl)
        return TokenResponse(token=token)
    except Exception as e:
        logger.error("Token generation failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to generate token")
