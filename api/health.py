"""
Health check API routes
"""
from fastapi import APIRouter
from typing import Any, Dict
import os
import time
import psutil

from configs.llm_config import llm_config
from configs.zego_config import zego_config
from data.storage import storage_manager
from models.response import HealthConfig, HealthResponse
from services.agent_service import agent_service
from services.conversation_service import conversation_service
from utils.logger import get_logger
from utils.time_utils import now_iso

logger = get_logger(__name__)
router = APIRouter()

@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check"""
    return HealthResponse(
        status="healthy",
        timestamp=now_iso(),
        registered_agent=agent_service.is_registered,
        config=HealthConfig(
            has_dash_scope=bool(llm_config.api_key),
            has_zego=bool(zego_config.app_id)
        )
    )

@router.get("/health/detailed")
async def detailed_health_check():
    """Detailed health check"""
    start_time = time.time()
    health_details = {
        "status": "healthy",
        "timestamp": now_iso(),
        "registeredAgent": agent_service.is_registered,
        "checks": {
            "zego": _check_zego_config(),
            "llm": _check_llm_config(),
            "storage": await storage_manager.health_check(),
            "conversations": await _check_conversation_service(),
            "memory": _check_memory_health(),
        }
    }
    
    if not all(check.get("status") in ("healthy", "unknown") for check in health_details["checks"].values()):
        health_details["status"] = "degraded"
    
    health_details["response_time_ms"] = round((time.time() - start_time) * 1000, 2)
    return health_details

# Helper functions
def _check_zego_config() -> Dict[str, Any]:
    if zego_config.is_configured:
        return {"status": "healthy", "details": {"api_base_url": zego_config.api_base_url}}
    return {"status": "unhealthy", "error": "ZEGO credentials or API base URL missing"}

def _check_llm_config() -> Dict[str, Any]:
    if llm_config.api_key:
        return {"status": "healthy", "details": {"model": llm_config.model, "use_proxy": llm_config.use_proxy}}
    return {"status": "unhealthy", "error": "DASHSCOPE_API_KEY missing"}

async def _check_conversation_service() -> Dict[str, Any]:
    try:
        stats = await conversation_service.get_statistics()
        return {"status": "healthy", "details": stats}
    except Exception as e:
        logger.error("Conversation service health check failed", error=str(e))
        return {"status": "unhealthy", "error": str(e)}

def _check_memory_health() -> Dict[str, Any]:
    """Check memory usage"""
    process = psutil.Process(os.getpid())
    memory_info = process.memory_info()
    memory_percent = process.memory_percent()
    
    warning_threshold = 80.0
    critical_threshold = 95.0
    
    status = "healthy"
    if memory_percent > critical_threshold:
        status = "critical"
    elif memory_percent > warning_threshold:
        status = "warning"
    
    return {
        "status": status,
        "details": {
            "memory_usage_mb": round(memory_info.rss / 1024 / 1024, 2),
            "memory_percent": round(memory_percent, 2),
            "warning_threshold": warning_threshold,
            "critical_threshold": critical_threshold
        }
    }
