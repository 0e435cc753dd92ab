"""
Agent session API routes
"""
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from models.conversation import ChatMessage, MessageSender
from models.request import SendMessageRequest, StartSessionRequest, StopSessionRequest, TTSRequest
from models.response import StartSessionResponse, SuccessResponse
from services.agent_service import agent_service
from services.conversation_service import conversation_service
from utils.exceptions import BusinessError
from utils.logger import get_logger
from utils.validators import require_fields

logger = get_logger(__name__)
router = APIRouter()

@router.post("/api/start", response_model=StartSessionResponse)
async def start_session(request: StartSessionRequest) -> StartSessionResponse:
    """Register the agent if needed and create an agent instance in the room"""
    require_fields("room_id and user_id are required", request.room_id, request.user_id)
    try:
        logger.info("Starting agent session", room_id=request.room_id, user_id=request.user_id)
        result = await agent_service.start_session(request.room_id, request.user_id)
        return StartSessionResponse(
            success=True,
            agent_instance_id=result["agent_instance_id"],
            agent_id=result["agent_id"]
        )
    except BusinessError:
        raise
    except Exception as e:
        logger.error("Start session failed", error=str(e))
        raise HTTPException(status_code=500, detail=str(e) or "start failed")

@router.post("/api/send-message", response_model=SuccessResponse)
async def send_message(request: SendMessageRequest) -> SuccessResponse:
    """Send a text message to the agent instance"""
    require_fields("agent_instance_id and message are required", request.agent_instance_id, request.message)
    try:
        if request.conversation_id:
            await conversation_service.add_message(
                request.conversation_id,
                ChatMessage(content=request.message, sender=MessageSender.USER)
            )
        
        await agent_service.send_message(request.agent_instance_id, request.message)
        return SuccessResponse(success=True)
    except BusinessError:
        raise
    except Exception as e:
        logger.error("Send message failed", agent_instance_id=request.agent_instance_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e) or "send failed")

@router.post("/api/stop", response_model=SuccessResponse)
async def stop_session(request: StopSessionRequest) -> SuccessResponse:
    """Delete the agent instance"""
    require_fields("agent_instance_id is required", request.agent_instance_id)
    try:
        await agent_service.stop_session(request.agent_instance_id)
        return SuccessResponse(success=True)
    except BusinessError:
        raise
    except Exception as e:
        logger.error("Stop session failed", agent_instance_id=request.agent_instance_id, error=str(e))
        raise HTTPException(status_code=500, detail=str(e) or "stop failed")

@router.post("/api/callbacks", response_model=SuccessResponse)
async def agent_callbacks(req: Request) -> SuccessResponse:
    """ZEGO server callbacks (ASR/LLM results, exceptions, speak actions)"""
    try:
        event = await req.json()
    except ValueError:
        event = None
    if isinstance(event, dict):
        logger.info("Agent callback received",
                    event=event.get("Event"),
                    agent_instance_id=event.get("AgentInstanceId"))
    else:
        logger.warning("Agent callback without JSON body")
    return SuccessResponse(success=True)

@router.post("/proxy/tts")
async def proxy_tts(request: TTSRequest):
    """TTS is handled by the agent's configured vendor"""
    return JSONResponse(status_code=501, content={"success": False, "error": "not used"})
