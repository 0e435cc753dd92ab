"""
Agent Service - ZEGO agent registration and agent instance lifecycle
"""
import asyncio
import structlog
from typing import Any, Dict, Optional

from configs.llm_config import LLMConfig, llm_config
from configs.settings import settings
from configs.zego_config import ZegoConfig, zego_config
from models.zego import (
    AgentConfig,
    ASRSettings,
    InstanceConfig,
    LLMSettings,
    MessageHistorySettings,
    RTCSettings,
    TTSSettings,
    to_wire,
)
from services.zego_client import ZegoClient, zego_client
from utils.exceptions import ZegoAPIError
from utils.id_generator import generate_agent_id

logger = structlog.get_logger()

LLM_PROXY_PATH = "/api/llm/chat/completions"

class AgentService:
    """Agent Service"""
    
    def __init__(self, client: Optional[ZegoClient] = None,
                 zego: Optional[ZegoConfig] = None,
                 llm: Optional[LLMConfig] = None):
        self.client = client or zego_client
        self.zego = zego or zego_config
        self.llm = llm or llm_config
        self._registered_agent_id: Optional[str] = None
        self._register_lock = asyncio.Lock()
    
    @property
    def registered_agent_id(self) -> Optional[str]:
        return self._registered_agent_id
    
    @property
    def is_registered(self) -> bool:
        return self._registered_agent_id is not None
    
    def build_agent_config(self, agent_id: str) -> AgentConfig:
        """RegisterAgent body for agent_id"""
        if self.llm.use_proxy:
            llm_url = settings.server_url.rstrip("/") + LLM_PROXY_PATH
            llm_key = settings.proxy_auth_token
        else:
            llm_url = self.llm.base_url
            llm_key = self.llm.api_key
        
        return AgentConfig(
            agent_id=agent_id,
            name=self.zego.agent_name,
            llm=LLMSettings(
                url=llm_url,
                api_key=llm_key,
                model=self.llm.model,
                system_prompt=self.llm.system_prompt,
                temperature=self.llm.temperature,
                top_p=self.llm.top_p,
                params={"max_tokens": self.llm.max_tokens}
            ),
            tts=TTSSettings(
                vendor=self.zego.tts_vendor,
                url="",
                params={
                    "app": {"api_key": self.llm.api_key or "zego_test"},
                    "voice": self.zego.tts_voice,
                    "encoding": self.zego.tts_encoding
                }
            ),
            asr=ASRSettings(
                hot_word=self.zego.asr_hot_words,
                vad_silence_segmentation=self.zego.asr_vad_silence_segmentation,
                pause_interval=self.zego.asr_pause_interval
            )
        )
    
    def build_instance_config(self, agent_id: str, room_id: str, user_id: str) -> InstanceConfig:
        """CreateAgentInstance body binding agent_id to room_id"""
        return InstanceConfig(
            agent_id=agent_id,
            user_id=user_id,
            rtc=RTCSettings(room_id=room_id, stream_id=f"{user_id}_stream"),
            message_history=MessageHistorySettings(
                sync_mode=1,
                messages=[],
                window_size=self.zego.message_window_size
            )
        )
    
    async def register_agent(self) -> str:
        """Register the agent once and return its id"""
        if self._registered_agent_id:
            return self._registered_agent_id
        
        async with self._register_lock:
            if self._registered_agent_id:
                return self._registered_agent_id
            
            agent_id = generate_agent_id()
            logger.info("Registering agent", agent_id=agent_id, use_llm_proxy=self.llm.use_proxy)
            result = await self.client.request("RegisterAgent", to_wire(self.build_agent_config(agent_id)))
            if not result.ok:
                raise ZegoAPIError(
                    f"ZEGO RegisterAgent {result.code} {result.message}",
                    status_code=500,
                    action="RegisterAgent",
                    code=result.code
                )
            
            self._registered_agent_id = agent_id
            logger.info("Agent registered", agent_id=agent_id)
            return agent_id
    
    async def start_session(self, room_id: str, user_id: str) -> Dict[str, Any]:
        """Create an agent instance in room_id talking to user_id"""
        agent_id = await self.register_agent()
        instance = self.build_instance_config(agent_id, room_id, user_id)
        
        result = await self.client.request("CreateAgentInstance", to_wire(instance))
        if not result.ok:
            raise ZegoAPIError(
                result.message or "CreateAgentInstance failed",
                status_code=400,
                action="CreateAgentInstance",
                code=result.code
            )
        
        agent_instance_id = (result.data or {}).get("AgentInstanceId")
        logger.info("Agent instance created",
                    agent_id=agent_id,
                    agent_instance_id=agent_instance_id,
                    room_id=room_id,
                    user_id=user_id)
        return {"agent_instance_id": agent_instance_id, "agent_id": agent_id}
    
    async def send_message(self, agent_instance_id: str, text: str):
        """Have the agent answer text as if the user had spoken it"""
        payload = {
            "AgentInstanceId": agent_instance_id,
            "Text": text,
            "AddQuestionToHistory": True,
            "AddAnswerToHistory": True
        }
        result = await self.client.request("SendAgentInstanceLLM", payload)
        if not result.ok:
            raise ZegoAPIError(
                result.message or "send failed",
                status_code=400,
                action="SendAgentInstanceLLM",
                code=result.code
            )
    
    async def stop_session(self, agent_instance_id: str):
        """Delete the agent instance"""
        result = await self.client.request("DeleteAgentInstance", {"AgentInstanceId": agent_instance_id})
        if not result.ok:
            raise ZegoAPIError(
                result.message or "stop failed",
                status_code=400,
                action="DeleteAgentInstance",
                code=result.code
            )
        logger.info("Agent instance deleted", agent_instance_id=agent_instance_id)
    
    async def cleanup(self):
        await self.client.cleanup()

agent_service = AgentService()
