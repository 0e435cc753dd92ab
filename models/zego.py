"""
ZEGO server API models
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class ZegoResponse(BaseModel):
    """Envelope every ZEGO server API call answers with"""
    code: int = Field(..., alias="Code", description="0 on success")
    message: str = Field(default="", alias="Message")
    request_id: Optional[str] = Field(None, alias="RequestId")
    data: Optional[Dict[str, Any]] = Field(None, alias="Data")

    model_config = {
        "populate_by_name": True,
        "extra": "allow"
    }

    @property
    def ok(self) -> bool:
        return self.code == 0


class LLMSettings(BaseModel):
    url: str = Field(..., alias="Url")
    api_key: str = Field(..., alias="ApiKey")
    model: str = Field(..., alias="Model")
    system_prompt: str = Field(..., alias="SystemPrompt")
    temperature: float = Field(..., alias="Temperature")
    top_p: float = Field(..., alias="TopP")
    params: Dict[str, Any] = Field(default_factory=dict, alias="Params")

    model_config = {"populate_by_name": True}


class TTSSettings(BaseModel):
    vendor: str = Field(..., alias="Vendor")
    url: str = Field(default="", alias="Url")
    params: Dict[str, Any] = Field(default_factory=dict, alias="Params")

    model_config = {"populate_by_name": True}


class ASRSettings(BaseModel):
    hot_word: str = Field(..., alias="HotWord")
    vad_silence_segmentation: int = Field(..., alias="VADSilenceSegmentation")
    pause_interval: int = Field(..., alias="PauseInterval")

    model_config = {"populate_by_name": True}


class AgentConfig(BaseModel):
    """RegisterAgent body"""
    agent_id: str = Field(..., alias="AgentId")
    name: str = Field(..., alias="Name")
    llm: LLMSettings = Field(..., alias="LLM")
    tts: TTSSettings = Field(..., alias="TTS")
    asr: ASRSettings = Field(..., alias="ASR")

    model_config = {"populate_by_name": True}


class RTCSettings(BaseModel):
    room_id: str = Field(..., alias="RoomId")
    stream_id: str = Field(..., alias="StreamId")

    model_config = {"populate_by_name": True}


class MessageHistorySettings(BaseModel):
    sync_mode: int = Field(default=1, alias="SyncMode")
    messages: List[Dict[str, Any]] = Field(default_factory=list, alias="Messages")
    window_size: int = Field(default=10, alias="WindowSize")

    model_config = {"populate_by_name": True}


class CallbackSettings(BaseModel):
    asr_result: int = Field(default=1, alias="ASRResult")
    llm_result: int = Field(default=1, alias="LLMResult")
    exception: int = Field(default=1, alias="Exception")
    interrupted: int = Field(default=1, alias="Interrupted")
    user_speak_action: int = Field(default=1, alias="UserSpeakAction")
    agent_speak_action: int = Field(default=1, alias="AgentSpeakAction")

    model_config = {"populate_by_name": True}


class AdvancedSettings(BaseModel):
    interrupt_mode: int = Field(default=0, alias="InterruptMode")

    model_config = {"populate_by_name": True}


class InstanceConfig(BaseModel):
    """CreateAgentInstance body"""
    agent_id: str = Field(..., alias="AgentId")
    user_id: str = Field(..., alias="UserId")
    rtc: RTCSettings = Field(..., alias="RTC")
    message_history: MessageHistorySettings = Field(default_factory=MessageHistorySettings, alias="MessageHistory")
    callback_config: CallbackSettings = Field(default_factory=CallbackSettings, alias="CallbackConfig")
    advanced_config: AdvancedSettings = Field(default_factory=AdvancedSettings, alias="AdvancedConfig")

    model_config = {"populate_by_name": True}


def to_wire(model: BaseModel) -> Dict[str, Any]:
    """Serialize with ZEGO's PascalCase field names"""
    return model.model_dump(by_alias=True)
