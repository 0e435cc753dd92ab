"""
ZEGO Configuration - AI Agent server API and RTC token
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from pathlib import Path

env_path = Path(__file__).parent.parent / ".env"

class ZegoConfig(BaseSettings):
    """ZEGO Configuration"""
    
    # Credentials and endpoint
    app_id: str = Field(default="", alias="ZEGO_APP_ID")
    server_secret: str = Field(default="", alias="ZEGO_SERVER_SECRET")
    api_base_url: str = Field(default="", alias="ZEGO_API_BASE_URL")  # e.g. https://ai-agent-api.zegocloud.com/v2
    
    request_timeout: int = Field(default=30, alias="ZEGO_REQUEST_TIMEOUT")
    token_ttl: int = Field(default=3600, alias="ZEGO_TOKEN_TTL")
    
    # Agent defaults
    agent_name: str = Field(default="AI Assistant", alias="ZEGO_AGENT_NAME")
    tts_vendor: str = Field(default="CosyVoice", alias="ZEGO_TTS_VENDOR")
    tts_voice: str = Field(default="longxiaochun_v2", alias="ZEGO_TTS_VOICE")
    tts_encoding: str = Field(default="linear16", alias="ZEGO_TTS_ENCODING")
    asr_hot_words: str = Field(default="AI|10,Assistant|8,ZEGOCLOUD|10", alias="ZEGO_ASR_HOT_WORDS")
    asr_vad_silence_segmentation: int = Field(default=800, alias="ZEGO_ASR_VAD_SILENCE_MS")
    asr_pause_interval: int = Field(default=1200, alias="ZEGO_ASR_PAUSE_INTERVAL_MS")
    message_window_size: int = Field(default=10, alias="ZEGO_MESSAGE_WINDOW_SIZE")
    
    model_config = {
        "env_file": env_path,
        "env_file_encoding": "utf-8",
        "extra": "allow"
    }
    
    @property
    def is_configured(self) -> bool:
        return bool(self.app_id and self.server_secret and self.api_base_url)
    
    @property
    def numeric_app_id(self) -> int:
        """App ID as the integer the RTC token expects"""
        return int(self.app_id)
    
    def validate_config(self):
        """Validate Configuration"""
        if not self.app_id:
            raise ValueError("ZEGO_APP_ID is required")
        if not self.server_secret:
            raise ValueError("ZEGO_SERVER_SECRET is required")
        if not self.api_base_url:
            raise ValueError("ZEGO_API_BASE_URL is required")

zego_config = ZegoConfig()
