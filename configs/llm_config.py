"""
LLM Configuration - OpenAI compatible endpoint (DashScope by default)
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from pathlib import Path

env_path = Path(__file__).parent.parent / ".env"

class LLMConfig(BaseSettings):
    """LLM Configuration"""
    
    api_key: str = Field(default="", alias="DASHSCOPE_API_KEY")
    base_url: str = Field(
        default="https://dashscope.aliyuncs.com/compatible-mode/v1/chat/completions",
        alias="LLM_BASE_URL"
    )
    model: str = Field(default="qwen-plus", alias="LLM_MODEL")
    system_prompt: str = Field(default="You are a helpful assistant.", alias="LLM_SYSTEM_PROMPT")
    
    # Generation parameters
    max_tokens: int = Field(default=300, alias="LLM_MAX_TOKENS")
    temperature: float = Field(default=0.7, alias="LLM_TEMPERATURE")
    top_p: float = Field(default=0.9, alias="LLM_TOP_P")
    timeout: int = Field(default=60, alias="LLM_TIMEOUT")
    
    # Route the ZEGO agent's LLM calls through this server's relay
    use_proxy: bool = Field(default=False, alias="LLM_USE_PROXY")
    
    model_config = {
        "env_file": env_path,
        "env_file_encoding": "utf-8",
        "extra": "allow"
    }
    
    def validate_config(self):
        """Validate Configuration"""
        if not self.api_key:
            raise ValueError("DASHSCOPE_API_KEY is required")
        if not self.model:
            raise ValueError("LLM_MODEL is required")

llm_config = LLMConfig()
