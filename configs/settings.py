"""
Application configuration
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List, Optional
from pathlib import Path

env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    """Application settings"""
    
    # Basic application configuration
    app_name: str = Field(default="voice-agent-proxy", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    
    # Server configuration
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")
    server_url: str = Field(default="http://localhost:8080", alias="SERVER_URL")
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")
    
    # Shared secret the ZEGO agent presents when calling the LLM relay
    proxy_auth_token: str = Field(default="secure_proxy_token_123", alias="PROXY_AUTH_TOKEN")
    
    # Log configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default="logs/app.log", alias="LOG_FILE")
    log_max_size: int = Field(default=10485760, alias="LOG_MAX_SIZE")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")
    
    # Conversation history storage
    storage_dir: str = Field(default=".storage", alias="STORAGE_DIR")
    max_conversations: int = Field(default=50, alias="MAX_CONVERSATIONS")
    
    model_config = {
        "env_file": env_path,
        "env_file_encoding": "utf-8",
        "extra": "allow"
    }

settings = Settings()
