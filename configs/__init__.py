"""
Configuration package
"""
from .settings import settings
from .zego_config import zego_config
from .llm_config import llm_config

__all__ = [
    "settings",
    "zego_config",
    "llm_config",
]
