"""
ID Generator Utils
"""
import secrets
import time
import uuid

def generate_conversation_id() -> str:
    """Generate conversation ID"""
    return f"conv_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"

def generate_message_id() -> str:
    """Generate message ID - using standard UUID format"""
    return str(uuid.uuid4())

def generate_agent_id() -> str:
    """Generate agent ID registered with ZEGO"""
    return f"agent_{int(time.time() * 1000)}"

def generate_nonce(num_bytes: int = 16) -> str:
    """Random hex nonce for request signing"""
    return secrets.token_hex(num_bytes)
