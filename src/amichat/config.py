"""Configuration for amichat.

Centralizes fixed protocol values and the single environment override
(`AMICHAT_API_BASE`).
"""

import os
from datetime import datetime

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

# Environment
API_BASE_ENV_VAR = "AMICHAT_API_BASE"
DEFAULT_API_BASE = "http://localhost:8080"

# Pub/sub endpoint (SockJS raw WebSocket path of the chat server)
WEBSOCKET_URL = "ws://localhost:8080/ws/websocket"
TOPIC_PREFIX = "/topic/messages/"
CHAT_DESTINATION = "/app/chat"
RECONNECT_DELAY = 3.0  # Seconds between reconnect attempts, no backoff

# Assistant endpoint
AI_CHAT_PATH = "/api/ai-chat"
REQUEST_TIMEOUT = 60.0  # Seconds, transport-level only

# Display
TIMESTAMP_FORMAT = "%H:%M"

# Assistant copy
DEFAULT_GREETING = (
    "Xin chào! Tôi là AMI của PTIT. Tôi có thể hỗ trợ bạn tra cứu thông tin "
    "học vụ, dịch vụ sinh viên, hoặc gợi ý nội dung."
)
EMPTY_REPLY_PLACEHOLDER = "AMI chưa thể trả lời lúc này."
ASSISTANT_ERROR_MESSAGE = "Không thể kết nối tới AI. Vui lòng thử lại."
SUGGESTIONS = (
    "Học phí học kỳ này?",
    "Lịch thi cuối kỳ",
    "Hướng dẫn đăng ký môn",
)


def build_timestamp() -> str:
    """Return the local wall-clock time formatted for display."""
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def topic_for(identity: str) -> str:
    """Return the subscription topic scoped to an identity."""
    return f"{TOPIC_PREFIX}{identity}"


class Settings(BaseModel):
    """Runtime settings resolved at startup."""

    api_base: str = Field(
        default=DEFAULT_API_BASE,
        description="Origin of the AI chat HTTP endpoint"
    )
    websocket_url: str = Field(
        default=WEBSOCKET_URL,
        description="Pub/sub WebSocket endpoint"
    )
    reconnect_delay: float = Field(default=RECONNECT_DELAY, gt=0)


def load_settings(load_env_file: bool = True) -> Settings:
    """Build settings from the environment.

    Args:
        load_env_file: Also read a `.env` file from the working directory

    Returns:
        Settings with `api_base` taken from AMICHAT_API_BASE when set

    Environment variables:
        AMICHAT_API_BASE: AI endpoint origin (default: http://localhost:8080)
    """
    if load_env_file:
        load_dotenv(find_dotenv(usecwd=True))

    api_base = os.getenv(API_BASE_ENV_VAR, "").strip() or DEFAULT_API_BASE
    return Settings(api_base=api_base.rstrip("/"))
