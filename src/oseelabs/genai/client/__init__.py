"""파사드 클라이언트 re-export."""

from oseelabs.genai.client._base import BaseClient
from oseelabs.genai.client.chat import ChatSession
from oseelabs.genai.client.gemini import GenAI

__all__ = [
    "BaseClient",
    "ChatSession",
    "GenAI",
]
