"""
oseelabs.genai: google-genai SDK 를 감싸는 얇은 파사드
"""

from oseelabs.genai._types import (
    DEFAULT_MODEL,
    ClientConfig,
    GenerationType,
    Interceptor,
    ModelVariant,
)
from oseelabs.genai.client import ChatSession, GenAI
from oseelabs.genai.errors import (
    ApiKeyNotSetError,
    FileOperationError,
    GenAIError,
    RemoteFileNotFoundError,
    UploadFailedError,
)
from oseelabs.genai.logging import setup_logging

__version__ = "0.1.0"

__all__ = [
    "GenAI",
    "ChatSession",
    "ClientConfig",
    "DEFAULT_MODEL",
    "GenerationType",
    "Interceptor",
    "ModelVariant",
    "GenAIError",
    "ApiKeyNotSetError",
    "FileOperationError",
    "UploadFailedError",
    "RemoteFileNotFoundError",
    "setup_logging",
    "__version__",
]
