"""Interceptor 프로토콜, 모델 이름 및 클라이언트 설정 타입 정의."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Protocol, runtime_checkable

ModelVariant = Literal[
    "gemini-2.5-pro-preview-03-25",
    "gemini-2.0-flash",
    "gemini-2.0-flash-lite",
    "gemini-1.5-flash",
    "gemini-1.5-flash-8b",
    "gemini-1.5-pro",
    "gemini-embedding-exp",
    "imagen-3.0-generate-002",
]

DEFAULT_MODEL: ModelVariant = "gemini-1.5-flash"


class GenerationType(str, enum.Enum):
    """Interceptor 에 전달되는 호출 종류 태그"""

    CONTENT = "content"
    CONTENT_STREAM = "content-stream"
    IMAGES = "images"
    VIDEOS = "videos"
    COMPUTE_TOKENS = "compute-tokens"
    COUNT_TOKENS = "count-tokens"
    EMBED_CONTENT = "embed-content"
    CHAT_MESSAGE = "chat-message"
    CHAT_MESSAGE_STREAM = "chat-message-stream"


@runtime_checkable
class Interceptor(Protocol):
    """SDK 호출 전후 가로채기 프로토콜.

    before_request / after_response 중 필요한 것만 구현하면 된다.
    """

    async def before_request(
        self,
        operation: GenerationType,
        params: dict[str, Any],
    ) -> dict[str, Any]:
        """SDK 로 전달될 keyword 인자를 변환할 수 있다."""
        ...

    async def after_response(
        self, operation: GenerationType, response: Any
    ) -> Any:
        """응답을 변환하거나 로깅할 수 있다."""
        ...


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """GenAI 파사드 설정.

    - options 는 genai.Client(**kwargs) 로 그대로 전달된다.
    - api_key 는 client_kwargs() 에서 options 의 값을 항상 덮어쓴다.
    - 불변 객체이므로 변경은 dataclasses.replace() 로 새 값을 만든다.
    """

    api_key: str
    model: str = DEFAULT_MODEL
    options: Mapping[str, Any] = field(default_factory=dict)
    interceptors: tuple[Interceptor, ...] = ()

    def __post_init__(self) -> None:
        # 호출자의 dict 를 공유하지 않도록 복사 후 읽기 전용으로 고정
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))
        object.__setattr__(self, "interceptors", tuple(self.interceptors))

    def client_kwargs(self) -> dict[str, Any]:
        """genai.Client 생성자에 넘길 kwargs (api_key 병합)"""
        kwargs = dict(self.options)
        kwargs["api_key"] = self.api_key
        return kwargs
