"""캐시되는 채팅 세션 값 객체."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _new_chat_id() -> str:
    return uuid.uuid4().hex


class ChatSession(BaseModel):
    """
    SDK 채팅 핸들과 파사드가 부여한 식별자 쌍

    chat 은 google.genai 의 AsyncChat (또는 같은 모양의 객체)이며
    대화 히스토리는 전적으로 그쪽이 관리한다.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    chat: Any
    model: str
    id: str = Field(default_factory=_new_chat_id)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
