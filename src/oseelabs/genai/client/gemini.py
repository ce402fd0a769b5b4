"""Google GenAI (google-genai) SDK 파사드.

- 모든 작업은 API key 검사 → SDK 핸들 lazy 생성 → SDK 호출 1회 → 결과 그대로 반환
- 채팅 세션은 인스턴스당 하나만 캐시된다
- 재시도/로깅/에러 변환은 하지 않는다 (SDK 예외는 그대로 전파)
"""

from __future__ import annotations

import dataclasses
import logging
import os
import threading
from collections.abc import Awaitable, Callable, Iterable, Mapping
from types import MappingProxyType
from typing import IO, Any, AsyncIterator

from google import genai
from google.genai import types

from oseelabs.genai._types import (
    DEFAULT_MODEL,
    ClientConfig,
    GenerationType,
    Interceptor,
)
from oseelabs.genai.client._base import BaseClient
from oseelabs.genai.client.chat import ChatSession
from oseelabs.genai.errors import (
    ApiKeyNotSetError,
    RemoteFileNotFoundError,
    UploadFailedError,
)

logger = logging.getLogger(__name__)

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")
MODEL_ENV_VAR = "GENAI_MODEL"


class GenAI(BaseClient):
    """
    google.genai.Client 를 감싸는 thin wrapper

    사용법:
        async with GenAI(api_key="...") as ai:
            response = await ai.generate_content("안녕")

            async for chunk in ai.generate_content_stream("긴 이야기"):
                print(chunk.text)

            reply = await ai.chat_message("첫 메시지")

    api_key 를 바꾸면 (setter 또는 reconfigure) SDK 핸들과 채팅 세션이
    버려지고, 다음 호출에서 새 설정으로 다시 만들어진다.
    """

    def __init__(
        self,
        api_key: str,
        options: Mapping[str, Any] | None = None,
        client: genai.Client | None = None,
        model: str = DEFAULT_MODEL,
        interceptors: Iterable[Interceptor] = (),
    ) -> None:
        config = ClientConfig(
            api_key=api_key,
            model=model,
            options=options or {},
            interceptors=tuple(interceptors),
        )
        super().__init__(config, sdk=client)
        self._lock = threading.Lock()
        self._chat: ChatSession | None = None
        # reconfigure 로 교체된 핸들. 진행 중인 스트림이 있을 수 있어 close() 에서 닫는다
        self._retired: list[Any] = []

    @classmethod
    def from_config(
        cls, config: ClientConfig, client: genai.Client | None = None
    ) -> GenAI:
        return cls(
            config.api_key,
            options=config.options,
            client=client,
            model=config.model,
            interceptors=config.interceptors,
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> GenAI:
        """GEMINI_API_KEY (없으면 GOOGLE_API_KEY) 와 GENAI_MODEL 로 생성

        api_key 를 직접 넘기면 환경변수보다 우선한다.
        """
        api_key = kwargs.pop("api_key", None) or next(
            (os.environ[v] for v in API_KEY_ENV_VARS if os.environ.get(v)), ""
        )
        if not api_key:
            raise ApiKeyNotSetError(
                "API key is not set. "
                "GEMINI_API_KEY 또는 GOOGLE_API_KEY 환경변수를 설정하세요."
            )
        kwargs.setdefault("model", os.environ.get(MODEL_ENV_VAR) or DEFAULT_MODEL)
        return cls(api_key, **kwargs)

    def _build_sdk(self, config: ClientConfig) -> genai.Client:
        return genai.Client(**config.client_kwargs())

    # --- 설정 ---

    @property
    def api_key(self) -> str:
        return self._config.api_key

    @api_key.setter
    def api_key(self, value: str) -> None:
        if value != self._config.api_key:
            self.reconfigure(api_key=value)

    @property
    def model(self) -> str:
        return self._config.model

    @property
    def options(self) -> Mapping[str, Any]:
        """genai.Client 에 전달되는 kwargs (api_key 병합, 읽기 전용)"""
        return MappingProxyType(self._config.client_kwargs())

    def reconfigure(self, **changes: Any) -> ClientConfig:
        """
        설정을 교체하고 SDK 핸들과 채팅 세션을 함께 버린다.

        Args:
            **changes: ClientConfig 필드 (api_key, model, options, interceptors)

        Returns:
            새 ClientConfig
        """
        config = dataclasses.replace(self._config, **changes)
        with self._lock:
            self._config = config
            self._chat = None
            retired = self._drop_sdk()
            if retired is not None:
                self._retired.append(retired)
        logger.debug("설정 변경: %s", ", ".join(sorted(changes)))
        return config

    # --- SDK 접근 ---

    @property
    def client(self) -> genai.Client:
        return self._acquire()

    @property
    def models(self) -> Any:
        """SDK 의 비동기 model 작업 인터페이스 (client.aio.models)"""
        return self._acquire().aio.models

    async def _invoke(
        self,
        operation: GenerationType,
        call: Callable[..., Awaitable[Any]],
        params: dict[str, Any],
    ) -> Any:
        params = await self._run_before(operation, params)
        response = await call(**params)
        return await self._run_after(operation, response)

    # --- 생성 작업 ---

    async def generate_content(
        self,
        contents: types.ContentListUnionDict,
        config: types.GenerateContentConfigOrDict | None = None,
    ) -> types.GenerateContentResponse:
        """콘텐츠를 한 번에 생성한다."""
        models = self.models
        return await self._invoke(
            GenerationType.CONTENT,
            models.generate_content,
            {"model": self.model, "contents": contents, "config": config},
        )

    async def generate_content_stream(
        self,
        contents: types.ContentListUnionDict,
        config: types.GenerateContentConfigOrDict | None = None,
    ) -> AsyncIterator[types.GenerateContentResponse]:
        """
        콘텐츠를 스트리밍으로 생성한다.

        반환값은 async generator 이며 첫 pull 시점에 API key 검사와
        SDK 호출이 일어난다. 한 번만 순회할 수 있다.
        """
        models = self.models
        params = await self._run_before(
            GenerationType.CONTENT_STREAM,
            {"model": self.model, "contents": contents, "config": config},
        )
        async for chunk in await models.generate_content_stream(**params):
            yield chunk

    async def generate_images(
        self,
        prompt: str,
        config: types.GenerateImagesConfigOrDict | None = None,
    ) -> types.GenerateImagesResponse:
        models = self.models
        return await self._invoke(
            GenerationType.IMAGES,
            models.generate_images,
            {"model": self.model, "prompt": prompt, "config": config},
        )

    async def generate_videos(
        self,
        prompt: str,
        config: types.GenerateVideosConfigOrDict | None = None,
    ) -> types.GenerateVideosOperation:
        """비디오 생성 operation 을 반환한다 (완료 polling 은 호출자 몫)."""
        models = self.models
        return await self._invoke(
            GenerationType.VIDEOS,
            models.generate_videos,
            {"model": self.model, "prompt": prompt, "config": config},
        )

    async def compute_tokens(
        self,
        contents: types.ContentListUnionDict,
        config: types.ComputeTokensConfigOrDict | None = None,
    ) -> types.ComputeTokensResponse:
        models = self.models
        return await self._invoke(
            GenerationType.COMPUTE_TOKENS,
            models.compute_tokens,
            {"model": self.model, "contents": contents, "config": config},
        )

    async def count_tokens(
        self,
        contents: types.ContentListUnionDict,
        config: types.CountTokensConfigOrDict | None = None,
    ) -> types.CountTokensResponse:
        models = self.models
        return await self._invoke(
            GenerationType.COUNT_TOKENS,
            models.count_tokens,
            {"model": self.model, "contents": contents, "config": config},
        )

    async def embed_content(
        self,
        contents: types.ContentListUnionDict,
        config: types.EmbedContentConfigOrDict | None = None,
    ) -> types.EmbedContentResponse:
        models = self.models
        return await self._invoke(
            GenerationType.EMBED_CONTENT,
            models.embed_content,
            {"model": self.model, "contents": contents, "config": config},
        )

    # --- 채팅 ---

    @property
    def chat_id(self) -> str | None:
        chat = self._chat
        return chat.id if chat is not None else None

    def _create_chat(self, sdk: Any) -> ChatSession:
        chat = sdk.aio.chats.create(
            model=self.model, config=types.GenerateContentConfig()
        )
        return ChatSession(chat=chat, model=self.model)

    def chat_session(self) -> ChatSession:
        """캐시된 채팅 세션을 반환한다. 없으면 만든다."""
        with self._lock:
            sdk = self._acquire()
            if self._chat is None:
                self._chat = self._create_chat(sdk)
                logger.debug(
                    "채팅 세션 생성",
                    extra={"chat_id": self._chat.id, "model": self.model},
                )
            return self._chat

    def new_chat(self) -> ChatSession:
        """새 채팅 세션을 만들어 캐시된 세션을 교체한다."""
        with self._lock:
            sdk = self._acquire()
            previous = self._chat
            self._chat = self._create_chat(sdk)
            logger.debug(
                "채팅 세션 교체 (이전: %s)",
                previous.id if previous else None,
                extra={"chat_id": self._chat.id, "model": self.model},
            )
            return self._chat

    async def chat_message(
        self,
        message: list[types.PartUnionDict] | types.PartUnionDict,
        config: types.GenerateContentConfigOrDict | None = None,
    ) -> types.GenerateContentResponse:
        """캐시된 세션으로 메시지를 보내고 전체 응답을 반환한다."""
        session = self.chat_session()
        return await self._invoke(
            GenerationType.CHAT_MESSAGE,
            session.chat.send_message,
            {"message": message, "config": config},
        )

    async def chat_message_stream(
        self,
        message: list[types.PartUnionDict] | types.PartUnionDict,
        config: types.GenerateContentConfigOrDict | None = None,
    ) -> AsyncIterator[types.GenerateContentResponse]:
        """캐시된 세션으로 메시지를 보내고 응답 조각을 순서대로 yield 한다."""
        session = self.chat_session()
        params = await self._run_before(
            GenerationType.CHAT_MESSAGE_STREAM,
            {"message": message, "config": config},
        )
        async for chunk in await session.chat.send_message_stream(**params):
            yield chunk

    # --- 파일 ---

    async def upload_file(
        self,
        file: str | os.PathLike[str] | IO[bytes],
        config: types.UploadFileConfigOrDict | None = None,
    ) -> types.File:
        """
        파일을 업로드한다.

        Raises:
            UploadFailedError: SDK 가 결과를 반환하지 않은 경우
        """
        files = self._acquire().aio.files
        result = await files.upload(file=file, config=config)
        if not result:
            name = os.fspath(file) if isinstance(file, (str, os.PathLike)) else None
            raise UploadFailedError(name)
        return result

    async def get_file(
        self,
        name: str,
        config: types.GetFileConfigOrDict | None = None,
    ) -> types.File:
        files = self._acquire().aio.files
        result = await files.get(name=name, config=config)
        if not result:
            raise RemoteFileNotFoundError("get", name)
        return result

    async def delete_file(
        self,
        name: str,
        config: types.DeleteFileConfigOrDict | None = None,
    ) -> types.DeleteFileResponse:
        files = self._acquire().aio.files
        result = await files.delete(name=name, config=config)
        if not result:
            raise RemoteFileNotFoundError("delete", name)
        return result

    # --- 정리 ---

    async def close(self) -> None:
        """SDK 핸들(교체된 것 포함)을 닫고 채팅 세션을 버린다.

        이후 호출은 핸들을 새로 만든다.
        """
        with self._lock:
            self._chat = None
            handles, self._retired = self._retired, []
            sdk = self._drop_sdk()
            if sdk is not None:
                handles.append(sdk)
        for handle in handles:
            await handle.aio.aclose()
