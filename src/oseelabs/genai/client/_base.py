"""BaseClient — SDK 핸들 lazy 획득, interceptor 체인, context manager."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from oseelabs.genai._types import ClientConfig, GenerationType
from oseelabs.genai.errors import ApiKeyNotSetError

logger = logging.getLogger(__name__)


class BaseClient(ABC):
    """SDK 클라이언트를 감싸는 파사드의 추상 베이스.

    - _build_sdk() 만 구현하면 된다.
    - 모든 작업은 _acquire() 를 먼저 호출한다 (API key 검사 + lazy 생성).
    - interceptor 체인은 베이스에서 처리한다.
    - async context manager 를 지원한다.
    """

    def __init__(self, config: ClientConfig, sdk: Any | None = None) -> None:
        self._config = config
        self._sdk: Any | None = sdk

    @property
    def config(self) -> ClientConfig:
        return self._config

    # --- SDK 핸들 ---

    @abstractmethod
    def _build_sdk(self, config: ClientConfig) -> Any:
        """설정으로부터 SDK 클라이언트를 생성한다."""

    def _acquire(self) -> Any:
        """API key 를 검사하고, 핸들이 없으면 만들어서 반환한다.

        검사와 생성 사이에 await 가 없으므로 이벤트 루프 안에서 원자적이다.
        """
        if not self._config.api_key:
            raise ApiKeyNotSetError()
        if self._sdk is None:
            self._sdk = self._build_sdk(self._config)
            logger.debug(
                "SDK 클라이언트 생성", extra={"model": self._config.model}
            )
        return self._sdk

    def _drop_sdk(self) -> Any | None:
        """현재 핸들을 떼어내 반환한다. 다음 _acquire() 에서 새로 생성된다."""
        sdk, self._sdk = self._sdk, None
        if sdk is not None:
            logger.debug("SDK 클라이언트 해제")
        return sdk

    # --- interceptor chain ---

    async def _run_before(
        self, operation: GenerationType, params: dict[str, Any]
    ) -> dict[str, Any]:
        for i in self._config.interceptors:
            if hasattr(i, "before_request"):
                params = await i.before_request(operation, params)
        return params

    async def _run_after(self, operation: GenerationType, response: Any) -> Any:
        for i in self._config.interceptors:
            if hasattr(i, "after_response"):
                response = await i.after_response(operation, response)
        return response

    # --- context manager ---

    async def __aenter__(self) -> BaseClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """리소스 정리. 서브클래스에서 오버라이드 가능."""
        self._drop_sdk()
