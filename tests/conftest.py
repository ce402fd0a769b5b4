"""
테스트 공용 fake SDK
- google.genai.Client 와 같은 모양 (aio.models / aio.chats / aio.files)
- 모든 호출을 calls 에 기록하고 canned 응답을 반환
"""

from typing import Any

import pytest
from google import genai


async def _agen(items: list[Any], error: BaseException | None = None):
    for item in items:
        yield item
    if error is not None:
        raise error


class _Recorder:
    def __init__(self, sdk: "FakeSDK") -> None:
        self._sdk = sdk

    def _record(self, name: str, kwargs: dict[str, Any]) -> Any:
        self._sdk.calls.append((name, kwargs))
        return self._sdk.results.get(name)


class FakeModels(_Recorder):
    async def generate_content(self, **kwargs):
        return self._record("generate_content", kwargs)

    async def generate_content_stream(self, **kwargs):
        self._record("generate_content_stream", kwargs)
        return _agen(self._sdk.stream_chunks, self._sdk.stream_error)

    async def generate_images(self, **kwargs):
        return self._record("generate_images", kwargs)

    async def generate_videos(self, **kwargs):
        return self._record("generate_videos", kwargs)

    async def compute_tokens(self, **kwargs):
        return self._record("compute_tokens", kwargs)

    async def count_tokens(self, **kwargs):
        return self._record("count_tokens", kwargs)

    async def embed_content(self, **kwargs):
        return self._record("embed_content", kwargs)


class FakeChat(_Recorder):
    async def send_message(self, message, config=None):
        return self._record("send_message", {"message": message, "config": config})

    async def send_message_stream(self, message, config=None):
        self._record("send_message_stream", {"message": message, "config": config})
        return _agen(self._sdk.stream_chunks, self._sdk.stream_error)


class FakeChats(_Recorder):
    def create(self, **kwargs):
        self._record("chats.create", kwargs)
        return FakeChat(self._sdk)


class FakeFiles(_Recorder):
    async def upload(self, **kwargs):
        return self._record("files.upload", kwargs)

    async def get(self, **kwargs):
        return self._record("files.get", kwargs)

    async def delete(self, **kwargs):
        return self._record("files.delete", kwargs)


class FakeAio:
    def __init__(self, sdk: "FakeSDK") -> None:
        self.models = FakeModels(sdk)
        self.chats = FakeChats(sdk)
        self.files = FakeFiles(sdk)
        self._sdk = sdk

    async def aclose(self) -> None:
        self._sdk.closed = True


CANNED_NAMES = (
    "generate_content",
    "generate_images",
    "generate_videos",
    "compute_tokens",
    "count_tokens",
    "embed_content",
    "send_message",
    "files.upload",
    "files.get",
    "files.delete",
)


class FakeSDK:
    """genai.Client 대역. 생성 kwargs 와 호출 기록을 보관한다."""

    instances: list["FakeSDK"] = []

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.results: dict[str, Any] = {name: object() for name in CANNED_NAMES}
        self.stream_chunks: list[Any] = ["a", "b", "c"]
        self.stream_error: BaseException | None = None
        self.closed = False
        self.aio = FakeAio(self)
        type(self).instances.append(self)


@pytest.fixture
def fake_sdk_cls(monkeypatch):
    """google.genai.Client 를 FakeSDK 서브클래스로 교체"""

    class _FakeSDK(FakeSDK):
        instances: list[FakeSDK] = []

    monkeypatch.setattr(genai, "Client", _FakeSDK)
    return _FakeSDK


@pytest.fixture
def fake_sdk():
    """생성자에 직접 주입할 FakeSDK"""
    return FakeSDK(api_key="injected")
