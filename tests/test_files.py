"""
파일 API 테스트
- SDK 가 빈 결과를 주면 UploadFailedError / RemoteFileNotFoundError
python -m pytest tests/test_files.py -v
"""

import io
from pathlib import Path

import pytest

from oseelabs.genai import GenAI, RemoteFileNotFoundError, UploadFailedError


class TestUpload:
    @pytest.mark.asyncio
    async def test_upload_returns_file(self, fake_sdk):
        ai = GenAI("key", client=fake_sdk)
        config = {"mime_type": "text/plain"}

        result = await ai.upload_file("notes.txt", config)

        assert result is fake_sdk.results["files.upload"]
        assert fake_sdk.calls == [("files.upload", {"file": "notes.txt", "config": config})]

    @pytest.mark.asyncio
    async def test_upload_binary_payload(self, fake_sdk):
        ai = GenAI("key", client=fake_sdk)
        payload = io.BytesIO(b"\x00\x01")
        await ai.upload_file(payload)
        assert fake_sdk.calls[0][1]["file"] is payload

    @pytest.mark.asyncio
    async def test_upload_empty_result(self, fake_sdk):
        fake_sdk.results["files.upload"] = None
        ai = GenAI("key", client=fake_sdk)

        with pytest.raises(UploadFailedError) as exc_info:
            await ai.upload_file(Path("data") / "a.pdf")

        assert exc_info.value.operation == "upload"
        assert exc_info.value.name == str(Path("data") / "a.pdf")
        assert "File upload failed." in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_upload_empty_result_binary(self, fake_sdk):
        fake_sdk.results["files.upload"] = None
        ai = GenAI("key", client=fake_sdk)

        with pytest.raises(UploadFailedError) as exc_info:
            await ai.upload_file(io.BytesIO(b"x"))

        assert exc_info.value.name is None


class TestGetDelete:
    @pytest.mark.asyncio
    async def test_get_file(self, fake_sdk):
        ai = GenAI("key", client=fake_sdk)
        result = await ai.get_file("files/abc")
        assert result is fake_sdk.results["files.get"]
        assert fake_sdk.calls == [("files.get", {"name": "files/abc", "config": None})]

    @pytest.mark.asyncio
    async def test_get_file_not_found(self, fake_sdk):
        fake_sdk.results["files.get"] = None
        ai = GenAI("key", client=fake_sdk)

        with pytest.raises(RemoteFileNotFoundError) as exc_info:
            await ai.get_file("files/missing")

        assert exc_info.value.operation == "get"
        assert exc_info.value.name == "files/missing"

    @pytest.mark.asyncio
    async def test_delete_file(self, fake_sdk):
        ai = GenAI("key", client=fake_sdk)
        result = await ai.delete_file("files/abc")
        assert result is fake_sdk.results["files.delete"]

    @pytest.mark.asyncio
    async def test_delete_file_not_found(self, fake_sdk):
        fake_sdk.results["files.delete"] = None
        ai = GenAI("key", client=fake_sdk)

        with pytest.raises(RemoteFileNotFoundError, match="files/missing"):
            await ai.delete_file("files/missing")
