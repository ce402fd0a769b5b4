"""
GenAI 파사드 에러 클래스
- 파사드가 직접 발생시키는 에러만 정의한다
- SDK 예외(google.genai.errors.APIError 등)는 래핑하지 않고 그대로 전파된다
"""

from __future__ import annotations


class GenAIError(Exception):
    """파사드에서 발생하는 모든 로컬 에러의 베이스"""


class ApiKeyNotSetError(GenAIError, ValueError):
    """
    API key 가 비어 있을 때 발생하는 예외

    SDK 호출 이전에 발생하므로 네트워크 요청은 일어나지 않는다.
    """

    def __init__(self, message: str = "API key is not set.") -> None:
        super().__init__(message)


class FileOperationError(GenAIError):
    """
    파일 API 가 빈 결과를 반환했을 때 발생하는 예외

    Attributes:
        operation: 실패한 작업 이름 ('upload', 'get', 'delete')
        name: 대상 파일 이름 (upload 의 경우 None 일 수 있음)
        message: 에러 메시지
    """

    def __init__(self, operation: str, message: str, name: str | None = None):
        self.operation = operation
        self.name = name
        self.message = message
        target = f" ({name})" if name else ""
        super().__init__(f"[{operation}] {message}{target}")


class UploadFailedError(FileOperationError):
    """files.upload 가 결과를 반환하지 않음"""

    def __init__(self, name: str | None = None) -> None:
        super().__init__("upload", "File upload failed.", name)


class RemoteFileNotFoundError(FileOperationError):
    """files.get / files.delete 가 결과를 반환하지 않음"""

    def __init__(self, operation: str, name: str) -> None:
        super().__init__(operation, "File not found.", name)
