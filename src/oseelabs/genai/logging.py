"""
로깅 설정 유틸
- setup_logging()으로 oseelabs.genai 패키지 로거를 설정
- 파사드가 extra 로 넘기는 필드(model, operation, chat_id)를 JSON 에 포함
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Literal

GENAI_LOGGER_NAME = "oseelabs.genai"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# LogRecord 에 extra 로 실려 오는 파사드 필드
CONTEXT_FIELDS = ("model", "operation", "chat_id")


class JSONFormatter(logging.Formatter):
    """한 줄짜리 JSON 로그 포매터"""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = str(value)
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(
    level: int | str = logging.INFO,
    format: Literal["text", "json"] = "text",
    stream: object = None,
    propagate: bool = False,
) -> logging.Logger:
    """
    oseelabs.genai 로거에 핸들러 하나를 붙인다.

    여러 번 호출해도 핸들러가 중복되지 않는다.

    Args:
        level: 로그 레벨 (예: logging.DEBUG, "DEBUG")
        format: "text" 또는 "json"
        stream: 출력 스트림 (기본: sys.stderr)
        propagate: 상위(root) 로거로도 전달할지 여부

    Returns:
        설정된 oseelabs.genai 로거
    """
    logger = logging.getLogger(GENAI_LOGGER_NAME)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    logger.propagate = propagate

    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    if format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT))

    logger.addHandler(handler)
    return logger
