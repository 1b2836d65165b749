"""日志配置 - 根据 Settings 配置标准库 logging

各模块统一使用 logger = logging.getLogger(__name__)，结构化字段通过 extra={...} 传入：
- text 格式：人类可读，extra 字段附加在行尾
- json 格式：每行一个 JSON 对象，便于日志平台采集
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

from flowcanvas.config import Settings, settings

_STANDARD_ATTRIBUTES = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict[str, object]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRIBUTES and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(
            fmt="[%(levelname)s] %(asctime)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra = _extra_fields(record)
        if extra:
            line += " " + " ".join(f"{key}={value}" for key, value in extra.items())
        return line


def configure_logging(config: Settings | None = None) -> logging.Logger:
    """配置 flowcanvas 包的日志（重复调用不会重复添加 handler）"""
    config = config or settings
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logger = logging.getLogger("flowcanvas")
    logger.setLevel(level)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if config.log_format == "json" else TextFormatter())
    logger.addHandler(handler)
    return logger
