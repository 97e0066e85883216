# -*- coding: utf-8 -*-
import logging
import sys
from pathlib import Path

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "exam.log"
_HANDLER_NAME = "nihongo-exam"


def setup_logging():
    """로깅 설정 (API 서버와 시험 클라이언트 공용, 중복 호출 시 핸들러는 한 번만 등록)"""
    log_level = logging.DEBUG if settings.environment == "development" else logging.INFO
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    if any(handler.get_name() == _HANDLER_NAME for handler in root_logger.handlers):
        return

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if settings.environment == "production":
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        handlers.append(file_handler)

    for handler in handlers:
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
