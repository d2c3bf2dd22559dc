"""
로깅 설정

create_app() 과 스크립트에서 호출합니다.
Settings 의 LOG_LEVEL / LOG_JSON / LOG_FILE / DEBUG 값을 그대로 받습니다.
"""
import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

from .structured_logging import JSONFormatter

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEBUG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"

QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "fastapi")


def _formatter(detailed: bool, enable_json: bool) -> logging.Formatter:
    if enable_json:
        return JSONFormatter()
    return logging.Formatter(DEBUG_FORMAT if detailed else TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def _handlers(log_file: Optional[Path]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def setup_logging(
    log_level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    detailed: bool = False,
    enable_json: bool = False,
) -> None:
    """
    루트 로거 구성

    Args:
        log_level: logging.INFO 같은 숫자 또는 "DEBUG" 같은 이름
        log_file: 로그 파일 경로 (None이면 콘솔만)
        detailed: True면 줄 번호 포함 포맷
        enable_json: True면 JSONFormatter (StructuredLogger 이벤트는 그대로 통과)

    여러 번 호출해도 핸들러가 중복되지 않습니다 (테스트에서 create_app 반복 호출).
    """
    level = logging.getLevelName(log_level.upper()) if isinstance(log_level, str) else log_level

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = _formatter(detailed, enable_json)
    for handler in _handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.info(
        f"Logging configured (level={logging.getLevelName(level)}, "
        f"json={enable_json}, file={log_file or '-'})"
    )
