"""
통합 로깅 시스템
KorText 패키지 로그를 중앙화하여 관리하고 다양한 출력 옵션 제공
"""

import logging
import logging.handlers
import sys
import json
from datetime import datetime, timezone
from typing import Dict
from functools import wraps
import time

from ..config import settings

PACKAGE_LOGGER_NAME = "kortext_core"

# ========== 커스텀 포매터 ==========


class ColoredFormatter(logging.Formatter):
    """컬러 출력을 지원하는 포매터"""

    # ANSI 색상 코드
    COLORS = {
        'DEBUG': '\033[36m',  # Cyan
        'INFO': '\033[32m',  # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',  # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        # 원본 레코드를 다른 핸들러와 공유하므로 복사본에만 색상 적용
        if sys.stderr.isatty() and not sys.platform.startswith('win'):
            levelname = record.levelname
            if levelname in self.COLORS:
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        return super().format(record)


class JSONFormatter(logging.Formatter):
    """JSON 형식으로 로그를 출력하는 포매터"""

    def format(self, record):
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        # 추가 필드가 있으면 포함
        if hasattr(record, 'extra_data'):
            log_data['extra'] = record.extra_data

        # 예외 정보가 있으면 포함
        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


# ========== 로거 설정 클래스 ==========


class LoggerConfig:
    """로거 설정 관리 클래스"""

    _loggers: Dict[str, logging.Logger] = {}
    _initialized: bool = False

    @classmethod
    def setup(cls, force: bool = False):
        """
        패키지 로거 설정

        애플리케이션의 루트 로거는 건드리지 않고 kortext_core 로거에만
        핸들러를 붙인다.

        Args:
            force: 강제 재설정 여부
        """
        if cls._initialized and not force:
            return

        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        package_logger.setLevel(
            getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING))

        # 기존 핸들러 제거
        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)

        # 콘솔 핸들러 추가
        package_logger.addHandler(cls._create_console_handler())

        # 파일 핸들러 추가 (설정에 따라)
        if settings.ENABLE_FILE_LOGGING:
            package_logger.addHandler(cls._create_file_handler())

        cls._initialized = True

        logger = logging.getLogger(__name__)
        logger.debug(f"로그 레벨: {settings.LOG_LEVEL}")
        logger.debug(
            f"로그 파일: {settings.LOG_FILE if settings.ENABLE_FILE_LOGGING else 'Disabled'}"
        )

    @classmethod
    def _create_console_handler(cls) -> logging.StreamHandler:
        """콘솔 핸들러 생성"""
        handler = logging.StreamHandler(sys.stderr)

        # 디버그 모드에서는 컬러 포매터 사용
        if settings.DEBUG:
            formatter = ColoredFormatter(settings.LOG_FORMAT)
        else:
            formatter = logging.Formatter(settings.LOG_FORMAT)

        handler.setFormatter(formatter)
        return handler

    @classmethod
    def _create_file_handler(cls) -> logging.handlers.RotatingFileHandler:
        """파일 핸들러 생성"""
        log_dir = settings.LOG_FILE.parent
        log_dir.mkdir(parents=True, exist_ok=True)

        # 로테이팅 파일 핸들러 (10MB, 5개 백업)
        handler = logging.handlers.RotatingFileHandler(
            filename=str(settings.LOG_FILE),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8')

        # 파일에는 구조화된 로그 저장
        formatter = JSONFormatter(
        ) if not settings.DEBUG else logging.Formatter(settings.LOG_FORMAT)
        handler.setFormatter(formatter)

        return handler

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        로거 인스턴스 가져오기

        Args:
            name: 로거 이름

        Returns:
            Logger 인스턴스
        """
        if name not in cls._loggers:
            cls._loggers[name] = logging.getLogger(name)
        return cls._loggers[name]


# ========== 로깅 유틸리티 함수 ==========


def get_logger(name: str = None) -> logging.Logger:
    """
    로거 인스턴스 가져오기

    Args:
        name: 로거 이름 (None이면 패키지 로거)

    Returns:
        Logger 인스턴스
    """
    return LoggerConfig.get_logger(name or PACKAGE_LOGGER_NAME)


def log_execution_time(func=None,
                       *,
                       logger_name: str = None,
                       level: str = 'DEBUG'):
    """
    함수 실행 시간을 로깅하는 데코레이터

    Args:
        func: 데코레이팅할 함수
        logger_name: 로거 이름
        level: 로그 레벨
    """

    def decorator(f):

        @wraps(f)
        def wrapper(*args, **kwargs):
            logger = get_logger(logger_name or f.__module__)
            log_func = getattr(logger, level.lower(), logger.debug)
            start_time = time.perf_counter()

            try:
                result = f(*args, **kwargs)
            except Exception as e:
                execution_time = time.perf_counter() - start_time
                logger.error(
                    f"{f.__name__} 실행 실패 (소요 시간: {execution_time:.3f}초): {str(e)}"
                )
                raise

            if logger.isEnabledFor(logging.getLevelName(level.upper())):
                execution_time = time.perf_counter() - start_time
                log_func(f"{f.__name__} 실행 완료 (소요 시간: {execution_time:.3f}초)")

            return result

        return wrapper

    if func is None:
        return decorator
    else:
        return decorator(func)


# ========== 구조화된 로깅 ==========


class StructuredLogger:
    """구조화된 로깅을 위한 래퍼 클래스"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log(self, level: str, message: str, **kwargs):
        """
        구조화된 로그 출력

        Args:
            level: 로그 레벨
            message: 로그 메시지
            **kwargs: 추가 데이터
        """
        log_func = getattr(self.logger, level.lower(), self.logger.info)

        extra = {'extra_data': kwargs} if kwargs else {}

        log_func(message, extra=extra)

    def debug(self, message: str, **kwargs):
        self.log('DEBUG', message, **kwargs)

    def info(self, message: str, **kwargs):
        self.log('INFO', message, **kwargs)

    def warning(self, message: str, **kwargs):
        self.log('WARNING', message, **kwargs)

    def error(self, message: str, **kwargs):
        self.log('ERROR', message, **kwargs)


# ========== 초기화 ==========

LoggerConfig.setup()
