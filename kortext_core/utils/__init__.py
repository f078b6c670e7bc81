"""
KorText 공통 유틸리티
로깅, 에러 처리, 파일 처리
"""

from .logger import (LoggerConfig, get_logger, log_execution_time,
                     StructuredLogger)
from .error_handler import (KorTextError, InvalidPosError,
                            MalformedInputError, ConfigurationError,
                            ErrorHandler, handle_errors, ensure_text)
from .file_handler import FileHandler

__all__ = [
    "LoggerConfig",
    "get_logger",
    "log_execution_time",
    "StructuredLogger",
    "KorTextError",
    "InvalidPosError",
    "MalformedInputError",
    "ConfigurationError",
    "ErrorHandler",
    "handle_errors",
    "ensure_text",
    "FileHandler",
]
