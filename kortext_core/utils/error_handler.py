"""
통합 에러 처리 시스템
KorText 예외를 표준화하고 일관된 에러 정보 제공
"""

import traceback
import logging
from typing import Optional, Dict, Any, Union
from datetime import datetime
from functools import wraps
from pathlib import Path
import json

from ..config import settings

logger = logging.getLogger(__name__)


class KorTextError(Exception):
    """KorText 기본 에러 클래스"""

    def __init__(self,
                 message: str,
                 error_code: str = "UNKNOWN_ERROR",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.timestamp = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """에러를 딕셔너리로 변환"""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp,
            }
        }

    def to_json(self) -> str:
        """에러를 JSON 문자열로 변환"""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)


# ========== 커스텀 에러 클래스 ==========


class InvalidPosError(KorTextError, ValueError):
    """알 수 없는 품사 태그"""

    def __init__(self, pos: Any, details: Optional[Dict] = None):
        super().__init__(message=f"알 수 없는 품사입니다: {pos!r}",
                         error_code="INVALID_POS",
                         details={
                             "pos": str(pos),
                             **(details or {})
                         })
        self.pos = pos


class MalformedInputError(KorTextError, TypeError):
    """문자열이 아닌 입력 등 잘못된 형태의 입력"""

    def __init__(self,
                 argument: str,
                 value: Any = None,
                 details: Optional[Dict] = None):
        super().__init__(
            message=f"잘못된 입력입니다 ({argument}): {type(value).__name__}",
            error_code="MALFORMED_INPUT",
            details={
                "argument": argument,
                "type": type(value).__name__,
                **(details or {})
            })
        self.argument = argument


class ConfigurationError(KorTextError):
    """설정 및 사전 리소스 에러"""

    def __init__(self,
                 message: str,
                 path: Union[str, Path, None] = None,
                 details: Optional[Dict] = None):
        extra = {"path": str(path)} if path is not None else {}
        super().__init__(message=f"설정 오류: {message}",
                         error_code="CONFIGURATION_ERROR",
                         details={
                             **extra,
                             **(details or {})
                         })


def ensure_text(value: Any, argument: str = "text") -> str:
    """문자열 입력 검증 (None 또는 문자열이 아니면 MalformedInputError)"""
    if not isinstance(value, str):
        raise MalformedInputError(argument, value)
    return value


# ========== 에러 핸들러 클래스 ==========


class ErrorHandler:
    """통합 에러 처리 클래스"""

    @staticmethod
    def log_error(message: str,
                  error: Optional[Exception] = None,
                  level: str = "error",
                  context: Optional[str] = None,
                  extra_data: Optional[Dict[str, Any]] = None):
        """
        에러 로깅

        Args:
            message: 로그 메시지
            error: 예외 객체
            level: 로그 레벨
            context: 컨텍스트
            extra_data: 추가 데이터
        """
        log_message = f"[{context or 'Unknown'}] {message}"

        if extra_data:
            log_message += f" | Data: {json.dumps(extra_data, ensure_ascii=False)}"

        if error:
            log_message += f" | Error: {type(error).__name__}: {str(error)}"

        # 로그 레벨에 따라 로깅
        log_func = getattr(logger, level.lower(), logger.error)
        log_func(log_message)

        # 디버그 모드에서는 트레이스백도 로깅
        if settings.DEBUG and error:
            logger.debug(f"Traceback:\n{traceback.format_exc()}")


# ========== 데코레이터 ==========


def handle_errors(context: Optional[str] = None):
    """
    에러 처리 데코레이터

    호출자의 입력 오류(KorTextError)는 경고로, 그 외 예외는 에러로 기록한 뒤
    그대로 다시 발생시킨다.

    Args:
        context: 실행 컨텍스트 (None이면 함수 이름)
    """

    def decorator(func):

        @wraps(func)
        def wrapper(*args, **kwargs):
            func_context = context or func.__name__

            try:
                return func(*args, **kwargs)

            except KorTextError as e:
                ErrorHandler.log_error("입력 검증 실패",
                                       error=e,
                                       level="warning",
                                       context=func_context)
                raise

            except Exception as e:
                ErrorHandler.log_error("함수 실행 실패",
                                       error=e,
                                       context=func_context)
                raise

        return wrapper

    return decorator
