from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, Optional
import traceback
import logging


class ErrorResponse(BaseModel):
    error: str
    code: str
    details: Optional[Any] = None


class AppException(Exception):
    """애플리케이션 전역에서 사용하는 커스텀 예외.

    - code: 서비스 내 식별 가능한 에러 코드 (예: BOOKING_NOT_FOUND)
    - status_code: HTTP 상태 코드
    - message: 사용자에게 전달할 메시지 (응답의 error 필드)
    - details: 디버깅/추가 정보 (옵션)
    - log_level: 기록 레벨 (logging.INFO, WARNING, ERROR 등)
    """

    def __init__(
        self,
        *,
        code: str,
        status_code: int,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        log_level: int = logging.ERROR,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.message = message
        self.details = details
        self.log_level = log_level

    def to_response(self) -> JSONResponse:
        payload = ErrorResponse(error=self.message, code=self.code, details=self.details)
        return JSONResponse(status_code=self.status_code, content=payload.model_dump(exclude_none=True))


def register_exception_handlers(app) -> None:
    """FastAPI 앱에 전역 예외 핸들러를 등록합니다."""
    logger = logging.getLogger("exception")

    @app.exception_handler(AppException)
    async def handle_app_exception(request: Request, exc: AppException):
        logger.log(exc.log_level, f"AppException: {exc.code} - {exc.message} | path={request.url.path}")
        return exc.to_response()

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("ValidationError on %s: %s", request.url.path, exc.errors())
        payload = ErrorResponse(
            error="Invalid request",
            code="REQUEST_VALIDATION_ERROR",
            details=jsonable_encoder(exc.errors()),
        )
        return JSONResponse(status_code=400, content=payload.model_dump(exclude_none=True))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        logger.warning("HTTPException on %s: %s %s", request.url.path, exc.status_code, exc.detail)
        payload = ErrorResponse(error=str(exc.detail), code=f"HTTP_{exc.status_code}")
        return JSONResponse(status_code=exc.status_code, content=payload.model_dump(exclude_none=True))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        tb = traceback.format_exc()
        logger.exception("Unhandled exception on %s: %s\n%s", request.url.path, str(exc), tb)
        payload = ErrorResponse(error="Internal server error", code="INTERNAL_SERVER_ERROR")
        return JSONResponse(status_code=500, content=payload.model_dump(exclude_none=True))


# 편의 유틸리티: 자주 쓰는 예외 생성기
def BadRequest(message: str, *, code: str = "BAD_REQUEST", details: Optional[Dict[str, Any]] = None) -> AppException:
    return AppException(code=code, status_code=400, message=message, details=details, log_level=logging.WARNING)


def Forbidden(message: str = "Access denied", *, code: str = "FORBIDDEN", details: Optional[Dict[str, Any]] = None) -> AppException:
    return AppException(code=code, status_code=403, message=message, details=details, log_level=logging.WARNING)


def NotFound(message: str = "Resource not found", *, code: str = "NOT_FOUND", details: Optional[Dict[str, Any]] = None) -> AppException:
    return AppException(code=code, status_code=404, message=message, details=details, log_level=logging.INFO)


def InternalError(message: str = "Internal server error", *, code: str = "INTERNAL_SERVER_ERROR", details: Optional[Dict[str, Any]] = None) -> AppException:
    return AppException(code=code, status_code=500, message=message, details=details, log_level=logging.ERROR)
