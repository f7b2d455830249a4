import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """서비스 계층에서 발생하는 업무 규칙 위반의 공통 부모."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class ConflictError(ServiceError):
    # 이 시스템에서는 중복/상태 충돌도 409가 아니라 400으로 응답한다.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class UnauthorizedError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return _message(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _message(exc.status_code, str(exc.detail))


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    pydantic 검증 에러 -> 400 {"message": "..."}
    body/query 같은 위치 prefix는 떼고 필드 경로만 남긴다.
    """
    messages = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return _message(status.HTTP_400_BAD_REQUEST, ", ".join(messages))


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    return _message(status.HTTP_400_BAD_REQUEST, "Duplicate field value entered")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
