"""
Request-level failures and their HTTP rendering.

Route handlers raise ApiError; the handlers registered by
`install_error_handlers` turn it into `{"error": ..., "kind": ...}`.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pokemon_review.schemas import ErrorKind, ErrorResponse

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PERSISTENCE: 500,
}


class ApiError(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


def validation_error(message: str) -> ApiError:
    return ApiError(ErrorKind.VALIDATION, message)


def not_found(message: str) -> ApiError:
    return ApiError(ErrorKind.NOT_FOUND, message)


def persistence_error(message: str) -> ApiError:
    return ApiError(ErrorKind.PERSISTENCE, message)


def error_response(kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_KIND[kind],
        content={"error": message, "kind": kind.value},
    )


async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    log = logger.warning if exc.kind is ErrorKind.PERSISTENCE else logger.info
    log("%s %s rejected (%s): %s", request.method, request.url.path, exc.kind.value, exc.message)
    return error_response(exc.kind, exc.message)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed or missing input is a plain bad request, not a 422."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        problems.append(f"{location}: {err.get('msg')}")
    message = "Invalid request: " + "; ".join(problems) if problems else "Invalid request"
    logger.info("%s %s rejected (validation): %s", request.method, request.url.path, message)
    return error_response(ErrorKind.VALIDATION, message)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)


# OpenAPI documentation for the error shapes every router can return
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    500: {"model": ErrorResponse, "description": "Persistence failure"},
}
