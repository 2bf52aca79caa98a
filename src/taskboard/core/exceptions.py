"""Exception handlers and result-to-response mapping."""

from typing import NoReturn

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.taskboard.core.logging import get_logger
from src.taskboard.core.results import ErrorKind, Failure

logger = get_logger(__name__)

# Denials carry a generic detail
_GENERIC_DETAIL = {
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Not found"),
    ErrorKind.FORBIDDEN: (status.HTTP_403_FORBIDDEN, "Forbidden"),
    ErrorKind.UNAUTHENTICATED: (status.HTTP_401_UNAUTHORIZED, "Not authenticated"),
}

_DETAILED_STATUS = {
    ErrorKind.VALIDATION_FAILED: 422,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}


def raise_for_failure(failure: Failure) -> NoReturn:
    """Translate a service failure into an HTTPException."""
    logger.info("Request denied", kind=failure.kind.value, code=failure.code)
    if failure.kind in _GENERIC_DETAIL:
        status_code, detail = _GENERIC_DETAIL[failure.kind]
        headers = None
        if failure.kind is ErrorKind.UNAUTHENTICATED:
            headers = {"WWW-Authenticate": "Bearer"}
        raise HTTPException(status_code=status_code, detail=detail, headers=headers)
    raise HTTPException(
        status_code=_DETAILED_STATUS[failure.kind],
        detail={"code": failure.code, "message": failure.message},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
