"""Перехват необработанных исключений внутри стека middleware"""
import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"error": "Internal Server Error"}


def internal_error_response() -> JSONResponse:
    return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Превращает исключение в ответ 500 до того, как оно дойдёт до ServerErrorMiddleware,
    поэтому внешние middleware (заголовки безопасности, access-лог) обрабатывают и этот ответ.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"Internal server error: {str(e)}", exc_info=True)
            return internal_error_response()
