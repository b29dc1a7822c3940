"""Application wide exception handlers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from jose import JWTError
from sqlalchemy.exc import IntegrityError

from app.domain.errors import DomainError, EmailDeliveryError
from app.infrastructure.payment_gateway import (
    PaymentGatewayConfigurationError,
    PaymentGatewayError,
)

logger = logging.getLogger(__name__)


def to_http_exception(exc: DomainError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""

    return HTTPException(status_code=exc.status_code, detail=str(exc))


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": jsonable_encoder(exc.errors())},
    )


async def _integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Duplicate entry: resource already exists"},
    )


async def _domain_error(request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


async def _jwt_error(request: Request, exc: JWTError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": "Invalid token"},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _gateway_configuration_error(
    request: Request, exc: PaymentGatewayConfigurationError
) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})


async def _gateway_error(request: Request, exc: PaymentGatewayError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


async def _email_error(request: Request, exc: EmailDeliveryError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)}
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(IntegrityError, _integrity_error)
    app.add_exception_handler(DomainError, _domain_error)
    app.add_exception_handler(JWTError, _jwt_error)
    app.add_exception_handler(PaymentGatewayConfigurationError, _gateway_configuration_error)
    app.add_exception_handler(PaymentGatewayError, _gateway_error)
    app.add_exception_handler(EmailDeliveryError, _email_error)
    app.add_exception_handler(Exception, _unhandled_error)


__all__ = ["register_exception_handlers", "to_http_exception"]
