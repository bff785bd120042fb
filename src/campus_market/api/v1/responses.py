# src/campus_market/api/v1/responses.py
"""Conversion of action results into HTTP responses.

Every endpoint answers with exactly one of ``{"success": ...}`` or
``{"error": "..."}``. Store faults and unexpected exceptions are logged here
and reported with a generic message.
"""

import logging
from collections.abc import Callable
from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from campus_market.services import (
    EntityStore,
    ErrorKind,
    Failure,
    Identity,
    IdentityResolver,
    Result,
    StoreFailure,
)

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.STORE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

STORE_UNAVAILABLE = "The data store is unavailable, please retry."
UNEXPECTED_ERROR = "An unexpected error occurred."


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def respond(result: Result[Any], success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Render a result as its JSON envelope."""
    if isinstance(result, Failure):
        return error_response(STATUS_BY_KIND[result.kind], result.message)
    return JSONResponse(
        status_code=success_status,
        content={"success": jsonable_encoder(result.value)},
    )


def _guard(call: Callable[[], Result[Any]], success_status: int) -> JSONResponse:
    try:
        result = call()
    except (StoreFailure, SQLAlchemyError) as exc:
        logger.error("Data store failure: %s", exc)
        return error_response(STATUS_BY_KIND[ErrorKind.STORE_FAILURE], STORE_UNAVAILABLE)
    except Exception:
        logger.exception("Unhandled error while running action")
        return error_response(STATUS_BY_KIND[ErrorKind.UNEXPECTED], UNEXPECTED_ERROR)
    return respond(result, success_status)


def run_public(
    action: Callable[[], Result[Any]],
    success_status: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Run an action that needs no caller identity."""
    return _guard(action, success_status)


def run_action(
    store: EntityStore,
    token: str | None,
    action: Callable[[Identity], Result[Any]],
    success_status: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Resolve the caller from ``token`` and run ``action`` on their behalf."""

    def call() -> Result[Any]:
        caller = IdentityResolver(store).resolve(token)
        if isinstance(caller, Failure):
            return caller
        return action(caller.value)

    return _guard(call, success_status)
