"""Exception-to-response mapping for the Storefront API."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.exceptions import PersistenceFailure

logger = structlog.get_logger(__name__)


async def persistence_failure_handler(request: Request, exc: PersistenceFailure) -> JSONResponse:
    # Details stay in the logs; the caller only learns that placement failed.
    logger.error("Request failed", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Error placing order"})


def register_error_handlers(app: FastAPI) -> None:
    """Register Protean's domain error mapping plus the persistence failure handler.

    `InvalidRequest` maps to 400 and `AddressNotFound` to 404 through their
    Protean base classes.
    """
    register_exception_handlers(app)
    app.add_exception_handler(PersistenceFailure, persistence_failure_handler)
