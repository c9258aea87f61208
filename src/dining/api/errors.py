"""Translate dining domain errors into HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dining.exceptions import AggregationFailedError, DiningError

logger = structlog.get_logger(__name__)


async def dining_error_handler(request: Request, exc: DiningError) -> JSONResponse:
    if isinstance(exc, AggregationFailedError):
        logger.error("Request left a stale rating", path=request.url.path, restaurant_id=exc.restaurant_id)
    else:
        logger.info("Request rejected", path=request.url.path, error=exc.code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_dining_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DiningError, dining_error_handler)
