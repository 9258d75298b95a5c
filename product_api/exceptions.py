# product_api/exceptions.py
# Domain errors and the FastAPI handlers that turn them into {"message": ...} responses.

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ProductAPIException(Exception):
    """Base class for errors reported to the client with a status code."""

    def __init__(self, message: str, status_code: int = 500, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


class ProductNotFoundError(ProductAPIException):
    def __init__(self, product_id: int):
        super().__init__("Product not found", status_code=404, details={"id": product_id})


class DefaultProductError(ProductAPIException):
    """Raised when a seed product is the target of an update or delete."""

    def __init__(self, product_id: int, action: str):
        super().__init__(
            f"Cannot {action} default products",
            status_code=403,
            details={"id": product_id, "action": action},
        )


class ProductLimitReachedError(ProductAPIException):
    def __init__(self, capacity: int):
        super().__init__("Maximum product limit reached", status_code=400, details={"capacity": capacity})


# ---------------------------
# Exception handlers
# ---------------------------
async def product_api_exception_handler(request: Request, exc: ProductAPIException) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message} {exc.details}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error.get("loc", ())),
            "message": error.get("msg", "invalid value"),
        })
    logger.warning(f"{request.method} {request.url.path} -> 400: {errors}")
    return JSONResponse(status_code=400, content={"message": "Invalid request", "errors": errors})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Something went wrong!"})
