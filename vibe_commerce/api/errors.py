# vibe_commerce/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vibe_commerce.domain.errors import CartError, CheckoutValidationError, InvalidQuantityError
from vibe_commerce.utils.logging import get_logger

logger = get_logger(__name__)


def _validation_error_to_cart_error(exc: RequestValidationError) -> CartError:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ())]
    field = loc[-1] if len(loc) > 1 else None

    if "qty" in loc:
        return InvalidQuantityError("qty must be an integer")
    if "productId" in loc:
        return CheckoutValidationError("productId is required and must be a positive integer", field="productId")
    if loc and loc[0] == "path":
        return CheckoutValidationError(f"{field} must be a positive integer", field=field)
    return CheckoutValidationError(first.get("msg", "Invalid request body"), field=field)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CartError)
    async def cart_error_handler(request: Request, exc: CartError):
        if exc.status_code >= 500:
            logger.error(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        err = _validation_error_to_cart_error(exc)
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return JSONResponse(
                status_code=404,
                content={"error": "Route not found", "path": request.url.path, "method": request.method},
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
