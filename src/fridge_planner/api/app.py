"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fridge_planner.api.inventory import router as inventory_router
from fridge_planner.api.planner import router as planner_router
from fridge_planner.api.recipes import router as recipes_router
from fridge_planner.api.shopping import router as shopping_router
from fridge_planner.app_logging import configure_logging
from fridge_planner.containers import AppContainer
from fridge_planner.errors import FridgePlannerError, InvalidRequestError

GENERIC_ERROR_MESSAGE = "처리 중 오류가 발생했습니다."


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(recipes_router)
    app.include_router(planner_router)
    app.include_router(shopping_router)
    app.include_router(inventory_router)

    @app.exception_handler(FridgePlannerError)
    async def app_error_handler(
        request: Request, exc: FridgePlannerError
    ) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc.__class__.__name__,
            )
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Invalid request to %s: %s", request.url.path, exc.errors()[:3])
        return JSONResponse(
            {"error": InvalidRequestError.default_message},
            status_code=InvalidRequestError.status_code,
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            {"error": GENERIC_ERROR_MESSAGE},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
