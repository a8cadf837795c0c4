"""Main entry point for the meal planner API."""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError

from mealprep.config import get_settings
from mealprep.api.routes import router as api_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title="Meal Prep Planner API",
        description="Recipes, weekly menu, grocery list and weekend prep plan",
        version="1.0.0",
    )
    app.include_router(api_router)

    @app.exception_handler(APIError)
    async def store_error_handler(request: Request, exc: APIError):
        logger.error(f"Store request failed on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=502,
            content={"detail": f"Storage backend error: {exc.message}"},
        )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


api_app = create_app()


def run():
    """Entry point for running the API server."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting meal planner API on {settings.api_host}:{settings.api_port}")
    uvicorn.run(api_app, host=settings.api_host, port=settings.api_port, log_level="warning")


if __name__ == "__main__":
    run()
