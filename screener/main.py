"""Solution screener FastAPI application."""

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from screener.api.evaluations import router as evaluations_router
from screener.api.health import router as health_router
from screener.api.solutions import router as solutions_router
from screener.config import Settings, settings as default_settings
from screener.engine.gateway import EvaluationGateway
from screener.engine.gemini import GeminiClient, ModelClient
from screener.engine.rate_limiter import RateLimiter
from screener.errors import ConfigurationError, RateLimitedError
from screener.ingestion.loader import load_solutions_file
from screener.storage.repositories import RecordStore

logging.basicConfig(
    level=getattr(logging, default_settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_solutions_file(app.state.settings.solutions_csv_path, app.state.store)
    yield


def create_app(
    settings: Settings | None = None,
    model_client: ModelClient | None = None,
) -> FastAPI:
    """
    Build the application and its process-wide store, limiter and gateway.

    Without ``model_client`` a Gemini client is built from settings. If that
    fails for lack of an API key the gateway is left unset: evaluation requests
    then fail with 500 while every other route keeps working.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Solution Screener",
        description="Screens challenge solutions against fixed criteria with a generative model",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    store = RecordStore()
    limiter = RateLimiter(settings.rate_limit_max_requests, settings.rate_limit_window_seconds)
    if model_client is None:
        try:
            model_client = GeminiClient.from_settings(settings)
        except ConfigurationError as exc:
            logger.error("Error initializing Gemini client: %s", exc)

    app.state.settings = settings
    app.state.store = store
    app.state.gateway = (
        EvaluationGateway(model_client, store, limiter) if model_client is not None else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s %d in %dms",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
            )
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        body = exc.detail if isinstance(exc.detail, dict) else {"message": exc.detail}
        return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request", "error": str(exc.errors())},
        )

    @app.exception_handler(RateLimitedError)
    async def rate_limited(request: Request, exc: RateLimitedError):
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={
                "message": "Rate limit exceeded. Too many requests to the Gemini API.",
                "retryAfter": exc.retry_after,
            },
            headers={"Retry-After": str(exc.retry_after)},
        )

    app.include_router(health_router, tags=["Health"])
    app.include_router(solutions_router, prefix="/api", tags=["Solutions"])
    app.include_router(evaluations_router, prefix="/api", tags=["Evaluations"])

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
